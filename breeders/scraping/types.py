"""
Shared scraping runtime data models.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields

CSV_HEADER = ("Breed", "Kennel Name", "Name", "Experience", "Location", "Phone", "Website")


@dataclass(frozen=True)
class BreederRecord:
    """
    Breeder details extracted from one listing detail page.

    Empty strings mark labels that were not found on the page.
    """

    breed: str = ""
    kennel_name: str = ""
    contact_name: str = ""
    experience: str = ""
    location: str = ""
    phone: str = ""
    website: str = ""

    @staticmethod
    def header() -> list[str]:
        return list(CSV_HEADER)

    def to_row(self) -> list[str]:
        return [getattr(self, item.name) for item in fields(self)]


@dataclass
class StageStats:
    """
    Counters kept by one worker; pools sum them after the run.
    """

    processed: int = 0
    failed: int = 0
    emitted: int = 0
    discarded: int = 0

    def merge(self, other: "StageStats") -> None:
        self.processed += other.processed
        self.failed += other.failed
        self.emitted += other.emitted
        self.discarded += other.discarded


@dataclass(frozen=True)
class ScrapeRunSummary:
    """
    Outcome for one pipeline execution.
    """

    records_written: int
    limit: int
    status: str
    search_pages: StageStats = field(default_factory=StageStats)
    detail_pages: StageStats = field(default_factory=StageStats)

    @property
    def limit_reached(self) -> bool:
        return self.status == "limit_reached"
