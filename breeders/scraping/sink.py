"""
Bounded CSV sink: the single terminal consumer of breeder records.
"""

from __future__ import annotations

import csv
import logging
from collections.abc import Iterable, Sequence
from typing import TextIO

from breeders.scraping.logging_utils import log_event
from breeders.scraping.types import BreederRecord


class OutputWriteError(RuntimeError):
    """
    Raised when a CSV row cannot be written to the output stream.
    """


class CsvSink:
    """
    Writes a header, then one flushed row per record, up to ``limit`` records.
    """

    def __init__(
        self,
        *,
        stream: TextIO,
        limit: int,
        logger: logging.Logger | None = None,
    ) -> None:
        if limit < 0:
            raise ValueError(f"limit must be >= 0, got {limit}")
        self._stream = stream
        self._writer = csv.writer(stream, lineterminator="\n")
        self.limit = limit
        self.logger = logger if logger is not None else logging.getLogger(__name__)
        self.written = 0

    @property
    def limit_reached(self) -> bool:
        return self.written >= self.limit

    def consume(self, records: Iterable[BreederRecord]) -> int:
        """
        Drain ``records`` until the limit is reached and return rows written.
        """

        self._write_row(BreederRecord.header())
        if self.limit_reached:
            return self.written

        for record in records:
            self._write_row(record.to_row())
            self.written += 1
            if self.limit_reached:
                log_event(self.logger, logging.INFO, "record_limit_reached", limit=self.limit)
                break
        return self.written

    def _write_row(self, row: Sequence[str]) -> None:
        try:
            self._writer.writerow(row)
            self._stream.flush()
        except (OSError, csv.Error) as exc:
            raise OutputWriteError(f"unable to write csv row: {exc}") from exc
