"""
Base worker pool for fetch stages.
"""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Generic, TypeVar

from breeders.scraping.channels import Channel, CompletionBarrier
from breeders.scraping.logging_utils import log_event
from breeders.scraping.types import StageStats

InT = TypeVar("InT")
OutT = TypeVar("OutT")


class WorkerPool(ABC, Generic[InT, OutT]):
    """
    Fixed-size set of threads competing for one input channel.

    Every worker arrives at a completion barrier when its loop ends, and the
    last one closes the output channel.
    """

    name = "pool"

    def __init__(
        self,
        *,
        source: Channel[InT],
        sink: Channel[OutT],
        workers: int,
        logger: logging.Logger | None = None,
    ) -> None:
        if workers < 1:
            raise ValueError(f"{self.name} needs at least one worker, got {workers}")
        self.source = source
        self.sink = sink
        self.workers = workers
        self.logger = logger if logger is not None else logging.getLogger(__name__)
        self._barrier = CompletionBarrier(parties=workers, channel=sink)
        self._stats = [StageStats() for _ in range(workers)]
        self._threads: list[threading.Thread] = []

    def start(self) -> list[threading.Thread]:
        if self._threads:
            raise RuntimeError(f"{self.name} already started")
        for index in range(self.workers):
            thread = threading.Thread(
                target=self._run_worker,
                args=(index,),
                name=f"{self.name}-{index}",
                daemon=True,
            )
            self._threads.append(thread)
            thread.start()
        return list(self._threads)

    def join(self, timeout: float | None = None) -> None:
        for thread in self._threads:
            thread.join(timeout)

    def stats(self) -> StageStats:
        total = StageStats()
        for worker_stats in self._stats:
            total.merge(worker_stats)
        return total

    @abstractmethod
    def process(self, item: InT, stats: StageStats) -> Iterable[OutT]:
        """
        Handle one input item and yield the outputs it produces.
        """

    def _run_worker(self, index: int) -> None:
        stats = self._stats[index]
        try:
            for item in self.source:
                try:
                    for output in self.process(item, stats):
                        if not self.sink.put(output):
                            return
                        stats.emitted += 1
                except Exception as exc:
                    stats.failed += 1
                    log_event(
                        self.logger,
                        logging.ERROR,
                        "worker_item_failed",
                        pool=self.name,
                        item=item,
                        error=str(exc),
                    )
        finally:
            self._barrier.arrive()
