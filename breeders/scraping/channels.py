"""
Bounded multi-producer/multi-consumer channels with shared cancellation.
"""

from __future__ import annotations

import threading
from collections import deque
from collections.abc import Iterator
from typing import Generic, TypeVar

from breeders.config import DEFAULT_CHANNEL_CAPACITY

T = TypeVar("T")


class ChannelClosedError(RuntimeError):
    """
    Raised when writing to, or closing, an already closed channel.
    """


class CancellationToken:
    """
    Pipeline-wide stop signal that wakes every registered channel.
    """

    def __init__(self) -> None:
        self._event = threading.Event()
        self._lock = threading.Lock()
        self._channels: list[Channel] = []

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        with self._lock:
            if self._event.is_set():
                return
            self._event.set()
            channels = list(self._channels)
        for channel in channels:
            channel.wake()

    def register(self, channel: "Channel") -> None:
        with self._lock:
            self._channels.append(channel)
        if self.cancelled:
            channel.wake()


class Channel(Generic[T]):
    """
    FIFO buffer of fixed capacity.

    Producers block in ``put`` while the buffer is full; consumers iterate the
    channel and block while it is empty. Iteration ends once the channel is
    closed and drained, or as soon as the token is cancelled.
    """

    def __init__(
        self,
        *,
        token: CancellationToken,
        capacity: int = DEFAULT_CHANNEL_CAPACITY,
        name: str = "channel",
    ) -> None:
        if capacity < 1:
            raise ValueError(f"Channel capacity must be >= 1, got {capacity}")
        self.name = name
        self._capacity = capacity
        self._items: deque[T] = deque()
        self._closed = False
        self._condition = threading.Condition()
        self._token = token
        token.register(self)

    @property
    def closed(self) -> bool:
        with self._condition:
            return self._closed

    def put(self, item: T) -> bool:
        """
        Append one item, blocking while the buffer is full.

        Returns False when the pipeline was cancelled and the item was dropped.
        """

        with self._condition:
            while (
                len(self._items) >= self._capacity
                and not self._closed
                and not self._token.cancelled
            ):
                self._condition.wait()
            if self._token.cancelled:
                return False
            if self._closed:
                raise ChannelClosedError(f"put on closed channel '{self.name}'")
            self._items.append(item)
            self._condition.notify_all()
            return True

    def close(self) -> None:
        with self._condition:
            if self._closed:
                raise ChannelClosedError(f"channel '{self.name}' already closed")
            self._closed = True
            self._condition.notify_all()

    def wake(self) -> None:
        with self._condition:
            self._condition.notify_all()

    def __iter__(self) -> Iterator[T]:
        while True:
            with self._condition:
                while not self._items and not self._closed and not self._token.cancelled:
                    self._condition.wait()
                if self._token.cancelled or not self._items:
                    return
                item = self._items.popleft()
                self._condition.notify_all()
            yield item

    def __len__(self) -> int:
        with self._condition:
            return len(self._items)


class CompletionBarrier:
    """
    Closes a channel once every contributing worker has arrived.
    """

    def __init__(self, *, parties: int, channel: Channel) -> None:
        if parties < 1:
            raise ValueError(f"CompletionBarrier needs at least one party, got {parties}")
        self._remaining = parties
        self._channel = channel
        self._lock = threading.Lock()

    @property
    def remaining(self) -> int:
        with self._lock:
            return self._remaining

    def arrive(self) -> None:
        with self._lock:
            if self._remaining == 0:
                raise RuntimeError("CompletionBarrier received more arrivals than parties")
            self._remaining -= 1
            last = self._remaining == 0
        if last:
            self._channel.close()
