"""A bounded single-queue channel with both immediate and waiting operations."""

from __future__ import annotations

import asyncio
from collections import deque
from typing import Generic, TypeVar

T = TypeVar("T")


class ChannelError(Exception):
    """Base class for channel failures."""


class ChannelFull(ChannelError):
    """Raised when sending to a channel that has no free space."""


class ChannelEmpty(ChannelError):
    """Raised when receiving from a channel that holds nothing."""


async def _park(waiters: list[asyncio.Future[None]]) -> None:
    waiter: asyncio.Future[None] = asyncio.get_running_loop().create_future()
    waiters.append(waiter)
    try:
        await waiter
    finally:
        if waiter in waiters:
            waiters.remove(waiter)


def _wake(waiters: list[asyncio.Future[None]]) -> None:
    pending = list(waiters)
    waiters.clear()
    for waiter in pending:
        if not waiter.done():
            waiter.set_result(None)


class Channel(Generic[T]):
    """A FIFO queue holding at most ``capacity`` items."""

    def __init__(self, capacity: int = 1) -> None:
        if capacity < 1:
            raise ValueError("channel capacity must be at least 1")
        self._capacity = capacity
        self._queue: deque[T] = deque()
        self._senders: list[asyncio.Future[None]] = []
        self._receivers: list[asyncio.Future[None]] = []

    @property
    def capacity(self) -> int:
        """The most items the channel can hold."""
        return self._capacity

    def __len__(self) -> int:
        return len(self._queue)

    def _full(self) -> bool:
        return len(self._queue) >= self._capacity

    def try_send(self, value: T) -> None:
        """Enqueue ``value`` or raise :class:`ChannelFull`."""
        if self._full():
            raise ChannelFull("channel is full")
        self._queue.append(value)
        _wake(self._receivers)

    async def send(self, value: T) -> None:
        """Enqueue ``value``, waiting for space if needed."""
        while self._full():
            await _park(self._senders)
        self._queue.append(value)
        _wake(self._receivers)

    def try_receive(self) -> T:
        """Dequeue the oldest item or raise :class:`ChannelEmpty`."""
        if not self._queue:
            raise ChannelEmpty("channel is empty")
        value = self._queue.popleft()
        _wake(self._senders)
        return value

    async def receive(self) -> T:
        """Dequeue the oldest item, waiting for one if needed."""
        while not self._queue:
            await _park(self._receivers)
        value = self._queue.popleft()
        _wake(self._senders)
        return value