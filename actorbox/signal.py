"""Reusable signal slots that carry a single response back to a requester."""

from __future__ import annotations

import asyncio
from typing import Any, Generic, TypeVar

T = TypeVar("T")

_EMPTY: Any = object()


class SignalSlot(Generic[T]):
    """A slot that one requester acquires and one responder signals.

    A slot is free until acquired. Acquiring it clears any value left over
    from a previous use. The responder stores a value with :meth:`signal`;
    the requester takes it with :meth:`wait` and then releases the slot.
    """

    def __init__(self) -> None:
        self._free = True
        self._value: Any = _EMPTY
        self._waiters: list[asyncio.Future[None]] = []

    @property
    def free(self) -> bool:
        """Whether the slot may be acquired."""
        return self._free

    def acquire(self) -> bool:
        """Take the slot if it is free, clearing any stale value."""
        if not self._free:
            return False
        self._free = False
        self._value = _EMPTY
        return True

    def release(self) -> None:
        """Hand the slot back so it can be acquired again."""
        self._free = True

    def signal(self, value: T) -> None:
        """Store ``value`` and wake anyone waiting on the slot."""
        self._value = value
        waiters, self._waiters = self._waiters, []
        for waiter in waiters:
            if not waiter.done():
                waiter.set_result(None)

    def is_signaled(self) -> bool:
        """Whether a value is waiting to be taken."""
        return self._value is not _EMPTY

    async def wait(self) -> T:
        """Wait for a value, take it and leave the slot empty."""
        while self._value is _EMPTY:
            waiter: asyncio.Future[None] = asyncio.get_running_loop().create_future()
            self._waiters.append(waiter)
            try:
                await waiter
            finally:
                if waiter in self._waiters:
                    self._waiters.remove(waiter)
        value, self._value = self._value, _EMPTY
        return value