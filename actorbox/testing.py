"""Helpers for exercising actors and devices in tests."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Generic, TypeVar

from .actor import Actor, ActorContext, ActorSpawner
from .device import DeviceContext
from .signal import SignalSlot
from .util import ImmediateFuture

D = TypeVar("D")
R = TypeVar("R")


@dataclass(frozen=True)
class TestMessage:
    """A message carrying an id, passed around to check what the system did."""

    __test__ = False

    value: int


class DummyActor(Actor):
    """An actor that accepts messages and does nothing with them."""

    def on_start(self) -> ImmediateFuture:
        return ImmediateFuture()

    def on_message(self, message: Any) -> ImmediateFuture:
        return ImmediateFuture()


class TestSignal:
    """Records the last message given to it and wakes whoever waits for one."""

    __test__ = False

    def __init__(self) -> None:
        self._slot: SignalSlot[None] = SignalSlot()
        self._value: TestMessage | None = None

    def signal(self, value: TestMessage) -> None:
        """Store ``value`` and wake a waiter."""
        self._value = value
        self._slot.signal(None)

    def message(self) -> TestMessage | None:
        """The last message signalled, or ``None``."""
        return self._value

    async def wait_signaled(self) -> None:
        """Wait until the signal has been raised since the last wait."""
        await self._slot.wait()


class TestHandler(Actor):
    """An actor that raises a :class:`TestSignal` with every message it gets."""

    __test__ = False

    def __init__(self, signal: TestSignal) -> None:
        self._on_message = signal

    def on_start(self) -> ImmediateFuture:
        return ImmediateFuture()

    def on_message(self, message: TestMessage) -> ImmediateFuture:
        self._on_message.signal(message)
        return ImmediateFuture()


class TestPin:
    """An input pin whose level a test drives by hand."""

    __test__ = False

    def __init__(self, initial: bool) -> None:
        self._value = bool(initial)
        self._changed: SignalSlot[None] = SignalSlot()

    def _set_value(self, value: bool) -> None:
        self._value = value
        self._changed.signal(None)

    def set_high(self) -> None:
        self._set_value(True)

    def set_low(self) -> None:
        self._set_value(False)

    def is_high(self) -> bool:
        return self._value

    def is_low(self) -> bool:
        return not self._value

    async def wait_for_any_edge(self) -> None:
        """Wait until the level has been set since the last wait."""
        await self._changed.wait()


class TestContext(Generic[D]):
    """The context handed to a test: a device context plus test resources."""

    __test__ = False

    def __init__(self, runner: TestRunner, device: DeviceContext[D]) -> None:
        self._runner = runner
        self._device = device

    def configure(self, device: D) -> None:
        """Configure the context with a device."""
        self._device.configure(device)

    def pin(self, initial: bool) -> TestPin:
        """Create a pin for the test to drive."""
        return self._runner.pin(initial)

    def signal(self) -> TestSignal:
        """Create a signal for the test to observe."""
        return self._runner.signal()

    def mount(self, f: Callable[[D, ActorSpawner], R]) -> R:
        """Mount the device by calling ``f(device, spawner)``."""
        return self._device.mount(f)


class TestRunner:
    """Runs a test coroutine with a fresh device context on its own event loop."""

    __test__ = False

    def __init__(self) -> None:
        self._pins: list[TestPin] = []
        self._signals: list[TestSignal] = []
        self._done = False

    def pin(self, initial: bool) -> TestPin:
        pin = TestPin(initial)
        self._pins.append(pin)
        return pin

    def signal(self) -> TestSignal:
        signal = TestSignal()
        self._signals.append(signal)
        return signal

    def done(self) -> None:
        self._done = True

    def is_done(self) -> bool:
        return self._done

    def run(self, test: Callable[[TestContext[Any]], Awaitable[R]]) -> R:
        """Run ``test(context)`` to completion and return what it returns.

        The device context must have been configured and mounted by the time
        the test finishes, otherwise :class:`DeviceStateError` is raised.
        """
        return asyncio.run(self._main(test))

    async def _main(self, test: Callable[[TestContext[Any]], Awaitable[R]]) -> R:
        spawner = ActorSpawner()
        context: TestContext[Any] = TestContext(self, DeviceContext(spawner))
        try:
            result = await test(context)
            context._device.close()
            return result
        finally:
            self.done()
            tasks = spawner.tasks
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)


async def step_actor(context: ActorContext[Any]) -> None:
    """Let ``context`` handle exactly one message, waiting for it if needed."""
    await context.process()