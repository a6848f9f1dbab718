"""A small device of greeting actors that share, or keep apart, a counter."""

from __future__ import annotations

import argparse
import asyncio
import itertools
import logging
import threading
from dataclasses import dataclass
from typing import Any

from .actor import Actor, ActorContext, ActorSpawner, Address
from .device import DeviceContext, Package

log = logging.getLogger(__name__)


class Counter:
    """A counter that can be bumped safely from several threads."""

    def __init__(self, value: int = 0) -> None:
        self._value = value
        self._lock = threading.Lock()

    @property
    def value(self) -> int:
        return self._value

    def fetch_add(self, amount: int) -> int:
        """Add ``amount`` and return the value from before."""
        with self._lock:
            previous = self._value
            self._value += amount
            return previous


@dataclass(frozen=True)
class SayHello:
    who: str


class MyActor(Actor):
    """Greets whoever it is told to, counting every greeting."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._counter: Counter | None = None

    def on_mount(self, config: Counter) -> None:
        self._counter = config

    async def on_start(self) -> None:
        log.info("[%s] started!", self.name)

    async def on_message(self, message: SayHello) -> None:
        if self._counter is None:
            raise RuntimeError(f"[{self.name}] no counter configured")
        count = self._counter.fetch_add(1)
        log.info("[%s] hello %s: %d", self.name, message.who, count)


class MyPack(Package):
    """A package whose actor uses a counter of its own."""

    def __init__(self) -> None:
        self.counter = Counter()
        self.c: ActorContext[MyActor] = ActorContext(MyActor("c"))

    def mount(self, config: Any, spawner: ActorSpawner) -> Address[MyActor]:
        return self.c.mount(self.counter, spawner)


@dataclass
class _Device:
    counter: Counter
    a: ActorContext[MyActor]
    b: ActorContext[MyActor]
    p: MyPack


def _mount(device: _Device, spawner: ActorSpawner):
    return (
        device.a.mount(device.counter, spawner),
        device.b.mount(device.counter, spawner),
        device.p.mount(None, spawner),
    )


async def run(iterations: int | None = None, interval: float = 1.0) -> tuple[int, int]:
    """Greet ``iterations`` times (forever if ``None``).

    Returns the shared counter and the package's counter.
    """
    spawner = ActorSpawner()
    context: DeviceContext[_Device] = DeviceContext(spawner)
    context.configure(
        _Device(
            counter=Counter(),
            a=ActorContext(MyActor("a")),
            b=ActorContext(MyActor("b")),
            p=MyPack(),
        )
    )
    a_addr, b_addr, c_addr = context.mount(_mount)
    rounds = itertools.count() if iterations is None else range(iterations)
    try:
        for _ in rounds:
            await asyncio.sleep(interval)
            a_addr.notify(SayHello("World"))
            await b_addr.request(SayHello("You"))
            c_addr.notify(SayHello("There"))
        for _ in range(3):
            await asyncio.sleep(0)
    finally:
        context.close()
        tasks = spawner.tasks
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
    device = context.device
    assert device is not None
    return device.counter.value, device.p.counter.value


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="actorbox-hello", description="Run a device of greeting actors."
    )
    parser.add_argument("--iterations", type=int, default=None, help="rounds to run (default: forever)")
    parser.add_argument("--interval", type=float, default=1.0, help="seconds between rounds")
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
    try:
        asyncio.run(run(args.iterations, args.interval))
    except KeyboardInterrupt:
        return 130
    return 0