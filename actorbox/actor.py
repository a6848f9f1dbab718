"""Actors, the addresses used to reach them and the contexts that run them."""

from __future__ import annotations

import asyncio
import inspect
import warnings
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, ClassVar, Coroutine, Generic, TypeVar

from .channel import Channel, ChannelError
from .signal import SignalSlot

A = TypeVar("A", bound="Actor")
R = TypeVar("R")

SpawnFn = Callable[[Coroutine[Any, Any, None]], Any]


class ActorError(Exception):
    """A message could not be delivered to an actor."""


class NoAvailableSignal(ActorError):
    """Every response slot of the actor is taken by a pending request."""


async def _settle(result: Any) -> Any:
    if inspect.isawaitable(result):
        return await result
    return result


class Actor(ABC):
    """Something that owns its state and reacts to messages one at a time.

    ``queue_size`` bounds both the number of queued messages and the number
    of requests that may await a response at once.
    """

    queue_size: ClassVar[int] = 1

    def on_mount(self, config: Any) -> None:
        """Receive the configuration given when the actor is mounted."""

    async def on_start(self) -> None:
        """Run once before the first message is handled."""

    @abstractmethod
    def on_message(self, message: Any) -> Any:
        """Handle ``message``; may return a value or an awaitable of one."""


@dataclass(frozen=True)
class _Request:
    message: Any
    slot: SignalSlot[Any]


@dataclass(frozen=True)
class _Notify:
    message: Any


@dataclass(frozen=True)
class _Failure:
    error: Exception


class _RequestFuture(Generic[R]):
    """The pending response to a request; it must be awaited exactly once."""

    def __init__(self, slot: SignalSlot[Any]) -> None:
        self._slot = slot
        self._awaited = False

    def __await__(self):
        return self._wait().__await__()

    async def _wait(self) -> R:
        if self._awaited:
            raise RuntimeError("request already awaited")
        self._awaited = True
        try:
            value = await self._slot.wait()
        finally:
            self._slot.release()
        if isinstance(value, _Failure):
            raise value.error
        return value

    def __del__(self) -> None:
        if not getattr(self, "_awaited", True):
            warnings.warn("actor request was never awaited", RuntimeWarning, stacklevel=2)


class Address(Generic[A]):
    """A handle for sending messages to a mounted actor."""

    __slots__ = ("_context",)

    def __init__(self, context: ActorContext[A]) -> None:
        self._context = context

    @property
    def context(self) -> ActorContext[A]:
        return self._context

    def request(self, message: Any) -> _RequestFuture[Any]:
        """Queue ``message`` and return an awaitable of the actor's response.

        Raises :class:`ActorError` at once if the message cannot be queued.
        """
        return self._context._request(message)

    def notify(self, message: Any) -> None:
        """Queue ``message`` without waiting for it to be handled."""
        self._context._notify(message)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Address) and other._context is self._context

    def __hash__(self) -> int:
        return id(self._context)

    def __repr__(self) -> str:
        return f"Address({type(self._context.actor).__name__})"


class ActorSpawner:
    """Starts the run loop of mounted actors; an idle spawner starts nothing."""

    def __init__(self, spawn: SpawnFn | None = asyncio.create_task) -> None:
        self._spawn = spawn
        self._tasks: list[Any] = []

    @classmethod
    def idle(cls) -> ActorSpawner:
        return cls(None)

    @property
    def tasks(self) -> list[Any]:
        """The tasks started so far."""
        return list(self._tasks)

    def spawn(self, context: ActorContext[Any]) -> Any:
        """Start ``context``'s run loop and return the task, or ``None`` if idle."""
        if self._spawn is None:
            return None
        task = self._spawn(context.run())
        self._tasks.append(task)
        return task


class ActorContext(Generic[A]):
    """Holds an actor with its message queue and response slots."""

    def __init__(self, actor: A, queue_size: int | None = None) -> None:
        size = actor.queue_size if queue_size is None else queue_size
        self._actor = actor
        self._channel: Channel[_Request | _Notify] = Channel(size)
        self._signals: list[SignalSlot[Any]] = [SignalSlot() for _ in range(size)]
        self._mounted = False

    @property
    def actor(self) -> A:
        return self._actor

    @property
    def mounted(self) -> bool:
        return self._mounted

    def mount(self, config: Any, spawner: ActorSpawner) -> Address[A]:
        """Hand ``config`` to the actor, start it and return its address."""
        if self._mounted:
            raise RuntimeError("actor is already mounted")
        self._actor.on_mount(config)
        self._mounted = True
        spawner.spawn(self)
        return Address(self)

    def _check_mounted(self) -> None:
        if not self._mounted:
            raise RuntimeError("actor is not mounted")

    def _acquire_signal(self) -> SignalSlot[Any]:
        for slot in self._signals:
            if slot.acquire():
                return slot
        raise NoAvailableSignal("no free response slot")

    def _request(self, message: Any) -> _RequestFuture[Any]:
        self._check_mounted()
        slot = self._acquire_signal()
        try:
            self._channel.try_send(_Request(message, slot))
        except ChannelError as err:
            slot.release()
            raise ActorError("message queue is full") from err
        return _RequestFuture(slot)

    def _notify(self, message: Any) -> None:
        self._check_mounted()
        try:
            self._channel.try_send(_Notify(message))
        except ChannelError as err:
            raise ActorError("message queue is full") from err

    async def run(self) -> None:
        """Start the actor and then handle messages forever."""
        await _settle(self._actor.on_start())
        while True:
            await self.process()

    async def process(self) -> None:
        """Wait for one message and handle it.

        A failure while handling a request is handed to the requester; a
        failure while handling a notification propagates.
        """
        envelope = await self._channel.receive()
        if isinstance(envelope, _Request):
            try:
                value = await _settle(self._actor.on_message(envelope.message))
            except Exception as err:
                envelope.slot.signal(_Failure(err))
            else:
                envelope.slot.signal(value)
        else:
            await _settle(self._actor.on_message(envelope.message))