"""The device context that holds a device's actors, and packages of actors."""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from typing import Any, Callable, Generic, TypeVar

from .actor import ActorSpawner, Address

D = TypeVar("D")
R = TypeVar("R")


class DeviceStateError(RuntimeError):
    """The device context was used out of order."""


class _State(enum.Enum):
    NEW = "new"
    CONFIGURED = "configured"
    MOUNTED = "mounted"


class DeviceContext(Generic[D]):
    """Holds a device, which must be configured and then mounted exactly once."""

    def __init__(self, spawner: ActorSpawner | None = None) -> None:
        self._spawner = spawner if spawner is not None else ActorSpawner()
        self._device: D | None = None
        self._state = _State.NEW

    @property
    def device(self) -> D | None:
        return self._device

    @property
    def spawner(self) -> ActorSpawner:
        return self._spawner

    def configure(self, device: D) -> None:
        """Store the device; allowed only once."""
        if self._state is not _State.NEW:
            raise DeviceStateError("Context already configured")
        self._device = device
        self._state = _State.CONFIGURED

    def mount(self, f: Callable[[D, ActorSpawner], R]) -> R:
        """Call ``f(device, spawner)`` to mount the device's actors and return its result."""
        if self._state is _State.NEW:
            raise DeviceStateError("Context must be configured before mounted")
        if self._state is _State.MOUNTED:
            raise DeviceStateError("Context already mounted")
        result = f(self._device, self._spawner)  # type: ignore[arg-type]
        self._state = _State.MOUNTED
        return result

    def close(self) -> None:
        """Check that the context was configured and mounted."""
        if self._state is _State.CONFIGURED:
            raise DeviceStateError("Context must be mounted before it is dropped")
        if self._state is _State.NEW:
            raise DeviceStateError(
                "Context must be configured and mounted before it is dropped"
            )

    def __enter__(self) -> DeviceContext[D]:
        return self

    def __exit__(self, exc_type: Any, exc: Any, tb: Any) -> bool:
        if exc_type is None:
            self.close()
        return False


class Package(ABC):
    """A bundle of actors and shared state exposing one primary actor."""

    @abstractmethod
    def mount(self, config: Any, spawner: ActorSpawner) -> Address[Any]:
        """Mount the package's actors and return the primary actor's address."""