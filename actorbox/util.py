"""Small awaitable helpers."""

from __future__ import annotations

from typing import Any, Generator


class ImmediateFuture:
    """An awaitable that completes at once, by default with ``None``."""

    def __init__(self, value: Any = None) -> None:
        self._value = value

    def __await__(self) -> Generator[Any, None, Any]:
        yield from ()
        return self._value

    def __repr__(self) -> str:
        return f"ImmediateFuture({self._value!r})"