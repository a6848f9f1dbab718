"""IP addressing and the interfaces of TCP stacks and Wi-Fi supplicants."""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Generic, TypeVar

H = TypeVar("H")


@dataclass(frozen=True)
class IpAddressV4:
    """An IPv4 address given by its four octets."""

    a: int
    b: int
    c: int
    d: int

    def __post_init__(self) -> None:
        for octet in (self.a, self.b, self.c, self.d):
            if not 0 <= octet <= 255:
                raise ValueError(f"octet out of range: {octet}")

    def __str__(self) -> str:
        return f"{self.a}.{self.b}.{self.c}.{self.d}"


@dataclass(frozen=True)
class IpAddress:
    """An IP address; only version 4 is supported."""

    v4: IpAddressV4

    @classmethod
    def new_v4(cls, a: int, b: int, c: int, d: int) -> IpAddress:
        return cls(IpAddressV4(a, b, c, d))

    def __str__(self) -> str:
        return str(self.v4)


@dataclass(frozen=True)
class SocketAddress:
    """An IP address with a port."""

    ip: IpAddress
    port: int

    def __post_init__(self) -> None:
        if not 0 <= self.port <= 0xFFFF:
            raise ValueError(f"port out of range: {self.port}")

    def __str__(self) -> str:
        return f"{self.ip}:{self.port}"


class IpProtocol(enum.Enum):
    TCP = "tcp"
    UDP = "udp"


class TcpError(Exception):
    """A failure reported by a TCP stack."""

    class Kind(enum.Enum):
        CONNECT = "connect error"
        READ = "read error"
        WRITE = "write error"
        CLOSE = "close error"
        SOCKET_CLOSED = "socket closed"

    def __init__(self, kind: TcpError.Kind, message: str | None = None) -> None:
        self.kind = TcpError.Kind(kind)
        super().__init__(message or self.kind.value)


class TcpStack(ABC, Generic[H]):
    """A TCP/IP stack that opens sockets identified by handles."""

    @abstractmethod
    async def open(self) -> H:
        """Open a socket and return its handle."""

    @abstractmethod
    async def connect(self, handle: H, proto: IpProtocol, dst: SocketAddress) -> None:
        """Connect a socket; raise :class:`TcpError` on failure."""

    @abstractmethod
    async def write(self, handle: H, buf: bytes) -> int:
        """Write ``buf`` and return how many bytes were written."""

    @abstractmethod
    async def read(self, handle: H, buf: bytearray | memoryview) -> int:
        """Read into ``buf`` and return how many bytes were read."""

    @abstractmethod
    async def close(self, handle: H) -> None:
        """Close a socket."""


@dataclass(frozen=True)
class Join:
    """How to join a wireless network: open, or WPA with credentials."""

    ssid: str | None = None
    password: str | None = field(default=None, repr=False)

    @classmethod
    def open(cls) -> Join:
        return cls()

    @classmethod
    def wpa(cls, ssid: str, password: str) -> Join:
        return cls(ssid=ssid, password=password)

    @property
    def is_open(self) -> bool:
        return self.ssid is None


class JoinError(Exception):
    """A failure to join a wireless network."""

    class Kind(enum.Enum):
        UNKNOWN = enum.auto()
        INVALID_SSID = enum.auto()
        INVALID_PASSWORD = enum.auto()
        UNABLE_TO_ASSOCIATE = enum.auto()

        @property
        def description(self) -> str:
            return self.name.lower().replace("_", " ")

    def __init__(self, kind: JoinError.Kind = Kind.UNKNOWN, message: str | None = None) -> None:
        self.kind = JoinError.Kind(kind)
        super().__init__(message or self.kind.description)


class WifiSupplicant(ABC):
    """Something that can join a wireless network."""

    @abstractmethod
    async def join(self, join: Join) -> IpAddress:
        """Join a network and return the address obtained; raise :class:`JoinError`."""