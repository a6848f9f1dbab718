"""LoRa types, keys and the driver interface for LoRa modules."""

from __future__ import annotations

import enum
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from typing import ClassVar

Port = int

_HEX = re.compile(r"[0-9A-Fa-f]*")


class QoS(enum.Enum):
    UNCONFIRMED = "unconfirmed"
    CONFIRMED = "confirmed"


class ResetMode(enum.Enum):
    RESTART = "restart"
    RELOAD = "reload"


class ConnectMode(enum.Enum):
    OTAA = "otaa"
    ABP = "abp"


class LoraMode(enum.IntEnum):
    WAN = 0
    P2P = 1


class LoraRegion(enum.Enum):
    EU868 = "EU868"
    US915 = "US915"
    AU915 = "AU915"
    KR920 = "KR920"
    AS923 = "AS923"
    IN865 = "IN865"
    CN470 = "CN470"
    UNKNOWN = "UNKNOWN"


@dataclass(frozen=True, repr=False)
class _FixedBytes:
    SIZE: ClassVar[int] = 0

    data: bytes

    def __post_init__(self) -> None:
        data = bytes(self.data)
        if len(data) != self.SIZE:
            raise ValueError(f"{type(self).__name__} needs {self.SIZE} bytes, got {len(data)}")
        object.__setattr__(self, "data", data)

    @classmethod
    def _parse_hex(cls, text: str):
        digits = 2 * cls.SIZE
        if len(text) < digits:
            raise ValueError(f"{cls.__name__} needs at least {digits} hex digits")
        prefix = text[:digits]
        if not _HEX.fullmatch(prefix):
            raise ValueError(f"invalid hex in {prefix!r}")
        return cls(bytes.fromhex(prefix))

    def _reversed(self):
        return type(self)(self.data[::-1])

    def __repr__(self) -> str:
        return f"{type(self).__name__}('{self.data.hex()}')"


class DevAddr(_FixedBytes):
    """A 4-byte device address."""

    SIZE = 4

    @classmethod
    def from_hex(cls, text: str) -> DevAddr:
        """Parse the first 8 hex digits of ``text``."""
        return cls._parse_hex(text)

    def reverse(self) -> DevAddr:
        """Return the same bytes in reverse order."""
        return self._reversed()

    def __bytes__(self) -> bytes:
        return self.data

    def __str__(self) -> str:
        return self.data.hex()


class EUI(_FixedBytes):
    """An 8-byte extended unique identifier."""

    SIZE = 8

    @classmethod
    def from_hex(cls, text: str) -> EUI:
        """Parse the first 16 hex digits of ``text``."""
        return cls._parse_hex(text)

    def reverse(self) -> EUI:
        """Return the same bytes in reverse order."""
        return self._reversed()

    def __bytes__(self) -> bytes:
        return self.data

    def __str__(self) -> str:
        return self.data.hex()


class AppKey(_FixedBytes):
    """A 16-byte application key."""

    SIZE = 16

    @classmethod
    def from_hex(cls, text: str) -> AppKey:
        """Parse the first 32 hex digits of ``text``."""
        return cls._parse_hex(text)

    def reverse(self) -> AppKey:
        """Return the same bytes in reverse order."""
        return self._reversed()

    def __bytes__(self) -> bytes:
        return self.data

    def __str__(self) -> str:
        return self.data.hex()


class NwksKey(_FixedBytes):
    """A 16-byte network session key."""

    SIZE = 16

    @classmethod
    def from_hex(cls, text: str) -> NwksKey:
        """Parse the first 32 hex digits of ``text``."""
        return cls._parse_hex(text)

    def reverse(self) -> NwksKey:
        """Return the same bytes in reverse order."""
        return self._reversed()

    def __bytes__(self) -> bytes:
        return self.data

    def __str__(self) -> str:
        return self.data.hex()


class AppsKey(_FixedBytes):
    """A 16-byte application session key."""

    SIZE = 16

    @classmethod
    def from_hex(cls, text: str) -> AppsKey:
        """Parse the first 32 hex digits of ``text``."""
        return cls._parse_hex(text)

    def reverse(self) -> AppsKey:
        """Return the same bytes in reverse order."""
        return self._reversed()

    def __bytes__(self) -> bytes:
        return self.data

    def __str__(self) -> str:
        return self.data.hex()


@dataclass(frozen=True)
class LoraConfig:
    """Settings for a LoRa module; unset fields are ``None``."""

    region: LoraRegion | None = None
    lora_mode: LoraMode | None = None
    device_address: DevAddr | None = None
    device_eui: EUI | None = None
    app_eui: EUI | None = None
    app_key: AppKey | None = None

    def with_region(self, region: LoraRegion) -> LoraConfig:
        return replace(self, region=region)

    def with_lora_mode(self, lora_mode: LoraMode) -> LoraConfig:
        return replace(self, lora_mode=lora_mode)

    def with_device_address(self, device_address: DevAddr) -> LoraConfig:
        return replace(self, device_address=device_address)

    def with_device_eui(self, device_eui: EUI) -> LoraConfig:
        return replace(self, device_eui=device_eui)

    def with_app_eui(self, app_eui: EUI) -> LoraConfig:
        return replace(self, app_eui=app_eui)

    def with_app_key(self, app_key: AppKey) -> LoraConfig:
        return replace(self, app_key=app_key)


class LoraErrorKind(enum.Enum):
    JOIN_ERROR = "join error"
    ACK_TIMEOUT = "ack timeout"
    NOT_READY = "not ready"
    SEND_ERROR = "send error"
    RECV_ERROR = "receive error"
    RECV_TIMEOUT = "receive timeout"
    RECV_BUFFER_TOO_SMALL = "receive buffer too small"
    NOT_INITIALIZED = "not initialized"
    NOT_IMPLEMENTED = "not implemented"
    UNSUPPORTED_REGION = "unsupported region"
    OTHER_ERROR = "other error"


class LoraError(Exception):
    """A failure reported by a LoRa driver."""

    def __init__(self, kind: LoraErrorKind, message: str | None = None) -> None:
        self.kind = LoraErrorKind(kind)
        super().__init__(message or self.kind.value)


class LoraDriver(ABC):
    """The operations a LoRa module offers; failures raise :class:`LoraError`."""

    @abstractmethod
    async def configure(self, config: LoraConfig) -> None:
        """Configure the module with ``config``."""

    @abstractmethod
    async def join(self, mode: ConnectMode) -> None:
        """Join a LoRaWAN network."""

    @abstractmethod
    async def send(self, qos: QoS, port: Port, data: bytes) -> None:
        """Send ``data`` on ``port``."""

    @abstractmethod
    async def send_recv(
        self, qos: QoS, port: Port, data: bytes, rx: bytearray | memoryview
    ) -> int:
        """Send ``data``; write any received bytes into ``rx`` and return their count."""