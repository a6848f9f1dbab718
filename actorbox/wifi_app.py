"""An application that joins Wi-Fi, connects to a server and pings it on command."""

from __future__ import annotations

import enum
import logging
from typing import Any, Protocol

from .actor import Actor
from .net import (
    IpAddress,
    IpProtocol,
    Join,
    JoinError,
    SocketAddress,
    TcpError,
)

log = logging.getLogger(__name__)

_PING = b"PING"


class _WifiTcp(Protocol):
    async def join(self, join: Join) -> IpAddress: ...
    async def open(self) -> Any: ...
    async def connect(self, handle: Any, proto: IpProtocol, dst: SocketAddress) -> None: ...
    async def write(self, handle: Any, buf: bytes) -> int: ...
    async def read(self, handle: Any, buf: bytearray) -> int: ...


class Command(enum.Enum):
    SEND = "send"


class App(Actor):
    """Keeps one TCP connection open and pings the server with each ``SEND``."""

    def __init__(self, ssid: str, psk: str, ip: IpAddress, port: int) -> None:
        self.ssid = ssid
        self.psk = psk
        self.ip = ip
        self.port = port
        self._driver: _WifiTcp | None = None
        self._socket: Any = None

    @property
    def driver(self) -> _WifiTcp | None:
        return self._driver

    @property
    def socket(self) -> Any:
        return self._socket

    def on_mount(self, config: _WifiTcp) -> None:
        self._driver = config

    async def on_start(self) -> None:
        driver, self._driver = self._driver, None
        if driver is None:
            raise RuntimeError("driver not bound!")
        log.info("Joining access point")
        try:
            await driver.join(Join.wpa(self.ssid, self.psk))
        except JoinError as err:
            raise RuntimeError("Error joining wifi") from err
        log.info("Joined access point")

        socket = await driver.open()
        log.info("Connecting to %s:%s", self.ip, self.port)
        try:
            await driver.connect(socket, IpProtocol.TCP, SocketAddress(self.ip, self.port))
        except TcpError as err:
            log.warning("Error connecting: %s", err)
            return
        self._driver = driver
        self._socket = socket
        log.info("Connected to %s!", self.ip)

    async def on_message(self, message: Command) -> None:
        match message:
            case Command.SEND:
                await self._ping()
            case _:
                raise TypeError(f"unsupported command: {message!r}")

    async def _ping(self) -> None:
        log.info("Pinging server..")
        if self._driver is None:
            raise RuntimeError("driver not bound!")
        if self._socket is None:
            raise RuntimeError("socket not bound!")
        driver, socket = self._driver, self._socket
        try:
            await driver.write(socket, _PING)
        except TcpError as err:
            log.warning("Error pinging server: %s", err)
            return
        log.debug("Data sent")
        rx = bytearray(8)
        try:
            length = await driver.read(socket, rx)
        except TcpError as err:
            log.warning("Error reading response: %s", err)
            return
        if bytes(rx[:length]) == _PING:
            log.info("Ping response received")
        else:
            log.warning("Unexpected response of %d bytes: %r", length, bytes(rx[:length]))