"""An actor that drives a LoRa module on behalf of other actors."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .actor import Actor
from .lora import ConnectMode, LoraConfig, LoraDriver, LoraError, QoS

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoraConfigure:
    config: LoraConfig


@dataclass(frozen=True)
class LoraJoin:
    pass


@dataclass(frozen=True)
class LoraSendRecv:
    tx: bytes
    rx: bytearray


@dataclass(frozen=True)
class LoraResult:
    """The outcome of a LoRa command: success, a failure, or bytes received."""

    error: LoraError | None = None
    sent: int | None = None

    @classmethod
    def ok(cls) -> LoraResult:
        return cls()

    @classmethod
    def err(cls, error: LoraError) -> LoraResult:
        return cls(error=error)

    @classmethod
    def ok_sent(cls, received: int) -> LoraResult:
        return cls(sent=received)

    @property
    def is_ok(self) -> bool:
        return self.error is None


class LoraActor(Actor):
    """Configures, joins and sends through a :class:`LoraDriver`."""

    def __init__(self, driver: LoraDriver) -> None:
        self.driver = driver

    async def on_start(self) -> None:
        pass

    async def on_message(
        self, message: LoraConfigure | LoraJoin | LoraSendRecv
    ) -> LoraResult:
        match message:
            case LoraConfigure(config=config):
                try:
                    await self.driver.configure(config)
                except LoraError as err:
                    log.error("Error configuring: %s", err)
                    return LoraResult.err(err)
                log.info("LoRa driver configured")
                return LoraResult.ok()
            case LoraJoin():
                try:
                    await self.driver.join(ConnectMode.OTAA)
                except LoraError as err:
                    log.error("Error joining network: %s", err)
                    return LoraResult.err(err)
                log.info("Network joined")
                return LoraResult.ok()
            case LoraSendRecv(tx=tx, rx=rx):
                try:
                    received = await self.driver.send_recv(QoS.CONFIRMED, 1, tx, rx)
                except LoraError as err:
                    log.error("Error sending message: %s", err)
                    return LoraResult.err(err)
                return LoraResult.ok_sent(received)
            case _:
                raise TypeError(f"unsupported LoRa command: {message!r}")