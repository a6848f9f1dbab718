import pytest

from actorbox.actor import ActorContext, ActorSpawner
from actorbox.lora import (
    ConnectMode,
    LoraConfig,
    LoraDriver,
    LoraError,
    LoraErrorKind,
    LoraMode,
    LoraRegion,
    QoS,
)
from actorbox.lora_actor import (
    LoraActor,
    LoraConfigure,
    LoraJoin,
    LoraResult,
    LoraSendRecv,
)


class FakeLora(LoraDriver):
    def __init__(self, failure=None, downlink=b""):
        self.failure = failure
        self.downlink = downlink
        self.calls = []

    def _check(self):
        if self.failure is not None:
            raise LoraError(self.failure)

    async def configure(self, config):
        self.calls.append(("configure", config))
        self._check()

    async def join(self, mode):
        self.calls.append(("join", mode))
        self._check()

    async def send(self, qos, port, data):
        self.calls.append(("send", qos, port, bytes(data)))
        self._check()

    async def send_recv(self, qos, port, data, rx):
        self.calls.append(("send_recv", qos, port, bytes(data)))
        self._check()
        rx[: len(self.downlink)] = self.downlink
        return len(self.downlink)


CONFIG = LoraConfig().with_region(LoraRegion.EU868).with_lora_mode(LoraMode.WAN)


@pytest.mark.asyncio
async def test_configure_success():
    driver = FakeLora()
    result = await LoraActor(driver).on_message(LoraConfigure(CONFIG))
    assert result == LoraResult.ok()
    assert driver.calls == [("configure", CONFIG)]


@pytest.mark.asyncio
async def test_configure_failure_is_reported():
    driver = FakeLora(failure=LoraErrorKind.NOT_READY)
    result = await LoraActor(driver).on_message(LoraConfigure(CONFIG))
    assert not result.is_ok
    assert result.error.kind is LoraErrorKind.NOT_READY


@pytest.mark.asyncio
async def test_join_uses_otaa():
    driver = FakeLora()
    result = await LoraActor(driver).on_message(LoraJoin())
    assert result.is_ok
    assert driver.calls == [("join", ConnectMode.OTAA)]


@pytest.mark.asyncio
async def test_join_failure_is_reported():
    driver = FakeLora(failure=LoraErrorKind.JOIN_ERROR)
    result = await LoraActor(driver).on_message(LoraJoin())
    assert result.error.kind is LoraErrorKind.JOIN_ERROR


@pytest.mark.asyncio
async def test_send_recv_through_actor():
    driver = FakeLora(downlink=b"led:on")
    context = ActorContext(LoraActor(driver))
    address = context.mount(None, ActorSpawner.idle())
    rx = bytearray(64)
    pending = address.request(LoraSendRecv(b"ping:1", rx))
    await context.process()
    result = await pending
    assert result == LoraResult.ok_sent(len(b"led:on"))
    assert bytes(rx[: result.sent]) == b"led:on"
    assert driver.calls == [("send_recv", QoS.CONFIRMED, 1, b"ping:1")]


@pytest.mark.asyncio
async def test_send_recv_failure_is_reported():
    driver = FakeLora(failure=LoraErrorKind.ACK_TIMEOUT)
    result = await LoraActor(driver).on_message(LoraSendRecv(b"ping", bytearray(8)))
    assert result.sent is None
    assert result.error.kind is LoraErrorKind.ACK_TIMEOUT


@pytest.mark.asyncio
async def test_unknown_command_rejected():
    with pytest.raises(TypeError):
        await LoraActor(FakeLora()).on_message("join")