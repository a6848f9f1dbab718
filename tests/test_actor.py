import asyncio
from dataclasses import dataclass

import pytest

from actorbox.actor import (
    Actor,
    ActorContext,
    ActorError,
    ActorSpawner,
    Address,
    NoAvailableSignal,
)
from actorbox.channel import ChannelFull
from actorbox.util import ImmediateFuture


@dataclass(frozen=True)
class Msg:
    value: int


class DummyActor(Actor):
    def __init__(self):
        self.received = []

    def on_message(self, message):
        self.received.append(message)
        return ImmediateFuture()


class Doubler(Actor):
    def __init__(self):
        self.log = []
        self.config = None

    def on_mount(self, config):
        self.config = config

    async def on_start(self):
        self.log.append("start")

    async def on_message(self, message):
        self.log.append(message.value)
        return message.value * 2


class SyncActor(Actor):
    def on_message(self, message):
        return message.value + 1


class Failing(Actor):
    def __init__(self):
        self.seen = []

    async def on_message(self, message):
        self.seen.append(message.value)
        raise ValueError(f"bad {message.value}")


class Roomy(DummyActor):
    queue_size = 2


async def _cancel(spawner):
    for task in spawner.tasks:
        task.cancel()
    await asyncio.gather(*spawner.tasks, return_exceptions=True)


@pytest.mark.asyncio
async def test_multiple_notifications():
    spawner = ActorSpawner.idle()
    context = ActorContext(DummyActor())
    address = context.mount(None, spawner)

    address.notify(Msg(0))
    with pytest.raises(ActorError):
        address.notify(Msg(1))

    await context.process()
    address.notify(Msg(1))
    await context.process()
    assert context.actor.received == [Msg(0), Msg(1)]


@pytest.mark.asyncio
async def test_multiple_requests():
    spawner = ActorSpawner.idle()
    context = ActorContext(DummyActor())
    address = context.mount(None, spawner)

    fut_1 = address.request(Msg(0))
    with pytest.raises(NoAvailableSignal):
        address.request(Msg(1))

    await context.process()
    assert await fut_1 is None

    fut_2 = address.request(Msg(1))
    await context.process()
    assert await fut_2 is None
    assert context.actor.received == [Msg(0), Msg(1)]


@pytest.mark.asyncio
async def test_request_returns_response():
    context = ActorContext(Doubler())
    address = context.mount(None, ActorSpawner.idle())
    fut = address.request(Msg(21))
    await context.process()
    assert await fut == 42


@pytest.mark.asyncio
async def test_sync_on_message_response():
    context = ActorContext(SyncActor())
    address = context.mount(None, ActorSpawner.idle())
    fut = address.request(Msg(4))
    await context.process()
    assert await fut == 5


@pytest.mark.asyncio
async def test_request_failure_reaches_requester():
    context = ActorContext(Failing())
    address = context.mount(None, ActorSpawner.idle())
    fut = address.request(Msg(3))
    await context.process()
    with pytest.raises(ValueError, match="bad 3"):
        await fut
    fut = address.request(Msg(4))
    await context.process()
    with pytest.raises(ValueError, match="bad 4"):
        await fut
    assert context.actor.seen == [3, 4]


@pytest.mark.asyncio
async def test_notify_failure_propagates():
    context = ActorContext(Failing())
    address = context.mount(None, ActorSpawner.idle())
    address.notify(Msg(1))
    with pytest.raises(ValueError, match="bad 1"):
        await context.process()
    assert context.actor.seen == [1]


@pytest.mark.asyncio
async def test_request_awaited_twice():
    context = ActorContext(Doubler())
    address = context.mount(None, ActorSpawner.idle())
    fut = address.request(Msg(1))
    await context.process()
    assert await fut == 2
    with pytest.raises(RuntimeError):
        await fut


def test_send_before_mount_fails():
    context = ActorContext(DummyActor())
    address = Address(context)
    with pytest.raises(RuntimeError, match="not mounted"):
        address.notify(Msg(0))


def test_mount_twice_fails():
    context = ActorContext(DummyActor())
    context.mount(None, ActorSpawner.idle())
    with pytest.raises(RuntimeError, match="already mounted"):
        context.mount(None, ActorSpawner.idle())


def test_on_mount_receives_config():
    context = ActorContext(Doubler())
    context.mount("cfg", ActorSpawner.idle())
    assert context.actor.config == "cfg"
    assert context.mounted


def test_full_channel_error_has_cause():
    context = ActorContext(DummyActor())
    address = context.mount(None, ActorSpawner.idle())
    address.notify(Msg(0))
    with pytest.raises(ActorError) as info:
        address.notify(Msg(1))
    assert isinstance(info.value.__cause__, ChannelFull)


@pytest.mark.asyncio
async def test_request_on_full_channel_releases_slot():
    context = ActorContext(DummyActor())
    address = context.mount(None, ActorSpawner.idle())
    address.notify(Msg(0))
    with pytest.raises(ActorError) as info:
        address.request(Msg(1))
    assert not isinstance(info.value, NoAvailableSignal)
    await context.process()
    fut = address.request(Msg(2))
    await context.process()
    assert await fut is None
    assert context.actor.received == [Msg(0), Msg(2)]


def test_queue_size_from_actor():
    context = ActorContext(Roomy())
    address = context.mount(None, ActorSpawner.idle())
    address.notify(Msg(0))
    address.notify(Msg(1))
    with pytest.raises(ActorError):
        address.notify(Msg(2))


def test_queue_size_override():
    context = ActorContext(DummyActor(), queue_size=3)
    address = context.mount(None, ActorSpawner.idle())
    for n in range(3):
        address.notify(Msg(n))
    with pytest.raises(ActorError):
        address.notify(Msg(3))


def test_idle_spawner_starts_nothing():
    spawner = ActorSpawner.idle()
    assert spawner.spawn(ActorContext(DummyActor())) is None
    assert spawner.tasks == []


def test_address_equality():
    context = ActorContext(DummyActor())
    address = context.mount(None, ActorSpawner.idle())
    assert address == Address(context)
    assert address != Address(ActorContext(DummyActor()))
    assert address.context is context


@pytest.mark.asyncio
async def test_spawned_actor_starts_then_handles():
    spawner = ActorSpawner()
    context = ActorContext(Doubler())
    address = context.mount(None, spawner)
    assert len(spawner.tasks) == 1
    result = await asyncio.wait_for(address.request(Msg(5)), 5)
    assert result == 10
    assert context.actor.log == ["start", 5]
    await _cancel(spawner)