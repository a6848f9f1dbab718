import logging

import pytest

from actorbox.actor import ActorContext, ActorSpawner
from actorbox.hello import Counter, MyActor, MyPack, SayHello, main, run


def test_counter_fetch_add_returns_previous():
    counter = Counter()
    assert counter.fetch_add(1) == 0
    assert counter.fetch_add(1) == 1
    assert counter.value == 2


@pytest.mark.asyncio
async def test_actor_greets_and_counts(caplog):
    caplog.set_level(logging.INFO, logger="actorbox.hello")
    counter = Counter()
    context = ActorContext(MyActor("a"))
    address = context.mount(counter, ActorSpawner.idle())
    address.notify(SayHello("World"))
    await context.process()
    assert counter.value == 1
    assert "[a] hello World: 0" in caplog.text


@pytest.mark.asyncio
async def test_actor_start_logs(caplog):
    caplog.set_level(logging.INFO, logger="actorbox.hello")
    await MyActor("b").on_start()
    assert "[b] started!" in caplog.text


@pytest.mark.asyncio
async def test_actor_without_counter_fails():
    with pytest.raises(RuntimeError):
        await MyActor("a").on_message(SayHello("World"))


@pytest.mark.asyncio
async def test_pack_uses_own_counter():
    shared = Counter()
    pack = MyPack()
    address = pack.mount(None, ActorSpawner.idle())
    assert address.context.actor.name == "c"
    address.notify(SayHello("There"))
    await pack.c.process()
    assert pack.counter.value == 1
    assert shared.value == 0


@pytest.mark.asyncio
async def test_run_counts_greetings():
    iterations = 3
    shared, packaged = await run(iterations, 0)
    assert shared == 2 * iterations
    assert packaged == iterations


def test_main_returns_zero():
    assert main(["--iterations", "2", "--interval", "0"]) == 0