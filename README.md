# actorbox

An actor framework built on `asyncio`. Each actor owns its own state and is
reached only through messages sent to its `Address`. Mailboxes are bounded, so
a full mailbox is reported to the sender at once instead of growing without
limit.

## Actors (`actorbox.actor`)

- **`Actor`** – subclass it and implement `on_message(message)`, which may
  return a value or an awaitable of one. `on_start()` runs once before the
  first message; `on_mount(config)` receives the configuration given when the
  actor is mounted. The class attribute `queue_size` (default 1) bounds both
  the number of queued messages and the number of requests that may await a
  response at the same time.
- **`ActorContext(actor, queue_size=None)`** – holds an actor with its mailbox
  and response slots. `mount(config, spawner)` calls `on_mount`, starts the
  actor through the spawner and returns an `Address`; mounting twice raises
  `RuntimeError`. `run()` starts the actor and then handles messages forever;
  `process()` waits for and handles a single message.
- **`Address`** – `notify(message)` queues a message and returns at once.
  `request(message)` queues a message and returns something to `await` for the
  actor's response; an exception raised while the actor handles a request is
  raised again at that `await`. Both raise `ActorError` when the mailbox is
  full, and `request` raises `NoAvailableSignal` (a subclass of `ActorError`)
  when every response slot is taken. Using an address of an actor that is not
  mounted raises `RuntimeError`. A request that is never awaited produces a
  `RuntimeWarning`.
- **`ActorSpawner`** – starts mounted actors, by default with
  `asyncio.create_task`, and keeps the tasks in `tasks`.
  `ActorSpawner.idle()` starts nothing, so an actor can be driven step by step
  with `ActorContext.process()`.

```python
import asyncio
from actorbox.actor import Actor, ActorContext, ActorSpawner

class Doubler(Actor):
    async def on_message(self, message):
        return message * 2

async def demo():
    address = ActorContext(Doubler()).mount(None, ActorSpawner())
    print(await address.request(21))  # 42

asyncio.run(demo())
```

## Devices and packages (`actorbox.device`)

- **`DeviceContext(spawner=None)`** – a one-shot container: call
  `configure(device)` once, then `mount(f)` once, where `f(device, spawner)`
  mounts the device's actors and its result is returned. `close()` checks that
  both steps happened; used as a context manager it does so on a clean exit.
  Any other order raises `DeviceStateError`.
- **`Package`** – bundles actors and shared state; its `mount(config, spawner)`
  returns the address of its primary actor.

## Channels and signals

`actorbox.channel.Channel(capacity=1)` is a bounded FIFO queue with
`try_send`, `send`, `try_receive`, `receive` and `len()`. The immediate forms
raise `ChannelFull` or `ChannelEmpty` (both `ChannelError`); the awaitable
forms wait for space or for an item. `actorbox.signal.SignalSlot` carries one
response back to a waiting requester, and `actorbox.util.ImmediateFuture` is an
awaitable that completes at once.

## LoRa and network types

`actorbox.lora` holds the LoRaWAN types (`QoS`, `ConnectMode`, `LoraMode`,
`LoraRegion`, the fixed-size `DevAddr`, `EUI`, `AppKey`, `NwksKey` and
`AppsKey`), the immutable `LoraConfig`, `LoraError` and the abstract
`LoraDriver` interface:

```python
from actorbox.lora import EUI, LoraConfig, LoraMode, LoraRegion

eui = EUI.from_hex("AABBCCDDEEFF0011")
print(str(eui))              # aabbccddeeff0011
print(bytes(eui.reverse()))  # b'\x11\x00\xff\xee\xdd\xcc\xbb\xaa'

config = (
    LoraConfig()
    .with_region(LoraRegion.EU868)
    .with_lora_mode(LoraMode.WAN)
    .with_device_eui(eui)
)
```

`actorbox.net` provides `IpAddress`, `SocketAddress`, `IpProtocol`, `Join`,
`TcpError`, `JoinError` and the abstract `TcpStack` and `WifiSupplicant`
interfaces.

`actorbox.lora_actor.LoraActor` wraps any `LoraDriver` as an actor that
answers `LoraConfigure`, `LoraJoin` and `LoraSendRecv` requests with a
`LoraResult`. `actorbox.wifi_app.App` is an actor that, given a driver
offering both Wi-Fi joining and TCP, joins a network, connects to a server and
sends `PING` on each `Command.SEND`.

## Testing your actors (`actorbox.testing`)

`TestRunner().run(test)` runs `test(context)` on a fresh event loop with a
`TestContext`, which offers `configure`, `mount`, `pin(initial)` and
`signal()`. `TestPin` is an input pin a test drives by hand, `TestSignal`
records the last `TestMessage` it received, `TestHandler` raises a
`TestSignal` for every message, `DummyActor` ignores its messages, and
`await step_actor(context)` handles exactly one message of an actor.

## Example program

Two actors sharing one counter, and a package whose actor keeps a counter of
its own, greet on a schedule:

```
actorbox-hello --iterations 3 --interval 0.5
```

Without `--iterations` it runs until interrupted. From code,
`await actorbox.hello.run(iterations, interval)` returns the shared counter
and the package's counter.

## What it does not do

The package defines interfaces for LoRa modules, TCP stacks and Wi-Fi
supplicants but ships no implementation of them: it talks to no radio, modem,
serial port or network. It has no button, LED, timer or ticker actors; those
have to be written against the `Actor` class.

## Installing for development

```
pip install -e ".[test]"
pytest
```