"""An asyncio actor framework with bounded mailboxes, device contexts and LoRa/network types."""

__version__ = "0.1.0"