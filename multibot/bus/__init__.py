"""Host-facing event types."""

from multibot.bus.events import BotIdentity, ChannelRecord, IncomingMessage

__all__ = ["BotIdentity", "ChannelRecord", "IncomingMessage"]
