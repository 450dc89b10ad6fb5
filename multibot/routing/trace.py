"""Decision tracing for filter evaluation.

Filters report each decision point to a :class:`TraceSink` instead of a
global logger so that evaluation stays pure and easy to test.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from loguru import logger

from multibot.bus.events import IncomingMessage


@dataclass(frozen=True)
class TraceEvent:
    """One decision point reached while evaluating a message."""

    platform: str
    self_id: str
    channel_id: str
    user_id: str
    reason: str

    @classmethod
    def for_message(cls, msg: IncomingMessage, reason: str) -> TraceEvent:
        return cls(
            platform=msg.platform,
            self_id=msg.self_id,
            channel_id=msg.channel_id,
            user_id=msg.user_id,
            reason=reason,
        )

    def format(self) -> str:
        return (
            f"[{self.platform}:{self.self_id}] "
            f"channel {self.channel_id}, user {self.user_id}: {self.reason}"
        )


class TraceSink(Protocol):
    """Receiver for :class:`TraceEvent` records."""

    def record(self, event: TraceEvent) -> None:
        ...


class NullTraceSink:
    """Drops every event (tracing disabled)."""

    def record(self, event: TraceEvent) -> None:
        return None


class LoguruTraceSink:
    """Writes events to the loguru logger at DEBUG level."""

    def record(self, event: TraceEvent) -> None:
        logger.debug(event.format())
