from __future__ import annotations

from typing import Any

import pytest

from multibot.bus.events import IncomingMessage
from multibot.config.schema import BotPolicy
from multibot.routing.trace import TraceEvent


class RecordingSink:
    def __init__(self) -> None:
        self.events: list[TraceEvent] = []

    def record(self, event: TraceEvent) -> None:
        self.events.append(event)


def make_policy(**overrides: Any) -> BotPolicy:
    data: dict[str, Any] = {"platform": "onebot", "self_id": "A", "mode": "unconstrained"}
    data.update(overrides)
    return BotPolicy.model_validate(data)


def make_message(content: str = "hello", **overrides: Any) -> IncomingMessage:
    data: dict[str, Any] = {
        "platform": "onebot",
        "self_id": "A",
        "channel_id": "c1",
        "user_id": "u1",
        "guild_id": "g1",
        "content": content,
    }
    data.update(overrides)
    return IncomingMessage(**data)


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()
