"""Configuration schema using Pydantic."""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from multibot.bus.events import IncomingMessage

ResponseMode = Literal["constrained", "unconstrained"]
FilterMode = Literal["blacklist", "whitelist"]


# -----------------------------------------------------------------------
# Source rules
# -----------------------------------------------------------------------

class GuildRule(BaseModel):
    """Matches messages sent in one guild (group)."""
    type: Literal["guild"] = "guild"
    value: str = ""

    def matches(self, msg: IncomingMessage) -> bool:
        return msg.guild_id == self.value


class UserRule(BaseModel):
    """Matches messages sent by one user."""
    type: Literal["user"] = "user"
    value: str = ""

    def matches(self, msg: IncomingMessage) -> bool:
        return msg.user_id == self.value


class ChannelRule(BaseModel):
    """Matches messages sent in one channel."""
    type: Literal["channel"] = "channel"
    value: str = ""

    def matches(self, msg: IncomingMessage) -> bool:
        return msg.channel_id == self.value


class PrivateRule(BaseModel):
    """Matches direct messages (``value=True``) or group messages (``False``)."""
    type: Literal["private"] = "private"
    value: bool = True

    def matches(self, msg: IncomingMessage) -> bool:
        return msg.is_direct == self.value


SourceRule = Annotated[
    Union[GuildRule, UserRule, ChannelRule, PrivateRule],
    Field(discriminator="type"),
]


# -----------------------------------------------------------------------
# Filter sections
# -----------------------------------------------------------------------

class SourceFilterConfig(BaseModel):
    """Which message origins a bot considers at all."""
    enabled: bool = False
    rules: list[SourceRule] = Field(default_factory=list)
    mode: FilterMode = "whitelist"  # whitelist: only listed sources


class CommandFilterConfig(BaseModel):
    """Which commands a bot answers."""
    enabled: bool = False
    names: list[str] = Field(default_factory=list)
    mode: FilterMode = "blacklist"  # blacklist: only answer listed commands


class KeywordFilterConfig(BaseModel):
    """Keyword gate for non-command messages (constrained mode only)."""
    enabled: bool = False
    keywords: list[str] = Field(default_factory=list)
    mode: FilterMode = "blacklist"  # blacklist: only answer matching messages


# -----------------------------------------------------------------------
# Bot policy / root config
# -----------------------------------------------------------------------

class BotPolicy(BaseModel):
    """Response policy for a single bot identity."""
    platform: str
    self_id: str
    enabled: bool = True
    mode: ResponseMode
    source_filter: SourceFilterConfig = Field(default_factory=SourceFilterConfig)
    command_filter: CommandFilterConfig = Field(default_factory=CommandFilterConfig)
    keyword_filter: KeywordFilterConfig = Field(default_factory=KeywordFilterConfig)

    @property
    def key(self) -> str:
        return f"{self.platform}:{self.self_id}"


class ControllerConfig(BaseModel):
    """Root configuration for the multi-bot controller."""
    bots: list[BotPolicy] = Field(default_factory=list)
    debug: bool = False  # Verbose decision tracing
