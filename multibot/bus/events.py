"""Event types exchanged between the host and the arbitration core."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class BotIdentity:
    """One bot connection on the host, keyed by platform and account id."""

    platform: str  # onebot, qq, discord, ...
    self_id: str  # Bot account id on that platform
    online: bool = field(default=True, compare=False)

    @property
    def key(self) -> str:
        """Identity key in ``platform:self_id`` form."""
        return f"{self.platform}:{self.self_id}"


@dataclass
class IncomingMessage:
    """Read-only view of one inbound message as seen by a receiving bot."""

    platform: str
    self_id: str  # The bot that received this event
    channel_id: str
    user_id: str
    content: str = ""
    guild_id: str = ""
    is_direct: bool = False
    command: str | None = None  # Parsed command name, if any
    is_command: bool | None = None  # None -> inferred from ``command``
    mention_targets: list[str] = field(default_factory=list)  # ids from "at" elements

    def __post_init__(self) -> None:
        if self.is_command is None:
            self.is_command = self.command is not None

    @property
    def identity(self) -> BotIdentity:
        """Identity of the bot that received this message."""
        return BotIdentity(self.platform, self.self_id)


@dataclass
class ChannelRecord:
    """
    Channel state shared by every bot attached to the channel.

    ``assignee`` holds the ``self_id`` of the bot that owns the channel, or
    an empty string when nobody does.
    """

    id: str
    platform: str = ""
    assignee: str = ""
