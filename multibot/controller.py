"""Multi-bot controller: the host-facing entry point."""

from pathlib import Path
from typing import Iterable

from loguru import logger

from multibot.bus.events import BotIdentity, ChannelRecord, IncomingMessage
from multibot.config.loader import load_config
from multibot.config.schema import ControllerConfig
from multibot.manager import PolicyRegistry, RegistrySummary
from multibot.routing.arbiter import ArbitrationPrecedence, AssignmentArbiter
from multibot.routing.filters import evaluate
from multibot.routing.trace import LoguruTraceSink, NullTraceSink, TraceSink


class MultiBotController:
    """
    Wires configuration, the policy registry and the arbiter together.

    The host calls:
    1. :meth:`on_attach_channel` for every non-direct inbound message
    2. :meth:`on_login_added` when a bot connects
    3. :meth:`on_ready` once all bots are up
    4. :meth:`reload` whenever the configuration changes
    """

    def __init__(
        self,
        config: ControllerConfig | None = None,
        precedence: ArbitrationPrecedence = ArbitrationPrecedence.LAST_MATCH,
    ):
        self.config = config or ControllerConfig()
        self.precedence = ArbitrationPrecedence(precedence)
        self.registry = PolicyRegistry(self.config.bots)
        self.arbiter = AssignmentArbiter(precedence=self.precedence, sink=self._make_sink())

        logger.info("Multi-bot controller loaded")
        logger.info(f"{len(self.registry)} bot policies configured")

    @classmethod
    def from_file(
        cls,
        config_path: Path | None = None,
        precedence: ArbitrationPrecedence = ArbitrationPrecedence.LAST_MATCH,
    ) -> "MultiBotController":
        """Build a controller from a JSON config file."""
        return cls(load_config(config_path), precedence=precedence)

    def _make_sink(self) -> TraceSink:
        return LoguruTraceSink() if self.config.debug else NullTraceSink()

    # -- host hooks ------------------------------------------------------

    def on_attach_channel(
        self,
        msg: IncomingMessage,
        channel: ChannelRecord,
        attached: Iterable[BotIdentity],
    ) -> None:
        """Arbitrate one inbound message across every bot on the channel."""
        self.arbiter.arbitrate(msg, attached, self.registry.get_policy, channel)

    def on_attach_channel_for(
        self,
        msg: IncomingMessage,
        channel: ChannelRecord,
        attached: Iterable[BotIdentity] = (),
    ) -> None:
        """Arbitrate for the receiving bot only (one call per bot)."""
        self.arbiter.arbitrate_identity(
            msg, msg.identity, self.registry.get_policy, channel, attached
        )

    def on_login_added(self, identity: BotIdentity) -> None:
        self.registry.on_login_added(identity)

    def on_ready(self, identities: Iterable[BotIdentity]) -> RegistrySummary:
        summary = self.registry.summarize(identities)
        logger.info("Multi-bot controller ready")
        logger.info(f"Detected {summary.total} bots, {summary.online} online")
        if summary.unconfigured:
            logger.info(f"{summary.unconfigured} bots have no policy configured")
        return summary

    def reload(self, config: ControllerConfig) -> None:
        """Swap in a new configuration."""
        self.config = config
        self.registry.update(config.bots)
        self.arbiter.sink = self._make_sink()

    # -- queries ---------------------------------------------------------

    def evaluate(self, msg: IncomingMessage) -> bool | None:
        """Filter verdict for the receiving bot, or None if it has no policy."""
        policy = self.registry.get_policy(msg.platform, msg.self_id)
        if policy is None:
            return None
        return evaluate(msg, policy, self.arbiter.sink)
