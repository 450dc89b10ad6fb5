"""Channel assignment arbitration.

Every bot attached to a channel shares one ``assignee`` field.  For each
message the arbiter walks the attached identities, applies the mention
override or the filter verdict for each, and writes the resulting assignee
back to the channel once.
"""

from __future__ import annotations

import dataclasses
from enum import Enum
from typing import Callable, Iterable

from loguru import logger

from multibot.bus.events import BotIdentity, ChannelRecord, IncomingMessage
from multibot.config.schema import BotPolicy
from multibot.routing.base import FilterChain
from multibot.routing.filters import default_chain
from multibot.routing.mentions import mentioned_identities
from multibot.routing.trace import NullTraceSink, TraceSink

PolicyLookup = Callable[[str, str], "BotPolicy | None"]


class ArbitrationPrecedence(str, Enum):
    """Who wins when several bots want the same message."""

    LAST_MATCH = "last_match"  # later claims overwrite earlier ones
    FIRST_MATCH = "first_match"  # the first claimer keeps the channel


class AssignmentArbiter:
    """Decides the channel assignee for one message.

    Transitions per identity, in priority order:

    1. Direct messages are never arbitrated.
    2. Identities without a policy are left alone.
    3. If any attached bot is mentioned, mentioned bots claim and other
       holders release; filters are not consulted.
    4. Otherwise the filter verdict claims (``True``) or releases
       (``False``) the channel for that identity.
    """

    def __init__(
        self,
        precedence: ArbitrationPrecedence = ArbitrationPrecedence.LAST_MATCH,
        sink: TraceSink | None = None,
        chain: FilterChain | None = None,
    ) -> None:
        self.precedence = ArbitrationPrecedence(precedence)
        self.sink = sink or NullTraceSink()
        self.chain = chain or default_chain()

    def decide(
        self,
        msg: IncomingMessage,
        attached: Iterable[BotIdentity],
        policy_lookup: PolicyLookup,
        current: str = "",
        peers: Iterable[BotIdentity] | None = None,
    ) -> str:
        """Return the assignee after arbitrating *msg*, starting from *current*.

        Mentions are resolved against *peers* (defaults to *attached*).
        """
        if msg.is_direct:
            return current

        attached = list(attached)
        scope = attached if peers is None else list(peers)
        mentioned = {ident.self_id for ident in mentioned_identities(msg, scope)}
        assignee = current
        locked = False  # FIRST_MATCH: a winner has been picked

        for ident in attached:
            policy = policy_lookup(ident.platform, ident.self_id)
            if policy is None:
                continue

            if mentioned:
                wants = ident.self_id in mentioned
                reason = "mentioned" if wants else "another bot mentioned"
            else:
                wants = self.chain.should_respond(self._view_for(msg, ident), policy, self.sink)
                reason = "filters passed" if wants else "filters rejected"

            if wants:
                if locked and self.precedence is ArbitrationPrecedence.FIRST_MATCH:
                    continue
                if assignee != ident.self_id:
                    logger.debug(f"[{ident.key}] {reason}, claims channel {msg.channel_id}")
                    assignee = ident.self_id
                locked = True
            elif assignee == ident.self_id:
                logger.debug(f"[{ident.key}] {reason}, releases channel {msg.channel_id}")
                assignee = ""

        return assignee

    def arbitrate(
        self,
        msg: IncomingMessage,
        attached: Iterable[BotIdentity],
        policy_lookup: PolicyLookup,
        channel: ChannelRecord,
    ) -> None:
        """Arbitrate *msg* across all *attached* bots; writes ``channel.assignee`` at most once."""
        assignee = self.decide(msg, attached, policy_lookup, channel.assignee)
        if assignee != channel.assignee:
            channel.assignee = assignee

    def arbitrate_identity(
        self,
        msg: IncomingMessage,
        identity: BotIdentity,
        policy_lookup: PolicyLookup,
        channel: ChannelRecord,
        attached: Iterable[BotIdentity] = (),
    ) -> None:
        """Arbitrate for a single identity (hosts that dispatch once per bot).

        *attached* is only used to resolve mentions; it should list every bot
        on the channel so that a mention of another bot makes *identity*
        release the channel.
        """
        peers = [identity, *(ident for ident in attached if ident != identity)]
        assignee = self.decide(msg, [identity], policy_lookup, channel.assignee, peers=peers)
        if assignee != channel.assignee:
            channel.assignee = assignee

    @staticmethod
    def _view_for(msg: IncomingMessage, ident: BotIdentity) -> IncomingMessage:
        """The message as received by *ident*."""
        if msg.self_id == ident.self_id and msg.platform == ident.platform:
            return msg
        return dataclasses.replace(msg, platform=ident.platform, self_id=ident.self_id)


def arbitrate(
    msg: IncomingMessage,
    attached: Iterable[BotIdentity],
    policy_lookup: PolicyLookup,
    channel: ChannelRecord,
    *,
    precedence: ArbitrationPrecedence = ArbitrationPrecedence.LAST_MATCH,
    sink: TraceSink | None = None,
) -> None:
    """Arbitrate *msg* with a one-off :class:`AssignmentArbiter`."""
    AssignmentArbiter(precedence=precedence, sink=sink).arbitrate(
        msg, attached, policy_lookup, channel
    )
