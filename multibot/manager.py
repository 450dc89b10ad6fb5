"""Bot policy registry."""

from dataclasses import dataclass
from typing import Iterable

from loguru import logger

from multibot.bus.events import BotIdentity
from multibot.config.schema import BotPolicy


@dataclass(frozen=True)
class RegistrySummary:
    """Counts reported when the host becomes ready."""

    total: int
    online: int
    configured: int

    @property
    def unconfigured(self) -> int:
        return self.total - self.configured


class PolicyRegistry:
    """
    Holds the per-bot policies and answers lookups by identity.

    Policies are replaced wholesale on reload; a policy object is never
    mutated while a message is being arbitrated.
    """

    def __init__(self, policies: Iterable[BotPolicy] = ()):
        self._policies: dict[tuple[str, str], BotPolicy] = {}
        self._load(policies)

    def _load(self, policies: Iterable[BotPolicy]) -> None:
        table: dict[tuple[str, str], BotPolicy] = {}
        for policy in policies:
            key = (policy.platform, policy.self_id)
            if key in table:
                # First entry wins, same as a linear search would
                logger.warning(f"Duplicate policy for {policy.key}, keeping the first one")
                continue
            table[key] = policy
        self._policies = table

    def __len__(self) -> int:
        return len(self._policies)

    def get_policy(self, platform: str, self_id: str) -> BotPolicy | None:
        """Get the policy for a bot, or None if it is not configured."""
        return self._policies.get((platform, self_id))

    def update(self, policies: Iterable[BotPolicy]) -> None:
        """Replace all policies (configuration reload)."""
        self._load(policies)
        logger.info(f"Configuration updated, {len(self._policies)} bot policies loaded")

    def on_login_added(self, identity: BotIdentity) -> None:
        """Report a newly connected bot, warning when it has no policy."""
        logger.info(f"New bot online: {identity.key}")
        if self.get_policy(identity.platform, identity.self_id) is None:
            logger.warning(f"Bot {identity.key} is not configured; add a policy to control it")

    def summarize(self, identities: Iterable[BotIdentity]) -> RegistrySummary:
        """Count known, online and configured bots."""
        identities = list(identities)
        return RegistrySummary(
            total=len(identities),
            online=sum(1 for ident in identities if ident.online),
            configured=sum(
                1 for ident in identities
                if self.get_policy(ident.platform, ident.self_id) is not None
            ),
        )
