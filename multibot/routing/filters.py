"""Built-in response filters and the default evaluation chain.

The default chain runs, in order:

1. :class:`EnabledFilter` – master switch.
2. :class:`SourceFilter`  – absolute gate on message origin.
3. :class:`CommandFilter` – command messages only.
4. :class:`ModeFilter`    – non-command messages (unconstrained / keywords).
"""

from __future__ import annotations

from multibot.bus.events import IncomingMessage
from multibot.config.schema import BotPolicy
from multibot.routing.base import FilterChain, ResponseFilter
from multibot.routing.trace import TraceSink


class EnabledFilter(ResponseFilter):
    """Skips everything when the policy is disabled."""

    def should_respond(
        self, msg: IncomingMessage, policy: BotPolicy, sink: TraceSink
    ) -> bool | None:
        if not policy.enabled:
            self.trace(sink, msg, "bot disabled")
            return False
        return None


class SourceFilter(ResponseFilter):
    """Origin gate: guild / user / channel / private rules.

    A failed check ends evaluation.  A passed check defers so later filters
    still apply; it never turns into a ``True`` on its own.
    """

    def should_respond(
        self, msg: IncomingMessage, policy: BotPolicy, sink: TraceSink
    ) -> bool | None:
        cfg = policy.source_filter
        if not cfg.enabled or not cfg.rules:
            return None

        matched = any(rule.matches(msg) for rule in cfg.rules)
        allowed = matched if cfg.mode == "whitelist" else not matched
        self.trace(
            sink, msg,
            f"source {'matched' if matched else 'not matched'} "
            f"({len(cfg.rules)} rules), {cfg.mode} -> {allowed}",
        )
        return None if allowed else False


class CommandFilter(ResponseFilter):
    """Allow/deny list for command names.

    ``blacklist`` answers only the listed commands, ``whitelist`` answers
    everything except them.  An empty list allows all in ``blacklist`` mode
    and nothing in ``whitelist`` mode.
    """

    def should_respond(
        self, msg: IncomingMessage, policy: BotPolicy, sink: TraceSink
    ) -> bool | None:
        if not msg.is_command:
            return None

        name = msg.command
        if not name:
            self.trace(sink, msg, "command could not be resolved, pass")
            return True

        cfg = policy.command_filter
        if not cfg.enabled:
            self.trace(sink, msg, f'command "{name}": filter disabled, pass')
            return True

        if not cfg.names:
            result = cfg.mode == "blacklist"
            self.trace(sink, msg, f'command "{name}": list empty, {cfg.mode} -> {result}')
            return result

        in_list = name in cfg.names
        result = in_list if cfg.mode == "blacklist" else not in_list
        self.trace(
            sink, msg,
            f'command "{name}": {"in" if in_list else "not in"} list, {cfg.mode} -> {result}',
        )
        return result


class ModeFilter(ResponseFilter):
    """Non-command messages: pass in ``unconstrained`` mode, keywords otherwise."""

    def should_respond(
        self, msg: IncomingMessage, policy: BotPolicy, sink: TraceSink
    ) -> bool | None:
        if msg.is_command:
            return None

        if policy.mode == "unconstrained":
            self.trace(sink, msg, "unconstrained mode: non-command message passes")
            return True

        matched = self._keyword_match(msg.content, policy)
        self.trace(sink, msg, f"constrained mode: keyword match result = {matched}")
        return matched

    @staticmethod
    def _keyword_match(content: str, policy: BotPolicy) -> bool:
        cfg = policy.keyword_filter
        # Constrained bots stay silent without keywords
        if not cfg.enabled or not cfg.keywords:
            return False
        matched = any(kw in content for kw in cfg.keywords)
        return matched if cfg.mode == "blacklist" else not matched


def default_chain() -> FilterChain:
    """Build the standard filter chain."""
    return FilterChain([EnabledFilter(), SourceFilter(), CommandFilter(), ModeFilter()])


_DEFAULT_CHAIN = default_chain()


def evaluate(
    msg: IncomingMessage, policy: BotPolicy, sink: TraceSink | None = None
) -> bool:
    """Return whether the bot owning *policy* should respond to *msg*."""
    return _DEFAULT_CHAIN.should_respond(msg, policy, sink)
