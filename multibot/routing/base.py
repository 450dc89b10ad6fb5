"""Base classes for response filtering.

See :mod:`multibot.routing` package docstring for the overall
architecture.
"""

from __future__ import annotations

import abc
from typing import Iterable

from multibot.bus.events import IncomingMessage
from multibot.config.schema import BotPolicy
from multibot.routing.trace import NullTraceSink, TraceEvent, TraceSink


# -----------------------------------------------------------------------
# ResponseFilter
# -----------------------------------------------------------------------

class ResponseFilter(abc.ABC):
    """Base class for one step of the response decision.

    Filters are stateless; everything they need comes from the message and
    the bot's policy.  Each decision point should be reported through
    :meth:`trace` so operators can follow the reasoning in debug mode.
    """

    @abc.abstractmethod
    def should_respond(
        self, msg: IncomingMessage, policy: BotPolicy, sink: TraceSink
    ) -> bool | None:
        """Decide whether the bot should respond.

        Returns
        -------
        bool | None
            * ``True``  – the bot **should** respond.
            * ``False`` – the bot should **skip** this message.
            * ``None``  – this filter has no opinion; defer to the next one.
        """
        ...

    @staticmethod
    def trace(sink: TraceSink, msg: IncomingMessage, reason: str) -> None:
        sink.record(TraceEvent.for_message(msg, reason))


# -----------------------------------------------------------------------
# FilterChain
# -----------------------------------------------------------------------

class FilterChain:
    """Chains :class:`ResponseFilter` instances to reach a respond/skip decision.

    Filters are evaluated **in order**.  The first filter that returns a
    definitive ``True`` or ``False`` wins.  If every filter returns ``None``
    the chain defaults to **respond** (``True``).
    """

    def __init__(self, filters: Iterable[ResponseFilter] = ()) -> None:
        self._filters: list[ResponseFilter] = list(filters)

    def add_filter(self, f: ResponseFilter) -> None:
        """Append a filter to the chain."""
        self._filters.append(f)

    @property
    def filters(self) -> list[ResponseFilter]:
        return list(self._filters)

    def should_respond(
        self,
        msg: IncomingMessage,
        policy: BotPolicy,
        sink: TraceSink | None = None,
    ) -> bool:
        sink = sink or NullTraceSink()
        for f in self._filters:
            result = f.should_respond(msg, policy, sink)
            if result is not None:
                return result
        return True  # default: respond
