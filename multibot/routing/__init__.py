"""Response filtering and channel assignment.

This package decides which of several bots sharing a channel answers a
message.  The decision for one bot is a chain of :class:`ResponseFilter`
steps; the :class:`AssignmentArbiter` combines those verdicts with the
@mention override and writes the channel's ``assignee``.

Architecture
------------
AssignmentArbiter
  ├── mention override   – a mentioned bot always wins
  └── FilterChain
        ├── EnabledFilter  – master switch
        ├── SourceFilter   – guild / user / channel / private gate
        ├── CommandFilter  – command allow/deny list
        └── ModeFilter     – unconstrained pass-through or keyword match
"""

from multibot.routing.arbiter import ArbitrationPrecedence, AssignmentArbiter, arbitrate
from multibot.routing.base import FilterChain, ResponseFilter
from multibot.routing.filters import (
    CommandFilter,
    EnabledFilter,
    ModeFilter,
    SourceFilter,
    default_chain,
    evaluate,
)
from multibot.routing.mentions import extract_mention_targets, mentioned_identities
from multibot.routing.trace import LoguruTraceSink, NullTraceSink, TraceEvent, TraceSink

__all__ = [
    "ArbitrationPrecedence",
    "AssignmentArbiter",
    "arbitrate",
    "FilterChain",
    "ResponseFilter",
    "CommandFilter",
    "EnabledFilter",
    "ModeFilter",
    "SourceFilter",
    "default_chain",
    "evaluate",
    "extract_mention_targets",
    "mentioned_identities",
    "LoguruTraceSink",
    "NullTraceSink",
    "TraceEvent",
    "TraceSink",
]
