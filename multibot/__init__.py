"""
multibot - decide which bot answers when several share one channel
"""

__version__ = "0.1.0"

from multibot.bus.events import BotIdentity, ChannelRecord, IncomingMessage
from multibot.config.schema import BotPolicy, ControllerConfig
from multibot.controller import MultiBotController
from multibot.manager import PolicyRegistry
from multibot.routing import ArbitrationPrecedence, AssignmentArbiter, arbitrate, evaluate

__all__ = [
    "BotIdentity",
    "ChannelRecord",
    "IncomingMessage",
    "BotPolicy",
    "ControllerConfig",
    "MultiBotController",
    "PolicyRegistry",
    "ArbitrationPrecedence",
    "AssignmentArbiter",
    "arbitrate",
    "evaluate",
]
