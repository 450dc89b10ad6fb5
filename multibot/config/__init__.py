"""Configuration module for multibot."""

from multibot.config.loader import (
    load_config,
    save_config,
    get_config_path,
    get_multibot_home,
)
from multibot.config.schema import (
    BotPolicy,
    ChannelRule,
    CommandFilterConfig,
    ControllerConfig,
    GuildRule,
    KeywordFilterConfig,
    PrivateRule,
    SourceFilterConfig,
    UserRule,
)

__all__ = [
    "BotPolicy",
    "ChannelRule",
    "CommandFilterConfig",
    "ControllerConfig",
    "GuildRule",
    "KeywordFilterConfig",
    "PrivateRule",
    "SourceFilterConfig",
    "UserRule",
    "load_config",
    "save_config",
    "get_config_path",
    "get_multibot_home",
]
