"""Configuration loading utilities."""

import json
from pathlib import Path
from typing import Any

from loguru import logger

from multibot.config.schema import ControllerConfig


def get_multibot_home() -> Path:
    """Get the multibot home directory (~/.multibot)."""
    return Path.home() / ".multibot"


def get_config_path() -> Path:
    """Get the default configuration file path."""
    return get_multibot_home() / "config.json"


def load_config(config_path: Path | None = None) -> ControllerConfig:
    """
    Load configuration from file or create default.

    Args:
        config_path: Optional explicit path to config file.

    Returns:
        Loaded configuration object. Falls back to defaults (no bots) when
        the file is missing or unreadable.
    """
    path = config_path or get_config_path()

    if path.exists():
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
            data = _migrate_config(data)
            return ControllerConfig.model_validate(convert_keys(data))
        except (json.JSONDecodeError, ValueError) as e:
            logger.warning(f"Failed to load config from {path}: {e}")
            logger.warning("Using default configuration.")

    return ControllerConfig()


def save_config(config: ControllerConfig, config_path: Path | None = None) -> None:
    """
    Save configuration to file.

    Args:
        config: Configuration to save.
        config_path: Optional explicit path. Uses the default path if not provided.
    """
    path = config_path or get_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)

    # Convert to camelCase format
    data = config.model_dump()
    data = convert_to_camel(data)

    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)


# ---------------------------------------------------------------------------
# Config data migration (schema changes)
# ---------------------------------------------------------------------------

# Flat per-bot keys → (nested section, key inside section)
_LEGACY_BOT_KEYS: dict[str, tuple[str, str]] = {
    "enableSourceFilter": ("sourceFilter", "enabled"),
    "sourceFilters": ("sourceFilter", "rules"),
    "sourceFilterMode": ("sourceFilter", "mode"),
    "enableCommandFilter": ("commandFilter", "enabled"),
    "commands": ("commandFilter", "names"),
    "commandFilterMode": ("commandFilter", "mode"),
    "enableKeywordFilter": ("keywordFilter", "enabled"),
    "keywords": ("keywordFilter", "keywords"),
    "keywordFilterMode": ("keywordFilter", "mode"),
}


def _migrate_config(data: Any) -> Any:
    """Migrate old config formats to current."""
    if not isinstance(data, dict):
        return data  # Schema validation reports the bad shape
    bots = data.get("bots")
    if not isinstance(bots, list):
        return data
    # Move flat bot fields (enableCommandFilter, commands, ...) into sections
    for bot in bots:
        if not isinstance(bot, dict):
            continue
        for old_key, (section, new_key) in _LEGACY_BOT_KEYS.items():
            if old_key not in bot:
                continue
            value = bot.pop(old_key)
            target = bot.get(section)
            if not isinstance(target, dict):
                target = bot[section] = {}
            if new_key not in target and value is not None:
                target[new_key] = value
    return data


# ---------------------------------------------------------------------------
# Key conversion helpers
# ---------------------------------------------------------------------------


def convert_keys(data: Any) -> Any:
    """Convert camelCase keys to snake_case for Pydantic."""
    if isinstance(data, dict):
        return {camel_to_snake(k): convert_keys(v) for k, v in data.items()}
    if isinstance(data, list):
        return [convert_keys(item) for item in data]
    return data


def convert_to_camel(data: Any) -> Any:
    """Convert snake_case keys to camelCase."""
    if isinstance(data, dict):
        return {snake_to_camel(k): convert_to_camel(v) for k, v in data.items()}
    if isinstance(data, list):
        return [convert_to_camel(item) for item in data]
    return data


def camel_to_snake(name: str) -> str:
    """Convert camelCase to snake_case."""
    result = []
    for i, char in enumerate(name):
        if char.isupper() and i > 0:
            result.append("_")
        result.append(char.lower())
    return "".join(result)


def snake_to_camel(name: str) -> str:
    """Convert snake_case to camelCase."""
    components = name.split("_")
    return components[0] + "".join(x.title() for x in components[1:])
