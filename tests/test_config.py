"""Tests for configuration schema and loading."""

import json

import pytest
from pydantic import ValidationError

from multibot.config.loader import (
    _migrate_config,
    camel_to_snake,
    convert_keys,
    load_config,
    save_config,
    snake_to_camel,
)
from multibot.config.schema import (
    BotPolicy,
    ChannelRule,
    ControllerConfig,
    GuildRule,
    PrivateRule,
    UserRule,
)


class TestSchema:
    def test_policy_defaults(self):
        policy = BotPolicy(platform="qq", self_id="1", mode="constrained")
        assert policy.enabled is True
        assert policy.source_filter.enabled is False
        assert policy.source_filter.mode == "whitelist"
        assert policy.command_filter.mode == "blacklist"
        assert policy.keyword_filter.mode == "blacklist"
        assert policy.key == "qq:1"

    def test_mode_is_required(self):
        with pytest.raises(ValidationError):
            BotPolicy(platform="qq", self_id="1")

    def test_unknown_mode_rejected(self):
        with pytest.raises(ValidationError):
            BotPolicy(platform="qq", self_id="1", mode="chatty")

    def test_source_rules_are_discriminated(self):
        policy = BotPolicy.model_validate({
            "platform": "qq",
            "self_id": "1",
            "mode": "unconstrained",
            "source_filter": {
                "enabled": True,
                "rules": [
                    {"type": "guild", "value": "g"},
                    {"type": "user", "value": "u"},
                    {"type": "channel", "value": "c"},
                    {"type": "private", "value": False},
                ],
            },
        })
        kinds = [type(rule) for rule in policy.source_filter.rules]
        assert kinds == [GuildRule, UserRule, ChannelRule, PrivateRule]
        assert policy.source_filter.rules[3].value is False

    def test_unknown_rule_type_rejected(self):
        with pytest.raises(ValidationError):
            BotPolicy.model_validate({
                "platform": "qq",
                "self_id": "1",
                "mode": "unconstrained",
                "source_filter": {"rules": [{"type": "planet", "value": "mars"}]},
            })

    def test_controller_defaults(self):
        config = ControllerConfig()
        assert config.bots == []
        assert config.debug is False


class TestKeyConversion:
    def test_camel_snake_roundtrip(self):
        assert camel_to_snake("selfId") == "self_id"
        assert camel_to_snake("commandFilter") == "command_filter"
        assert snake_to_camel("keyword_filter") == "keywordFilter"

    def test_convert_keys_nested(self):
        data = {"bots": [{"selfId": "1", "sourceFilter": {"rules": [{"type": "guild"}]}}]}
        assert convert_keys(data) == {
            "bots": [{"self_id": "1", "source_filter": {"rules": [{"type": "guild"}]}}]
        }


class TestMigration:
    def test_flat_fields_move_into_sections(self):
        data = {
            "bots": [{
                "platform": "onebot",
                "selfId": "1",
                "mode": "constrained",
                "enableCommandFilter": True,
                "commands": ["ping"],
                "commandFilterMode": "whitelist",
                "enableKeywordFilter": True,
                "keywords": ["help"],
                "keywordFilterMode": "blacklist",
                "enableSourceFilter": True,
                "sourceFilters": [{"type": "private", "value": True}],
                "sourceFilterMode": "blacklist",
            }]
        }
        bot = _migrate_config(data)["bots"][0]
        assert bot["commandFilter"] == {"enabled": True, "names": ["ping"], "mode": "whitelist"}
        assert bot["keywordFilter"] == {"enabled": True, "keywords": ["help"], "mode": "blacklist"}
        assert bot["sourceFilter"]["rules"] == [{"type": "private", "value": True}]
        assert "commands" not in bot

    def test_nested_values_take_priority(self):
        data = {"bots": [{"commands": ["old"], "commandFilter": {"names": ["new"]}}]}
        bot = _migrate_config(data)["bots"][0]
        assert bot["commandFilter"]["names"] == ["new"]

    def test_non_dict_input_untouched(self):
        assert _migrate_config([1, 2]) == [1, 2]


class TestLoadSave:
    def test_missing_file_gives_defaults(self, tmp_path):
        config = load_config(tmp_path / "nope.json")
        assert config == ControllerConfig()

    def test_invalid_json_falls_back(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{not json", encoding="utf-8")
        assert load_config(path).bots == []

    def test_schema_error_falls_back(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"bots": [{"platform": "qq"}]}), encoding="utf-8")
        assert load_config(path).bots == []

    def test_top_level_array_falls_back(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps([{"platform": "qq"}]), encoding="utf-8")
        assert load_config(path) == ControllerConfig()

    def test_non_list_bots_falls_back(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"bots": 5}), encoding="utf-8")
        assert load_config(path) == ControllerConfig()

    def test_null_section_with_legacy_key(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({
            "bots": [{
                "platform": "onebot",
                "selfId": "1",
                "mode": "constrained",
                "keywords": ["help"],
                "keywordFilter": None,
            }],
        }), encoding="utf-8")
        bot = load_config(path).bots[0]
        assert bot.keyword_filter.keywords == ["help"]

    def test_load_legacy_camel_case(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({
            "debug": True,
            "bots": [{
                "platform": "onebot",
                "selfId": "42",
                "mode": "constrained",
                "enableKeywordFilter": True,
                "keywords": ["weather"],
            }],
        }), encoding="utf-8")
        config = load_config(path)
        assert config.debug is True
        bot = config.bots[0]
        assert bot.self_id == "42"
        assert bot.keyword_filter.enabled is True
        assert bot.keyword_filter.keywords == ["weather"]

    def test_save_then_load(self, tmp_path):
        path = tmp_path / "nested" / "config.json"
        config = ControllerConfig(bots=[
            BotPolicy(
                platform="qq",
                self_id="7",
                mode="unconstrained",
                source_filter={"enabled": True, "rules": [{"type": "guild", "value": "g1"}]},
            )
        ])
        save_config(config, path)
        raw = json.loads(path.read_text(encoding="utf-8"))
        assert raw["bots"][0]["selfId"] == "7"
        assert "sourceFilter" in raw["bots"][0]
        assert load_config(path) == config
