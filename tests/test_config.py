"""Tests for ReflectConfig."""

import logging

import pytest

from reflectkit.config import ReflectConfig


class TestReflectConfig:
    """Tests for config resolution."""

    def test_defaults(self):
        config = ReflectConfig()
        assert not config.include_private
        assert not config.include_inherited
        assert config.log_level == "WARNING"
        assert config.level == logging.WARNING

    def test_from_env(self):
        env = {
            "REFLECTKIT_PRIVATE": "yes",
            "REFLECTKIT_INHERITED": "0",
            "REFLECTKIT_LOG_LEVEL": "debug",
            "REFLECTKIT_PRELOAD": "json, csv,,",
            "NO_COLOR": "",
        }
        config = ReflectConfig.from_env(env)
        assert config.include_private
        assert not config.include_inherited
        assert config.log_level == "DEBUG"
        assert config.preload == ("json", "csv")
        assert config.no_color

    def test_empty_env(self):
        assert ReflectConfig.from_env({}) == ReflectConfig()

    def test_overrides_skip_none(self):
        config = ReflectConfig(include_private=True).with_overrides(
            include_private=None,
            include_inherited=True,
        )
        assert config.include_private
        assert config.include_inherited

    def test_invalid_log_level(self):
        with pytest.raises(ValueError, match="LOUD"):
            ReflectConfig(log_level="LOUD")
