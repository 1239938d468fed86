"""
Tests for the Config loader

These tests verify:
1. Config can be instantiated with test data (dependency injection)
2. Config.get() works with dot notation
3. The shipped YAML defaults load from disk
"""

from typing import Any

import pytest

from requester.config import Config, ConfigurationError, config


class TestConfigDependencyInjection:
    """Test that Config supports dependency injection for testing"""

    def test_config_with_test_dict(self):
        """Should accept config dictionary for testing"""
        test_config = Config({"http": {"timeout_seconds": 5}})

        assert test_config.get("http.timeout_seconds") == 5

    def test_config_get_returns_default_when_not_found(self):
        """Should return default value for missing keys"""
        test_config = Config({"existing": {"key": "value"}})

        assert test_config.get("non.existent.key", "default") == "default"
        assert test_config.get("existing.missing", 42) == 42
        assert test_config.get("missing") is None

    def test_config_get_handles_non_dict_values(self):
        """Should return default if path goes through non-dict value"""
        test_config = Config({"string_value": "just a string", "number": 42})

        assert test_config.get("string_value.key", "default") == "default"
        assert test_config.get("number.nested", "default") == "default"

    def test_config_property_accessors(self):
        test_config = Config({"http": {"key": "http_value"}, "context": {"key": "ctx_value"}})

        assert test_config.http == {"key": "http_value"}
        assert test_config.context == {"key": "ctx_value"}

    def test_config_property_returns_empty_dict_when_missing(self):
        test_config: dict[str, Any] = {}
        cfg = Config(test_config)

        assert cfg.http == {}
        assert cfg.context == {}


class TestGetRequired:
    """Test required configuration lookups"""

    def test_get_required_returns_value(self):
        cfg = Config({"http": {"timeout_seconds": 60}})

        assert cfg.get_required("http.timeout_seconds") == 60

    def test_get_required_raises_for_missing_key(self):
        cfg = Config({})

        with pytest.raises(ConfigurationError) as exc_info:
            cfg.get_required("http.timeout_seconds")

        assert exc_info.value.config_key == "http.timeout_seconds"


class TestConfigFiles:
    """Test loading the YAML files shipped with the package"""

    def test_default_timeout_is_sixty_seconds(self):
        assert config.get("http.timeout_seconds") == 60

    def test_default_poll_interval(self):
        assert config.get("context.poll_interval_seconds") == 0.05

    def test_load_from_custom_directory(self, tmp_path):
        (tmp_path / "http_config.yaml").write_text("timeout_seconds: 7\n", encoding="utf-8")

        cfg = Config(config_dir=tmp_path)

        assert cfg.get("http.timeout_seconds") == 7
        # Missing files load as empty sections
        assert cfg.context == {}

    def test_non_dict_file_raises(self, tmp_path):
        (tmp_path / "http_config.yaml").write_text("- just\n- a list\n", encoding="utf-8")

        with pytest.raises(ConfigurationError, match="http_config.yaml"):
            Config(config_dir=tmp_path)

    def test_reload_picks_up_changes(self, tmp_path):
        config_file = tmp_path / "http_config.yaml"
        config_file.write_text("timeout_seconds: 1\n", encoding="utf-8")
        cfg = Config(config_dir=tmp_path)

        config_file.write_text("timeout_seconds: 2\n", encoding="utf-8")
        cfg.reload()

        assert cfg.get("http.timeout_seconds") == 2
