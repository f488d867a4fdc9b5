"""Tests for configuration loading."""

import json

import pytest

from contactcore.config import ConfigManager, EngineConfig
from contactcore.error_handling import ConfigurationError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in list(ConfigManager.ENV_OVERRIDES) + ["CONTACTCORE_LOG_LEVEL"]:
        monkeypatch.delenv(key, raising=False)


class TestConfigManager:
    """Test suite for ConfigManager."""

    def test_defaults(self):
        config = ConfigManager().load()

        assert isinstance(config, EngineConfig)
        assert config.deduplication.threshold == 0.8
        assert config.network.min_edge_strength == 1.0
        assert config.network.influencer_min_strength == 3.0
        assert (config.layout.width, config.layout.height) == (800, 600)
        assert config.layout.iterations == 100

    def test_file_is_deep_merged(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"deduplication": {"threshold": 0.9}, "layout": {"width": 1024}}))

        config = ConfigManager(str(path)).load()

        assert config.deduplication.threshold == 0.9
        assert config.layout.width == 1024
        assert config.layout.height == 600

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("CONTACTCORE_DUPLICATE_THRESHOLD", "0.65")
        monkeypatch.setenv("CONTACTCORE_LAYOUT_ITERATIONS", "25")
        monkeypatch.setenv("CONTACTCORE_LOG_LEVEL", "debug")

        config = ConfigManager().load()

        assert config.deduplication.threshold == 0.65
        assert config.layout.iterations == 25
        assert config.log_level == "DEBUG"

    def test_env_beats_file(self, tmp_path, monkeypatch):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"network": {"min_edge_strength": 2}}))
        monkeypatch.setenv("CONTACTCORE_MIN_EDGE_STRENGTH", "4")

        assert ConfigManager(str(path)).load().network.min_edge_strength == 4

    def test_config_is_cached(self):
        manager = ConfigManager()
        assert manager.config is manager.load()

    @pytest.mark.parametrize("threshold", [0, 1.2, -1])
    def test_invalid_threshold(self, tmp_path, threshold):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"deduplication": {"threshold": threshold}}))

        with pytest.raises(ConfigurationError) as exc_info:
            ConfigManager(str(path)).load()
        assert exc_info.value.config_key == "deduplication.threshold"

    def test_invalid_canvas(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"layout": {"width": 20}}))

        with pytest.raises(ConfigurationError):
            ConfigManager(str(path)).load()

    def test_non_numeric_env(self, monkeypatch):
        monkeypatch.setenv("CONTACTCORE_LAYOUT_WIDTH", "wide")

        with pytest.raises(ConfigurationError) as exc_info:
            ConfigManager().load()
        assert exc_info.value.config_key == "CONTACTCORE_LAYOUT_WIDTH"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError):
            ConfigManager(str(tmp_path / "nope.json")).load()

    def test_malformed_file(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{not json")

        with pytest.raises(ConfigurationError):
            ConfigManager(str(path)).load()

    def test_file_must_hold_an_object(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("[1, 2]")

        with pytest.raises(ConfigurationError) as exc_info:
            ConfigManager(str(path)).load()
        assert exc_info.value.config_key == "config_path"

    def test_unreadable_file(self, tmp_path):
        with pytest.raises(ConfigurationError):
            ConfigManager(str(tmp_path)).load()

        path = tmp_path / "config.json"
        path.write_bytes(b'{"log_level": "\xff\xfe"}')
        with pytest.raises(ConfigurationError):
            ConfigManager(str(path)).load()

    def test_save_template(self, tmp_path):
        path = tmp_path / "template.json"

        ConfigManager().save_template(str(path))

        assert json.loads(path.read_text()) == ConfigManager.DEFAULT_CONFIG
        assert ConfigManager(str(path)).load() == EngineConfig()
