"""
Tests for ups configuration loading.
"""

import pytest

from ups.config import DEFAULT_CONFIG, find_config_file, load_config
from ups.errors import ConfigError


class TestLoadConfig:
    """Tests for load_config."""

    def test_defaults_without_file(self):
        config = load_config()

        assert config["data"]["path"] is None
        assert config["refresh"]["max_workers"] is None
        assert config["refresh"]["timeout"] is None
        assert config["logging"]["level"] == "WARNING"

    def test_defaults_not_mutated(self, monkeypatch):
        monkeypatch.setenv("UPS_DATA_PATH", "/tmp/elsewhere")
        load_config()

        assert DEFAULT_CONFIG["data"]["path"] is None

    def test_explicit_file_is_merged(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("refresh:\n  max_workers: 4\n")

        config = load_config(path)

        assert config["refresh"]["max_workers"] == 4
        assert config["refresh"]["timeout"] is None
        assert config["logging"]["level"] == "WARNING"

    def test_user_config_dir(self, tmp_path):
        path = tmp_path / "xdg-config" / "ups" / "config.yaml"
        path.parent.mkdir(parents=True)
        path.write_text("logging:\n  level: DEBUG\n")

        assert find_config_file() == path
        assert load_config()["logging"]["level"] == "DEBUG"

    def test_ups_config_env(self, tmp_path, monkeypatch):
        path = tmp_path / "custom.yaml"
        path.write_text("data:\n  path: /srv/ups/data\n")
        monkeypatch.setenv("UPS_CONFIG", str(path))

        assert load_config()["data"]["path"] == "/srv/ups/data"

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("UPS_DATA_PATH", "/tmp/data")
        monkeypatch.setenv("UPS_MAX_WORKERS", "8")
        monkeypatch.setenv("UPS_TIMEOUT", "2.5")
        monkeypatch.setenv("UPS_LOG_LEVEL", "INFO")

        config = load_config()

        assert config["data"]["path"] == "/tmp/data"
        assert config["refresh"]["max_workers"] == 8
        assert config["refresh"]["timeout"] == 2.5
        assert config["logging"]["level"] == "INFO"

    @pytest.mark.parametrize("value", ["abc", "0", "-3"])
    def test_invalid_workers(self, monkeypatch, value):
        monkeypatch.setenv("UPS_MAX_WORKERS", value)

        with pytest.raises(ConfigError):
            load_config()

    @pytest.mark.parametrize("value", ["2.5", "true"])
    def test_workers_must_be_whole_number_in_env(self, monkeypatch, value):
        monkeypatch.setenv("UPS_MAX_WORKERS", value)

        with pytest.raises(ConfigError):
            load_config()

    @pytest.mark.parametrize("value", ["2.5", "true"])
    def test_workers_must_be_whole_number_in_file(self, tmp_path, value):
        path = tmp_path / "config.yaml"
        path.write_text(f"refresh:\n  max_workers: {value}\n")

        with pytest.raises(ConfigError):
            load_config(path)

    def test_integral_float_workers_accepted(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("refresh:\n  max_workers: 4.0\n")

        assert load_config(path)["refresh"]["max_workers"] == 4

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("refresh: [unclosed\n")

        with pytest.raises(ConfigError):
            load_config(path)

    def test_non_mapping_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("- just\n- a list\n")

        with pytest.raises(ConfigError):
            load_config(path)
