"""Tests for wiz.config.load_config: defaults, YAML layering, environment overrides."""

import pytest

from wiz.config import CONFIG_PATH, DEFAULTS, load_config


class TestLoadConfig:
    def test_bundled_file_has_every_key(self):
        config = load_config(CONFIG_PATH)
        assert set(DEFAULTS) <= set(config)

    def test_missing_file_gives_defaults(self, tmp_path, monkeypatch):
        monkeypatch.delenv("WIZ_SERVICE_URL", raising=False)
        monkeypatch.delenv("WIZ_LOG_LEVEL", raising=False)
        assert load_config(tmp_path / "absent.yaml") == DEFAULTS

    def test_yaml_overrides_defaults(self, tmp_path, monkeypatch):
        monkeypatch.delenv("WIZ_SERVICE_URL", raising=False)
        path = tmp_path / "config.yaml"
        path.write_text("request_timeout: 5\nlegacy_model: gemini-test\n", encoding="utf-8")

        config = load_config(path)

        assert config["request_timeout"] == 5
        assert config["legacy_model"] == "gemini-test"
        assert config["service_base_url"] == DEFAULTS["service_base_url"]

    def test_empty_file_gives_defaults(self, tmp_path, monkeypatch):
        monkeypatch.delenv("WIZ_LOG_LEVEL", raising=False)
        path = tmp_path / "config.yaml"
        path.write_text("", encoding="utf-8")
        assert load_config(path)["log_level"] == "WARNING"

    def test_environment_overrides_file(self, tmp_path, monkeypatch):
        path = tmp_path / "config.yaml"
        path.write_text("service_base_url: http://from-file.test\n", encoding="utf-8")
        monkeypatch.setenv("WIZ_SERVICE_URL", "http://from-env.test")
        monkeypatch.setenv("WIZ_LOG_LEVEL", "DEBUG")

        config = load_config(path)

        assert config["service_base_url"] == "http://from-env.test"
        assert config["log_level"] == "DEBUG"

    def test_non_mapping_rejected(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("- just\n- a list\n", encoding="utf-8")
        with pytest.raises(ValueError, match="mapping"):
            load_config(path)
