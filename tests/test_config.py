"""Tests for configuration loading."""

import pytest

from spapi_mcp.config import DEFAULT_CONFIG_PATH, default_config, load_config


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv("SP_API_CONFIG_PATH", raising=False)
    monkeypatch.delenv("SP_API_LOG_LEVEL", raising=False)


class TestLoadConfig:

    def test_defaults(self):
        config = default_config()
        assert config["token_endpoint"] == "https://api.amazon.com/auth/o2/token"
        assert config["request_timeout_seconds"] == 30
        assert config["token_expiry_margin_seconds"] == 300
        assert config["user_agent"].startswith("SP-API-Dev-MCP/")

    def test_default_config_is_a_copy(self):
        default_config()["regions"]["na"] = "changed"
        assert default_config()["regions"]["na"] != "changed"

    def test_shipped_yaml_loads(self):
        assert DEFAULT_CONFIG_PATH.exists()
        config = load_config(DEFAULT_CONFIG_PATH)
        assert config["regions"]["eu"] == "https://sellingpartnerapi-eu.amazon.com"

    def test_missing_file_falls_back(self, tmp_path):
        assert load_config(tmp_path / "absent.yaml") == default_config()

    def test_malformed_file_falls_back(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("sp_api: [unclosed\n", encoding="utf-8")
        assert load_config(path) == default_config()

    def test_missing_section_falls_back(self, tmp_path):
        path = tmp_path / "other.yaml"
        path.write_text("something_else:\n  a: 1\n", encoding="utf-8")
        assert load_config(path) == default_config()

    def test_yaml_overrides(self, tmp_path):
        path = tmp_path / "custom.yaml"
        path.write_text(
            "sp_api:\n"
            "  request_timeout_seconds: 10\n"
            "  regions:\n"
            "    SANDBOX: https://sandbox.sellingpartnerapi-na.amazon.com\n",
            encoding="utf-8",
        )
        config = load_config(path)
        assert config["request_timeout_seconds"] == 10
        assert config["regions"]["sandbox"] == "https://sandbox.sellingpartnerapi-na.amazon.com"
        assert config["regions"]["na"] == "https://sellingpartnerapi-na.amazon.com"

    def test_env_path_and_log_level(self, tmp_path, monkeypatch):
        path = tmp_path / "env.yaml"
        path.write_text("sp_api:\n  default_marketplace_id: A1F83G8C2ARO7P\n", encoding="utf-8")
        monkeypatch.setenv("SP_API_CONFIG_PATH", str(path))
        monkeypatch.setenv("SP_API_LOG_LEVEL", "debug")
        config = load_config()
        assert config["default_marketplace_id"] == "A1F83G8C2ARO7P"
        assert config["log_level"] == "DEBUG"
