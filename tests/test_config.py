"""
Tests for environment and file based settings.
"""

import json

import pytest
from pydantic import ValidationError

from zep_client.config import (
    DEFAULT_BASE_URL,
    DEFAULT_SERVER_URL,
    Settings,
    get_settings,
    load_config_file,
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "ZEP_API_KEY",
        "ZEP_API_URL",
        "ZEP_SERVER_URL",
        "ZEP_TIMEOUT",
        "ZEP_MAX_ATTEMPTS",
        "ZEP_LOG_LEVEL",
        "ZEP_CONFIG",
    ):
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    settings = Settings(_env_file=None)

    assert settings.api_key is None
    assert settings.api_url == DEFAULT_BASE_URL
    assert settings.server_url == DEFAULT_SERVER_URL
    assert settings.timeout == 30.0
    assert settings.max_attempts == 2
    assert settings.log_level == "INFO"


def test_environment_variables(monkeypatch):
    monkeypatch.setenv("ZEP_API_KEY", "env-key")
    monkeypatch.setenv("ZEP_API_URL", "http://localhost:8000/api/v2/")
    monkeypatch.setenv("ZEP_MAX_ATTEMPTS", "5")

    settings = Settings(_env_file=None)

    assert settings.api_key == "env-key"
    assert settings.api_url == "http://localhost:8000/api/v2"
    assert settings.max_attempts == 5


def test_rejects_zero_attempts(monkeypatch):
    monkeypatch.setenv("ZEP_MAX_ATTEMPTS", "0")

    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_load_yaml_config_file(tmp_path):
    path = tmp_path / "zep.yaml"
    path.write_text("api_key: file-key\ntimeout: 12.5\n")

    assert load_config_file(str(path)) == {"api_key": "file-key", "timeout": 12.5}


def test_load_json_config_file(tmp_path):
    path = tmp_path / "zep.json"
    path.write_text(json.dumps({"max_attempts": 3}))

    assert load_config_file(str(path)) == {"max_attempts": 3}


def test_missing_config_file(tmp_path):
    assert load_config_file(str(tmp_path / "missing.yaml")) == {}


def test_get_settings_environment_overrides_file(tmp_path, monkeypatch):
    path = tmp_path / "zep.yml"
    path.write_text("api_key: file-key\napi_url: http://file.test/api/v2\n")
    monkeypatch.setenv("ZEP_CONFIG", str(path))
    monkeypatch.setenv("ZEP_API_KEY", "env-key")

    settings = get_settings()

    assert settings.api_key == "env-key"
    assert settings.api_url == "http://file.test/api/v2"


def test_server_url_is_separate_from_api_url(monkeypatch):
    monkeypatch.setenv("ZEP_SERVER_URL", "http://self-hosted:8000/")

    settings = Settings(_env_file=None)

    assert settings.server_url == "http://self-hosted:8000"
    assert settings.api_url == DEFAULT_BASE_URL
