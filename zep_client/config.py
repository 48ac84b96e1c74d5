import json
import logging
import os
from typing import Any, Literal

import yaml
from dotenv import load_dotenv
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


load_dotenv()


logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.getzep.com/api/v2"
DEFAULT_TIMEOUT = 30.0
DEFAULT_MAX_ATTEMPTS = 2

# Root of a self-hosted server, checked by the legacy health command
DEFAULT_SERVER_URL = "http://localhost:8000"

# Points at an optional YAML or JSON file with default settings
CONFIG_FILE_ENV_VAR = "ZEP_CONFIG"


class Settings(BaseSettings):
    """Environment-driven defaults for the Zep client.

    Every field can be set with a ``ZEP_``-prefixed environment variable or
    in a ``.env`` file, e.g. ``ZEP_API_KEY`` or ``ZEP_MAX_ATTEMPTS``.
    """

    model_config = SettingsConfigDict(
        env_prefix="ZEP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    api_key: str | None = None
    api_url: str = DEFAULT_BASE_URL
    server_url: str = DEFAULT_SERVER_URL
    timeout: float = DEFAULT_TIMEOUT
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    retry_backoff: float = 0.5

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    @field_validator("api_url", "server_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("max_attempts")
    @classmethod
    def validate_max_attempts(cls, v: int) -> int:
        if v < 1:
            raise ValueError("max_attempts must be at least 1")
        return v


def load_config_file(config_path: str) -> dict[str, Any]:
    """Load settings from a YAML or JSON file.

    Returns an empty dict when the file does not exist.
    """
    if not os.path.exists(config_path):
        logger.warning(f"Config file {config_path} not found")
        return {}
    with open(config_path) as f:
        if config_path.endswith((".yaml", ".yml")):
            return yaml.safe_load(f) or {}
        # Assume JSON
        return json.load(f) or {}


def get_settings() -> Settings:
    """Build settings from the optional config file and the environment.

    Environment variables override values from the config file.
    """
    file_values: dict[str, Any] = {}
    config_file = os.getenv(CONFIG_FILE_ENV_VAR)
    if config_file:
        file_values = load_config_file(config_file)

    overrides = {
        key: value
        for key, value in file_values.items()
        if f"ZEP_{key.upper()}" not in os.environ
    }
    return Settings(**overrides)


settings = get_settings()
