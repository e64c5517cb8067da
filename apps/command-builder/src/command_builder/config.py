"""Application configuration: config.json plus environment overrides."""

from __future__ import annotations

import json
import os
from pathlib import Path

from pydantic import BaseModel, ValidationError, field_validator

from .constants import (
    DEFAULT_REGISTRY_TIMEOUT_SEC,
    DEFAULT_REGISTRY_URL,
    ENV_LOG_FILE,
    ENV_REGISTRY_TIMEOUT_SEC,
    ENV_REGISTRY_URL,
)
from .errors import ConfigError

_ENV_OVERRIDES = {
    "registry_url": ENV_REGISTRY_URL,
    "registry_timeout_sec": ENV_REGISTRY_TIMEOUT_SEC,
    "log_file": ENV_LOG_FILE,
}


class AppConfig(BaseModel):
    registry_url: str = DEFAULT_REGISTRY_URL
    registry_timeout_sec: float = DEFAULT_REGISTRY_TIMEOUT_SEC
    log_file: str | None = None

    @field_validator("registry_url")
    @classmethod
    def _require_http_url(cls, value: str) -> str:
        value = value.strip()
        if not value.startswith(("http://", "https://")):
            raise ValueError("registry_url must be an http(s) URL")
        return value

    @field_validator("registry_timeout_sec")
    @classmethod
    def _require_positive_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("registry_timeout_sec must be greater than 0")
        return value

    @field_validator("log_file")
    @classmethod
    def _expand_log_file(cls, value: str | None) -> str | None:
        if value is None or not value.strip():
            return None
        return str(Path(value.strip()).expanduser())


def load_config(path: Path, environ: dict[str, str] | None = None) -> AppConfig:
    """Load config from JSON (optional) and apply CB_* environment overrides."""
    env = os.environ if environ is None else environ
    data: dict[str, object] = {}

    if path.exists():
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise ConfigError(f"Invalid JSON in config file: {path}: {exc}") from exc
        except OSError as exc:
            raise ConfigError(f"Failed to read config file: {path}: {exc}") from exc
        if not isinstance(payload, dict):
            raise ConfigError(f"Config file must contain a JSON object: {path}")
        data.update(payload)

    for field_name, env_key in _ENV_OVERRIDES.items():
        raw = env.get(env_key)
        if raw is not None and raw.strip():
            data[field_name] = raw.strip()

    try:
        return AppConfig.model_validate(data)
    except ValidationError as exc:
        first = exc.errors()[0]
        location = ".".join(str(part) for part in first.get("loc", ()))
        raise ConfigError(f"Invalid config value for '{location}': {first.get('msg')}") from exc
