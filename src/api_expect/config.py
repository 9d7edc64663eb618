"""Configuration for loading a description into the registry.

Rules:
- Primary source: a YAML file (``api_expect.yml`` in the working directory by default).
- Overrides: ``API_EXPECT_*`` environment variables.
- Validation: pydantic enforces required fields and value constraints.
"""

import logging
import os
from pathlib import Path

import yaml
from pydantic import BaseModel, ValidationError, field_validator

from api_expect.errors import ConfigError

DEFAULT_CONFIG_FILE = Path("api_expect.yml")
ENV_PREFIX = "API_EXPECT_"

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}
_TRUTHY = {"1", "true", "yes", "on"}


class Config(BaseModel):
    source_file: Path
    collect_missing_examples: bool = False
    log_level: str = "WARNING"

    @field_validator("log_level")
    @classmethod
    def log_level_must_be_known(cls, v: str) -> str:
        level = v.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {sorted(_LOG_LEVELS)}")
        return level

    @property
    def log_level_value(self) -> int:
        return logging.getLevelName(self.log_level)


def load_config(path: Path | None = None, **overrides) -> Config:
    """Load configuration from ``path`` (or the default file).

    Environment variables override the file, and keyword ``overrides``
    (e.g. from the command line) override both. ``None`` values are ignored.
    """
    data: dict = {}
    config_path = Path(path) if path is not None else DEFAULT_CONFIG_FILE

    if path is not None or config_path.exists():
        data = _read_config_file(config_path)

    data.update(_env_overrides())
    data.update({k: v for k, v in overrides.items() if v is not None})

    if "source_file" not in data:
        raise ConfigError(f"source_file is not set (config file or {ENV_PREFIX}SOURCE_FILE)")

    try:
        return Config(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e


def _read_config_file(config_path: Path) -> dict:
    try:
        data = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError(f"Cannot read config {config_path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Config {config_path} is not valid YAML: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config {config_path} must contain a mapping")

    # source_file in a config file is relative to that file
    source = data.get("source_file")
    if isinstance(source, str) and not Path(source).is_absolute():
        data["source_file"] = config_path.parent / source
    return data


def _env_overrides() -> dict:
    overrides: dict = {}
    source = os.environ.get(f"{ENV_PREFIX}SOURCE_FILE")
    if source:
        overrides["source_file"] = Path(source)
    collect = os.environ.get(f"{ENV_PREFIX}COLLECT_MISSING_EXAMPLES")
    if collect is not None:
        overrides["collect_missing_examples"] = collect.strip().lower() in _TRUTHY
    level = os.environ.get(f"{ENV_PREFIX}LOG_LEVEL")
    if level:
        overrides["log_level"] = level
    return overrides
