"""
Startup configuration loader with YAML parsing and environment overrides
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import StartupConfigError


logger = logging.getLogger(__name__)

ENV_AUTO_INITIALIZE = "STARTUP_AUTO_INITIALIZE"
ENV_LOG_LEVEL = "STARTUP_LOG_LEVEL"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class StartupConfig(BaseModel):
    """Settings for a startup host"""

    model_config = ConfigDict(extra="forbid")

    auto_initialize: bool = True
    steps: list[str] = Field(
        default_factory=list,
        description="Ordered step descriptors: registered ids or import paths",
    )
    log_level: LogLevel = "INFO"


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise StartupConfigError(f"{name} must be a boolean, got {value!r}")


def apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    """
    Overlay environment variables onto raw config data.

    Precedence: env > config file > model defaults.
    """
    data = dict(data)

    auto_init = os.getenv(ENV_AUTO_INITIALIZE)
    if auto_init:
        data["auto_initialize"] = _parse_bool(ENV_AUTO_INITIALIZE, auto_init)

    log_level = os.getenv(ENV_LOG_LEVEL)
    if log_level:
        data["log_level"] = log_level.strip().upper()

    return data


def load_config(path: str | Path | None = None) -> StartupConfig:
    """
    Load and validate a startup config file

    Args:
        path: Path to a YAML file. None builds the config from defaults and
            environment variables only.

    Returns:
        Validated StartupConfig

    Raises:
        StartupConfigError: If reading, parsing or validation fails
    """
    data: Any = {}

    if path is not None:
        path = Path(path)
        if not path.exists():
            raise StartupConfigError(f"Config file not found: {path}")

        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise StartupConfigError(f"YAML parsing failed: {e}") from e
        except OSError as e:
            raise StartupConfigError(f"Failed to read file: {e}") from e

        if not isinstance(data, dict):
            raise StartupConfigError(
                f"Config root must be a mapping, got {type(data).__name__}: {path}",
            )

    data = apply_env_overrides(data)

    try:
        config = StartupConfig(**data)
    except ValidationError as e:
        raise StartupConfigError(f"Config validation failed: {e}") from e

    logger.debug(
        "Loaded startup config: auto_initialize=%s, %d steps",
        config.auto_initialize,
        len(config.steps),
    )
    return config
