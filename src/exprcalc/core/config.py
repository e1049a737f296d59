"""
Calculator configuration.

Parses the [exprcalc] section of exprcalc.toml into a typed model.
"""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from exprcalc.core.errors import ConfigError

DEFAULT_CONFIG_FILE = "exprcalc.toml"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class CalcConfig(BaseModel):
    """Complete calculator configuration."""

    model_config = ConfigDict(extra="forbid")

    strict: bool = False
    log_level: str = "WARNING"
    echo_tree: bool = False

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        return level

    @property
    def log_level_value(self) -> int:
        return logging.getLevelNamesMapping()[self.log_level]


def load_config(path: Path | None = None) -> CalcConfig:
    """
    Load configuration from a TOML file.

    Args:
        path: Explicit config file. When None, exprcalc.toml in the
            current directory is used if it exists.

    Returns:
        Parsed configuration, or defaults when no file applies.

    Raises:
        ConfigError: If an explicit file is missing, or a file cannot be
            parsed or validated.
    """
    if path is None:
        candidate = Path.cwd() / DEFAULT_CONFIG_FILE
        if not candidate.exists():
            return CalcConfig()
        path = candidate
    elif not path.exists():
        raise ConfigError(f"Config file not found: {path}")

    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e

    section = data.get("exprcalc", {})
    try:
        return CalcConfig.model_validate(section)
    except ValidationError as e:
        raise ConfigError(f"Invalid [exprcalc] section in {path}: {e}") from e
