from __future__ import annotations

import logging
import os
from collections.abc import Callable, Mapping
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import ConfigDict, Field, field_validator

from deskexec.core.common.exceptions import ConfigurationError
from deskexec.core.common.logging import LogFormat
from deskexec.core.interfaces.model_bases import DomainModel

logger = logging.getLogger(__name__)

DEFAULT_STEAM_ROOT = Path.home() / ".steam"


def _env_to_bool(name: str, default: bool, env: Mapping[str, str]) -> bool:
    """Return an environment variable parsed as a boolean flag."""
    value = env.get(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _get_env_value(
    env: Mapping[str, str],
    name: str,
    default: Any,
    *,
    transform: Callable[[str], Any] | None = None,
) -> Any:
    value = env.get(name)
    if value is None or value == "":
        return default
    return transform(value) if transform else value


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


def _to_log_level(value: str) -> LogLevel:
    try:
        return LogLevel(value.strip().upper())
    except ValueError:
        logger.warning("Unknown log level %r, falling back to INFO", value)
        return LogLevel.INFO


def _to_log_format(value: str) -> LogFormat:
    try:
        return LogFormat(value.strip().lower())
    except ValueError as e:
        raise ConfigurationError(
            f"Unknown log format: {value}",
            details={"choices": [f.value for f in LogFormat]},
        ) from e


class LoggingConfig(DomainModel):
    """Logging configuration."""

    level: LogLevel = LogLevel.WARNING
    format: LogFormat = LogFormat.CONSOLE

    @property
    def numeric_level(self) -> int:
        return int(getattr(logging, self.level.value))


class SteamConfig(DomainModel):
    """Installed Steam game detection."""

    enabled: bool = True
    # Directory holding steam/steamapps/libraryfolders.vdf
    root: Path = Field(default_factory=lambda: DEFAULT_STEAM_ROOT)

    @field_validator("root", mode="before")
    @classmethod
    def _expand_root(cls, value: Any) -> Any:
        if isinstance(value, str):
            return Path(value).expanduser()
        return value


class AppConfig(DomainModel):
    """Top-level configuration."""

    model_config = ConfigDict(validate_assignment=True)

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    steam: SteamConfig = Field(default_factory=SteamConfig)
    # Overrides PATH for binary lookups; None uses the process PATH
    search_path: str | None = None

    @classmethod
    def from_env(cls, *, environ: Mapping[str, str] | None = None) -> AppConfig:
        """Create AppConfig from environment variables.

        Returns:
            AppConfig instance
        """
        env: Mapping[str, str] = os.environ if environ is None else environ

        config: dict[str, Any] = {
            "logging": {
                "level": _get_env_value(
                    env,
                    "DESKEXEC_LOG_LEVEL",
                    LogLevel.WARNING,
                    transform=_to_log_level,
                ),
                "format": _get_env_value(
                    env,
                    "DESKEXEC_LOG_FORMAT",
                    LogFormat.CONSOLE,
                    transform=_to_log_format,
                ),
            },
            "steam": {
                "enabled": _env_to_bool("DESKEXEC_STEAM_ENABLED", True, env),
                "root": _get_env_value(env, "DESKEXEC_STEAM_ROOT", DEFAULT_STEAM_ROOT),
            },
            "search_path": _get_env_value(env, "DESKEXEC_SEARCH_PATH", None),
        }

        return cls(**config)
