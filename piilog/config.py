"""Logger configuration.

Configuration is read from keyword arguments or environment variables with
the prefix LOG_. For example:
- LOG_LEVEL=debug
- LOG_PII_MODE=hash
- LOG_APP_NAME=billing
- LOG_FORMAT=console
"""

from enum import Enum
from typing import Any

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import LoggerConfigurationError
from .pii import PIIMode

_SEVERITY = {
    "debug": 10,
    "info": 20,
    "warn": 30,
    "error": 40,
    "panic": 50,
    "fatal": 60,
}


class LogLevel(str, Enum):
    """Log levels supported by the logger, lowest first."""

    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"
    PANIC = "panic"
    FATAL = "fatal"

    @property
    def severity(self) -> int:
        return _SEVERITY[self.value]

    def enables(self, level: "LogLevel") -> bool:
        """Whether a logger with this minimum level writes ``level``."""
        return level.severity >= self.severity


class LogFormat(str, Enum):
    """Log output formats."""

    JSON = "json"
    CONSOLE = "console"


class LogConfig(BaseSettings):
    """Configuration for a logger.

    Attributes
    ----------
        app_name: Value of the "app" field. Omitted when empty.
        version: Value of the "version" field. Omitted when empty.
        level: Minimum level a logger writes. Debug writes everything,
            fatal only fatal records.
        pii_mode: How the logger resolves PII fields.
        format: Output format (json or console)
        add_caller: Whether to add the "caller" and "func" fields
        stacktrace_level: Lowest level whose records carry a "stacktrace"

    """

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = Field(default="", description="Application name for the app field")
    version: str = Field(default="", description="Application version for the version field")
    level: LogLevel = Field(
        default=LogLevel.INFO, description="Minimum log level to output"
    )
    pii_mode: PIIMode = Field(
        default=PIIMode.NONE, description="How PII fields are resolved"
    )
    format: LogFormat = Field(
        default=LogFormat.JSON, description="Output format for logs"
    )
    add_caller: bool = Field(
        default=True, description="Add source file, line number and function"
    )
    stacktrace_level: LogLevel = Field(
        default=LogLevel.WARN, description="Lowest level that records a stack trace"
    )

    @field_validator("level", "stacktrace_level", "pii_mode", "format", mode="before")
    @classmethod
    def normalize_case(cls, v: Any) -> Any:
        """Accept enum values in any case."""
        if isinstance(v, str):
            return v.strip().lower()
        return v


_FIELD_MESSAGES = {
    "level": "invalid minimum log level in logger configuration",
    "pii_mode": "invalid PII mode in logger configuration",
    "stacktrace_level": "invalid stacktrace level in logger configuration",
    "format": "invalid log format in logger configuration",
}


def validate_config(config: LogConfig) -> None:
    """Check the level and PII mode of a configuration.

    Pydantic validates on construction already; this catches configurations
    built with ``model_construct`` or mutated afterwards.

    Raises
    ------
        LoggerConfigurationError: naming the first invalid input

    """
    checks = (
        ("level", LogLevel),
        ("pii_mode", PIIMode),
        ("stacktrace_level", LogLevel),
        ("format", LogFormat),
    )
    for field, enum in checks:
        value = getattr(config, field, None)
        try:
            enum(value)
        except ValueError as exc:
            raise LoggerConfigurationError(
                _FIELD_MESSAGES[field], field=field, details={"value": repr(value)}
            ) from exc


def load_config(config: LogConfig | dict[str, Any] | None = None, **overrides: Any) -> LogConfig:
    """Build and validate a configuration.

    Args:
    ----
        config: A configuration, a mapping of its fields, or None to read
            the environment
        **overrides: Fields that replace those of ``config``

    Returns:
    -------
        A validated configuration

    Raises:
    ------
        LoggerConfigurationError: if any input does not validate

    """
    try:
        if isinstance(config, LogConfig):
            validate_config(config)
            if overrides:
                config = LogConfig(**{**config.model_dump(), **overrides})
        else:
            config = LogConfig(**{**(config or {}), **overrides})
    except ValidationError as exc:
        raise _translate(exc) from exc

    validate_config(config)
    return config


def _translate(exc: ValidationError) -> LoggerConfigurationError:
    error = exc.errors()[0]
    field = str(error["loc"][0]) if error.get("loc") else ""
    message = _FIELD_MESSAGES.get(field, f"invalid {field or 'value'} in logger configuration")
    return LoggerConfigurationError(
        message, field=field or None, details={"reason": error.get("msg", "")}
    )
