"""Structured logging configuration using structlog.

Library modules log through the standard library with snake_case event
names (``validated_string_rejected``). This module lets an application
render those records, and its own structlog events, with:
- JSON output for production environments
- Console output with colors for development
- Redaction of raw, unvalidated input carried in log context

Usage:
    # During application startup
    from verba.infra.observability.logging import configure_logging
    configure_logging()

    # In application code
    from verba.infra.observability import get_logger
    logger = get_logger(__name__)
    logger.info("profile_submitted", kind="handle", input_length=12)
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import TYPE_CHECKING, Any

import structlog
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

if TYPE_CHECKING:
    from collections.abc import MutableMapping

# Type alias for structlog processor
Processor = structlog.types.Processor

# Namespace logger every verba module logs under
LIBRARY_LOGGER_NAME = "verba"

# Field names that carry input before it has been validated
RAW_INPUT_FIELDS: frozenset[str] = frozenset(
    {
        "original_input",
        "raw",
        "raw_input",
        "raw_text",
        "sample",
    }
)

REDACTED_VALUE: str = "***REDACTED***"


class LoggingSettings(BaseSettings):
    """Logging configuration settings from environment variables.

    Loads configuration from environment variables:
    - LOG_LEVEL: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    - ENVIRONMENT: Environment name (development, staging, production, test)
    - VERBA_REDACT_INPUTS: Whether raw input fields are redacted

    Attributes:
        log_level: Minimum log level to output. Default: INFO
        environment: Environment name for format selection. Default: development
        redact_inputs: Redact raw input fields. Default: True

    Example:
        >>> settings = LoggingSettings()
        >>> settings.use_json_logs
        False  # development uses console format

        >>> settings = LoggingSettings(log_level="DEBUG", environment="production")
        >>> settings.use_json_logs
        True  # production uses JSON format
    """

    model_config = SettingsConfigDict(
        env_prefix="",
        extra="ignore",
        populate_by_name=True,
    )

    log_level: str = Field(
        default="INFO",
        alias="LOG_LEVEL",
        description="Minimum log level to output",
    )
    environment: str = Field(
        default="development",
        alias="ENVIRONMENT",
        description="Environment name for format selection",
    )
    redact_inputs: bool = Field(
        default=True,
        alias="VERBA_REDACT_INPUTS",
        description="Redact raw, unvalidated input carried in log context",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: Any) -> str:
        """Normalize log level to uppercase."""
        if isinstance(v, str):
            return v.upper()
        return str(v)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a known level.

        Raises:
            ValueError: If log level is not a valid Python logging level.
        """
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v not in valid_levels:
            msg = f"log_level must be one of {valid_levels}"
            raise ValueError(msg)
        return v

    @property
    def use_json_logs(self) -> bool:
        """True for the production environment, False otherwise."""
        return self.environment == "production"

    @property
    def log_level_int(self) -> int:
        """Log level as a ``logging`` module constant."""
        return getattr(logging, self.log_level, logging.INFO)


class RawInputRedactionProcessor:
    """Structlog processor that redacts unvalidated input from log context.

    Redacts values for fields matching:
    1. Exact field names in RAW_INPUT_FIELDS (case-insensitive)
    2. Field names ending in ``_input`` (e.g. ``handle_input``)

    Example:
        >>> processor = RawInputRedactionProcessor()
        >>> event_dict = {"event": "rejected", "original_input": ".bad"}
        >>> processor(None, "debug", event_dict)["original_input"]
        '***REDACTED***'
    """

    def __init__(self, enabled: bool = True) -> None:
        self.enabled = enabled

    def __call__(
        self,
        logger: Any,
        method_name: str,
        event_dict: MutableMapping[str, Any],
    ) -> MutableMapping[str, Any]:
        """Redact raw input fields in event_dict when enabled."""
        if not self.enabled:
            return event_dict
        for key in list(event_dict.keys()):
            if self._is_raw_input(key):
                event_dict[key] = REDACTED_VALUE
        return event_dict

    def _is_raw_input(self, key: str) -> bool:
        key_lower = key.lower()
        if key_lower in RAW_INPUT_FIELDS:
            return True
        return key_lower.endswith("_input")


@lru_cache(maxsize=1)
def get_logging_settings() -> LoggingSettings:
    """Get cached LoggingSettings instance.

    Clear cache with ``get_logging_settings.cache_clear()`` for testing.
    """
    return LoggingSettings()


def _renderer(settings: LoggingSettings) -> Processor:
    if settings.use_json_logs:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=True)


def configure_logging(settings: LoggingSettings | None = None) -> None:
    """Configure structlog and route the library's stdlib records through it.

    Configures structlog with:
    - Context variable merging
    - Log level filtering
    - ISO 8601 timestamps (UTC)
    - Raw input redaction
    - Environment-aware rendering (JSON for production, console otherwise)

    The ``verba`` stdlib logger gets a single stream handler that renders its
    records with the same processors, ``extra`` fields included. Calling this
    again replaces that handler rather than adding another one.

    Args:
        settings: Optional LoggingSettings instance. If not provided,
            settings are loaded from environment variables.
    """
    if settings is None:
        settings = get_logging_settings()

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        RawInputRedactionProcessor(enabled=settings.redact_inputs),
    ]
    renderer = _renderer(settings)

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(settings.log_level_int),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler()
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=[
                structlog.stdlib.add_logger_name,
                structlog.stdlib.ExtraAdder(),
                *shared_processors,
            ],
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )
    library_logger = logging.getLogger(LIBRARY_LOGGER_NAME)
    library_logger.handlers.clear()
    library_logger.addHandler(handler)
    library_logger.setLevel(settings.log_level_int)
    library_logger.propagate = False


def get_logger(name: str | None = None) -> structlog.typing.WrappedLogger:
    """Get a structlog logger bound to the given name.

    Args:
        name: Logger name (typically __name__ from calling module).
            If None, returns unbound logger.

    Returns:
        Lazy structlog logger with name context. It picks up the
        configuration in force when it first logs, so module-level loggers
        created before ``configure_logging`` still follow it.
    """
    if name is None:
        return structlog.get_logger()
    return structlog.get_logger(logger=name)
