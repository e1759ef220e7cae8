"""Verba Infra Observability -- structlog configuration for applications."""

from __future__ import annotations

from verba.infra.observability.logging import (
    LoggingSettings,
    RawInputRedactionProcessor,
    configure_logging,
    get_logger,
    get_logging_settings,
)

__all__ = [
    "LoggingSettings",
    "RawInputRedactionProcessor",
    "configure_logging",
    "get_logger",
    "get_logging_settings",
]
