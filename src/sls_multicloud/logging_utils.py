"""Logging utilities.

Provides JSON logging configuration for function hosts and header
sanitization for log records.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pythonjsonlogger import json as jsonlogger

from sls_multicloud.config import Settings

REDACTED = "[REDACTED]"

# Matched case-insensitively as substrings of header names
SENSITIVE_HEADER_MARKERS = (
    "authorization",
    "cookie",
    "api-key",
    "apikey",
    "token",
    "secret",
    "password",
)


def configure_logging(
    level: str = "INFO", json_format: bool = True, pretty: bool = False
) -> None:
    """Configure the root logger for a function host.

    Existing root handlers are replaced so repeated cold-start setup does
    not duplicate output.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_format: Emit JSON records (CloudWatch / Application Insights).
        pretty: Indent JSON records, for local development.
    """
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    log_level = getattr(logging, level.upper(), logging.INFO)
    root_logger.setLevel(log_level)

    handler = logging.StreamHandler()
    handler.setLevel(log_level)

    formatter: logging.Formatter
    if json_format:
        formatter = jsonlogger.JsonFormatter(
            "%(asctime)s %(name)s %(levelname)s %(message)s",
            timestamp=True,
            json_indent=2 if pretty else None,
        )
    else:
        formatter = logging.Formatter(
            "%(asctime)s %(name)s %(levelname)s %(message)s"
        )

    handler.setFormatter(formatter)
    root_logger.addHandler(handler)


def configure_from_settings(settings: Settings) -> None:
    configure_logging(level=settings.log_level, json_format=settings.log_json)


def sanitize_headers(headers: Mapping[str, Any]) -> dict[str, Any]:
    """Copy ``headers`` with sensitive values replaced by ``[REDACTED]``."""
    sanitized: dict[str, Any] = {}
    for key, value in headers.items():
        lowered = key.lower()
        if any(marker in lowered for marker in SENSITIVE_HEADER_MARKERS):
            sanitized[key] = REDACTED
        else:
            sanitized[key] = value
    return sanitized
