"""
Structured (JSON) logging configuration for the health goals services.

Copyright (C) 2025 Maigie

Licensed under the Business Source License 1.1 (BUSL-1.1).
See LICENSE file in the repository root for details.
"""

import logging
import sys
from typing import Any

from pythonjsonlogger import jsonlogger


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """
    Custom JSON formatter for structured logging.

    Enriches log records with standardized fields for consistent
    log aggregation and analysis.
    """

    def add_fields(
        self,
        log_record: dict[str, Any],
        record: logging.LogRecord,
        message_dict: dict[str, Any],
    ) -> None:
        """
        Add custom fields to the log record.

        Args:
            log_record: Dictionary to populate with log fields
            record: The LogRecord being formatted
            message_dict: Additional message data
        """
        super().add_fields(log_record, record, message_dict)

        log_record["timestamp"] = self.formatTime(record, self.datefmt)
        log_record["level"] = record.levelname
        log_record["logger"] = record.name
        log_record["module"] = record.module
        log_record["function"] = record.funcName
        log_record["line"] = record.lineno

        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)

        if "message" not in log_record and hasattr(record, "getMessage"):
            log_record["message"] = record.getMessage()


def resolve_log_level(environment: str, log_level: str = "") -> int:
    """
    Pick the effective log level.

    An explicit level wins; otherwise development logs at DEBUG and every
    other environment at INFO. Unknown names fall back to INFO.
    """
    level_name = log_level.upper()
    if not level_name:
        level_name = "DEBUG" if environment.lower() == "development" else "INFO"
    level = getattr(logging, level_name, logging.INFO)
    return level if isinstance(level, int) else logging.INFO


def configure_logging(
    application: str,
    environment: str = "development",
    log_level: str = "",
) -> None:
    """
    Configure structured JSON logging for the application.

    Call once during application startup. Replaces any handlers on the
    root logger with a single stdout handler emitting JSON lines.

    Args:
        application: Value of the static ``application`` field
        environment: Deployment environment (development, staging, production)
        log_level: Explicit level name; empty to derive it from the environment
    """
    level = resolve_log_level(environment, log_level)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)

    json_formatter = CustomJsonFormatter(
        fmt="%(timestamp)s %(level)s %(name)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        static_fields={
            "environment": environment.lower(),
            "application": application,
        },
    )

    console_handler.setFormatter(json_formatter)
    root_logger.addHandler(console_handler)

    root_logger.info(
        "Structured logging configured",
        extra={
            "log_level": logging.getLevelName(level),
            "environment": environment,
        },
    )

    # Reduce third-party noise
    logging.getLogger("uvicorn").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
