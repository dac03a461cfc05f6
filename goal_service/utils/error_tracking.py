"""
Sentry error tracking setup.

Copyright (C) 2025 Maigie

Licensed under the Business Source License 1.1 (BUSL-1.1).
See LICENSE file in the repository root for details.
"""

import logging

import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.logging import LoggingIntegration

logger = logging.getLogger(__name__)


def init_error_tracking(
    dsn: str,
    environment: str,
    release: str,
    traces_sample_rate: float = 0.0,
) -> bool:
    """
    Initialize Sentry if a DSN is configured.

    Returns True when tracking was enabled.
    """
    if not dsn or not dsn.strip():
        logger.warning(
            "Sentry DSN not configured - error tracking disabled",
            extra={"hint": "Set SENTRY_DSN in .env file or environment variable to enable"},
        )
        return False

    sentry_sdk.init(
        dsn=dsn,
        environment=environment,
        traces_sample_rate=traces_sample_rate,
        sample_rate=1.0,
        integrations=[
            FastApiIntegration(transaction_style="endpoint"),
            LoggingIntegration(
                level=logging.INFO,  # breadcrumbs
                event_level=logging.ERROR,
            ),
        ],
        release=release,
    )
    logger.info(
        "Sentry error tracking initialized",
        extra={"environment": environment, "release": release},
    )
    return True
