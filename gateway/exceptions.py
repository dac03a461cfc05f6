"""
Gateway exceptions.

Copyright (C) 2025 Maigie

Licensed under the Business Source License 1.1 (BUSL-1.1).
See LICENSE file in the repository root for details.
"""

from fastapi import status

from goal_service.utils.exceptions import HealthGoalsError


class UpstreamUnavailable(HealthGoalsError):
    """The gateway could not reach the upstream service."""

    status_code = status.HTTP_502_BAD_GATEWAY
    code = "UPSTREAM_UNAVAILABLE"


class UpstreamTimeout(UpstreamUnavailable):
    """The upstream service did not answer in time."""

    status_code = status.HTTP_504_GATEWAY_TIMEOUT
    code = "UPSTREAM_TIMEOUT"
