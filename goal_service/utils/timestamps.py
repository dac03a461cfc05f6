"""
Timestamp helpers.

Copyright (C) 2025 Maigie

Licensed under the Business Source License 1.1 (BUSL-1.1).
See LICENSE file in the repository root for details.
"""

import time
from datetime import UTC, datetime


def current_timestamp_ms() -> int:
    """Milliseconds since the Unix epoch."""
    return int(time.time() * 1000)


def format_timestamp(value: datetime) -> str:
    """Render a datetime as ``YYYY-MM-DDTHH:MM:SS.mmmZ`` in UTC."""
    return value.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")
