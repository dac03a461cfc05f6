"""
Goal payload validation.

Copyright (C) 2025 Maigie

Licensed under the Business Source License 1.1 (BUSL-1.1).
See LICENSE file in the repository root for details.

Checks run in a fixed order (userId, title, description, targetDate,
status) and the first failing field is reported. Messages always quote the
offending field name, e.g. ``"title" length must be at least 3 characters long``.
"""

import math
import re
from collections.abc import Callable, Mapping
from datetime import UTC, datetime
from typing import Any

from ..models.goals import GoalFields, GoalStatus
from ..utils.exceptions import ValidationError
from ..utils.timestamps import format_timestamp

TITLE_MIN_LENGTH = 3
GOAL_STATUSES = tuple(status.value for status in GoalStatus)

_NUMERIC_RE = re.compile(r"^[+-]?\d+(\.\d+)?$")

FieldCheck = Callable[[Mapping[str, Any], dict[str, Any]], None]


def _required_string(payload: Mapping[str, Any], field: str) -> str:
    if field not in payload:
        raise ValidationError(f'"{field}" is required')
    value = payload[field]
    if not isinstance(value, str):
        raise ValidationError(f'"{field}" must be a string')
    if value == "":
        raise ValidationError(f'"{field}" is not allowed to be empty')
    return value


def parse_target_date(value: Any) -> datetime:
    """
    Parse a target date into an aware UTC datetime.

    Accepts ISO-8601 strings (date only or date-time; naive values are
    taken as UTC) and milliseconds since the epoch, as a number or a
    numeric string.

    Raises:
        ValueError: If the value is not a valid date
    """
    if isinstance(value, bool):
        raise ValueError("booleans are not dates")

    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise ValueError("empty date")
        if _NUMERIC_RE.match(text):
            value = float(text)
        else:
            if text.endswith(("Z", "z")):
                text = text[:-1] + "+00:00"
            parsed = datetime.fromisoformat(text)
            if parsed.tzinfo is None:
                parsed = parsed.replace(tzinfo=UTC)
            return parsed.astimezone(UTC)

    if isinstance(value, (int, float)):
        if isinstance(value, float) and not math.isfinite(value):
            raise ValueError("non-finite timestamp")
        try:
            return datetime.fromtimestamp(value / 1000, tz=UTC)
        except (OverflowError, OSError) as e:
            raise ValueError(f"timestamp out of range: {value}") from e

    raise ValueError(f"unsupported date type: {type(value).__name__}")


def _check_user_id(payload: Mapping[str, Any], fields: dict[str, Any]) -> None:
    fields["userId"] = _required_string(payload, "userId")


def _check_title(payload: Mapping[str, Any], fields: dict[str, Any]) -> None:
    title = _required_string(payload, "title")
    if len(title) < TITLE_MIN_LENGTH:
        raise ValidationError(
            f'"title" length must be at least {TITLE_MIN_LENGTH} characters long'
        )
    fields["title"] = title


def _check_description(payload: Mapping[str, Any], fields: dict[str, Any]) -> None:
    if "description" not in payload:
        fields["description"] = ""
        return
    description = payload["description"]
    if not isinstance(description, str):
        raise ValidationError('"description" must be a string')
    fields["description"] = description


def _check_target_date(payload: Mapping[str, Any], fields: dict[str, Any]) -> None:
    if "targetDate" not in payload:
        raise ValidationError('"targetDate" is required')
    try:
        parsed = parse_target_date(payload["targetDate"])
        target_date = format_timestamp(parsed)
    except (ValueError, OverflowError) as e:
        raise ValidationError('"targetDate" must be a valid date', detail=str(e)) from e
    fields["targetDate"] = target_date


def _check_status(payload: Mapping[str, Any], fields: dict[str, Any]) -> None:
    if "status" not in payload:
        fields["status"] = GoalStatus.ACTIVE.value
        return
    status = payload["status"]
    if status not in GOAL_STATUSES:
        raise ValidationError(f'"status" must be one of [{", ".join(GOAL_STATUSES)}]')
    fields["status"] = status


FIELD_CHECKS: tuple[FieldCheck, ...] = (
    _check_user_id,
    _check_title,
    _check_description,
    _check_target_date,
    _check_status,
)


def validate_goal(payload: Any) -> GoalFields:
    """
    Validate a candidate goal payload and return its normalized fields.

    A missing body (None) validates like an empty object. Keys outside the
    goal schema, including ``id``, are dropped.

    Raises:
        ValidationError: For the first field that fails its check
    """
    if payload is None:
        payload = {}
    if not isinstance(payload, Mapping):
        raise ValidationError('"value" must be of type object')

    fields: dict[str, Any] = {}
    for check in FIELD_CHECKS:
        check(payload, fields)
    return GoalFields(**fields)
