"""
Goal models for request/response schemas.

Copyright (C) 2025 Maigie

Licensed under the Business Source License 1.1 (BUSL-1.1).
See LICENSE file in the repository root for details.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class GoalStatus(str, Enum):
    """Goal status enum values."""

    ACTIVE = "active"
    COMPLETED = "completed"
    ABANDONED = "abandoned"


class GoalFields(BaseModel):
    """Normalized, validated goal fields (everything except the id)."""

    model_config = ConfigDict(use_enum_values=True, validate_default=True)

    userId: str
    title: str
    description: str = ""
    targetDate: str
    status: GoalStatus = GoalStatus.ACTIVE


class Goal(BaseModel):
    """A stored goal."""

    model_config = ConfigDict(
        use_enum_values=True,
        validate_default=True,
        json_schema_extra={
            "example": {
                "id": "0b6f1c3e-7d7a-4d35-9f57-8c8f8d1a2b3c",
                "userId": "u1",
                "title": "Run 5K",
                "description": "",
                "targetDate": "2025-05-15T00:00:00.000Z",
                "status": "active",
            }
        },
    )

    id: str = Field(..., min_length=1)
    userId: str
    title: str
    description: str = ""
    targetDate: str
    status: GoalStatus = GoalStatus.ACTIVE

    @classmethod
    def from_fields(cls, goal_id: str, fields: GoalFields) -> "Goal":
        """Build a stored goal from an id and validated fields."""
        return cls(id=goal_id, **fields.model_dump())


class GoalDeleteResponse(BaseModel):
    """Response body for a successful delete."""

    message: str
    deletedGoal: list[Goal]
