"""
Goal routes.

Copyright (C) 2025 Maigie

Licensed under the Business Source License 1.1 (BUSL-1.1).
See LICENSE file in the repository root for details.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Body, status

from ..dependencies import GoalStoreDep
from ..models.error_response import ErrorResponse
from ..models.goals import Goal, GoalDeleteResponse

router = APIRouter(prefix="/resource", tags=["goals"])

GoalPayload = Annotated[Any, Body()]


@router.get("", response_model=list[Goal])
@router.get("/", response_model=list[Goal], include_in_schema=False)
async def list_goals(store: GoalStoreDep):
    """List all health goals in insertion order."""
    return store.list_goals()


@router.post(
    "",
    response_model=Goal,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
@router.post(
    "/",
    response_model=Goal,
    status_code=status.HTTP_201_CREATED,
    include_in_schema=False,
)
async def create_goal(store: GoalStoreDep, payload: GoalPayload = None):
    """Create a new health goal."""
    return store.create_goal(payload)


@router.put(
    "/{goal_id}",
    response_model=Goal,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def replace_goal(goal_id: str, store: GoalStoreDep, payload: GoalPayload = None):
    """
    Replace a health goal.

    Every field except the id is overwritten.
    """
    return store.replace_goal(goal_id, payload)


@router.delete(
    "/{goal_id}",
    response_model=GoalDeleteResponse,
    responses={404: {"model": ErrorResponse}},
)
async def delete_goal(goal_id: str, store: GoalStoreDep):
    """Delete a health goal."""
    deleted = store.delete_goal(goal_id)
    return GoalDeleteResponse(message="Health goal deleted", deletedGoal=[deleted])
