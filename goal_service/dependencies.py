"""
Dependency injection system.

Copyright (C) 2025 Maigie

Licensed under the Business Source License 1.1 (BUSL-1.1).
See LICENSE file in the repository root for details.
"""

from typing import Annotated

from fastapi import Depends, Request

from .services.goal_store import GoalStore


def get_goal_store(request: Request) -> GoalStore:
    """Get the goal store owned by the running application."""
    return request.app.state.goal_store


GoalStoreDep = Annotated[GoalStore, Depends(get_goal_store)]
