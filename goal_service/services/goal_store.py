"""
In-memory goal store.

Copyright (C) 2025 Maigie

Licensed under the Business Source License 1.1 (BUSL-1.1).
See LICENSE file in the repository root for details.
"""

import logging
import uuid
from typing import Any

from ..models.goals import Goal
from ..utils.exceptions import NotFoundError
from .validation import validate_goal

logger = logging.getLogger(__name__)


class GoalStore:
    """
    Ordered, process-lifetime collection of goals.

    Each application instance owns its own store; nothing is shared between
    instances and nothing survives a restart. Lookups are linear scans over
    the insertion-ordered list.

    None of the methods await, so under a single event loop every mutation
    runs to completion before another request touches the store.
    """

    def __init__(self) -> None:
        self._goals: list[Goal] = []

    def __len__(self) -> int:
        return len(self._goals)

    def list_goals(self) -> list[Goal]:
        """Return every stored goal in insertion order."""
        return list(self._goals)

    def _find_index(self, goal_id: str) -> int:
        for index, goal in enumerate(self._goals):
            if goal.id == goal_id:
                return index
        raise NotFoundError(goal_id)

    def create_goal(self, payload: Any) -> Goal:
        """
        Validate ``payload`` and append a new goal with a fresh id.

        Raises:
            ValidationError: If the payload is invalid; nothing is stored
        """
        fields = validate_goal(payload)
        goal = Goal.from_fields(str(uuid.uuid4()), fields)
        self._goals.append(goal)
        logger.info("Goal created", extra={"goal_id": goal.id, "user_id": goal.userId})
        return goal

    def replace_goal(self, goal_id: str, payload: Any) -> Goal:
        """
        Fully replace the goal stored under ``goal_id``.

        The id is looked up before the payload is validated, so an unknown
        id is reported as not found even when the payload is also invalid.
        The goal keeps its id and its position; any ``id`` in the payload
        is ignored.

        Raises:
            NotFoundError: If no goal has this id
            ValidationError: If the payload is invalid; the goal is untouched
        """
        index = self._find_index(goal_id)
        fields = validate_goal(payload)
        goal = Goal.from_fields(goal_id, fields)
        self._goals[index] = goal
        logger.info("Goal replaced", extra={"goal_id": goal_id})
        return goal

    def delete_goal(self, goal_id: str) -> Goal:
        """
        Remove the goal stored under ``goal_id`` and return it.

        Raises:
            NotFoundError: If no goal has this id
        """
        index = self._find_index(goal_id)
        goal = self._goals.pop(index)
        logger.info("Goal deleted", extra={"goal_id": goal_id})
        return goal
