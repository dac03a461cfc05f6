"""Goal services package."""

from .goal_store import GoalStore
from .validation import validate_goal

__all__ = [
    "GoalStore",
    "validate_goal",
]
