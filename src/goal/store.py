"""
Goal Store

Ordered, append-only collection of goals owned by one tracker session.
"""

import logging
from typing import Any, Dict, Iterator, List, Optional, Tuple

from .models import Goal, GoalId, normalize_goal_id

logger = logging.getLogger(__name__)


class DuplicateGoalError(ValueError):
    """Raised when a goal id is already present in the store"""


class GoalStore:
    """
    Holds goals in creation order.

    There is no remove or update: once added, a goal stays for the rest
    of the process and its id is never handed to another goal.
    """

    def __init__(self):
        self._goals: List[Goal] = []
        self._index: Dict[GoalId, Goal] = {}

    def add(self, goal: Goal) -> None:
        """
        Append a goal.

        Args:
            goal: Goal to append

        Raises:
            DuplicateGoalError: If a goal with the same id exists
        """
        goal_id = normalize_goal_id(goal.id)
        if goal_id in self._index:
            raise DuplicateGoalError(f"Goal id already in store: {goal_id}")

        self._goals.append(goal)
        self._index[goal_id] = goal
        logger.debug(f"Stored goal {goal_id} ({len(self._goals)} total)")

    def list(self) -> Tuple[Goal, ...]:
        """All goals, oldest first."""
        return tuple(self._goals)

    def get(self, goal_id: Any) -> Optional[Goal]:
        return self._index.get(normalize_goal_id(goal_id))

    def ids(self) -> Tuple[GoalId, ...]:
        return tuple(g.id for g in self._goals)

    def __contains__(self, goal_id: Any) -> bool:
        try:
            return normalize_goal_id(goal_id) in self._index
        except (TypeError, ValueError):
            return False

    def __len__(self) -> int:
        return len(self._goals)

    def __iter__(self) -> Iterator[Goal]:
        return iter(self.list())
