"""
Identifier Generator

Mints goal ids that are never reused within a process.
"""

import logging
import uuid
from enum import Enum
from typing import Any, Set

from .models import GoalId, normalize_goal_id

logger = logging.getLogger(__name__)


class IdStrategy(Enum):
    """How new goal ids are produced"""
    COUNTER = "counter"
    TOKEN = "token"


class IdGenerator:
    """
    Produces unique goal identifiers.

    The counter strategy yields "1", "2", ... and skips anything already
    reserved; the token strategy draws random hex tokens and redraws on
    collision.
    """

    def __init__(
        self,
        strategy: IdStrategy = IdStrategy.COUNTER,
        start: int = 1,
        token_length: int = 12,
    ):
        if token_length < 4 or token_length > 32:
            raise ValueError(f"token_length must be between 4 and 32, got {token_length}")

        self.strategy = strategy
        self.token_length = token_length
        self._next = start
        self._issued: Set[GoalId] = set()

    @property
    def issued_count(self) -> int:
        return len(self._issued)

    def next_id(self) -> GoalId:
        """Return an id never handed out or reserved before."""
        if self.strategy == IdStrategy.TOKEN:
            goal_id = self._next_token()
        else:
            goal_id = self._next_counter()

        self._issued.add(goal_id)
        logger.debug(f"Issued goal id {goal_id}")
        return goal_id

    def reserve(self, goal_id: Any) -> GoalId:
        """
        Mark an externally supplied id as taken.

        Args:
            goal_id: Id assigned outside this generator

        Returns:
            The normalized id
        """
        goal_id = normalize_goal_id(goal_id)
        self._issued.add(goal_id)
        return goal_id

    def is_issued(self, goal_id: Any) -> bool:
        return normalize_goal_id(goal_id) in self._issued

    def _next_counter(self) -> GoalId:
        while str(self._next) in self._issued:
            self._next += 1
        goal_id = str(self._next)
        self._next += 1
        return goal_id

    def _next_token(self) -> GoalId:
        while True:
            goal_id = uuid.uuid4().hex[:self.token_length]
            if goal_id not in self._issued:
                return goal_id
