"""
Milestones and Comments

Read views over a goal's milestones and the comment collection that
references goals by id.
"""

import logging
from typing import Any, List, Tuple

from .models import Comment, Goal, normalize_goal_id
from .store import GoalStore

logger = logging.getLogger(__name__)


def milestones_of(goal: Goal) -> Tuple[str, ...]:
    """Milestones of a goal in the order they were entered."""
    return goal.milestones


class CommentBook:
    """
    Ordered collection of comments keyed by goal id.

    Comments pointing at a goal that does not exist are kept but never
    shown; lookups for them simply come back empty.
    """

    def __init__(self):
        self._comments: List[Comment] = []

    def add(self, comment: Comment) -> Comment:
        self._comments.append(comment)
        return comment

    def add_comment(self, goal_id: Any, author: str, text: str) -> Comment:
        """
        Create and append a comment.

        Args:
            goal_id: Goal the comment belongs to
            author: Display name of the author
            text: Comment text

        Returns:
            The stored Comment
        """
        return self.add(Comment(goal_id=goal_id, author=author, text=text))

    def comments_for(self, goal_id: Any) -> Tuple[Comment, ...]:
        """Comments whose goal id matches exactly, in declaration order."""
        goal_id = normalize_goal_id(goal_id)
        return tuple(c for c in self._comments if c.goal_id == goal_id)

    def visible_for(self, store: GoalStore, goal_id: Any) -> Tuple[Comment, ...]:
        """Like comments_for, but empty unless the goal is in the store."""
        if goal_id not in store:
            return ()
        return self.comments_for(goal_id)

    def dangling(self, store: GoalStore) -> Tuple[Comment, ...]:
        """Comments whose goal is missing from the store."""
        hidden = tuple(c for c in self._comments if c.goal_id not in store)
        if hidden:
            logger.debug(f"{len(hidden)} comment(s) reference unknown goals")
        return hidden

    def all(self) -> Tuple[Comment, ...]:
        return tuple(self._comments)

    def __len__(self) -> int:
        return len(self._comments)
