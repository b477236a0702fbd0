"""
Goal Models

Core records of the tracker: goals, comments and the canonical goal id.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Tuple

GoalId = str

MIN_PROGRESS = 0
MAX_PROGRESS = 100


class CommentMode(Enum):
    """Where a goal's comments live"""
    SIMPLE = "simple"        # plain strings on the goal itself
    EXTENDED = "extended"    # Comment entities in a CommentBook


def normalize_goal_id(value: Any) -> GoalId:
    """
    Convert an incoming identifier to its canonical string form.

    Every identifier crossing into the core goes through here, so ``1``
    and ``"1"`` always name the same goal.

    Args:
        value: Raw identifier (str or int)

    Returns:
        Canonical GoalId

    Raises:
        TypeError: If value is neither str nor int
        ValueError: If value is an empty string
    """
    if isinstance(value, bool):
        raise TypeError(f"Goal id must be str or int, got bool: {value!r}")
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str):
        token = value.strip()
        if not token:
            raise ValueError("Goal id is empty")
        return token
    raise TypeError(f"Goal id must be str or int, got {type(value).__name__}")


@dataclass(frozen=True)
class Goal:
    """A tracked objective"""
    id: GoalId
    title: str
    progress: int = 0
    milestones: Tuple[str, ...] = ()
    comments: Tuple[str, ...] = ()
    description: str = ""
    created_at: datetime = field(default_factory=datetime.now, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "id", normalize_goal_id(self.id))

        if not isinstance(self.title, str) or not self.title.strip():
            raise ValueError("Goal title is empty")
        if isinstance(self.progress, bool) or not isinstance(self.progress, int):
            raise ValueError(f"Goal progress must be an integer, got {self.progress!r}")
        if not MIN_PROGRESS <= self.progress <= MAX_PROGRESS:
            raise ValueError(f"Goal progress out of range: {self.progress}")

    @property
    def remaining(self) -> int:
        return MAX_PROGRESS - self.progress

    @property
    def is_complete(self) -> bool:
        return self.progress == MAX_PROGRESS

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "progress": self.progress,
            "milestones": list(self.milestones),
            "comments": list(self.comments),
            "description": self.description,
            "created_at": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Goal":
        """
        Build a goal from a plain mapping.

        Accepts ``name`` as an alias for ``title``.

        Raises:
            ValueError: If the data breaks a goal invariant
        """
        kwargs: Dict[str, Any] = {}
        if data.get("created_at"):
            kwargs["created_at"] = datetime.fromisoformat(data["created_at"])

        return cls(
            id=data["id"],
            title=str(data.get("title", data.get("name", ""))).strip(),
            progress=data.get("progress", 0),
            milestones=tuple(data.get("milestones", ())),
            comments=tuple(data.get("comments", ())),
            description=data.get("description", "") or "",
            **kwargs,
        )


@dataclass(frozen=True)
class Comment:
    """A free-text annotation attached to exactly one goal"""
    goal_id: GoalId
    author: str
    text: str

    def __post_init__(self):
        object.__setattr__(self, "goal_id", normalize_goal_id(self.goal_id))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "goal_id": self.goal_id,
            "author": self.author,
            "text": self.text,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Comment":
        goal_id = data["goal_id"] if "goal_id" in data else data["goalId"]
        return cls(
            goal_id=goal_id,
            author=data.get("author", data.get("user", "")),
            text=data.get("text", data.get("comment", "")),
        )
