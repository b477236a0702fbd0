"""Goal Model, Parsing and Progress"""

from .models import Goal, Comment, CommentMode, GoalId, normalize_goal_id
from .identifiers import IdGenerator, IdStrategy
from .store import GoalStore, DuplicateGoalError
from .comments import CommentBook, milestones_of
from .validator import (
    GoalValidator,
    ProgressPolicy,
    ValidationError,
    ValidationErrorKind,
    EmptyTitleError,
    InvalidProgressError,
    OutOfRangeProgressError,
)
from .parser import SubmissionParser
from .progress import ProgressAggregator, ChartPoint

__version__ = "1.0.0"

__all__ = [
    "Goal",
    "Comment",
    "CommentMode",
    "GoalId",
    "normalize_goal_id",
    "IdGenerator",
    "IdStrategy",
    "GoalStore",
    "DuplicateGoalError",
    "CommentBook",
    "milestones_of",
    "GoalValidator",
    "ProgressPolicy",
    "ValidationError",
    "ValidationErrorKind",
    "EmptyTitleError",
    "InvalidProgressError",
    "OutOfRangeProgressError",
    "SubmissionParser",
    "ProgressAggregator",
    "ChartPoint",
]
