"""
Goal Parser

Turns raw goal form input into validated Goal records.
"""

import logging
from typing import Any, Optional

from .identifiers import IdGenerator
from .models import Goal
from .validator import GoalValidator, ProgressPolicy

logger = logging.getLogger(__name__)


class SubmissionParser:
    """
    Parser for goal form submissions.

    Takes the four form fields exactly as typed:
    - Title (trimmed, required)
    - Progress (whole number, bounded to 0-100)
    - Milestones (comma separated)
    - Comments (comma separated)

    Every field is validated before an id is minted, so a rejected
    submission leaves the generator untouched.
    """

    def __init__(
        self,
        id_generator: Optional[IdGenerator] = None,
        validator: Optional[GoalValidator] = None,
        delimiter: str = ",",
    ):
        if not delimiter:
            raise ValueError("delimiter must not be empty")

        self.id_generator = id_generator or IdGenerator()
        self.validator = validator or GoalValidator(ProgressPolicy.CLAMP)
        self.delimiter = delimiter

    def parse_submission(
        self,
        title: Optional[str],
        progress_raw: Any,
        milestones_raw: Optional[str] = "",
        comments_raw: Optional[str] = "",
        description_raw: Optional[str] = "",
    ) -> Goal:
        """
        Parse one form submission.

        Args:
            title: Goal title as typed
            progress_raw: Progress as typed
            milestones_raw: Comma separated milestones
            comments_raw: Comma separated comments
            description_raw: Optional free-text description

        Returns:
            Goal with a fresh id

        Raises:
            ValidationError: If the title is empty or progress is invalid
        """
        clean_title = self.validator.validate_title(title)
        progress = self.validator.validate_progress(progress_raw)
        milestones = self.validator.split_list(milestones_raw, self.delimiter)
        comments = self.validator.split_list(comments_raw, self.delimiter)
        description = (description_raw or "").strip()

        goal = Goal(
            id=self.id_generator.next_id(),
            title=clean_title,
            progress=progress,
            milestones=tuple(milestones),
            comments=tuple(comments),
            description=description,
        )

        logger.debug(
            f"Parsed goal {goal.id}: {len(milestones)} milestones, {len(comments)} comments"
        )
        return goal

    def to_form(self, goal: Goal) -> dict:
        """
        Convert a goal back to form field strings.

        Args:
            goal: Goal object

        Returns:
            Dict with title, progress, milestones and comments fields
        """
        joiner = f"{self.delimiter} "
        return {
            "title": goal.title,
            "progress": str(goal.progress),
            "milestones": joiner.join(goal.milestones),
            "comments": joiner.join(goal.comments),
            "description": goal.description,
        }
