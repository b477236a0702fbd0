"""
Goal Tracker

Session facade that owns the goal store and comment book, wires the
submission parser and progress aggregator, and renders a text dashboard.
"""

import json
import logging
import os
import sys
from dataclasses import dataclass, replace
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from goal.comments import CommentBook, milestones_of
from goal.identifiers import IdGenerator, IdStrategy
from goal.models import Comment, CommentMode, Goal
from goal.parser import SubmissionParser
from goal.progress import ChartPoint, ProgressAggregator
from goal.samples import SAMPLE_COMMENTS, SAMPLE_GOALS
from goal.store import DuplicateGoalError, GoalStore
from goal.validator import GoalValidator, ProgressPolicy, ValidationError

LOG_FORMAT = "[%(asctime)s] %(levelname)s: %(message)s"
BAR_WIDTH = 20


@dataclass
class TrackerConfig:
    """Configuration for a tracker session"""
    comment_mode: CommentMode = CommentMode.SIMPLE
    progress_policy: ProgressPolicy = ProgressPolicy.CLAMP

    # Identifiers
    id_strategy: IdStrategy = IdStrategy.COUNTER
    id_start: int = 1
    token_length: int = 12

    # Form input
    delimiter: str = ","
    default_author: str = "me"

    # Logging
    log_level: str = "INFO"
    log_file: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "comment_mode": self.comment_mode.value,
            "progress_policy": self.progress_policy.value,
            "id_strategy": self.id_strategy.value,
            "id_start": self.id_start,
            "token_length": self.token_length,
            "delimiter": self.delimiter,
            "default_author": self.default_author,
            "log_level": self.log_level,
            "log_file": self.log_file,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TrackerConfig":
        data = data.copy()
        if "comment_mode" in data:
            data["comment_mode"] = CommentMode(data["comment_mode"])
        if "progress_policy" in data:
            data["progress_policy"] = ProgressPolicy(data["progress_policy"])
        if "id_strategy" in data:
            data["id_strategy"] = IdStrategy(data["id_strategy"])
        return cls(**data)

    @classmethod
    def from_yaml(cls, path: str) -> "TrackerConfig":
        """Load config from YAML file"""
        import yaml
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}
        return cls.from_dict(data.get("tracker", data))


class GoalTracker:
    """
    Single-user goal tracking session.

    Everything lives in memory for the lifetime of the object. All
    mutations are synchronous; a rejected submission leaves the store
    exactly as it was.
    """

    def __init__(self, config: Optional[TrackerConfig] = None):
        """
        Initialize tracker.

        Args:
            config: Tracker configuration
        """
        self.config = config or TrackerConfig()

        # Setup logging
        self._setup_logging()

        self.store = GoalStore()
        self.comment_book = CommentBook()
        self.id_generator = IdGenerator(
            strategy=self.config.id_strategy,
            start=self.config.id_start,
            token_length=self.config.token_length,
        )
        self.parser = SubmissionParser(
            id_generator=self.id_generator,
            validator=GoalValidator(self.config.progress_policy),
            delimiter=self.config.delimiter,
        )
        self.aggregator = ProgressAggregator()

        self._rejected = 0

        self.logger.debug(f"Tracker initialized with config: {self.config.to_dict()}")

    def _setup_logging(self) -> None:
        """Setup logging"""
        package_logger = logging.getLogger("goal")
        package_logger.setLevel(getattr(logging, self.config.log_level.upper()))

        if not package_logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter(LOG_FORMAT))
            package_logger.addHandler(handler)

        # One log file per process: the most recently configured one wins
        if self.config.log_file:
            path = os.path.abspath(self.config.log_file)
            current = None
            for h in list(package_logger.handlers):
                if not isinstance(h, logging.FileHandler):
                    continue
                if h.baseFilename == path:
                    current = h
                else:
                    package_logger.removeHandler(h)
                    h.close()

            if current is None:
                file_handler = logging.FileHandler(path)
                file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
                package_logger.addHandler(file_handler)

        self.logger = logging.getLogger("goal.tracker")

    # --- mutations ---

    def submit(
        self,
        title: Optional[str],
        progress: Any,
        milestones: Optional[str] = "",
        comments: Optional[str] = "",
        description: Optional[str] = "",
    ) -> Goal:
        """
        Validate a form submission and store the resulting goal.

        Args:
            title: Goal title as typed
            progress: Progress as typed
            milestones: Comma separated milestones
            comments: Comma separated comments
            description: Optional description

        Returns:
            The stored Goal

        Raises:
            ValidationError: If the submission is rejected
        """
        try:
            goal = self.parser.parse_submission(
                title, progress, milestones, comments, description
            )
        except ValidationError as e:
            self._rejected += 1
            self.logger.warning(f"Submission rejected ({e.kind.value}): {e.message}")
            raise

        if self.config.comment_mode == CommentMode.EXTENDED:
            texts = goal.comments
            goal = replace(goal, comments=())
            self.add_goal(goal)
            for text in texts:
                self.comment_book.add_comment(goal.id, self.config.default_author, text)
        else:
            self.add_goal(goal)

        return goal

    def add_goal(self, goal: Goal) -> None:
        """Append a parsed goal and mark its id as taken."""
        self.store.add(goal)
        self.id_generator.reserve(goal.id)
        self.logger.info(f"Added goal {goal.id}: {goal.title} ({goal.progress}%)")

    def add_comment(self, goal_id: Any, author: str, text: str) -> Comment:
        """
        Attach a comment to a goal id.

        Ids with no matching goal are accepted; such comments stay hidden.
        """
        comment = self.comment_book.add_comment(goal_id, author, text)
        if comment.goal_id not in self.store:
            self.logger.debug(f"Comment by {author} references unknown goal {comment.goal_id}")
        return comment

    def load_samples(self) -> None:
        """
        Load the demo goals and comments.

        All or nothing: on a conflict neither goals nor comments are added.

        Raises:
            DuplicateGoalError: If a sample id is already in the store
        """
        goals = [Goal.from_dict(data) for data in SAMPLE_GOALS]
        comments = [Comment.from_dict(data) for data in SAMPLE_COMMENTS]

        seen = set()
        for goal in goals:
            if goal.id in self.store or goal.id in seen:
                raise DuplicateGoalError(f"Sample goal id already taken: {goal.id}")
            seen.add(goal.id)

        for goal in goals:
            self.add_goal(goal)
        for comment in comments:
            self.comment_book.add(comment)
        self.logger.info(f"Loaded {len(SAMPLE_GOALS)} sample goals")

    # --- reads ---

    def list_goals(self) -> Tuple[Goal, ...]:
        return self.store.list()

    def get_goal(self, goal_id: Any) -> Optional[Goal]:
        return self.store.get(goal_id)

    def comments_for(self, goal_id: Any) -> Tuple[Comment, ...]:
        return self.comment_book.comments_for(goal_id)

    def milestones_of(self, goal: Goal) -> Tuple[str, ...]:
        return milestones_of(goal)

    def display_comments(self, goal: Goal) -> Tuple[str, ...]:
        """Comment lines for a goal: its own comments, then attached ones."""
        attached = self.comment_book.visible_for(self.store, goal.id)
        return goal.comments + tuple(f"{c.author}: {c.text}" for c in attached)

    def hidden_comments(self) -> Tuple[Comment, ...]:
        return self.comment_book.dangling(self.store)

    def percent_complete(self, goal: Goal) -> int:
        return self.aggregator.percent_complete(goal)

    def chart_series(
        self,
        target: Optional[Union[Goal, Sequence[Goal]]] = None,
    ) -> List[ChartPoint]:
        return self.aggregator.chart_series(target)

    def get_status(self) -> Dict[str, Any]:
        """Get current status"""
        goals = self.list_goals()
        return {
            "config": self.config.to_dict(),
            "goal_count": len(goals),
            "average_progress": self.aggregator.average_progress(goals),
            "rejected_submissions": self._rejected,
            "hidden_comments": len(self.hidden_comments()),
            "goals": [
                {
                    **goal.to_dict(),
                    "percent_complete": self.percent_complete(goal),
                    "display_comments": list(self.display_comments(goal)),
                    "chart": [list(p) for p in self.chart_series(goal)],
                }
                for goal in goals
            ],
            "trend": [list(p) for p in self.chart_series(goals)],
            "by_goal": [list(p) for p in self.aggregator.progress_by_goal(goals)],
            "by_status": [list(p) for p in self.aggregator.status_counts(goals)],
        }

    def get_summary(self) -> str:
        return self.aggregator.get_summary(self.list_goals())


def progress_bar(progress: int, width: int = BAR_WIDTH) -> str:
    filled = progress * width // 100
    return "[" + "#" * filled + "-" * (width - filled) + "]"


def render_dashboard(tracker: GoalTracker) -> str:
    """Render every goal card followed by the trend series."""
    lines = ["My Goals Dashboard", ""]
    goals = tracker.list_goals()

    if not goals:
        lines.append("No goals yet.")

    for goal in goals:
        lines.append(f"{goal.title} (#{goal.id})")
        if goal.description:
            lines.append(f"  {goal.description}")
        lines.append(f"  {progress_bar(goal.progress)} {tracker.percent_complete(goal)}% completed")

        split = ", ".join(f"{p.label} {p.value}" for p in tracker.chart_series(goal))
        lines.append(f"  {split}")

        milestones = tracker.milestones_of(goal)
        if milestones:
            lines.append("  Milestones:")
            lines.extend(f"    - {m}" for m in milestones)

        comments = tracker.display_comments(goal)
        if comments:
            lines.append("  Comments:")
            lines.extend(f"    - {c}" for c in comments)
        lines.append("")

    lines.append("Trend:")
    lines.extend(f"  {p.label}: {p.value}%" for p in tracker.chart_series(goals))
    lines.extend(["", tracker.get_summary()])
    return "\n".join(lines)


def _prompt_submissions(tracker: GoalTracker) -> None:
    """Read goal forms from stdin until an empty title or EOF."""
    while True:
        try:
            title = input("Goal title (empty to finish): ")
            if not title.strip():
                return
            progress = input("Progress %: ")
            milestones = input("Milestones (comma separated): ")
            comments = input("Comments (comma separated): ")
        except EOFError:
            return

        try:
            goal = tracker.submit(title, progress, milestones, comments)
            print(f"Added goal #{goal.id}")
        except ValidationError as e:
            print(f"Error: {e.message}", file=sys.stderr)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    import argparse

    parser = argparse.ArgumentParser(description="Goal Tracker")
    parser.add_argument("--config", "-c", help="Path to YAML config file")
    parser.add_argument("--mode", choices=["simple", "extended"], help="Comment mode")
    parser.add_argument("--policy", choices=["clamp", "reject"], help="Out-of-range progress policy")
    parser.add_argument("--samples", action="store_true", help="Load sample goals")
    parser.add_argument(
        "--add",
        nargs=4,
        action="append",
        default=[],
        metavar=("TITLE", "PROGRESS", "MILESTONES", "COMMENTS"),
        help="Submit a goal (repeatable)",
    )
    parser.add_argument("--interactive", "-i", action="store_true", help="Prompt for goals")
    parser.add_argument("--json", action="store_true", help="Print status as JSON")

    args = parser.parse_args(argv)

    config = TrackerConfig.from_yaml(args.config) if args.config else TrackerConfig()
    if args.mode:
        config.comment_mode = CommentMode(args.mode)
    if args.policy:
        config.progress_policy = ProgressPolicy(args.policy)

    tracker = GoalTracker(config)

    if args.samples:
        tracker.load_samples()

    failed = False
    for title, progress, milestones, comments in args.add:
        try:
            tracker.submit(title, progress, milestones, comments)
        except ValidationError as e:
            print(f"Error: {e.message}", file=sys.stderr)
            failed = True

    if args.interactive:
        _prompt_submissions(tracker)

    if args.json:
        print(json.dumps(tracker.get_status(), indent=2))
    else:
        print(render_dashboard(tracker))

    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
