"""
Progress Aggregator

Derives completion percentages and chart-ready series from goals.
"""

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, List, NamedTuple, Optional, Sequence, Tuple, Union

from .models import MAX_PROGRESS, MIN_PROGRESS, Goal

logger = logging.getLogger(__name__)


class ChartPoint(NamedTuple):
    """One labeled value of a chart series"""
    label: str
    value: int


COMPLETED_LABEL = "Completed"
REMAINING_LABEL = "Remaining"

# Shown in place of a real history, which the tracker does not record
TREND_SERIES: Tuple[ChartPoint, ...] = (
    ChartPoint("Week 1", 30),
    ChartPoint("Week 2", 50),
    ChartPoint("Week 3", 60),
    ChartPoint("Week 4", 80),
)


class ProgressAggregator:
    """
    Computes derived progress values on demand.

    Nothing is cached and no input is modified; every call reads the
    goals it is given.
    """

    def percent_complete(self, goal: Goal) -> int:
        """Progress is stored on the goal, not derived from milestones."""
        return goal.progress

    def completion_split(self, goal: Goal) -> List[ChartPoint]:
        """Completed vs. remaining share of one goal, summing to 100."""
        return [
            ChartPoint(COMPLETED_LABEL, goal.progress),
            ChartPoint(REMAINING_LABEL, MAX_PROGRESS - goal.progress),
        ]

    def trend_series(self) -> List[ChartPoint]:
        return list(TREND_SERIES)

    def chart_series(
        self,
        target: Optional[Union[Goal, Iterable[Goal]]] = None,
    ) -> List[ChartPoint]:
        """
        Series for a chart.

        Args:
            target: A single goal for a pie split, or a goal collection
                (or None) for the trend line

        Returns:
            Ordered list of (label, value) points
        """
        if isinstance(target, Goal):
            return self.completion_split(target)
        return self.trend_series()

    def progress_by_goal(self, goals: Iterable[Goal]) -> List[ChartPoint]:
        """One point per goal, in the order given."""
        return [ChartPoint(g.title, g.progress) for g in goals]

    def average_progress(self, goals: Sequence[Goal]) -> int:
        """Mean progress rounded half up; 0 when there are no goals."""
        if not goals:
            return MIN_PROGRESS
        mean = Decimal(sum(g.progress for g in goals)) / len(goals)
        return int(mean.quantize(Decimal(1), rounding=ROUND_HALF_UP))

    def status_counts(self, goals: Iterable[Goal]) -> List[ChartPoint]:
        """Goals bucketed as not started, in progress or completed."""
        not_started = in_progress = completed = 0
        for goal in goals:
            if goal.progress == MIN_PROGRESS:
                not_started += 1
            elif goal.is_complete:
                completed += 1
            else:
                in_progress += 1

        return [
            ChartPoint("Not started", not_started),
            ChartPoint("In progress", in_progress),
            ChartPoint(COMPLETED_LABEL, completed),
        ]

    def get_summary(self, goals: Sequence[Goal]) -> str:
        """Get a text summary of progress across goals."""
        counts = {point.label: point.value for point in self.status_counts(goals)}
        lines = [
            f"Goals: {len(goals)}",
            f"Average progress: {self.average_progress(goals)}%",
            f"Completed: {counts[COMPLETED_LABEL]}",
            f"In progress: {counts['In progress']}",
            f"Not started: {counts['Not started']}",
        ]
        return "\n".join(lines)
