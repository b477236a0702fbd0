"""
Edge Case Tests

Tests:
1. test_unicode_title_and_milestones
2. test_huge_progress_values
3. test_whitespace_variants_in_lists
4. test_many_goals_keep_order
5. test_mixed_id_types_in_comments
6. test_token_ids_with_reserved_samples
7. test_log_file_written
8. test_log_file_switch_closes_previous_handler
"""

import logging
import os

import pytest
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from goal.identifiers import IdStrategy
from goal.models import CommentMode
from goal.validator import InvalidProgressError, OutOfRangeProgressError, ValidationError
from tracker import GoalTracker, TrackerConfig


class TestInputEdgeCases:
    """Edge cases for raw form input"""

    def test_unicode_title_and_milestones(self, parser):
        """Test non-ASCII input passes through untouched"""
        goal = parser.parse_submission("Lire 📚", "10", "chapitre un, 第二章", "très bien")

        assert goal.title == "Lire 📚"
        assert goal.milestones == ("chapitre un", "第二章")
        assert goal.comments == ("très bien",)

    @pytest.mark.parametrize("raw,expected", [
        ("99999999999999999999", 100),
        ("-99999999999999999999", 0),
        ("101", 100),
        ("-1", 0),
        ("007", 7),
        ("0000000000000000000042", 42),
        ("9" * 5000, 100),
        ("-" + "9" * 5000, 0),
        ("+" + "9" * 5000, 100),
    ])
    def test_huge_progress_values(self, parser, raw, expected):
        assert parser.parse_submission("G", raw, "", "").progress == expected

    def test_huge_progress_rejected_under_reject_policy(self, strict_parser):
        """Test an over-long digit string is out of range, not malformed"""
        with pytest.raises(OutOfRangeProgressError) as exc_info:
            strict_parser.parse_submission("G", "9" * 5000, "", "")

        assert len(exc_info.value.message) < 100

    def test_whitespace_variants_in_lists(self, parser):
        """Test tabs and newlines around tokens are trimmed"""
        goal = parser.parse_submission("G", "1", "\ta\n,\n,  b\t", "")

        assert goal.milestones == ("a", "b")

    def test_duplicate_milestones_kept(self, parser):
        """Test repeated labels are not deduplicated"""
        goal = parser.parse_submission("G", "1", "step, step", "")

        assert goal.milestones == ("step", "step")

    def test_progress_with_inner_space(self, parser):
        with pytest.raises(InvalidProgressError):
            parser.parse_submission("G", "4 0", "", "")


class TestSessionEdgeCases:
    """Edge cases for a whole tracker session"""

    def test_many_goals_keep_order(self, tracker):
        created = [tracker.submit(f"Goal {i}", str(i), "", "") for i in range(101)]

        assert tracker.list_goals() == tuple(created)
        assert len({g.id for g in created}) == 101

    def test_failures_interleaved_with_successes(self, tracker):
        """Test rejected submissions never disturb stored goals"""
        inputs = [("A", "10"), ("", "10"), ("B", "x"), ("C", "200"), ("  ", "")]
        stored = []
        for title, progress in inputs:
            try:
                stored.append(tracker.submit(title, progress, "", ""))
            except ValidationError:
                pass

        assert [g.title for g in tracker.list_goals()] == ["A", "C"]
        assert [g.id for g in stored] == ["1", "2"]
        assert tracker.get_status()["rejected_submissions"] == 3

    def test_mixed_id_types_in_comments(self, extended_tracker):
        """Test numeric and string ids meet at one representation"""
        goal = extended_tracker.submit("G", "10", "", "")
        extended_tracker.add_comment(int(goal.id), "Int", "from int")
        extended_tracker.add_comment(f" {goal.id} ", "Str", "from str")

        assert [c.author for c in extended_tracker.comments_for(goal.id)] == ["Int", "Str"]
        assert extended_tracker.comments_for(int(goal.id)) == extended_tracker.comments_for(goal.id)

    def test_token_ids_with_reserved_samples(self):
        """Test token ids never collide with sample ids"""
        tracker = GoalTracker(TrackerConfig(id_strategy=IdStrategy.TOKEN, token_length=6))
        tracker.load_samples()
        goal = tracker.submit("Mine", "5", "", "")

        assert len(goal.id) == 6
        assert goal.id not in {"1", "2", "3"}
        assert len(tracker.list_goals()) == 4

    def test_extended_submission_without_comments(self, extended_tracker):
        goal = extended_tracker.submit("G", "10", "a", "")

        assert extended_tracker.comments_for(goal.id) == ()
        assert extended_tracker.display_comments(goal) == ()

    def test_extended_mode_from_string_config(self):
        tracker = GoalTracker(TrackerConfig.from_dict({"comment_mode": "extended"}))

        assert tracker.config.comment_mode == CommentMode.EXTENDED


class TestLoggingEdgeCases:
    """Edge cases for logging configuration"""

    def test_log_file_written(self, temp_dir):
        log_path = Path(temp_dir) / "tracker.log"
        tracker = GoalTracker(TrackerConfig(log_file=str(log_path)))

        try:
            tracker.submit("Logged", "10", "", "")
            for handler in logging.getLogger("goal").handlers:
                handler.flush()

            assert "Added goal 1: Logged" in log_path.read_text()
        finally:
            package_logger = logging.getLogger("goal")
            for handler in list(package_logger.handlers):
                if isinstance(handler, logging.FileHandler):
                    package_logger.removeHandler(handler)
                    handler.close()

    def test_repeated_trackers_share_one_stream_handler(self):
        GoalTracker()
        GoalTracker()

        stream_handlers = [
            h for h in logging.getLogger("goal").handlers
            if type(h) is logging.StreamHandler
        ]
        assert len(stream_handlers) == 1

    def test_log_file_switch_closes_previous_handler(self, temp_dir):
        """Test a tracker with a new log file stops writing to the old one"""
        first_path = Path(temp_dir) / "first.log"
        second_path = Path(temp_dir) / "second.log"
        package_logger = logging.getLogger("goal")

        try:
            first = GoalTracker(TrackerConfig(log_file=str(first_path)))
            old_handlers = [
                h for h in package_logger.handlers if isinstance(h, logging.FileHandler)
            ]
            second = GoalTracker(TrackerConfig(log_file=str(second_path)))

            first.submit("Before", "10", "", "")
            second.submit("After", "20", "", "")
            for handler in package_logger.handlers:
                handler.flush()

            file_handlers = [
                h for h in package_logger.handlers if isinstance(h, logging.FileHandler)
            ]
            assert [h.baseFilename for h in file_handlers] == [os.path.abspath(second_path)]
            assert all(h not in package_logger.handlers for h in old_handlers)
            assert all(h.stream is None for h in old_handlers)
            assert "Added goal 1: After" in second_path.read_text()
            assert "After" not in first_path.read_text()
        finally:
            for handler in list(package_logger.handlers):
                if isinstance(handler, logging.FileHandler):
                    package_logger.removeHandler(handler)
                    handler.close()

    def test_same_log_file_not_duplicated(self, temp_dir):
        log_path = Path(temp_dir) / "tracker.log"
        package_logger = logging.getLogger("goal")

        try:
            GoalTracker(TrackerConfig(log_file=str(log_path)))
            GoalTracker(TrackerConfig(log_file=str(log_path)))

            file_handlers = [
                h for h in package_logger.handlers if isinstance(h, logging.FileHandler)
            ]
            assert len(file_handlers) == 1
        finally:
            for handler in list(package_logger.handlers):
                if isinstance(handler, logging.FileHandler):
                    package_logger.removeHandler(handler)
                    handler.close()
