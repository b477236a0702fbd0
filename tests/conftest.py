"""
Pytest configuration and shared fixtures
"""

import pytest
import tempfile
from pathlib import Path

# Add src to path
import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from goal.comments import CommentBook
from goal.identifiers import IdGenerator
from goal.models import Comment, CommentMode, Goal
from goal.parser import SubmissionParser
from goal.progress import ProgressAggregator
from goal.store import GoalStore
from goal.validator import GoalValidator, ProgressPolicy
from tracker import GoalTracker, TrackerConfig


@pytest.fixture
def sample_goal():
    """Create a sample goal for testing"""
    return Goal(
        id="1",
        title="Test Goal",
        progress=80,
        milestones=("Start working", "50% completed", "Goal achieved"),
        comments=("Nice", "Keep going"),
        description="A test goal for unit testing",
    )


@pytest.fixture
def fresh_goal():
    """Create a goal that has not been started"""
    return Goal(id="2", title="Fresh Goal", progress=0)


@pytest.fixture
def completed_goal():
    """Create a fully completed goal"""
    return Goal(id="3", title="Completed Goal", progress=100, milestones=("Done",))


@pytest.fixture
def store():
    """Create an empty goal store"""
    return GoalStore()


@pytest.fixture
def comment_book():
    """Create a comment book with one dangling comment"""
    book = CommentBook()
    book.add(Comment(goal_id="1", author="Alice", text="Great progress!"))
    book.add(Comment(goal_id="2", author="Bob", text="Manage your time."))
    book.add(Comment(goal_id=1, author="Carol", text="Second one for goal 1"))
    book.add(Comment(goal_id="99", author="Dana", text="Nobody sees this"))
    return book


@pytest.fixture
def parser():
    """Create a submission parser with a fresh counter"""
    return SubmissionParser(id_generator=IdGenerator())


@pytest.fixture
def strict_parser():
    """Create a parser that rejects out-of-range progress"""
    return SubmissionParser(
        id_generator=IdGenerator(),
        validator=GoalValidator(ProgressPolicy.REJECT),
    )


@pytest.fixture
def aggregator():
    return ProgressAggregator()


@pytest.fixture
def tracker():
    """Create a simple-mode tracker"""
    return GoalTracker(TrackerConfig(log_level="DEBUG"))


@pytest.fixture
def extended_tracker():
    """Create an extended-mode tracker"""
    return GoalTracker(TrackerConfig(comment_mode=CommentMode.EXTENDED, default_author="Sam"))


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir


@pytest.fixture
def temp_config_file(temp_dir):
    """Create a temporary YAML config file"""
    config_content = """tracker:
  comment_mode: extended
  progress_policy: reject
  id_strategy: token
  token_length: 8
  default_author: Tester
  log_level: WARNING
"""
    config_path = Path(temp_dir) / "tracker.yaml"
    config_path.write_text(config_content)
    return str(config_path)
