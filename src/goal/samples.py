"""
Sample Goals

Demo collections for a fresh session. The last comment points at a goal
id that is never created and stays hidden.
"""

from typing import Any, Dict, List

SAMPLE_GOALS: List[Dict[str, Any]] = [
    {
        "id": "1",
        "title": "Goal 1",
        "progress": 80,
        "description": "Complete coding challenges for the week.",
        "milestones": ["Start working", "50% completed", "Goal achieved"],
    },
    {
        "id": "2",
        "title": "Goal 2",
        "progress": 40,
        "description": "Read a book and summarize chapters.",
        "milestones": ["Read 2 chapters", "50% completed"],
    },
    {
        "id": "3",
        "title": "Goal 3",
        "progress": 60,
        "description": "Build a personal website.",
        "milestones": ["Design homepage", "50% completed", "Finish project"],
    },
]

SAMPLE_COMMENTS: List[Dict[str, Any]] = [
    {"goalId": "1", "user": "Alice", "comment": "Great progress! Keep it up."},
    {"goalId": "2", "user": "Bob", "comment": "I like how you are managing your time."},
    {"goalId": "3", "user": "Charlie", "comment": "Looking good, add some more features!"},
    {"goalId": "99", "user": "Dana", "comment": "Is this one still on the list?"},
]
