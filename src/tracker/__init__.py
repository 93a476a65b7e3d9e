"""
CodeTrack: spaced-repetition progress tracking for coding-interview lists.

A local, single-user tracker for curated problem lists (Blind 75,
LeetCode 75, NeetCode 150). Solving a problem schedules five reviews at
1, 3, 7, 14 and 30 days.

Components:
- ProblemCatalog: JSON problem lists and roadmap links
- Review scheduler: fixed-interval review dates and due checks
- ProgressStore: immutable progress snapshots and their transitions
- StateStore: JSON persistence with error containment
- ProgressTracker: state container with a single mutation entry point
- CLI: Rich terminal interface
"""

from .catalog import Difficulty, Problem, ProblemCatalog
from .progress import (
    ProblemProgress,
    ProgressStore,
    ReviewEntry,
    default_progress,
    toggle_review,
    toggle_solved,
)
from .scheduler import REVIEW_INTERVALS, is_due, schedule_reviews
from .state_store import ProgressImportError, StateStore
from .stats import ProgressStats, aggregate, filter_problems
from .tracker import ProgressTracker

__all__ = [
    # Catalog
    "ProblemCatalog",
    "Problem",
    "Difficulty",
    # Progress model
    "ProgressStore",
    "ProblemProgress",
    "ReviewEntry",
    "default_progress",
    "toggle_solved",
    "toggle_review",
    # Scheduling
    "REVIEW_INTERVALS",
    "schedule_reviews",
    "is_due",
    # Stats
    "ProgressStats",
    "aggregate",
    "filter_problems",
    # Persistence
    "StateStore",
    "ProgressImportError",
    # State container
    "ProgressTracker",
]
