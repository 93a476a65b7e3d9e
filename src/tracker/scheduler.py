"""
Review Scheduler: fixed-interval spaced repetition.

Every solved problem gets five review checkpoints at fixed offsets
from the day it was solved:

R1 - 1 day
R2 - 3 days
R3 - 7 days (1 week)
R4 - 14 days (2 weeks)
R5 - 30 days (1 month)

All dates are timezone-naive calendar dates.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .progress import ProblemProgress

# =============================================================================
# Schedule Constants
# =============================================================================

REVIEW_INTERVALS: tuple[int, ...] = (1, 3, 7, 14, 30)
REVIEW_COUNT = len(REVIEW_INTERVALS)
INITIAL_LABEL = "initial"


def review_label(index: int) -> str:
    """Storage label for review slot `index` (0-based): review1..review5."""
    if not 0 <= index < REVIEW_COUNT:
        raise ValueError(f"Review index must be in [0, {REVIEW_COUNT}), got {index}")
    return f"review{index + 1}"


REVIEW_LABELS: tuple[str, ...] = tuple(review_label(i) for i in range(REVIEW_COUNT))


# =============================================================================
# Scheduling
# =============================================================================


def schedule_reviews(solved_date: date | None) -> list[date]:
    """
    Compute the five target review dates for a solve.

    Args:
        solved_date: Day the problem was solved (None if unsolved)

    Returns:
        Target dates in slot order, or an empty list when unsolved
    """
    if solved_date is None:
        return []
    return [solved_date + timedelta(days=days) for days in REVIEW_INTERVALS]


def due_review_indices(progress: ProblemProgress, today: date) -> list[int]:
    """Indices of incomplete reviews whose target date is on or before today."""
    if not progress.solved:
        return []
    scheduled = schedule_reviews(progress.solved_date)
    return [
        idx
        for idx, target in enumerate(scheduled)
        if not progress.reviews[idx] and target <= today
    ]


def is_due(progress: ProblemProgress, today: date) -> bool:
    """
    Check whether a problem has at least one outstanding review.

    Overdue reviews count as due regardless of how late they are.
    """
    return bool(due_review_indices(progress, today))


def next_review(progress: ProblemProgress) -> tuple[int, date] | None:
    """First incomplete review slot and its target date, if any."""
    for idx, target in enumerate(schedule_reviews(progress.solved_date)):
        if not progress.reviews[idx]:
            return idx, target
    return None


def days_overdue(progress: ProblemProgress, today: date) -> int:
    """Days past the oldest outstanding review (0 when nothing is due)."""
    due = due_review_indices(progress, today)
    if not due:
        return 0
    oldest = schedule_reviews(progress.solved_date)[due[0]]
    return (today - oldest).days
