"""
Derived views over a list's progress.

Provides the progress card counts and the problem-table filters.
Everything here is recomputed from the current snapshot on demand.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import date

from .catalog import Difficulty, Problem
from .progress import ProblemProgress, default_progress
from .scheduler import is_due

ALL = "All"
DIFFICULTIES: list[str] = [ALL, *(d.value for d in Difficulty)]


@dataclass(frozen=True)
class ProgressStats:
    """Counts shown on the progress card."""

    total: int = 0
    solved: int = 0
    easy: int = 0
    medium: int = 0
    hard: int = 0
    due_today: int = 0

    # Catalog totals per difficulty
    easy_total: int = 0
    medium_total: int = 0
    hard_total: int = 0

    @property
    def percent_complete(self) -> float:
        if self.total == 0:
            return 0.0
        return round(self.solved * 100 / self.total, 1)


def _lookup(progress: Mapping[str, ProblemProgress], problem_id: str) -> ProblemProgress:
    return progress.get(problem_id) or default_progress()


def aggregate(
    problems: Iterable[Problem],
    progress: Mapping[str, ProblemProgress],
    today: date,
) -> ProgressStats:
    """
    Count solved and due problems for the active list.

    Args:
        problems: Catalog entries of the active list
        progress: Per-problem progress of the same list
        today: Reference date for the due count

    Returns:
        ProgressStats snapshot
    """
    solved_by_difficulty = {d: 0 for d in Difficulty}
    total_by_difficulty = {d: 0 for d in Difficulty}
    total = solved = due = 0

    for problem in problems:
        entry = _lookup(progress, problem.id)
        total += 1
        total_by_difficulty[problem.difficulty] += 1
        if entry.solved:
            solved += 1
            solved_by_difficulty[problem.difficulty] += 1
        if is_due(entry, today):
            due += 1

    return ProgressStats(
        total=total,
        solved=solved,
        easy=solved_by_difficulty[Difficulty.EASY],
        medium=solved_by_difficulty[Difficulty.MEDIUM],
        hard=solved_by_difficulty[Difficulty.HARD],
        due_today=due,
        easy_total=total_by_difficulty[Difficulty.EASY],
        medium_total=total_by_difficulty[Difficulty.MEDIUM],
        hard_total=total_by_difficulty[Difficulty.HARD],
    )


def categories(problems: Iterable[Problem]) -> list[str]:
    """Topic choices for the category filter: "All", then topics by first appearance."""
    seen: dict[str, None] = {}
    for problem in problems:
        for topic in problem.topics:
            seen.setdefault(topic, None)
    return [ALL, *seen]


def due_problems(
    problems: Iterable[Problem],
    progress: Mapping[str, ProblemProgress],
    today: date,
) -> list[Problem]:
    return [p for p in problems if is_due(_lookup(progress, p.id), today)]


def filter_problems(
    problems: Iterable[Problem],
    progress: Mapping[str, ProblemProgress],
    category: str = ALL,
    difficulty: str = ALL,
    due_today_only: bool = False,
    today: date | None = None,
) -> list[Problem]:
    """
    Apply the problem-table filters, keeping catalog order.

    Args:
        problems: Catalog entries of the active list
        progress: Per-problem progress of the same list
        category: Topic to match exactly, or "All"
        difficulty: "Easy"/"Medium"/"Hard", or "All"
        due_today_only: Keep only problems with an outstanding review
        today: Reference date for the due predicate

    Returns:
        Matching problems
    """
    today = today or date.today()
    result = []
    for problem in problems:
        if category != ALL and category not in problem.topics:
            continue
        if difficulty != ALL and problem.difficulty.value != difficulty:
            continue
        if due_today_only and not is_due(_lookup(progress, problem.id), today):
            continue
        result.append(problem)
    return result
