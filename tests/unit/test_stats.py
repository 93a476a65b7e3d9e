"""
Unit tests for the stats aggregator and problem filters.
"""

from datetime import date

import pytest

from src.tracker.catalog import Difficulty, Problem
from src.tracker.progress import ProgressStore, toggle_review, toggle_solved
from src.tracker.stats import (
    DIFFICULTIES,
    ProgressStats,
    aggregate,
    categories,
    due_problems,
    filter_problems,
)

LIST = "Blind 75"
TODAY = date(2024, 1, 9)


@pytest.fixture
def problems():
    return [
        Problem("two-sum", "Two Sum", Difficulty.EASY, ("Array", "Hash Table")),
        Problem("3sum", "3Sum", Difficulty.MEDIUM, ("Array", "Two Pointers")),
        Problem("coin-change", "Coin Change", Difficulty.MEDIUM, ("Dynamic Programming",)),
        Problem("merge-k-sorted-lists", "Merge k Sorted Lists", Difficulty.HARD, ("Linked List", "Heap")),
    ]


@pytest.fixture
def progress():
    """two-sum solved 01-01, 3sum solved 01-08 (R1 on 01-09), coin-change reviewed through R3."""
    store = ProgressStore.empty([LIST])
    store = toggle_solved(store, LIST, "two-sum", today=date(2024, 1, 1))
    store = toggle_solved(store, LIST, "3sum", today=date(2024, 1, 8))
    store = toggle_solved(store, LIST, "coin-change", today=date(2024, 1, 1))
    for idx, day in enumerate([date(2024, 1, 2), date(2024, 1, 4), date(2024, 1, 8)]):
        store = toggle_review(store, LIST, "coin-change", idx, today=day)
    return store.list_progress(LIST)


class TestAggregate:
    """Test the progress card counts."""

    def test_counts(self, problems, progress):
        stats = aggregate(problems, progress, TODAY)
        assert stats.total == 4
        assert stats.solved == 3
        assert (stats.easy, stats.medium, stats.hard) == (1, 2, 0)
        assert stats.due_today == 2
        assert (stats.easy_total, stats.medium_total, stats.hard_total) == (1, 2, 1)
        assert stats.percent_complete == 75.0

    def test_idempotent(self, problems, progress):
        assert aggregate(problems, progress, TODAY) == aggregate(problems, progress, TODAY)

    def test_empty_progress(self, problems):
        stats = aggregate(problems, {}, TODAY)
        assert stats == ProgressStats(total=4, easy_total=1, medium_total=2, hard_total=1)

    def test_empty_list(self):
        stats = aggregate([], {}, TODAY)
        assert stats.total == 0
        assert stats.percent_complete == 0.0

    def test_ignores_progress_outside_catalog(self, problems, progress):
        """Entries for ids not in the list are not counted."""
        store = toggle_solved(ProgressStore({LIST: progress}), LIST, "not-in-list", today=date(2024, 1, 1))
        stats = aggregate(problems, store.list_progress(LIST), TODAY)
        assert stats.solved == 3


class TestFilters:
    """Test the problem-table filters."""

    def test_categories_in_first_appearance_order(self, problems):
        assert categories(problems) == [
            "All", "Array", "Hash Table", "Two Pointers",
            "Dynamic Programming", "Linked List", "Heap",
        ]

    def test_difficulties(self):
        assert DIFFICULTIES == ["All", "Easy", "Medium", "Hard"]

    def test_no_filters(self, problems, progress):
        assert filter_problems(problems, progress, today=TODAY) == problems

    def test_by_category(self, problems, progress):
        result = filter_problems(problems, progress, category="Array", today=TODAY)
        assert [p.id for p in result] == ["two-sum", "3sum"]

    def test_by_difficulty(self, problems, progress):
        result = filter_problems(problems, progress, difficulty="Medium", today=TODAY)
        assert [p.id for p in result] == ["3sum", "coin-change"]

    def test_due_only(self, problems, progress):
        result = filter_problems(problems, progress, due_today_only=True, today=TODAY)
        assert [p.id for p in result] == ["two-sum", "3sum"]

    def test_combined(self, problems, progress):
        result = filter_problems(
            problems, progress, category="Array", difficulty="Easy", due_today_only=True, today=TODAY
        )
        assert [p.id for p in result] == ["two-sum"]

    def test_due_problems(self, problems, progress):
        assert [p.id for p in due_problems(problems, progress, date(2024, 1, 1))] == []
        assert [p.id for p in due_problems(problems, progress, TODAY)] == ["two-sum", "3sum"]
