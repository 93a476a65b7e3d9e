"""
Progress model: immutable snapshots of solved/review state.

Provides:
- ProblemProgress: solved flag, solve date, five review flags and their dates
- ProgressStore: list name -> problem id -> ProblemProgress
- toggle_solved / toggle_review: copy-on-write transitions

Snapshots are never mutated in place; every transition returns a new
store that shares the untouched lists and entries with its predecessor.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from copy import deepcopy
from dataclasses import dataclass, field, replace
from datetime import date
from types import MappingProxyType
from typing import Any

from loguru import logger

from .scheduler import INITIAL_LABEL, REVIEW_COUNT, REVIEW_LABELS, review_label

_EMPTY_REVIEWS: tuple[bool, ...] = (False,) * REVIEW_COUNT
_KNOWN_LABELS = frozenset((INITIAL_LABEL, *REVIEW_LABELS))
_ENTRY_KEYS = frozenset(("solved", "solvedDate", "reviews", "dates"))

# =============================================================================
# Date Helpers
# =============================================================================


def parse_date(value: Any) -> date | None:
    """
    Parse a stored date string.

    Accepts "YYYY-MM-DD" and full ISO timestamps (only the date part is
    kept). Anything else yields None.
    """
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or len(value) < 10:
        return None
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        return None


def format_date(value: date | None) -> str | None:
    return value.isoformat() if value else None


# =============================================================================
# Data Classes
# =============================================================================


@dataclass(frozen=True)
class ReviewEntry:
    """One of the five review checkpoints."""

    completed: bool = False
    completed_date: date | None = None


@dataclass(frozen=True)
class ProblemProgress:
    """Progress on a single problem within a list."""

    solved: bool = False
    solved_date: date | None = None
    reviews: tuple[bool, ...] = _EMPTY_REVIEWS
    dates: Mapping[str, date] = field(default_factory=lambda: MappingProxyType({}))
    # Keys outside the known schema, written back unchanged
    extra: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    @property
    def entries(self) -> list[ReviewEntry]:
        """Reviews as ReviewEntry objects, in slot order."""
        return [
            ReviewEntry(completed=done, completed_date=self.dates.get(REVIEW_LABELS[idx]))
            for idx, done in enumerate(self.reviews)
        ]

    @property
    def completed_reviews(self) -> int:
        return sum(1 for done in self.reviews if done)

    @classmethod
    def from_dict(cls, data: Any) -> ProblemProgress:
        """
        Build progress from its persisted JSON form.

        Malformed parts are default-constructed rather than rejected:
        a missing or short `reviews` array is padded with False, bad
        dates are dropped, and a non-mapping entry becomes the default.
        Only a literal `true` counts as a set flag. Unrecognised keys are
        kept in `extra`.

        Args:
            data: Decoded JSON value for one problem

        Returns:
            ProblemProgress instance
        """
        if not isinstance(data, Mapping):
            return default_progress()

        raw_reviews = data.get("reviews")
        if not isinstance(raw_reviews, (list, tuple)):
            raw_reviews = []
        reviews = tuple(flag is True for flag in raw_reviews[:REVIEW_COUNT])
        reviews += (False,) * (REVIEW_COUNT - len(reviews))

        raw_dates = data.get("dates")
        dates: dict[str, date] = {}
        if isinstance(raw_dates, Mapping):
            for label, value in raw_dates.items():
                parsed = parse_date(value)
                if label in _KNOWN_LABELS and parsed is not None:
                    dates[label] = parsed

        return cls(
            solved=data.get("solved") is True,
            solved_date=parse_date(data.get("solvedDate")),
            reviews=reviews,
            dates=MappingProxyType(dates),
            extra=MappingProxyType(
                {key: deepcopy(value) for key, value in data.items() if key not in _ENTRY_KEYS}
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the persisted JSON form."""
        return {
            **deepcopy(dict(self.extra)),
            "solved": self.solved,
            "solvedDate": format_date(self.solved_date),
            "reviews": list(self.reviews),
            "dates": {label: value.isoformat() for label, value in self.dates.items()},
        }


def default_progress() -> ProblemProgress:
    """Progress of a problem nobody has touched: unsolved, no reviews, no dates."""
    return ProblemProgress()


# =============================================================================
# Progress Store
# =============================================================================


@dataclass(frozen=True)
class ProgressStore:
    """
    Immutable snapshot of progress across all lists.

    Lists and entries are created lazily; reading an absent entry
    yields `default_progress()`. Lists outside the catalog are held in
    `foreign` exactly as they were read and written back untouched.
    """

    lists: Mapping[str, Mapping[str, ProblemProgress]] = field(
        default_factory=lambda: MappingProxyType({})
    )
    foreign: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def empty(cls, list_names: Iterable[str]) -> ProgressStore:
        """Store with an empty map for each known list."""
        return cls(MappingProxyType({name: MappingProxyType({}) for name in list_names}))

    @property
    def list_names(self) -> list[str]:
        return [*self.lists, *(name for name in self.foreign if name not in self.lists)]

    def list_progress(self, list_name: str) -> Mapping[str, ProblemProgress]:
        """Per-problem progress for one list (empty if the list was never touched)."""
        if list_name not in self.lists and isinstance(self.foreign.get(list_name), Mapping):
            return _parse_entries(self.foreign[list_name])
        return self.lists.get(list_name, MappingProxyType({}))

    def get(self, list_name: str, problem_id: str) -> ProblemProgress:
        return self.list_progress(list_name).get(problem_id) or default_progress()

    def with_progress(
        self,
        list_name: str,
        problem_id: str,
        progress: ProblemProgress,
    ) -> ProgressStore:
        """Return a new store with one entry replaced."""
        entries = dict(self.list_progress(list_name))
        entries[problem_id] = progress
        lists = dict(self.lists)
        lists[list_name] = MappingProxyType(entries)
        foreign = self.foreign
        if list_name in foreign:
            foreign = MappingProxyType({k: v for k, v in foreign.items() if k != list_name})
        return ProgressStore(MappingProxyType(lists), foreign)

    @classmethod
    def from_dict(cls, data: Any, known_lists: Iterable[str] = ()) -> ProgressStore:
        """
        Build a store from its persisted JSON form.

        Every known list gets at least an empty map. Lists outside
        `known_lists` are kept verbatim, whatever their shape, so an
        import round-trips them.

        Args:
            data: Decoded JSON document
            known_lists: Catalog list names

        Returns:
            ProgressStore instance

        Raises:
            TypeError: If the document is not a JSON object
        """
        if not isinstance(data, Mapping):
            raise TypeError(f"Progress data must be an object, got {type(data).__name__}")

        lists: dict[str, Mapping[str, ProblemProgress]] = {
            name: MappingProxyType({}) for name in known_lists
        }
        foreign: dict[str, Any] = {}
        for list_name, entries in data.items():
            list_name = str(list_name)
            if list_name not in lists:
                foreign[list_name] = deepcopy(entries)
            elif isinstance(entries, Mapping):
                lists[list_name] = _parse_entries(entries)
            else:
                logger.warning(f"Ignoring malformed progress for list {list_name!r}")
        return cls(MappingProxyType(lists), MappingProxyType(foreign))

    def to_dict(self) -> dict[str, Any]:
        """Serialize the whole store."""
        data: dict[str, Any] = {
            list_name: {pid: progress.to_dict() for pid, progress in entries.items()}
            for list_name, entries in self.lists.items()
        }
        for list_name, payload in self.foreign.items():
            data.setdefault(list_name, deepcopy(payload))
        return data


def _parse_entries(entries: Mapping[str, Any]) -> Mapping[str, ProblemProgress]:
    return MappingProxyType(
        {str(pid): ProblemProgress.from_dict(raw) for pid, raw in entries.items()}
    )


# =============================================================================
# Transitions
# =============================================================================


def toggle_solved(
    store: ProgressStore,
    list_name: str,
    problem_id: str,
    today: date | None = None,
) -> ProgressStore:
    """
    Flip the solved flag of a problem.

    Marking solved stamps today as the solve date and the `initial`
    date; marking unsolved clears the solve date, every review flag and
    all recorded dates. Reviews always restart from scratch.

    Args:
        store: Current snapshot
        list_name: Problem list
        problem_id: Problem identifier
        today: Date to record (defaults to date.today())

    Returns:
        New snapshot
    """
    today = today or date.today()
    current = store.get(list_name, problem_id)

    if current.solved:
        updated = replace(
            current,
            solved=False,
            solved_date=None,
            reviews=_EMPTY_REVIEWS,
            dates=MappingProxyType({}),
        )
    else:
        updated = replace(
            current,
            solved=True,
            solved_date=today,
            reviews=_EMPTY_REVIEWS,
            dates=MappingProxyType({INITIAL_LABEL: today}),
        )

    logger.debug(f"{list_name}/{problem_id}: solved -> {updated.solved}")
    return store.with_progress(list_name, problem_id, updated)


def toggle_review(
    store: ProgressStore,
    list_name: str,
    problem_id: str,
    review_index: int,
    today: date | None = None,
) -> ProgressStore:
    """
    Flip one review flag of a problem.

    Completing a review records today under `review{n}`; undoing it
    removes that date. Solve state is left untouched.

    Args:
        store: Current snapshot
        list_name: Problem list
        problem_id: Problem identifier
        review_index: Review slot, 0-4
        today: Date to record (defaults to date.today())

    Returns:
        New snapshot

    Raises:
        ValueError: If review_index is outside 0-4
    """
    label = review_label(review_index)
    today = today or date.today()
    current = store.get(list_name, problem_id)

    reviews = list(current.reviews)
    reviews[review_index] = not reviews[review_index]

    dates = dict(current.dates)
    if reviews[review_index]:
        dates[label] = today
    else:
        dates.pop(label, None)

    updated = replace(current, reviews=tuple(reviews), dates=MappingProxyType(dates))
    logger.debug(f"{list_name}/{problem_id}: {label} -> {reviews[review_index]}")
    return store.with_progress(list_name, problem_id, updated)
