"""
Progress Tracker: the state container.

Owns the current ProgressStore snapshot. Every change goes through
`dispatch`, which swaps in the new snapshot, persists it and notifies
subscribers. Readers get immutable snapshots and derived views.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from datetime import date

from loguru import logger

from .catalog import Problem, ProblemCatalog
from .progress import ProblemProgress, ProgressStore, toggle_review, toggle_solved
from .state_store import StateStore
from .stats import ALL, ProgressStats, aggregate, due_problems, filter_problems

Transition = Callable[[ProgressStore], ProgressStore]
Listener = Callable[[ProgressStore], None]


class ProgressTracker:
    """
    Single writer for progress state.

    Usage:
        tracker = ProgressTracker(StateStore(), catalog)
        tracker.toggle_solved("Blind 75", "two-sum")
        tracker.stats("Blind 75")
    """

    def __init__(
        self,
        state_store: StateStore,
        catalog: ProblemCatalog,
        clock: Callable[[], date] = date.today,
    ):
        """
        Initialize the tracker and rehydrate persisted progress.

        Args:
            state_store: Persistence backend
            catalog: Loaded problem catalog
            clock: Source of "today" (injectable for tests)
        """
        self.state_store = state_store
        self.catalog = catalog
        self.clock = clock

        self._store = state_store.load(catalog.list_names)
        self._listeners: list[Listener] = []

    @property
    def store(self) -> ProgressStore:
        """Current immutable snapshot."""
        return self._store

    @property
    def today(self) -> date:
        return self.clock()

    # =========================================================================
    # Mutation
    # =========================================================================

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a callback for new snapshots.

        Returns:
            Function that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def dispatch(self, transition: Transition) -> ProgressStore:
        """
        Apply a transition, persist the result and notify subscribers.

        A failed write is logged by the state store; the new snapshot
        is kept either way.
        """
        self._store = transition(self._store)
        self.state_store.save(self._store)
        for listener in list(self._listeners):
            listener(self._store)
        return self._store

    def _require_problem(self, list_name: str, problem_id: str) -> None:
        if list_name not in self.catalog:
            raise KeyError(f"Unknown list: {list_name}")
        if self.catalog.get(list_name, problem_id) is None:
            raise KeyError(f"Unknown problem {problem_id!r} in {list_name}")

    def toggle_solved(self, list_name: str, problem_id: str) -> ProblemProgress:
        """Flip a problem's solved flag; returns its new progress."""
        self._require_problem(list_name, problem_id)
        today = self.today
        store = self.dispatch(lambda s: toggle_solved(s, list_name, problem_id, today))
        return store.get(list_name, problem_id)

    def toggle_review(self, list_name: str, problem_id: str, review_index: int) -> ProblemProgress:
        """Flip review slot `review_index` (0-4); returns the new progress."""
        self._require_problem(list_name, problem_id)
        today = self.today
        store = self.dispatch(
            lambda s: toggle_review(s, list_name, problem_id, review_index, today)
        )
        return store.get(list_name, problem_id)

    def replace_store(self, store: ProgressStore) -> ProgressStore:
        """Swap in an imported store wholesale."""
        logger.info(f"Replacing progress store ({len(store.list_names)} lists)")
        return self.dispatch(lambda _: store)

    def clear(self) -> ProgressStore:
        """Reset every known list to empty progress."""
        logger.info("Clearing all progress")
        return self.dispatch(lambda _: ProgressStore.empty(self.catalog.list_names))

    # =========================================================================
    # Derived Views
    # =========================================================================

    def list_progress(self, list_name: str) -> Mapping[str, ProblemProgress]:
        return self._store.list_progress(list_name)

    def progress_for(self, list_name: str, problem_id: str) -> ProblemProgress:
        return self._store.get(list_name, problem_id)

    def stats(self, list_name: str, today: date | None = None) -> ProgressStats:
        return aggregate(
            self.catalog.problems(list_name),
            self.list_progress(list_name),
            today or self.today,
        )

    def due_problems(self, list_name: str, today: date | None = None) -> list[Problem]:
        return due_problems(
            self.catalog.problems(list_name),
            self.list_progress(list_name),
            today or self.today,
        )

    def filtered(
        self,
        list_name: str,
        category: str = ALL,
        difficulty: str = ALL,
        due_today_only: bool = False,
    ) -> list[Problem]:
        """Problems of a list after the table filters."""
        return filter_problems(
            self.catalog.problems(list_name),
            self.list_progress(list_name),
            category=category,
            difficulty=difficulty,
            due_today_only=due_today_only,
            today=self.today,
        )
