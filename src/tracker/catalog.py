"""
Problem Catalog: curated problem lists.

Loads named lists ("Blind 75", "LeetCode 75", "NeetCode 150") from
JSON files. The bundled lists live in `src/tracker/data/`; a different
directory can be configured.

Each file looks like:
    {"name": "...", "roadmap": "https://...", "problems": [{...}, ...]}
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from loguru import logger

BUNDLED_CATALOG_DIR = Path(__file__).parent / "data"


class Difficulty(str, Enum):
    """Problem difficulty as labelled on LeetCode."""

    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"


# =============================================================================
# Problem Data Class
# =============================================================================


@dataclass(frozen=True)
class Problem:
    """A single catalog entry."""

    id: str
    title: str
    difficulty: Difficulty
    topics: tuple[str, ...] = ()
    url: str | None = None

    @classmethod
    def from_dict(cls, data: dict) -> Problem:
        """
        Create a Problem from a catalog JSON entry.

        Raises:
            KeyError: If id or difficulty is missing
            ValueError: If difficulty is not Easy/Medium/Hard
        """
        topics = data.get("topics") or []
        return cls(
            id=str(data["id"]),
            title=data.get("title") or data["id"],
            difficulty=Difficulty(data["difficulty"]),
            topics=tuple(dict.fromkeys(str(t) for t in topics)),
            url=data.get("url") or f"https://leetcode.com/problems/{data['id']}/",
        )


# =============================================================================
# Problem Catalog
# =============================================================================


class ProblemCatalog:
    """
    Read-only collection of named problem lists.

    Lists keep the order of their source file; list names keep the
    order of the sorted file names.
    """

    def __init__(self, catalog_dir: Path | None = None):
        """
        Initialize the catalog.

        Args:
            catalog_dir: Directory of list JSON files (defaults to the bundled lists)
        """
        self.catalog_dir = catalog_dir or BUNDLED_CATALOG_DIR

        self._lists: dict[str, list[Problem]] = {}
        self._roadmaps: dict[str, str] = {}

    @property
    def list_names(self) -> list[str]:
        return list(self._lists)

    def __contains__(self, list_name: object) -> bool:
        return list_name in self._lists

    def load(self) -> int:
        """
        Load every list file in the catalog directory.

        Returns:
            Number of lists loaded
        """
        self._lists.clear()
        self._roadmaps.clear()

        json_files = sorted(self.catalog_dir.glob("*.json"))
        if not json_files:
            logger.warning(f"No catalog files found in {self.catalog_dir}")
            return 0

        for path in json_files:
            self._load_file(path)

        logger.info(
            f"Catalog loaded: {len(self._lists)} lists, "
            f"{sum(len(p) for p in self._lists.values())} problems"
        )
        return len(self._lists)

    def _load_file(self, path: Path) -> int:
        """Load one list file; returns the number of problems loaded."""
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Failed to load {path}: {e}")
            return 0

        if not isinstance(data, dict) or not data.get("name"):
            logger.error(f"Catalog file {path} has no list name")
            return 0

        problems: list[Problem] = []
        seen: set[str] = set()
        for raw in data.get("problems", []):
            try:
                problem = Problem.from_dict(raw)
            except (KeyError, TypeError, ValueError) as e:
                logger.warning(f"Invalid problem in {path.name}: {e}")
                continue
            if problem.id in seen:
                logger.warning(f"Duplicate problem {problem.id!r} in {path.name}")
                continue
            seen.add(problem.id)
            problems.append(problem)

        name = data["name"]
        self._lists[name] = problems
        if data.get("roadmap"):
            self._roadmaps[name] = data["roadmap"]
        logger.debug(f"Loaded {len(problems)} problems for {name!r} from {path.name}")
        return len(problems)

    def problems(self, list_name: str) -> list[Problem]:
        """Problems of a list in catalog order (empty for unknown lists)."""
        return list(self._lists.get(list_name, []))

    def get(self, list_name: str, problem_id: str) -> Problem | None:
        for problem in self._lists.get(list_name, []):
            if problem.id == problem_id:
                return problem
        return None

    def roadmap_url(self, list_name: str) -> str | None:
        """Official study roadmap for a list, if one is known."""
        return self._roadmaps.get(list_name)
