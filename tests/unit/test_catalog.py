"""
Unit tests for the problem catalog.
"""

import json

import pytest

from src.tracker.catalog import BUNDLED_CATALOG_DIR, Difficulty, Problem, ProblemCatalog


class TestProblem:
    """Test catalog entry parsing."""

    def test_from_dict(self):
        problem = Problem.from_dict({
            "id": "two-sum",
            "title": "Two Sum",
            "difficulty": "Easy",
            "topics": ["Array", "Hash Table", "Array"],
        })
        assert problem.difficulty is Difficulty.EASY
        assert problem.topics == ("Array", "Hash Table")
        assert problem.url == "https://leetcode.com/problems/two-sum/"

    def test_title_defaults_to_id(self):
        assert Problem.from_dict({"id": "3sum", "difficulty": "Medium"}).title == "3sum"

    def test_bad_difficulty(self):
        with pytest.raises(ValueError):
            Problem.from_dict({"id": "x", "difficulty": "Impossible"})

    def test_missing_id(self):
        with pytest.raises(KeyError):
            Problem.from_dict({"difficulty": "Easy"})


class TestProblemCatalog:
    """Test loading list files."""

    def test_load(self, catalog):
        assert catalog.list_names == ["Blind 75", "Extra"]
        assert [p.id for p in catalog.problems("Blind 75")] == [
            "two-sum", "3sum", "coin-change", "merge-k-sorted-lists",
        ]
        assert "Blind 75" in catalog
        assert "Nope" not in catalog

    def test_roadmap(self, catalog):
        assert catalog.roadmap_url("Blind 75") == "https://leetcode.com/problem-list/oizxjoit/"
        assert catalog.roadmap_url("Extra") is None

    def test_get(self, catalog):
        assert catalog.get("Blind 75", "3sum").title == "3Sum"
        assert catalog.get("Blind 75", "missing") is None
        assert catalog.get("Nope", "3sum") is None

    def test_unknown_list_is_empty(self, catalog):
        assert catalog.problems("Nope") == []

    def test_skips_invalid_entries(self, tmp_path):
        (tmp_path / "list.json").write_text(json.dumps({
            "name": "Mixed",
            "problems": [
                {"id": "ok", "difficulty": "Hard"},
                {"id": "bad", "difficulty": "Trivial"},
                {"title": "no id", "difficulty": "Easy"},
                {"id": "ok", "difficulty": "Easy"},
            ],
        }))
        catalog = ProblemCatalog(catalog_dir=tmp_path)
        assert catalog.load() == 1
        assert [p.id for p in catalog.problems("Mixed")] == ["ok"]

    def test_skips_unreadable_files(self, tmp_path):
        (tmp_path / "broken.json").write_text("{not json")
        (tmp_path / "nameless.json").write_text(json.dumps({"problems": []}))
        catalog = ProblemCatalog(catalog_dir=tmp_path)
        assert catalog.load() == 0
        assert catalog.list_names == []

    def test_empty_directory(self, tmp_path):
        assert ProblemCatalog(catalog_dir=tmp_path).load() == 0


class TestBundledLists:
    """Test the lists shipped with the package."""

    @pytest.fixture(scope="class")
    def bundled(self):
        catalog = ProblemCatalog()
        catalog.load()
        return catalog

    def test_default_directory(self):
        assert ProblemCatalog().catalog_dir == BUNDLED_CATALOG_DIR

    def test_names(self, bundled):
        assert bundled.list_names == ["Blind 75", "LeetCode 75", "NeetCode 150"]

    @pytest.mark.parametrize("name,size", [
        ("Blind 75", 75),
        ("LeetCode 75", 75),
        ("NeetCode 150", 150),
    ])
    def test_sizes(self, bundled, name, size):
        assert len(bundled.problems(name)) == size

    def test_roadmaps(self, bundled):
        assert bundled.roadmap_url("LeetCode 75") == "https://leetcode.com/studyplan/leetcode-75/"
        assert bundled.roadmap_url("NeetCode 150") == "https://neetcode.io/roadmap"

    def test_two_sum(self, bundled):
        problem = bundled.get("Blind 75", "two-sum")
        assert problem.difficulty is Difficulty.EASY
