"""
Pytest Configuration and Fixtures.

This file configures pytest and provides shared fixtures for all tests.
"""
import json
import sys
from datetime import date
from pathlib import Path

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "smoke: Smoke tests for CLI commands")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "smoke" in str(item.fspath):
            item.add_marker(pytest.mark.smoke)


@pytest.fixture(scope="session")
def project_root():
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def solved_day():
    """Day the sample problem was solved."""
    return date(2024, 1, 1)


@pytest.fixture
def sample_catalog_data():
    """Provide a small problem list in catalog file format."""
    return {
        "name": "Blind 75",
        "roadmap": "https://leetcode.com/problem-list/oizxjoit/",
        "problems": [
            {"id": "two-sum", "title": "Two Sum", "difficulty": "Easy", "topics": ["Array", "Hash Table"]},
            {"id": "3sum", "title": "3Sum", "difficulty": "Medium", "topics": ["Array", "Two Pointers"]},
            {"id": "coin-change", "title": "Coin Change", "difficulty": "Medium", "topics": ["Dynamic Programming"]},
            {"id": "merge-k-sorted-lists", "title": "Merge k Sorted Lists", "difficulty": "Hard", "topics": ["Linked List", "Heap"]},
        ],
    }


@pytest.fixture
def catalog_dir(tmp_path, sample_catalog_data):
    """Directory with one sample list and one extra list."""
    directory = tmp_path / "catalog"
    directory.mkdir()
    (directory / "blind75.json").write_text(json.dumps(sample_catalog_data))
    (directory / "extra.json").write_text(json.dumps({
        "name": "Extra",
        "problems": [{"id": "valid-anagram", "difficulty": "Easy", "topics": ["String"]}],
    }))
    return directory


@pytest.fixture
def catalog(catalog_dir):
    """Loaded sample catalog."""
    from src.tracker.catalog import ProblemCatalog

    loaded = ProblemCatalog(catalog_dir=catalog_dir)
    loaded.load()
    return loaded


@pytest.fixture
def state_store(tmp_path):
    """State store writing under a temporary data directory."""
    from src.tracker.state_store import StateStore

    return StateStore(data_dir=tmp_path / "data")
