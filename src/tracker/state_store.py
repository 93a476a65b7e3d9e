"""
JSON State Store for progress tracking.

Persists the whole ProgressStore as one JSON document named after the
storage key (default: ~/.codetrack/leetcode-progress-v2.json).

I/O failures are contained: a failed load falls back to an empty
store, a failed save is logged and the in-memory snapshot stays
authoritative for the session.
"""

from __future__ import annotations

import json
import os
import tempfile
from collections.abc import Iterable
from datetime import datetime
from pathlib import Path

from loguru import logger

from .progress import ProgressStore

DEFAULT_STORAGE_KEY = "leetcode-progress-v2"


class ProgressImportError(Exception):
    """Raised when an import file cannot be read as a progress document."""
    pass


def _write_json_atomic(path: Path, data: dict) -> None:
    """Write JSON to a temp file in the target directory, then swap it in."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


class StateStore:
    """
    File-backed persistence for the progress snapshot.

    Handles:
    - Rehydrating the store at startup
    - Writing the store after every change
    - Export, import and backups for the CLI
    """

    DEFAULT_DATA_DIR = Path.home() / ".codetrack"

    def __init__(
        self,
        data_dir: Path | None = None,
        storage_key: str = DEFAULT_STORAGE_KEY,
    ):
        """
        Initialize the state store.

        Args:
            data_dir: Directory for the progress file (defaults to ~/.codetrack)
            storage_key: Name of the progress document
        """
        self.data_dir = data_dir or self.DEFAULT_DATA_DIR
        self.storage_key = storage_key
        self.path = self.data_dir / f"{storage_key}.json"
        self.backup_dir = self.data_dir / "backups"

    def load(self, known_lists: Iterable[str]) -> ProgressStore:
        """
        Load the persisted store.

        Never raises: a missing, unreadable or corrupt file yields an
        empty store with a map for every known list.

        Args:
            known_lists: Catalog list names

        Returns:
            ProgressStore snapshot
        """
        known_lists = list(known_lists)
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            store = ProgressStore.from_dict(data, known_lists)
        except FileNotFoundError:
            logger.debug(f"No saved progress at {self.path}, starting fresh")
            return ProgressStore.empty(known_lists)
        except (OSError, ValueError, TypeError) as e:
            logger.error(f"Error loading progress from {self.path}: {e}")
            return ProgressStore.empty(known_lists)

        logger.info(f"Loaded progress for {len(store.list_names)} lists from {self.path}")
        return store

    def save(self, store: ProgressStore) -> bool:
        """
        Persist the store.

        Returns:
            True if the write succeeded
        """
        try:
            _write_json_atomic(self.path, store.to_dict())
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Error saving progress to {self.path}: {e}")
            return False

        logger.debug(f"Saved progress to {self.path}")
        return True

    # =========================================================================
    # Export / Import
    # =========================================================================

    def export_to(self, store: ProgressStore, output: Path) -> Path:
        """
        Write the whole store to `output` in the persisted format.

        Raises:
            OSError: If the file cannot be written
        """
        _write_json_atomic(output, store.to_dict())
        logger.info(f"Exported progress to {output}")
        return output

    def import_from(self, input_file: Path, known_lists: Iterable[str]) -> ProgressStore:
        """
        Read a replacement store from an export file.

        The document is passed through as-is: lists that are not in the
        catalog are preserved.

        Raises:
            ProgressImportError: If the file is unreadable or not a progress object
        """
        try:
            data = json.loads(Path(input_file).read_text(encoding="utf-8"))
            store = ProgressStore.from_dict(data, known_lists)
        except (OSError, ValueError, TypeError) as e:
            raise ProgressImportError(f"Cannot import {input_file}: {e}") from e

        logger.info(f"Imported progress for {len(store.list_names)} lists from {input_file}")
        return store

    def backup(self, store: ProgressStore) -> Path:
        """
        Save a timestamped copy of the store before a destructive change.

        Raises:
            OSError: If the backup cannot be written
        """
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        backup_file = self.backup_dir / f"progress_backup_{timestamp}.json"
        _write_json_atomic(backup_file, store.to_dict())
        logger.info(f"Backup saved: {backup_file}")
        return backup_file

    def list_backups(self) -> list[Path]:
        """List available backup files, newest first."""
        if not self.backup_dir.exists():
            return []
        return sorted(self.backup_dir.glob("progress_backup_*.json"), reverse=True)
