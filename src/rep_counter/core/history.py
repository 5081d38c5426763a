"""
history.py - Workout history store
==================================
Small JSON key-value file holding the ordered list of logged workouts
under the ``workouts`` key.
"""

import json
import os
import tempfile
from typing import Any, Dict, List

from ..exceptions import HistoryStoreError
from ..exercises.profiles import format_exercise_name

HISTORY_KEY = "workouts"
ENTRY_FIELDS = ("exercise", "reps", "timestamp", "date")


class WorkoutHistory:
    """Appends and reads logged workout entries."""

    def __init__(self, path: str, key: str = HISTORY_KEY):
        self.path = path
        self.key = key

    def _load_store(self) -> Dict[str, Any]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                store = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            raise HistoryStoreError(f"Cannot read workout history {self.path}: {exc}") from exc

        if not isinstance(store, dict):
            raise HistoryStoreError(f"Workout history {self.path} is not a JSON object")
        return store

    def entries(self) -> List[Dict[str, Any]]:
        entries = self._load_store().get(self.key, [])
        if not isinstance(entries, list):
            raise HistoryStoreError(f"'{self.key}' in {self.path} is not a list")
        for i, entry in enumerate(entries):
            missing = [k for k in ENTRY_FIELDS if not isinstance(entry, dict) or k not in entry]
            if missing:
                raise HistoryStoreError(f"Entry {i} in {self.path} is missing {', '.join(missing)}")
        return entries

    def append(self, entry: Dict[str, Any]) -> List[Dict[str, Any]]:
        """Append one entry and return the updated list."""
        store = self._load_store()
        entries = store.get(self.key, [])
        if not isinstance(entries, list):
            raise HistoryStoreError(f"'{self.key}' in {self.path} is not a list")
        entries.append(entry)
        store[self.key] = entries
        self._write_store(store)
        return entries

    def _write_store(self, store: Dict[str, Any]):
        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)

        # Readers only ever see the old or the new file
        fd, tmp_path = tempfile.mkstemp(dir=directory, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(store, f, indent=2, ensure_ascii=False)
            os.replace(tmp_path, self.path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise

    @staticmethod
    def format_entry(entry: Dict[str, Any]) -> str:
        return f"{entry['timestamp']} – {format_exercise_name(entry['exercise'])}: {entry['reps']} reps"
