"""
Durable user preferences: player alias and hand sort order.

Two stores share one interface:
- MemoryPreferenceStore: process-lifetime only (tests, ephemeral clients)
- JsonFilePreferenceStore: persisted to a small JSON file

The client reads these at session start and writes them on change; it never
depends on them being present.
"""

import json
import logging
from pathlib import Path
from typing import Optional, Protocol

from models.cards import SortPreference

logger = logging.getLogger(__name__)


class PreferenceStore(Protocol):
    """Interface the client uses for durable preferences."""

    def get_alias(self) -> Optional[str]: ...

    def set_alias(self, alias: str) -> None: ...

    def get_sort_preference(self) -> Optional[SortPreference]: ...

    def set_sort_preference(self, preference: SortPreference) -> None: ...


class MemoryPreferenceStore:
    """In-memory preference store."""

    def __init__(self, alias: Optional[str] = None, sort_preference: Optional[SortPreference] = None):
        self._data: dict[str, str] = {}
        if alias:
            self._data["alias"] = alias
        if sort_preference:
            self._data["sort"] = sort_preference.value

    def get_alias(self) -> Optional[str]:
        return self._data.get("alias") or None

    def set_alias(self, alias: str) -> None:
        self._data["alias"] = alias
        self._save()

    def get_sort_preference(self) -> Optional[SortPreference]:
        value = self._data.get("sort")
        if not value:
            return None
        try:
            return SortPreference.parse(value)
        except ValueError:
            logger.warning(f"Ignoring unknown stored sort preference {value!r}")
            return None

    def set_sort_preference(self, preference: SortPreference) -> None:
        self._data["sort"] = preference.value
        self._save()

    def _save(self) -> None:
        pass


class JsonFilePreferenceStore(MemoryPreferenceStore):
    """
    Preference store backed by a JSON file.

    A missing or unreadable file starts the store empty; a failed write is
    logged and the value is kept in memory for this process.
    """

    def __init__(self, path: str):
        super().__init__()
        self.path = Path(path)
        self._load()

    def _load(self) -> None:
        if not self.path.exists():
            return
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Could not read preferences from {self.path}: {e}")
            return
        if not isinstance(data, dict):
            logger.warning(f"Ignoring preferences file {self.path}: not an object")
            return
        self._data = {key: str(value) for key, value in data.items() if key in ("alias", "sort")}

    def _save(self) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(self._data, indent=2), encoding="utf-8")
        except OSError as e:
            logger.error(f"Failed to save preferences to {self.path}: {e}")


def get_preference_store(path: str = "") -> PreferenceStore:
    """File-backed store when ``path`` is set, in-memory otherwise."""
    if path:
        return JsonFilePreferenceStore(path)
    return MemoryPreferenceStore()
