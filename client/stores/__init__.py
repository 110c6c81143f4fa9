"""Stores package for client-side persistence."""

from .preferences import (
    JsonFilePreferenceStore,
    MemoryPreferenceStore,
    PreferenceStore,
    get_preference_store,
)

__all__ = [
    "JsonFilePreferenceStore",
    "MemoryPreferenceStore",
    "PreferenceStore",
    "get_preference_store",
]
