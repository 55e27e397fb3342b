"""Process-lifetime cache for generated practice-area content.

The cache is an explicit object handed to whoever needs it, so tests and
separate runs never share entries by accident. Any MutableMapping can back it.
"""

from __future__ import annotations

from typing import MutableMapping, Optional


class ContentCache:
    def __init__(self, storage: Optional[MutableMapping] = None):
        self._storage = storage if storage is not None else {}

    @staticmethod
    def key(practice: str, city: str, state: str) -> str:
        return f"{practice}:{city}:{state}".lower()

    def get(self, key: str) -> Optional[dict]:
        return self._storage.get(key)

    def set(self, key: str, value: dict) -> None:
        self._storage[key] = value

    def clear(self) -> None:
        self._storage.clear()

    def __contains__(self, key: str) -> bool:
        return key in self._storage

    def __len__(self) -> int:
        return len(self._storage)
