from __future__ import annotations

from typing import Optional

from .repository import KeyValueStore


class InMemoryKeyValueStore(KeyValueStore):
    """Dict-backed store for tests, demos and the ``memory`` backend."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value
