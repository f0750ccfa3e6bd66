from __future__ import annotations

from typing import Optional, Protocol


class KeyValueStore(Protocol):
    """Durable text store addressed by a fixed key.

    Note (DIP): the persistence adapter depends on this interface, not on a
    concrete backend.
    """

    def get(self, key: str) -> Optional[str]:
        """Return the stored text, or ``None`` when nothing was saved yet."""
        raise NotImplementedError

    def set(self, key: str, value: str) -> None:
        """Overwrite the value stored under ``key``."""
        raise NotImplementedError
