"""Per-file ordered registry of unique message keys."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass


@dataclass(frozen=True)
class MessageEntry:
    """Catalog entry; the id always equals the key."""

    key: str

    @property
    def id(self) -> str:
        return self.key


class MessageKeyRegistry:
    """Insertion-ordered set of trimmed message keys for one file."""

    def __init__(self) -> None:
        self._keys: dict[str, None] = {}

    def add(self, key: str) -> bool:
        """
        Register ``key`` unless already present.

        Returns:
            True if the key was new
        """
        if key in self._keys:
            return False
        self._keys[key] = None
        return True

    def keys(self) -> list[str]:
        return list(self._keys)

    def entries(self) -> list[MessageEntry]:
        return [MessageEntry(key) for key in self._keys]

    def __contains__(self, key: object) -> bool:
        return key in self._keys

    def __len__(self) -> int:
        return len(self._keys)

    def __iter__(self) -> Iterator[str]:
        return iter(self._keys)
