"""
Storage
=======

Durable string key-value stores and the high score adapter on top of them.

A stored value that is missing or cannot be parsed reads as "no high score".
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, Optional, Protocol, Union


class KeyValueStore(Protocol):
    """String-keyed store of string values."""

    def get_item(self, key: str) -> Optional[str]: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


class MemoryStore:
    """In-process store. Nothing survives the process."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._items: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = str(value)

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


class JsonFileStore:
    """
    Store backed by a JSON object on disk.

    Every change writes a sibling temp file and renames it over the store,
    so an interrupted save leaves the previous contents intact. A missing,
    unreadable or malformed file reads as an empty store.
    """

    def __init__(self, path: Union[str, Path]):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> Dict[str, str]:
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError):
            return {}
        if not isinstance(data, dict):
            return {}
        return {str(k): str(v) for k, v in data.items()}

    @property
    def tmp_path(self) -> Path:
        """Sibling file written first, then moved over the real one."""
        return self._path.with_suffix(f"{self._path.suffix}.tmp")

    def _write(self, items: Dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.tmp_path
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(items, f, indent=2)
        tmp_path.replace(self._path)

    def get_item(self, key: str) -> Optional[str]:
        return self._read().get(key)

    def set_item(self, key: str, value: str) -> None:
        items = self._read()
        items[key] = str(value)
        self._write(items)

    def remove_item(self, key: str) -> None:
        items = self._read()
        if key in items:
            del items[key]
            self._write(items)


class HighScoreStore:
    """Loads, saves and clears the best score under a fixed key."""

    def __init__(self, store: KeyValueStore, key: str = "highScore"):
        self._store = store
        self._key = key

    @property
    def key(self) -> str:
        return self._key

    def load(self) -> Optional[int]:
        """
        Read the stored high score.

        Returns:
            The stored integer, or None if absent or unparsable.
        """
        raw = self._store.get_item(self._key)
        if raw is None:
            return None
        try:
            value = int(raw.strip())
        except ValueError:
            return None
        return value if value >= 0 else None

    def save(self, score: int) -> None:
        self._store.set_item(self._key, str(int(score)))

    def clear(self) -> None:
        self._store.remove_item(self._key)
