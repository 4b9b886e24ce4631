"""Named-slot persistence store.

One JSON object file holds any number of independent slots, each under
its own key, much like a preferences domain: ``{key: value, ...}``.
Writing one slot leaves the others untouched.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from ._base import JsonStore

_MISSING = object()


class KeyValueSlotStore(JsonStore):
    """Key-value slots persisted to a single JSON object file."""

    def __init__(self, path: Path) -> None:
        super().__init__(path)

    def read(self, key: str, default: Any = None) -> Any:
        """Return the value stored under *key*, or *default*."""
        data = self.load_raw()
        if not isinstance(data, dict):
            return default
        value = data.get(key, _MISSING)
        return default if value is _MISSING else value

    def write(self, key: str, value: Any) -> None:
        """Store *value* under *key*.  Raises on serialization or I/O failure."""
        data = self.load_raw()
        if not isinstance(data, dict):
            data = {}
        data[key] = value
        self.save_raw(data, sort_keys=True)
