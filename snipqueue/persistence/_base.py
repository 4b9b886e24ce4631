"""Base JSON persistence store."""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path

from ..log import logger


class JsonStore:
    """JSON file store with atomic write.

    Subclasses override ``_default()`` to provide the empty-state value
    (``{}`` for dicts, ``[]`` for lists).
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    # -- core I/O -------------------------------------------------------------

    def load_raw(self) -> dict | list:
        """Read and parse the JSON file, returning ``_default()`` on any error."""
        try:
            if self.path.exists():
                return json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError, TypeError, RecursionError):
            # ValueError covers JSONDecodeError, UnicodeDecodeError and
            # over-long integer literals
            logger.warning("failed to load JSON store from %s", self.path, exc_info=True)
        return self._default()

    def save_raw(self, data: dict | list, *, sort_keys: bool = False) -> None:
        """Write *data* as pretty-printed JSON, creating parents as needed.

        The file is written to a sibling temp file first and then moved
        into place, so a crash mid-write leaves the previous contents.
        Raises ``OSError`` / ``TypeError`` / ``ValueError`` on failure; the
        temp file is removed whatever the error.
        """
        payload = json.dumps(data, indent=2, ensure_ascii=False, sort_keys=sort_keys)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(payload)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    # -- override point -------------------------------------------------------

    def _default(self) -> dict | list:  # noqa: PLR6301
        """Return the empty-state value for this store (dict by default)."""
        return {}
