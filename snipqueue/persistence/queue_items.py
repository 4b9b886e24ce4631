"""Queue item persistence gateway.

Serializes the whole item list into one slot of a
:class:`~snipqueue.persistence.slots.KeyValueSlotStore`.  Neither
:meth:`QueueItemStore.load` nor :meth:`QueueItemStore.save` ever raises:
the running process keeps its in-memory list as the source of truth and
the next successful save is the retry.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from ..log import logger
from ..models import QueueItem
from .slots import KeyValueSlotStore

ITEMS_KEY = "snipqueue.items"


class QueueItemStore:
    """Durable round-trip of the queue under :data:`ITEMS_KEY`.

    On-disk format (inside the slot file)::

        {"snipqueue.items": [{"id", "text", "isUsed", "createdAt"}, ...]}
    """

    def __init__(self, path: Path, key: str = ITEMS_KEY) -> None:
        self.slots = KeyValueSlotStore(path)
        self.key = key

    @property
    def path(self) -> Path:
        return self.slots.path

    def load(self) -> list[QueueItem]:
        """Load the persisted list; ``[]`` if absent or unreadable."""
        raw = self.slots.load_raw()
        if not isinstance(raw, dict):
            logger.warning("ignoring queue file %s: not a JSON object", self.path)
            return []
        records = raw.get(self.key)
        if records is None:
            return []
        if not isinstance(records, list):
            logger.warning("ignoring queue slot %r: expected a list", self.key)
            return []

        items: list[QueueItem] = []
        for position, record in enumerate(records):
            item = QueueItem.from_record(record) if isinstance(record, dict) else None
            if item is None:
                logger.warning("skipping malformed queue record at index %d", position)
                continue
            items.append(item)
        return items

    def save(self, items: Iterable[QueueItem]) -> bool:
        """Persist *items*.  Returns ``False`` (and logs) on failure."""
        try:
            self.slots.write(self.key, [item.to_record() for item in items])
        except (OSError, TypeError, ValueError):
            logger.warning("failed to save queue to %s", self.path, exc_info=True)
            return False
        return True
