"""In-memory ordered collection of queue items.

The :class:`ItemRepository` owns the list and its id index and nothing
else: no I/O, no notifications.  Every id-keyed operation treats an
unknown id as a silent no-op so late callbacks (a drag session that ends
after its item was deleted, say) can never fail.
"""

from __future__ import annotations

import uuid
from collections.abc import Callable, Iterable, Iterator
from datetime import datetime, timezone

from .models import ItemState, QueueItem, normalize_text


def _new_id() -> str:
    return str(uuid.uuid4())


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ItemRepository:
    """Ordered list of :class:`QueueItem` (most recent first).

    Parameters
    ----------
    id_factory:
        Returns a fresh opaque id string.  Defaults to UUID4.
    clock:
        Returns the creation timestamp for new items.
    """

    def __init__(
        self,
        *,
        id_factory: Callable[[], str] = _new_id,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._items: list[QueueItem] = []
        self._id_factory = id_factory
        self._clock = clock

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[QueueItem]:
        return iter(list(self._items))

    def __contains__(self, item_id: object) -> bool:
        return self._index_of(item_id) is not None

    def items(self) -> tuple[QueueItem, ...]:
        """Snapshot of the list in display order."""
        return tuple(self._items)

    def find(self, item_id: str) -> QueueItem | None:
        idx = self._index_of(item_id)
        return None if idx is None else self._items[idx]

    @property
    def active_count(self) -> int:
        return sum(1 for item in self._items if not item.is_used)

    @property
    def used_count(self) -> int:
        return sum(1 for item in self._items if item.is_used)

    @property
    def has_used(self) -> bool:
        return any(item.is_used for item in self._items)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def add(self, text: str) -> str | None:
        """Prepend a new Active item.  Returns its id, or ``None`` if rejected."""
        clean = normalize_text(text)
        if clean is None:
            return None
        item_id = self._id_factory()
        while item_id in self:
            item_id = self._id_factory()
        self._items.insert(
            0, QueueItem(id=item_id, text=clean, created_at=self._clock())
        )
        return item_id

    def remove(self, item_id: str) -> bool:
        idx = self._index_of(item_id)
        if idx is None:
            return False
        del self._items[idx]
        return True

    def update(self, item_id: str, text: str) -> bool:
        """Replace the text of *item_id* in place, keeping id, state and position."""
        clean = normalize_text(text)
        idx = self._index_of(item_id)
        if clean is None or idx is None:
            return False
        current = self._items[idx]
        if current.text == clean:
            return False
        self._items[idx] = current.with_text(clean)
        return True

    def toggle(self, item_id: str) -> bool:
        idx = self._index_of(item_id)
        if idx is None:
            return False
        current = self._items[idx]
        flipped = ItemState.ACTIVE if current.is_used else ItemState.USED
        self._items[idx] = current.with_state(flipped)
        return True

    def mark_used(self, item_id: str) -> bool:
        """Force *item_id* to Used.  Returns ``False`` if absent or already Used."""
        idx = self._index_of(item_id)
        if idx is None or self._items[idx].is_used:
            return False
        self._items[idx] = self._items[idx].with_state(ItemState.USED)
        return True

    def move(self, item_id: str, index: int) -> bool:
        """Move *item_id* to position *index* (clamped to the list bounds)."""
        idx = self._index_of(item_id)
        if idx is None:
            return False
        target = max(0, min(index, len(self._items) - 1))
        if target == idx:
            return False
        item = self._items.pop(idx)
        self._items.insert(target, item)
        return True

    def clear_used(self) -> int:
        """Drop every Used item.  Returns how many were removed."""
        kept = [item for item in self._items if not item.is_used]
        removed = len(self._items) - len(kept)
        self._items = kept
        return removed

    def clear_all(self) -> int:
        removed = len(self._items)
        self._items = []
        return removed

    def replace_all(self, items: Iterable[QueueItem]) -> None:
        """Install *items* as the whole list (used once, at load time).

        Later duplicates of an id and items with blank text are dropped.
        """
        seen: set[str] = set()
        installed: list[QueueItem] = []
        for item in items:
            if item.id in seen or normalize_text(item.text) is None:
                continue
            seen.add(item.id)
            installed.append(item)
        self._items = installed

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _index_of(self, item_id: object) -> int | None:
        for idx, item in enumerate(self._items):
            if item.id == item_id:
                return idx
        return None
