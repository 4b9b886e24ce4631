"""Queue store facade.

:class:`QueueStore` is the single entry point collaborators use.  It
composes an :class:`~snipqueue.repository.ItemRepository` with a
:class:`~snipqueue.persistence.QueueItemStore`: every mutation that
changes the list is persisted immediately and then announced to
subscribers, synchronously and in subscription order.

One store instance is built at process start and handed to whoever
needs it; it is not thread-safe and expects all calls on one thread.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from .log import logger
from .models import QueueItem
from .persistence import QueueItemStore
from .repository import ItemRepository

Subscriber = Callable[[tuple[QueueItem, ...]], object]


class QueueStore:
    """Persistent, observable queue of text snippets.

    Parameters
    ----------
    gateway:
        Loads the initial list once and saves after each change.
    repository:
        Optional pre-built repository (tests inject deterministic ids).
    """

    def __init__(
        self,
        gateway: QueueItemStore,
        repository: ItemRepository | None = None,
    ) -> None:
        self._gateway = gateway
        self._repo = repository if repository is not None else ItemRepository()
        self._subscribers: list[Subscriber] = []
        self._repo.replace_all(gateway.load())

    @classmethod
    def open(cls, path: Path) -> QueueStore:
        """Startup hook: build a store backed by the slot file at *path*."""
        return cls(QueueItemStore(path))

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def items(self) -> tuple[QueueItem, ...]:
        return self._repo.items()

    def find(self, item_id: str) -> QueueItem | None:
        return self._repo.find(item_id)

    def __len__(self) -> int:
        return len(self._repo)

    @property
    def active_count(self) -> int:
        return self._repo.active_count

    @property
    def used_count(self) -> int:
        return self._repo.used_count

    @property
    def has_used(self) -> bool:
        return self._repo.has_used

    # ------------------------------------------------------------------
    # Subscriptions
    # ------------------------------------------------------------------

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register *callback*; returns a function that unregisters it."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    # ------------------------------------------------------------------
    # Mutations (mutate, persist, notify)
    # ------------------------------------------------------------------

    def add(self, text: str) -> str | None:
        item_id = self._repo.add(text)
        if item_id is not None:
            self._commit()
        return item_id

    def remove(self, item_id: str) -> bool:
        return self._apply(self._repo.remove(item_id))

    def update(self, item_id: str, text: str) -> bool:
        return self._apply(self._repo.update(item_id, text))

    def toggle(self, item_id: str) -> bool:
        return self._apply(self._repo.toggle(item_id))

    def mark_used(self, item_id: str) -> bool:
        return self._apply(self._repo.mark_used(item_id))

    def move(self, item_id: str, index: int) -> bool:
        return self._apply(self._repo.move(item_id, index))

    def clear_used(self) -> int:
        removed = self._repo.clear_used()
        self._apply(removed > 0)
        return removed

    def clear_all(self) -> int:
        removed = self._repo.clear_all()
        self._apply(removed > 0)
        return removed

    def flush(self) -> bool:
        """Shutdown hook: write the current list regardless of changes."""
        return self._gateway.save(self._repo.items())

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _apply(self, changed: bool) -> bool:
        if changed:
            self._commit()
        return changed

    def _commit(self) -> None:
        snapshot = self._repo.items()
        self._gateway.save(snapshot)
        for callback in list(self._subscribers):
            try:
                callback(snapshot)
            except Exception:
                logger.warning("queue subscriber %r failed", callback, exc_info=True)
