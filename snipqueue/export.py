"""Drag/export protocol — how a snippet gets spent.

Exporting hands an item's text to the outside world (a drag session or
the clipboard).  Only a confirmed acceptance turns the item Used; a
cancelled drag changes nothing.  The accept/cancel callbacks are plain
id-keyed events that may arrive late, twice, or after the item is gone,
so each one re-checks the store instead of trusting captured state.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from .log import logger
from .models import QueueItem
from .store import QueueStore

ClipboardWriter = Callable[[str], object]


@dataclass(frozen=True)
class ExportPayload:
    """Plain-text payload handed to a drop target or the clipboard."""

    item_id: str
    text: str
    mime_type: str = "text/plain"

    @property
    def data(self) -> bytes:
        return self.text.encode("utf-8")


class DragExportProtocol:
    """Consumption state machine layered over a :class:`QueueStore`.

    An item is "exporting" between :meth:`begin_export` and the matching
    :meth:`on_export_accepted` / :meth:`on_export_cancelled`.  That flag
    lives here only; the store never sees it and it is never persisted.
    """

    def __init__(self, store: QueueStore) -> None:
        self._store = store
        self._in_flight: set[str] = set()
        self._unsubscribe = store.subscribe(self._prune)

    def is_exporting(self, item_id: str) -> bool:
        return item_id in self._in_flight

    def begin_export(self, item_id: str) -> ExportPayload | None:
        """Package *item_id* for a drag session.

        Returns ``None`` if the item is missing, already Used, or already
        mid-export.  Does not change the item's state.
        """
        item = self._store.find(item_id)
        if item is None or item.is_used or item_id in self._in_flight:
            return None
        self._in_flight.add(item_id)
        return ExportPayload(item_id=item.id, text=item.text)

    def on_export_accepted(self, item_id: str) -> bool:
        """A drop target consumed the payload: mark the item Used.

        Returns ``True`` only if this call changed the item.
        """
        self._in_flight.discard(item_id)
        return self._store.mark_used(item_id)

    def on_export_cancelled(self, item_id: str) -> None:
        self._in_flight.discard(item_id)

    def copy(self, item_id: str, writer: ClipboardWriter) -> ExportPayload | None:
        """Synchronous path: put the text on the clipboard and mark it Used.

        *writer* receives the text; if it returns ``False`` the copy is
        treated as failed and the item keeps its state.
        """
        item = self._store.find(item_id)
        if item is None:
            return None
        payload = ExportPayload(item_id=item.id, text=item.text)
        if writer(payload.text) is False:
            logger.debug("clipboard write failed for item %s", item_id)
            return None
        self._store.mark_used(item_id)
        return payload

    def close(self) -> None:
        """Detach from the store and forget any in-flight exports."""
        self._unsubscribe()
        self._in_flight.clear()

    def _prune(self, items: tuple[QueueItem, ...]) -> None:
        if not self._in_flight:
            return
        live = {item.id for item in items}
        self._in_flight &= live
