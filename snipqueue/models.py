"""Data model for queued snippets."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class ItemState(Enum):
    """Consumption state of a queued snippet."""

    ACTIVE = "active"
    USED = "used"


def normalize_text(text: str | None) -> str | None:
    """Return *text* trimmed, or ``None`` if nothing is left.

    Characters that cannot be stored as UTF-8 (lone surrogates, e.g. from
    undecodable argv bytes) are replaced with ``?``.
    """
    if not isinstance(text, str):
        return None
    trimmed = text.encode("utf-8", "replace").decode("utf-8").strip()
    return trimmed or None


def parse_timestamp(value: Any) -> datetime:
    """Parse an ISO-8601 timestamp, falling back to the epoch."""
    if not isinstance(value, str) or not value:
        return EPOCH
    try:
        # fromisoformat() only learned the "Z" suffix in 3.11
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return EPOCH
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass(frozen=True)
class QueueItem:
    """One queued text snippet.

    Instances are immutable; the repository swaps in a modified copy
    (see :meth:`with_text` / :meth:`with_state`) so snapshots handed to
    subscribers never change underneath them.
    """

    id: str
    text: str
    state: ItemState = ItemState.ACTIVE
    created_at: datetime = EPOCH

    @property
    def is_used(self) -> bool:
        return self.state is ItemState.USED

    def with_text(self, text: str) -> QueueItem:
        return replace(self, text=text)

    def with_state(self, state: ItemState) -> QueueItem:
        return replace(self, state=state)

    # -- persisted layout -----------------------------------------------------

    def to_record(self) -> dict[str, Any]:
        """Serialize to the on-disk record shape."""
        return {
            "id": self.id,
            "text": self.text,
            "isUsed": self.is_used,
            "createdAt": self.created_at.isoformat(),
        }

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> QueueItem | None:
        """Build an item from a persisted record.

        Returns ``None`` when the record lacks a usable ``id`` or ``text``.
        Unknown keys are ignored.  ``isChecked`` is honoured when ``isUsed``
        is absent (older files wrote that name for the same flag).
        """
        item_id = record.get("id")
        text = normalize_text(record.get("text"))
        if not isinstance(item_id, str) or not item_id or text is None:
            return None
        if "isUsed" in record:
            used = bool(record["isUsed"])
        else:
            used = bool(record.get("isChecked", False))
        return cls(
            id=item_id,
            text=text,
            state=ItemState.USED if used else ItemState.ACTIVE,
            created_at=parse_timestamp(record.get("createdAt")),
        )
