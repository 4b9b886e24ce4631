"""Persistence layer – each store owns its file path, data format, and I/O."""

from .queue_items import ITEMS_KEY, QueueItemStore
from .slots import KeyValueSlotStore

__all__ = [
    "ITEMS_KEY",
    "KeyValueSlotStore",
    "QueueItemStore",
]
