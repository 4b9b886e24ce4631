"""snipqueue - a persistent queue of text snippets you spend by copying or dragging."""

from .export import DragExportProtocol, ExportPayload
from .models import ItemState, QueueItem
from .persistence import QueueItemStore
from .repository import ItemRepository
from .store import QueueStore

__version__ = "0.1.0"

__all__ = [
    "DragExportProtocol",
    "ExportPayload",
    "ItemRepository",
    "ItemState",
    "QueueItem",
    "QueueItemStore",
    "QueueStore",
]
