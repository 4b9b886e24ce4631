"""Textual front end for the snippet queue."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.widgets import Footer, Header, Input, Label, ListItem, ListView, Static

from .export import DragExportProtocol
from .models import QueueItem
from .platform import copy_to_clipboard
from .preferences import Preferences, load_preferences, save_show_used
from .store import QueueStore


class QueueRow(ListItem):
    """One snippet in the list."""

    def __init__(self, item: QueueItem, show_timestamp: bool = False) -> None:
        self.item_id = item.id
        marker = "✓" if item.is_used else "•"
        label = f"{marker} {item.text}"
        if show_timestamp:
            label += f"  ({item.created_at:%Y-%m-%d %H:%M})"
        super().__init__(
            Label(label, markup=False),
            classes="used-item" if item.is_used else "active-item",
        )


class SnipQueueApp(App):
    """Capture snippets, then spend them one at a time."""

    TITLE = "snipqueue"

    CSS = """
    #queue-area {
        height: 1fr;
    }
    #snippet-input {
        dock: top;
        margin: 0 1;
    }
    #queue-list {
        height: 1fr;
    }
    .used-item {
        color: $text-muted;
        text-style: strike;
    }
    #status-bar {
        dock: bottom;
        height: 1;
        padding: 0 1;
        color: $text-muted;
    }
    """

    BINDINGS = [
        Binding("c", "copy_item", "Copy", show=True),
        Binding("space", "toggle_item", "Toggle", show=True),
        Binding("e", "edit_item", "Edit", show=True),
        Binding("d", "delete_item", "Delete", show=True),
        Binding("delete", "delete_item", "Delete", show=False),
        Binding("ctrl+up", "move_item(-1)", "Move up", show=False),
        Binding("ctrl+down", "move_item(1)", "Move down", show=False),
        Binding("x", "clear_used", "Clear used", show=True),
        Binding("ctrl+x", "clear_all", "Clear all", show=False),
        Binding("h", "toggle_show_used", "Hide used", show=False),
        Binding("i", "focus_input", "New", show=False),
        Binding("escape", "cancel_edit", "Cancel", show=False),
        Binding("ctrl+q", "quit", "Quit", show=True),
    ]

    def __init__(
        self,
        store: QueueStore,
        prefs: Preferences | None = None,
        prefs_path: Path | None = None,
        clipboard: Callable[[str], object] | None = None,
    ) -> None:
        super().__init__()
        self.store = store
        self.exporter = DragExportProtocol(store)
        self._prefs = prefs or load_preferences(prefs_path)
        self._prefs_path = prefs_path
        if clipboard is not None:
            self._clipboard = clipboard
        elif self._prefs.export.use_system_clipboard:
            self._clipboard = copy_to_clipboard
        else:
            self._clipboard = self.copy_to_clipboard
        self._visible_ids: list[str] = []
        self._editing_id: str | None = None
        self._unsubscribe: Callable[[], None] | None = None

    # ── Layout ──────────────────────────────────────────────────

    def compose(self) -> ComposeResult:
        yield Header()
        with Vertical(id="queue-area"):
            yield Input(placeholder="Type a snippet and press Enter", id="snippet-input")
            yield ListView(id="queue-list")
        yield Static("", id="status-bar")
        yield Footer()

    async def on_mount(self) -> None:
        self._unsubscribe = self.store.subscribe(self._on_store_changed)
        await self._rebuild()
        self.query_one("#snippet-input", Input).focus()

    # ── Store wiring ────────────────────────────────────────────

    def _on_store_changed(self, _items: tuple[QueueItem, ...]) -> None:
        self.call_later(self._rebuild)

    async def _rebuild(self) -> None:
        list_view = self.query_one("#queue-list", ListView)
        previous = list_view.index or 0
        show_used = self._prefs.display.show_used
        visible = [item for item in self.store.items if show_used or not item.is_used]
        self._visible_ids = [item.id for item in visible]
        await list_view.clear()
        await list_view.extend(
            QueueRow(item, self._prefs.display.show_timestamps) for item in visible
        )
        if visible:
            list_view.index = min(previous, len(visible) - 1)
        self._update_status()

    def _update_status(self) -> None:
        text = f"{self.store.active_count} active · {self.store.used_count} used"
        if not self._prefs.display.show_used and self.store.has_used:
            text += " (hidden)"
        if self._editing_id is not None:
            text += " · editing (Esc to cancel)"
        self.query_one("#status-bar", Static).update(text)

    def _selected_id(self) -> str | None:
        index = self.query_one("#queue-list", ListView).index
        if index is None or not 0 <= index < len(self._visible_ids):
            return None
        return self._visible_ids[index]

    # ── Input ───────────────────────────────────────────────────

    def on_input_submitted(self, event: Input.Submitted) -> None:
        text = event.value
        if self._editing_id is not None:
            self.store.update(self._editing_id, text)
            self._editing_id = None
        elif self.store.add(text) is None:
            self.bell()
            return
        event.input.value = ""
        self._update_status()

    def on_list_view_selected(self, event: ListView.Selected) -> None:
        self.action_copy_item()

    # ── Actions ─────────────────────────────────────────────────

    def action_copy_item(self) -> None:
        item_id = self._selected_id()
        if item_id is None:
            return
        payload = self.exporter.copy(item_id, self._clipboard)
        if payload is None:
            self.notify("Could not copy snippet", severity="warning")
        else:
            self.notify("Copied to clipboard", timeout=2)

    def action_toggle_item(self) -> None:
        item_id = self._selected_id()
        if item_id is not None:
            self.store.toggle(item_id)

    def action_delete_item(self) -> None:
        item_id = self._selected_id()
        if item_id is not None:
            self.store.remove(item_id)

    def action_move_item(self, offset: int) -> None:
        item_id = self._selected_id()
        if item_id is None:
            return
        # Step past the visible neighbour; hidden used items don't count
        target = self._visible_ids.index(item_id) + offset
        if not 0 <= target < len(self._visible_ids):
            return
        ids = [item.id for item in self.store.items]
        neighbour = self._visible_ids[target]
        if item_id not in ids or neighbour not in ids:
            return
        if self.store.move(item_id, ids.index(neighbour)):
            self.query_one("#queue-list", ListView).index = target

    def action_edit_item(self) -> None:
        item_id = self._selected_id()
        item = self.store.find(item_id) if item_id else None
        if item is None:
            return
        self._editing_id = item.id
        entry = self.query_one("#snippet-input", Input)
        entry.value = item.text
        entry.focus()
        self._update_status()

    def action_cancel_edit(self) -> None:
        if self._editing_id is None:
            return
        self._editing_id = None
        self.query_one("#snippet-input", Input).value = ""
        self._update_status()

    def action_focus_input(self) -> None:
        self.query_one("#snippet-input", Input).focus()

    def action_clear_used(self) -> None:
        self.store.clear_used()

    def action_clear_all(self) -> None:
        self.store.clear_all()

    async def action_toggle_show_used(self) -> None:
        self._prefs.display.show_used = not self._prefs.display.show_used
        save_show_used(self._prefs.display.show_used, self._prefs_path)
        await self._rebuild()

    async def action_quit(self) -> None:
        self.store.flush()
        if self._unsubscribe is not None:
            self._unsubscribe()
        self.exporter.close()
        self.exit()


def run_app(
    store: QueueStore,
    prefs: Preferences | None = None,
    prefs_path: Path | None = None,
) -> None:
    """Run the TUI until the user quits."""
    SnipQueueApp(store, prefs=prefs, prefs_path=prefs_path).run()
