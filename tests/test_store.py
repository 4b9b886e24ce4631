"""Tests for snipqueue.store.QueueStore (mutate, persist, notify)."""

from __future__ import annotations

from unittest.mock import patch

from snipqueue.models import ItemState
from snipqueue.persistence import QueueItemStore
from snipqueue.store import QueueStore


def _texts(store: QueueStore) -> list[str]:
    return [item.text for item in store.items]


def _reopen(queue_path) -> QueueStore:
    return QueueStore(QueueItemStore(queue_path))


class TestInitialLoad:
    def test_starts_empty_without_file(self, store):
        assert store.items == ()

    def test_loads_persisted_items(self, store, queue_path):
        store.add("A")
        store.add("B")
        reopened = _reopen(queue_path)
        assert reopened.items == store.items

    def test_corrupt_file_starts_empty(self, queue_path):
        queue_path.write_text("{{{ nope")
        assert _reopen(queue_path).items == ()

    def test_open_classmethod(self, queue_path):
        store = QueueStore.open(queue_path)
        store.add("hello")
        assert _texts(QueueStore.open(queue_path)) == ["hello"]


class TestScenarios:
    def test_add_single(self, store):
        store.add("Buy milk")
        (item,) = store.items
        assert item.text == "Buy milk"
        assert item.state is ItemState.ACTIVE

    def test_most_recent_first(self, store):
        store.add("A")
        store.add("B")
        assert _texts(store) == ["B", "A"]

    def test_mark_used_then_clear_used(self, store):
        a = store.add("A")
        store.add("B")
        store.mark_used(a)
        assert [(i.text, i.state) for i in store.items] == [
            ("B", ItemState.ACTIVE),
            ("A", ItemState.USED),
        ]
        assert store.clear_used() == 1
        assert [(i.text, i.state) for i in store.items] == [("B", ItemState.ACTIVE)]

    def test_blank_add_changes_nothing(self, store):
        store.add("A")
        assert store.add("") is None
        assert store.add("   ") is None
        assert _texts(store) == ["A"]


class TestPersistence:
    def test_every_mutation_is_persisted(self, store, queue_path):
        a = store.add("A")
        b = store.add("B")
        store.update(a, "A2")
        store.toggle(b)
        store.move(a, 0)
        reopened = _reopen(queue_path)
        assert [(i.text, i.is_used) for i in reopened.items] == [
            ("A2", False),
            ("B", True),
        ]

    def test_remove_and_clear_all_persisted(self, store, queue_path):
        a = store.add("A")
        store.add("B")
        store.remove(a)
        assert _texts(_reopen(queue_path)) == ["B"]
        store.clear_all()
        assert _reopen(queue_path).items == ()

    def test_noop_does_not_save(self, store):
        store.add("A")
        with patch.object(QueueItemStore, "save") as save:
            store.remove("missing")
            store.mark_used("missing")
            store.update("missing", "x")
            store.clear_used()
            store.add("  ")
        save.assert_not_called()

    def test_save_failure_keeps_memory_state(self, store, queue_path):
        with patch.object(QueueItemStore, "save", return_value=False):
            item_id = store.add("kept in memory")
        assert store.find(item_id).text == "kept in memory"
        assert _reopen(queue_path).items == ()
        # next successful mutation persists everything
        store.add("next")
        assert _texts(_reopen(queue_path)) == ["next", "kept in memory"]

    def test_flush_writes_current_list(self, store, queue_path):
        with patch.object(QueueItemStore, "save", return_value=False):
            store.add("unsaved")
        assert store.flush() is True
        assert _texts(_reopen(queue_path)) == ["unsaved"]

    def test_unencodable_text_is_saved_repaired(self, store, queue_path):
        store.add("ok")
        store.add("bad \udcff")
        store.add("more")
        assert _texts(_reopen(queue_path)) == ["more", "bad ?", "ok"]
        assert [p.name for p in queue_path.parent.iterdir()] == ["queue.json"]


class TestSubscriptions:
    def test_one_notification_per_mutation(self, store):
        calls = []
        store.subscribe(calls.append)
        a = store.add("A")
        store.toggle(a)
        store.update(a, "A2")
        store.remove(a)
        assert len(calls) == 4
        assert calls[0][0].text == "A"
        assert calls[-1] == ()

    def test_notifications_carry_current_list(self, store):
        seen = []
        store.subscribe(lambda items: seen.append([i.text for i in items]))
        store.add("A")
        store.add("B")
        assert seen == [["A"], ["B", "A"]]

    def test_subscription_order(self, store):
        order = []
        store.subscribe(lambda _items: order.append("first"))
        store.subscribe(lambda _items: order.append("second"))
        store.add("A")
        assert order == ["first", "second"]

    def test_no_notification_for_rejected_mutation(self, store):
        calls = []
        store.subscribe(calls.append)
        store.add("")
        store.remove("missing")
        store.clear_all()
        assert calls == []

    def test_notified_after_persisting(self, store, queue_path):
        on_disk = []
        store.subscribe(lambda _items: on_disk.append(_texts(_reopen(queue_path))))
        store.add("A")
        assert on_disk == [["A"]]

    def test_unsubscribe(self, store):
        calls = []
        unsubscribe = store.subscribe(calls.append)
        store.add("A")
        unsubscribe()
        unsubscribe()
        store.add("B")
        assert len(calls) == 1

    def test_failing_subscriber_does_not_block_others(self, store, caplog):
        calls = []

        def broken(_items):
            raise RuntimeError("boom")

        store.subscribe(broken)
        store.subscribe(calls.append)
        with caplog.at_level("WARNING", logger="snipqueue"):
            item_id = store.add("A")
        assert item_id is not None
        assert len(calls) == 1
        assert "subscriber" in caplog.text


class TestCounts:
    def test_counts_and_has_used(self, store):
        a = store.add("A")
        store.add("B")
        store.mark_used(a)
        assert len(store) == 2
        assert store.active_count == 1
        assert store.used_count == 1
        assert store.has_used
