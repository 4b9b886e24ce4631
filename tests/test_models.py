"""Tests for snipqueue.models."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from snipqueue.models import EPOCH, ItemState, QueueItem, normalize_text, parse_timestamp


class TestNormalizeText:
    @pytest.mark.parametrize("raw", ["", " ", "\n\t", None])
    def test_blank_is_none(self, raw):
        assert normalize_text(raw) is None

    def test_trims(self):
        assert normalize_text("  hi there \n") == "hi there"

    def test_non_string_is_none(self):
        assert normalize_text(42) is None  # type: ignore[arg-type]

    def test_undecodable_text_is_repaired(self):
        assert normalize_text("bad \udcff") == "bad ?"


class TestParseTimestamp:
    def test_naive_is_treated_as_utc(self):
        assert parse_timestamp("2026-01-01T00:00:00") == datetime(
            2026, 1, 1, tzinfo=timezone.utc
        )

    def test_offset_preserved(self):
        parsed = parse_timestamp("2026-01-01T09:00:00+09:00")
        assert parsed.utcoffset().total_seconds() == 9 * 3600

    @pytest.mark.parametrize("raw", [None, "", "yesterday", 12345])
    def test_garbage_is_epoch(self, raw):
        assert parse_timestamp(raw) == EPOCH


class TestQueueItem:
    def test_defaults(self):
        item = QueueItem(id="1", text="hi")
        assert item.state is ItemState.ACTIVE
        assert not item.is_used
        assert item.created_at == EPOCH

    def test_is_immutable(self):
        item = QueueItem(id="1", text="hi")
        with pytest.raises(AttributeError):
            item.text = "changed"  # type: ignore[misc]

    def test_with_helpers_return_copies(self):
        item = QueueItem(id="1", text="hi")
        used = item.with_state(ItemState.USED)
        assert used.is_used and not item.is_used
        assert item.with_text("bye").text == "bye"
        assert item.text == "hi"

    def test_from_record_requires_id_and_text(self):
        assert QueueItem.from_record({"text": "hi"}) is None
        assert QueueItem.from_record({"id": "1"}) is None
        assert QueueItem.from_record({"id": "", "text": "hi"}) is None

    def test_record_round_trip(self):
        item = QueueItem(
            id="1",
            text="hi",
            state=ItemState.USED,
            created_at=datetime(2026, 5, 4, 3, 2, 1, tzinfo=timezone.utc),
        )
        assert QueueItem.from_record(item.to_record()) == item
