"""Shared test fixtures for the snipqueue test suite."""

from __future__ import annotations

import itertools
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from snipqueue.persistence import QueueItemStore
from snipqueue.repository import ItemRepository
from snipqueue.store import QueueStore


@pytest.fixture
def id_factory():
    """Deterministic ids: ``item-1``, ``item-2``, ..."""
    counter = itertools.count(1)
    return lambda: f"item-{next(counter)}"


@pytest.fixture
def clock():
    """A clock that advances one second per call."""
    start = datetime(2026, 1, 15, 10, 30, tzinfo=timezone.utc)
    ticks = itertools.count()
    return lambda: start + timedelta(seconds=next(ticks))


@pytest.fixture
def repo(id_factory, clock) -> ItemRepository:
    return ItemRepository(id_factory=id_factory, clock=clock)


@pytest.fixture
def queue_path(tmp_path: Path) -> Path:
    return tmp_path / "queue.json"


@pytest.fixture
def gateway(queue_path: Path) -> QueueItemStore:
    return QueueItemStore(queue_path)


@pytest.fixture
def store(gateway, id_factory, clock) -> QueueStore:
    return QueueStore(gateway, ItemRepository(id_factory=id_factory, clock=clock))
