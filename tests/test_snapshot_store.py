from __future__ import annotations

import threading
from dataclasses import replace

import pytest

from problem_index.core.errors import (
    RefreshInProgressError,
    SourceFetchError,
    StaleSnapshotError,
)
from problem_index.services.index_builder import ProblemIndexBuilder
from problem_index.services.snapshot_store import SnapshotStore
from tests.helpers.index import SAMPLE_PARSED


def _snapshot():
    return ProblemIndexBuilder().build(SAMPLE_PARSED)


def test_rebuild_publishes_with_increasing_sequence() -> None:
    store = SnapshotStore()
    assert store.current is None

    first = store.rebuild(_snapshot)
    second = store.rebuild(_snapshot)

    assert first.sequence == 1
    assert second.sequence == 2
    assert store.current is second


def test_failed_rebuild_keeps_previous_snapshot() -> None:
    store = SnapshotStore()
    published = store.rebuild(_snapshot)

    def failing():
        raise SourceFetchError("network down")

    with pytest.raises(SourceFetchError):
        store.rebuild(failing)

    assert store.current is published
    assert store.current.status() == published.status()
    assert not store.rebuilding


def test_concurrent_rebuild_is_rejected() -> None:
    store = SnapshotStore()
    entered = threading.Event()
    release = threading.Event()

    def slow():
        entered.set()
        release.wait(timeout=5)
        return _snapshot()

    worker = threading.Thread(target=store.rebuild, args=(slow,))
    worker.start()
    assert entered.wait(timeout=5)
    try:
        assert store.rebuilding
        with pytest.raises(RefreshInProgressError):
            store.rebuild(_snapshot)
    finally:
        release.set()
        worker.join(timeout=5)

    assert store.current is not None
    assert store.current.sequence == 1


def test_publish_rejects_stale_snapshot() -> None:
    store = SnapshotStore()
    store.publish(replace(_snapshot(), sequence=5))

    with pytest.raises(StaleSnapshotError) as excinfo:
        store.publish(replace(_snapshot(), sequence=3))

    assert excinfo.value.sequence == 3
    assert excinfo.value.active_sequence == 5
    assert store.current.sequence == 5
