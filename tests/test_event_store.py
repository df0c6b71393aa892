"""Tests for EventStore - ordered event list and selection cursor."""

import threading
import unittest

from debugdash.ingest.models import Event
from debugdash.utils.event_store import EventStore, StoreSnapshot


def _event(label: str) -> Event:
    return Event(label=label, timestamp="t", payload={}, backtrace=())


def _filled(count: int) -> EventStore:
    store = EventStore()
    for i in range(count):
        store.insert(_event(f"e{i}"))
    return store


class TestInsert(unittest.TestCase):

    def test_starts_empty(self):
        store = EventStore()
        self.assertEqual(len(store), 0)
        self.assertIsNone(store.selection)

    def test_newest_first(self):
        store = _filled(3)
        labels = [e.label for e in store.snapshot().events]
        self.assertEqual(labels, ["e2", "e1", "e0"])

    def test_insert_keeps_selection_index(self):
        store = _filled(3)
        store.select_next()  # 0 -> newest
        self.assertEqual(store.snapshot().selected().label, "e2")
        store.insert(_event("e3"))
        snap = store.snapshot()
        # Same position, different event underneath
        self.assertEqual(snap.selection, 0)
        self.assertEqual(snap.selected().label, "e3")

    def test_insert_does_not_create_selection(self):
        store = _filled(2)
        self.assertIsNone(store.selection)


class TestSelectNext(unittest.TestCase):

    def test_from_none_selects_first(self):
        store = _filled(3)
        store.select_next()
        self.assertEqual(store.selection, 0)

    def test_advances(self):
        store = _filled(3)
        store.select_next()
        store.select_next()
        self.assertEqual(store.selection, 1)

    def test_wraps_to_top(self):
        store = _filled(3)
        for _ in range(4):
            store.select_next()
        self.assertEqual(store.selection, 0)

    def test_full_cycle_returns_to_start(self):
        for count in (1, 2, 5, 9):
            store = _filled(count)
            store.select_next()
            start = store.selection
            for _ in range(count):
                store.select_next()
            self.assertEqual(store.selection, start, f"count={count}")

    def test_empty_is_noop(self):
        store = EventStore()
        store.select_next()
        self.assertIsNone(store.selection)


class TestSelectPrevious(unittest.TestCase):

    def test_from_none_selects_last(self):
        store = _filled(4)
        store.select_previous()
        self.assertEqual(store.selection, 3)

    def test_wraps_from_zero_to_last(self):
        store = _filled(4)
        store.select_next()
        store.select_previous()
        self.assertEqual(store.selection, 3)

    def test_steps_back(self):
        store = _filled(4)
        store.select_previous()
        store.select_previous()
        self.assertEqual(store.selection, 2)

    def test_inverse_of_next(self):
        store = _filled(5)
        store.select_next()
        for _ in range(12):
            before = store.selection
            store.select_next()
            store.select_previous()
            self.assertEqual(store.selection, before)
            store.select_next()

    def test_next_is_inverse_of_previous(self):
        store = _filled(3)
        store.select_previous()
        for _ in range(7):
            before = store.selection
            store.select_previous()
            store.select_next()
            self.assertEqual(store.selection, before)
            store.select_previous()

    def test_empty_is_noop(self):
        store = EventStore()
        store.select_previous()
        self.assertIsNone(store.selection)


class TestDefaultSelection(unittest.TestCase):

    def test_selects_oldest(self):
        store = _filled(4)
        store.ensure_default_selection()
        self.assertEqual(store.selection, 3)
        self.assertEqual(store.snapshot().selected().label, "e0")

    def test_idempotent(self):
        store = _filled(4)
        store.ensure_default_selection()
        store.ensure_default_selection()
        self.assertEqual(store.selection, 3)

    def test_keeps_existing_selection(self):
        store = _filled(4)
        store.select_next()
        store.ensure_default_selection()
        self.assertEqual(store.selection, 0)

    def test_empty_stays_none(self):
        store = EventStore()
        store.ensure_default_selection()
        self.assertIsNone(store.selection)

    def test_not_reapplied_after_growth(self):
        store = _filled(2)
        store.ensure_default_selection()
        store.insert(_event("late"))
        store.ensure_default_selection()
        self.assertEqual(store.selection, 1)


class TestSnapshot(unittest.TestCase):

    def test_snapshot_is_a_copy(self):
        store = _filled(2)
        snap = store.snapshot()
        store.insert(_event("later"))
        self.assertEqual(len(snap), 2)
        self.assertEqual(len(store), 3)

    def test_snapshot_does_not_select(self):
        store = _filled(2)
        snap = store.snapshot()
        self.assertIsNone(snap.selection)
        self.assertIsNone(snap.selected())

    def test_render_snapshot_applies_default(self):
        store = _filled(3)
        snap = store.render_snapshot()
        self.assertIsInstance(snap, StoreSnapshot)
        self.assertEqual(snap.selection, 2)
        self.assertEqual(snap.selected().label, "e0")
        self.assertEqual(store.selection, 2)

    def test_render_snapshot_empty(self):
        snap = EventStore().render_snapshot()
        self.assertEqual(len(snap), 0)
        self.assertIsNone(snap.selected())


class TestConcurrency(unittest.TestCase):

    def test_concurrent_inserts_and_navigation(self):
        store = EventStore()
        per_thread = 200
        errors = []

        def producer(tag: str) -> None:
            for i in range(per_thread):
                store.insert(_event(f"{tag}-{i}"))

        def navigator() -> None:
            try:
                for _ in range(per_thread):
                    store.select_next()
                    store.select_previous()
                    snap = store.render_snapshot()
                    if snap.selection is not None:
                        self.assertLess(snap.selection, len(snap))
            except Exception as e:  # noqa: BLE001
                errors.append(e)

        threads = [threading.Thread(target=producer, args=(t,)) for t in "abc"]
        threads.append(threading.Thread(target=navigator))
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=10)

        self.assertEqual(errors, [])
        self.assertEqual(len(store), 3 * per_thread)


if __name__ == "__main__":
    unittest.main()
