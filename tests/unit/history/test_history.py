"""History manager tests for both truncating and append-only modes."""

from __future__ import annotations

import unittest

from smolviewer.address import Address, ProtocolKind
from smolviewer.errors import EmptyHistory, NoHistory
from smolviewer.history import HistoryEntry, HistoryManager


def _addr(name: str) -> Address:
    return Address("host", 70, f"/{name}")


class HistoryManagerTests(unittest.TestCase):
    def test_can_go_back_after_n_adds(self) -> None:
        for count in range(0, 5):
            with self.subTest(count=count):
                history = HistoryManager()
                for index in range(count):
                    history.add_entry(_addr(str(index)))
                self.assertEqual(history.can_go_back(), count > 1)
                self.assertFalse(history.can_go_forward())

    def test_back_then_forward_restores_current(self) -> None:
        history = HistoryManager()
        for name in ("a", "b", "c"):
            history.add_entry(_addr(name))
        history.go_back()
        before = history.current()

        history.go_back()
        history.go_forward()
        self.assertEqual(history.current(), before)
        self.assertEqual(before.address, _addr("b"))

    def test_go_back_is_noop_on_empty_and_single_entry(self) -> None:
        history = HistoryManager()
        self.assertIsNone(history.go_back())
        self.assertIsNone(history.go_forward())

        history.add_entry(_addr("only"))
        self.assertIsNone(history.go_back())
        self.assertEqual(history.current().address, _addr("only"))
        self.assertEqual(history.cursor, 0)

    def test_step_out_of_range_raises(self) -> None:
        history = HistoryManager()
        with self.assertRaises(NoHistory):
            history.step(-1)
        history.add_entry(_addr("a"))
        with self.assertRaises(NoHistory):
            history.step(1)

    def test_current_on_empty_raises(self) -> None:
        with self.assertRaises(EmptyHistory):
            HistoryManager().current()

    def test_entry_records_protocol_kind(self) -> None:
        history = HistoryManager()
        entry = history.add_entry(Address("host", 70, "/a.txt"), ProtocolKind.PLAINTEXT)
        self.assertEqual(entry, HistoryEntry(Address("host", 70, "/a.txt"), ProtocolKind.PLAINTEXT))
        self.assertEqual(entry.display_text(), "host/a.txt")

    def test_kind_defaults_to_address_kind(self) -> None:
        entry = HistoryManager().add_entry(Address("host", 1900, "/", ProtocolKind.NEX))
        self.assertIs(entry.protocol_kind, ProtocolKind.NEX)

    def test_adding_mid_history_truncates_forward_entries(self) -> None:
        history = HistoryManager()
        for name in ("a", "b", "c"):
            history.add_entry(_addr(name))
        history.go_back()
        history.go_back()
        history.add_entry(_addr("d"))

        self.assertEqual([entry.address for entry in history.entries], [_addr("a"), _addr("d")])
        self.assertFalse(history.can_go_forward())
        self.assertEqual(history.cursor, 1)

    def test_append_mode_keeps_forward_entries(self) -> None:
        history = HistoryManager(truncate_forward=False)
        for name in ("a", "b", "c"):
            history.add_entry(_addr(name))
        history.go_back()
        history.go_back()
        history.add_entry(_addr("d"))

        self.assertEqual([entry.address.selector for entry in history.entries], ["/a", "/b", "/c", "/d"])
        self.assertEqual(history.current().address, _addr("d"))
        self.assertFalse(history.can_go_forward())
        self.assertEqual(history.go_back().address, _addr("c"))

    def test_duplicate_adjacent_entries_are_recorded(self) -> None:
        history = HistoryManager()
        history.add_entry(_addr("a"))
        history.add_entry(_addr("a"))
        self.assertEqual(len(history), 2)
        self.assertTrue(history.can_go_back())

    def test_bounded_history_drops_oldest(self) -> None:
        history = HistoryManager(max_entries=3)
        for index in range(5):
            history.add_entry(_addr(str(index)))
        self.assertEqual([entry.address.selector for entry in history.entries], ["/2", "/3", "/4"])
        self.assertEqual(history.cursor, 2)
        self.assertEqual(history.current().address, _addr("4"))


if __name__ == "__main__":
    unittest.main()
