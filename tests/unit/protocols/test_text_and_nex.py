"""Plain-text (Finger, Gopher text file) and Nex parsing tests."""

from __future__ import annotations

import unittest

from smolviewer.address import Address, ProtocolKind
from smolviewer.document import ErrorOrUnknown, Info, Link, LinkKind
from smolviewer.protocols import build_request, nex, parse, text


class PlainTextTests(unittest.TestCase):
    def test_finger_response_is_single_block(self) -> None:
        elements = parse(b"Login: alice\r\nPlan:\r\n  tea\r\n", ProtocolKind.FINGER)
        self.assertEqual(elements, [Info("Login: alice\nPlan:\n  tea")])

    def test_finger_request_is_user_name(self) -> None:
        self.assertEqual(build_request(Address("example.org", 79, "alice", ProtocolKind.FINGER)), "alice\r\n")
        self.assertEqual(build_request(Address("example.org", 79, "", ProtocolKind.FINGER)), "\r\n")

    def test_plaintext_drops_terminating_dot(self) -> None:
        base = Address("host", 70, "/docs/notes.txt", ProtocolKind.PLAINTEXT)
        elements = text.parse_plaintext(b"first\r\nsecond\r\n.\r\n", base)
        self.assertEqual(elements, [Info("first\nsecond", alt="notes.txt")])

    def test_plaintext_without_base_has_no_name_hint(self) -> None:
        self.assertEqual(text.parse_plaintext("only\n"), [Info("only")])

    def test_plaintext_replaces_undecodable_bytes(self) -> None:
        elements = text.parse_plaintext(b"caf\xe9\n")
        self.assertEqual(elements, [Info("caf\ufffd")])


class NexTests(unittest.TestCase):
    def setUp(self) -> None:
        self.base = Address("nightfall.city", 1900, "/nex/", ProtocolKind.NEX)

    def test_request_is_absolute_path(self) -> None:
        self.assertEqual(build_request(Address("nightfall.city", 1900, "", ProtocolKind.NEX)), "/\r\n")
        self.assertEqual(build_request(self.base), "/nex/\r\n")

    def test_directory_listing_links_and_text(self) -> None:
        body = "Welcome\n=> info/ Information\n=> notes.txt\n=> nex://other.host/ Elsewhere\n"
        elements = nex.parse(body, self.base)
        self.assertEqual(len(elements), 4)
        self.assertEqual(elements[0], Info("Welcome"))
        self.assertEqual(
            elements[1],
            Link("Information", Address("nightfall.city", 1900, "/nex/info/", ProtocolKind.NEX), LinkKind.DIRECTORY),
        )
        self.assertEqual(
            elements[2],
            Link("notes.txt", Address("nightfall.city", 1900, "/nex/notes.txt", ProtocolKind.NEX), LinkKind.FILE),
        )
        self.assertEqual(elements[3].target, Address("other.host", 1900, "", ProtocolKind.NEX))

    def test_parent_links_collapse(self) -> None:
        elements = nex.parse("=> ../ Up\n", self.base)
        self.assertEqual(elements[0].target.selector, "/")

    def test_unresolvable_link_degrades(self) -> None:
        elements = nex.parse("=> https://example.org/ Web\n", self.base)
        self.assertEqual(elements, [ErrorOrUnknown("=> https://example.org/ Web", raw_kind="=>")])

    def test_non_directory_document_is_single_block(self) -> None:
        base = Address("nightfall.city", 1900, "/nex/notes.txt", ProtocolKind.NEX)
        elements = nex.parse("=> not/a/link\nplain\n", base)
        self.assertEqual(elements, [Info("=> not/a/link\nplain")])


if __name__ == "__main__":
    unittest.main()
