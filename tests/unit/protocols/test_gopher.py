"""Gophermap parsing and Gopher request framing tests."""

from __future__ import annotations

import unittest

from smolviewer.address import Address, ProtocolKind
from smolviewer.document import BLANK, ErrorOrUnknown, Info, Link, LinkKind, SearchPrompt
from smolviewer.protocols import build_request, gopher, parse, search_address


class GopherParseLineTests(unittest.TestCase):
    def test_directory_line_becomes_directory_link(self) -> None:
        element = gopher.parse_line("1About this server\t/about\tgopher.example.com\t70")
        self.assertEqual(
            element,
            Link(
                text="About this server",
                target=Address("gopher.example.com", 70, "/about", ProtocolKind.GOPHER),
                kind=LinkKind.DIRECTORY,
            ),
        )

    def test_file_line_targets_plaintext(self) -> None:
        element = gopher.parse_line("0Read me\t/readme.txt\thost\t7070")
        self.assertIsInstance(element, Link)
        assert isinstance(element, Link)
        self.assertIs(element.kind, LinkKind.FILE)
        self.assertIs(element.target.protocol_kind, ProtocolKind.PLAINTEXT)
        self.assertEqual(element.target.port, 7070)

    def test_search_line_becomes_prompt(self) -> None:
        element = gopher.parse_line("7Search Veronica\t/v2/vs\tgopher.floodgap.com\t70")
        self.assertEqual(element, SearchPrompt("Search Veronica", Address("gopher.floodgap.com", 70, "/v2/vs")))

    def test_info_line(self) -> None:
        self.assertEqual(gopher.parse_line("iWelcome!\tfake\t(NULL)\t0"), Info("Welcome!"))

    def test_unknown_kind_keeps_display_text(self) -> None:
        self.assertEqual(gopher.parse_line("9foo\t/x\th\t70"), ErrorOrUnknown(text="foo", raw_kind="9"))

    def test_short_lines_become_blank(self) -> None:
        for line in ("", ".", "1only\ttwo", "iinfo\tsel\thost"):
            with self.subTest(line=line):
                self.assertEqual(gopher.parse_line(line), BLANK)

    def test_junk_port_falls_back_to_default(self) -> None:
        element = gopher.parse_line("1Dir\t/d\thost\tnot-a-port")
        assert isinstance(element, Link)
        self.assertEqual(element.target.port, 70)

    def test_missing_host_degrades_to_error_element(self) -> None:
        self.assertEqual(gopher.parse_line("1Broken\t/d\t\t70"), ErrorOrUnknown("Broken", raw_kind="1"))


class GopherParseTests(unittest.TestCase):
    def test_one_element_per_line(self) -> None:
        body = (
            b"iHello\t\terror.host\t1\r\n"
            b"1Docs\t/docs\thost\t70\r\n"
            b"broken line\r\n"
            b"9Binary\t/bin\thost\t70\r\n"
            b".\r\n"
        )
        elements = parse(body, ProtocolKind.GOPHER)
        self.assertEqual(len(elements), 5)
        self.assertEqual(elements[0], Info("Hello"))
        self.assertIsInstance(elements[1], Link)
        self.assertEqual(elements[2], BLANK)
        self.assertEqual(elements[3], ErrorOrUnknown("Binary", raw_kind="9"))
        self.assertEqual(elements[4], BLANK)

    def test_never_raises_on_garbage(self) -> None:
        body = bytes(range(256)) + b"\t\t\t\n\xff\xfe1\t\t\t\n"
        elements = gopher.parse(body)
        self.assertEqual(len(elements), len(body.decode("utf-8", errors="replace").rstrip("\n").split("\n")))

    def test_empty_body_is_empty_document(self) -> None:
        self.assertEqual(gopher.parse(b""), [])


class GopherRequestTests(unittest.TestCase):
    def test_plain_selector_request(self) -> None:
        self.assertEqual(build_request(Address("host", 70, "/docs")), "/docs\r\n")

    def test_search_request_composition(self) -> None:
        address = search_address(Address("host", 70, "/search"), "cats")
        self.assertEqual(build_request(address), "/search\tcats\r\n")

    def test_search_results_are_parsed_as_gophermap(self) -> None:
        address = search_address(Address("host", 70, "/search"), "cats")
        self.assertIs(address.protocol_kind, ProtocolKind.GOPHER)

    def test_plaintext_uses_gopher_framing(self) -> None:
        self.assertEqual(build_request(Address("host", 70, "/a.txt", ProtocolKind.PLAINTEXT)), "/a.txt\r\n")


if __name__ == "__main__":
    unittest.main()
