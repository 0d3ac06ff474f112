"""Tests for address resolution and address-bar display text."""

from __future__ import annotations

import unittest

from smolviewer.address import Address, ProtocolKind, kind_for_scheme, kind_from_name, resolve
from smolviewer.errors import InvalidAddress


class ResolveTests(unittest.TestCase):
    def test_host_and_selector_split_on_first_slash(self) -> None:
        address = resolve("host/path/to/thing")
        self.assertEqual(address.host, "host")
        self.assertEqual(address.selector, "path/to/thing")
        self.assertEqual(address.port, 70)
        self.assertIs(address.protocol_kind, ProtocolKind.GOPHER)

    def test_bare_host_has_empty_selector(self) -> None:
        address = resolve("  gopher.floodgap.com  ")
        self.assertEqual(address, Address("gopher.floodgap.com", 70, ""))

    def test_explicit_port_is_used(self) -> None:
        address = resolve("example.org:7070/1/docs")
        self.assertEqual(address.port, 7070)
        self.assertEqual(address.selector, "1/docs")

    def test_scheme_prefix_overrides_requested_kind(self) -> None:
        address = resolve("spartan://mozz.us/", ProtocolKind.GOPHER)
        self.assertIs(address.protocol_kind, ProtocolKind.SPARTAN)
        self.assertEqual(address.port, 300)
        self.assertEqual(address.selector, "")

    def test_gopher_scheme_keeps_plaintext_hint(self) -> None:
        address = resolve("gopher://host/notes.txt", ProtocolKind.PLAINTEXT)
        self.assertIs(address.protocol_kind, ProtocolKind.PLAINTEXT)

    def test_text_scheme_forces_plaintext(self) -> None:
        address = resolve("text://host/about")
        self.assertEqual(address, Address("host", 70, "about", ProtocolKind.PLAINTEXT))

    def test_default_kind_applies_without_scheme(self) -> None:
        address = resolve("nex.nightfall.city/", ProtocolKind.NEX)
        self.assertIs(address.protocol_kind, ProtocolKind.NEX)
        self.assertEqual(address.port, 1900)

    def test_finger_user_at_host(self) -> None:
        address = resolve("finger://alice@example.org")
        self.assertEqual(address.host, "example.org")
        self.assertEqual(address.selector, "alice")
        self.assertEqual(address.port, 79)

    def test_gopher_query_marker_is_split_off(self) -> None:
        address = resolve("host/search%09cats")
        self.assertEqual(address.selector, "search")
        self.assertEqual(address.query, "cats")

    def test_spartan_query_marker_is_split_off(self) -> None:
        address = resolve("spartan://host/guestbook?hello")
        self.assertEqual(address.selector, "guestbook")
        self.assertEqual(address.query, "hello")

    def test_empty_input_is_rejected(self) -> None:
        with self.assertRaises(InvalidAddress):
            resolve("   ")

    def test_missing_host_is_rejected(self) -> None:
        with self.assertRaises(InvalidAddress):
            resolve("/only/a/path")

    def test_bad_ports_are_rejected(self) -> None:
        for raw in ("host:abc", "host:0", "host:70000"):
            with self.subTest(raw=raw), self.assertRaises(InvalidAddress):
                resolve(raw)

    def test_unknown_scheme_is_rejected(self) -> None:
        with self.assertRaises(InvalidAddress):
            resolve("https://example.org/")

    def test_invalid_address_is_a_value_error(self) -> None:
        with self.assertRaises(ValueError):
            resolve("")


class AddressTests(unittest.TestCase):
    def test_constructor_validates_host_and_port(self) -> None:
        with self.assertRaises(InvalidAddress):
            Address("", 70)
        with self.assertRaises(InvalidAddress):
            Address("host", 0)
        with self.assertRaises(InvalidAddress):
            Address("host", True)

    def test_display_text_omits_default_port_and_gopher_scheme(self) -> None:
        self.assertEqual(Address("host", 70, "/about").display_text(), "host/about")
        self.assertEqual(Address("host", 7070, "about").display_text(), "host:7070/about")

    def test_display_text_shows_other_schemes(self) -> None:
        address = Address("mozz.us", 300, "/docs", ProtocolKind.SPARTAN, query="hi")
        self.assertEqual(address.display_text(), "spartan://mozz.us/docs?hi")
        self.assertEqual(str(address), "spartan://mozz.us/docs?hi")

    def test_display_text_marks_plaintext_without_txt_suffix(self) -> None:
        self.assertEqual(Address("host", 70, "about", ProtocolKind.PLAINTEXT).display_text(), "text://host/about")
        self.assertEqual(Address("host", 70, "/a.txt", ProtocolKind.PLAINTEXT).display_text(), "host/a.txt")

    def test_display_text_for_finger(self) -> None:
        self.assertEqual(Address("example.org", 79, "alice", ProtocolKind.FINGER).display_text(), "finger://alice@example.org")
        self.assertEqual(Address("example.org", 79, "", ProtocolKind.FINGER).display_text(), "finger://example.org")

    def test_display_text_resolves_back_to_same_address(self) -> None:
        addresses = [
            Address("host", 70, "search", query="cats"),
            Address("host", 7070, "1/docs"),
            Address("mozz.us", 300, "guestbook", ProtocolKind.SPARTAN, query="hello"),
            Address("example.org", 79, "alice", ProtocolKind.FINGER),
            Address("host", 70, "about", ProtocolKind.PLAINTEXT),
            Address("host", 7070, "0/notes", ProtocolKind.PLAINTEXT),
        ]
        for address in addresses:
            with self.subTest(address=address):
                self.assertEqual(resolve(address.display_text()), address)

    def test_with_query_and_with_kind_return_copies(self) -> None:
        address = Address("host", 70, "/search")
        searched = address.with_query("cats").with_kind(ProtocolKind.PLAINTEXT)
        self.assertEqual(address.query, "")
        self.assertEqual(searched.query, "cats")
        self.assertIs(searched.protocol_kind, ProtocolKind.PLAINTEXT)


class KindLookupTests(unittest.TestCase):
    def test_kind_for_scheme(self) -> None:
        self.assertIs(kind_for_scheme("NEX"), ProtocolKind.NEX)
        with self.assertRaises(InvalidAddress):
            kind_for_scheme("gemini")

    def test_kind_from_name(self) -> None:
        self.assertIs(kind_from_name("plaintext"), ProtocolKind.PLAINTEXT)
        self.assertIs(kind_from_name(" Spartan "), ProtocolKind.SPARTAN)
        self.assertIsNone(kind_from_name("gemini"))
        self.assertIsNone(kind_from_name(None))


if __name__ == "__main__":
    unittest.main()
