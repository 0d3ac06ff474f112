"""Socket transport tests with a mocked connection."""

from __future__ import annotations

import socket
import unittest
from unittest import mock

from smolviewer.errors import TransportError
from smolviewer.network import SocketTransport


def _connection(chunks: list[bytes]) -> mock.MagicMock:
    sock = mock.MagicMock()
    sock.__enter__.return_value = sock
    sock.recv.side_effect = [*chunks, b""]
    return sock


class SocketTransportTests(unittest.TestCase):
    def test_sends_request_and_reads_until_eof(self) -> None:
        sock = _connection([b"hello ", b"world"])
        with mock.patch("smolviewer.network.socket.create_connection", return_value=sock) as connect:
            body = SocketTransport(timeout=4.0).fetch("host", 70, "/docs\r\n")

        connect.assert_called_once_with(("host", 70), timeout=4.0)
        sock.sendall.assert_called_once_with(b"/docs\r\n")
        self.assertEqual(body, b"hello world")

    def test_request_is_utf8_encoded(self) -> None:
        sock = _connection([])
        with mock.patch("smolviewer.network.socket.create_connection", return_value=sock):
            SocketTransport().fetch("host", 300, "host /é 0\r\n")
        sock.sendall.assert_called_once_with("host /é 0\r\n".encode("utf-8"))

    def test_response_is_capped(self) -> None:
        sock = _connection([b"abcdef", b"ghijkl"])
        with mock.patch("smolviewer.network.socket.create_connection", return_value=sock):
            with self.assertLogs("smolviewer.network", level="WARNING"):
                body = SocketTransport(max_bytes=4).fetch("host", 70, "\r\n")
        self.assertEqual(body, b"abcd")

    def test_connection_errors_are_wrapped(self) -> None:
        for error in (ConnectionRefusedError("refused"), socket.timeout("timed out"), socket.gaierror("no such host")):
            with self.subTest(error=error):
                with mock.patch("smolviewer.network.socket.create_connection", side_effect=error):
                    with self.assertRaises(TransportError) as raised:
                        SocketTransport().fetch("host", 70, "\r\n")
                self.assertIn("host:70", str(raised.exception))
                self.assertIsInstance(raised.exception, OSError)

    def test_malformed_hostname_is_wrapped(self) -> None:
        idna_error = UnicodeError("label empty or too long")
        with mock.patch("smolviewer.network.socket.create_connection", side_effect=idna_error):
            with self.assertRaises(TransportError) as raised:
                SocketTransport().fetch("foo..bar", 70, "/x\r\n")
        self.assertIn("foo..bar:70", str(raised.exception))
        self.assertIs(raised.exception.__cause__, idna_error)

    def test_hostname_with_nul_byte_is_wrapped(self) -> None:
        with mock.patch("smolviewer.network.socket.create_connection", side_effect=ValueError("embedded null byte")):
            with self.assertRaises(TransportError):
                SocketTransport().fetch("ho\x00st", 70, "\r\n")


if __name__ == "__main__":
    unittest.main()
