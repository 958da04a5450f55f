"""
Unit tests for the console client.
"""

import io
import socket

import pytest

from line_chat.client.main import ChatClient


@pytest.fixture
def pair():
    ours, theirs = socket.socketpair()
    theirs.settimeout(5)
    yield ours, theirs
    ours.close()
    theirs.close()


class TestChatClient:
    """Tests for ChatClient."""

    def test_interact_sends_non_blank_lines_until_exit(self, pair):
        ours, theirs = pair
        out = io.StringIO()
        client = ChatClient(ours, out=out)

        client.interact(io.StringIO("hello\n\n   \n/list\nexit\nnever sent\n"))

        expected = b"hello\n/list\n"
        received = b""
        while len(received) < len(expected):
            received += theirs.recv(4096)
        assert received == expected
        assert "Exiting." in out.getvalue()

    def test_receive_loop_prints_lines(self, pair):
        ours, theirs = pair
        out = io.StringIO()
        client = ChatClient(ours, out=out)

        theirs.sendall(b"08:00 alice hi\nOK: logged in as bob\n")
        theirs.close()
        client.receive_loop()

        assert out.getvalue().splitlines() == [
            "Received: 08:00 alice hi",
            "Received: OK: logged in as bob",
            "Server connection closed.",
        ]

    def test_send_line_reports_errors(self, pair):
        ours, theirs = pair
        out = io.StringIO()
        client = ChatClient(ours, out=out)
        ours.close()

        assert client.send_line("hello") is False
        assert "send error" in out.getvalue()
