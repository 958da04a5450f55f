"""
End-to-end tests against a running chat server.
"""

import re
import time


def wait_for(predicate, timeout: float = 5.0) -> bool:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.02)
    return predicate()


class TestServer:
    """Tests for the full listener plus connection engine."""

    def test_payload_replies(self, connect):
        client = connect()
        assert client.request("add 3 5") == "8"
        assert client.request("mul 5 3") == "15"
        assert client.request("bytes hello world") == "11"
        assert client.request("words hello world") == "2"
        assert client.request("echo a b c") == "a b c"
        assert client.request("echo") == ""
        assert client.request("foo bar") == "foo bar from server"

    def test_blank_line_gets_no_reply(self, connect, message_log):
        client = connect()
        client.send("   ")
        assert client.request("echo after") == "after"
        assert [r.text for r in message_log.scan_ordered()] == ["echo after"]

    def test_register_then_login_elsewhere(self, connect):
        first = connect()
        assert first.request("/register alice s3cret") == "OK: registered and logged in as alice"

        second = connect()
        assert second.request("/login alice wrong") == "ERR: invalid password"
        assert second.request("/login nobody s3cret") == "ERR: no such user"
        assert second.request("/login alice s3cret") == "OK: logged in as alice"

    def test_duplicate_register(self, connect):
        client = connect()
        client.request("/register alice one")
        assert client.request("/register alice two") == "ERR: name already taken"

    def test_list(self, connect):
        client = connect()
        assert client.request("/list") == "(no other users)"
        connect().request("/register bob pw")
        connect().request("/register carol pw")
        assert client.request("/register alice pw") == "OK: registered and logged in as alice"
        assert client.request("/list") == "bob, carol"

    def test_unknown_command_keeps_connection(self, connect):
        client = connect()
        assert client.request("/whoami") == "ERR: unknown command: whoami"
        assert client.request("echo still here") == "still here"

    def test_history_replay(self, connect, message_log):
        author = connect()
        author.request("/register alice pw")
        author.request("first line")
        anonymous = connect()
        anonymous.request("second line")
        assert wait_for(lambda: len(message_log.scan_ordered()) == 2)

        late = connect()
        history = late.readlines(2)
        assert re.fullmatch(r"\d\d:\d\d alice first line", history[0])
        assert re.fullmatch(r"\d\d:\d\d 127\.0\.0\.1:\d+ second line", history[1])
        assert late.request("echo done") == "done"

    def test_concurrent_clients(self, connect):
        clients = [connect() for _ in range(5)]
        for client in clients:
            assert client.request("/list") == "(no other users)"
        for i, client in enumerate(clients):
            client.send(f"add {i} {i}")
        assert [c.readline() for c in clients] == [str(2 * i) for i in range(5)]

    def test_disconnect_is_tracked(self, server, connect):
        client = connect()
        client.request("echo hi")
        assert server.active_connections == 1
        client.close()
        assert wait_for(lambda: server.active_connections == 0)
