"""
pytest configuration and fixtures.
"""

import os
import socket
import tempfile
import threading
from pathlib import Path
from typing import Generator, List, Tuple

import pytest

os.environ.setdefault("LINE_CHAT_LOG_FILE", str(Path(tempfile.gettempdir()) / "line_chat_test.log"))

from line_chat.server import auth
from line_chat.server.database import make_engine, make_session_factory
from line_chat.server.listener import ChatServer
from line_chat.server.main import build_server
from line_chat.server.messages import MessageLog
from line_chat.server.users import CredentialStore


@pytest.fixture(autouse=True)
def fast_bcrypt(monkeypatch):
    """Keep bcrypt cheap so auth tests stay quick."""
    monkeypatch.setattr(auth, "BCRYPT_ROUNDS", 4)


@pytest.fixture
def session_factory(tmp_path):
    """Session factory over a fresh SQLite file."""
    engine = make_engine(f"sqlite:///{tmp_path / 'chat.db'}")
    yield make_session_factory(engine)
    engine.dispose()


@pytest.fixture
def store(session_factory) -> CredentialStore:
    return CredentialStore(session_factory)


@pytest.fixture
def message_log(session_factory) -> MessageLog:
    return MessageLog(session_factory)


@pytest.fixture
def server(store, message_log) -> Generator[ChatServer, None, None]:
    """Chat server on an ephemeral port, served from a background thread."""
    srv = build_server("127.0.0.1", 0, store, message_log)
    thread = threading.Thread(target=srv.serve_forever, daemon=True)
    thread.start()
    yield srv
    srv.stop()
    thread.join(timeout=5)


class LineClient:
    """Blocking line-oriented test client."""

    def __init__(self, address: Tuple[str, int], timeout: float = 5.0):
        self.sock = socket.create_connection(address, timeout=timeout)
        self._reader = self.sock.makefile("r", encoding="utf-8", newline="\n")

    def send(self, line: str) -> None:
        self.sock.sendall((line + "\n").encode("utf-8"))

    def readline(self) -> str:
        line = self._reader.readline()
        if not line:
            raise ConnectionError("server closed the connection")
        return line.rstrip("\n")

    def readlines(self, count: int) -> List[str]:
        return [self.readline() for _ in range(count)]

    def request(self, line: str) -> str:
        self.send(line)
        return self.readline()

    def close(self) -> None:
        self._reader.close()
        self.sock.close()


@pytest.fixture
def connect(server):
    """Factory for clients connected to the running server."""
    clients: List[LineClient] = []

    def _connect() -> LineClient:
        client = LineClient(server.address)
        clients.append(client)
        return client

    yield _connect
    for client in clients:
        client.close()
