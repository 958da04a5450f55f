"""Serve one client connection from connect to close."""
import socket
from typing import Tuple

from . import replies
from .commands import CommandDispatcher
from .errors import CommandError, StorageError
from .logging_config import configure_logging
from .messages import MessageLog, format_history_line
from .session import Session
from ..shared.protocol import decode_line, encode_line, is_command

logger = configure_logging()


class ConnectionClosed(Exception):
    """The peer went away or the socket failed."""


class ChatConnection:
    """Line-oriented protocol engine for a single socket.

    Replays the message history, then answers each incoming line in
    arrival order until the peer closes or a socket operation fails.
    """

    def __init__(
        self,
        sock: socket.socket,
        addr: Tuple[str, int],
        dispatcher: CommandDispatcher,
        message_log: MessageLog,
    ):
        self.sock = sock
        self.remote_addr = f"{addr[0]}:{addr[1]}"
        self.dispatcher = dispatcher
        self.message_log = message_log
        self.session = Session(remote_addr=self.remote_addr)

    def serve(self) -> None:
        logger.info("CLIENT_CONNECTED addr=%s connection_id=%s", self.remote_addr, self.session.connection_id)
        try:
            with self.sock, self.sock.makefile("rb") as reader:
                self.replay_history()
                for raw in reader:
                    if not raw.endswith(b"\n"):
                        break
                    line = decode_line(raw)
                    if line:
                        self.handle_line(line)
        except ConnectionClosed as exc:
            logger.info("CLIENT_WRITE_FAIL addr=%s reason=%s", self.remote_addr, exc.__cause__)
        except OSError as exc:
            logger.info("CLIENT_READ_FAIL addr=%s reason=%s", self.remote_addr, exc)
        logger.info("CLIENT_DISCONNECTED addr=%s connection_id=%s", self.remote_addr, self.session.connection_id)

    def replay_history(self) -> None:
        try:
            records = self.message_log.scan_ordered()
        except StorageError:
            logger.exception("HISTORY_FAIL addr=%s", self.remote_addr)
            return
        for record in records:
            self.send(format_history_line(record))

    def handle_line(self, line: str) -> None:
        if is_command(line):
            try:
                reply = self.dispatcher.dispatch(line, self.session)
            except CommandError as exc:
                reply = f"ERR: {exc}"
            self.send(reply)
            return

        try:
            self.message_log.append(self.session.record(line))
        except StorageError:
            logger.exception("MESSAGE_STORE_FAIL addr=%s", self.remote_addr)
        logger.info("CHAT_MESSAGE from=%s text=%s", self.session.display_name, line)
        self.send(replies.evaluate(line))

    def send(self, text: str) -> None:
        try:
            self.sock.sendall(encode_line(text))
        except OSError as exc:
            raise ConnectionClosed() from exc
