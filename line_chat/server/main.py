"""Entry point for the line chat server."""
import argparse
import sys
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError

from .commands import CommandDispatcher
from .config import DATABASE_URL, HOST, PORT
from .connection import ChatConnection
from .database import make_engine, make_session_factory
from .listener import ChatServer
from .logging_config import add_console_handler, configure_logging
from .messages import MessageLog
from .users import CredentialStore

logger = configure_logging()


def build_server(host: str, port: int, store: CredentialStore, message_log: MessageLog) -> ChatServer:
    """Wire the shared stores into a listener that serves every connection."""
    dispatcher = CommandDispatcher(store)

    def handle(sock, addr) -> None:
        ChatConnection(sock, addr, dispatcher, message_log).serve()

    return ChatServer(host, port, handle)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Line-oriented TCP chat server")
    parser.add_argument("--host", default=HOST)
    parser.add_argument("--port", type=int, default=PORT)
    parser.add_argument("--database-url", default=DATABASE_URL)
    args = parser.parse_args(argv)

    add_console_handler(logger)

    try:
        session_factory = make_session_factory(make_engine(args.database_url))
    except SQLAlchemyError as exc:
        logger.error("DATABASE_OPEN_FAIL url=%s reason=%s", args.database_url, exc)
        return 1

    try:
        server = build_server(args.host, args.port, CredentialStore(session_factory), MessageLog(session_factory))
    except OSError as exc:
        logger.error("LISTEN_FAIL addr=%s:%s reason=%s", args.host, args.port, exc)
        return 1

    try:
        server.serve_forever()
    except KeyboardInterrupt:
        pass
    finally:
        server.stop()
    return 0


if __name__ == "__main__":
    sys.exit(main())
