"""Accept loop that starts one connection thread per client."""
import socket
import threading
from typing import Callable, Tuple

from .logging_config import configure_logging

logger = configure_logging()

ConnectionHandler = Callable[[socket.socket, Tuple[str, int]], None]


class ChatServer:
    """Bind one TCP endpoint and hand every accepted socket to ``handler``.

    Connections are not capped; ``_spawn`` is the single place where a
    limit on concurrent sessions would go.
    """

    def __init__(self, host: str, port: int, handler: ConnectionHandler, backlog: int = 128):
        self.handler = handler
        self._stopped = threading.Event()
        self._active = 0
        self._active_lock = threading.Lock()
        self._sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        self._sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        try:
            self._sock.bind((host, port))
            self._sock.listen(backlog)
        except OSError:
            self._sock.close()
            raise
        self._address = self._sock.getsockname()[:2]

    @property
    def address(self) -> Tuple[str, int]:
        return self._address

    @property
    def active_connections(self) -> int:
        with self._active_lock:
            return self._active

    def serve_forever(self) -> None:
        logger.info("SERVER_LISTENING addr=%s:%s", *self.address)
        while not self._stopped.is_set():
            try:
                conn, addr = self._sock.accept()
            except OSError as exc:
                if self._stopped.is_set():
                    break
                logger.warning("ACCEPT_FAIL reason=%s", exc)
                continue
            self._spawn(conn, addr)
        logger.info("SERVER_STOPPED")

    def stop(self) -> None:
        self._stopped.set()
        try:
            self._sock.shutdown(socket.SHUT_RDWR)
        except OSError:
            pass
        self._sock.close()

    def _spawn(self, conn: socket.socket, addr: Tuple[str, int]) -> None:
        thread = threading.Thread(target=self._run, args=(conn, addr), daemon=True)
        thread.start()

    def _run(self, conn: socket.socket, addr: Tuple[str, int]) -> None:
        with self._active_lock:
            self._active += 1
            active = self._active
        logger.info("CONNECTION_OPENED addr=%s:%s active=%s", addr[0], addr[1], active)
        try:
            self.handler(conn, addr)
        except Exception:  # noqa: BLE001
            logger.exception("CONNECTION_CRASHED addr=%s:%s", addr[0], addr[1])
            conn.close()
        finally:
            with self._active_lock:
                self._active -= 1
                active = self._active
            logger.info("CONNECTION_CLOSED addr=%s:%s active=%s", addr[0], addr[1], active)
