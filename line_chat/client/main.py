"""Console client for the line chat server."""
import argparse
import os
import socket
import sys
import threading
from typing import List, Optional, TextIO

from ..shared.protocol import DEFAULT_PORT, ENCODING, encode_line

CONNECT_TIMEOUT = 5


class ChatClient:
    """Send stdin lines to the server and print whatever comes back."""

    def __init__(self, sock: socket.socket, out: TextIO = sys.stdout):
        self.sock = sock
        self.out = out

    def send_line(self, text: str) -> bool:
        try:
            self.sock.sendall(encode_line(text))
        except OSError as exc:
            print(f"send error: {exc}", file=self.out)
            return False
        return True

    def receive_loop(self) -> None:
        """Print server lines until the connection closes."""
        with self.sock.makefile("r", encoding=ENCODING, errors="replace", newline="\n") as reader:
            try:
                for line in reader:
                    text = line.rstrip("\n")
                    print(f"Received: {text}", file=self.out, flush=True)
            except OSError as exc:
                print(f"receive error: {exc}", file=self.out)
        print("Server connection closed.", file=self.out, flush=True)

    def interact(self, stdin: TextIO = sys.stdin) -> None:
        while True:
            print("> ", end="", file=self.out, flush=True)
            raw = stdin.readline()
            if not raw:
                return
            line = raw.strip()
            if not line:
                continue
            if line == "exit":
                print("Exiting.", file=self.out)
                return
            self.send_line(line)


def connect(host: str, port: int) -> socket.socket:
    sock = socket.create_connection((host, port), timeout=CONNECT_TIMEOUT)
    sock.settimeout(None)
    return sock


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Line chat console client")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    parser.add_argument("message", nargs="*", help="send this line once after connecting")
    args = parser.parse_args(argv)

    print(f"Trying to connect to {args.host}:{args.port}...")
    try:
        sock = connect(args.host, args.port)
    except OSError as exc:
        print(f"Connection error: {exc}")
        return 1
    print("Connected!")

    client = ChatClient(sock)

    def receive_then_exit() -> None:
        client.receive_loop()
        os._exit(0)

    threading.Thread(target=receive_then_exit, daemon=True).start()

    with sock:
        if args.message:
            client.send_line(" ".join(args.message))
        client.interact()
    return 0


if __name__ == "__main__":
    sys.exit(main())
