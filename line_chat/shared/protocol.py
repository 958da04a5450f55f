"""Wire constants shared by the chat client and server."""

ENCODING = "utf-8"
COMMAND_PREFIX = "/"
DEFAULT_PORT = 3000


def encode_line(text: str) -> bytes:
    """Frame ``text`` as one newline-terminated line."""
    return (text + "\n").encode(ENCODING)


def decode_line(raw: bytes) -> str:
    return raw.decode(ENCODING, errors="replace").strip()


def is_command(line: str) -> bool:
    return line.startswith(COMMAND_PREFIX)
