"""Computed replies for ordinary (non-command) lines.

Everything here is pure: no session, storage or socket access.
"""
import re
from typing import Callable, List, Optional

INT_BITS = 64
INT_MIN = -(1 << (INT_BITS - 1))
INT_MAX = (1 << (INT_BITS - 1)) - 1
SUFFIX = " from server"

_INTEGER = re.compile(r"[+-]?[0-9]+")


def parse_int(token: str) -> Optional[int]:
    """Parse a signed base-10 integer that fits in 64 bits, else None."""
    if not _INTEGER.fullmatch(token):
        return None
    value = int(token)
    if not INT_MIN <= value <= INT_MAX:
        return None
    return value


def wrap_int(value: int) -> int:
    """Reduce ``value`` to signed 64-bit two's complement."""
    value &= (1 << INT_BITS) - 1
    if value > INT_MAX:
        value -= 1 << INT_BITS
    return value


def _binary(name: str, op: Callable[[int, int], int]) -> Callable[[List[str]], str]:
    def reply(args: List[str]) -> str:
        if len(args) != 2:
            return f"ERR: {name} expects two arguments"
        a, b = parse_int(args[0]), parse_int(args[1])
        if a is None or b is None:
            return f"ERR: {name} expects two integers"
        return str(wrap_int(op(a, b)))

    return reply


_BY_FIRST_TOKEN = {
    "echo": lambda args: " ".join(args),
    "add": _binary("add", lambda a, b: a + b),
    "mul": _binary("mul", lambda a, b: a * b),
}


def evaluate(line: str) -> str:
    """Return the reply for a trimmed, non-blank payload line."""
    tokens = line.split()
    handler = _BY_FIRST_TOKEN.get(tokens[0])
    if handler is not None:
        return handler(tokens[1:])
    if line.startswith("bytes "):
        return str(len(line[len("bytes "):].encode("utf-8")))
    if line.startswith("words "):
        return str(len(line[len("words "):].split()))
    return line + SUFFIX
