"""Escape-sequence aware measuring and cutting of status text.

Only the CSI subset used for status lines is recognized: ESC, then optionally
``[`` followed by parameter chars (0x30-0x3F), intermediate chars (0x20-0x2F)
and one final char (0x40-0x7E). An ESC that is not followed by ``[`` is skipped
on its own.
"""

import re

__all__ = [
    "CLEAR_LINE",
    "CURSOR_UP",
    "RESET",
    "REVERSE",
    "column",
    "printable_len",
    "raw_len",
    "strip_escapes",
]

CLEAR_LINE = "\x1b[K"
CURSOR_UP = "\x1b[A"
REVERSE = "\x1b[7m"
RESET = "\x1b[0m"

# A run of zero or more consecutive escape sequences
_ESCAPES = re.compile(r"(?:\x1b(?:\[[\x30-\x3f]*[\x20-\x2f]*[\x40-\x7e]?)?)*")


def column(n: int) -> str:
    """Escape that moves the cursor to column n (1-based)."""
    return f"\x1b[{n}G"


def _skip(s: str, pos: int) -> int:
    """Position of the first printable char at or after pos."""
    return _ESCAPES.match(s, pos).end()


def strip_escapes(s: str) -> str:
    return _ESCAPES.sub("", s)


def printable_len(s: str) -> int:
    """Length of s counting only chars outside escape sequences."""
    return len(strip_escapes(s))


def raw_len(s: str, n: int) -> int:
    """Maximal prefix length of s that holds exactly n printable chars.

    Escape sequences right after the nth printable char belong to the prefix,
    so cutting at this offset keeps any formatting meant for the shown text.
    If s has fewer than n printable chars, returns len(s).

        raw_len("abc\\x1b[7mfgh", 3) == 7
        raw_len("abc\\x1b[7mfgh", 4) == 8
    """
    pos = _skip(s, 0)
    count = 0
    while count < n and pos < len(s):
        pos = _skip(s, pos + 1)
        count += 1
    return pos
