"""Clock, timing and parsing helpers."""

import re
import time

__all__ = [
    "Clock",
    "parse_count",
    "stopwatch",
]


class Clock:
    """Monotonic clock reporting seconds since a resettable origin."""

    def __init__(self):
        self.origin = time.perf_counter()

    def reset(self):
        self.origin = time.perf_counter()

    def __call__(self) -> float:
        return time.perf_counter() - self.origin


def stopwatch():
    """Generator that yields elapsed time since last yield."""
    t = time.perf_counter()
    while True:
        now = time.perf_counter()
        yield now - t
        t = now


def parse_count(count: str | None) -> int | None:
    """Parse a work count with optional SI suffix.

    Supports:
    - Plain numbers: 1000, 1_000_000
    - SI suffixes: k, m, g, t (powers of 1000)
    - Decimal mantissa with suffix: 2.5g
    - Case insensitive

    Examples: 100k, 5m, 4g, 4_000_000_000
    """
    if count is None:
        return None
    s = count.strip().lower().replace("_", "")

    si_suffixes = {"k": 1000, "m": 1000**2, "g": 1000**3, "t": 1000**4}

    m = re.match(r"^(\d+(?:\.\d+)?)\s*([kmgt])$", s)
    if m:
        num, suffix = m.groups()
        return int(float(num) * si_suffixes[suffix])

    m = re.match(r"^(\d+)$", s)
    if m:
        return int(m.group(1))

    raise ValueError(f"Invalid count format: {count}")
