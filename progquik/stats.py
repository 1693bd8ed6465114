"""Human-readable formatting of progress status values."""

import math

__all__ = [
    "UNKNOWN",
    "Throbber",
    "format_interval",
    "format_percent",
    "format_rate",
]

# Shown for values that cannot be estimated yet (nan, inf, negative)
UNKNOWN = "?"

SI_PREFIXES = [
    ("", 1.0),
    ("K", 1e3),
    ("M", 1e6),
    ("G", 1e9),
    ("T", 1e12),
    ("P", 1e15),
    ("E", 1e18),
    ("Z", 1e21),
    ("Y", 1e24),
    ("R", 1e27),
    ("Q", 1e30),
]

WEEK = 7 * 24 * 3600


def _decimals(x: float) -> int:
    """Decimal places giving three significant digits for 1 <= x < 1000."""
    return 2 if x < 10 else 1 if x < 100 else 0


def _three_digits(x: float) -> str:
    # Decimals follow the rounded value, so 9.996 gives 10.0 and not 10.00
    return f"{x:.{_decimals(round(x, _decimals(x)))}f}"


def format_percent(progress: float) -> str:
    """Format progress in [0, 1] as a whole percentage."""
    return f"{100 * progress:.0f}%"


def format_interval(seconds: float) -> str:
    """Format a duration as 42s, 5m07s, 3h01m or 2d04h.

    Durations above a week are given in seconds with scientific notation.
    """
    if not math.isfinite(seconds) or seconds < 0:
        return UNKNOWN
    if seconds > WEEK:
        return f"{seconds:.2E}s"
    n = int(seconds)
    if n < 60:
        return f"{n}s"
    n, s = divmod(n, 60)
    if n < 60:
        return f"{n}m{s:02d}s"
    n, m = divmod(n, 60)
    if n < 24:
        return f"{n}h{m:02d}m"
    d, h = divmod(n, 24)
    return f"{d}d{h:02d}h"


def format_rate(rate: float) -> str:
    """Format work per second with three significant digits and SI prefix."""
    if not math.isfinite(rate) or rate < 0:
        return UNKNOWN
    for prefix, scale in SI_PREFIXES:
        x = rate / scale
        if round(x, _decimals(x)) < 1000:
            return _three_digits(x) + prefix
    # Beyond the largest prefix
    return f"{rate:.2G}"


class Throbber:
    """Animation that advances one frame per call.

    Frames wrap around the animation string. Once the work is done the
    throbber stops and shows a blank instead.
    """

    def __init__(self):
        self._index = 0

    def __call__(self, anim: str, done: bool = False) -> str:
        if done or not anim:
            return " "
        if self._index >= len(anim):
            self._index = 0
        c = anim[self._index]
        self._index += 1
        return c
