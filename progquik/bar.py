"""Progress bar layout: fixed length or expanding to the free line width."""

from progquik.escapes import RESET, REVERSE

__all__ = ["Bar", "render_bar"]

MIN_BAR_LEN = 10
MAX_BAR_LEN = 256


def _overlay_centered(buf: str, label: str, capacity: int) -> str:
    """Write label over the middle of buf.

    A label as long as buf or longer replaces it, cut to capacity.
    """
    if len(buf) > len(label):
        start = (len(buf) - len(label)) // 2
        return buf[:start] + label + buf[start + len(label) :]
    return label[:capacity]


def render_bar(
    progress: float,
    length: int,
    fill: str,
    label: str = "",
    min_len: int = MIN_BAR_LEN,
    max_len: int = MAX_BAR_LEN,
) -> str:
    """Render a bar of the given length showing progress.

    Args:
        progress: Completed fraction, normally 0..1 (overshoot is capped)
        length: Bar length in columns, clamped to [min_len, max_len]
        fill: Two chars (done, todo) like "#.", or one char drawn over the
            whole bar with the done part in reverse video
        label: Text centered inside the bar
        min_len: Shortest bar
        max_len: Longest bar
    """
    if len(fill) not in (1, 2):
        raise ValueError(f"Bar fill must have 1 or 2 chars, got {fill!r}")
    length = max(min_len, min(max_len, length))
    done = max(0, min(length, round(length * progress)))

    if len(fill) == 2:
        buf = fill[0] * done + fill[1] * (length - done)
        return _overlay_centered(buf, label, max_len)

    buf = _overlay_centered(fill * length, label, max_len)
    return f"{REVERSE}{buf[:done]}{RESET}{buf[done:]}"


class Bar:
    """Bar item for status lines, rendered when formatted.

    A positive length renders at once. Length 0 asks for all the space left
    on the line: the bar formats as an empty string until the status line
    resolves its length with resolve().
    """

    def __init__(
        self,
        progress: float,
        length: int,
        fill: str,
        label: str = "",
        min_len: int = MIN_BAR_LEN,
        max_len: int = MAX_BAR_LEN,
    ):
        if len(fill) not in (1, 2):
            raise ValueError(f"Bar fill must have 1 or 2 chars, got {fill!r}")
        self.progress = progress
        self.length = length
        self.fill = fill
        self.label = label
        self.min_len = min_len
        self.max_len = max_len
        self.resolved: int | None = length if length > 0 else None

    @property
    def expand(self) -> bool:
        return self.length <= 0

    @property
    def pending(self) -> bool:
        """True for an expanding bar whose length is not known yet."""
        return self.resolved is None

    def resolve(self, length: int):
        self.resolved = length

    def __str__(self) -> str:
        if self.resolved is None:
            return ""
        return render_bar(
            self.progress, self.resolved, self.fill, self.label, self.min_len, self.max_len
        )

    def __format__(self, spec: str) -> str:
        return format(str(self), spec)

    def __repr__(self) -> str:
        return f"Bar(progress={self.progress!r}, length={self.length!r}, fill={self.fill!r})"
