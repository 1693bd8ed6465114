"""Status line output: erasing, writing and truncating lines on a terminal."""

import os

from progquik.escapes import CLEAR_LINE, CURSOR_UP, RESET, column, printable_len, raw_len

__all__ = ["MAX_LINE_LEN", "Renderer", "get_width"]

# Widest status line rendered, in columns
MAX_LINE_LEN = 256

# Appended to lines cut at the terminal width
TRUNCATION_MARK = ">>>"


def get_width(stream) -> int:
    """Return the column count of the terminal behind stream, or -1."""
    try:
        if not stream.isatty():
            return -1
        return os.get_terminal_size(stream.fileno()).columns
    except (AttributeError, OSError, ValueError):
        return -1


class Renderer:
    """Writes status lines to a stream and erases them on the next cycle.

    Output only happens when the stream is a terminal at least as wide as the
    truncation mark. Otherwise all writes are skipped while the caller keeps
    computing status as usual.
    """

    def __init__(self, stream, max_line_len: int = MAX_LINE_LEN):
        self.stream = stream
        self.max_line_len = max_line_len
        self.width = -1  # Real terminal width, -1 if not a terminal
        self.line_width = -1  # Usable columns for text
        self.printed_lines = 0

    def update_width(self) -> int:
        self.width = get_width(self.stream)
        if self.width >= self.max_line_len + 2:
            self.line_width = self.max_line_len
        else:
            # Keep the last columns free for the parked cursor
            self.line_width = self.width - 2
        return self.width

    @property
    def usable(self) -> bool:
        return self.width >= len(TRUNCATION_MARK)

    def erase(self):
        """Erase all lines written since the last erase."""
        if not self.printed_lines:
            return
        if not self.usable:
            self.printed_lines = 0
            return
        buf = ["\r", CLEAR_LINE]
        buf.extend(f"{CURSOR_UP}{CLEAR_LINE}" for _ in range(self.printed_lines - 1))
        self.printed_lines = 0
        self.stream.write("".join(buf))
        self.stream.flush()

    def fit(self, text: str) -> str:
        """Cut text to the line width, marking the cut."""
        if printable_len(text) <= self.line_width:
            return text
        keep = raw_len(text, max(0, self.line_width - len(TRUNCATION_MARK)))
        return f"{text[:keep]}{TRUNCATION_MARK}{RESET}"

    def write_line(self, text: str):
        """Write one status line below the lines already written."""
        if not self.usable:
            return
        buf = []
        if self.printed_lines:
            buf.append("\n")
        buf.append(self.fit(text))
        # Park the cursor at the end of the line
        buf.append(column(self.width))
        self.stream.write("".join(buf))
        self.stream.flush()
        self.printed_lines += 1
