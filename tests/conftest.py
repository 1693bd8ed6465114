import io

import pytest

from progquik import terminal


class FakeTerminal(io.StringIO):
    """In-memory stream that claims to be a terminal."""

    def isatty(self):
        return True


class FakeClock:
    """Clock advanced by hand."""

    def __init__(self):
        self.now = 0.0

    def reset(self):
        self.now = 0.0

    def __call__(self):
        return self.now


@pytest.fixture
def term(monkeypatch):
    """An 80 column terminal."""
    monkeypatch.setattr(terminal, "get_width", lambda stream: 80)
    return FakeTerminal()


@pytest.fixture
def clock():
    return FakeClock()
