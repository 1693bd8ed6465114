import io

from conftest import FakeTerminal

from progquik import terminal
from progquik.terminal import Renderer, get_width


def make_renderer(monkeypatch, width=80):
    monkeypatch.setattr(terminal, "get_width", lambda stream: width)
    renderer = Renderer(FakeTerminal())
    renderer.update_width()
    return renderer


def test_get_width_not_a_terminal():
    assert get_width(io.StringIO()) == -1
    assert get_width(object()) == -1
    # Claims to be a tty but has no file descriptor
    assert get_width(FakeTerminal()) == -1


def test_line_width(monkeypatch):
    assert make_renderer(monkeypatch, 80).line_width == 78
    assert make_renderer(monkeypatch, 258).line_width == 256
    assert make_renderer(monkeypatch, 300).line_width == 256


def test_unusable_output_writes_nothing():
    renderer = Renderer(io.StringIO())
    renderer.update_width()
    assert not renderer.usable
    renderer.write_line("hello")
    assert renderer.stream.getvalue() == ""
    assert renderer.printed_lines == 0


def test_erase_on_unusable_output_resets_count(monkeypatch):
    renderer = make_renderer(monkeypatch, 2)
    renderer.printed_lines = 3
    renderer.erase()
    assert renderer.printed_lines == 0
    assert renderer.stream.getvalue() == ""


def test_write_lines(monkeypatch):
    renderer = make_renderer(monkeypatch)
    renderer.write_line("hello")
    renderer.write_line("world")
    assert renderer.stream.getvalue() == "hello\x1b[80G\nworld\x1b[80G"
    assert renderer.printed_lines == 2


def test_erase(monkeypatch):
    renderer = make_renderer(monkeypatch)
    renderer.erase()
    assert renderer.stream.getvalue() == ""
    for _ in range(3):
        renderer.write_line("x")
    renderer.stream.seek(0)
    renderer.stream.truncate()
    renderer.erase()
    assert renderer.stream.getvalue() == "\r\x1b[K" + "\x1b[A\x1b[K" * 2
    assert renderer.printed_lines == 0


def test_truncation(monkeypatch):
    renderer = make_renderer(monkeypatch)
    renderer.write_line("x" * 100)
    assert renderer.stream.getvalue() == "x" * 75 + ">>>\x1b[0m\x1b[80G"


def test_exact_fit_not_truncated(monkeypatch):
    renderer = make_renderer(monkeypatch)
    renderer.write_line("x" * 78)
    assert renderer.stream.getvalue() == "x" * 78 + "\x1b[80G"


def test_truncation_keeps_formatting_of_shown_text(monkeypatch):
    renderer = make_renderer(monkeypatch)
    text = "x" * 75 + "\x1b[1m" + "y" * 10
    assert renderer.fit(text) == "x" * 75 + "\x1b[1m>>>\x1b[0m"


def test_escapes_do_not_count_towards_width(monkeypatch):
    renderer = make_renderer(monkeypatch)
    text = "\x1b[7m" + "x" * 78 + "\x1b[0m"
    assert renderer.fit(text) == text
