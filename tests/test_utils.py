import pytest

from progquik.utils import Clock, parse_count, stopwatch


@pytest.mark.parametrize(
    "text, count",
    [
        ("1000", 1000),
        ("1_000_000", 1_000_000),
        ("100k", 100_000),
        ("5M", 5_000_000),
        ("2.5g", 2_500_000_000),
        ("1t", 10**12),
        (" 42 ", 42),
    ],
)
def test_parse_count(text, count):
    assert parse_count(text) == count


def test_parse_count_none():
    assert parse_count(None) is None


@pytest.mark.parametrize("text", ["", "abc", "5x", "-3", "1.5"])
def test_parse_count_invalid(text):
    with pytest.raises(ValueError):
        parse_count(text)


def test_clock_monotonic_and_reset():
    clock = Clock()
    a = clock()
    b = clock()
    assert 0 <= a <= b
    clock.reset()
    assert clock() <= b + 1.0


def test_stopwatch():
    timer = stopwatch()
    assert next(timer) >= 0
    assert next(timer) >= 0
