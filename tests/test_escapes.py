import pytest

from progquik.escapes import column, printable_len, raw_len, strip_escapes


@pytest.mark.parametrize(
    "text, length",
    [
        ("", 0),
        ("abc", 3),
        ("\x1b[7mab\x1b[0mc", 3),
        ("\x1b[1;31mX", 1),
        ("\x1b[K\x1b[A\x1b[80G", 0),
        ("\x1bXab", 3),  # Lone ESC is skipped, X is printable
        ("ab\x1b[", 2),  # Unterminated sequence
    ],
)
def test_printable_len(text, length):
    assert printable_len(text) == length


def test_raw_len_includes_following_escape():
    s = "abc\x1b[7mfgh"
    assert raw_len(s, 3) == 7
    assert raw_len(s, 4) == 8
    assert raw_len(s, 0) == 0


def test_raw_len_leading_and_trailing_escapes():
    assert raw_len("\x1b[7mabc", 0) == 4
    assert raw_len("ab\x1b[0m", 2) == 6
    assert raw_len("ab\x1b[0m\x1b[1mcd", 2) == 10


def test_raw_len_beyond_end():
    assert raw_len("abc", 10) == 3


def test_raw_len_prefix_has_n_printable_chars():
    s = "\x1b[1m12\x1b[0m345\x1b[7m6\x1b[0m78"
    for n in range(printable_len(s) + 1):
        cut = raw_len(s, n)
        assert printable_len(s[:cut]) == n
        # Maximal: no escape sequence starts right after the cut
        assert cut == len(s) or s[cut] != "\x1b"


def test_strip_escapes():
    assert strip_escapes("\x1b[7m 50% \x1b[0m....") == " 50% ...."


def test_column():
    assert column(80) == "\x1b[80G"
