import io

import pytest

from tinysh.escapes import (
    EscapeError,
    count_spaces,
    first_unquoted_space,
    flush_input,
    unescape,
)


def test_count_spaces_counts_all_whitespace_kinds():
    assert count_spaces("a b\tc\nd\re\vf\fg") == 6


def test_count_spaces_empty_string():
    assert count_spaces("") == 0


def test_flush_input_stops_after_newline():
    stream = io.StringIO("junk line\nrest of input")
    flush_input(stream)
    assert stream.read() == "rest of input"


def test_flush_input_reads_to_eof_without_newline():
    stream = io.StringIO("no newline here")
    flush_input(stream)
    assert stream.read() == ""


@pytest.mark.parametrize("text", ["hello", "ls", "/proc/cpuinfo", ""])
def test_unescape_plain_text_unchanged(text):
    assert unescape(text) == text


@pytest.mark.parametrize(
    "text, expected",
    [
        ("\\n", "\n"),
        ("\\t", "\t"),
        ("\\\\", "\\"),
        ("\\ ", " "),
        ("\\$", "$"),
        ("\\!", "!"),
        ("\\'", "'"),
        ('\\"', '"'),
    ],
)
def test_unescape_simple_escapes(text, expected):
    assert unescape(text) == expected


def test_unescape_unknown_escape_is_literal():
    assert unescape("\\q") == "q"


def test_unescape_octal_and_hex_agree():
    assert unescape("\\101") == unescape("\\x41") == unescape("\\X41") == "A"


def test_unescape_hex_case_insensitive():
    assert unescape("\\x4a") == unescape("\\x4A")


def test_unescape_removes_quotes():
    assert unescape("'a b'") == "a b"
    assert unescape('"x"y') == "xy"


def test_unescape_backslash_kept_inside_quotes():
    assert unescape("'a\\nb'") == "a\\nb"


def test_unescape_escaped_quote_inside_quotes():
    assert unescape("'it\\'s'") == "it's"


def test_unescape_other_quote_inside_quotes_is_literal():
    assert unescape("\"it's\"") == "it's"


@pytest.mark.parametrize(
    "text",
    ["abc\\", "'abc", '"abc', "\\19x", "\\1", "\\x4", "\\xg1", "'abc\\"],
)
def test_unescape_errors(text):
    with pytest.raises(EscapeError):
        unescape(text)


def test_first_unquoted_space_simple():
    assert first_unquoted_space("ls -l") == 2


def test_first_unquoted_space_skips_quoted():
    assert first_unquoted_space("'a b' c") == 5


def test_first_unquoted_space_skips_escaped():
    assert first_unquoted_space("a\\ b c") == 4


def test_first_unquoted_space_tab():
    assert first_unquoted_space("cat\tfile") == 3


@pytest.mark.parametrize("text", ["abc", '"a b"', "", "a\\ b"])
def test_first_unquoted_space_none(text):
    assert first_unquoted_space(text) is None