"""Helpers for splitting command lines and expanding escape sequences."""

from __future__ import annotations

from typing import IO, AnyStr

__all__ = [
    "EscapeError",
    "count_spaces",
    "flush_input",
    "unescape",
    "first_unquoted_space",
]

# Characters accepted as white space by the C locale's isspace().
_WHITESPACE = frozenset(" \t\n\v\f\r")

_SIMPLE_ESCAPES = {
    "n": "\n",
    "a": "\a",
    "b": "\b",
    "r": "\r",
    "\\": "\\",
    "f": "\f",
    "v": "\v",
    "'": "'",
    '"': '"',
    "?": "?",
    "*": "*",
    "$": "$",
    "t": "\t",
    " ": " ",
    "!": "!",
}

_OCTAL_DIGITS = frozenset("01234567")
_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")
_QUOTES = ("'", '"')


class EscapeError(ValueError):
    """Raised when a string holds a malformed escape sequence or quote."""


def _is_space(char: str) -> bool:
    return char in _WHITESPACE


def count_spaces(text: str) -> int:
    """Return how many white-space characters ``text`` contains."""
    return sum(1 for char in text if _is_space(char))


def flush_input(stream: IO[AnyStr]) -> None:
    """Discard input from ``stream`` up to and including the next newline or EOF."""
    stream.readline()


def _take_digits(chars, allowed: frozenset, count: int, base: int) -> int:
    digits = []
    for _ in range(count):
        char = next(chars, "")
        if char not in allowed:
            raise EscapeError("shell error: illegal numeric escape sequence")
        digits.append(char)
    return int("".join(digits), base) & 0xFF


def unescape(text: str) -> str:
    """Expand escape sequences and strip quotes from ``text``.

    Outside quotes the usual C-style escapes are recognised, including
    three-digit octal (``\\101``) and two-digit hex (``\\x41``) forms; any
    other escaped character stands for itself. Inside single or double
    quotes a backslash only escapes the enclosing quote character.
    """
    result: list[str] = []
    quoted = ""
    chars = iter(text)

    for char in chars:
        if char == "\\" and not quoted:
            following = next(chars, "")
            if not following:
                raise EscapeError("shell error: illegal escape sequence")
            if following in _SIMPLE_ESCAPES:
                result.append(_SIMPLE_ESCAPES[following])
            elif following in _OCTAL_DIGITS:
                value = (int(following) << 6) | _take_digits(chars, _OCTAL_DIGITS, 2, 8)
                result.append(chr(value & 0xFF))
            elif following in ("x", "X"):
                result.append(chr(_take_digits(chars, _HEX_DIGITS, 2, 16)))
            else:
                result.append(following)
        elif char == "\\":
            following = next(chars, "")
            if not following:
                raise EscapeError("shell error: invalid escape sequence")
            if following != quoted:
                result.append("\\")
            result.append(following)
        elif not quoted and char in _QUOTES:
            quoted = char
        elif quoted and char == quoted:
            quoted = ""
        else:
            result.append(char)

    if quoted:
        raise EscapeError("shell error: unterminated quote")
    return "".join(result)


def first_unquoted_space(text: str) -> int | None:
    """Return the index of the first white space outside quotes and escapes.

    Returns ``None`` when there is no such character.
    """
    quoted = ""
    previous = ""
    for position, char in enumerate(text):
        if previous != "\\":
            if not quoted and char in _QUOTES:
                quoted = char
            elif quoted and char == quoted:
                quoted = ""
            if not quoted and _is_space(char):
                return position
        previous = char
    return None