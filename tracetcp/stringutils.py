"""String trimming and strict numeric parsing helpers."""

from __future__ import annotations

import math
import re

__all__ = [
    "ParseError",
    "trim_left",
    "trim_right",
    "trim_both",
    "parse_int",
    "parse_unsigned_int",
    "parse_short",
    "parse_unsigned_short",
    "parse_double",
]

DEFAULT_WHITESPACE = " \t"

# Whitespace skipped before a number is read, beyond the trimmed spaces and tabs.
_LEADING_WHITESPACE = " \t\n\v\f\r"

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_FLOAT_PATTERN = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


class ParseError(ValueError):
    """Raised when a string does not hold a valid value of the requested type."""


def trim_left(text: str, chars: str = DEFAULT_WHITESPACE) -> str:
    """Remove any of ``chars`` from the start of ``text``."""
    return text.lstrip(chars)


def trim_right(text: str, chars: str = DEFAULT_WHITESPACE) -> str:
    """Remove any of ``chars`` from the end of ``text``."""
    return text.rstrip(chars)


def trim_both(text: str, chars: str = DEFAULT_WHITESPACE) -> str:
    """Remove any of ``chars`` from both ends of ``text``."""
    return trim_left(trim_right(text, chars), chars)


def _prepare(text: str) -> str:
    return trim_both(text).lstrip(_LEADING_WHITESPACE)


def _parse_integer(text: str, low: int, high: int) -> int:
    body = _prepare(text)
    if not _INT_PATTERN.fullmatch(body):
        raise ParseError(f"not an integer: {text!r}")
    value = int(body)
    if not low <= value <= high:
        raise ParseError(f"integer out of range [{low}..{high}]: {text!r}")
    return value


def parse_int(text: str) -> int:
    """Parse a signed 32-bit integer; the whole string must be consumed."""
    return _parse_integer(text, -(2**31), 2**31 - 1)


def parse_unsigned_int(text: str) -> int:
    """Parse an unsigned 32-bit integer."""
    return _parse_integer(text, 0, 2**32 - 1)


def parse_short(text: str) -> int:
    """Parse a signed 16-bit integer."""
    return _parse_integer(text, -(2**15), 2**15 - 1)


def parse_unsigned_short(text: str) -> int:
    """Parse an unsigned 16-bit integer."""
    return _parse_integer(text, 0, 2**16 - 1)


def parse_double(text: str) -> float:
    """Parse a finite floating point number."""
    body = _prepare(text)
    if not _FLOAT_PATTERN.fullmatch(body):
        raise ParseError(f"not a number: {text!r}")
    value = float(body)
    if math.isinf(value):
        raise ParseError(f"number out of range: {text!r}")
    return value