"""Parsing of the ``<left><sep><right>`` pairs used on the command line."""

from __future__ import annotations

import math
import re
from typing import Callable, Optional, TypeVar

T = TypeVar("T")

_INTEGER = re.compile(r"[+-]?[0-9]+")


def parse_int(text: str) -> Optional[int]:
    """Parse a decimal integer, rejecting whitespace and digit separators."""

    if not _INTEGER.fullmatch(text):
        return None
    return int(text)


def parse_float(text: str) -> Optional[float]:
    """Parse a float literal such as ``-1.20`` or ``3e-5``."""

    if not text or text != text.strip() or "_" in text:
        return None
    try:
        return float(text)
    except ValueError:
        return None


def parse_pair(text: str, separator: str, parse: Callable[[str], Optional[T]] = parse_int) -> Optional[tuple[T, T]]:
    """Split ``text`` at the first ``separator`` and parse both sides.

    ``parse_pair("400x600", "x")`` gives ``(400, 600)``; a missing separator
    or a side that does not parse gives ``None``.
    """

    left, found, right = text.partition(separator)
    if not found:
        return None
    left_value = parse(left)
    right_value = parse(right)
    if left_value is None or right_value is None:
        return None
    return left_value, right_value


def parse_dimensions(text: str) -> Optional[tuple[int, int]]:
    """Parse ``<width>x<height>`` with both sides positive."""

    pair = parse_pair(text, "x")
    if pair is None or pair[0] <= 0 or pair[1] <= 0:
        return None
    return pair


def parse_complex(text: str) -> Optional[complex]:
    """Parse ``<real>,<imaginary>`` into a complex number with finite parts."""

    pair = parse_pair(text, ",", parse_float)
    if pair is None or not all(math.isfinite(part) for part in pair):
        return None
    return complex(pair[0], pair[1])
