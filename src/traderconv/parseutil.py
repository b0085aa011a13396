# -*- coding: utf-8 -*-
"""Parsing utilities for lenient legacy input."""

import math
import re
from typing import Optional

_WHITESPACE_RUN_RX = re.compile(r"\s+")


def clean_text(s: str) -> str:
    """Cleans leading, trailing, and redundant whitespace from a string.

    :param s: String to remove whitespace from.
    :return: Cleaned string.
    """
    return _WHITESPACE_RUN_RX.sub(" ", s.strip())


def strip_line_comment(line: str) -> str:
    """Removes a ``//`` comment and surrounding whitespace from a line."""
    line, _, _ = line.partition("//")
    return line.strip()


def split_fields(s: str) -> list[str]:
    """Splits a comma delimited string into stripped fields.

    :param s: Comma delimited string.
    :return: Fields, in order. Empty fields are kept.
    """
    return [v.strip() for v in s.split(",")]


_LEADING_INT_RX = re.compile(r"\s*([-+]?\d+)")
_LEADING_FLOAT_RX = re.compile(r"\s*([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)")


def parse_leading_int(s: str) -> Optional[int]:
    """Parses the integer at the start of ``s``, ignoring any trailing text.

    :param s: String to parse, such as ``"50"`` or ``"50 credits"``.
    :return: The integer, or None if ``s`` does not start with one.
    """
    if match := _LEADING_INT_RX.match(s):
        return int(match.group(1))
    return None


def parse_leading_float(s: str) -> Optional[float]:
    """Parses the number at the start of ``s``, ignoring any trailing text.

    :param s: String to parse, such as ``"0.5"`` or ``"-1"``.
    :return: The number, or None if ``s`` does not start with one.
    """
    if match := _LEADING_FLOAT_RX.match(s):
        value = float(match.group(1))
        if math.isfinite(value):
            return value
    return None
