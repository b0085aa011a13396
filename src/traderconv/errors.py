# -*- coding: utf-8 -*-
"""Exceptions raised by the conversion core."""

from typing import Optional


class ConversionError(Exception):
    """Base exception for failed conversions."""


class ParseFormatError(ConversionError):
    """The content of an input document could not be understood.

    This is fatal to the conversion call that raised it. No partial output is
    produced.
    """

    source: str
    line_number: Optional[int]

    def __init__(self, source: str, message: str, line_number: Optional[int] = None) -> None:
        self.source = source
        self.line_number = line_number
        if line_number is None:
            super().__init__(f"{source}: {message}")
        else:
            super().__init__(f"{source}:{line_number}: {message}")


class ConfigurationError(Exception):
    """Error in the conversion configuration."""
