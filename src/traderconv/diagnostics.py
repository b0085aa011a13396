# -*- coding: utf-8 -*-
"""Non-fatal problems found while reading lenient legacy input."""

import dataclasses
import logging
from typing import Iterator, Optional

_LOG = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class Diagnostic:
    """A skipped or coerced piece of input."""

    source: str
    message: str
    line_number: Optional[int] = None
    text: Optional[str] = None

    def __str__(self) -> str:
        location = self.source
        if self.line_number is not None:
            location = f"{location}:{self.line_number}"
        if self.text is None:
            return f"{location}: {self.message}"
        return f"{location}: {self.message}: {self.text!r}"


class Diagnostics:
    """Collects diagnostics for a single source document."""

    source: str
    _items: list[Diagnostic]

    def __init__(self, source: str) -> None:
        self.source = source
        self._items = []

    def warn(
        self,
        message: str,
        line_number: Optional[int] = None,
        text: Optional[str] = None,
    ) -> None:
        """Records a diagnostic, and logs it."""
        diag = Diagnostic(
            source=self.source,
            message=message,
            line_number=line_number,
            text=text,
        )
        _LOG.warning("%s", diag)
        self._items.append(diag)

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def as_list(self) -> list[Diagnostic]:
        """Returns a copy of the collected diagnostics."""
        return list(self._items)
