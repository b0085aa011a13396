# -*- coding: utf-8 -*-
"""Deterministic slug and ID generation for categories and products.

IDs have the form ``{prefix}_{slug}_{counter:03d}``, such as
``cat_weapons_001`` or ``prod_ak74_002``. Counters are kept per slug, never
decrease, and are seeded from IDs that already exist.
"""

import dataclasses
import re
from typing import Optional

CATEGORY_PREFIX = "cat"
PRODUCT_PREFIX = "prod"

_WHITESPACE_RX = re.compile(r"\s+")
_NON_SLUG_RX = re.compile(r"[^a-z0-9_]")
_COUNTER_SUFFIX_RX = re.compile(r"_(\d{3})$")


def slug(name: Optional[str], fallback: str) -> str:
    """Creates an identifier-safe base name.

    :param name: Human readable name, such as ``"Assault Rifles"``.
    :param fallback: Returned if ``name`` is empty or None.
    :return: Lower cased ``name`` with whitespace and any character outside
    ``[a-z0-9_]`` removed.
    """
    if not name:
        return fallback
    s = _WHITESPACE_RX.sub("", name.lower())
    return _NON_SLUG_RX.sub("", s)


def counter_suffix(id_: str) -> Optional[int]:
    """Returns the 3-digit counter at the end of an ID, if it has one."""
    if match := _COUNTER_SUFFIX_RX.search(id_):
        return int(match.group(1))
    return None


def format_id(prefix: str, slug_: str, counter: int) -> str:
    """Formats an ID from its parts."""
    return f"{prefix}_{slug_}_{counter:03d}"


def next_id(prefix: str, slug_: str, counters: dict[str, int]) -> str:
    """Mints the next ID for ``slug_``, advancing its counter in ``counters``.

    :param prefix: ID prefix, such as ``"cat"``.
    :param slug_: Slug the ID is scoped to.
    :param counters: Highest counter issued (or observed) per slug. Updated in
    place.
    :return: New ID.
    """
    counter = counters.get(slug_, 0) + 1
    counters[slug_] = counter
    return format_id(prefix, slug_, counter)


@dataclasses.dataclass
class IdGenerator:
    """Mints IDs with a fixed prefix, tracking counters per slug."""

    prefix: str
    counters: dict[str, int] = dataclasses.field(default_factory=dict)

    def next_id(self, slug_: str) -> str:
        """Mints the next ID for ``slug_``."""
        return next_id(self.prefix, slug_, self.counters)

    def observe(self, slug_: str, id_: str) -> None:
        """Seeds the counter for ``slug_`` from an existing ID.

        IDs without a 3-digit counter suffix are ignored, other than to ensure
        that the slug has a counter.
        """
        current = self.counters.get(slug_, 0)
        suffix = counter_suffix(id_)
        if suffix is not None and suffix > current:
            current = suffix
        self.counters[slug_] = current

    def observe_own(self, slug_: str, id_: str) -> None:
        """Seeds the counter only if ``id_`` was minted for ``slug_``.

        An ID belongs to ``slug_`` when it starts with ``{prefix}_{slug_}_``.
        """
        if id_.startswith(f"{self.prefix}_{slug_}_"):
            self.observe(slug_, id_)
        else:
            self.counters.setdefault(slug_, 0)
