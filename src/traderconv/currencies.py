# -*- coding: utf-8 -*-
"""Recognises currency types from currency class names.

TraderPlus v2 groups denominations into named currency types, whereas v1
lists bare class names such as ``TraderPlus_Money_Euro100``. The type is
recognised from well known words in the class name, or from the
``<Prefix>_Money_<Type>`` naming convention.
"""

import re
from typing import Iterable, Iterator, Optional, Sequence

from traderconv.datatypes import currency, legacy

# Checked in order.
_KNOWN_TYPES = (
    ("euro", "EUR"),
    ("dollar", "USD"),
    ("ruble", "RUB"),
)

_MONEY_RX = re.compile(r"_Money_([A-Za-z]+)", re.IGNORECASE)


def _money_type(class_name: str) -> Optional[str]:
    if match := _MONEY_RX.search(class_name):
        return match.group(1).upper()
    return None


def currency_type_of(class_name: str, fallback: str) -> str:
    """Returns the currency type of a currency class name.

    :param class_name: Class name, such as ``"TraderPlus_Money_Euro100"``.
    :param fallback: Returned if the type cannot be recognised.
    :return: Currency type, such as ``"EUR"``.
    """
    lowered = class_name.lower()
    for word, type_ in _KNOWN_TYPES:
        if word in lowered:
            return type_
    return _money_type(class_name) or fallback


def dominant_currency_type(class_names: Sequence[str], fallback: str, empty: str) -> str:
    """Returns the currency type that most of a config's currencies are likely to be.

    The first well known word found in any of the class names wins, in the
    order euro, dollar, ruble. Otherwise the first class name is checked for
    the ``_Money_`` convention.

    :param class_names: Currency class names.
    :param fallback: Returned if no type can be recognised.
    :param empty: Returned if ``class_names`` is empty.
    :return: Currency type.
    """
    if not class_names:
        return empty
    lowered = [c.lower() for c in class_names]
    for word, type_ in _KNOWN_TYPES:
        if any(word in c for c in lowered):
            return type_
    return _money_type(class_names[0]) or fallback


def expand_aliases(currencies: Iterable[legacy.V1Currency]) -> Iterator[currency.Currency]:
    """Splits comma separated class names into one currency each.

    Each alias has the value of the entry it came from. Empty aliases are
    dropped.
    """
    for entry in currencies:
        for alias in entry.class_name.split(","):
            if alias := alias.strip():
                yield currency.Currency(class_name=alias, value=entry.value)


def group_by_type(
    currencies: Iterable[currency.Currency],
    dominant: str,
    fallback: str,
) -> list[currency.CurrencyType]:
    """Groups currencies by their currency type.

    :param currencies: Currencies to group.
    :param dominant: Currency type placed first. If there are no currencies
    at all, a single empty currency type of this name is returned.
    :param fallback: Currency type of currencies that cannot be recognised.
    :return: Currency types, ``dominant`` first, the others in the order that
    they are first seen.
    """
    groups: dict[str, list[currency.Currency]] = {}
    for c in currencies:
        groups.setdefault(currency_type_of(c.class_name, fallback), []).append(c)
    if not groups:
        return [currency.CurrencyType(currency_name=dominant)]
    result = []
    if dominant in groups:
        result.append(
            currency.CurrencyType(currency_name=dominant, currencies=groups.pop(dominant))
        )
    result.extend(
        currency.CurrencyType(currency_name=name, currencies=cs) for name, cs in groups.items()
    )
    return result
