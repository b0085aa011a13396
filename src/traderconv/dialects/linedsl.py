# -*- coding: utf-8 -*-
"""Reader for the line-oriented TraderX configuration.

Example input::

    <CurrencyName> Rubles
    <Currency> Ruble100,100
    <Trader> Bob
    <Category> Weapons
    AK74,*,50,25      // className,quantity,buyPrice,sellPrice
    <FileEnd>

Reading is lenient. Lines that cannot be understood are skipped, and
reported as diagnostics rather than failing the whole file.
"""

import dataclasses
import logging
from typing import Optional

from traderconv import diagnostics, parseutil
from traderconv.datatypes import legacy

_LOG = logging.getLogger(__name__)

TAG_CURRENCY_NAME = "<CurrencyName>"
TAG_CURRENCY = "<Currency>"
TAG_TRADER = "<Trader>"
TAG_CATEGORY = "<Category>"
TAG_FILE_END = "<FileEnd>"
TAG_OPEN_FILE = "<OpenFile>"

_TERMINATORS = (TAG_FILE_END, TAG_OPEN_FILE)

_MIN_CURRENCY_FIELDS = 2
_MIN_PRODUCT_FIELDS = 4


@dataclasses.dataclass
class ParseResult:
    """Result of ``parse``."""

    config: legacy.DslConfig
    diagnostics: list[diagnostics.Diagnostic]


@dataclasses.dataclass
class _State:
    config: legacy.DslConfig
    diags: diagnostics.Diagnostics
    in_currency: bool = False
    trader: Optional[legacy.DslTrader] = None
    category: Optional[legacy.DslCategory] = None


def _tag_value(line: str, tag: str) -> str:
    return line[len(tag) :].strip()


def _parse_int_field(
    state: _State,
    s: str,
    what: str,
    line_number: int,
    line: str,
) -> int:
    value = parseutil.parse_leading_int(s)
    if value is None:
        state.diags.warn(f"{what} {s!r} is not a number, using 0", line_number, line)
        return 0
    return value


def _read_currency(state: _State, line_number: int, line: str) -> None:
    fields = parseutil.split_fields(_tag_value(line, TAG_CURRENCY))
    if len(fields) < _MIN_CURRENCY_FIELDS:
        state.diags.warn("currency needs a class name and a value", line_number, line)
        return
    state.config.currencies.append(
        legacy.DslCurrency(
            class_name=fields[0],
            value=_parse_int_field(state, fields[1], "currency value", line_number, line),
        )
    )


def _read_product(state: _State, category: legacy.DslCategory, line_number: int, line: str) -> None:
    fields = parseutil.split_fields(line)
    if len(fields) < _MIN_PRODUCT_FIELDS:
        state.diags.warn(
            f"product row has {len(fields)} fields, needs at least {_MIN_PRODUCT_FIELDS}",
            line_number,
            line,
        )
        return
    category.products.append(
        legacy.DslProduct(
            class_name=fields[0],
            quantity=fields[1],
            buy_price=_parse_int_field(state, fields[2], "buy price", line_number, line),
            sell_price=_parse_int_field(state, fields[3], "sell price", line_number, line),
        )
    )


def _read_line(state: _State, line_number: int, line: str) -> bool:
    """Reads a single comment-free, non-empty line.

    :return: False if reading should stop.
    """
    if line.startswith(TAG_CURRENCY_NAME):
        state.config.currency_name = _tag_value(line, TAG_CURRENCY_NAME)
        state.in_currency = True
    elif line.startswith(TAG_CURRENCY):
        if state.in_currency:
            _read_currency(state, line_number, line)
        else:
            state.diags.warn("currency outside of the currency section", line_number, line)
    elif line.startswith(TAG_TRADER):
        state.in_currency = False
        state.trader = legacy.DslTrader(name=_tag_value(line, TAG_TRADER))
        state.category = None
        state.config.traders.append(state.trader)
    elif line.startswith(TAG_CATEGORY):
        if state.trader is None:
            state.diags.warn("category outside of a trader", line_number, line)
        else:
            state.category = legacy.DslCategory(name=_tag_value(line, TAG_CATEGORY))
            state.trader.categories.append(state.category)
    elif line.startswith(_TERMINATORS):
        return False
    elif not line.startswith("<") and "," in line:
        if state.category is None:
            state.diags.warn("product row outside of a category", line_number, line)
        else:
            _read_product(state, state.category, line_number, line)
    else:
        _LOG.debug("%s:%d: ignoring line %r", state.diags.source, line_number, line)
    return True


def parse(text: str, source: str = "<dsl>") -> ParseResult:
    """Parses a TraderX configuration.

    :param text: Configuration text.
    :param source: Name of the input, for diagnostics.
    :return: Parsed configuration, and any problems found in it.
    """
    state = _State(config=legacy.DslConfig(), diags=diagnostics.Diagnostics(source))
    for line_number, raw_line in enumerate(text.splitlines(), start=1):
        line = parseutil.strip_line_comment(raw_line)
        if not line:
            continue
        if not _read_line(state, line_number, line):
            break
    return ParseResult(config=state.config, diagnostics=state.diags.as_list())
