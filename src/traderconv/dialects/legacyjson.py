# -*- coding: utf-8 -*-
"""Reader for the three JSON documents of TraderPlus v1.

A v1 configuration is split across:

* the general config, with currencies, licences and traders,
* the IDs config, with the categories and currencies of each trader,
* the price config, with the products of each category.

Documents are recognised by their shape, so they can be submitted one at a
time in any order. ``LegacyDocuments`` keeps the latest document of each kind
until all three are present.
"""

import dataclasses
import enum
import logging
from typing import Any, Optional

from traderconv import diagnostics, errors, jsonenc, parseutil, tradequantity
from traderconv.datatypes import catalog, legacy

_LOG = logging.getLogger(__name__)

# Fields of a price config product entry, in order.
_PRICE_CLASS_NAME = 0
_PRICE_TRADE_QUANTITY = 1
_PRICE_BUY = 2
_PRICE_SELL = 3
_PRICE_MAX_STOCK = 4
_MIN_PRICE_FIELDS = 2

# Price of products that cannot be bought or sold.
NOT_TRADED = -1


class DocumentKind(enum.Enum):
    """The kinds of v1 document."""

    GENERAL_CONFIG = "general config"
    ID_MAPPING = "IDs config"
    PRICE_CONFIG = "price config"
    UNKNOWN = "unknown"


def classify(document: Any) -> DocumentKind:
    """Recognises the kind of a decoded v1 document from the fields it has."""
    if not isinstance(document, dict):
        return DocumentKind.UNKNOWN
    if "Traders" in document and "Currencies" in document:
        return DocumentKind.GENERAL_CONFIG
    if "IDs" in document:
        return DocumentKind.ID_MAPPING
    if "TraderCategories" in document:
        return DocumentKind.PRICE_CONFIG
    return DocumentKind.UNKNOWN


@dataclasses.dataclass
class LegacyInput:
    """A complete set of v1 documents."""

    general: legacy.V1GeneralConfig
    ids: legacy.V1IdsConfig
    price: legacy.V1PriceConfig
    # Names of the documents that each part came from.
    sources: dict[DocumentKind, str]


class LegacyDocuments:
    """Holds the most recently submitted document of each kind."""

    _general: Optional[legacy.V1GeneralConfig]
    _ids: Optional[legacy.V1IdsConfig]
    _price: Optional[legacy.V1PriceConfig]
    _sources: dict[DocumentKind, str]

    def __init__(self) -> None:
        self._general = None
        self._ids = None
        self._price = None
        self._sources = {}

    def submit(self, text: str, source: str) -> DocumentKind:
        """Parses a document, replacing any earlier document of the same kind.

        :param text: JSON text of the document.
        :param source: Name of the document, for error messages.
        :raises errors.ParseFormatError: If ``text`` is not JSON, or is not a
        recognised kind of document. Held documents are unchanged.
        :return: Kind of the document.
        """
        document = jsonenc.DEFAULT_CODEC.loads(text, source)
        kind = classify(document)
        try:
            match kind:
                case DocumentKind.GENERAL_CONFIG:
                    self._general = legacy.V1GeneralConfig.from_json(document)
                case DocumentKind.ID_MAPPING:
                    self._ids = legacy.V1IdsConfig.from_json(document)
                case DocumentKind.PRICE_CONFIG:
                    self._price = legacy.V1PriceConfig.from_json(document)
                case _:
                    raise errors.ParseFormatError(source, "unknown config file format")
        except (OverflowError, TypeError, ValueError) as exc:
            raise errors.ParseFormatError(source, f"invalid {kind.value}: {exc}") from exc
        _LOG.info("%s: read %s", source, kind.value)
        self._sources[kind] = source
        return kind

    def missing(self) -> list[DocumentKind]:
        """Returns the kinds of document still needed."""
        held = [
            (DocumentKind.GENERAL_CONFIG, self._general),
            (DocumentKind.ID_MAPPING, self._ids),
            (DocumentKind.PRICE_CONFIG, self._price),
        ]
        return [kind for kind, document in held if document is None]

    def complete(self) -> Optional[LegacyInput]:
        """Returns all three documents, or None if any is still missing."""
        if self._general is None or self._ids is None or self._price is None:
            return None
        return LegacyInput(
            general=self._general,
            ids=self._ids,
            price=self._price,
            sources=dict(self._sources),
        )


def _parse_price(
    fields: list[str],
    index: int,
    default: int,
    what: str,
    diags: diagnostics.Diagnostics,
    entry: str,
) -> int:
    if index >= len(fields) or not fields[index]:
        return default
    value = parseutil.parse_leading_int(fields[index])
    if value is None:
        diags.warn(f"{what} {fields[index]!r} is not a number, using {default}", text=entry)
        return default
    return value


def parse_price_entry(
    entry: str,
    default_max_stock: int,
    diags: diagnostics.Diagnostics,
) -> Optional[catalog.Product]:
    """Parses a product entry of a price config category.

    Entries have the form ``className,tradeQuantity,buyPrice,sellPrice,maxStock``.
    Only the first two fields are required.

    :param entry: Product entry.
    :param default_max_stock: maxStock if the entry does not have one.
    :param diags: Receives problems with the entry.
    :return: Product without an ID, or None if the entry is unusable.
    """
    fields = parseutil.split_fields(entry)
    if len(fields) < _MIN_PRICE_FIELDS or not fields[_PRICE_CLASS_NAME]:
        diags.warn("product entry needs at least a class name and trade quantity", text=entry)
        return None

    quantity_field = fields[_PRICE_TRADE_QUANTITY]
    quantity = parseutil.parse_leading_float(quantity_field)
    if quantity is None:
        if quantity_field:
            diags.warn(f"trade quantity {quantity_field!r} is not a number", text=entry)
        trade_quantity = tradequantity.DEFAULT
    else:
        trade_quantity = tradequantity.encode_legacy(quantity)

    return catalog.Product(
        product_id="",
        class_name=fields[_PRICE_CLASS_NAME],
        max_stock=_parse_price(
            fields, _PRICE_MAX_STOCK, default_max_stock, "max stock", diags, entry
        ),
        trade_quantity=trade_quantity,
        buy_price=_parse_price(fields, _PRICE_BUY, NOT_TRADED, "buy price", diags, entry),
        sell_price=_parse_price(fields, _PRICE_SELL, NOT_TRADED, "sell price", diags, entry),
    )
