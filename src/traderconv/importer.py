# -*- coding: utf-8 -*-
"""Imports TraderPlus v2 JSON documents into a configuration.

Documents may be single records or arrays of records, and are recognised by
their content or, failing that, by their file name. Categories and products
are merged into those already imported. Currency and general settings
replace those already imported.
"""

import dataclasses
import enum
import logging
import pathlib
from typing import Any, Iterable, Optional

from traderconv import diagnostics, errors, jsonenc, materialize
from traderconv.datatypes import catalog, currency, settings, workspace

_LOG = logging.getLogger(__name__)


class DataType(enum.StrEnum):
    """Kinds of TraderPlus v2 document."""

    CATEGORY = "category"
    PRODUCT = "product"
    CURRENCY = "currency"
    GENERAL = "general"


def _is_category(data: Any) -> bool:
    return (
        isinstance(data, dict)
        and "categoryName" in data
        and isinstance(data.get("productIds"), list)
    )


def _is_product(data: Any) -> bool:
    return isinstance(data, dict) and isinstance(data.get("className"), str)


def _is_currency(data: Any) -> bool:
    return isinstance(data, dict) and isinstance(data.get("currencyTypes"), list)


def _is_general(data: Any) -> bool:
    return isinstance(data, dict) and "version" in data


def detect_data_type(data: Any) -> Optional[DataType]:
    """Recognises the kind of a decoded document from its content.

    :param data: Decoded JSON. Arrays are recognised by their first object.
    :return: Kind of document, or None if it is not recognised.
    """
    if isinstance(data, list):
        first = next((item for item in data if isinstance(item, dict)), None)
        if first is None:
            return None
        data = first
    if _is_category(data):
        return DataType.CATEGORY
    if _is_product(data):
        return DataType.PRODUCT
    if _is_currency(data):
        return DataType.CURRENCY
    if _is_general(data):
        return DataType.GENERAL
    return None


def guess_type_from_filename(name: str) -> Optional[DataType]:
    """Guesses the kind of a document from its file name.

    :param name: File name or path. Only the last component is considered.
    :return: Kind of document, or None if the name gives no clue.
    """
    lower = pathlib.PurePath(name).name.lower()
    if lower.startswith("cat_") or "category" in lower or "categories" in lower:
        return DataType.CATEGORY
    if lower.startswith("prod_") or "product" in lower:
        return DataType.PRODUCT
    if "currency" in lower:
        return DataType.CURRENCY
    if "general" in lower or "settings" in lower:
        return DataType.GENERAL
    return None


@dataclasses.dataclass
class ImportStats:
    """Counts of documents imported by ``Importer.import_documents``."""

    processed: int = 0
    successful: int = 0
    failed: int = 0
    skipped: int = 0
    categories: int = 0
    products: int = 0
    currencies: int = 0
    settings: int = 0

    def count(self, data_type: DataType) -> None:
        """Counts a successfully imported document."""
        self.successful += 1
        match data_type:
            case DataType.CATEGORY:
                self.categories += 1
            case DataType.PRODUCT:
                self.products += 1
            case DataType.CURRENCY:
                self.currencies += 1
            case DataType.GENERAL:
                self.settings += 1


def _records(data: Any, is_record) -> list[jsonenc.Object]:
    if isinstance(data, list):
        return [item for item in data if is_record(item)]
    if is_record(data):
        return [data]
    return []


def _id_from_filename(source: str, prefix: str) -> Optional[str]:
    stem = pathlib.PurePath(source).stem
    if stem.startswith(f"{prefix}_"):
        return stem
    return None


class Importer:
    """Imports documents into a configuration."""

    workspace: workspace.TraderPlusConfig
    _diagnostics: list[diagnostics.Diagnostic]

    def __init__(self, target: Optional[workspace.TraderPlusConfig] = None) -> None:
        self.workspace = target if target is not None else workspace.TraderPlusConfig()
        self._diagnostics = []

    @property
    def found_diagnostics(self) -> list[diagnostics.Diagnostic]:
        """Problems found in the imported documents."""
        return list(self._diagnostics)

    def import_document(
        self,
        source: str,
        text: str,
        type_hint: Optional[DataType] = None,
    ) -> Optional[DataType]:
        """Imports a single document.

        :param source: Name of the document. Its file name is used to
        recognise the document if its content does not, and as the ID of a
        single category or product that lacks one.
        :param text: JSON text of the document.
        :param type_hint: Kind of the document, if known. Skips recognition.
        :raises errors.ParseFormatError: If the document is not JSON, or does
        not contain valid records of its kind. The configuration is unchanged.
        :return: Kind of the document, or None if it was not recognised and
        so was skipped.
        """
        data = jsonenc.DEFAULT_CODEC.loads(text, source)
        data_type = type_hint or detect_data_type(data) or guess_type_from_filename(source)
        if data_type is None:
            _LOG.warning("%s: not a TraderPlus document, skipping", source)
            return None

        diags = diagnostics.Diagnostics(source)
        try:
            match data_type:
                case DataType.CATEGORY:
                    self._import_categories(source, data)
                case DataType.PRODUCT:
                    self._import_products(source, data)
                case DataType.CURRENCY:
                    self._import_currency_settings(source, data)
                case DataType.GENERAL:
                    self._import_general_settings(source, data, diags)
        except (KeyError, OverflowError, TypeError, ValueError) as exc:
            raise errors.ParseFormatError(
                source, f"invalid {data_type} document: {exc!r}"
            ) from exc
        self._diagnostics.extend(diags)
        _LOG.info("%s: imported %s", source, data_type)
        return data_type

    def import_documents(
        self,
        documents: Iterable[tuple[str, str]],
        type_hint: Optional[DataType] = None,
    ) -> ImportStats:
        """Imports documents, carrying on past those that fail.

        :param documents: Pairs of document name and JSON text.
        :param type_hint: Kind of all the documents, if known.
        :return: Counts of the documents by outcome and kind.
        """
        stats = ImportStats()
        for source, text in documents:
            stats.processed += 1
            try:
                data_type = self.import_document(source, text, type_hint)
            except errors.ParseFormatError as exc:
                _LOG.error("%s", exc)
                stats.failed += 1
                continue
            if data_type is None:
                stats.skipped += 1
            else:
                stats.count(data_type)
        return stats

    def _import_categories(self, source: str, data: Any) -> None:
        records = _records(data, _is_category)
        if not records:
            raise errors.ParseFormatError(source, "no valid category data found")
        file_id = None
        if not isinstance(data, list):
            file_id = _id_from_filename(source, "cat")
        categories = [catalog.Category.from_json(o, category_id=file_id) for o in records]
        self.workspace.categories = materialize.merge_categories(
            self.workspace.categories, categories
        )

    def _import_products(self, source: str, data: Any) -> None:
        records = _records(data, _is_product)
        if not records:
            raise errors.ParseFormatError(source, "no valid product data found")
        file_id = None
        if not isinstance(data, list):
            file_id = _id_from_filename(source, "prod")
        products = [catalog.Product.from_json(o, product_id=file_id) for o in records]
        self.workspace.products = materialize.merge_products(self.workspace.products, products)

    def _import_currency_settings(self, source: str, data: Any) -> None:
        if not _is_currency(data):
            raise errors.ParseFormatError(source, "no valid currency settings found")
        self.workspace.currency_settings = currency.CurrencySettings.from_json(data)

    def _import_general_settings(
        self,
        source: str,
        data: Any,
        diags: diagnostics.Diagnostics,
    ) -> None:
        if not _is_general(data):
            raise errors.ParseFormatError(source, "no valid general settings found")
        general = settings.GeneralSettings.from_json(data)
        _check_traders(general.traders, diags)
        self.workspace.general_settings = general


def _check_traders(traders: list[settings.TraderNpc], diags: diagnostics.Diagnostics) -> None:
    seen: set[int] = set()
    for trader in traders:
        if trader.npc_id in seen:
            diags.warn(f"npcId {trader.npc_id} is used by more than one trader")
        seen.add(trader.npc_id)
        if trader.npc_id < 0 and trader.npc_id != settings.ATM_NPC_ID:
            diags.warn(f"trader {trader.given_name!r} has negative npcId {trader.npc_id}")
        for item in trader.loadouts:
            for problem in item.problems():
                diags.warn(f"trader {trader.npc_id} loadout item {item.class_name!r}: {problem}")
