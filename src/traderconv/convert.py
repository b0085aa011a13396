# -*- coding: utf-8 -*-
"""Converts legacy configurations into TraderPlus v2 files.

Each conversion call keeps its own ID counters and accumulators, so calls are
independent of each other.
"""

import dataclasses
import logging
from typing import Optional

from traderconv import assemble, config, diagnostics, materialize, output, tradequantity
from traderconv.datatypes import catalog, legacy, workspace
from traderconv.dialects import legacyjson, linedsl

_LOG = logging.getLogger(__name__)


@dataclasses.dataclass
class ConversionResult:
    """Result of a conversion."""

    # Mapping from file path to JSON text. Empty if the conversion is waiting
    # for more input.
    files: dict[str, str]
    diagnostics: list[diagnostics.Diagnostic]
    # None if the conversion is waiting for more input.
    config: Optional[workspace.TraderPlusConfig] = None


def build_from_dsl(
    dsl: legacy.DslConfig,
    cfg: config.ConversionConfig,
) -> workspace.TraderPlusConfig:
    """Converts a parsed line-oriented configuration."""
    builder = materialize.CatalogBuilder()
    traders = []
    for npc_id, trader in enumerate(dsl.traders):
        categories_id: list[str] = []
        for dsl_category in trader.categories:
            category_id = builder.category_id_for(dsl_category.name)
            if category_id not in categories_id:
                categories_id.append(category_id)
            for dsl_product in dsl_category.products:
                unlimited = dsl_product.quantity == legacy.DSL_UNLIMITED
                builder.add_product(
                    category_id,
                    catalog.Product(
                        product_id="",
                        class_name=dsl_product.class_name,
                        max_stock=-1 if unlimited else cfg.default_max_stock,
                        trade_quantity=tradequantity.DEFAULT,
                        buy_price=dsl_product.buy_price,
                        sell_price=dsl_product.sell_price,
                    ),
                )
        traders.append(assemble.dsl_trader(npc_id, trader, categories_id, dsl.currency_name, cfg))

    return workspace.TraderPlusConfig(
        currency_settings=assemble.dsl_currency_settings(dsl, cfg),
        general_settings=assemble.general_settings(cfg.dsl_server_id, traders, cfg),
        categories=builder.categories,
        products=builder.products,
    )


def convert_line_dsl(
    text: str,
    cfg: config.ConversionConfig,
    source: str = "<dsl>",
) -> ConversionResult:
    """Converts a line-oriented TraderX configuration.

    :param text: Configuration text.
    :param cfg: Conversion configuration.
    :param source: Name of the input, for diagnostics.
    :return: Converted files, and any problems found in the input.
    """
    parsed = linedsl.parse(text, source)
    result = build_from_dsl(parsed.config, cfg)
    _LOG.info(
        "%s: converted %d traders, %d categories, %d products",
        source,
        len(parsed.config.traders),
        len(result.categories),
        len(result.products),
    )
    return ConversionResult(
        files=output.render_files(result, cfg.output),
        diagnostics=parsed.diagnostics,
        config=result,
    )


def _legacy_category_products(
    category: legacy.V1Category,
    cfg: config.ConversionConfig,
    diags: diagnostics.Diagnostics,
) -> list[catalog.Product]:
    products = []
    for entry in category.products:
        product = legacyjson.parse_price_entry(entry, cfg.default_max_stock, diags)
        if product is not None:
            products.append(product)
    return products


def build_from_legacy(
    documents: legacyjson.LegacyInput,
    cfg: config.ConversionConfig,
) -> tuple[workspace.TraderPlusConfig, list[diagnostics.Diagnostic]]:
    """Converts a complete set of v1 documents.

    :param documents: The v1 documents.
    :param cfg: Conversion configuration.
    :return: Converted configuration, and problems found in the documents.
    """
    ids_diags = diagnostics.Diagnostics(documents.sources[legacyjson.DocumentKind.ID_MAPPING])
    price_diags = diagnostics.Diagnostics(documents.sources[legacyjson.DocumentKind.PRICE_CONFIG])
    builder = materialize.CatalogBuilder()
    # Keyed by v1 trader ID.
    categories_by_trader: dict[int, list[str]] = {}
    # Keyed by category name.
    parsed_products: dict[str, list[catalog.Product]] = {}

    for trader_ids in documents.ids.ids:
        categories_id = categories_by_trader.setdefault(trader_ids.id_, [])
        for name in trader_ids.categories:
            category = documents.price.category(name)
            if category is None:
                ids_diags.warn(
                    f"category {name!r} of trader {trader_ids.id_} is not in the price config"
                )
                continue
            category_id = builder.category_id_for(name)
            if category_id not in categories_id:
                categories_id.append(category_id)
            if name not in parsed_products:
                parsed_products[name] = _legacy_category_products(category, cfg, price_diags)
            for product in parsed_products[name]:
                builder.add_product(category_id, product)

    general = documents.general
    dominant = assemble.legacy_dominant_currency_type(general, cfg)
    traders = [
        assemble.legacy_trader(
            npc_id,
            trader,
            categories_id=list(categories_by_trader.get(trader.id_, [])),
            accepted=assemble.currencies_accepted(
                documents.ids.for_trader(trader.id_),
                dominant=dominant,
                unknown=cfg.unknown_currency_type,
            ),
        )
        for npc_id, trader in enumerate(general.traders)
    ]

    result = workspace.TraderPlusConfig(
        currency_settings=assemble.legacy_currency_settings(general, dominant, cfg),
        general_settings=assemble.general_settings(
            cfg.legacy_server_id,
            traders,
            cfg,
            license_names=general.licences,
            states=assemble.accepted_states(general.accepted_states),
            objects=assemble.trader_objects(general.trader_objects),
        ),
        categories=builder.categories,
        products=builder.products,
    )
    return result, ids_diags.as_list() + price_diags.as_list()


class LegacyJsonConverter:
    """Converts the three v1 JSON documents, submitted one at a time.

    Documents may be submitted in any order. Submitting a document of a kind
    that was already submitted replaces the earlier one. Output is produced
    on every submission once all three kinds are held.
    """

    _cfg: config.ConversionConfig
    _documents: legacyjson.LegacyDocuments

    def __init__(self, cfg: config.ConversionConfig) -> None:
        self._cfg = cfg
        self._documents = legacyjson.LegacyDocuments()

    def missing(self) -> list[legacyjson.DocumentKind]:
        """Returns the kinds of document still needed before output is produced."""
        return self._documents.missing()

    def submit(self, text: str, source: str = "<json>") -> ConversionResult:
        """Submits a document.

        :param text: JSON text of the document.
        :param source: Name of the document, for error messages and
        diagnostics.
        :raises errors.ParseFormatError: If the document is not JSON or is not
        a recognised kind of document. Documents held from earlier
        submissions are unchanged.
        :return: Converted files, or no files if a kind of document is still
        missing.
        """
        self._documents.submit(text, source)
        documents = self._documents.complete()
        if documents is None:
            _LOG.info(
                "waiting for %s",
                ", ".join(kind.value for kind in self._documents.missing()),
            )
            return ConversionResult(files={}, diagnostics=[])

        result, diags = build_from_legacy(documents, self._cfg)
        _LOG.info(
            "converted %d traders, %d categories, %d products",
            len(documents.general.traders),
            len(result.categories),
            len(result.products),
        )
        return ConversionResult(
            files=output.render_files(result, self._cfg.output),
            diagnostics=diags,
            config=result,
        )
