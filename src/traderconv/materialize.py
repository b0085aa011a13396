# -*- coding: utf-8 -*-
"""Builds uniquely identified categories and products.

Two ways of creating records are provided:

* ``merge_categories`` and ``merge_products`` merge already materialized
  records into an existing collection, minting IDs for records that lack one.
* ``CatalogBuilder`` accumulates records from a legacy dialect, where
  categories are identified by name and products by class name within their
  category.
"""

import dataclasses
import logging
from typing import Container, Iterable

from traderconv import idgen
from traderconv.datatypes import catalog

_LOG = logging.getLogger(__name__)

# Slug used for records whose name is empty.
UNKNOWN_SLUG = "unknown"


def _copy_category(category: catalog.Category, **changes) -> catalog.Category:
    return dataclasses.replace(
        category,
        licenses_required=list(category.licenses_required),
        product_ids=list(category.product_ids),
        **changes,
    )


def _copy_product(product: catalog.Product, **changes) -> catalog.Product:
    return dataclasses.replace(
        product,
        attachments=list(product.attachments),
        variants=list(product.variants),
        **changes,
    )


def _fresh_id(gen: idgen.IdGenerator, slug_: str, taken: Container[str]) -> str:
    # Renamed records keep IDs whose slug no longer matches their name, so the
    # counter alone does not guarantee an unused ID.
    while (id_ := gen.next_id(slug_)) in taken:
        _LOG.debug("skipping %s, which is already in use", id_)
    return id_


def _category_slug(category: catalog.Category) -> str:
    return idgen.slug(category.category_name, UNKNOWN_SLUG)


def _product_slug(product: catalog.Product) -> str:
    return idgen.slug(product.class_name, UNKNOWN_SLUG)


def merge_categories(
    existing: Iterable[catalog.Category],
    imported: Iterable[catalog.Category],
) -> list[catalog.Category]:
    """Merges imported categories into existing ones.

    Neither input is modified.

    :param existing: Categories already in the collection.
    :param imported: Categories to add. Those without an ID are given one.
    Those whose ID is already in the collection are dropped, the existing
    category wins.
    :return: Merged categories, existing ones first.
    """
    gen = idgen.IdGenerator(idgen.CATEGORY_PREFIX)
    merged = [_copy_category(c) for c in existing]
    known_ids = set()
    for category in merged:
        gen.observe_own(_category_slug(category), category.category_id)
        known_ids.add(category.category_id)

    for category in imported:
        slug_ = _category_slug(category)
        category_id = category.category_id or _fresh_id(gen, slug_, known_ids)
        if category_id in known_ids:
            _LOG.debug("dropping category %s, which already exists", category_id)
            continue
        merged.append(
            _copy_category(
                category,
                category_id=category_id,
                category_name=category.category_name or catalog.UNNAMED_CATEGORY,
            )
        )
        known_ids.add(category_id)
        gen.observe(slug_, category_id)
    return merged


def merge_products(
    existing: Iterable[catalog.Product],
    imported: Iterable[catalog.Product],
) -> list[catalog.Product]:
    """Merges imported products into existing ones.

    Neither input is modified.

    :param existing: Products already in the collection.
    :param imported: Products to add. Those without an ID are given one.
    Those whose ID is already in the collection replace the existing product's
    fields, keeping its position and ID.
    :return: Merged products, existing ones first.
    """
    gen = idgen.IdGenerator(idgen.PRODUCT_PREFIX)
    merged = [_copy_product(p) for p in existing]
    index_by_id: dict[str, int] = {}
    for i, product in enumerate(merged):
        gen.observe_own(_product_slug(product), product.product_id)
        index_by_id[product.product_id] = i

    for product in imported:
        slug_ = _product_slug(product)
        product_id = product.product_id or _fresh_id(gen, slug_, index_by_id)
        copy = _copy_product(product, product_id=product_id)
        if (i := index_by_id.get(product_id)) is not None:
            _LOG.debug("updating existing product %s", product_id)
            merged[i] = copy
            continue
        index_by_id[product_id] = len(merged)
        merged.append(copy)
        gen.observe(slug_, product_id)
    return merged


class CatalogBuilder:
    """Accumulates the categories and products of a single conversion.

    Categories are identified by name, so each distinct name becomes one
    category, however many traders refer to it. Products are identified by
    their class name within a category.
    """

    _category_ids: idgen.IdGenerator
    _product_ids: idgen.IdGenerator
    _categories: dict[str, catalog.Category]
    _category_id_by_name: dict[str, str]
    _products: dict[str, catalog.Product]
    _product_id_by_key: dict[tuple[str, str], str]

    def __init__(self) -> None:
        self._category_ids = idgen.IdGenerator(idgen.CATEGORY_PREFIX)
        self._product_ids = idgen.IdGenerator(idgen.PRODUCT_PREFIX)
        self._categories = {}
        self._category_id_by_name = {}
        self._products = {}
        self._product_id_by_key = {}

    def category_id_for(self, name: str) -> str:
        """Returns the ID of the category with the given name, creating it if needed."""
        if (category_id := self._category_id_by_name.get(name)) is not None:
            return category_id
        category_id = self._category_ids.next_id(idgen.slug(name, UNKNOWN_SLUG))
        self._category_id_by_name[name] = category_id
        self._categories[category_id] = catalog.Category(
            category_id=category_id,
            category_name=name or catalog.UNNAMED_CATEGORY,
        )
        return category_id

    def add_product(self, category_id: str, product: catalog.Product) -> str:
        """Adds a product to a category.

        :param category_id: ID returned by ``category_id_for``.
        :param product: Product to add. Its ID is ignored.
        :raises KeyError: If ``category_id`` is unknown.
        :return: ID of the product. If the category already has a product with
        the same class name, then that product is updated with the fields of
        ``product`` and its ID returned.
        """
        category = self._categories[category_id]
        key = (category_id, product.class_name)
        product_id = self._product_id_by_key.get(key)
        if product_id is None:
            product_id = self._product_ids.next_id(idgen.slug(product.class_name, UNKNOWN_SLUG))
            self._product_id_by_key[key] = product_id
        else:
            _LOG.debug("updating product %s in category %s", product_id, category_id)
        self._products[product_id] = _copy_product(product, product_id=product_id)
        if product_id not in category.product_ids:
            category.product_ids.append(product_id)
        return product_id

    @property
    def categories(self) -> list[catalog.Category]:
        """Categories, in order of creation."""
        return list(self._categories.values())

    @property
    def products(self) -> list[catalog.Product]:
        """Products, in order of creation."""
        return list(self._products.values())
