# -*- coding: utf-8 -*-
"""Category and product data types.

Each category and product is stored in its own file, named after its ID. The
ID is therefore not part of the JSON object itself.
"""

import dataclasses
from typing import Optional

from traderconv import jsonenc

UNNAMED_CATEGORY = "Unnamed Category"


@dataclasses.dataclass
class Category:
    """A group of products offered by traders."""

    category_id: str
    category_name: str
    icon: str = ""
    is_visible: bool = True
    licenses_required: list[str] = dataclasses.field(default_factory=list)
    product_ids: list[str] = dataclasses.field(default_factory=list)

    def to_json(self) -> jsonenc.Object:
        """Implements jsonenc.Encodable."""
        return {
            "isVisible": 1 if self.is_visible else 0,
            "icon": self.icon,
            "categoryName": self.category_name,
            "licensesRequired": self.licenses_required,
            "productIds": self.product_ids,
        }

    @classmethod
    def from_json(cls, o: jsonenc.Object, category_id: Optional[str] = None) -> "Category":
        """Creates a Category from its JSON object, backfilling missing fields.

        :param o: JSON object.
        :param category_id: ID to use if ``o`` does not contain one.
        :return: Category. Its ID is empty if neither ``o`` nor
        ``category_id`` provide one.
        """
        is_visible = o.get("isVisible")
        return cls(
            category_id=str(o.get("categoryId") or category_id or ""),
            category_name=str(o.get("categoryName") or UNNAMED_CATEGORY),
            icon=str(o.get("icon") or ""),
            is_visible=True if is_visible is None else bool(is_visible),
            licenses_required=jsonenc.str_list(o.get("licensesRequired")),
            product_ids=jsonenc.str_list(o.get("productIds")),
        )


@dataclasses.dataclass
class Product:
    """A tradeable item."""

    product_id: str
    class_name: str
    coefficient: float = 1.0
    # -1 means unlimited stock.
    max_stock: int = -1
    # See traderconv.tradequantity.
    trade_quantity: int = 1
    # -1 means the product cannot be bought.
    buy_price: int = 0
    # -1 means the product cannot be sold.
    sell_price: int = 0
    # See traderconv.stocksettings.
    stock_settings: int = 0
    attachments: list[str] = dataclasses.field(default_factory=list)
    variants: list[str] = dataclasses.field(default_factory=list)

    def to_json(self) -> jsonenc.Object:
        """Implements jsonenc.Encodable."""
        return {
            "className": self.class_name,
            "coefficient": self.coefficient,
            "maxStock": self.max_stock,
            "tradeQuantity": self.trade_quantity,
            "buyPrice": self.buy_price,
            "sellPrice": self.sell_price,
            "stockSettings": self.stock_settings,
            "attachments": self.attachments,
            "variants": self.variants,
        }

    @classmethod
    def from_json(cls, o: jsonenc.Object, product_id: Optional[str] = None) -> "Product":
        """Creates a Product from its JSON object, with defaults for missing fields.

        :param o: JSON object.
        :param product_id: ID to use if ``o`` does not contain one.
        :raises ValueError: If a numeric field holds a non-numeric value.
        :raises TypeError: If a numeric field holds a non-scalar value.
        :return: Product. Its ID is empty if neither ``o`` nor ``product_id``
        provide one.
        """
        return cls(
            product_id=str(o.get("productId") or product_id or ""),
            class_name=str(o["className"]),
            coefficient=float(jsonenc.get_or_default(o, "coefficient", 1.0)),
            max_stock=int(jsonenc.get_or_default(o, "maxStock", -1)),
            trade_quantity=int(jsonenc.get_or_default(o, "tradeQuantity", 1)),
            buy_price=int(jsonenc.get_or_default(o, "buyPrice", 0)),
            sell_price=int(jsonenc.get_or_default(o, "sellPrice", 0)),
            stock_settings=int(jsonenc.get_or_default(o, "stockSettings", 0)),
            attachments=jsonenc.str_list(o.get("attachments")),
            variants=jsonenc.str_list(o.get("variants")),
        )