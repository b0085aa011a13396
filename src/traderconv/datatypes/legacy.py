# -*- coding: utf-8 -*-
"""Intermediate data types read from the legacy dialects.

Two dialects are represented:

* The line-oriented TraderX configuration (``Dsl*`` types).
* The three JSON documents of TraderPlus v1 (``V1*`` types).
"""

import dataclasses
from typing import Any, Optional

from traderconv import jsonenc

# Line-DSL quantity meaning "unlimited stock".
DSL_UNLIMITED = "*"


@dataclasses.dataclass
class DslCurrency:
    """A denomination of the line-DSL's single currency."""

    class_name: str
    value: int


@dataclasses.dataclass
class DslProduct:
    """A product row within a line-DSL category."""

    class_name: str
    # Kept as written: either a number or DSL_UNLIMITED.
    quantity: str
    buy_price: int
    sell_price: int


@dataclasses.dataclass
class DslCategory:
    """A category within a line-DSL trader."""

    name: str
    products: list[DslProduct] = dataclasses.field(default_factory=list)


@dataclasses.dataclass
class DslTrader:
    """A trader section of the line-DSL."""

    name: str
    categories: list[DslCategory] = dataclasses.field(default_factory=list)


@dataclasses.dataclass
class DslConfig:
    """Everything read from a line-DSL file."""

    currency_name: str = ""
    currencies: list[DslCurrency] = dataclasses.field(default_factory=list)
    traders: list[DslTrader] = dataclasses.field(default_factory=list)


@dataclasses.dataclass
class V1Currency:
    """Currency entry of the v1 general config.

    ``class_name`` may hold several comma separated class names, which share
    the value.
    """

    class_name: str
    value: int

    @classmethod
    def from_json(cls, o: jsonenc.Object) -> "V1Currency":
        """Creates a V1Currency from its JSON object."""
        return cls(
            class_name=str(o.get("ClassName") or ""),
            value=int(jsonenc.get_or_default(o, "Value", 0)),
        )


@dataclasses.dataclass
class V1Trader:
    """Trader entry of the v1 general config."""

    id_: int
    name: str
    given_name: str
    role: str
    position: Optional[list[float]]
    orientation: Optional[list[float]]
    clothes: list[str] = dataclasses.field(default_factory=list)

    @classmethod
    def from_json(cls, o: jsonenc.Object) -> "V1Trader":
        """Creates a V1Trader from its JSON object."""
        return cls(
            id_=int(jsonenc.get_or_default(o, "Id", -1)),
            name=str(o.get("Name") or ""),
            given_name=str(o.get("GivenName") or ""),
            role=str(o.get("Role") or ""),
            position=_opt_list(o.get("Position")),
            orientation=_opt_list(o.get("Orientation")),
            clothes=jsonenc.str_list(o.get("Clothes")),
        )


@dataclasses.dataclass
class V1TraderObject:
    """Static object entry of the v1 general config."""

    class_name: Optional[str] = None
    position: Optional[list[float]] = None
    orientation: Optional[list[float]] = None

    @classmethod
    def from_json(cls, o: jsonenc.Object) -> "V1TraderObject":
        """Creates a V1TraderObject from its JSON object."""
        class_name = o.get("ClassName")
        return cls(
            class_name=class_name if isinstance(class_name, str) else None,
            position=_opt_list(o.get("Position")),
            orientation=_opt_list(o.get("Orientation")),
        )


@dataclasses.dataclass
class V1AcceptedStates:
    """Accepted item states of the v1 general config. Flags are 0 or 1."""

    accept_worn: int = 1
    accept_damaged: int = 1
    accept_badly_damaged: int = 1
    coefficient_worn: Optional[float] = None
    coefficient_damaged: Optional[float] = None
    coefficient_badly_damaged: Optional[float] = None

    @classmethod
    def from_json(cls, o: jsonenc.Object) -> "V1AcceptedStates":
        """Creates V1AcceptedStates from its JSON object."""
        return cls(
            accept_worn=int(jsonenc.get_or_default(o, "AcceptWorn", 1)),
            accept_damaged=int(jsonenc.get_or_default(o, "AcceptDamaged", 1)),
            accept_badly_damaged=int(jsonenc.get_or_default(o, "AcceptBadlyDamaged", 1)),
            coefficient_worn=_opt_float(o.get("CoefficientWorn")),
            coefficient_damaged=_opt_float(o.get("CoefficientDamaged")),
            coefficient_badly_damaged=_opt_float(o.get("CoefficientBadlyDamaged")),
        )


@dataclasses.dataclass
class V1GeneralConfig:
    """The v1 general config: currencies, licences and traders."""

    version: str
    currencies: list[V1Currency] = dataclasses.field(default_factory=list)
    traders: list[V1Trader] = dataclasses.field(default_factory=list)
    trader_objects: list[V1TraderObject] = dataclasses.field(default_factory=list)
    licences: list[str] = dataclasses.field(default_factory=list)
    accepted_states: V1AcceptedStates = dataclasses.field(default_factory=V1AcceptedStates)

    @classmethod
    def from_json(cls, o: jsonenc.Object) -> "V1GeneralConfig":
        """Creates a V1GeneralConfig from its JSON object."""
        accepted_states = o.get("AcceptedStates")
        return cls(
            version=str(o.get("Version") or ""),
            currencies=[V1Currency.from_json(c) for c in jsonenc.object_list(o.get("Currencies"))],
            traders=[V1Trader.from_json(t) for t in jsonenc.object_list(o.get("Traders"))],
            trader_objects=[
                V1TraderObject.from_json(t) for t in jsonenc.object_list(o.get("TraderObjects"))
            ],
            licences=jsonenc.str_list(o.get("Licences")),
            accepted_states=(
                V1AcceptedStates.from_json(accepted_states)
                if isinstance(accepted_states, dict)
                else V1AcceptedStates()
            ),
        )


@dataclasses.dataclass
class V1TraderIds:
    """Entry of the v1 IDs config: what the trader with ``id_`` deals in."""

    id_: int
    categories: list[str] = dataclasses.field(default_factory=list)
    licences_required: list[str] = dataclasses.field(default_factory=list)
    currencies_accepted: list[str] = dataclasses.field(default_factory=list)

    @classmethod
    def from_json(cls, o: jsonenc.Object) -> "V1TraderIds":
        """Creates V1TraderIds from its JSON object."""
        return cls(
            id_=int(jsonenc.get_or_default(o, "Id", -1)),
            categories=jsonenc.str_list(o.get("Categories")),
            licences_required=jsonenc.str_list(o.get("LicencesRequired")),
            currencies_accepted=jsonenc.str_list(o.get("CurrenciesAccepted")),
        )


@dataclasses.dataclass
class V1IdsConfig:
    """The v1 IDs config."""

    version: str
    ids: list[V1TraderIds] = dataclasses.field(default_factory=list)

    def for_trader(self, trader_id: int) -> Optional[V1TraderIds]:
        """Returns the first entry for the given trader ID, if any."""
        for entry in self.ids:
            if entry.id_ == trader_id:
                return entry
        return None

    @classmethod
    def from_json(cls, o: jsonenc.Object) -> "V1IdsConfig":
        """Creates a V1IdsConfig from its JSON object."""
        return cls(
            version=str(o.get("Version") or ""),
            ids=[V1TraderIds.from_json(e) for e in jsonenc.object_list(o.get("IDs"))],
        )


@dataclasses.dataclass
class V1Category:
    """Category of the v1 price config.

    Each product is a comma separated string:
    ``className,tradeQuantity,buyPrice,sellPrice,maxStock``.
    """

    category_name: str
    products: list[str] = dataclasses.field(default_factory=list)

    @classmethod
    def from_json(cls, o: jsonenc.Object) -> "V1Category":
        """Creates a V1Category from its JSON object."""
        return cls(
            category_name=str(o.get("CategoryName") or ""),
            products=jsonenc.str_list(o.get("Products")),
        )


@dataclasses.dataclass
class V1PriceConfig:
    """The v1 price config."""

    version: str
    trader_categories: list[V1Category] = dataclasses.field(default_factory=list)

    def category(self, name: str) -> Optional[V1Category]:
        """Returns the first category with the given name, if any."""
        for category in self.trader_categories:
            if category.category_name == name:
                return category
        return None

    @classmethod
    def from_json(cls, o: jsonenc.Object) -> "V1PriceConfig":
        """Creates a V1PriceConfig from its JSON object."""
        return cls(
            version=str(o.get("Version") or ""),
            trader_categories=[
                V1Category.from_json(c) for c in jsonenc.object_list(o.get("TraderCategories"))
            ],
        )


def _opt_list(v: Any) -> Optional[list[float]]:
    if isinstance(v, list):
        return list(v)
    return None


def _opt_float(v: Any) -> Optional[float]:
    if isinstance(v, (int, float)) and not isinstance(v, bool):
        return float(v)
    return None
