# -*- coding: utf-8 -*-
"""Currency data types."""

import dataclasses

from traderconv import jsonenc


@dataclasses.dataclass
class Currency:
    """A single denomination, such as a 100 Euro note."""

    class_name: str
    value: int

    def to_json(self) -> jsonenc.Object:
        """Implements jsonenc.Encodable."""
        return {"className": self.class_name, "value": self.value}

    @classmethod
    def from_json(cls, o: jsonenc.Object) -> "Currency":
        """Creates a Currency from its JSON object."""
        return cls(class_name=str(o.get("className", "")), value=int(o.get("value", 0)))


@dataclasses.dataclass
class CurrencyType:
    """A named currency, made up of denominations."""

    currency_name: str
    currencies: list[Currency] = dataclasses.field(default_factory=list)

    def to_json(self) -> jsonenc.Object:
        """Implements jsonenc.Encodable."""
        return {"currencyName": self.currency_name, "currencies": self.currencies}

    @classmethod
    def from_json(cls, o: jsonenc.Object) -> "CurrencyType":
        """Creates a CurrencyType from its JSON object."""
        return cls(
            currency_name=str(o.get("currencyName", "")),
            currencies=[Currency.from_json(c) for c in jsonenc.object_list(o.get("currencies"))],
        )


@dataclasses.dataclass
class CurrencySettings:
    """Contents of the currency settings file."""

    version: str
    currency_types: list[CurrencyType] = dataclasses.field(default_factory=list)

    def to_json(self) -> jsonenc.Object:
        """Implements jsonenc.Encodable."""
        return {"version": self.version, "currencyTypes": self.currency_types}

    @classmethod
    def from_json(cls, o: jsonenc.Object) -> "CurrencySettings":
        """Creates CurrencySettings from its JSON object."""
        return cls(
            version=str(o.get("version", "")),
            currency_types=[
                CurrencyType.from_json(ct) for ct in jsonenc.object_list(o.get("currencyTypes"))
            ],
        )
