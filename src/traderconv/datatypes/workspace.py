# -*- coding: utf-8 -*-
"""A complete TraderPlus v2 configuration."""

import dataclasses
from typing import Optional

from traderconv.datatypes import catalog, currency, settings


@dataclasses.dataclass
class TraderPlusConfig:
    """Everything written to the TraderPlus configuration directory.

    Conversions always produce both settings documents. A configuration built
    up by importing documents lacks those that have not been imported.
    """

    currency_settings: Optional[currency.CurrencySettings] = None
    general_settings: Optional[settings.GeneralSettings] = None
    categories: list[catalog.Category] = dataclasses.field(default_factory=list)
    products: list[catalog.Product] = dataclasses.field(default_factory=list)
