# -*- coding: utf-8 -*-
"""Assembles the currency and general settings of converted configurations."""

from typing import Iterable, Optional, Sequence

from traderconv import config, currencies
from traderconv.datatypes import currency, legacy, settings


def licenses(names: Iterable[str]) -> list[settings.License]:
    """Creates licenses with sequential IDs, such as ``licence_000``."""
    return [
        settings.License(
            license_id=f"licence_{i:03d}",
            license_name=name,
            description=f"License for {name}",
        )
        for i, name in enumerate(names)
    ]


def accepted_states(v1: legacy.V1AcceptedStates) -> settings.AcceptedStates:
    """Converts v1 accepted states.

    A state is accepted when its v1 flag is non-zero. Missing or zero
    coefficients take the default for the state.
    """
    return settings.AcceptedStates(
        worn=v1.accept_worn != 0,
        damaged=v1.accept_damaged != 0,
        badly_damaged=v1.accept_badly_damaged != 0,
        coefficient_worn=v1.coefficient_worn or settings.DEFAULT_COEFFICIENT_WORN,
        coefficient_damaged=v1.coefficient_damaged or settings.DEFAULT_COEFFICIENT_DAMAGED,
        coefficient_badly_damaged=(
            v1.coefficient_badly_damaged or settings.DEFAULT_COEFFICIENT_BADLY_DAMAGED
        ),
    )


def loadout(clothes: Iterable[str]) -> list[settings.LoadoutItem]:
    """Converts the clothes of a v1 trader.

    Items have unlimited quantity, and are left for their slot to be
    assigned.
    """
    return [settings.LoadoutItem(class_name=class_name) for class_name in clothes]


def trader_objects(objects: Iterable[legacy.V1TraderObject]) -> list[settings.TraderObject]:
    """Converts v1 trader objects, filling in missing fields."""
    return [
        settings.TraderObject(
            class_name=obj.class_name or "",
            position=settings.vector(obj.position),
            orientation=settings.vector(obj.orientation),
        )
        for obj in objects
    ]


def dsl_trader(
    npc_id: int,
    trader: legacy.DslTrader,
    categories_id: list[str],
    currency_name: str,
    cfg: config.ConversionConfig,
) -> settings.TraderNpc:
    """Creates a trader from a line-oriented config trader.

    :param npc_id: ID of the NPC, which is the trader's index in the config.
    :param trader: Trader.
    :param categories_id: IDs of the trader's categories.
    :param currency_name: Name of the config's currency.
    :param cfg: Conversion configuration.
    :return: Trader, at the origin.
    """
    return settings.TraderNpc(
        npc_id=npc_id,
        class_name=cfg.default_trader_class,
        given_name=trader.name,
        role=f"Trader {npc_id}",
        categories_id=categories_id,
        currencies_accepted=[currency_name],
    )


def currencies_accepted(
    trader_ids: Optional[legacy.V1TraderIds],
    dominant: str,
    unknown: str,
) -> list[str]:
    """Returns the currency types that a v1 trader accepts.

    :param trader_ids: IDs config entry of the trader, if it has one.
    :param dominant: Returned alone if the trader names no currencies.
    :param unknown: Type of currencies that cannot be recognised.
    :return: Currency types, in order of first appearance.
    """
    if trader_ids is None or not trader_ids.currencies_accepted:
        return [dominant]
    types = (currencies.currency_type_of(c, unknown) for c in trader_ids.currencies_accepted)
    return list(dict.fromkeys(types))


def legacy_trader(
    npc_id: int,
    trader: legacy.V1Trader,
    categories_id: list[str],
    accepted: list[str],
) -> settings.TraderNpc:
    """Creates a trader from a v1 trader."""
    return settings.TraderNpc(
        npc_id=npc_id,
        class_name=trader.name,
        given_name=trader.given_name,
        role=trader.role,
        position=settings.vector(trader.position),
        orientation=settings.vector(trader.orientation),
        categories_id=categories_id,
        currencies_accepted=accepted,
        loadouts=loadout(trader.clothes),
    )


def dsl_currency_settings(
    dsl: legacy.DslConfig,
    cfg: config.ConversionConfig,
) -> currency.CurrencySettings:
    """Creates currency settings with the single currency of a line-oriented config."""
    return currency.CurrencySettings(
        version=cfg.currency_settings_version,
        currency_types=[
            currency.CurrencyType(
                currency_name=dsl.currency_name,
                currencies=[
                    currency.Currency(class_name=c.class_name, value=c.value)
                    for c in dsl.currencies
                ],
            )
        ],
    )


def legacy_dominant_currency_type(
    general: legacy.V1GeneralConfig,
    cfg: config.ConversionConfig,
) -> str:
    """Returns the main currency type of a v1 general config."""
    return currencies.dominant_currency_type(
        [c.class_name for c in general.currencies],
        fallback=cfg.fallback_currency_type,
        empty=cfg.empty_currency_type,
    )


def legacy_currency_settings(
    general: legacy.V1GeneralConfig,
    dominant: str,
    cfg: config.ConversionConfig,
) -> currency.CurrencySettings:
    """Creates currency settings from the currencies of a v1 general config."""
    return currency.CurrencySettings(
        version=cfg.currency_settings_version,
        currency_types=currencies.group_by_type(
            currencies.expand_aliases(general.currencies),
            dominant=dominant,
            fallback=cfg.unknown_currency_type,
        ),
    )


def general_settings(
    server_id: str,
    traders: Sequence[settings.TraderNpc],
    cfg: config.ConversionConfig,
    license_names: Iterable[str] = (),
    states: Optional[settings.AcceptedStates] = None,
    objects: Iterable[settings.TraderObject] = (),
) -> settings.GeneralSettings:
    """Creates the general settings.

    :param server_id: serverID to write.
    :param traders: Traders, whose NPC IDs must be unique.
    :param cfg: Conversion configuration.
    :param license_names: Names of licenses.
    :param states: Accepted states, all accepted with default coefficients if
    None.
    :param objects: Trader objects.
    :raises ValueError: If two traders have the same NPC ID.
    :return: General settings.
    """
    seen: set[int] = set()
    for trader in traders:
        if trader.npc_id in seen:
            raise ValueError(f"duplicate npcId {trader.npc_id}")
        seen.add(trader.npc_id)
    return settings.GeneralSettings(
        version=cfg.general_settings_version,
        server_id=server_id,
        licenses=licenses(license_names),
        accepted_states=states if states is not None else settings.AcceptedStates(),
        traders=list(traders),
        trader_objects=list(objects),
    )
