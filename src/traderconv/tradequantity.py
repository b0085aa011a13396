# -*- coding: utf-8 -*-
"""Bit-packed product trade quantity.

TraderPlus v2 stores how much of a product a trader restocks on buying and
selling as a single integer:

- bits 0-2: sell mode (``SellMode``),
- bits 3-5: buy mode (``BuyMode``),
- bits 6-18: sell quantity,
- bits 19+: buy quantity.

The packed value is read by the game, so ``pack`` must match it bit for bit.
"""

import dataclasses
import enum
import math

_MODE_MASK = 0x7
_BUY_MODE_SHIFT = 3
_SELL_QTY_SHIFT = 6
_SELL_QTY_FIELD_MASK = 0x1FFF
_BUY_QTY_SHIFT = 19


class SellMode(enum.IntEnum):
    """What happens to the trader's stock when a player sells to it."""

    NO_MATTER = 0
    EMPTY = 1
    FULL = 2
    COEFFICIENT = 3
    STATIC = 4


class BuyMode(enum.IntEnum):
    """What happens to the trader's stock when a player buys from it."""

    EMPTY = 0
    FULL = 2
    COEFFICIENT = 3
    STATIC = 4


@dataclasses.dataclass(frozen=True)
class TradeQuantity:
    """Unpacked trade quantity."""

    buy_mode: BuyMode
    sell_mode: SellMode
    buy_quantity: int = 0
    sell_quantity: int = 0

    def pack(self) -> int:
        """Packs into the integer stored in product files."""
        return pack(self.buy_mode, self.sell_mode, self.buy_quantity, self.sell_quantity)


def pack(buy_mode: BuyMode, sell_mode: SellMode, buy_quantity: int, sell_quantity: int) -> int:
    """Packs the trade quantity fields.

    Note that the sell quantity is masked after shifting, so only sell
    quantities up to 127 survive intact.
    """
    return (
        int(sell_mode)
        | (int(buy_mode) << _BUY_MODE_SHIFT)
        | ((sell_quantity << _SELL_QTY_SHIFT) & _SELL_QTY_FIELD_MASK)
        | (buy_quantity << _BUY_QTY_SHIFT)
    )


def unpack(value: int) -> TradeQuantity:
    """Unpacks a packed trade quantity.

    :raises ValueError: If a mode field holds a value outside its enumeration.
    """
    return TradeQuantity(
        sell_mode=SellMode(value & _MODE_MASK),
        buy_mode=BuyMode((value >> _BUY_MODE_SHIFT) & _MODE_MASK),
        sell_quantity=(value >> _SELL_QTY_SHIFT) & 0x1FFF,
        buy_quantity=value >> _BUY_QTY_SHIFT,
    )


def from_legacy(q: float) -> TradeQuantity:
    """Maps a legacy scalar trade quantity to its mode and quantity fields.

    - ``0``: buying empties, selling empties.
    - ``-1`` or ``1``: buying and selling fill completely.
    - between 0 and 1: percentage of the maximum stock.
    - otherwise: a static amount, truncated to an integer.

    Negative values other than -1 and NaN have no legacy meaning. They are
    treated as -1 and 0 respectively.
    """
    if math.isnan(q) or q == 0:
        return TradeQuantity(buy_mode=BuyMode.EMPTY, sell_mode=SellMode.EMPTY)
    if q < 0 or q == 1:
        return TradeQuantity(buy_mode=BuyMode.FULL, sell_mode=SellMode.FULL)
    if q < 1:
        percent = math.floor(q * 100)
        return TradeQuantity(
            buy_mode=BuyMode.COEFFICIENT,
            sell_mode=SellMode.COEFFICIENT,
            buy_quantity=percent,
            sell_quantity=percent,
        )
    amount = math.floor(q)
    return TradeQuantity(
        buy_mode=BuyMode.STATIC,
        sell_mode=SellMode.STATIC,
        buy_quantity=amount,
        sell_quantity=amount,
    )


def encode_legacy(q: float) -> int:
    """Converts a legacy scalar trade quantity into the packed integer."""
    return from_legacy(q).pack()


# Trade quantity for products whose source has no trade quantity of its own.
DEFAULT = encode_legacy(0)
