# -*- coding: utf-8 -*-
"""Bit-packed product stock settings.

Bits 0-6 hold the destock coefficient as a percentage, bits 7-8 hold the
behaviour at server restart.
"""

import dataclasses
import enum

_DESTOCK_MASK = 0x7F
_BEHAVIOUR_SHIFT = 7
_BEHAVIOUR_MASK = 0x3
_MAX_DESTOCK = 100


class RestartBehaviour(enum.IntEnum):
    """What happens to a product's stock when the server restarts."""

    NO_CHANGE = 0
    RESET_TO_MAX = 1
    RANDOM = 2


@dataclasses.dataclass(frozen=True)
class StockSettings:
    """Unpacked stock settings."""

    destock_coefficient: int
    behaviour: RestartBehaviour


def pack(destock_coefficient: float, behaviour: RestartBehaviour) -> int:
    """Packs stock settings.

    :param destock_coefficient: Percentage, clamped to [0, 100] and rounded.
    :param behaviour: Behaviour at restart.
    :return: Packed stock settings.
    """
    destock = round(min(max(destock_coefficient, 0), _MAX_DESTOCK))
    return (int(behaviour) << _BEHAVIOUR_SHIFT) | (destock & _DESTOCK_MASK)


def unpack(value: int) -> StockSettings:
    """Unpacks stock settings.

    :raises ValueError: If the behaviour bits hold an unknown value.
    """
    return StockSettings(
        destock_coefficient=value & _DESTOCK_MASK,
        behaviour=RestartBehaviour((value >> _BEHAVIOUR_SHIFT) & _BEHAVIOUR_MASK),
    )
