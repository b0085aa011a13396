# -*- coding: utf-8 -*-
# pylint: disable=missing-class-docstring,missing-function-docstring,missing-module-docstring

import pytest

from traderconv import stocksettings
from traderconv.stocksettings import RestartBehaviour


@pytest.mark.parametrize(
    "coefficient,behaviour,want",
    [
        (0, RestartBehaviour.NO_CHANGE, 0),
        (50, RestartBehaviour.RESET_TO_MAX, 178),
        (100, RestartBehaviour.RANDOM, 356),
        (150, RestartBehaviour.RANDOM, 356),
        (-3, RestartBehaviour.NO_CHANGE, 0),
        (33.6, RestartBehaviour.NO_CHANGE, 34),
    ],
)
def test_pack(coefficient: float, behaviour: RestartBehaviour, want: int) -> None:
    assert stocksettings.pack(coefficient, behaviour) == want


def test_unpack() -> None:
    assert stocksettings.unpack(178) == stocksettings.StockSettings(
        destock_coefficient=50,
        behaviour=RestartBehaviour.RESET_TO_MAX,
    )


def test_unpack_rejects_unknown_behaviour() -> None:
    with pytest.raises(ValueError):
        stocksettings.unpack(3 << 7)
