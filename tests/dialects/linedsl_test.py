# -*- coding: utf-8 -*-
# pylint: disable=missing-class-docstring,missing-function-docstring,missing-module-docstring

import textwrap

import hamcrest as hc
import testfixtures  # type: ignore[import-untyped]

from traderconv.datatypes import legacy
from traderconv.dialects import linedsl


def test_parse_minimal() -> None:
    text = (
        "<CurrencyName> Rubles\n"
        "<Currency> Ruble100,100\n"
        "<Trader> Bob\n"
        "<Category> Weapons\n"
        "AK74,*,50,25\n"
    )
    result = linedsl.parse(text)

    testfixtures.compare(
        actual=result.config,
        expected=legacy.DslConfig(
            currency_name="Rubles",
            currencies=[legacy.DslCurrency(class_name="Ruble100", value=100)],
            traders=[
                legacy.DslTrader(
                    name="Bob",
                    categories=[
                        legacy.DslCategory(
                            name="Weapons",
                            products=[
                                legacy.DslProduct(
                                    class_name="AK74",
                                    quantity="*",
                                    buy_price=50,
                                    sell_price=25,
                                ),
                            ],
                        ),
                    ],
                ),
            ],
        ),
    )
    hc.assert_that(result.diagnostics, hc.empty())


def test_parse_full() -> None:
    text = textwrap.dedent(
        """
        // TraderX configuration
        <CurrencyName> Rubles
        <Currency> MoneyRuble1, 1
        <Currency> MoneyRuble100, 100    // big note

        <Trader> Bob
        <Category> Weapons
        AK74, *, 50, 25
        M4A1, 3, 60, 30, extra

        <Category> Food
        TacticalBaconCan, 10, 5, 2

        <Trader> Alice
        <Category> Weapons
        Mosin9130, *, 40, 20
        <FileEnd>
        Ignored, *, 1, 1
        """
    )
    result = linedsl.parse(text, "TraderConfig.txt")

    config = result.config
    assert config.currency_name == "Rubles"
    assert [(c.class_name, c.value) for c in config.currencies] == [
        ("MoneyRuble1", 1),
        ("MoneyRuble100", 100),
    ]
    assert [t.name for t in config.traders] == ["Bob", "Alice"]
    bob, alice = config.traders
    assert [c.name for c in bob.categories] == ["Weapons", "Food"]
    assert [p.class_name for p in bob.categories[0].products] == ["AK74", "M4A1"]
    assert bob.categories[0].products[1].quantity == "3"
    assert [p.class_name for p in bob.categories[1].products] == ["TacticalBaconCan"]
    assert [c.name for c in alice.categories] == ["Weapons"]
    assert [p.class_name for p in alice.categories[0].products] == ["Mosin9130"]
    hc.assert_that(result.diagnostics, hc.empty())


def test_open_file_terminates() -> None:
    text = "<Trader> Bob\n<Category> A\nX,1,1,1\n<OpenFile> other.txt\nY,1,1,1\n"
    result = linedsl.parse(text)
    assert [p.class_name for p in result.config.traders[0].categories[0].products] == ["X"]


def test_short_rows_are_skipped_with_diagnostic() -> None:
    text = "<Trader> Bob\n<Category> A\nX,1,1\nY,1,2,3\n"
    result = linedsl.parse(text, "cfg.txt")

    assert [p.class_name for p in result.config.traders[0].categories[0].products] == ["Y"]
    assert len(result.diagnostics) == 1
    diag = result.diagnostics[0]
    assert diag.source == "cfg.txt"
    assert diag.line_number == 3
    assert diag.text == "X,1,1"


def test_malformed_numbers_become_zero() -> None:
    text = "<CurrencyName> Rubles\n<Currency> Ruble,lots\n<Trader> Bob\n<Category> A\nX,1,cheap,2\n"
    result = linedsl.parse(text)

    assert result.config.currencies == [legacy.DslCurrency(class_name="Ruble", value=0)]
    product = result.config.traders[0].categories[0].products[0]
    assert product.buy_price == 0
    assert product.sell_price == 2
    hc.assert_that(
        [d.line_number for d in result.diagnostics],
        hc.contains_exactly(2, 5),
    )


def test_rows_outside_category_are_skipped() -> None:
    text = "X,1,1,1\n<Trader> Bob\nY,1,1,1\n<Category> A\nZ,1,1,1\n"
    result = linedsl.parse(text)

    assert [p.class_name for p in result.config.traders[0].categories[0].products] == ["Z"]
    hc.assert_that([d.line_number for d in result.diagnostics], hc.contains_exactly(1, 3))


def test_trader_closes_category() -> None:
    text = "<Trader> Bob\n<Category> A\nX,1,1,1\n<Trader> Alice\nY,1,1,1\n"
    result = linedsl.parse(text)

    bob, alice = result.config.traders
    assert [p.class_name for p in bob.categories[0].products] == ["X"]
    assert not alice.categories
    assert len(result.diagnostics) == 1


def test_category_outside_trader() -> None:
    result = linedsl.parse("<Category> A\nX,1,1,1\n")
    assert not result.config.traders
    assert len(result.diagnostics) == 2


def test_trader_closes_currency_section() -> None:
    text = "<CurrencyName> Rubles\n<Trader> Bob\n<Currency> Ruble,1\n"
    result = linedsl.parse(text)

    assert not result.config.currencies
    assert len(result.diagnostics) == 1


def test_empty_input() -> None:
    result = linedsl.parse("")
    testfixtures.compare(actual=result.config, expected=legacy.DslConfig())
    hc.assert_that(result.diagnostics, hc.empty())
