# -*- coding: utf-8 -*-
# pylint: disable=missing-class-docstring,missing-function-docstring,missing-module-docstring

import json

import pytest
import testfixtures  # type: ignore[import-untyped]

from traderconv import diagnostics, errors, tradequantity
from traderconv.datatypes import catalog
from traderconv.dialects import legacyjson
from traderconv.dialects.legacyjson import DocumentKind

GENERAL = {"Version": "1", "Currencies": [], "Traders": []}
IDS = {"Version": "1", "IDs": []}
PRICE = {"Version": "1", "TraderCategories": []}


@pytest.mark.parametrize(
    "document,want",
    [
        (GENERAL, DocumentKind.GENERAL_CONFIG),
        (IDS, DocumentKind.ID_MAPPING),
        (PRICE, DocumentKind.PRICE_CONFIG),
        ({"Traders": []}, DocumentKind.UNKNOWN),
        ({"version": "2.5"}, DocumentKind.UNKNOWN),
        ([GENERAL], DocumentKind.UNKNOWN),
        ("text", DocumentKind.UNKNOWN),
    ],
)
def test_classify(document, want: DocumentKind) -> None:
    assert legacyjson.classify(document) == want


def test_documents_complete_in_any_order() -> None:
    docs = legacyjson.LegacyDocuments()
    assert docs.missing() == [
        DocumentKind.GENERAL_CONFIG,
        DocumentKind.ID_MAPPING,
        DocumentKind.PRICE_CONFIG,
    ]

    assert docs.submit(json.dumps(PRICE), "price.json") == DocumentKind.PRICE_CONFIG
    assert docs.complete() is None
    assert docs.submit(json.dumps(GENERAL), "general.json") == DocumentKind.GENERAL_CONFIG
    assert docs.complete() is None
    assert docs.missing() == [DocumentKind.ID_MAPPING]
    assert docs.submit(json.dumps(IDS), "ids.json") == DocumentKind.ID_MAPPING

    complete = docs.complete()
    assert complete is not None
    assert complete.sources == {
        DocumentKind.PRICE_CONFIG: "price.json",
        DocumentKind.GENERAL_CONFIG: "general.json",
        DocumentKind.ID_MAPPING: "ids.json",
    }
    assert not docs.missing()


def test_resubmission_replaces() -> None:
    docs = legacyjson.LegacyDocuments()
    docs.submit(json.dumps(GENERAL), "a.json")
    docs.submit(json.dumps(IDS), "ids.json")
    docs.submit(json.dumps(PRICE), "price.json")
    docs.submit(json.dumps({**GENERAL, "Version": "2", "Licences": ["Gun"]}), "b.json")

    complete = docs.complete()
    assert complete is not None
    assert complete.general.version == "2"
    assert complete.general.licences == ["Gun"]
    assert complete.sources[DocumentKind.GENERAL_CONFIG] == "b.json"


def test_unknown_format_is_fatal() -> None:
    docs = legacyjson.LegacyDocuments()
    docs.submit(json.dumps(IDS), "ids.json")
    with pytest.raises(errors.ParseFormatError, match="unknown config file format") as exc_info:
        docs.submit(json.dumps({"foo": 1}), "foo.json")
    assert exc_info.value.source == "foo.json"
    assert docs.missing() == [DocumentKind.GENERAL_CONFIG, DocumentKind.PRICE_CONFIG]


def test_out_of_range_number_is_fatal() -> None:
    docs = legacyjson.LegacyDocuments()
    with pytest.raises(errors.ParseFormatError, match="invalid general config") as exc_info:
        docs.submit('{"Version": "1", "Currencies": [], "Traders": [{"Id": 1e400}]}', "g.json")
    assert exc_info.value.source == "g.json"
    assert DocumentKind.GENERAL_CONFIG in docs.missing()


def test_invalid_json_is_fatal() -> None:
    docs = legacyjson.LegacyDocuments()
    with pytest.raises(errors.ParseFormatError) as exc_info:
        docs.submit('{"IDs": [', "ids.json")
    assert exc_info.value.line_number == 1


def test_general_config_fields() -> None:
    docs = legacyjson.LegacyDocuments()
    docs.submit(
        json.dumps(
            {
                "Version": "1.1",
                "Currencies": [{"ClassName": "MoneyRuble1,MoneyRuble1Alt", "Value": 1}],
                "Licences": ["Weapons"],
                "AcceptedStates": {"AcceptWorn": 0, "CoefficientDamaged": 0.4},
                "Traders": [
                    {
                        "Id": 3,
                        "Name": "SurvivorM_Mirek",
                        "GivenName": "Mirek",
                        "Role": "Weapons",
                        "Position": [1, 2, 3],
                        "Orientation": [0, 90, 0],
                        "Clothes": ["TShirt_Black"],
                    }
                ],
                "TraderObjects": [{"ClassName": "Land_Table", "Position": [4, 5, 6]}],
            }
        ),
        "general.json",
    )
    docs.submit(json.dumps(IDS), "ids.json")
    docs.submit(json.dumps(PRICE), "price.json")
    complete = docs.complete()
    assert complete is not None

    general = complete.general
    assert general.currencies[0].class_name == "MoneyRuble1,MoneyRuble1Alt"
    assert general.accepted_states.accept_worn == 0
    assert general.accepted_states.accept_damaged == 1
    assert general.accepted_states.coefficient_damaged == 0.4
    assert general.accepted_states.coefficient_worn is None
    trader = general.traders[0]
    assert (trader.id_, trader.name, trader.given_name) == (3, "SurvivorM_Mirek", "Mirek")
    assert trader.clothes == ["TShirt_Black"]
    assert general.trader_objects[0].class_name == "Land_Table"
    assert general.trader_objects[0].orientation is None


def _parse_entry(entry: str, default_max_stock: int = 100):
    diags = diagnostics.Diagnostics("price.json")
    product = legacyjson.parse_price_entry(entry, default_max_stock, diags)
    return product, diags.as_list()


def test_parse_price_entry_full() -> None:
    product, diags = _parse_entry("AK74,0.5,1000,500,20")
    testfixtures.compare(
        actual=product,
        expected=catalog.Product(
            product_id="",
            class_name="AK74",
            max_stock=20,
            trade_quantity=tradequantity.encode_legacy(0.5),
            buy_price=1000,
            sell_price=500,
        ),
    )
    assert not diags


def test_parse_price_entry_defaults() -> None:
    product, diags = _parse_entry("AK74,1", default_max_stock=7)
    assert product is not None
    assert product.buy_price == legacyjson.NOT_TRADED
    assert product.sell_price == legacyjson.NOT_TRADED
    assert product.max_stock == 7
    assert product.trade_quantity == tradequantity.encode_legacy(1)
    assert not diags


def test_parse_price_entry_empty_fields_default() -> None:
    product, diags = _parse_entry("AK74,,,300,")
    assert product is not None
    assert product.trade_quantity == tradequantity.DEFAULT
    assert product.buy_price == legacyjson.NOT_TRADED
    assert product.sell_price == 300
    assert product.max_stock == 100
    assert not diags


def test_parse_price_entry_bad_numbers() -> None:
    product, diags = _parse_entry("AK74,lots,cheap,300,many")
    assert product is not None
    assert product.trade_quantity == tradequantity.DEFAULT
    assert product.buy_price == legacyjson.NOT_TRADED
    assert product.max_stock == 100
    assert len(diags) == 3


@pytest.mark.parametrize("entry", ["AK74", ",1,2,3", ""])
def test_parse_price_entry_unusable(entry: str) -> None:
    product, diags = _parse_entry(entry)
    assert product is None
    assert len(diags) == 1
