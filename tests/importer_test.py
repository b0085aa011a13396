# -*- coding: utf-8 -*-
# pylint: disable=missing-class-docstring,missing-function-docstring,missing-module-docstring

import json
from typing import Any, Optional

import hamcrest as hc
import pytest
import testfixtures  # type: ignore[import-untyped]

from traderconv import errors, importer
from traderconv.datatypes import catalog, currency, settings, workspace
from traderconv.importer import DataType

CURRENCY_SETTINGS = {
    "version": "2.0.0",
    "currencyTypes": [
        {"currencyName": "EUR", "currencies": [{"className": "Euro100", "value": 100}]},
    ],
}

GENERAL_SETTINGS = {
    "version": "2.5",
    "serverID": "SERVER",
    "licenses": [{"licenseId": "licence_000", "licenseName": "Guns", "description": ""}],
    "acceptedStates": {
        "acceptWorn": 1,
        "acceptDamaged": 0,
        "acceptBadlyDamaged": 1,
        "coefficientWorn": 0.8,
        "coefficientDamaged": 0.5,
        "coefficientBadlyDamaged": 0.2,
    },
    "traders": [
        {
            "npcId": 0,
            "className": "SurvivorM_Boris",
            "givenName": "Boris",
            "role": "Guns",
            "position": [1, 2, 3],
            "orientation": [0, 0, 0],
            "categoriesId": ["cat_guns_001"],
            "currenciesAccepted": ["EUR"],
            "loadouts": [{"className": "TShirt_Black", "quantity": -1, "slotName": "Body"}],
        },
        {"npcId": -2, "className": "ATM", "givenName": "ATM", "role": "ATM"},
    ],
    "traderObjects": [],
}


@pytest.mark.parametrize(
    "data,want",
    [
        ({"categoryName": "A", "productIds": []}, DataType.CATEGORY),
        ({"className": "AK74"}, DataType.PRODUCT),
        (CURRENCY_SETTINGS, DataType.CURRENCY),
        (GENERAL_SETTINGS, DataType.GENERAL),
        ([{"className": "AK74"}, {"className": "Apple"}], DataType.PRODUCT),
        ([1, {"categoryName": "A", "productIds": []}], DataType.CATEGORY),
        ({"categoryName": "A"}, None),
        ({"className": 5}, None),
        ({"foo": 1}, None),
        ([], None),
        ("text", None),
    ],
)
def test_detect_data_type(data: Any, want: Optional[DataType]) -> None:
    assert importer.detect_data_type(data) == want


@pytest.mark.parametrize(
    "name,want",
    [
        ("cat_weapons_001.json", DataType.CATEGORY),
        ("MyCategories.json", DataType.CATEGORY),
        ("prod_ak74_001.json", DataType.PRODUCT),
        ("Products.json", DataType.PRODUCT),
        ("TraderPlusCurrencySettings.json", DataType.CURRENCY),
        ("TraderPlusGeneralSettings.json", DataType.GENERAL),
        ("settings.json", DataType.GENERAL),
        ("cat_dir/readme.json", None),
        ("foo.json", None),
    ],
)
def test_guess_type_from_filename(name: str, want: Optional[DataType]) -> None:
    assert importer.guess_type_from_filename(name) == want


def _import(imp: importer.Importer, source: str, data: Any) -> Optional[DataType]:
    return imp.import_document(source, json.dumps(data))


def test_import_single_records_take_id_from_filename() -> None:
    imp = importer.Importer()
    assert (
        _import(
            imp,
            "Categories/cat_weapons_001.json",
            {"categoryName": "Weapons", "productIds": ["prod_ak74_001"], "isVisible": 0},
        )
        == DataType.CATEGORY
    )
    assert (
        _import(imp, "Products/prod_ak74_001.json", {"className": "AK74", "buyPrice": 5})
        == DataType.PRODUCT
    )

    testfixtures.compare(
        actual=imp.workspace,
        expected=workspace.TraderPlusConfig(
            categories=[
                catalog.Category(
                    category_id="cat_weapons_001",
                    category_name="Weapons",
                    is_visible=False,
                    product_ids=["prod_ak74_001"],
                ),
            ],
            products=[
                catalog.Product(product_id="prod_ak74_001", class_name="AK74", buy_price=5),
            ],
        ),
    )


def test_import_arrays_mint_ids() -> None:
    imp = importer.Importer()
    _import(imp, "prod_ak74_001.json", {"className": "AK74"})
    _import(
        imp,
        "prod_extra.json",
        [{"className": "AK74"}, {"className": "Apple", "maxStock": 5}, {"foo": 1}],
    )

    hc.assert_that(
        [(p.product_id, p.class_name, p.max_stock) for p in imp.workspace.products],
        hc.contains_exactly(
            ("prod_ak74_001", "AK74", -1),
            ("prod_ak74_002", "AK74", -1),
            ("prod_apple_001", "Apple", 5),
        ),
    )


def test_import_product_with_existing_id_updates_in_place() -> None:
    imp = importer.Importer()
    _import(imp, "prod_ak74_001.json", {"className": "AK74", "buyPrice": 5})
    _import(imp, "prod_m4a1_001.json", {"className": "M4A1"})
    _import(imp, "prod_ak74_001.json", {"className": "AK74", "buyPrice": 9})

    assert [(p.product_id, p.buy_price) for p in imp.workspace.products] == [
        ("prod_ak74_001", 9),
        ("prod_m4a1_001", 0),
    ]


def test_import_category_twice_is_not_duplicated() -> None:
    imp = importer.Importer()
    data = {"categoryName": "Weapons", "productIds": []}
    _import(imp, "cat_weapons_001.json", data)
    _import(imp, "cat_weapons_001.json", {**data, "icon": "changed"})

    testfixtures.compare(
        actual=imp.workspace.categories,
        expected=[catalog.Category(category_id="cat_weapons_001", category_name="Weapons")],
    )


def test_import_category_without_id() -> None:
    imp = importer.Importer()
    _import(imp, "weapons.json", {"categoryName": "Weapons", "productIds": []})
    _import(imp, "more weapons.json", {"categoryName": "Weapons", "productIds": []})
    assert [c.category_id for c in imp.workspace.categories] == [
        "cat_weapons_001",
        "cat_weapons_002",
    ]


def test_import_settings_replace() -> None:
    imp = importer.Importer()
    _import(imp, "a.json", {"version": "1.0", "currencyTypes": []})
    _import(imp, "b.json", CURRENCY_SETTINGS)
    _import(imp, "c.json", GENERAL_SETTINGS)

    testfixtures.compare(
        actual=imp.workspace.currency_settings,
        expected=currency.CurrencySettings(
            version="2.0.0",
            currency_types=[
                currency.CurrencyType(
                    currency_name="EUR",
                    currencies=[currency.Currency(class_name="Euro100", value=100)],
                ),
            ],
        ),
    )
    general = imp.workspace.general_settings
    assert general is not None
    assert general.server_id == "SERVER"
    testfixtures.compare(
        actual=general.accepted_states,
        expected=settings.AcceptedStates(
            worn=True,
            damaged=False,
            badly_damaged=True,
            coefficient_worn=0.8,
            coefficient_damaged=0.0,
            coefficient_badly_damaged=0.2,
        ),
    )
    assert [t.npc_id for t in general.traders] == [0, settings.ATM_NPC_ID]
    assert general.traders[0].loadouts[0].slot_name == "Body"
    assert not imp.found_diagnostics


def test_import_general_settings_diagnostics() -> None:
    imp = importer.Importer()
    data = {
        "version": "2.5",
        "traders": [
            {"npcId": 1, "givenName": "A", "loadouts": [{"className": "X", "slotName": "Tail"}]},
            {"npcId": 1, "givenName": "B", "loadouts": [{"className": "Y", "quantity": 0}]},
            {"npcId": -5, "givenName": "C"},
        ],
    }
    assert _import(imp, "general.json", data) == DataType.GENERAL

    assert imp.workspace.general_settings is not None
    messages = [d.message for d in imp.found_diagnostics]
    assert len(messages) == 4
    hc.assert_that(
        messages,
        hc.has_items(
            hc.contains_string("unknown slot 'Tail'"),
            hc.contains_string("npcId 1 is used by more than one trader"),
            hc.contains_string("quantity 0"),
            hc.contains_string("negative npcId -5"),
        ),
    )
    assert {d.source for d in imp.found_diagnostics} == {"general.json"}


@pytest.mark.parametrize(
    "source,text,type_hint",
    [
        ("broken.json", "{", None),
        ("products.json", '{"foo": 1}', None),
        ("a.json", '{"className": "AK74"}', DataType.CATEGORY),
        ("a.json", '{"className": "AK74", "buyPrice": "cheap"}', None),
        ("a.json", '{"className": "AK74", "buyPrice": [1]}', None),
        ("a.json", '{"className": "AK74", "maxStock": 1e400}', None),
        ("a.json", '{"version": "2.5", "traders": [{"givenName": "A"}]}', None),
        ("a.json", '{"version": "2.5"}', DataType.CURRENCY),
    ],
)
def test_import_invalid_documents(source: str, text: str, type_hint: Optional[DataType]) -> None:
    imp = importer.Importer()
    with pytest.raises(errors.ParseFormatError) as exc_info:
        imp.import_document(source, text, type_hint=type_hint)
    assert exc_info.value.source == source
    testfixtures.compare(actual=imp.workspace, expected=workspace.TraderPlusConfig())


def test_import_unrecognised_document_is_skipped() -> None:
    imp = importer.Importer()
    assert imp.import_document("notes.json", '{"foo": 1}') is None
    testfixtures.compare(actual=imp.workspace, expected=workspace.TraderPlusConfig())


def test_import_documents_stats() -> None:
    imp = importer.Importer()
    stats = imp.import_documents(
        [
            ("cat_a_001.json", json.dumps({"categoryName": "A", "productIds": []})),
            ("broken.json", "{"),
            ("notes.json", json.dumps({"foo": 1})),
            ("TraderPlusCurrencySettings.json", json.dumps(CURRENCY_SETTINGS)),
            ("prod_x_001.json", json.dumps({"className": "X"})),
            ("TraderPlusGeneralSettings.json", json.dumps(GENERAL_SETTINGS)),
        ]
    )

    testfixtures.compare(
        actual=stats,
        expected=importer.ImportStats(
            processed=6,
            successful=4,
            failed=1,
            skipped=1,
            categories=1,
            products=1,
            currencies=1,
            settings=1,
        ),
    )
    assert [c.category_id for c in imp.workspace.categories] == ["cat_a_001"]
    assert [p.product_id for p in imp.workspace.products] == ["prod_x_001"]


def test_import_documents_continues_past_out_of_range_numbers() -> None:
    imp = importer.Importer()
    stats = imp.import_documents(
        [
            ("prod_a_001.json", '{"className": "A", "maxStock": 1e400}'),
            ("prod_b_001.json", '{"className": "B", "maxStock": 5}'),
        ]
    )

    assert (stats.failed, stats.products) == (1, 1)
    assert [p.product_id for p in imp.workspace.products] == ["prod_b_001"]


def test_import_documents_type_hint() -> None:
    imp = importer.Importer()
    stats = imp.import_documents(
        [("a.json", json.dumps({"className": "X"}))],
        type_hint=DataType.PRODUCT,
    )
    assert stats.products == 1


def test_import_into_existing_workspace() -> None:
    target = workspace.TraderPlusConfig(
        categories=[catalog.Category(category_id="cat_a_004", category_name="A")],
    )
    imp = importer.Importer(target)
    _import(imp, "a.json", [{"categoryName": "A", "productIds": []}])

    assert imp.workspace is target
    assert [c.category_id for c in target.categories] == ["cat_a_004", "cat_a_005"]
