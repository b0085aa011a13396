# -*- coding: utf-8 -*-
# pylint: disable=missing-class-docstring,missing-function-docstring,missing-module-docstring

import pytest

from traderconv import idgen


@pytest.mark.parametrize(
    "name,want",
    [
        ("Weapons", "weapons"),
        ("Assault Rifles", "assaultrifles"),
        ("  Spaced\tOut\n", "spacedout"),
        ("AK-74 (Mod)", "ak74mod"),
        ("Mosin_9130", "mosin_9130"),
        ("Über Items", "beritems"),
    ],
)
def test_slug(name: str, want: str) -> None:
    assert idgen.slug(name, "fallback") == want


@pytest.mark.parametrize("name", ["", None])
def test_slug_fallback(name) -> None:
    assert idgen.slug(name, "unknown") == "unknown"


@pytest.mark.parametrize(
    "name",
    ["Weapons", "Assault Rifles", "AK-74 (Mod)", "Mosin_9130", "a b-c_d"],
)
def test_slug_is_idempotent(name: str) -> None:
    once = idgen.slug(name, "fallback")
    assert idgen.slug(once, "fallback") == once


@pytest.mark.parametrize(
    "id_,want",
    [
        ("cat_weapons_001", 1),
        ("prod_ak74_042", 42),
        ("cat_weapons", None),
        ("prod_x_1234", None),
        ("prod_x_12", None),
        ("", None),
    ],
)
def test_counter_suffix(id_: str, want) -> None:
    assert idgen.counter_suffix(id_) == want


def test_next_id_increments_per_slug() -> None:
    counters: dict[str, int] = {}
    got = [
        idgen.next_id("cat", "weapons", counters),
        idgen.next_id("cat", "food", counters),
        idgen.next_id("cat", "weapons", counters),
        idgen.next_id("cat", "weapons", counters),
    ]
    assert got == ["cat_weapons_001", "cat_food_001", "cat_weapons_002", "cat_weapons_003"]
    assert counters == {"weapons": 3, "food": 1}


def test_next_id_strictly_increasing() -> None:
    gen = idgen.IdGenerator(idgen.PRODUCT_PREFIX)
    ids = [gen.next_id("ak74") for _ in range(20)]
    assert len(set(ids)) == len(ids)
    counters = [idgen.counter_suffix(id_) for id_ in ids]
    assert counters == list(range(1, 21))
    assert ids[0] == "prod_ak74_001"
    assert ids[-1] == "prod_ak74_020"


def test_observe_seeds_counter() -> None:
    gen = idgen.IdGenerator(idgen.CATEGORY_PREFIX)
    gen.observe("weapons", "cat_weapons_007")
    gen.observe("weapons", "cat_weapons_003")
    assert gen.next_id("weapons") == "cat_weapons_008"


def test_observe_without_suffix() -> None:
    gen = idgen.IdGenerator(idgen.CATEGORY_PREFIX)
    gen.observe("weapons", "weapons")
    assert gen.counters == {"weapons": 0}
    assert gen.next_id("weapons") == "cat_weapons_001"


def test_observe_own_ignores_other_slugs() -> None:
    gen = idgen.IdGenerator(idgen.CATEGORY_PREFIX)
    gen.observe_own("weapons", "cat_weaponsextra_005")
    assert gen.next_id("weapons") == "cat_weapons_001"
    gen.observe_own("weapons", "cat_weapons_004")
    assert gen.next_id("weapons") == "cat_weapons_005"
