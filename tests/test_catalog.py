from __future__ import annotations

from flip7tracker.engine.types import (
    CATALOG,
    DEFAULT_MULTIPLICITY,
    NUMBER_CARDS,
    SPECIAL_CARDS,
    catalog_index,
    default_counts,
    is_card_kind,
    total_default,
)


def test_catalog_order_and_size() -> None:
    assert len(CATALOG) == 22
    assert CATALOG[0] == "0"
    assert CATALOG[1:13] == NUMBER_CARDS
    assert CATALOG[13:] == SPECIAL_CARDS
    assert catalog_index("0") == 0
    assert catalog_index("second chance") == 21


def test_default_multiplicity_table() -> None:
    assert DEFAULT_MULTIPLICITY["0"] == 1
    for n in NUMBER_CARDS:
        assert DEFAULT_MULTIPLICITY[n] == int(n)
    for s in ("+2", "+4", "+6", "+8", "+10", "x2"):
        assert DEFAULT_MULTIPLICITY[s] == 1
    for s in ("freeze", "flip three", "second chance"):
        assert DEFAULT_MULTIPLICITY[s] == 3
    # 1 zero + 78 numbers + 6 modifiers + 9 actions
    assert total_default() == 94


def test_default_counts_is_a_fresh_copy() -> None:
    counts = default_counts()
    counts["7"] = 0
    assert DEFAULT_MULTIPLICITY["7"] == 7
    assert default_counts()["7"] == 7


def test_is_card_kind() -> None:
    assert is_card_kind("flip three")
    assert is_card_kind("12")
    assert not is_card_kind("13")
    assert not is_card_kind("x3")
    assert not is_card_kind(7)
    assert not is_card_kind(None)
