from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Literal, TypeGuard

CardKind = Literal[
    "0",
    "1",
    "2",
    "3",
    "4",
    "5",
    "6",
    "7",
    "8",
    "9",
    "10",
    "11",
    "12",
    "+2",
    "+4",
    "+6",
    "+8",
    "+10",
    "x2",
    "freeze",
    "flip three",
    "second chance",
]

NUMBER_CARDS: tuple[CardKind, ...] = (
    "1",
    "2",
    "3",
    "4",
    "5",
    "6",
    "7",
    "8",
    "9",
    "10",
    "11",
    "12",
)
SPECIAL_CARDS: tuple[CardKind, ...] = (
    "+2",
    "+4",
    "+6",
    "+8",
    "+10",
    "x2",
    "freeze",
    "flip three",
    "second chance",
)

# Display order and tie-break order for every sort.
CATALOG: tuple[CardKind, ...] = ("0",) + NUMBER_CARDS + SPECIAL_CARDS

DeckCounts = dict[CardKind, int]


def _build_default_multiplicity() -> Mapping[CardKind, int]:
    counts: DeckCounts = {"0": 1}
    for n in NUMBER_CARDS:
        counts[n] = int(n)  # face value N -> N copies
    for s in SPECIAL_CARDS:
        counts[s] = 3 if s in ("freeze", "flip three", "second chance") else 1
    return MappingProxyType(counts)


DEFAULT_MULTIPLICITY: Mapping[CardKind, int] = _build_default_multiplicity()

_INDEX: dict[str, int] = {c: i for i, c in enumerate(CATALOG)}


def is_card_kind(value: object) -> TypeGuard[CardKind]:
    return isinstance(value, str) and value in _INDEX


def catalog_index(card: CardKind) -> int:
    return _INDEX[card]


def default_counts() -> DeckCounts:
    """Fresh, mutable copy of the default multiplicity table."""
    return {c: DEFAULT_MULTIPLICITY[c] for c in CATALOG}


def total_default() -> int:
    return sum(DEFAULT_MULTIPLICITY.values())
