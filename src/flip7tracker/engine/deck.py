from __future__ import annotations

from collections.abc import Mapping

from .types import CATALOG, CardKind, DeckCounts, default_counts


class DeckStore:
    """Remaining (undrawn) count per card kind.

    Every operation is total: a draw from an exhausted kind is ignored and
    reported as ``False``, and counts never go below zero.
    """

    def __init__(self, counts: Mapping[CardKind, int] | None = None) -> None:
        self._counts: DeckCounts = default_counts()
        if counts is not None:
            for card in CATALOG:
                self._counts[card] = max(0, int(counts.get(card, 0)))

    def count(self, card: CardKind) -> int:
        return self._counts[card]

    def counts(self) -> DeckCounts:
        return dict(self._counts)

    def total(self) -> int:
        return sum(self._counts.values())

    def draw_one(self, card: CardKind) -> bool:
        if self._counts[card] <= 0:
            return False
        self._counts[card] -= 1
        return True

    def return_one(self, card: CardKind) -> None:
        self._counts[card] += 1

    def return_many(self, counts: Mapping[CardKind, int]) -> None:
        for card, k in counts.items():
            if k > 0:
                self._counts[card] += k

    def set_count(self, card: CardKind, n: int) -> int:
        value = max(0, int(n))
        self._counts[card] = value
        return value

    def restore_defaults(self) -> None:
        self._counts = default_counts()
