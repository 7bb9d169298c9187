from __future__ import annotations

from collections import Counter
from collections.abc import Iterable

from .types import CardKind


class HandTracker:
    """Ordered cards currently held; insertion order matters for undo."""

    def __init__(self, cards: Iterable[CardKind] | None = None) -> None:
        self._cards: list[CardKind] = list(cards) if cards is not None else []

    def __len__(self) -> int:
        return len(self._cards)

    def cards(self) -> list[CardKind]:
        return list(self._cards)

    def occurrences(self, card: CardKind) -> int:
        return self._cards.count(card)

    def append(self, card: CardKind) -> None:
        self._cards.append(card)

    def remove_at(self, index: int) -> CardKind | None:
        # Negative indices are out of range, not "from the end".
        if index < 0 or index >= len(self._cards):
            return None
        return self._cards.pop(index)

    def remove_first_occurrence(self, card: CardKind) -> bool:
        # list.remove drops the lowest index match
        try:
            self._cards.remove(card)
        except ValueError:
            return False
        return True

    def clear(self) -> None:
        self._cards.clear()

    def drain_to_counts(self) -> dict[CardKind, int]:
        counts: dict[CardKind, int] = dict(Counter(self._cards))
        self._cards.clear()
        return counts
