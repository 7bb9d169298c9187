from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Literal

from .deck import DeckStore
from .hand import HandTracker
from .types import CardKind

HistoryAction = Literal["played", "drawn"]


@dataclass(frozen=True)
class HistoryEntry:
    action: HistoryAction
    card: CardKind


class ActionHistory:
    """Most-recent-first log of successful play/draw actions.

    Only ``played`` and ``drawn`` are ever recorded; returning the hand,
    editing counts and resetting are not undoable.
    """

    def __init__(self, entries: Iterable[HistoryEntry] | None = None) -> None:
        self._entries: list[HistoryEntry] = list(entries) if entries is not None else []

    def __len__(self) -> int:
        return len(self._entries)

    def entries(self) -> list[HistoryEntry]:
        return list(self._entries)

    def record(self, action: HistoryAction, card: CardKind) -> HistoryEntry:
        entry = HistoryEntry(action=action, card=card)
        self._entries.insert(0, entry)
        return entry

    def undo_last(self, deck: DeckStore, hand: HandTracker) -> HistoryEntry | None:
        """Pop the newest entry and reverse it against ``deck`` and ``hand``.

        A ``drawn`` entry removes the *first* matching card in the hand, not
        the most recently appended one. With interleaved duplicates and manual
        hand edits this can take out a different physical copy than the one
        drawn last; the card totals still balance.
        """
        if not self._entries:
            return None
        entry = self._entries.pop(0)
        deck.return_one(entry.card)
        if entry.action == "drawn":
            hand.remove_first_occurrence(entry.card)
        return entry

    def played_counts(self) -> dict[CardKind, int]:
        return dict(Counter(e.card for e in self._entries if e.action == "played"))

    def clear(self) -> None:
        self._entries.clear()
