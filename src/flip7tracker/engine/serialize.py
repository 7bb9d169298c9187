from __future__ import annotations

from .actions import (
    Action,
    ClearHandAction,
    DrawToHandAction,
    PlayCardAction,
    RemoveFromHandAction,
    ResetAllAction,
    RestoreDefaultDeckAction,
    ReturnHandAction,
    SetCustomCountAction,
    SetSortPreferenceAction,
    UndoAction,
)
from .history import HistoryEntry
from .session import TrackerSession
from .types import CATALOG

SNAPSHOT_VERSION = 1


def action_to_dict(a: Action) -> dict[str, object]:
    if isinstance(a, PlayCardAction):
        return {"type": "play", "card": a.card}
    if isinstance(a, DrawToHandAction):
        return {"type": "draw", "card": a.card}
    if isinstance(a, RemoveFromHandAction):
        return {"type": "remove_from_hand", "index": a.index}
    if isinstance(a, ReturnHandAction):
        return {"type": "return_hand"}
    if isinstance(a, ClearHandAction):
        return {"type": "clear_hand"}
    if isinstance(a, SetCustomCountAction):
        return {"type": "set_count", "card": a.card, "count": a.count}
    if isinstance(a, RestoreDefaultDeckAction):
        return {"type": "restore_defaults"}
    if isinstance(a, ResetAllAction):
        return {"type": "reset_all"}
    if isinstance(a, UndoAction):
        return {"type": "undo"}
    if isinstance(a, SetSortPreferenceAction):
        return {"type": "set_sort", "by_probability": a.by_probability}
    # should be unreachable
    return {"type": "unknown"}


def history_entry_to_dict(e: HistoryEntry) -> dict[str, object]:
    return {"action": e.action, "card": e.card}


def snapshot(session: TrackerSession) -> dict[str, object]:
    """Return the persisted form of ``session`` (deck, hand, sort flag, history)."""
    counts = session.deck.counts()
    return {
        "version": SNAPSHOT_VERSION,
        "deck": {c: counts[c] for c in CATALOG},
        "hand": session.hand.cards(),
        "sortByProbability": session.sort_by_probability,
        "history": [history_entry_to_dict(e) for e in session.history.entries()],
    }
