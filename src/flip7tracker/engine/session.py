from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

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
from .deck import DeckStore
from .hand import HandTracker
from .history import ActionHistory, HistoryEntry
from .stats import (
    DANGER_THRESHOLD,
    CardStat,
    Recommendation,
    compute_stats,
    danger_probability,
    numeric_subset,
    recommend,
    sort_stats,
    top_k,
)
from .types import CardKind, DeckCounts, total_default

Event = dict[str, object]


@dataclass(frozen=True)
class TrackerConfig:
    danger_threshold: float = DANGER_THRESHOLD
    top_k: int = 5
    default_sort_by_probability: bool = True


@dataclass
class StepResult:
    ok: bool
    events: list[Event]
    error: str | None = None


@dataclass
class TrackerSession:
    """One player's deck, hand and undo log.

    All mutations go through :func:`step` so ``action_log`` is a complete
    record and :func:`replay` can rebuild the session.
    """

    config: TrackerConfig
    deck: DeckStore
    hand: HandTracker
    history: ActionHistory
    sort_by_probability: bool = True
    action_log: list[Action] = field(default_factory=list)
    event_log: list[Event] = field(default_factory=list)

    # -------- Mutations --------
    def play_card(self, card: CardKind) -> bool:
        return step(self, PlayCardAction(card=card)).ok

    def draw_to_hand(self, card: CardKind) -> bool:
        return step(self, DrawToHandAction(card=card)).ok

    def remove_from_hand_at(self, index: int) -> bool:
        return step(self, RemoveFromHandAction(index=index)).ok

    def return_hand_to_deck(self) -> bool:
        return step(self, ReturnHandAction()).ok

    def clear_hand(self) -> bool:
        return step(self, ClearHandAction()).ok

    def set_custom_count(self, card: CardKind, n: int) -> bool:
        return step(self, SetCustomCountAction(card=card, count=int(n))).ok

    def restore_default_deck(self) -> bool:
        return step(self, RestoreDefaultDeckAction()).ok

    def reset_all(self) -> bool:
        return step(self, ResetAllAction()).ok

    def undo(self) -> bool:
        return step(self, UndoAction()).ok

    def set_sort_preference(self, by_probability: bool) -> bool:
        return step(self, SetSortPreferenceAction(by_probability=bool(by_probability))).ok

    # -------- Queries --------
    def deck_count(self, card: CardKind) -> int:
        return self.deck.count(card)

    def deck_counts(self) -> DeckCounts:
        return self.deck.counts()

    def hand_cards(self) -> list[CardKind]:
        return self.hand.cards()

    def history_entries(self) -> list[HistoryEntry]:
        return self.history.entries()

    def played_counts(self) -> dict[CardKind, int]:
        return self.history.played_counts()

    def total_remaining(self) -> int:
        return self.deck.total()

    def total_initial(self) -> int:
        return total_default()

    def remaining_fraction(self) -> float:
        initial = self.total_initial()
        if initial <= 0:
            return 0.0
        return min(1.0, self.total_remaining() / initial)

    def get_stats(self) -> list[CardStat]:
        return sort_stats(compute_stats(self.deck.counts()), self.sort_by_probability)

    def get_numeric_stats(self) -> list[CardStat]:
        return numeric_subset(self.get_stats())

    def get_top_draws(self, k: int | None = None) -> list[CardStat]:
        return top_k(self.get_numeric_stats(), self.config.top_k if k is None else k)

    def get_danger_probability(self) -> float:
        return danger_probability(self.hand.cards(), self.get_numeric_stats())

    def get_recommendation(self) -> Recommendation:
        return recommend(self.get_danger_probability(), self.config.danger_threshold)


def _play_card(session: TrackerSession, action: PlayCardAction) -> StepResult:
    if not session.deck.draw_one(action.card):
        return StepResult(ok=False, events=[], error=f"No '{action.card}' left in deck.")
    session.history.record("played", action.card)
    session.event_log.append(
        {"type": "CARD_PLAYED", "card": action.card, "left": session.deck.count(action.card)}
    )
    return StepResult(ok=True, events=session.event_log[-1:])


def _draw_to_hand(session: TrackerSession, action: DrawToHandAction) -> StepResult:
    if not session.deck.draw_one(action.card):
        return StepResult(ok=False, events=[], error=f"No '{action.card}' left in deck.")
    session.hand.append(action.card)
    session.history.record("drawn", action.card)
    session.event_log.append(
        {"type": "CARD_DRAWN", "card": action.card, "left": session.deck.count(action.card)}
    )
    return StepResult(ok=True, events=session.event_log[-1:])


def _remove_from_hand(session: TrackerSession, action: RemoveFromHandAction) -> StepResult:
    removed = session.hand.remove_at(action.index)
    if removed is None:
        return StepResult(ok=False, events=[], error="Hand index out of range.")
    session.event_log.append({"type": "HAND_CARD_REMOVED", "index": action.index, "card": removed})
    return StepResult(ok=True, events=session.event_log[-1:])


def _return_hand(session: TrackerSession, action: ReturnHandAction) -> StepResult:
    counts = session.hand.drain_to_counts()
    session.deck.return_many(counts)
    session.event_log.append({"type": "HAND_RETURNED", "cards": sum(counts.values())})
    return StepResult(ok=True, events=session.event_log[-1:])


def _clear_hand(session: TrackerSession, action: ClearHandAction) -> StepResult:
    # Cleared cards stay out of the deck.
    dropped = len(session.hand)
    session.hand.clear()
    session.event_log.append({"type": "HAND_CLEARED", "cards": dropped})
    return StepResult(ok=True, events=session.event_log[-1:])


def _set_custom_count(session: TrackerSession, action: SetCustomCountAction) -> StepResult:
    value = session.deck.set_count(action.card, action.count)
    session.event_log.append({"type": "COUNT_SET", "card": action.card, "count": value})
    return StepResult(ok=True, events=session.event_log[-1:])


def _restore_default_deck(session: TrackerSession, action: RestoreDefaultDeckAction) -> StepResult:
    session.deck.restore_defaults()
    session.event_log.append({"type": "DECK_RESTORED"})
    return StepResult(ok=True, events=session.event_log[-1:])


def _reset_all(session: TrackerSession, action: ResetAllAction) -> StepResult:
    session.deck.restore_defaults()
    session.hand.clear()
    session.history.clear()
    session.sort_by_probability = session.config.default_sort_by_probability
    session.event_log.append({"type": "SESSION_RESET"})
    return StepResult(ok=True, events=session.event_log[-1:])


def _undo(session: TrackerSession, action: UndoAction) -> StepResult:
    entry = session.history.undo_last(session.deck, session.hand)
    if entry is None:
        return StepResult(ok=False, events=[], error="Nothing to undo.")
    session.event_log.append({"type": "ACTION_UNDONE", "action": entry.action, "card": entry.card})
    return StepResult(ok=True, events=session.event_log[-1:])


def _set_sort(session: TrackerSession, action: SetSortPreferenceAction) -> StepResult:
    session.sort_by_probability = action.by_probability
    session.event_log.append({"type": "SORT_CHANGED", "by_probability": action.by_probability})
    return StepResult(ok=True, events=session.event_log[-1:])


def step(session: TrackerSession, action: Action) -> StepResult:
    """Apply a single action to the session.

    Disallowed actions leave the session untouched and come back with
    ``ok=False``; nothing here raises for bad input.
    """
    # Log first so replay sees attempted actions too
    session.action_log.append(action)

    if isinstance(action, PlayCardAction):
        return _play_card(session, action)
    if isinstance(action, DrawToHandAction):
        return _draw_to_hand(session, action)
    if isinstance(action, RemoveFromHandAction):
        return _remove_from_hand(session, action)
    if isinstance(action, ReturnHandAction):
        return _return_hand(session, action)
    if isinstance(action, ClearHandAction):
        return _clear_hand(session, action)
    if isinstance(action, SetCustomCountAction):
        return _set_custom_count(session, action)
    if isinstance(action, RestoreDefaultDeckAction):
        return _restore_default_deck(session, action)
    if isinstance(action, ResetAllAction):
        return _reset_all(session, action)
    if isinstance(action, UndoAction):
        return _undo(session, action)
    if isinstance(action, SetSortPreferenceAction):
        return _set_sort(session, action)
    return StepResult(ok=False, events=[], error="Unknown action.")


def new_session(
    config: TrackerConfig | None = None,
    deck: Mapping[CardKind, int] | None = None,
    hand: Iterable[CardKind] | None = None,
    history: Iterable[HistoryEntry] | None = None,
    sort_by_probability: bool | None = None,
) -> TrackerSession:
    cfg = config or TrackerConfig()
    return TrackerSession(
        config=cfg,
        deck=DeckStore(deck),
        hand=HandTracker(hand),
        history=ActionHistory(history),
        sort_by_probability=(
            cfg.default_sort_by_probability if sort_by_probability is None else sort_by_probability
        ),
    )


def replay(
    actions: Iterable[Action],
    config: TrackerConfig | None = None,
    deck: Mapping[CardKind, int] | None = None,
) -> TrackerSession:
    session = new_session(config=config, deck=deck)
    for a in actions:
        step(session, a)
    return session
