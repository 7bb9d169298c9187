from __future__ import annotations

from dataclasses import dataclass

from .types import CardKind


@dataclass(frozen=True)
class PlayCardAction:
    card: CardKind


@dataclass(frozen=True)
class DrawToHandAction:
    card: CardKind


@dataclass(frozen=True)
class RemoveFromHandAction:
    index: int


@dataclass(frozen=True)
class ReturnHandAction:
    pass


@dataclass(frozen=True)
class ClearHandAction:
    pass


@dataclass(frozen=True)
class SetCustomCountAction:
    card: CardKind
    count: int


@dataclass(frozen=True)
class RestoreDefaultDeckAction:
    pass


@dataclass(frozen=True)
class ResetAllAction:
    pass


@dataclass(frozen=True)
class UndoAction:
    pass


@dataclass(frozen=True)
class SetSortPreferenceAction:
    by_probability: bool


Action = (
    PlayCardAction
    | DrawToHandAction
    | RemoveFromHandAction
    | ReturnHandAction
    | ClearHandAction
    | SetCustomCountAction
    | RestoreDefaultDeckAction
    | ResetAllAction
    | UndoAction
    | SetSortPreferenceAction
)
