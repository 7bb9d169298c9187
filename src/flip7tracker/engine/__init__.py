"""Deterministic, headless deck/hand bookkeeping for Flip 7.

IMPORTANT: This package must never import pygame.
"""

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
from .session import StepResult, TrackerConfig, TrackerSession, new_session, replay, step
from .stats import CardStat, Recommendation
from .types import CATALOG, DEFAULT_MULTIPLICITY, NUMBER_CARDS, SPECIAL_CARDS, CardKind

__all__ = [
    "Action",
    "CATALOG",
    "CardKind",
    "CardStat",
    "ClearHandAction",
    "DEFAULT_MULTIPLICITY",
    "DrawToHandAction",
    "HistoryEntry",
    "NUMBER_CARDS",
    "PlayCardAction",
    "Recommendation",
    "RemoveFromHandAction",
    "ResetAllAction",
    "RestoreDefaultDeckAction",
    "ReturnHandAction",
    "SPECIAL_CARDS",
    "SetCustomCountAction",
    "SetSortPreferenceAction",
    "StepResult",
    "TrackerConfig",
    "TrackerSession",
    "UndoAction",
    "new_session",
    "replay",
    "step",
]
