from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Literal

from .types import CATALOG, NUMBER_CARDS, CardKind, catalog_index

DANGER_THRESHOLD = 25.0

RecommendationLevel = Literal["warn", "safe"]


@dataclass(frozen=True)
class CardStat:
    card: CardKind
    remaining: int
    probability: float  # percent, 0..100


@dataclass(frozen=True)
class Recommendation:
    level: RecommendationLevel
    text: str


def compute_stats(deck: Mapping[CardKind, int]) -> list[CardStat]:
    """Chance of drawing each card kind next, in catalog order."""
    total = sum(deck.get(c, 0) for c in CATALOG)
    rows: list[CardStat] = []
    for card in CATALOG:
        left = deck.get(card, 0)
        prob = left / total * 100 if total > 0 else 0.0
        rows.append(CardStat(card=card, remaining=left, probability=prob))
    return rows


def sort_stats(stats: Iterable[CardStat], by_probability: bool) -> list[CardStat]:
    # sorted() is stable, so catalog order breaks probability ties
    by_catalog = sorted(stats, key=lambda s: catalog_index(s.card))
    if not by_probability:
        return by_catalog
    return sorted(by_catalog, key=lambda s: -s.probability)


def numeric_subset(stats: Iterable[CardStat]) -> list[CardStat]:
    # "0" never busts, only 1..12 can
    return [s for s in stats if s.card in NUMBER_CARDS]


def top_k(numeric_stats: Iterable[CardStat], k: int = 5) -> list[CardStat]:
    if k <= 0:
        return []
    return sort_stats(numeric_stats, by_probability=True)[:k]


def danger_probability(hand: Sequence[CardKind], numeric_stats: Iterable[CardStat]) -> float:
    """Percent chance the next card duplicates a number held exactly once.

    Numbers already doubled in ``hand`` do not count again.
    """
    held = Counter(hand)
    uniques = {c for c, n in held.items() if n == 1 and c in NUMBER_CARDS}
    return sum(s.probability for s in numeric_stats if s.card in uniques)


def recommend(danger: float, threshold: float = DANGER_THRESHOLD) -> Recommendation:
    if danger > threshold:
        return Recommendation(level="warn", text="Better pass")
    return Recommendation(level="safe", text="You can draw")
