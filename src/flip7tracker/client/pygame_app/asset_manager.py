from __future__ import annotations

from dataclasses import dataclass

import pygame  # type: ignore[import-not-found]

from flip7tracker.engine.types import NUMBER_CARDS, CardKind

Color = tuple[int, int, int]


@dataclass
class Fonts:
    ui: pygame.font.Font
    small: pygame.font.Font
    big: pygame.font.Font


class AssetManager:
    """Fonts and per-card badge colours; the tracker ships no image assets."""

    def __init__(self) -> None:
        pygame.font.init()
        self.fonts = Fonts(
            ui=pygame.font.SysFont(None, 24),
            small=pygame.font.SysFont(None, 18),
            big=pygame.font.SysFont(None, 34),
        )
        self._badges: dict[tuple[CardKind, int, int], pygame.Surface] = {}

    def card_color(self, card: CardKind) -> Color:
        if card in NUMBER_CARDS:
            return (40, 70, 120)
        if card == "0":
            return (60, 60, 60)
        if card.startswith("+") or card == "x2":
            return (110, 80, 30)
        return (110, 40, 60)

    def badge(self, card: CardKind, size: tuple[int, int]) -> pygame.Surface:
        key = (card, size[0], size[1])
        if key in self._badges:
            return self._badges[key]
        surf = pygame.Surface(size, pygame.SRCALPHA)
        pygame.draw.rect(surf, self.card_color(card), surf.get_rect(), border_radius=6)
        img = self.fonts.small.render(card, True, (240, 240, 240))
        surf.blit(img, img.get_rect(center=surf.get_rect().center).topleft)
        self._badges[key] = surf
        return surf
