from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

import pygame  # type: ignore[import-not-found]


Color = tuple[int, int, int]


def draw_text(
    screen: pygame.Surface,
    font: pygame.font.Font,
    text: str,
    pos: tuple[int, int],
    color: Color = (240, 240, 240),
) -> None:
    img = font.render(text, True, color)
    screen.blit(img, pos)


def draw_progress(screen: pygame.Surface, rect: pygame.Rect, fraction: float) -> None:
    fraction = max(0.0, min(1.0, fraction))
    pygame.draw.rect(screen, (40, 40, 48), rect, border_radius=rect.height // 2)
    if fraction > 0:
        fill = pygame.Rect(rect.x, rect.y, max(rect.height, int(rect.width * fraction)), rect.height)
        pygame.draw.rect(screen, (90, 170, 110), fill, border_radius=rect.height // 2)


@dataclass
class Button:
    rect: pygame.Rect
    text: str
    on_click: Callable[[], None]
    enabled: bool = True
    color: Color = (60, 60, 60)

    def handle_event(self, event: pygame.event.Event) -> bool:
        if not self.enabled:
            return False
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.collidepoint(event.pos):
                self.on_click()
                return True
        return False

    def draw(self, screen: pygame.Surface, font: pygame.font.Font) -> None:
        bg = self.color if self.enabled else (30, 30, 30)
        pygame.draw.rect(screen, bg, self.rect, border_radius=8)
        pygame.draw.rect(screen, (0, 0, 0), self.rect, width=2, border_radius=8)
        img = font.render(self.text, True, (240, 240, 240))
        r = img.get_rect(center=self.rect.center)
        screen.blit(img, r.topleft)


@dataclass
class Toggle:
    rect: pygame.Rect
    label: str
    value: bool
    on_change: Callable[[bool], None]

    def handle_event(self, event: pygame.event.Event) -> bool:
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.collidepoint(event.pos):
                self.value = not self.value
                self.on_change(self.value)
                return True
        return False

    def draw(self, screen: pygame.Surface, font: pygame.font.Font) -> None:
        box = pygame.Rect(self.rect.x + 6, self.rect.y + (self.rect.height - 20) // 2, 20, 20)
        pygame.draw.rect(screen, (220, 220, 220), box, width=2)
        if self.value:
            pygame.draw.line(screen, (220, 220, 220), (box.x + 4, box.y + 10), (box.x + 9, box.y + 16), 3)
            pygame.draw.line(screen, (220, 220, 220), (box.x + 9, box.y + 16), (box.x + 16, box.y + 5), 3)
        txt = font.render(self.label, True, (240, 240, 240))
        screen.blit(txt, (box.right + 10, box.y + 2))


@dataclass
class NumberInput:
    """Integer field; submits on Enter or when focus is lost."""

    rect: pygame.Rect
    text: str
    on_submit: Callable[[int], None]
    active: bool = False
    max_len: int = 4

    def _submit(self) -> None:
        self.active = False
        if self.text in ("", "-"):
            return
        self.on_submit(int(self.text))

    def handle_event(self, event: pygame.event.Event) -> bool:
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            inside = self.rect.collidepoint(event.pos)
            if self.active and not inside:
                self._submit()
            self.active = inside
            return inside
        if not self.active:
            return False
        if event.type == pygame.KEYDOWN:
            if event.key == pygame.K_RETURN:
                self._submit()
                return True
            if event.key == pygame.K_ESCAPE:
                self.active = False
                return True
            if event.key == pygame.K_BACKSPACE:
                self.text = self.text[:-1]
                return True
            ch = event.unicode
            if len(self.text) < self.max_len and (ch.isdigit() or (ch == "-" and not self.text)):
                self.text += ch
                return True
        return False

    def draw(self, screen: pygame.Surface, font: pygame.font.Font) -> None:
        bg = (20, 20, 20) if self.active else (30, 30, 30)
        pygame.draw.rect(screen, bg, self.rect, border_radius=6)
        border = (200, 200, 120) if self.active else (0, 0, 0)
        pygame.draw.rect(screen, border, self.rect, width=2, border_radius=6)
        img = font.render(self.text, True, (240, 240, 240))
        screen.blit(img, (self.rect.x + 8, self.rect.y + 6))
