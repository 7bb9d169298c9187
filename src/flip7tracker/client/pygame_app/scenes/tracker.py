from __future__ import annotations

import pygame  # type: ignore[import-not-found]

from flip7tracker.engine.actions import (
    Action,
    ClearHandAction,
    DrawToHandAction,
    PlayCardAction,
    RemoveFromHandAction,
    ResetAllAction,
    ReturnHandAction,
    SetSortPreferenceAction,
    UndoAction,
)
from flip7tracker.engine.session import TrackerSession, step
from flip7tracker.engine.types import CATALOG

from ..app import GameContext, Scene, SceneTransition
from ..ui import Button, Toggle, draw_progress, draw_text

DECK_X, DECK_Y = 20, 120
CELL_W, CELL_H = 300, 40
HAND_Y = 612
PANEL_X = 660
HAND_COLS, HAND_ROWS = 10, 2
MAX_HAND_SLOTS = HAND_COLS * HAND_ROWS


def hand_slot_rects(count: int) -> list[pygame.Rect]:
    """Badge rects for the first ``count`` hand cards, capped above the hand buttons."""
    rects: list[pygame.Rect] = []
    for i in range(min(count, MAX_HAND_SLOTS)):
        col = i % HAND_COLS
        row = i // HAND_COLS
        rects.append(pygame.Rect(DECK_X + col * 62, HAND_Y + 30 + row * 34, 56, 28))
    return rects


class TrackerScene:
    def __init__(self, ctx: GameContext) -> None:
        assert ctx.session is not None
        self.ctx = ctx
        self.session: TrackerSession = ctx.session
        self._next: SceneTransition | None = None
        self._message = ""
        self._build_ui()

    def _build_ui(self) -> None:
        self.btn_undo = Button(rect=pygame.Rect(720, 20, 120, 40), text="Undo", on_click=self._on_undo)
        self.btn_reset = Button(rect=pygame.Rect(850, 20, 120, 40), text="Reset", on_click=self._on_reset)
        self.btn_custom = Button(
            rect=pygame.Rect(980, 20, 180, 40), text="Custom deck", on_click=self._on_custom_deck
        )
        self.btn_clear_hand = Button(
            rect=pygame.Rect(DECK_X, HAND_Y + 100, 150, 36),
            text="Clear hand",
            on_click=lambda: self._apply(ClearHandAction()),
        )
        self.btn_return_hand = Button(
            rect=pygame.Rect(DECK_X + 160, HAND_Y + 100, 150, 36),
            text="Return cards",
            on_click=lambda: self._apply(ReturnHandAction()),
        )
        self.toggle_sort = Toggle(
            rect=pygame.Rect(PANEL_X + 10, 120, 300, 30),
            label="Sort by probability",
            value=self.session.sort_by_probability,
            on_change=lambda v: self._apply(SetSortPreferenceAction(by_probability=v)),
        )

        self._card_buttons: list[Button] = []
        for i, card in enumerate(CATALOG):
            rect = self._cell_rect(i)
            self._card_buttons.append(
                Button(
                    rect=pygame.Rect(rect.right - 166, rect.y + 5, 78, 30),
                    text="Played",
                    on_click=lambda c=card: self._apply(PlayCardAction(card=c)),
                )
            )
            self._card_buttons.append(
                Button(
                    rect=pygame.Rect(rect.right - 84, rect.y + 5, 78, 30),
                    text="To hand",
                    on_click=lambda c=card: self._apply(DrawToHandAction(card=c)),
                    color=(40, 90, 60),
                )
            )

    def _controls(self) -> list[Button]:
        return [self.btn_undo, self.btn_reset, self.btn_custom, self.btn_clear_hand, self.btn_return_hand]

    @staticmethod
    def _cell_rect(i: int) -> pygame.Rect:
        col = i % 2
        row = i // 2
        return pygame.Rect(DECK_X + col * (CELL_W + 10), DECK_Y + row * (CELL_H + 4), CELL_W, CELL_H)

    def _hand_rects(self) -> list[pygame.Rect]:
        return hand_slot_rects(len(self.session.hand_cards()))

    def _go(self, scene: Scene) -> None:
        self._next = SceneTransition(scene)

    def _apply(self, action: Action) -> None:
        res = step(self.session, action)
        if not res.ok:
            self._message = res.error or "Action ignored."
            return
        self._message = ""
        self.toggle_sort.value = self.session.sort_by_probability
        self.ctx.persist()

    def _on_undo(self) -> None:
        self._apply(UndoAction())

    def _on_reset(self) -> None:
        self._apply(ResetAllAction())

    def _on_custom_deck(self) -> None:
        from .custom_deck import CustomDeckScene

        self._go(CustomDeckScene(self.ctx))

    def handle_event(self, event: pygame.event.Event) -> None:
        for b in self._controls():
            if b.handle_event(event):
                return
        if self.toggle_sort.handle_event(event):
            return
        for b in self._card_buttons:
            if b.handle_event(event):
                return
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            for i, rect in enumerate(self._hand_rects()):
                if rect.collidepoint(event.pos):
                    self._apply(RemoveFromHandAction(index=i))
                    return

    def update(self, dt: float) -> SceneTransition | None:
        return self._next

    def render(self, screen: pygame.Surface) -> None:
        screen.fill((12, 12, 18))
        fonts = self.ctx.assets.fonts
        draw_text(screen, fonts.big, "Flip 7 Tracker", (20, 24))
        for b in self._controls():
            b.draw(screen, fonts.ui)

        self._draw_deck(screen)
        self._draw_hand(screen)
        self._draw_assistant(screen)

        if self._message:
            draw_text(screen, fonts.ui, self._message, (340, 30), color=(240, 200, 120))

    def _draw_deck(self, screen: pygame.Surface) -> None:
        fonts = self.ctx.assets.fonts
        s = self.session
        draw_text(screen, fonts.ui, f"Deck  -  Left {s.total_remaining()} / {s.total_initial()}", (DECK_X, 76))
        draw_progress(screen, pygame.Rect(DECK_X, 102, 2 * CELL_W + 10, 8), s.remaining_fraction())
        for i, card in enumerate(CATALOG):
            rect = self._cell_rect(i)
            pygame.draw.rect(screen, (30, 30, 40), rect, border_radius=6)
            pygame.draw.rect(screen, (0, 0, 0), rect, width=2, border_radius=6)
            screen.blit(self.ctx.assets.badge(card, (64, 28)), (rect.x + 6, rect.y + 6))
            draw_text(screen, fonts.small, f"{s.deck_count(card)} left", (rect.x + 76, rect.y + 14))
        for b in self._card_buttons:
            b.draw(screen, fonts.small)

    def _draw_hand(self, screen: pygame.Surface) -> None:
        fonts = self.ctx.assets.fonts
        hand = self.session.hand_cards()
        draw_text(screen, fonts.ui, "Your Hand", (DECK_X, HAND_Y))
        if not hand:
            draw_text(screen, fonts.small, "No cards in hand.", (DECK_X, HAND_Y + 36), color=(160, 160, 170))
        for card, rect in zip(hand, self._hand_rects()):
            screen.blit(self.ctx.assets.badge(card, rect.size), rect.topleft)
        hidden = len(hand) - MAX_HAND_SLOTS
        if hidden > 0:
            draw_text(screen, fonts.small, f"+{hidden} more", (DECK_X + 120, HAND_Y + 4), color=(240, 200, 120))
        if hand:
            draw_text(
                screen, fonts.small, "Click a card to remove it.", (DECK_X + 330, HAND_Y + 110), color=(160, 160, 170)
            )

    def _draw_assistant(self, screen: pygame.Surface) -> None:
        fonts = self.ctx.assets.fonts
        panel = pygame.Rect(PANEL_X, 76, 500, 670)
        pygame.draw.rect(screen, (24, 24, 30), panel, border_radius=10)
        pygame.draw.rect(screen, (0, 0, 0), panel, width=2, border_radius=10)
        draw_text(screen, fonts.ui, "Decision Assistant", (panel.x + 10, panel.y + 10))
        self.toggle_sort.draw(screen, fonts.small)

        y = 160
        draw_text(screen, fonts.small, "Card", (panel.x + 20, y))
        draw_text(screen, fonts.small, "Left", (panel.x + 140, y))
        draw_text(screen, fonts.small, "Chance", (panel.x + 200, y))
        y += 20
        for st in self.session.get_stats():
            color = (240, 240, 240) if st.remaining > 0 else (120, 120, 130)
            draw_text(screen, fonts.small, st.card, (panel.x + 20, y), color=color)
            draw_text(screen, fonts.small, str(st.remaining), (panel.x + 140, y), color=color)
            draw_text(screen, fonts.small, f"{st.probability:.2f}%", (panel.x + 200, y), color=color)
            y += 18

        x2 = panel.x + 300
        draw_text(screen, fonts.ui, "Top draw chances", (x2, 160))
        top = self.session.get_top_draws()
        if not top:
            draw_text(screen, fonts.small, "Deck is empty.", (x2, 188))
        for i, st in enumerate(top):
            draw_text(screen, fonts.small, f"{st.card}: {st.probability:.2f}%", (x2, 188 + i * 20))

        danger = self.session.get_danger_probability()
        rec = self.session.get_recommendation()
        draw_text(screen, fonts.small, "Chance to hit a second", (x2, 320))
        draw_text(screen, fonts.small, "identical (uniques in hand):", (x2, 338))
        draw_text(screen, fonts.big, f"{danger:.2f}%", (x2, 360))
        badge = pygame.Rect(x2, 404, 180, 40)
        color = (150, 50, 50) if rec.level == "warn" else (50, 120, 70)
        pygame.draw.rect(screen, color, badge, border_radius=8)
        img = fonts.ui.render(rec.text, True, (240, 240, 240))
        screen.blit(img, img.get_rect(center=badge.center).topleft)
