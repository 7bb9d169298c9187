from __future__ import annotations

import pygame  # type: ignore[import-not-found]

from flip7tracker.engine.actions import Action, RestoreDefaultDeckAction, SetCustomCountAction
from flip7tracker.engine.session import step
from flip7tracker.engine.types import CATALOG, DEFAULT_MULTIPLICITY, CardKind

from ..app import GameContext, Scene, SceneTransition
from ..ui import Button, NumberInput, draw_text

ROW_X, ROW_Y = 40, 130
ROW_W, ROW_H = 520, 52
ROWS_PER_COL = 11


class CustomDeckScene:
    def __init__(self, ctx: GameContext) -> None:
        assert ctx.session is not None
        self.ctx = ctx
        self.session = ctx.session
        self._next: SceneTransition | None = None
        self._build_ui()

    def _build_ui(self) -> None:
        self.btn_back = Button(rect=pygame.Rect(20, 20, 120, 40), text="Back", on_click=self._on_back)
        self.btn_defaults = Button(
            rect=pygame.Rect(160, 20, 220, 40),
            text="Restore defaults",
            on_click=lambda: self._apply(RestoreDefaultDeckAction()),
        )
        self._inputs: dict[CardKind, NumberInput] = {}
        self._steppers: list[Button] = []
        for i, card in enumerate(CATALOG):
            row = self._row_rect(i)
            self._inputs[card] = NumberInput(
                rect=pygame.Rect(row.x + 150, row.y + 8, 80, 34),
                text=str(self.session.deck_count(card)),
                on_submit=lambda n, c=card: self._set(c, n),
            )
            self._steppers.append(
                Button(
                    rect=pygame.Rect(row.x + 240, row.y + 8, 40, 34),
                    text="-",
                    on_click=lambda c=card: self._set(c, self.session.deck_count(c) - 1),
                )
            )
            self._steppers.append(
                Button(
                    rect=pygame.Rect(row.x + 286, row.y + 8, 40, 34),
                    text="+",
                    on_click=lambda c=card: self._set(c, self.session.deck_count(c) + 1),
                )
            )

    @staticmethod
    def _row_rect(i: int) -> pygame.Rect:
        col = i // ROWS_PER_COL
        row = i % ROWS_PER_COL
        return pygame.Rect(ROW_X + col * (ROW_W + 20), ROW_Y + row * ROW_H, ROW_W, ROW_H - 6)

    def _on_back(self) -> None:
        from .tracker import TrackerScene

        self._go(TrackerScene(self.ctx))

    def _go(self, scene: Scene) -> None:
        self._next = SceneTransition(scene)

    def _set(self, card: CardKind, n: int) -> None:
        # negative input is floored to zero by the engine
        self._apply(SetCustomCountAction(card=card, count=n))

    def _apply(self, action: Action) -> None:
        res = step(self.session, action)
        if res.ok:
            self.ctx.persist()
        self._sync_inputs()

    def _sync_inputs(self) -> None:
        for card, field in self._inputs.items():
            if not field.active:
                field.text = str(self.session.deck_count(card))

    def handle_event(self, event: pygame.event.Event) -> None:
        for b in (self.btn_back, self.btn_defaults, *self._steppers):
            if b.handle_event(event):
                return
        for field in self._inputs.values():
            field.handle_event(event)

    def update(self, dt: float) -> SceneTransition | None:
        return self._next

    def render(self, screen: pygame.Surface) -> None:
        screen.fill((12, 12, 18))
        fonts = self.ctx.assets.fonts
        self.btn_back.draw(screen, fonts.ui)
        self.btn_defaults.draw(screen, fonts.ui)
        draw_text(screen, fonts.big, "Custom deck", (40, 76))
        draw_text(
            screen,
            fonts.small,
            f"Cards in deck: {self.session.total_remaining()}  (default {self.session.total_initial()})",
            (240, 86),
        )
        for i, card in enumerate(CATALOG):
            row = self._row_rect(i)
            pygame.draw.rect(screen, (30, 30, 40), row, border_radius=6)
            pygame.draw.rect(screen, (0, 0, 0), row, width=2, border_radius=6)
            screen.blit(self.ctx.assets.badge(card, (120, 30)), (row.x + 12, row.y + 10))
            draw_text(
                screen,
                fonts.small,
                f"default {DEFAULT_MULTIPLICITY[card]}",
                (row.x + 340, row.y + 18),
                color=(160, 160, 170),
            )
            self._inputs[card].draw(screen, fonts.ui)
        for b in self._steppers:
            b.draw(screen, fonts.ui)
