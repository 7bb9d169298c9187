from __future__ import annotations

import traceback

import pygame  # type: ignore[import-not-found]

from flip7tracker.engine.session import new_session
from flip7tracker.services.snapshot_store import SnapshotStore

from ..app import GameContext, SceneTransition
from ..ui import Button, draw_text
from .tracker import TrackerScene


class BootScene:
    def __init__(self, ctx: GameContext) -> None:
        self.ctx = ctx
        self._did_boot = False
        self._error: str | None = None
        self._quit_button: Button | None = None

    def handle_event(self, event: pygame.event.Event) -> None:
        if self._quit_button is not None:
            self._quit_button.handle_event(event)

    def update(self, dt: float) -> SceneTransition | None:
        if self._did_boot:
            return None
        self._did_boot = True
        try:
            if self.ctx.persist_enabled:
                self.ctx.store = SnapshotStore(
                    path=self.ctx.paths.state_file,
                    schema_dir=self.ctx.paths.schema_dir,
                    config=self.ctx.config,
                )
                loaded = self.ctx.store.load()
                self.ctx.session = loaded.session
                self.ctx.telemetry.log(
                    "snapshot_loaded",
                    {"path": str(self.ctx.store.path), "fallbacks": list(loaded.fallbacks)},
                )
            else:
                self.ctx.session = new_session(config=self.ctx.config)

            self.ctx.telemetry.log("boot", {"ok": True, "persist": self.ctx.persist_enabled})
            return SceneTransition(TrackerScene(self.ctx))
        except Exception as e:
            tb = traceback.format_exc(limit=8)
            self._error = f"{e}\n\n{tb}"
            self.ctx.telemetry.log("boot", {"ok": False, "error": str(e)})
            self._quit_button = Button(
                rect=pygame.Rect(20, self.ctx.screen.get_height() - 64, 140, 44),
                text="Quit",
                on_click=lambda: pygame.event.post(pygame.event.Event(pygame.QUIT)),
            )
            return None

    def render(self, screen: pygame.Surface) -> None:
        screen.fill((10, 10, 10))
        font = self.ctx.assets.fonts.big
        draw_text(screen, font, "Flip 7 Tracker", (20, 20))

        font2 = self.ctx.assets.fonts.ui
        if self._error is None:
            draw_text(screen, font2, "Loading saved deck and hand...", (20, 80))
        else:
            draw_text(screen, font2, "BOOT ERROR", (20, 80), color=(240, 80, 80))
            y = 120
            for line in self._error.splitlines()[:22]:
                draw_text(screen, self.ctx.assets.fonts.small, line[:120], (20, y), color=(230, 230, 230))
                y += 18
            if self._quit_button is not None:
                self._quit_button.draw(screen, font2)
