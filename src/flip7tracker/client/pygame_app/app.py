from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol

import pygame  # type: ignore[import-not-found]

from flip7tracker.engine.session import TrackerConfig, TrackerSession
from flip7tracker.paths import Paths
from flip7tracker.services.snapshot_store import SnapshotError, SnapshotStore
from flip7tracker.services.telemetry import TelemetryService

from .asset_manager import AssetManager


@dataclass
class SceneTransition:
    next_scene: "Scene"


class Scene(Protocol):
    def handle_event(self, event: pygame.event.Event) -> None: ...
    def update(self, dt: float) -> SceneTransition | None: ...
    def render(self, screen: pygame.Surface) -> None: ...


@dataclass
class GameContext:
    screen: pygame.Surface
    clock: pygame.time.Clock
    paths: Paths
    assets: AssetManager
    telemetry: TelemetryService
    config: TrackerConfig
    persist_enabled: bool = True

    # Loaded at boot
    store: Optional[SnapshotStore] = None
    session: Optional[TrackerSession] = None

    def persist(self) -> None:
        """Save the settled session; a failed write is logged, never raised."""
        if self.store is None or self.session is None:
            return
        try:
            self.store.save(self.session)
        except SnapshotError as e:
            try:
                self.telemetry.log("snapshot_save_failed", {"error": str(e)})
            except OSError:
                # telemetry sits next to the snapshot and can fail the same way
                pass


class App:
    def __init__(self, ctx: GameContext, initial_scene: Scene) -> None:
        self.ctx = ctx
        self.scene: Scene = initial_scene
        self.running = True

    def run(self) -> int:
        while self.running:
            dt = self.ctx.clock.tick(60) / 1000.0
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self.running = False
                    break
                self.scene.handle_event(event)

            tr = self.scene.update(dt)
            if tr is not None:
                self.scene = tr.next_scene

            self.scene.render(self.ctx.screen)
            pygame.display.flip()

        self.ctx.persist()
        return 0
