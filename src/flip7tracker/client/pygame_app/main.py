from __future__ import annotations

import argparse
from pathlib import Path

import pygame  # type: ignore[import-not-found]

from flip7tracker.engine.session import TrackerConfig
from flip7tracker.paths import get_paths
from flip7tracker.services.telemetry import TelemetryService

from .app import App, GameContext
from .asset_manager import AssetManager
from .scenes.boot import BootScene


def main() -> int:
    parser = argparse.ArgumentParser(prog="flip7tracker")
    parser.add_argument("--width", type=int, default=1180)
    parser.add_argument("--height", type=int, default=760)
    parser.add_argument("--state-file", type=Path, default=None, help="Snapshot JSON to load and save.")
    parser.add_argument("--no-persist", action="store_true", help="Start fresh and never write a snapshot.")
    args = parser.parse_args()

    pygame.init()
    screen = pygame.display.set_mode((args.width, args.height))
    pygame.display.set_caption("Flip 7 Tracker")

    clock = pygame.time.Clock()
    paths = get_paths()
    if args.state_file is not None:
        paths = paths.with_state_file(args.state_file)

    ctx = GameContext(
        screen=screen,
        clock=clock,
        paths=paths,
        assets=AssetManager(),
        telemetry=TelemetryService(paths.telemetry_file),
        config=TrackerConfig(),
        persist_enabled=not args.no_persist,
    )

    app = App(ctx, BootScene(ctx))
    code = app.run()
    pygame.quit()
    return code
