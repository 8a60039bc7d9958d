from __future__ import annotations

import argparse
import logging
from typing import Dict, List, Optional

import pygame

from tetris_engine.engine import EngineConfig, GameMachine, ManualScheduler
from tetris_engine.game import Action, GameSnapshot, TransformKind
from tetris_engine.game.state import BACKGROUND, OPEN_SETTINGS, PAUSE, RESET, START, TOGGLE_SOUND, WELCOME
from .renderer import Renderer
from .sound import PygameSoundSink


logger = logging.getLogger(__name__)

KEY_TO_ACTION: Dict[int, Action] = {
    pygame.K_LEFT: Action.transform(TransformKind.LEFT),
    pygame.K_RIGHT: Action.transform(TransformKind.RIGHT),
    pygame.K_UP: Action.transform(TransformKind.ROTATE),
    pygame.K_DOWN: Action.transform(TransformKind.FAST_DOWN),
    pygame.K_SPACE: Action.transform(TransformKind.FALL),
    pygame.K_RETURN: START,
    pygame.K_p: PAUSE,
    pygame.K_r: RESET,
    pygame.K_m: TOGGLE_SOUND,
    pygame.K_F1: OPEN_SETTINGS,
}


def action_for_event(event: pygame.event.Event) -> Optional[Action]:
    """Translate a pygame event into an engine action, if it maps to one."""
    if event.type == pygame.KEYDOWN:
        return KEY_TO_ACTION.get(event.key)
    if event.type == pygame.WINDOWFOCUSLOST:
        return BACKGROUND
    return None


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play the tetris engine in a pygame window")
    p.add_argument("--width", type=int, default=10)
    p.add_argument("--height", type=int, default=20)
    p.add_argument("--interval", type=int, default=500, help="descent interval in ms")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--mute", action="store_true")
    p.add_argument("--cell-size", type=int, default=28)
    p.add_argument("--log-level", default="WARNING")
    return p


def run(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(name)s %(levelname)s %(message)s")

    config = EngineConfig(
        width=args.width,
        height=args.height,
        descent_interval_ms=args.interval,
        sound_enabled=not args.mute,
        random_seed=args.seed,
    )
    logger.info("Starting %dx%d board, descent every %d ms", config.width, config.height, config.descent_interval_ms)

    pygame.init()
    try:
        clock = pygame.time.Clock()
        scheduler = ManualScheduler()
        machine = GameMachine(config, scheduler, sound=PygameSoundSink())
        renderer = Renderer(cell_size=args.cell_size)

        screen = pygame.display.set_mode(renderer.window_size(config.width, config.height))
        pygame.display.set_caption("Tetris Engine")
        font = pygame.font.SysFont(None, 28)

        latest: List[GameSnapshot] = []
        unsubscribe = machine.subscribe(latest.append)
        machine.dispatch(WELCOME)

        running = True
        while running:
            # Input handling
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                    running = False
                else:
                    action = action_for_event(event)
                    if action is not None:
                        machine.dispatch(action)

            # Timers run on the frame clock
            scheduler.advance(clock.tick(60))

            # Redraw every frame, not only on change
            del latest[:-1]
            renderer.draw(screen, latest[-1], machine.score, font)

        unsubscribe()
        machine.close()
    finally:
        pygame.quit()


if __name__ == "__main__":  # pragma: no cover
    run()
