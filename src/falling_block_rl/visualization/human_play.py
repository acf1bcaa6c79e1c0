from __future__ import annotations

import logging
from typing import Dict

import pygame

from falling_block_rl.game import Event, GameEngine, LevelChanged, Move
from .renderer import Renderer


logger = logging.getLogger(__name__)

TICK_EVENT = pygame.USEREVENT + 1

KEY_TO_MOVE: Dict[int, Move] = {
    pygame.K_LEFT: Move.LEFT,
    pygame.K_RIGHT: Move.RIGHT,
    pygame.K_UP: Move.ROTATE,
    pygame.K_DOWN: Move.DOWN,
    pygame.K_p: Move.TOGGLE_PAUSE,
}


def schedule_ticks(interval_ms: int) -> None:
    # Replaces any previous timer for the event
    pygame.time.set_timer(TICK_EVENT, interval_ms)


def run() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    pygame.init()
    try:
        clock = pygame.time.Clock()
        engine = GameEngine()
        renderer = Renderer(cell_size=30)

        def on_event(event: Event) -> None:
            if isinstance(event, LevelChanged):
                logger.info("rescheduling gravity to %d ms", event.interval_ms)
                schedule_ticks(event.interval_ms)

        engine.subscribe(on_event)

        screen = pygame.display.set_mode(renderer.window_size(engine))
        pygame.display.set_caption("Falling Blocks")
        schedule_ticks(engine.get_fall_interval())

        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == TICK_EVENT:
                    engine.tick()
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_n:
                        engine.new_game()
                        schedule_ticks(engine.get_fall_interval())
                    else:
                        move = KEY_TO_MOVE.get(event.key)
                        if move is not None:
                            engine.command(move)

            renderer.draw(screen, engine)
            clock.tick(60)
    finally:
        pygame.time.set_timer(TICK_EVENT, 0)
        pygame.quit()


if __name__ == "__main__":  # pragma: no cover
    run()
