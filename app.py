"""Application entry: opens the window and runs the frame loop.

One event poll per frame feeds the live key map and the action router;
the active state then updates once (one simulation tick while a match is
running) and renders before the display is flipped.
"""

from __future__ import annotations

import pygame

from duel.input_router import InputRouter, KeyState
from duel.logger import get_logger
from duel.settings import settings
from duel.state_manager import DuelState, StateManager, apply_transitions

log = get_logger("app")


def main():
    pygame.init()
    pygame.display.set_caption(settings.caption)
    screen = pygame.display.set_mode((settings.arena_width, settings.arena_height))
    clock = pygame.time.Clock()

    keys = KeyState()
    router = InputRouter()
    sm = StateManager()
    sm.set(DuelState(keys))
    log.info(f"started {settings.arena_width}x{settings.arena_height} @ {settings.fps} FPS")

    running = True
    while running:
        events = pygame.event.get()
        for e in events:
            if e.type == pygame.QUIT:
                running = False

        keys.process_events(events)
        current_name = sm.current.name if sm.current else ""
        sm.handle_actions(router.process(events, current_name))
        sm.handle(events)

        dt = clock.tick(settings.fps) / 1000.0
        sm.update(dt)
        running = apply_transitions(sm) and running

        sm.render(screen)
        pygame.display.flip()

    pygame.quit()


if __name__ == "__main__":  # pragma: no cover
    main()
