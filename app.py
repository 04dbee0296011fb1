"""Application entry point.

Opens the window, then runs the state stack: GameState at the root and an
UpgradeState overlay whenever the simulation asks for an upgrade choice.
"""

from __future__ import annotations

import pygame

from bowgame.input_router import InputRouter
from bowgame.logger import get_logger
from bowgame.settings import settings
from bowgame.state_manager import GameState, StateManager, UpgradeState

log = get_logger("app")


def main():
    pygame.init()
    screen = pygame.display.set_mode(settings.window_size)
    pygame.display.set_caption("Bow Game")
    clock = pygame.time.Clock()

    sm = StateManager()
    router = InputRouter()
    sm.set(GameState())
    log.info(f"started (fps cap {settings.fps}, auto upgrade {settings.auto_upgrade})")

    running = True
    while running:
        events = pygame.event.get()
        for e in events:
            if e.type == pygame.QUIT:
                running = False

        current_name = sm.current.name if sm.current else ""
        actions = router.process(events, current_name)
        sm.handle_actions(actions)
        sm.handle(events)

        dt = clock.tick(settings.fps) / 1000.0
        sm.update(dt)

        cur = sm.current
        if getattr(cur, "quit_requested", False):
            running = False
        if isinstance(cur, GameState) and cur.request_upgrade:
            sm.push(UpgradeState(cur))
        elif isinstance(cur, UpgradeState) and cur.closed:
            sm.pop()

        sm.render(screen)
        pygame.display.flip()

    pygame.quit()


if __name__ == "__main__":  # pragma: no cover
    main()
