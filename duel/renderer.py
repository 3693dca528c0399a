"""Frame composition.

The simulation never draws. After each tick the driver hands the session
to ``Renderer.render`` which issues all draw calls in a fixed order:

1. Clear to the background color
2. Players
3. Walls
4. Bullets
5. Power-ups
6. Health readout (player 1 bottom-left, player 2 top-left)
7. Game-over overlay with the winner banner and a Restart button,
   only once the session has stopped

``capture_sequence`` records the executed steps so tests can assert the
layering without sampling pixels.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

import pygame

from duel.constants import (
    BACKGROUND_COLOR,
    BANNER_FONT_SIZE,
    BUTTON_COLOR,
    HUD_FONT_SIZE,
    OVERLAY_COLOR,
    TEXT_COLOR,
)
from duel.session import Session

RESTART_BUTTON_SIZE = (160, 44)


def restart_button_rect(arena: Tuple[int, int]) -> pygame.Rect:
    """Where the overlay's Restart button sits in an arena of this size.

    Drawing and click hit-testing both go through here with the session arena.
    """
    w, h = arena
    rect = pygame.Rect((0, 0), RESTART_BUTTON_SIZE)
    rect.center = (w // 2, h // 2 + 60)
    return rect


class Renderer:
    def __init__(self) -> None:
        self._fonts: Dict[int, pygame.font.Font] = {}

    def font(self, size: int) -> pygame.font.Font:
        if size not in self._fonts:
            if not pygame.font.get_init():
                pygame.font.init()
            self._fonts[size] = pygame.font.Font(None, size)
        return self._fonts[size]

    def _text(self, text: str, size: int) -> pygame.Surface:
        return self.font(size).render(text, True, pygame.Color(TEXT_COLOR))

    def render(
        self,
        session: Session,
        target_surface: pygame.Surface,
        capture_sequence: Optional[List[str]] = None,
    ) -> None:
        seq = capture_sequence

        def step(name: str) -> None:
            if seq is not None:
                seq.append(name)

        target_surface.fill(pygame.Color(BACKGROUND_COLOR))
        step("clear")

        for player in session.players:
            player.render(target_surface)
        step("players")

        for wall in session.walls:
            wall.render(target_surface)
        step("walls")

        for bullet in session.projectiles:
            bullet.render(target_surface)
        step("bullets")

        for powerup in session.powerups:
            powerup.render(target_surface)
        step("powerups")

        self._render_health(session, target_surface)
        step("health")

        if not session.running:
            self.render_game_over(session, target_surface)
            step("game_over")

    def _render_health(self, session: Session, surf: pygame.Surface) -> None:
        h = session.arena.height
        p1 = self._text(f"Player 1 Health: {session.player1.health}", HUD_FONT_SIZE)
        surf.blit(p1, p1.get_rect(bottomleft=(10, h - 10)))
        p2 = self._text(f"Player 2 Health: {session.player2.health}", HUD_FONT_SIZE)
        surf.blit(p2, p2.get_rect(bottomleft=(10, 30)))

    def render_game_over(self, session: Session, surf: pygame.Surface) -> None:
        w, h = surf.get_size()
        shade = pygame.Surface((w, h), pygame.SRCALPHA)
        shade.fill(OVERLAY_COLOR)
        surf.blit(shade, (0, 0))

        aw, ah = session.arena
        banner = self._text(session.winner_text(), BANNER_FONT_SIZE)
        surf.blit(banner, banner.get_rect(center=(aw // 2, ah // 2)))

        button = restart_button_rect(session.arena)
        pygame.draw.rect(surf, pygame.Color(BUTTON_COLOR), button, border_radius=6)
        pygame.draw.rect(surf, pygame.Color(TEXT_COLOR), button, 2, border_radius=6)
        label = self._text("Restart", HUD_FONT_SIZE)
        surf.blit(label, label.get_rect(center=button.center))


__all__ = ["Renderer", "restart_button_rect"]
