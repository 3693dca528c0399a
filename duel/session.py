"""Session state and lifecycle.

A ``Session`` holds everything one match needs: both players, the walls,
live bullets and power-ups, the running flag and the winner. Restarting
never mutates an old session; ``Session.create`` builds a fresh one so no
stale references survive into the next match.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

from duel.constants import (
    FIRE_DOWN,
    FIRE_UP,
    PLAYER1_COLOR,
    PLAYER2_COLOR,
    PLAYER_BOTTOM_MARGIN,
    PLAYER_SIZE,
    PLAYER_TOP_MARGIN,
    WALL_THICKNESS,
)
from duel.entities import Controls, Player, Wall
from duel.geometry import Arena
from duel.logger import get_logger
from duel.powerup_system import PowerUpSystem
from duel.projectile_system import ProjectileSystem
from duel.rng_service import RNGService

log = get_logger("session")

PLAYER1_ID = 1
PLAYER2_ID = 2


def default_controls() -> Tuple[Controls, Controls]:
    from duel.settings import settings

    return settings.player_controls(1), settings.player_controls(2)


def build_walls(arena: Arena) -> List[Wall]:
    """One wall across the full arena width at vertical center."""
    return [Wall(0, arena.height / 2 - WALL_THICKNESS / 2, arena.width, WALL_THICKNESS)]


@dataclass
class Session:
    arena: Arena
    player1: Player
    player2: Player
    walls: List[Wall]
    projectiles: ProjectileSystem
    powerups: PowerUpSystem
    running: bool = True
    winner: Player | None = None
    tick_count: int = 0

    @property
    def players(self) -> Tuple[Player, Player]:
        return self.player1, self.player2

    @property
    def next_powerup_ms(self) -> float:
        return self.powerups.next_spawn_ms

    @classmethod
    def create(
        cls,
        arena: Arena,
        now_ms: int,
        rng: RNGService | None = None,
        controls: Tuple[Controls, Controls] | None = None,
    ) -> "Session":
        c1, c2 = controls if controls is not None else default_controls()
        spawn_x = arena.width / 2 - PLAYER_SIZE / 2
        # Player 1 starts at the bottom and fires up; player 2 mirrors it at the top.
        player1 = Player(PLAYER1_ID, spawn_x, arena.height - PLAYER_BOTTOM_MARGIN, PLAYER1_COLOR, c1, FIRE_UP)
        player2 = Player(PLAYER2_ID, spawn_x, PLAYER_TOP_MARGIN, PLAYER2_COLOR, c2, FIRE_DOWN)
        session = cls(
            arena=arena,
            player1=player1,
            player2=player2,
            walls=build_walls(arena),
            projectiles=ProjectileSystem(),
            powerups=PowerUpSystem(arena, rng or RNGService.get(), now_ms),
        )
        log.info(f"new session {arena.width}x{arena.height}")
        return session

    def finish(self) -> Player:
        """Stop the session and record the winner.

        Player 1 is checked first, so when both players reach zero in the
        same tick player 2 wins.
        """
        self.running = False
        self.winner = self.player2 if self.player1.health <= 0 else self.player1
        log.info(f"Player {self.winner.id} wins after {self.tick_count} ticks")
        return self.winner

    def winner_text(self) -> str:
        if self.winner is None:
            return ""
        return f"Player {self.winner.id} Wins!"


__all__ = ["Session", "build_walls", "default_controls", "PLAYER1_ID", "PLAYER2_ID"]
