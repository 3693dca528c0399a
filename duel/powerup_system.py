"""PowerUpSystem: timed spawning and pickup resolution.

A single spawn timer drops a health power-up at a random spot every
5-8 seconds. Pickups are checked against the players in order, so when
both overlap the same power-up in one tick the first player claims it.
"""

from __future__ import annotations

from typing import Callable, Dict, Iterator, List, Sequence

from duel.constants import (
    POWERUP_FIRST_SPAWN_MS,
    POWERUP_HEAL_AMOUNT,
    POWERUP_MARGIN,
    POWERUP_RESPAWN_JITTER_MS,
    POWERUP_RESPAWN_MIN_MS,
    POWERUP_SIZE,
)
from duel.entities import Player, PowerUp
from duel.geometry import Arena, intersects
from duel.logger import get_logger
from duel.rng_service import RNGService

log = get_logger("powerups")


def _apply_health(player: Player, powerup: PowerUp) -> None:
    player.heal(POWERUP_HEAL_AMOUNT)


# Effect handlers keyed by power-up type. Unknown types are consumed without effect.
EFFECTS: Dict[str, Callable[[Player, PowerUp], None]] = {
    "health": _apply_health,
}


class PowerUpSystem:
    def __init__(self, arena: Arena, rng: RNGService, now_ms: int) -> None:
        self.arena = arena
        self.rng = rng
        self._powerups: List[PowerUp] = []
        self.next_spawn_ms = now_ms + POWERUP_FIRST_SPAWN_MS

    def __len__(self) -> int:
        return len(self._powerups)

    def __iter__(self) -> Iterator[PowerUp]:
        return iter(self._powerups)

    def add(self, powerup: PowerUp) -> PowerUp:
        self._powerups.append(powerup)
        return powerup

    # --- Spawning ------------------------------------------------------------
    def random_position(self) -> tuple[float, float]:
        # Keeps the whole 20x20 square on screen.
        x = self.rng.uniform(POWERUP_MARGIN, self.arena.width - POWERUP_SIZE)
        y = self.rng.uniform(POWERUP_MARGIN, self.arena.height - POWERUP_SIZE)
        return x, y

    def maybe_spawn(self, now_ms: int) -> PowerUp | None:
        if now_ms < self.next_spawn_ms:
            return None
        x, y = self.random_position()
        powerup = self.add(PowerUp(x, y, "health"))
        self.next_spawn_ms = now_ms + POWERUP_RESPAWN_MIN_MS + self.rng.uniform(0, POWERUP_RESPAWN_JITTER_MS)
        log.debug(f"power-up spawned at ({x:.0f}, {y:.0f}); next at {self.next_spawn_ms:.0f}ms")
        return powerup

    # --- Pickups -------------------------------------------------------------
    def resolve_pickups(self, players: Sequence[Player]) -> List[tuple[int, PowerUp]]:
        """Apply and remove every power-up a player overlaps.

        Returns ``(player_id, powerup)`` pairs in collection order.
        """
        collected: List[tuple[int, PowerUp]] = []
        remaining: List[PowerUp] = []
        for powerup in self._powerups:
            claimer = next((p for p in players if intersects(p.rect(), powerup.rect())), None)
            if claimer is None:
                remaining.append(powerup)
                continue
            effect = EFFECTS.get(powerup.type)
            if effect is not None:
                effect(claimer, powerup)
            else:
                log.debug(f"power-up type {powerup.type!r} has no effect")
            collected.append((claimer.id, powerup))
            log.debug(f"Player {claimer.id} collected {powerup.type} (health {claimer.health})")
        self._powerups = remaining
        return collected


__all__ = ["PowerUpSystem", "EFFECTS"]
