"""ProjectileSystem.

Owns every live bullet and resolves their per-tick movement, arena exit
and hits against the opposing player. Rendering is not done here; the
Renderer iterates the system and asks each bullet to draw itself.

Public API:
    spawn(x, y, dx, dy, owner_id) -> Bullet
    update(players, arena) -> summary dict
    iter() / len() -> active bullets (for rendering and tests)

Resolution rules, per bullet in spawn order:
  * Advance by (dx * speed, dy * speed).
  * Center outside the arena (any coordinate < 0 or > extent): removed,
    nothing else is checked for that bullet this tick.
  * Center strictly inside the non-owning player's rectangle: that
    player loses BULLET_DAMAGE health and the bullet is removed.

Bullets pass through walls.
"""

from __future__ import annotations

from typing import Any, Dict, Iterator, List, Sequence

from duel.constants import BULLET_DAMAGE
from duel.entities import Bullet, Player
from duel.geometry import Arena, point_inside
from duel.logger import get_logger

log = get_logger("projectiles")


def opponent_of(owner_id: int, players: Sequence[Player]) -> Player | None:
    """Return the player a bullet owned by ``owner_id`` can hit."""
    for p in players:
        if p.id != owner_id:
            return p
    return None


class ProjectileSystem:
    def __init__(self) -> None:
        self._bullets: List[Bullet] = []

    # --- Collection Protocol -------------------------------------------------
    def __len__(self) -> int:
        return len(self._bullets)

    def __iter__(self) -> Iterator[Bullet]:
        return iter(self._bullets)

    # --- API -----------------------------------------------------------------
    def spawn(self, x: float, y: float, dx: float, dy: float, owner_id: int) -> Bullet:
        bullet = Bullet(x, y, dx, dy, owner_id)
        self._bullets.append(bullet)
        return bullet

    # --- Simulation ----------------------------------------------------------
    def update(self, players: Sequence[Player], arena: Arena) -> Dict[str, Any]:
        """Advance all bullets one tick and resolve exits and hits.

        Returns a summary dict for instrumentation / tests.
        """
        out_of_bounds = 0
        hits: Dict[int, int] = {}
        survivors: List[Bullet] = []
        for bullet in self._bullets:
            bullet.update()
            if not arena.contains(bullet.x, bullet.y):
                out_of_bounds += 1
                continue
            target = opponent_of(bullet.owner_id, players)
            if target is not None and point_inside(bullet.x, bullet.y, target.rect()):
                target.take_damage(BULLET_DAMAGE)
                hits[target.id] = hits.get(target.id, 0) + 1
                log.debug(f"Player {bullet.owner_id} hit Player {target.id} (health {target.health})")
                continue
            survivors.append(bullet)
        self._bullets = survivors

        total_hits = sum(hits.values())
        return {
            "removed": out_of_bounds + total_hits,
            "out_of_bounds": out_of_bounds,
            "hits": total_hits,
            "hits_by_target": hits,
            "active": len(self._bullets),
        }


__all__ = ["ProjectileSystem", "opponent_of"]
