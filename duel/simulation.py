"""One simulation tick.

``tick(session, keys, now_ms)`` advances a running session by exactly one
step and never draws anything; the driver (``DuelState``) renders after
each tick and only schedules the next one while ``session.running``.

Order within a tick:
  1. power-up spawn timer
  2. player movement (player 1, then player 2)
  3. shooting (player 1, then player 2)
  4. bullet movement, arena exit and hits
  5. power-up pickups (player 1 has priority)
  6. game-over check
"""

from __future__ import annotations

from typing import Any, Dict, Mapping

from duel.session import Session


def tick(session: Session, keys: Mapping[int, bool], now_ms: int) -> Dict[str, Any]:
    """Advance ``session`` one step using a snapshot of the held keys.

    Returns a summary dict; a stopped session is left untouched.
    """
    if not session.running:
        return {"running": False, "winner": session.winner.id if session.winner else None}

    players = session.players

    spawned = session.powerups.maybe_spawn(now_ms)

    for player in players:
        player.move(keys, session.walls, session.arena)

    shots = 0
    for player in players:
        if player.shoot(keys, session.projectiles, now_ms) is not None:
            shots += 1

    bullet_summary = session.projectiles.update(players, session.arena)
    pickups = session.powerups.resolve_pickups(players)

    session.tick_count += 1
    if any(p.health <= 0 for p in players):
        session.finish()

    return {
        "tick": session.tick_count,
        "spawned_powerups": 1 if spawned is not None else 0,
        "shots": shots,
        "hits": bullet_summary["hits"],
        "removed_bullets": bullet_summary["removed"],
        "pickups": len(pickups),
        "bullets": len(session.projectiles),
        "powerups": len(session.powerups),
        "running": session.running,
        "winner": session.winner.id if session.winner else None,
    }


__all__ = ["tick"]
