"""Arena entities: walls, power-ups, bullets and the two player avatars.

Entities are plain dataclasses. They do not inherit from a common base;
each exposes ``rect()`` returning a :class:`~duel.geometry.Bounds` for
collision queries and ``render(surf)`` issuing pygame draw calls.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping

import pygame

from duel.constants import (
    BULLET_COLOR,
    BULLET_DRIFT,
    BULLET_RADIUS,
    BULLET_SPEED,
    FIRE_UP,
    HEALTH_POWERUP_COLOR,
    OTHER_POWERUP_COLOR,
    PLAYER_MAX_HEALTH,
    PLAYER_SIZE,
    PLAYER_SPEED,
    POWERUP_SIZE,
    SHOOT_DELAY_MS,
    WALL_COLOR,
)
from duel.geometry import Arena, Bounds, clamp, intersects

KeyMap = Mapping[int, bool]


def _held(keys: KeyMap, code: int) -> bool:
    return bool(keys.get(code, False))


@dataclass(frozen=True)
class Wall:
    x: float
    y: float
    width: float
    height: float
    color: str = WALL_COLOR

    def rect(self) -> Bounds:
        return Bounds(self.x, self.y, self.width, self.height)

    def render(self, surf: pygame.Surface) -> None:
        pygame.draw.rect(surf, pygame.Color(self.color), self.rect())


@dataclass
class PowerUp:
    x: float
    y: float
    type: str = "health"
    size: int = POWERUP_SIZE

    @property
    def color(self) -> str:
        return HEALTH_POWERUP_COLOR if self.type == "health" else OTHER_POWERUP_COLOR

    def rect(self) -> Bounds:
        return Bounds(self.x, self.y, self.size, self.size)

    def render(self, surf: pygame.Surface) -> None:
        pygame.draw.rect(surf, pygame.Color(self.color), self.rect())


@dataclass
class Bullet:
    x: float
    y: float
    dx: float
    dy: float
    owner_id: int
    radius: int = BULLET_RADIUS
    speed: float = BULLET_SPEED

    def update(self) -> None:
        self.x += self.dx * self.speed
        self.y += self.dy * self.speed

    def rect(self) -> Bounds:
        return Bounds(self.x - self.radius, self.y - self.radius, self.radius * 2, self.radius * 2)

    def render(self, surf: pygame.Surface) -> None:
        pygame.draw.circle(surf, pygame.Color(BULLET_COLOR), (self.x, self.y), self.radius)


@dataclass(frozen=True)
class Controls:
    """Key codes driving one player's five actions."""

    up: int
    down: int
    left: int
    right: int
    shoot: int

    @classmethod
    def from_mapping(cls, binds: Mapping[str, int]) -> "Controls":
        return cls(binds["up"], binds["down"], binds["left"], binds["right"], binds["shoot"])


@dataclass
class Player:
    id: int
    x: float
    y: float
    color: str
    controls: Controls
    fire_direction: int  # FIRE_UP (-1) or FIRE_DOWN (+1), fixed per player
    width: int = PLAYER_SIZE
    height: int = PLAYER_SIZE
    speed: int = PLAYER_SPEED
    shoot_delay_ms: int = SHOOT_DELAY_MS
    health: int = PLAYER_MAX_HEALTH
    last_shot_ms: int | None = None
    last_horizontal_intent: int = 0
    max_health: int = field(default=PLAYER_MAX_HEALTH, repr=False)

    def rect(self) -> Bounds:
        return Bounds(self.x, self.y, self.width, self.height)

    @property
    def alive(self) -> bool:
        return self.health > 0

    # --- Health -------------------------------------------------------------
    def take_damage(self, amount: int) -> None:
        self.health = int(clamp(self.health - amount, 0, self.max_health))

    def heal(self, amount: int) -> None:
        self.health = int(clamp(self.health + amount, 0, self.max_health))

    # --- Movement -----------------------------------------------------------
    def move(self, keys: KeyMap, walls, arena: Arena) -> None:
        """Move one tick, resolving each axis against the arena then the walls.

        X is resolved first using the old Y, then Y using the resolved X, so
        a diagonal blocked on one axis still slides along the other.
        """
        c = self.controls
        intent_x = int(_held(keys, c.right)) - int(_held(keys, c.left))
        intent_y = int(_held(keys, c.down)) - int(_held(keys, c.up))
        self.last_horizontal_intent = intent_x

        new_x = clamp(self.x + intent_x * self.speed, 0, arena.width - self.width)
        if any(intersects(Bounds(new_x, self.y, self.width, self.height), w.rect()) for w in walls):
            new_x = self.x

        new_y = clamp(self.y + intent_y * self.speed, 0, arena.height - self.height)
        if any(intersects(Bounds(new_x, new_y, self.width, self.height), w.rect()) for w in walls):
            new_y = self.y

        self.x, self.y = new_x, new_y

    # --- Shooting -----------------------------------------------------------
    def can_shoot(self, now_ms: int) -> bool:
        return self.last_shot_ms is None or now_ms - self.last_shot_ms > self.shoot_delay_ms

    def shoot(self, keys: KeyMap, projectiles, now_ms: int) -> Bullet | None:
        """Fire one bullet if the shoot key is held and the cooldown elapsed.

        ``projectiles`` is anything with a ``spawn(x, y, dx, dy, owner_id)``
        method (normally the session's ``ProjectileSystem``).
        """
        if not _held(keys, self.controls.shoot) or not self.can_shoot(now_ms):
            return None
        bx = self.x + self.width / 2
        by = self.y if self.fire_direction == FIRE_UP else self.y + self.height
        bullet = projectiles.spawn(bx, by, self.last_horizontal_intent * BULLET_DRIFT, self.fire_direction, self.id)
        self.last_shot_ms = now_ms
        return bullet

    def render(self, surf: pygame.Surface) -> None:
        pygame.draw.rect(surf, pygame.Color(self.color), self.rect())


__all__ = ["Wall", "PowerUp", "Bullet", "Controls", "Player", "KeyMap"]
