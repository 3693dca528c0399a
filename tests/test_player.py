import random

import pygame
import pytest

from duel.constants import FIRE_DOWN, FIRE_UP, SHOOT_DELAY_MS
from duel.entities import Player, Wall
from duel.projectile_system import ProjectileSystem
from duel.session import build_walls


def make_player(controls, x=100, y=300, fire=FIRE_UP, pid=1):
    return Player(pid, x, y, "#00ff00", controls, fire)


def keys_for(c, *actions):
    return {getattr(c, a): True for a in actions}


def test_move_right_by_speed(controls, arena):
    c = controls[0]
    p = make_player(c)
    p.move(keys_for(c, "right"), [], arena)
    assert (p.x, p.y) == (105, 300)
    assert p.last_horizontal_intent == 1


def test_opposite_keys_cancel(controls, arena):
    c = controls[0]
    p = make_player(c)
    p.move(keys_for(c, "left", "right", "up", "down"), [], arena)
    assert (p.x, p.y) == (100, 300)
    assert p.last_horizontal_intent == 0


def test_move_stays_inside_arena_for_random_input(controls, arena):
    c = controls[0]
    p = make_player(c, x=3, y=arena.height - 52)
    walls = build_walls(arena)
    rnd = random.Random(99)
    actions = ["up", "down", "left", "right"]
    for _ in range(2000):
        pressed = [a for a in actions if rnd.random() < 0.5]
        p.move(keys_for(c, *pressed), walls, arena)
        assert p.x >= 0 and p.y >= 0
        assert p.x + p.width <= arena.width
        assert p.y + p.height <= arena.height


def test_corner_clamps_instead_of_overshooting(controls, arena):
    c = controls[0]
    p = make_player(c, x=2, y=3)
    p.move(keys_for(c, "left", "up"), [], arena)
    assert (p.x, p.y) == (0, 0)


def test_diagonal_slides_along_blocking_wall(controls, arena):
    c = controls[0]
    wall = Wall(100, 0, 20, arena.height)
    p = make_player(c, x=50, y=300)  # right edge touches the wall's left edge
    p.move(keys_for(c, "up", "right"), [wall], arena)
    assert p.x == 50  # horizontal blocked
    assert p.y == 295  # vertical still applied


def test_vertical_block_still_moves_horizontally(controls, arena):
    c = controls[0]
    walls = build_walls(arena)  # y = 290..310
    p = make_player(c, x=200, y=310)
    p.move(keys_for(c, "up", "left"), walls, arena)
    assert p.y == 310
    assert p.x == 195


def test_players_cannot_cross_the_center_wall(controls, arena):
    c = controls[0]
    walls = build_walls(arena)
    p = make_player(c, x=375, y=530)
    for _ in range(200):
        p.move(keys_for(c, "up"), walls, arena)
    assert p.y == 310


def test_shoot_requires_key(controls):
    c = controls[0]
    p = make_player(c)
    ps = ProjectileSystem()
    assert p.shoot({}, ps, 1000) is None
    assert len(ps) == 0


def test_shoot_cooldown(controls):
    c = controls[0]
    p = make_player(c)
    ps = ProjectileSystem()
    held = keys_for(c, "shoot")
    assert p.shoot(held, ps, 1000) is not None
    assert p.shoot(held, ps, 1000 + 100) is None
    assert p.shoot(held, ps, 1000 + SHOOT_DELAY_MS) is None
    assert len(ps) == 1
    assert p.shoot(held, ps, 1000 + SHOOT_DELAY_MS + 1) is not None
    assert len(ps) == 2


def test_first_shot_allowed_right_after_start(controls):
    c = controls[0]
    p = make_player(c)
    ps = ProjectileSystem()
    assert p.shoot(keys_for(c, "shoot"), ps, 0) is not None


@pytest.mark.parametrize("fire,expected_y", [(FIRE_UP, 300), (FIRE_DOWN, 350)])
def test_bullet_spawns_at_center_of_firing_edge(controls, fire, expected_y):
    c = controls[0]
    p = make_player(c, x=100, y=300, fire=fire)
    b = p.shoot(keys_for(c, "shoot"), ProjectileSystem(), 0)
    assert (b.x, b.y) == (125, expected_y)
    assert b.dy == fire
    assert b.owner_id == p.id


def test_bullet_drift_follows_last_horizontal_intent(controls, arena):
    c = controls[0]
    p = make_player(c)
    p.move(keys_for(c, "left"), [], arena)
    b = p.shoot(keys_for(c, "shoot", "left"), ProjectileSystem(), 0)
    assert b.dx == -0.5
    assert b.dy == FIRE_UP


def test_health_is_clamped(controls):
    p = make_player(controls[0])
    p.health = 95
    p.heal(20)
    assert p.health == 100
    p.health = 5
    p.take_damage(10)
    assert p.health == 0
    assert not p.alive


def test_player_render_draws_its_color(controls):
    surf = pygame.Surface((200, 400))
    p = make_player(controls[0], x=10, y=10)
    p.render(surf)
    assert surf.get_at((30, 30)) == pygame.Color(p.color)
