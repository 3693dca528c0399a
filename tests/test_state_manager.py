import pygame
import pytest

from duel.constants import BULLET_SPEED, FIRE_DOWN
from duel.input_router import InputRouter, KeyState
from duel.renderer import restart_button_rect
from duel.state_manager import DuelState, GameOverState, State, StateManager, apply_transitions


class DummyState(State):
    def __init__(self, label: str, tracker: list):
        self.label = label
        self.name = label
        self.tracker = tracker

    def on_enter(self, previous):
        self.tracker.append(f"enter:{self.label}:{previous.label if previous else 'None'}")

    def on_exit(self, next_state):
        self.tracker.append(f"exit:{self.label}:{next_state.label if next_state else 'None'}")


class FakeClock:
    def __init__(self, start=0):
        self.now = start

    def __call__(self):
        return self.now


@pytest.fixture
def pygame_init():
    pygame.init()
    yield
    pygame.quit()


@pytest.fixture
def duel(arena, rng, controls):
    return DuelState(KeyState(), clock=FakeClock(), arena=arena, rng=rng, controls=controls)


def pump(sm, router, events, keys=None):
    if keys is not None:
        keys.process_events(events)
    sm.handle_actions(router.process(events, sm.current.name))
    sm.handle(events)
    sm.update(1 / 60)
    return apply_transitions(sm)


def knock_out_player_one(duel):
    s = duel.session
    p1, p2 = s.players
    p1.health = 10
    s.projectiles.spawn(p1.x + 25, p1.y + 25 - BULLET_SPEED, 0, FIRE_DOWN, p2.id)


def test_push_push_pop():
    sm = StateManager()
    t = []
    a = DummyState("A", t)
    b = DummyState("B", t)
    sm.push(a)
    sm.push(b)
    assert sm.stack_size() == 2
    assert sm.pop() is b
    assert sm.current is a
    assert t == ["enter:A:None", "enter:B:A", "exit:B:A"]


def test_set_replaces_stack():
    sm = StateManager()
    t = []
    a, b, c = DummyState("A", t), DummyState("B", t), DummyState("C", t)
    sm.push(a)
    sm.push(b)
    sm.set(c)
    assert sm.current is c
    assert sm.stack_size() == 1
    assert t == ["enter:A:None", "enter:B:A", "exit:B:C", "exit:A:None", "enter:C:None"]


def test_pop_empty_returns_none():
    assert StateManager().pop() is None


def test_duel_ticks_once_per_update(duel):
    sm = StateManager()
    sm.set(duel)
    sm.update(1 / 60)
    sm.update(1 / 60)
    assert duel.session.tick_count == 2
    assert duel.last_summary["tick"] == 2


def test_duel_reads_live_key_state(duel, controls):
    sm = StateManager()
    sm.set(duel)
    duel.keys.press(controls[0].right)
    sm.update(1 / 60)
    duel.keys.release(controls[0].right)
    sm.update(1 / 60)
    assert duel.session.player1.x == 380


def test_game_over_pushes_overlay_and_stops_ticking(pygame_init, duel):
    sm = StateManager()
    router = InputRouter()
    sm.set(duel)
    knock_out_player_one(duel)
    assert pump(sm, router, []) is True
    assert isinstance(sm.current, GameOverState)
    ticks = duel.session.tick_count
    pump(sm, router, [])
    assert duel.session.tick_count == ticks


def test_restart_after_game_over(pygame_init, duel):
    sm = StateManager()
    router = InputRouter()
    keys = duel.keys
    sm.set(duel)
    # Leave some debris behind.
    duel.session.projectiles.spawn(10, 100, 0, FIRE_DOWN, 1)
    from duel.entities import PowerUp

    duel.session.powerups.add(PowerUp(600, 100))
    knock_out_player_one(duel)
    pump(sm, router, [], keys)
    assert isinstance(sm.current, GameOverState)
    old = duel.session

    events = [pygame.event.Event(pygame.KEYDOWN, {"key": pygame.K_r})]
    assert pump(sm, router, events, keys) is True
    assert sm.current is duel
    assert duel.session is not old
    assert duel.matches_played == 1
    s = duel.session
    assert s.running
    assert s.player1.health == s.player2.health == 100
    assert len(s.projectiles) == 0
    assert len(s.powerups) == 0

    pump(sm, router, [], keys)
    assert s.tick_count == 1


def test_restart_button_click(pygame_init, duel, arena):
    sm = StateManager()
    router = InputRouter()
    sm.set(duel)
    knock_out_player_one(duel)
    pump(sm, router, [])
    assert isinstance(sm.current, GameOverState)

    miss = pygame.event.Event(pygame.MOUSEBUTTONDOWN, {"button": 1, "pos": (5, 5)})
    pump(sm, router, [miss])
    assert isinstance(sm.current, GameOverState)

    click = pygame.event.Event(pygame.MOUSEBUTTONDOWN, {"button": 1, "pos": restart_button_rect(arena).center})
    pump(sm, router, [click])
    assert sm.current is duel
    assert duel.session.running


def test_escape_quits_from_either_state(pygame_init, duel):
    sm = StateManager()
    router = InputRouter()
    sm.set(duel)
    esc = [pygame.event.Event(pygame.KEYDOWN, {"key": pygame.K_ESCAPE})]
    assert pump(sm, router, esc) is False

    duel.quit_requested = False
    knock_out_player_one(duel)
    pump(sm, router, [])
    assert isinstance(sm.current, GameOverState)
    # Escape on the overlay quits rather than restarting.
    assert pump(sm, router, esc) is False
    assert isinstance(sm.current, GameOverState)
