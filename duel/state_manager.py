"""State stack driving the application.

Two states:

* ``DuelState`` owns the current ``Session`` and is the simulation
  driver: each frame it calls ``tick`` once with a key snapshot and the
  wall clock, and stops calling it as soon as the session reports it is
  no longer running.
* ``GameOverState`` is pushed on top when a session ends. Any keypress
  or a click on the Restart button requests a restart; popping it and
  calling ``DuelState.restart()`` starts a fresh session.

Usage (see ``app.py``):

    sm = StateManager()
    sm.set(DuelState(keys))
    while running:
        events = pygame.event.get()
        keys.process_events(events)
        sm.handle_actions(router.process(events, sm.current.name))
        sm.handle(events)
        sm.update(dt)
        running = apply_transitions(sm)
        sm.render(screen)
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Sequence, Tuple

import pygame

from duel.entities import Controls
from duel.geometry import Arena
from duel.input_router import KeyState
from duel.logger import get_logger
from duel.renderer import Renderer, restart_button_rect
from duel.rng_service import RNGService
from duel.session import Session
from duel.simulation import tick

_state_log = get_logger("state")

Clock = Callable[[], int]


class State:
    """Base class for an application state. All hooks default to no-ops."""

    name: str = "State"
    manager: "StateManager | None" = None

    # Lifecycle -----------------------------------------------------
    def on_enter(self, previous: "State | None") -> None:  # pragma: no cover - default no-op
        pass

    def on_exit(self, next_state: "State | None") -> None:  # pragma: no cover - default no-op
        pass

    # Main loop hooks -----------------------------------------------
    def handle(self, events: Sequence[pygame.event.Event]) -> None:  # pragma: no cover - default no-op
        pass

    def handle_actions(self, actions: Sequence[str]) -> None:  # pragma: no cover - default no-op
        pass

    def update(self, dt: float) -> None:  # pragma: no cover - default no-op
        pass

    def render(self, surface: pygame.Surface) -> None:  # pragma: no cover - default no-op
        pass


class StateManager:
    """Stack-based state manager; only the top state receives loop callbacks."""

    def __init__(self) -> None:
        self._stack: List[State] = []

    # Introspection -------------------------------------------------
    @property
    def current(self) -> State | None:
        return self._stack[-1] if self._stack else None

    def stack_size(self) -> int:
        return len(self._stack)

    # Transitions ---------------------------------------------------
    def push(self, state: State) -> None:
        state.manager = self
        prev = self.current
        self._stack.append(state)
        state.on_enter(prev)
        _state_log.debug("push", state.name, "-> stack:", [s.name for s in self._stack])

    def pop(self) -> State | None:
        if not self._stack:
            return None
        top = self._stack.pop()
        top.on_exit(self.current)
        _state_log.debug("pop", top.name, "-> stack:", [s.name for s in self._stack])
        return top

    def set(self, state: State) -> None:
        state.manager = self
        while self._stack:
            popped = self._stack.pop()
            popped.on_exit(None if not self._stack else state)
        self._stack.append(state)
        state.on_enter(None)
        _state_log.debug("set", state.name, "(root)")

    # Loop dispatch -------------------------------------------------
    def handle(self, events: Sequence[pygame.event.Event]) -> None:
        if self.current:
            self.current.handle(events)

    def handle_actions(self, actions: Sequence[str]) -> None:
        if self.current:
            if actions:
                _state_log.debug("actions ->", self.current.name, actions)
            self.current.handle_actions(actions)

    def update(self, dt: float) -> None:
        if self.current:
            self.current.update(dt)

    def render(self, surface: pygame.Surface) -> None:
        if self.current:
            self.current.render(surface)


class DuelState(State):
    name = "DuelState"

    def __init__(
        self,
        keys: KeyState,
        clock: Clock | None = None,
        arena: Arena | None = None,
        rng: RNGService | None = None,
        controls: Tuple[Controls, Controls] | None = None,
    ) -> None:
        from duel.settings import settings

        self.keys = keys
        self.clock: Clock = clock or pygame.time.get_ticks
        self.arena = arena or settings.arena
        self.rng = rng or RNGService.get()
        self.controls = controls
        self.renderer = Renderer()
        self.quit_requested = False
        self.last_summary: Dict[str, Any] = {}
        self.matches_played = 0
        self.session: Session = self._new_session()

    def _new_session(self) -> Session:
        return Session.create(self.arena, self.clock(), self.rng, self.controls)

    @property
    def game_over(self) -> bool:
        return not self.session.running

    def restart(self) -> Session:
        """Replace the session with a fresh one and resume ticking."""
        self.matches_played += 1
        self.session = self._new_session()
        self.last_summary = {}
        _state_log.info("restart -> match", self.matches_played + 1)
        return self.session

    def handle_actions(self, actions: Sequence[str]) -> None:
        self.quit_requested = "quit" in actions

    def update(self, dt: float) -> None:
        if not self.session.running:
            return
        self.last_summary = tick(self.session, self.keys.snapshot(), self.clock())

    def render(self, surface: pygame.Surface) -> None:
        self.renderer.render(self.session, surface)


class GameOverState(State):
    name = "GameOverState"

    def __init__(self, duel: DuelState) -> None:
        self.duel = duel
        self.restart_requested = False
        self.quit_requested = False

    def on_enter(self, previous: "State | None") -> None:
        _state_log.info(self.duel.session.winner_text())

    def handle_actions(self, actions: Sequence[str]) -> None:
        for act in actions:
            if act == "quit":
                self.quit_requested = True
            elif act == "restart":
                self.restart_requested = True

    def handle(self, events: Sequence[pygame.event.Event]) -> None:
        button = restart_button_rect(self.duel.arena)
        for e in events:
            if e.type == pygame.MOUSEBUTTONDOWN and getattr(e, "button", None) == 1:
                if button.collidepoint(e.pos):
                    self.restart_requested = True

    def render(self, surface: pygame.Surface) -> None:
        # The duel renderer already draws the overlay for a stopped session.
        self.duel.render(surface)


def apply_transitions(sm: StateManager) -> bool:
    """React to flags raised by the current state.

    Returns False once the application should exit.
    """
    cur = sm.current
    if getattr(cur, "quit_requested", False):
        return False
    if isinstance(cur, DuelState) and cur.game_over:
        sm.push(GameOverState(cur))
    elif isinstance(cur, GameOverState) and cur.restart_requested:
        sm.pop()
        cur.duel.restart()
    return True


__all__ = ["State", "StateManager", "DuelState", "GameOverState", "apply_transitions"]
