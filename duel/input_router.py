"""Input handling.

Two pieces:

* ``KeyState`` is the live keys-pressed map. It is fed every KEYDOWN /
  KEYUP event (whatever state is active, so releases during the
  game-over overlay are not lost) and the simulation reads a snapshot of
  it once per tick.
* ``InputRouter`` turns one-shot events into semantic actions for the
  active state ("quit", "restart"), processed in rule declaration order.
"""

from __future__ import annotations

from typing import Callable, Dict, Iterable, List

import pygame

from duel.logger import get_logger

log = get_logger("input")

Action = str
Rule = Callable[[pygame.event.Event], Action | None]


class KeyState:
    """Mapping of pygame key code -> pressed, updated from events."""

    def __init__(self) -> None:
        self._pressed: Dict[int, bool] = {}

    def process_events(self, events: Iterable[pygame.event.Event]) -> None:
        for e in events:
            if e.type == pygame.KEYDOWN:
                log.debug("Key down:", e.key)
                self._pressed[e.key] = True
            elif e.type == pygame.KEYUP:
                log.debug("Key up:", e.key)
                self._pressed[e.key] = False

    def press(self, key: int) -> None:
        self._pressed[key] = True

    def release(self, key: int) -> None:
        self._pressed[key] = False

    def get(self, key: int, default: bool = False) -> bool:
        return self._pressed.get(key, default)

    def snapshot(self) -> Dict[int, bool]:
        return dict(self._pressed)


def _key_rule(key: int, action: Action, event_type=pygame.KEYDOWN) -> Rule:
    def _r(e: pygame.event.Event):
        if e.type == event_type and getattr(e, "key", None) == key:
            return action
        return None

    return _r


def _any_key_rule(action: Action) -> Rule:
    def _r(e: pygame.event.Event):
        return action if e.type == pygame.KEYDOWN else None

    return _r


class InputRouter:
    """Maps pygame events to semantic actions for the active state."""

    def __init__(self) -> None:
        self._rules: Dict[str, List[Rule]] = {}
        self._register_default_rules()

    def _register_default_rules(self) -> None:
        from duel.settings import settings

        quit_rules = [_key_rule(k, "quit") for k in settings.key_bindings["app"]["quit"]]

        self._rules.update(
            {
                "DuelState": list(quit_rules),
                # Quit keys win over the catch-all restart rule.
                "GameOverState": quit_rules + [_any_key_rule("restart")],
            }
        )

    def register_rules(self, state_name: str, rules: Iterable[Rule], append: bool = True) -> None:
        lst = self._rules.setdefault(state_name, [])
        if append:
            lst.extend(rules)
        else:
            self._rules[state_name] = list(rules)

    def process(self, events: Iterable[pygame.event.Event], state_name: str) -> List[Action]:
        rules = self._rules.get(state_name, [])
        actions: List[Action] = []
        for e in events:
            for rule in rules:
                a = rule(e)
                if a:
                    if a not in actions:  # de-duplicate per frame
                        actions.append(a)
                    break  # first matching rule wins for this event
        return actions


__all__ = ["InputRouter", "KeyState", "Action"]
