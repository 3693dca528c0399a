import json
import os

import pygame

from duel.constants import ARENA_HEIGHT, ARENA_WIDTH, TARGET_FPS
from duel.entities import Controls
from duel.geometry import Arena
from duel.logger import get_logger

log = get_logger("settings")

ACTIONS = ("up", "down", "left", "right", "shoot")


class Settings:
    """Startup configuration.

    Defaults live here; an optional JSON file (``DUEL_SETTINGS_FILE``,
    default ``data/settings.json``) may override any of them. The file is
    only read, never written.
    """

    DEFAULT_FILE = "data/settings.json"

    def __init__(self, path: str | None = None):
        self.settings_file = path or os.environ.get("DUEL_SETTINGS_FILE", self.DEFAULT_FILE)
        self.arena_width = ARENA_WIDTH
        self.arena_height = ARENA_HEIGHT
        self.fps = TARGET_FPS
        self.caption = "Wall Duel"
        # Key bindings use pygame key integers, same as the JSON file.
        self.key_bindings = {
            "player1": {
                "up": pygame.K_w,
                "down": pygame.K_s,
                "left": pygame.K_a,
                "right": pygame.K_d,
                "shoot": pygame.K_SPACE,
            },
            "player2": {
                "up": pygame.K_UP,
                "down": pygame.K_DOWN,
                "left": pygame.K_LEFT,
                "right": pygame.K_RIGHT,
                "shoot": pygame.K_RETURN,
            },
            "app": {
                "quit": [pygame.K_ESCAPE],
            },
        }
        self.load_settings()

    @property
    def arena(self) -> Arena:
        return Arena(self.arena_width, self.arena_height)

    def player_controls(self, player_id: int) -> Controls:
        return Controls.from_mapping(self.key_bindings[f"player{player_id}"])

    def load_settings(self):
        """Apply overrides from the settings file if it exists.

        Bad values are logged and skipped; the defaults stay in place.
        """
        if not os.path.exists(self.settings_file):
            return
        try:
            with open(self.settings_file, "r") as f:
                data = json.load(f)
        except (json.JSONDecodeError, IOError) as e:
            log.warn("Error loading settings; using defaults", e)
            return
        if not isinstance(data, dict):
            log.warn("Ignoring settings file without a top-level object:", self.settings_file)
            return

        for name in ("arena_width", "arena_height", "fps"):
            if name not in data:
                continue
            try:
                value = int(data[name])
            except (TypeError, ValueError, OverflowError):
                log.warn("Invalid setting; keeping default", f"{name}={data[name]!r}")
                continue
            if value <= 0:
                log.warn("Invalid setting; keeping default", f"{name}={value}")
                continue
            setattr(self, name, value)
        if "caption" in data:
            self.caption = str(data["caption"])

        # Merge bindings per player so a file may override a single key.
        loaded_bindings = data.get("key_bindings", {})
        if not isinstance(loaded_bindings, dict):
            log.warn("Ignoring key_bindings that is not an object")
            loaded_bindings = {}
        for section, binds in loaded_bindings.items():
            if section not in self.key_bindings or not isinstance(binds, dict):
                log.warn("Unknown key binding section", section)
                continue
            for action, key in binds.items():
                if section.startswith("player"):
                    if action not in ACTIONS:
                        log.warn("Unknown action", f"{section}.{action}")
                        continue
                    if not _is_key_code(key):
                        log.warn("Invalid key code", f"{section}.{action}={key!r}")
                        continue
                elif action not in self.key_bindings[section]:
                    log.warn("Unknown action", f"{section}.{action}")
                    continue
                elif not isinstance(key, list) or not all(_is_key_code(k) for k in key):
                    log.warn("Expected a list of key codes", f"{section}.{action}={key!r}")
                    continue
                self.key_bindings[section][action] = key
        log.debug("Settings loaded from", self.settings_file)


def _is_key_code(value) -> bool:
    # bool is an int subclass but never a key code.
    return isinstance(value, int) and not isinstance(value, bool)


settings = Settings()
