"""Lightweight leveled logging.

Each logger prints ``[HH:MM:SS] LEVEL name: message`` lines. The minimum
level comes from ``DUEL_LOG_LEVEL`` (DEBUG, INFO, WARN, ERROR) and can be
lowered per logger, e.g. to see key events while tuning controls.
"""

from __future__ import annotations

import os
import sys
import time
from dataclasses import dataclass, field
from typing import TextIO

LEVELS = {"DEBUG": 10, "INFO": 20, "WARN": 30, "ERROR": 40}


def _env_level() -> int:
    return LEVELS.get(os.environ.get("DUEL_LOG_LEVEL", "INFO").upper(), LEVELS["INFO"])


@dataclass
class Logger:
    name: str
    stream: TextIO | None = sys.stdout
    min_level: int = field(default_factory=_env_level)

    def enabled_for(self, level: str) -> bool:
        return LEVELS[level] >= self.min_level

    def _log(self, level: str, *parts):
        if not self.enabled_for(level) or self.stream is None:
            return
        ts = time.strftime("%H:%M:%S")
        msg = " ".join(str(p) for p in parts)
        try:
            self.stream.write(f"[{ts}] {level:<5} {self.name}: {msg}\n")
            self.stream.flush()
        except (OSError, ValueError):
            # Closed or detached stream (pythonw, redirected consoles).
            return

    def debug(self, *parts):
        self._log("DEBUG", *parts)

    def info(self, *parts):
        self._log("INFO", *parts)

    def warn(self, *parts):
        self._log("WARN", *parts)

    def error(self, *parts):
        self._log("ERROR", *parts)


def get_logger(name: str = "duel") -> Logger:
    return Logger(name)


__all__ = ["get_logger", "Logger", "LEVELS"]
