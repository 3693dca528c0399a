"""Seedable random source for gameplay (power-up placement and timing).

Wraps a private ``random.Random`` so gameplay randomness never shares
state with the global ``random`` module. ``DUEL_SEED`` seeds the shared
instance for reproducible sessions.
"""

from __future__ import annotations

import os
import random

from duel.logger import get_logger

log = get_logger("rng")

Seed = int | float | str | bytes | bytearray | None


def _env_seed() -> Seed:
    raw = os.environ.get("DUEL_SEED")
    if raw is None or raw == "":
        return None
    try:
        return int(raw)
    except ValueError:
        return raw


class RNGService:
    _instance: "RNGService | None" = None

    def __init__(self, seed: Seed = None):
        self._generator = random.Random(seed)
        self.seed_value = seed
        log.debug(f"RNG initialized with seed: {seed!r}")

    @classmethod
    def get(cls) -> "RNGService":
        if cls._instance is None:
            cls._instance = cls(_env_seed())
        return cls._instance

    @classmethod
    def initialize(cls, seed: Seed = None) -> "RNGService":
        cls._instance = cls(seed)
        return cls._instance

    def seed(self, a: Seed = None) -> None:
        self.seed_value = a
        self._generator.seed(a)
        log.debug(f"RNG re-seeded: {a!r}")

    def random(self) -> float:
        return self._generator.random()

    def uniform(self, a: float, b: float) -> float:
        """Random float N with a <= N <= b."""
        return self._generator.uniform(a, b)


__all__ = ["RNGService"]
