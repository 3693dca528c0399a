import os
import sys
from pathlib import Path

import pytest

# Ensure repository root is on sys.path for module imports (app, duel)
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Headless / test mode environment variables
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("DUEL_TESTING", "1")
os.environ.setdefault("DUEL_SETTINGS_FILE", str(ROOT / "tests" / "no-such-settings.json"))


@pytest.fixture
def arena():
    from duel.geometry import Arena

    return Arena(800, 600)


@pytest.fixture
def rng():
    from duel.rng_service import RNGService

    return RNGService(1234)


@pytest.fixture
def controls():
    import pygame

    from duel.entities import Controls

    p1 = Controls(pygame.K_w, pygame.K_s, pygame.K_a, pygame.K_d, pygame.K_SPACE)
    p2 = Controls(pygame.K_UP, pygame.K_DOWN, pygame.K_LEFT, pygame.K_RIGHT, pygame.K_RETURN)
    return p1, p2


@pytest.fixture
def session(arena, rng, controls):
    from duel.session import Session

    return Session.create(arena, now_ms=0, rng=rng, controls=controls)
