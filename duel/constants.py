"""Gameplay and tuning constants.

Centralizes numeric tuning values so entities, systems and tests share
one source of truth. Times are milliseconds, distances pixels, speeds
pixels per tick.
"""

# Arena (defaults; settings may override at startup)
ARENA_WIDTH = 800
ARENA_HEIGHT = 600
TARGET_FPS = 60

# Players
PLAYER_SIZE = 50  # square avatar edge length
PLAYER_SPEED = 5  # pixels per tick per axis
PLAYER_MAX_HEALTH = 100
SHOOT_DELAY_MS = 300  # minimum gap between two shots
PLAYER_BOTTOM_MARGIN = 70  # player 1 spawn y = arena height - this
PLAYER_TOP_MARGIN = 20  # player 2 spawn y
FIRE_UP = -1
FIRE_DOWN = 1

# Bullets
BULLET_RADIUS = 5
BULLET_SPEED = 7
BULLET_DRIFT = 0.5  # horizontal intent multiplier applied to dx
BULLET_DAMAGE = 10

# Power-ups
POWERUP_SIZE = 20
POWERUP_MARGIN = 10  # min distance from the top/left arena edge
POWERUP_HEAL_AMOUNT = 20
POWERUP_FIRST_SPAWN_MS = 5000
POWERUP_RESPAWN_MIN_MS = 5000
POWERUP_RESPAWN_JITTER_MS = 3000

# Wall
WALL_THICKNESS = 20

# Colors
WALL_COLOR = "#888888"
HEALTH_POWERUP_COLOR = "#0000ff"
OTHER_POWERUP_COLOR = "#ffff00"
BULLET_COLOR = "#ffff00"
PLAYER1_COLOR = "#00ff00"
PLAYER2_COLOR = "#ff0000"
TEXT_COLOR = "#ffffff"
BACKGROUND_COLOR = "#000000"
OVERLAY_COLOR = (0, 0, 0, 160)
BUTTON_COLOR = "#2c8c99"

# HUD
HUD_FONT_SIZE = 26
BANNER_FONT_SIZE = 52

__all__ = [name for name in globals().keys() if name.isupper()]
