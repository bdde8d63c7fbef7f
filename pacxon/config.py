"""
Game constants, enums and tunable configuration for Pacxon.

All timing values are either in ticks (one ``update()`` call) or in
milliseconds of the game clock, as noted per field.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, Tuple


# ============================================================================
# ENUMS
# ============================================================================

class Scene(IntEnum):
    """Top-level mode of a game session."""
    TITLE = 0
    HOW_TO_PLAY = 1
    LEVEL_TRANSITION = 2
    PLAYING = 3
    NAME_ENTRY = 4


class Direction(IntEnum):
    """Cardinal movement directions."""
    UP = 0
    DOWN = 1
    LEFT = 2
    RIGHT = 3

    @property
    def delta(self) -> Tuple[int, int]:
        """Unit step as (dx, dy)."""
        return DIRECTION_DELTAS[self]

    @classmethod
    def parse(cls, value):
        """
        Coerce a Direction, its name or its value into a Direction.

        Returns None for anything unrecognized so callers can ignore it.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            return cls.__members__.get(value.upper())
        try:
            return cls(value)
        except (ValueError, TypeError):
            return None


DIRECTION_DELTAS: Dict[Direction, Tuple[int, int]] = {
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
}

WHITE = (255, 255, 255)
BLACK = (0, 0, 0)


# ============================================================================
# CONFIGURATION
# ============================================================================

@dataclass
class GameConfig:
    """Configuration settings for grid dimensions, difficulty and timing."""

    # Grid and display settings
    GRID_WIDTH: int = 84
    GRID_HEIGHT: int = 28
    FPS: int = 15
    WINDOW_SCALE: float = 1.0
    DOT_SIZE: int = 8
    DOT_SPACING: int = 2
    BRIGHTNESS_THRESHOLD: int = 127

    # Game mechanics
    WIN_PCT: int = 80
    PERFECT_CLEAR_PCT: int = 95
    START_LIVES: int = 3
    MAX_LIVES: int = 9
    BONUS_LIFE_INTERVAL: int = 3
    PLAYER_MOVE_INTERVAL: int = 2          # Ticks between player steps
    SPEED_INCREMENT: float = 0.05          # Enemy speed gain per level
    FREEZE_DURATION: int = 135             # Ticks (9 seconds at 15 FPS)
    POWERUP_MIN_LEVEL: int = 3
    POWERUP_SPAWN_ATTEMPTS: int = 100

    # Blink counters (ticks)
    FLASH_INTERVAL_TICKS: int = 15
    PLAYER_BLINK_TICKS: int = 8
    POWERUP_BLINK_INTERVAL: int = 10

    # Scene timing (milliseconds)
    INPUT_DEBOUNCE_MS: int = 150
    NAME_ENTRY_DELAY_MS: int = 500
    NAME_ENTRY_TIMEOUT_MS: int = 30000
    SCORES_DISPLAY_MS: int = 10000
    LEVEL_ADVANCE_DELAY_MS: int = 2000
    LEVEL_TEXT_DISPLAY_MS: int = 1500
    PERFECT_FLASH_MS: int = 1500
    IDLE_WAIT_MS: int = 5000
    ANIMATION_FRAME_MS: int = 100
    SPRITE_FRAME_MS: int = 150
    IDLE_ANIMATION_SPEED: float = 1.5      # Pixels per tick
    HOW_TO_PLAY_SCROLL_SPEED: float = 0.007  # Pixels per millisecond

    # Persistence
    HIGH_SCORES_FILE: str = "high-scores.json"
    MAX_HIGH_SCORES: int = 10

    @property
    def spawn(self) -> Tuple[int, int]:
        """Player spawn cell, just inside the top-left corner."""
        return (1, 1)

    @property
    def screen_width(self) -> int:
        """Preview window width in pixels."""
        pitch = self.DOT_SIZE + self.DOT_SPACING
        return int((self.GRID_WIDTH * pitch - self.DOT_SPACING) * self.WINDOW_SCALE)

    @property
    def screen_height(self) -> int:
        """Preview window height in pixels."""
        pitch = self.DOT_SIZE + self.DOT_SPACING
        return int((self.GRID_HEIGHT * pitch - self.DOT_SPACING) * self.WINDOW_SCALE)


# (x, y, vx, vy) as fractions of the grid and cells per tick
ENEMY_CONFIGS: Tuple[Tuple[float, float, float, float], ...] = (
    (1 / 2, 1 / 2, 0.5, 0.37),
    (1 / 3, 1 / 3, -0.4, 0.45),
    (2 / 3, 1 / 2, 0.45, -0.42),
    (1 / 2, 2 / 3, -0.38, 0.48),
    (2 / 3, 2 / 3, 0.42, 0.4),
)

HOW_TO_PLAY_TEXT: Tuple[str, ...] = (
    "FILL UP", "BOXES,", "WATCH OUT", "FOR",
    "GHOSTS!", "MOVE", "AROUND", "TO DRAW.",
)
