"""
Player, enemies and the freeze powerup.
"""

import random
from typing import List, Optional

from pacxon.config import ENEMY_CONFIGS, GameConfig
from pacxon.grid import Coord, Grid, round_half_up


# ============================================================================
# GAME ENTITIES
# ============================================================================

class Player:
    """
    The player-controlled cell.

    Moves one cell at a time; leaving claimed territory draws a trail.
    """

    __slots__ = ['x', 'y']

    def __init__(self, x: int, y: int):
        self.x = x
        self.y = y

    @property
    def cell(self) -> Coord:
        return self.x, self.y

    def __repr__(self) -> str:
        return f"Player({self.x}, {self.y})"


class Enemy:
    """
    Bouncing ghost with a sub-cell position.

    Ghosts reflect off claimed territory independently on each axis and
    never come to rest on a claimed cell.
    """

    __slots__ = ['x', 'y', 'vx', 'vy']

    def __init__(self, x: float, y: float, vx: float, vy: float):
        """
        Initialize ghost at a position with a velocity.

        Args:
            x: Horizontal position in cells
            y: Vertical position in cells
            vx: Horizontal velocity in cells per tick
            vy: Vertical velocity in cells per tick
        """
        self.x = x
        self.y = y
        self.vx = vx
        self.vy = vy

    @property
    def cell(self) -> Coord:
        """The grid cell this ghost occupies."""
        return round_half_up(self.x), round_half_up(self.y)

    def step(self, walls: Grid):
        """
        Advance one tick, bouncing off walls.

        Each axis is probed against the ghost's current row or column; a hit
        reverses that velocity component. If the reversed step would still
        land in a wall the ghost holds that axis for this tick, and a move
        that would cut diagonally into a wall corner drops the vertical part.

        The corner case always reverses ``vy``, even when the horizontal
        step alone caused the hit; either way the ghost's cell stays open.
        """
        cx, cy = self.cell

        nx = self.x + self.vx
        if walls.is_wall(round_half_up(nx), cy):
            self.vx *= -1
            nx = self.x + self.vx
            if walls.is_wall(round_half_up(nx), cy):
                nx = self.x

        ny = self.y + self.vy
        if walls.is_wall(cx, round_half_up(ny)):
            self.vy *= -1
            ny = self.y + self.vy
            if walls.is_wall(cx, round_half_up(ny)):
                ny = self.y

        if walls.is_wall(round_half_up(nx), round_half_up(ny)):
            self.vy *= -1
            ny = self.y

        self.x, self.y = nx, ny

    def __repr__(self) -> str:
        return f"Enemy(x={self.x:.2f}, y={self.y:.2f}, vx={self.vx:.2f}, vy={self.vy:.2f})"


class Powerup:
    """Pickup that freezes every ghost for a while."""

    __slots__ = ['x', 'y', 'active', 'blink']

    def __init__(self, x: int = -1, y: int = -1, active: bool = False):
        self.x = x
        self.y = y
        self.active = active
        self.blink = False              # Toggled by the game tick for rendering

    @property
    def cell(self) -> Coord:
        return self.x, self.y


# ============================================================================
# LEVEL SCALING
# ============================================================================

def enemy_count(level: int) -> int:
    """Number of ghosts on a level."""
    if level >= 7:
        return 5
    if level >= 5:
        return 4
    if level >= 3:
        return 3
    return 2


def speed_multiplier(level: int, config: GameConfig) -> float:
    """Ghost speed factor on a level."""
    return 1 + (level - 1) * config.SPEED_INCREMENT


def create_enemies(level: int, config: GameConfig) -> List[Enemy]:
    """
    Build the ghosts for a level from the fixed start configurations.

    Args:
        level: Level number, starting at 1
        config: Game configuration providing grid size and speed increment

    Returns:
        List of freshly placed ghosts
    """
    speed = speed_multiplier(level, config)
    return [
        Enemy(fx * config.GRID_WIDTH, fy * config.GRID_HEIGHT, vx * speed, vy * speed)
        for fx, fy, vx, vy in ENEMY_CONFIGS[:enemy_count(level)]
    ]


def spawn_powerup(walls: Grid, rng: random.Random,
                  attempts: int = 100) -> Optional[Powerup]:
    """
    Place a powerup on a random unclaimed cell away from the border.

    Returns None if no free cell was hit within the attempt budget.
    """
    for _ in range(attempts):
        x = rng.randrange(walls.width - 4) + 2
        y = rng.randrange(walls.height - 4) + 2
        if not walls.is_wall(x, y):
            return Powerup(x, y, active=True)
    return None
