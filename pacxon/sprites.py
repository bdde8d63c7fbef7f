"""
Pixel sprites and full-screen animations.

Small sprites are hand-drawn bitmaps. The level-transition and death
animations are rasterized from simple shapes once and cached.
"""

import math
from functools import lru_cache
from typing import Dict, FrozenSet, Iterable, Tuple

Bitmap = Tuple[str, ...]
Frame = FrozenSet[Tuple[int, int]]

# ============================================================================
# SMALL SPRITES (7x7)
# ============================================================================

SPRITES: Dict[str, Bitmap] = {
    'pacman_right': (
        "..###..",
        ".#####.",
        "####...",
        "###....",
        "####...",
        ".#####.",
        "..###..",
    ),
    'pacman_left': (
        "..###..",
        ".#####.",
        "...####",
        "....###",
        "...####",
        ".#####.",
        "..###..",
    ),
    'pacman_filled': (
        "..###..",
        ".#####.",
        "#######",
        "#######",
        "#######",
        ".#####.",
        "..###..",
    ),
    'ghost_1': (
        "..###..",
        ".#####.",
        "#.##.##",
        "#######",
        "#######",
        "#######",
        "#.#.#.#",
    ),
    'ghost_2': (
        "..###..",
        ".#####.",
        "#.##.##",
        "#######",
        "#######",
        "#######",
        ".#.#.#.",
    ),
    'ghost_afraid_1': (
        "..###..",
        ".#####.",
        "##.#.##",
        "#######",
        "#.#.#.#",
        "#######",
        "#.#.#.#",
    ),
    'ghost_afraid_2': (
        "..###..",
        ".#####.",
        "##.#.##",
        "#######",
        "#.#.#.#",
        "#######",
        ".#.#.#.",
    ),
}


def bitmap_pixels(bitmap: Bitmap) -> Iterable[Tuple[int, int]]:
    """Yield the (x, y) offsets of lit pixels in a bitmap."""
    for y, row in enumerate(bitmap):
        for x, ch in enumerate(row):
            if ch == '#':
                yield x, y


# ============================================================================
# RASTERIZED ANIMATIONS
# ============================================================================

def _pacman_disc(cx: float, cy: float, radius: float, mouth: float,
                 facing: float = 0.0) -> set:
    """
    Rasterize a Pac-Man disc.

    Args:
        cx, cy: Center in pixels
        radius: Disc radius in pixels
        mouth: Half-angle of the mouth wedge in radians
        facing: Direction the mouth points to in radians
    """
    pixels = set()
    r2 = radius * radius
    for y in range(int(cy - radius) - 1, int(cy + radius) + 2):
        for x in range(int(cx - radius) - 1, int(cx + radius) + 2):
            dx, dy = x - cx, y - cy
            if dx * dx + dy * dy > r2:
                continue
            angle = math.atan2(dy, dx) - facing
            angle = (angle + math.pi) % (2 * math.pi) - math.pi
            if abs(angle) < mouth:
                continue
            pixels.add((x, y))
    return pixels


def _clip(pixels: Iterable[Tuple[int, int]], width: int, height: int) -> Frame:
    return frozenset((x, y) for x, y in pixels if 0 <= x < width and 0 <= y < height)


@lru_cache(maxsize=None)
def eat_animation(width: int, height: int) -> Tuple[Frame, ...]:
    """Large Pac-Man chomping a row of dots across the screen."""
    frames = []
    count = 16
    radius = height // 2 - 3
    cy = (height - 1) / 2
    dots = range(4, width, 8)
    for i in range(count):
        cx = -radius + i * (width + 2 * radius) / (count - 1)
        mouth = math.pi / 4 if i % 2 == 0 else math.pi / 12
        pixels = _pacman_disc(cx, cy, radius, mouth)
        for dot in dots:
            if dot > cx + radius / 2:
                pixels.update({(dot, int(cy)), (dot + 1, int(cy)),
                               (dot, int(cy) + 1), (dot + 1, int(cy) + 1)})
        frames.append(_clip(pixels, width, height))
    return tuple(frames)


@lru_cache(maxsize=None)
def death_collapse(width: int, height: int) -> Tuple[Frame, ...]:
    """Mouth opens wider until Pac-Man folds away."""
    radius = height // 2 - 3
    cx, cy = (width - 1) / 2, (height - 1) / 2
    frames = []
    for i in range(11):
        mouth = math.pi / 12 + i * (math.pi - math.pi / 12) / 10
        frames.append(_clip(_pacman_disc(cx, cy, radius, mouth, -math.pi / 2),
                            width, height))
    return tuple(frames)


@lru_cache(maxsize=None)
def death_shrink(width: int, height: int) -> Tuple[Frame, ...]:
    """Pac-Man shrinks to nothing."""
    radius = height // 2 - 3
    cx, cy = (width - 1) / 2, (height - 1) / 2
    frames = []
    for i in range(8):
        r = radius * (7 - i) / 7
        frames.append(_clip(_pacman_disc(cx, cy, r, math.pi / 6), width, height))
    return tuple(frames)


@lru_cache(maxsize=None)
def death_burst(width: int, height: int) -> Tuple[Frame, ...]:
    """Pac-Man bursts into a ring of sparks."""
    radius = height // 2 - 3
    cx, cy = (width - 1) / 2, (height - 1) / 2
    frames = [_clip(_pacman_disc(cx, cy, radius, math.pi / 6), width, height)]
    for i in range(1, 6):
        ring = 3 + i * 4
        sparks = set()
        for n in range(12):
            angle = n * math.pi / 6 + i * 0.2
            sx = round(cx + math.cos(angle) * ring)
            sy = round(cy + math.sin(angle) * ring * 0.8)
            sparks.update({(sx, sy), (sx + 1, sy)})
        frames.append(_clip(sparks, width, height))
    frames.append(frozenset())
    return tuple(frames)


# Death animations with their per-frame duration in milliseconds
DEATH_ANIMATIONS = (
    (death_collapse, 100),
    (death_shrink, 200),
    (death_burst, 200),
)
