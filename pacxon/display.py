"""
Pygame flipdot emulator.

The game draws into a grid-sized ``pygame.Surface`` through
``SurfaceTarget``. ``FlipdotPreview`` thresholds that surface into on/off
dots and paints them as discs in the preview window, repainting only the
dots that flipped since the previous frame.
"""

from typing import List, Tuple

import pygame

from pacxon.config import BLACK, GameConfig

DOT_ON = ((240, 240, 240), (192, 192, 192))     # (fill, outline)
DOT_OFF = ((26, 26, 26), (10, 10, 10))
BACKGROUND = (10, 10, 10)


class SurfaceTarget:
    """Render target drawing into a pygame surface."""

    def __init__(self, width: int, height: int):
        self.surface = pygame.Surface((width, height))
        self.color: Tuple[int, int, int] = BLACK

    def set_fill_color(self, color: Tuple[int, int, int]):
        self.color = color

    def fill_rect(self, x: int, y: int, w: int, h: int):
        self.surface.fill(self.color, pygame.Rect(x, y, w, h))


def threshold(surface: pygame.Surface, limit: int = 127) -> List[List[bool]]:
    """
    Convert a surface into a binary dot buffer.

    A pixel is on when its average RGB brightness exceeds ``limit``.
    """
    width, height = surface.get_size()
    buffer = []
    for y in range(height):
        row = []
        for x in range(width):
            r, g, b, *_ = surface.get_at((x, y))
            row.append((r + g + b) / 3 > limit)
        buffer.append(row)
    return buffer


class FlipdotPreview:
    """
    Window imitating a physical flipdot panel.

    Args:
        screen: Window surface to paint on
        config: Provides grid size, dot size and spacing, scale and threshold
    """

    def __init__(self, screen: pygame.Surface, config: GameConfig):
        self.screen = screen
        self.config = config
        self.width = config.GRID_WIDTH
        self.height = config.GRID_HEIGHT
        self.pitch = (config.DOT_SIZE + config.DOT_SPACING) * config.WINDOW_SCALE
        self.radius = max(1, int(config.DOT_SIZE * config.WINDOW_SCALE / 2))
        self.previous = [[False] * self.width for _ in range(self.height)]
        self.initialize()

    def initialize(self):
        """Paint every dot in its off state."""
        self.screen.fill(BACKGROUND)
        for y in range(self.height):
            for x in range(self.width):
                self._paint_dot(x, y, False)
        self.previous = [[False] * self.width for _ in range(self.height)]

    def _paint_dot(self, x: int, y: int, on: bool):
        center = (int(x * self.pitch + self.radius), int(y * self.pitch + self.radius))
        fill, outline = DOT_ON if on else DOT_OFF
        pygame.draw.rect(self.screen, BACKGROUND, pygame.Rect(
            center[0] - self.radius - 1, center[1] - self.radius - 1,
            self.radius * 2 + 2, self.radius * 2 + 2))
        pygame.draw.circle(self.screen, fill, center, self.radius)
        pygame.draw.circle(self.screen, outline, center, self.radius, 1)

    def show(self, buffer: List[List[bool]], force: bool = False) -> int:
        """
        Flip the dots that changed.

        Args:
            buffer: Binary dot buffer as produced by ``threshold``
            force: Repaint every dot regardless of its previous state

        Returns:
            Number of dots flipped
        """
        changed = 0
        for y in range(self.height):
            row, prev = buffer[y], self.previous[y]
            for x in range(self.width):
                if force or row[x] != prev[x]:
                    self._paint_dot(x, y, row[x])
                    prev[x] = row[x]
                    changed += 1
        return changed
