"""
Scene rendering onto a flipdot-sized render target.

Rendering only reads game state. A render target needs two methods:
``set_fill_color(color)`` and ``fill_rect(x, y, w, h)``.
"""

import math
from typing import TYPE_CHECKING, Iterable, Optional, Protocol, Tuple

from pacxon.config import BLACK, WHITE, Scene
from pacxon.font import (BIG, BIG_SPACING, GLYPH_HEIGHT, SMALL, SMALL_SPACING,
                         SPACE_ADVANCE, big_text_width, small_text_width)
from pacxon.grid import Grid, round_half_up
from pacxon.overlays import IdlePhase
from pacxon.sprites import SPRITES, bitmap_pixels

if TYPE_CHECKING:
    from pacxon.game import PacxonGame


class RenderTarget(Protocol):
    """Pixel surface at the grid's logical resolution."""

    def set_fill_color(self, color: Tuple[int, int, int]) -> None: ...

    def fill_rect(self, x: int, y: int, w: int, h: int) -> None: ...


# ============================================================================
# TEXT AND SPRITES
# ============================================================================

def draw_big_text(target: RenderTarget, text: str, x: int, y: int):
    """Draw text in the 5x5 font with the current fill color."""
    cursor = x
    for ch in text.upper():
        if ch == ' ':
            cursor += SPACE_ADVANCE
            continue
        glyph = BIG.get(ch)
        if not glyph:
            continue
        for py, row in enumerate(glyph):
            for px, bit in enumerate(row):
                if bit == '#':
                    target.fill_rect(cursor + px, y + py, 1, 1)
        cursor += len(glyph[0]) + BIG_SPACING


def draw_small_text(target: RenderTarget, text: str, x: int, y: int,
                    walls: Optional[Grid] = None):
    """
    Draw digits in the 3x5 font.

    Pixels landing on claimed territory are drawn black so the text stays
    readable on top of the maze.
    """
    cursor = x
    for ch in text:
        glyph = SMALL.get(ch)
        if not glyph:
            continue
        for py, row in enumerate(glyph):
            for px, bit in enumerate(row):
                if bit != '#':
                    continue
                gx, gy = cursor + px, y + py
                inverted = walls is not None and walls.is_wall(gx, gy)
                target.set_fill_color(BLACK if inverted else WHITE)
                target.fill_rect(gx, gy, 1, 1)
        cursor += len(glyph[0]) + SMALL_SPACING
    target.set_fill_color(WHITE)


def draw_pixels(target: RenderTarget, pixels: Iterable[Tuple[int, int]],
                x: int = 0, y: int = 0):
    for px, py in pixels:
        target.fill_rect(x + px, y + py, 1, 1)


def draw_sprite(target: RenderTarget, name: str, x: int, y: int):
    sprite = SPRITES.get(name)
    if sprite:
        draw_pixels(target, bitmap_pixels(sprite), x, y)


# ============================================================================
# SCENE RENDERER
# ============================================================================

class SceneRenderer:
    """
    Draws whichever scene the game is in.

    Each scene has exactly one drawing method; construction fails if a
    scene is missing from the table.
    """

    def __init__(self, game: 'PacxonGame'):
        self.game = game
        self.dispatch = {
            Scene.TITLE: self.render_title,
            Scene.HOW_TO_PLAY: self.render_how_to_play,
            Scene.LEVEL_TRANSITION: self.render_level_transition,
            Scene.PLAYING: self.render_game,
            Scene.NAME_ENTRY: self.render_name_entry,
        }
        missing = set(Scene) - set(self.dispatch)
        if missing:
            raise ValueError(f"No renderer for scenes: {sorted(missing)}")

    def render(self, target: RenderTarget):
        game = self.game
        target.set_fill_color(BLACK)
        target.fill_rect(0, 0, game.width, game.height)
        target.set_fill_color(WHITE)
        self.dispatch[game.session.scene](target)

    def _centered_x(self, text: str) -> int:
        return (self.game.width - len(text) * (5 + BIG_SPACING)) // 2

    def _draw_centered(self, target: RenderTarget, text: str):
        y = (self.game.height - GLYPH_HEIGHT) // 2
        draw_big_text(target, text, self._centered_x(text), y)

    # ------------------------------------------------------------------------
    # Title
    # ------------------------------------------------------------------------

    def render_title(self, target: RenderTarget):
        game = self.game
        idle = game.idle

        if idle.waiting:
            if game.flash:
                self._render_logo(target)
            else:
                self._draw_centered(target, "START")
            return

        y = game.height - 18
        frame = idle.frame
        if idle.phase == IdlePhase.CHASE:
            ghost = 'ghost_1' if frame == 0 else 'ghost_2'
            pacman = 'pacman_right' if frame == 0 else 'pacman_filled'
        else:
            ghost = 'ghost_afraid_1' if frame == 0 else 'ghost_afraid_2'
            pacman = 'pacman_left' if frame == 0 else 'pacman_filled'
        draw_sprite(target, ghost, round_half_up(idle.ghost_x), y)
        draw_sprite(target, pacman, round_half_up(idle.pacman_x), y)

    def _render_logo(self, target: RenderTarget):
        game = self.game
        text = "PACXON"
        width = big_text_width(text) - BIG_SPACING + 10
        x = (game.width - width) // 2
        y = (game.height - 7) // 2
        draw_sprite(target, 'pacman_right', x, y)
        draw_big_text(target, text, x + 10, y + 1)
        target.fill_rect(0, 0, game.width, 1)
        target.fill_rect(0, game.height - 1, game.width, 1)

    # ------------------------------------------------------------------------
    # Instructions and transitions
    # ------------------------------------------------------------------------

    def render_how_to_play(self, target: RenderTarget):
        game = self.game
        scroll = game.how_to_play
        line_height = scroll.LINE_HEIGHT
        for index, line in enumerate(scroll.lines):
            y = scroll.line_y(index, game.height)
            if -line_height <= y < game.height + line_height:
                draw_big_text(target, line, self._centered_x(line), round_half_up(y))

    def render_level_transition(self, target: RenderTarget):
        game = self.game
        frame = game.level_animation.current()
        if frame is not None:
            draw_pixels(target, frame)
        elif game.flash:
            self._draw_centered(target, f"LEVEL {game.level}")

    # ------------------------------------------------------------------------
    # Gameplay
    # ------------------------------------------------------------------------

    def render_game(self, target: RenderTarget):
        game = self.game
        session = game.session

        frame = game.death_animation.current()
        if frame is not None:
            draw_pixels(target, frame)
            return

        if game.perfect_clear.active:
            if game.flash:
                self._draw_centered(target, "PERFECT!")
            return

        walls = session.walls
        for x, y in walls.claimed_cells():
            target.fill_rect(x, y, 1, 1)

        for x, y in session.trail:
            target.fill_rect(x, y, 1, 1)

        for enemy in session.enemies:
            x, y = enemy.cell
            target.fill_rect(x, y, 1, 1)

        if game.powerup.active and game.powerup.blink:
            target.fill_rect(game.powerup.x, game.powerup.y, 1, 1)

        if game.tick % game.config.PLAYER_BLINK_TICKS < game.config.PLAYER_BLINK_TICKS // 2:
            px, py = session.player.cell
            on_filled = walls.is_wall(px, py) or (px, py) in session.trail
            target.set_fill_color(BLACK if on_filled else WHITE)
            target.fill_rect(px, py, 1, 1)
            target.set_fill_color(WHITE)

        self._render_lives(target)
        self._render_progress_bar(target)

    def _render_lives(self, target: RenderTarget):
        game = self.game
        walls = game.session.walls

        lives = str(game.session.lives)
        draw_small_text(target, lives, game.width - small_text_width(lives) - 1, 1, walls)

        if game.freeze_timer > 0:
            seconds = str(math.ceil(game.freeze_timer / game.config.FPS))
            draw_small_text(target, seconds, game.width - small_text_width(seconds) - 1, 7, walls)

    def _render_progress_bar(self, target: RenderTarget):
        game = self.game
        if not game.flash:
            return
        width = math.floor(game.session.walls.fill_fraction() * game.width)
        if width > 0:
            target.fill_rect(0, game.height - 1, width, 1)

    # ------------------------------------------------------------------------
    # Name entry and high scores
    # ------------------------------------------------------------------------

    def render_name_entry(self, target: RenderTarget):
        game = self.game
        entry = game.name_entry

        if entry.showing_scores:
            self._render_high_scores(target)
            return

        draw_big_text(target, "GAME OVER", 16, 2)
        draw_big_text(target, f"SCORE: {game.session.score}", 2, 10)
        draw_big_text(target, "NAME:", 2, 18)

        name_x = 36
        for i, letter in enumerate(entry.letters):
            x = name_x + i * 8
            draw_big_text(target, letter, x, 18)
            if i == entry.cursor and game.flash:
                target.fill_rect(x, 24, 5, 1)

    def _render_high_scores(self, target: RenderTarget):
        game = self.game
        line_height = 6
        offset = game.name_entry.scroll_offset
        for i, entry in enumerate(game.high_scores):
            y = 2 + i * line_height + offset
            if -line_height <= y < game.height:
                draw_big_text(target, f"{entry.name}: {entry.score}", 2, round_half_up(y))
