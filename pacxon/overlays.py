"""
Presentation timers that gate when gameplay runs.

None of these hold gameplay state; they only decide what is on screen and
when a scene may move on.
"""

import math
from enum import IntEnum
from typing import Optional, Sequence, Tuple

from pacxon.config import GameConfig, HOW_TO_PLAY_TEXT
from pacxon.sprites import Frame


class IdlePhase(IntEnum):
    """Phases of the title screen attract animation."""
    WAITING = 0
    CHASE = 1
    FLEE = 2


# ============================================================================
# TITLE ATTRACT ANIMATION
# ============================================================================

class IdleAnimation:
    """
    Ghost chases Pac-Man across the title screen, then Pac-Man chases back.

    After ``IDLE_WAIT_MS`` of waiting both sprites enter from the left;
    once Pac-Man has left on the right they return right-to-left with the
    ghost in front. Any input sends the animation back to waiting.
    """

    __slots__ = ['config', 'phase', 'pacman_x', 'ghost_x', 'frame',
                 'last_frame_time', 'wait_start']

    def __init__(self, config: GameConfig, now: float):
        self.config = config
        self.frame = 0
        self.last_frame_time = 0.0
        self.reset(now)

    @property
    def waiting(self) -> bool:
        return self.phase == IdlePhase.WAITING

    def reset(self, now: float):
        """Return to the waiting phase and restart the idle countdown."""
        self.phase = IdlePhase.WAITING
        self.wait_start = now
        self.pacman_x = -16.0
        self.ghost_x = -40.0

    def update(self, now: float, width: int):
        """
        Advance the animation by one tick.

        Args:
            now: Current clock time in milliseconds
            width: Screen width in pixels
        """
        if self.phase == IdlePhase.WAITING:
            if now - self.wait_start >= self.config.IDLE_WAIT_MS:
                self.phase = IdlePhase.CHASE
                self.pacman_x = -16.0
                self.ghost_x = -40.0
            return

        if now - self.last_frame_time > self.config.SPRITE_FRAME_MS:
            self.frame = (self.frame + 1) % 2
            self.last_frame_time = now

        speed = self.config.IDLE_ANIMATION_SPEED
        if self.phase == IdlePhase.CHASE:
            self.pacman_x += speed
            self.ghost_x += speed
            if self.pacman_x > width + 16:
                self.phase = IdlePhase.FLEE
                self.ghost_x = width + 16.0
                self.pacman_x = width + 40.0
        else:
            self.pacman_x -= speed
            self.ghost_x -= speed
            if self.ghost_x < -16:
                self.reset(now)


# ============================================================================
# FRAME ANIMATIONS
# ============================================================================

class FrameAnimation:
    """A timed run through a fixed list of full-screen frames."""

    __slots__ = ['active', 'frames', 'frame_ms', 'start_time', 'frame']

    def __init__(self):
        self.active = False
        self.frames: Sequence[Frame] = ()
        self.frame_ms = 100
        self.start_time = 0.0
        self.frame = 0

    @property
    def frame_count(self) -> int:
        return len(self.frames)

    @property
    def duration_ms(self) -> float:
        """Time needed to show every frame once."""
        return self.frame_count * self.frame_ms

    def start(self, frames: Sequence[Frame], frame_ms: int, now: float):
        self.frames = frames
        self.frame_ms = frame_ms
        self.start_time = now
        self.frame = 0
        self.active = True

    def stop(self):
        self.active = False

    def update(self, now: float):
        """Pick the frame for the current time, looping if the timer overshoots."""
        if not self.active or not self.frames:
            return
        elapsed = now - self.start_time
        self.frame = int(elapsed // self.frame_ms) % self.frame_count

    def current(self) -> Optional[Frame]:
        if not self.active or not self.frames:
            return None
        return self.frames[self.frame]


# ============================================================================
# HOW-TO-PLAY SCROLL
# ============================================================================

class HowToPlayScroll:
    """Instructions scrolling up from the bottom of the screen."""

    LINE_HEIGHT = 7

    __slots__ = ['config', 'lines', 'start_time', 'offset']

    def __init__(self, config: GameConfig, lines: Tuple[str, ...] = HOW_TO_PLAY_TEXT):
        self.config = config
        self.lines = lines
        self.start_time = 0.0
        self.offset = 0.0

    def start(self, now: float):
        self.start_time = now
        self.offset = 0.0

    def update(self, now: float):
        self.offset = (now - self.start_time) * self.config.HOW_TO_PLAY_SCROLL_SPEED

    def line_y(self, index: int, height: int) -> float:
        """Vertical position of a line for the current offset."""
        return height - self.offset + index * self.LINE_HEIGHT

    def finished(self, height: int) -> bool:
        """True once the last line has scrolled off the top."""
        return self.line_y(len(self.lines) - 1, height) < -self.LINE_HEIGHT


# ============================================================================
# PERFECT CLEAR FLASH
# ============================================================================

class PerfectClear:
    """Flashing "PERFECT!" shown before advancing after a near-total fill."""

    __slots__ = ['active', 'start_time']

    def __init__(self):
        self.active = False
        self.start_time = 0.0

    def start(self, now: float):
        self.active = True
        self.start_time = now

    def stop(self):
        self.active = False


def high_score_scroll(elapsed_ms: float, entries: int, visible: int,
                      line_height: int) -> float:
    """
    Vertical offset for a high-score list taller than the screen.

    Swings smoothly between the top of the list and its bottom.
    """
    if entries <= visible:
        return 0.0
    max_scroll = -(entries - visible) * line_height
    progress = math.sin(elapsed_ms * 0.0006)
    return (progress * 0.5 + 0.5) * max_scroll
