"""
Three-letter name entry shown after game over.
"""

from typing import List

from pacxon.config import GameConfig

# Keys understood by the name entry, as produced by the input adapters
KEY_UP = 'up'
KEY_DOWN = 'down'
KEY_LEFT = 'left'
KEY_RIGHT = 'right'
KEY_ENTER = 'enter'
KEY_SPACE = 'space'

NAME_LENGTH = 3


class NameEntry:
    """
    Letter picker with a debounced cursor.

    Up/down cycle the letter under the cursor (A wraps to Z and back),
    left/right move the cursor, and right on the last letter or enter
    submits. Input is ignored for a short grace period after the scene
    starts and between accepted presses, since the controllers bounce.
    """

    __slots__ = ['config', 'letters', 'cursor', 'start_time', 'last_input_time',
                 'showing_scores', 'scores_display_time', 'scroll_offset']

    def __init__(self, config: GameConfig):
        self.config = config
        self.reset()

    def reset(self, now: float = 0.0):
        self.letters: List[str] = ['A'] * NAME_LENGTH
        self.cursor = 0
        self.start_time = now
        self.last_input_time = float('-inf')
        self.showing_scores = False
        self.scores_display_time = 0.0
        self.scroll_offset = 0.0

    @property
    def name(self) -> str:
        return ''.join(self.letters)

    def accepts_input(self, now: float) -> bool:
        """Whether a key pressed at ``now`` would be processed."""
        if self.showing_scores:
            return False
        if now - self.start_time < self.config.NAME_ENTRY_DELAY_MS:
            return False
        return now - self.last_input_time >= self.config.INPUT_DEBOUNCE_MS

    def handle_key(self, key: str, now: float) -> bool:
        """
        Apply one key press.

        Args:
            key: One of the ``KEY_*`` constants; anything else is ignored
            now: Current clock time in milliseconds

        Returns:
            True if the key submits the name
        """
        if not self.accepts_input(now):
            return False
        if key not in (KEY_UP, KEY_DOWN, KEY_LEFT, KEY_RIGHT, KEY_ENTER, KEY_SPACE):
            return False

        self.last_input_time = now
        pos = self.cursor

        if key == KEY_UP:
            self.letters[pos] = 'A' if self.letters[pos] == 'Z' else chr(ord(self.letters[pos]) + 1)
        elif key == KEY_DOWN:
            self.letters[pos] = 'Z' if self.letters[pos] == 'A' else chr(ord(self.letters[pos]) - 1)
        elif key == KEY_RIGHT:
            if pos == NAME_LENGTH - 1:
                return True
            self.cursor += 1
        elif key == KEY_LEFT:
            self.cursor = (pos - 1) % NAME_LENGTH
        else:
            return True
        return False

    def show_scores(self, now: float):
        """Switch to the high score list after a submission."""
        self.letters = ['A'] * NAME_LENGTH
        self.cursor = 0
        self.showing_scores = True
        self.scores_display_time = now
        self.scroll_offset = 0.0

    def scores_elapsed(self, now: float) -> float:
        return now - self.scores_display_time

    def idle_elapsed(self, now: float) -> float:
        """Time since the scene started or the last accepted key."""
        return now - max(self.start_time, self.last_input_time)
