import random

import pytest

from pacxon.config import GameConfig
from pacxon.game import PacxonGame
from pacxon.scores import HighScoreTable


class FakeClock:
    """Millisecond clock advanced by hand."""

    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float):
        self.now += ms


class RecordingTarget:
    """Render target remembering the last color of every pixel."""

    def __init__(self):
        self.color = (0, 0, 0)
        self.pixels = {}
        self.calls = 0

    def set_fill_color(self, color):
        self.color = tuple(color)

    def fill_rect(self, x, y, w, h):
        self.calls += 1
        for py in range(y, y + h):
            for px in range(x, x + w):
                self.pixels[(px, py)] = self.color

    def lit(self):
        return {p for p, c in self.pixels.items() if c == (255, 255, 255)}


@pytest.fixture
def clock():
    return FakeClock(start=1000.0)


@pytest.fixture
def config(tmp_path):
    return GameConfig(HIGH_SCORES_FILE=str(tmp_path / "high-scores.json"))


@pytest.fixture
def scores(config):
    return HighScoreTable(config.HIGH_SCORES_FILE, config.MAX_HIGH_SCORES)


@pytest.fixture
def game(config, clock, scores):
    return PacxonGame(config, clock=clock, rng=random.Random(1234), high_scores=scores)


@pytest.fixture
def playing(game):
    """Game already past the title and instructions, on level 1."""
    game.start_game()
    game.start_actual_game()
    return game


@pytest.fixture
def target():
    return RecordingTarget()
