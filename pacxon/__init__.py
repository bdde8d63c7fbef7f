"""
Pacxon - territory-filling arcade game for an 84x28 flipdot display.
"""

from pacxon.config import Direction, GameConfig, Scene
from pacxon.game import PacxonGame

__version__ = "0.3.0"

__all__ = ["Direction", "GameConfig", "PacxonGame", "Scene"]
