"""
Pygame front end: window, fixed-rate loop and input adapters.
"""

import logging
from typing import Dict, Optional

import pygame

from pacxon.config import Direction, GameConfig, Scene
from pacxon.display import FlipdotPreview, SurfaceTarget, threshold
from pacxon.game import PacxonGame

logger = logging.getLogger(__name__)

KEY_DIRECTIONS: Dict[int, Direction] = {
    pygame.K_UP: Direction.UP,
    pygame.K_w: Direction.UP,
    pygame.K_DOWN: Direction.DOWN,
    pygame.K_s: Direction.DOWN,
    pygame.K_LEFT: Direction.LEFT,
    pygame.K_a: Direction.LEFT,
    pygame.K_RIGHT: Direction.RIGHT,
    pygame.K_d: Direction.RIGHT,
}

HAT_DIRECTIONS = {
    (0, 1): Direction.UP,
    (0, -1): Direction.DOWN,
    (-1, 0): Direction.LEFT,
    (1, 0): Direction.RIGHT,
}

# Xbox-style layout as reported by SDL
JOYSTICK_BUTTONS: Dict[int, str] = {
    0: 'A',
    1: 'B',
    2: 'X',
    3: 'Y',
    6: 'SELECT',
    7: 'START',
}

AXIS_THRESHOLD = 0.5


class PacxonApp:
    """
    Main loop wiring the game to a pygame window and input devices.

    Args:
        game: The game session to drive
        config: Window and timing configuration
        dev: Enable level-skip shortcuts
    """

    def __init__(self, game: PacxonGame, config: GameConfig, dev: bool = False):
        self.game = game
        self.config = config
        self.dev = dev

        pygame.init()
        self.screen = pygame.display.set_mode((config.screen_width, config.screen_height))
        pygame.display.set_caption("Pacxon")
        self.clock = pygame.time.Clock()
        self.target = SurfaceTarget(config.GRID_WIDTH, config.GRID_HEIGHT)
        self.preview = FlipdotPreview(self.screen, config)

        self.joysticks: Dict[int, pygame.joystick.Joystick] = {}
        self.axis_state: Dict[int, Optional[Direction]] = {}
        self.caption = ""
        self.running = True

    def _add_joystick(self, index: int):
        joystick = pygame.joystick.Joystick(index)
        self.joysticks[joystick.get_instance_id()] = joystick
        logger.info("Controller connected: %s", joystick.get_name())

    def handle_input(self):
        """Translate pygame events into game input calls."""
        game = self.game
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False

            elif event.type == pygame.KEYDOWN:
                self._handle_key(event.key)

            elif event.type == pygame.JOYDEVICEADDED:
                self._add_joystick(event.device_index)

            elif event.type == pygame.JOYDEVICEREMOVED:
                joystick = self.joysticks.pop(event.instance_id, None)
                if joystick is not None:
                    logger.info("Controller disconnected")

            elif event.type == pygame.JOYHATMOTION:
                direction = HAT_DIRECTIONS.get(tuple(event.value))
                if direction is not None:
                    game.set_direction(direction)

            elif event.type == pygame.JOYAXISMOTION and event.axis in (0, 1):
                self._handle_axis(event.instance_id, event.axis, event.value)

            elif event.type == pygame.JOYBUTTONDOWN:
                button = JOYSTICK_BUTTONS.get(event.button)
                if button is not None:
                    game.handle_button_press(button)

    def _handle_key(self, key: int):
        game = self.game
        if key == pygame.K_ESCAPE:
            self.running = False
            return

        direction = KEY_DIRECTIONS.get(key)
        if direction is not None:
            game.set_direction(direction)
        elif key in (pygame.K_RETURN, pygame.K_SPACE):
            game.handle_button_press('A')
        elif key == pygame.K_r and game.scene != Scene.NAME_ENTRY:
            game.restart()
        elif self.dev and key == pygame.K_n:
            game.skip_level()
        elif self.dev and key == pygame.K_3 and game.scene == Scene.TITLE:
            game.start_at_level(3)

    def _handle_axis(self, instance_id: int, axis: int, value: float):
        """Emit a direction when a stick crosses the threshold."""
        direction = None
        if value <= -AXIS_THRESHOLD:
            direction = Direction.LEFT if axis == 0 else Direction.UP
        elif value >= AXIS_THRESHOLD:
            direction = Direction.RIGHT if axis == 0 else Direction.DOWN

        key = instance_id * 2 + axis
        if direction is not None and self.axis_state.get(key) != direction:
            self.game.set_direction(direction)
        self.axis_state[key] = direction

    def render(self):
        self.game.render(self.target)
        buffer = threshold(self.target.surface, self.config.BRIGHTNESS_THRESHOLD)
        self.preview.show(buffer)

        status = self.game.status()
        caption = f"Pacxon - {status}" if status else "Pacxon"
        if caption != self.caption:
            pygame.display.set_caption(caption)
            self.caption = caption

        pygame.display.flip()

    def run(self):
        """
        Main game loop.

        Processes input, advances the game one tick and repaints the
        panel at the configured frame rate.
        """
        while self.running:
            self.clock.tick(self.config.FPS)
            self.handle_input()
            self.game.update()
            self.render()

        pygame.quit()
