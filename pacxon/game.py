"""
Pacxon session state machine.

``PacxonGame`` owns the whole session: the claimed grid, the trail, the
ghosts, score, lives, level and the current scene. A driver calls
``update()`` once per tick and ``render()`` to draw; input adapters call
``set_direction()``, ``restart()`` and ``handle_button_press()`` between
ticks.
"""

import logging
import math
import random
from typing import Callable, List, Optional

from pacxon.config import Direction, GameConfig, Scene
from pacxon.entities import Enemy, Player, Powerup, create_enemies, spawn_powerup
from pacxon.grid import Grid, Trail, resolve_claimed_region
from pacxon.name_entry import KEY_DOWN, KEY_ENTER, KEY_LEFT, KEY_RIGHT, KEY_UP, NameEntry
from pacxon.overlays import (FrameAnimation, HowToPlayScroll, IdleAnimation,
                             PerfectClear, high_score_scroll)
from pacxon.render import SceneRenderer
from pacxon.scores import HighScoreTable
from pacxon.sprites import DEATH_ANIMATIONS, eat_animation
from pacxon.timers import Scheduler, monotonic_ms

logger = logging.getLogger(__name__)

BUTTONS = ('A', 'B', 'X', 'Y', 'SELECT', 'START')
SUBMIT_BUTTONS = ('A', 'B', 'START')

NAME_ENTRY_KEYS = {
    Direction.UP: KEY_UP,
    Direction.DOWN: KEY_DOWN,
    Direction.LEFT: KEY_LEFT,
    Direction.RIGHT: KEY_RIGHT,
}

SCORE_LINE_HEIGHT = 6


# ============================================================================
# SESSION STATE
# ============================================================================

class Session:
    """
    Everything that makes up one level of play.

    A fresh session is swapped in on restart and on every level advance.
    """

    __slots__ = ['scene', 'playing', 'score', 'lives', 'game_over', 'win',
                 'player', 'trail', 'walls', 'enemies']

    def __init__(self, scene: Scene, score: int, lives: int, walls: Grid,
                 enemies: List[Enemy], spawn=(1, 1)):
        self.scene = scene
        self.playing = False
        self.score = score
        self.lives = lives
        self.game_over = False
        self.win = False
        self.player = Player(*spawn)
        self.trail = Trail(walls.width)
        self.walls = walls
        self.enemies = enemies


# ============================================================================
# MAIN GAME CLASS
# ============================================================================

class PacxonGame:
    """
    Main game controller managing scenes, gameplay and high scores.

    Args:
        config: Game configuration; defaults to ``GameConfig()``
        clock: Callable returning the current time in milliseconds
        rng: Random source for powerup placement and death animations
        high_scores: Score table; defaults to the configured JSON file
    """

    def __init__(self, config: Optional[GameConfig] = None,
                 clock: Callable[[], float] = monotonic_ms,
                 rng: Optional[random.Random] = None,
                 high_scores: Optional[HighScoreTable] = None):
        self.config = config or GameConfig()
        self.width = self.config.GRID_WIDTH
        self.height = self.config.GRID_HEIGHT
        self.clock = clock
        self.rng = rng or random.Random()
        self.scheduler = Scheduler(clock)

        self.tick = 0
        self.direction: Optional[Direction] = None
        self.level = 1
        self.generation = 0
        self.flash = False
        self.freeze_timer = 0

        self.level_animation = FrameAnimation()
        self.death_animation = FrameAnimation()
        self.idle = IdleAnimation(self.config, clock())
        self.how_to_play = HowToPlayScroll(self.config)
        self.name_entry = NameEntry(self.config)
        self.perfect_clear = PerfectClear()
        self.powerup = Powerup()

        if high_scores is None:
            high_scores = HighScoreTable(self.config.HIGH_SCORES_FILE,
                                         self.config.MAX_HIGH_SCORES)
        self.high_scores = high_scores

        self.session = self._new_session()
        self.renderer = SceneRenderer(self)

    def _new_session(self, keep_score: bool = False, transition: bool = False) -> Session:
        """
        Build the state for the current level.

        Args:
            keep_score: Carry score and lives over from the running session
            transition: Start in the level transition scene instead of the title
        """
        config = self.config
        score = self.session.score if keep_score else 0
        lives = self.session.lives if keep_score else config.START_LIVES
        return Session(
            scene=Scene.LEVEL_TRANSITION if transition else Scene.TITLE,
            score=score,
            lives=lives,
            walls=Grid(config.GRID_WIDTH, config.GRID_HEIGHT),
            enemies=create_enemies(self.level, config),
            spawn=config.spawn,
        )

    @property
    def scene(self) -> Scene:
        return self.session.scene

    @property
    def frozen(self) -> bool:
        return self.freeze_timer > 0

    # ------------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------------

    def set_direction(self, direction):
        """
        Buffer a direction or route it to the active scene.

        Unrecognized directions are ignored.
        """
        direction = Direction.parse(direction)
        if direction is None:
            return

        scene = self.session.scene
        if scene == Scene.NAME_ENTRY:
            self._handle_name_entry_key(NAME_ENTRY_KEYS[direction])
        elif scene == Scene.TITLE:
            self._title_input()
        elif scene == Scene.HOW_TO_PLAY:
            self.start_actual_game()
        else:
            self.direction = direction

    def handle_button_press(self, button: str):
        """
        React to a named controller button.

        START restarts from gameplay; A, B and START submit a name; any
        button leaves the title and the instructions.
        """
        button = str(button).upper()
        if button not in BUTTONS:
            return

        scene = self.session.scene
        if scene == Scene.HOW_TO_PLAY:
            self.start_actual_game()
        elif scene == Scene.TITLE:
            self._title_input()
        elif scene == Scene.NAME_ENTRY:
            if not self.name_entry.showing_scores and button in SUBMIT_BUTTONS:
                self._handle_name_entry_key(KEY_ENTER)
        elif button == 'START':
            self.restart()

    def _title_input(self):
        if self.idle.waiting:
            self.start_game()
        else:
            self.idle.reset(self.clock())

    # ------------------------------------------------------------------------
    # Game flow
    # ------------------------------------------------------------------------

    def start_game(self):
        """Leave the title screen for the instructions."""
        self.session.scene = Scene.HOW_TO_PLAY
        self.how_to_play.start(self.clock())

    def start_actual_game(self):
        """Begin play on the current level."""
        self.session.scene = Scene.PLAYING
        self.session.playing = True
        self._maybe_spawn_powerup()

    def start_at_level(self, level: int):
        """Jump straight to the instructions for a given level (dev shortcut)."""
        self.level = max(1, level)
        self.session = self._new_session()
        self.start_game()

    def restart(self):
        """Abandon the session and return to the title at level 1."""
        self.generation += 1
        self.level = 1
        self.session = self._new_session()
        self.direction = None
        self.tick = 0
        self.freeze_timer = 0
        self.powerup = Powerup()
        self.level_animation.stop()
        self.death_animation.stop()
        self.perfect_clear.stop()
        self.name_entry.reset(self.clock())
        self.idle.reset(self.clock())

    def next_level(self):
        """
        Advance to the next level through the transition scene.

        Every third level grants a bonus life up to the cap.
        """
        self.generation += 1
        self.level += 1

        config = self.config
        if (self.level % config.BONUS_LIFE_INTERVAL == 1 and self.level > 1
                and self.session.lives < config.MAX_LIVES):
            self.session.lives += 1

        self.session = self._new_session(keep_score=True, transition=True)
        self.direction = None
        self.tick = 0
        self.freeze_timer = 0
        self.powerup = Powerup()
        self.perfect_clear.stop()
        self._start_level_animation()
        logger.info("Level %d: %d ghosts, %d lives, score %d", self.level,
                    len(self.session.enemies), self.session.lives, self.session.score)

    def skip_level(self):
        """Advance immediately while playing (dev shortcut)."""
        if self.session.scene == Scene.PLAYING:
            self.next_level()

    def _start_level_animation(self):
        now = self.clock()
        self.level_animation.start(eat_animation(self.width, self.height),
                                   self.config.ANIMATION_FRAME_MS, now)
        self.scheduler.call_later(self.level_animation.duration_ms, self.generation,
                                  self._finish_level_animation, "level animation")

    def _finish_level_animation(self):
        self.level_animation.stop()
        self.scheduler.call_later(self.config.LEVEL_TEXT_DISPLAY_MS, self.generation,
                                  self._begin_level_play, "level text")

    def _begin_level_play(self):
        if self.session.scene == Scene.LEVEL_TRANSITION:
            self.start_actual_game()

    def _maybe_spawn_powerup(self):
        if self.level < self.config.POWERUP_MIN_LEVEL:
            return
        powerup = spawn_powerup(self.session.walls, self.rng,
                                self.config.POWERUP_SPAWN_ATTEMPTS)
        if powerup is None:
            logger.warning("No free cell found for a powerup on level %d", self.level)
            return
        self.powerup = powerup
        logger.info("Powerup spawned at (%d, %d)", powerup.x, powerup.y)

    # ------------------------------------------------------------------------
    # Tick
    # ------------------------------------------------------------------------

    def update(self):
        """
        Advance the game by one tick.

        Runs due timers, blink counters and scene animations, then the
        gameplay step when a level is in progress.
        """
        now = self.clock()
        self.tick += 1
        self.scheduler.run_due(lambda: self.generation)

        config = self.config
        if self.tick % config.FLASH_INTERVAL_TICKS == 0:
            self.flash = not self.flash
        if self.tick % config.POWERUP_BLINK_INTERVAL == 0:
            self.powerup.blink = not self.powerup.blink
        if self.freeze_timer > 0:
            self.freeze_timer -= 1

        self.level_animation.update(now)
        self.death_animation.update(now)

        session = self.session
        if session.scene == Scene.TITLE:
            self.idle.update(now, self.width)
        elif session.scene == Scene.HOW_TO_PLAY:
            self.how_to_play.update(now)
            if self.how_to_play.finished(self.height):
                self.start_actual_game()
            return
        elif session.scene == Scene.NAME_ENTRY:
            self._update_name_entry(now)
            return

        if (session.scene != Scene.PLAYING or session.game_over
                or session.win or not session.playing):
            return

        self._update_enemies()
        moved = self._update_player()

        if self._check_collision():
            self._handle_collision()
        elif moved and self._should_commit_trail():
            self._fill_enclosed_areas()

        self.check_win_condition()

    def _update_enemies(self):
        if self.freeze_timer > 0:
            return
        walls = self.session.walls
        for enemy in self.session.enemies:
            enemy.step(walls)

    def _update_player(self) -> bool:
        """
        Move the player one cell if a step is due.

        Returns:
            True if the player moved
        """
        if self.direction is None or self.tick % self.config.PLAYER_MOVE_INTERVAL != 0:
            return False

        session = self.session
        dx, dy = self.direction.delta
        nx, ny = session.player.x + dx, session.player.y + dy

        if not session.walls.in_bounds(nx, ny):
            return False

        session.player.x, session.player.y = nx, ny

        # Walking along claimed territory with no trail leaves nothing behind
        if not session.walls.is_wall(nx, ny) or len(session.trail) > 0:
            session.trail.add(nx, ny)

        if self.powerup.active and self.powerup.cell == (nx, ny):
            self.powerup.active = False
            self.freeze_timer = self.config.FREEZE_DURATION
            logger.info("Powerup collected, ghosts frozen for %d ticks",
                        self.config.FREEZE_DURATION)

        return True

    def _should_commit_trail(self) -> bool:
        session = self.session
        return session.walls.is_wall(*session.player.cell) and len(session.trail) > 1

    def _check_collision(self) -> bool:
        trail = self.session.trail
        if not trail:
            return False
        return any(enemy.cell in trail for enemy in self.session.enemies)

    def _handle_collision(self):
        """Lose a life, drop the trail and respawn."""
        session = self.session
        session.lives -= 1
        logger.info("Ghost hit the trail, %d lives left", session.lives)

        if session.lives <= 0:
            self._trigger_death_animation()

        session.trail.clear()
        session.player.x, session.player.y = self.config.spawn

    def _trigger_death_animation(self):
        build, frame_ms = DEATH_ANIMATIONS[self.rng.randrange(len(DEATH_ANIMATIONS))]
        self.death_animation.start(build(self.width, self.height), frame_ms, self.clock())
        self.session.playing = False
        self.scheduler.call_later(self.death_animation.duration_ms, self.generation,
                                  self._enter_name_entry, "death animation")

    def _enter_name_entry(self):
        session = self.session
        self.death_animation.stop()
        session.game_over = True
        session.playing = False
        session.lives = 0
        session.scene = Scene.NAME_ENTRY
        self.name_entry.reset(self.clock())
        logger.info("Game over on level %d with score %d", self.level, session.score)

    def _fill_enclosed_areas(self):
        """Commit the trail and claim everything no ghost can reach."""
        session = self.session
        result = resolve_claimed_region(session.walls, session.trail, session.enemies)
        session.walls = result.walls
        session.trail.clear()
        session.score += result.gained
        logger.debug("Trail committed, %d cells claimed", result.gained)

    def check_win_condition(self) -> bool:
        """
        Start the level-complete sequence once enough area is claimed.

        Fires at most once per level.

        Returns:
            True if the level is won
        """
        session = self.session
        if session.win:
            return True

        pct = session.walls.fill_percentage()
        if pct < self.config.WIN_PCT:
            return False

        session.win = True
        session.playing = False

        delay = self.config.LEVEL_ADVANCE_DELAY_MS
        if pct >= self.config.PERFECT_CLEAR_PCT:
            self.perfect_clear.start(self.clock())
            delay += self.config.PERFECT_FLASH_MS
        self.scheduler.call_later(delay, self.generation, self._advance_after_win,
                                  "level complete")
        logger.info("Level %d complete at %d%%", self.level, pct)
        return True

    def _advance_after_win(self):
        self.perfect_clear.stop()
        if self.session.win:
            self.next_level()

    # ------------------------------------------------------------------------
    # Name entry
    # ------------------------------------------------------------------------

    def _handle_name_entry_key(self, key: str):
        if self.name_entry.handle_key(key, self.clock()):
            self.submit_score()

    def submit_score(self):
        """Record the entered name and show the high score list."""
        self.high_scores.add(self.name_entry.name, self.session.score, self.level)
        self.name_entry.show_scores(self.clock())

    def _update_name_entry(self, now: float):
        entry = self.name_entry
        if entry.showing_scores:
            elapsed = entry.scores_elapsed(now)
            if elapsed >= self.config.SCORES_DISPLAY_MS:
                self.restart()
                return
            entry.scroll_offset = high_score_scroll(
                elapsed, len(self.high_scores), self.height // SCORE_LINE_HEIGHT,
                SCORE_LINE_HEIGHT)
        elif entry.idle_elapsed(now) >= self.config.NAME_ENTRY_TIMEOUT_MS:
            logger.info("Name entry timed out")
            self.restart()

    # ------------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------------

    def render(self, target):
        """Draw the current scene onto a render target."""
        self.renderer.render(target)

    def status(self) -> str:
        """One-line description of the session for window titles and logs."""
        session = self.session
        scene = session.scene

        if scene == Scene.NAME_ENTRY:
            if self.name_entry.showing_scores:
                elapsed = self.name_entry.scores_elapsed(self.clock())
                remaining = math.ceil((self.config.SCORES_DISPLAY_MS - elapsed) / 1000)
                return f"High Scores - Auto-restart in {remaining}s"
            return (f"Enter your name: {self.name_entry.name} - Use arrows to change "
                    f"letters - Press RIGHT on last letter to submit")

        if session.game_over:
            return f"GAME OVER! Level: {self.level} - Final Score: {session.score}"

        if session.win:
            return f"LEVEL {self.level} COMPLETE! Advancing to Level {self.level + 1}..."

        if scene != Scene.PLAYING:
            return ""

        pct = session.walls.fill_percentage()
        return (f"Level: {self.level} - Score: {session.score} - {pct}% Filled - "
                f"Lives: {session.lives}")
