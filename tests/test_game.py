import pytest

from pacxon.config import Direction, Scene
from pacxon.entities import Enemy, Powerup
from pacxon.grid import Trail

W, H = 84, 28


def step(game, direction, steps=1):
    """Walk the player ``steps`` cells; the player moves every second tick."""
    game.set_direction(direction)
    for _ in range(steps):
        game.update()
        game.update()


def park_enemies(game, *cells):
    game.session.enemies = [Enemy(x, y, 0, 0) for x, y in cells or [(60, 14)]]


def fill_playable(game, count):
    walls = game.session.walls
    for y in range(1, H - 2):
        for x in range(1, W - 1):
            if count == 0:
                return
            if not walls.is_wall(x, y):
                walls.claim(x, y)
                count -= 1


# ===================================================================
# Scene flow
# ===================================================================

def test_new_game_starts_on_title(game):
    session = game.session
    assert session.scene == Scene.TITLE
    assert session.lives == 3
    assert session.score == 0
    assert game.level == 1
    assert len(session.enemies) == 2
    assert session.player.cell == (1, 1)


def test_direction_on_title_opens_instructions(game):
    game.set_direction(Direction.UP)
    assert game.scene == Scene.HOW_TO_PLAY
    assert game.direction is None


def test_button_on_title_opens_instructions(game):
    game.handle_button_press('A')
    assert game.scene == Scene.HOW_TO_PLAY


def test_input_during_idle_chase_resets_animation(game, clock):
    clock.advance(game.config.IDLE_WAIT_MS)
    game.update()
    assert not game.idle.waiting

    game.set_direction(Direction.LEFT)
    assert game.scene == Scene.TITLE
    assert game.idle.waiting


def test_instructions_skip_on_input(game):
    game.start_game()
    game.handle_button_press('B')
    assert game.scene == Scene.PLAYING
    assert game.session.playing


def test_instructions_end_after_scrolling(game, clock):
    game.start_game()
    clock.advance(11000)
    game.update()
    assert game.scene == Scene.HOW_TO_PLAY
    clock.advance(1500)
    game.update()
    assert game.scene == Scene.PLAYING


def test_invalid_input_is_ignored(playing):
    playing.set_direction("SIDEWAYS")
    playing.set_direction(None)
    playing.handle_button_press("TURBO")
    assert playing.direction is None
    assert playing.scene == Scene.PLAYING


def test_direction_names_are_accepted(playing):
    playing.set_direction("left")
    assert playing.direction == Direction.LEFT


def test_start_button_restarts_gameplay(playing):
    playing.session.score = 40
    playing.handle_button_press('START')
    assert playing.scene == Scene.TITLE
    assert playing.session.score == 0


# ===================================================================
# Movement and trail
# ===================================================================

def test_player_moves_every_second_tick(playing):
    park_enemies(playing)
    playing.set_direction(Direction.RIGHT)
    playing.update()
    assert playing.session.player.cell == (1, 1)
    playing.update()
    assert playing.session.player.cell == (2, 1)
    assert (2, 1) in playing.session.trail


def test_out_of_bounds_move_rejected(playing):
    park_enemies(playing)
    session = playing.session
    session.player.x, session.player.y = 0, 5
    step(playing, Direction.LEFT)
    assert session.player.cell == (0, 5)

    session.player.x, session.player.y = 5, H - 2
    step(playing, Direction.DOWN)
    assert session.player.cell == (5, H - 2)
    assert len(session.trail) == 0


def test_walking_along_wall_leaves_no_trail(playing):
    park_enemies(playing)
    session = playing.session
    session.player.x, session.player.y = 10, 0
    step(playing, Direction.RIGHT, 5)
    assert session.player.cell == (15, 0)
    assert len(session.trail) == 0
    assert session.score == 0


def test_closing_a_box_claims_enclosed_cells(playing):
    park_enemies(playing)
    session = playing.session
    session.player.x, session.player.y = 10, 0

    step(playing, Direction.DOWN, 3)
    step(playing, Direction.RIGHT, 3)
    step(playing, Direction.UP, 2)
    assert len(session.trail) == 8
    step(playing, Direction.UP, 1)

    enclosed = {(11, 1), (12, 1), (11, 2), (12, 2)}
    assert session.score == len(enclosed)
    assert len(session.trail) == 0
    for cell in enclosed | {(10, 1), (10, 3), (13, 3), (13, 1)}:
        assert session.walls.is_wall(*cell)


def test_score_is_monotonic_and_border_survives(playing):
    park_enemies(playing, (60, 14), (70, 20))
    session = playing.session
    scores = [session.score]

    session.player.x, session.player.y = 20, 0
    for direction, n in [(Direction.DOWN, 6), (Direction.RIGHT, 5), (Direction.UP, 6),
                         (Direction.RIGHT, 3), (Direction.DOWN, 10), (Direction.LEFT, 30)]:
        for _ in range(n):
            step(playing, direction)
            scores.append(session.score)

    assert scores == sorted(scores)
    assert scores[-1] > 0
    assert all(session.walls.is_wall(x, y) for x, y in session.walls.border_cells())


def test_enemy_on_trail_costs_a_life(playing):
    session = playing.session
    session.trail = Trail(W, [(5, 5), (5, 6), (5, 7)])
    session.player.x, session.player.y = 5, 7
    park_enemies(playing, (5, 6))

    playing.update()

    assert session.lives == 2
    assert len(session.trail) == 0
    assert session.player.cell == (1, 1)
    assert session.scene == Scene.PLAYING


def test_walking_into_enemy_costs_a_life(playing):
    session = playing.session
    park_enemies(playing, (1, 3))
    step(playing, Direction.DOWN, 2)
    assert session.lives == 2
    assert session.player.cell == (1, 1)


# ===================================================================
# Powerup
# ===================================================================

def test_powerup_only_from_level_three(game):
    game.start_game()
    game.start_actual_game()
    assert not game.powerup.active

    game.start_at_level(3)
    game.start_actual_game()
    assert game.powerup.active
    assert not game.session.walls.is_wall(*game.powerup.cell)


def test_powerup_freezes_enemies(playing):
    session = playing.session
    playing.powerup = Powerup(2, 1, active=True)
    session.enemies = [Enemy(40, 14, 0.5, 0.37)]

    step(playing, Direction.RIGHT)
    assert not playing.powerup.active
    assert playing.freeze_timer == playing.config.FREEZE_DURATION

    before = (session.enemies[0].x, session.enemies[0].y)
    playing.set_direction(Direction.DOWN)
    playing.update()
    assert (session.enemies[0].x, session.enemies[0].y) == before
    assert playing.freeze_timer == playing.config.FREEZE_DURATION - 1


def test_freeze_wears_off(playing):
    session = playing.session
    session.enemies = [Enemy(40, 14, 0.5, 0.0)]
    playing.freeze_timer = 2
    playing.update()
    assert playing.frozen
    assert session.enemies[0].x == 40
    playing.update()
    assert not playing.frozen
    assert session.enemies[0].x == pytest.approx(40.5)


# ===================================================================
# Winning and levels
# ===================================================================

def test_win_at_exactly_eighty_percent(playing):
    park_enemies(playing, (80, 24))
    fill_playable(playing, 1640)

    assert playing.check_win_condition()
    assert playing.session.win
    assert not playing.session.playing
    assert len(playing.scheduler) == 1

    assert playing.check_win_condition()
    assert len(playing.scheduler) == 1


def test_below_threshold_is_not_a_win(playing):
    fill_playable(playing, 1600)
    assert not playing.check_win_condition()
    assert not playing.session.win


def test_win_advances_through_transition(playing, clock):
    park_enemies(playing, (80, 24))
    fill_playable(playing, 1640)
    playing.session.score = 77
    playing.update()
    assert playing.session.win

    clock.advance(playing.config.LEVEL_ADVANCE_DELAY_MS)
    playing.update()
    assert playing.level == 2
    assert playing.scene == Scene.LEVEL_TRANSITION
    assert playing.level_animation.active
    assert playing.session.score == 77
    assert playing.session.walls.count_playable_claimed() == 0

    clock.advance(playing.level_animation.duration_ms)
    playing.update()
    assert not playing.level_animation.active
    assert playing.scene == Scene.LEVEL_TRANSITION

    clock.advance(playing.config.LEVEL_TEXT_DISPLAY_MS)
    playing.update()
    assert playing.scene == Scene.PLAYING
    assert playing.session.playing


def test_perfect_clear_delays_advance(playing, clock):
    park_enemies(playing, (80, 25))
    fill_playable(playing, 82 * 25 - 10)
    playing.update()
    assert playing.perfect_clear.active

    clock.advance(playing.config.LEVEL_ADVANCE_DELAY_MS)
    playing.update()
    assert playing.level == 1

    clock.advance(playing.config.PERFECT_FLASH_MS)
    playing.update()
    assert playing.level == 2
    assert not playing.perfect_clear.active


def test_level_advance_grants_bonus_life(playing):
    playing.level = 3
    playing.session.lives = 2
    playing.next_level()
    assert playing.level == 4
    assert playing.session.lives == 3
    assert len(playing.session.enemies) == 3


def test_no_bonus_life_on_other_levels(playing):
    playing.level = 1
    playing.next_level()
    assert playing.level == 2
    assert playing.session.lives == 3


def test_lives_capped_at_nine(playing):
    playing.level = 6
    playing.session.lives = 9
    playing.next_level()
    assert playing.session.lives == 9


def test_enemy_speed_recomputed_on_level_advance(playing):
    playing.level = 4
    playing.next_level()
    assert playing.session.enemies[0].vx == pytest.approx(0.5 * 1.2)
    assert len(playing.session.enemies) == 4


def test_restart_abandons_won_level(playing, clock):
    park_enemies(playing, (80, 24))
    fill_playable(playing, 1640)
    playing.update()
    assert playing.session.win

    playing.restart()
    clock.advance(10000)
    playing.update()

    assert playing.level == 1
    assert playing.scene == Scene.TITLE


def test_old_level_text_timer_does_not_start_new_transition(playing, clock):
    playing.skip_level()
    clock.advance(playing.level_animation.duration_ms)
    playing.update()
    assert not playing.level_animation.active
    assert len(playing.scheduler) == 1

    # Abandon the transition and reach a new one before the old timer is due
    playing.restart()
    playing.start_game()
    playing.start_actual_game()
    playing.skip_level()
    assert playing.scene == Scene.LEVEL_TRANSITION

    clock.advance(playing.config.LEVEL_TEXT_DISPLAY_MS)
    playing.update()
    assert playing.scene == Scene.LEVEL_TRANSITION
    assert playing.level_animation.active
    assert not playing.session.playing

    clock.advance(playing.level_animation.duration_ms - playing.config.LEVEL_TEXT_DISPLAY_MS)
    playing.update()
    clock.advance(playing.config.LEVEL_TEXT_DISPLAY_MS)
    playing.update()
    assert playing.scene == Scene.PLAYING
    assert playing.level == 2


# ===================================================================
# Game over and name entry
# ===================================================================

def lose_last_life(game):
    session = game.session
    session.lives = 1
    session.trail = Trail(W, [(5, 5), (5, 6)])
    park_enemies(game, (5, 6))
    game.update()


def test_last_life_plays_death_animation_then_name_entry(playing, clock):
    lose_last_life(playing)
    session = playing.session
    assert session.lives == 0
    assert playing.death_animation.active
    assert not session.playing
    assert playing.scene == Scene.PLAYING

    clock.advance(playing.death_animation.duration_ms)
    playing.update()

    assert playing.scene == Scene.NAME_ENTRY
    assert session.game_over
    assert not playing.death_animation.active


def test_restart_during_death_animation_stays_on_title(playing, clock):
    lose_last_life(playing)
    playing.restart()
    clock.advance(5000)
    playing.update()
    assert playing.scene == Scene.TITLE
    assert playing.session.lives == 3


def enter_name_entry(game, clock):
    lose_last_life(game)
    clock.advance(game.death_animation.duration_ms)
    game.update()
    assert game.scene == Scene.NAME_ENTRY


def test_name_entry_submission_records_score(playing, clock, scores):
    playing.session.score = 321
    enter_name_entry(playing, clock)

    clock.advance(600)
    playing.set_direction(Direction.UP)
    clock.advance(200)
    playing.set_direction(Direction.RIGHT)
    clock.advance(200)
    playing.set_direction(Direction.DOWN)
    clock.advance(200)
    playing.handle_button_press('A')

    assert playing.name_entry.showing_scores
    assert [(e.name, e.score, e.level) for e in scores] == [("BZA", 321, 1)]

    clock.advance(playing.config.SCORES_DISPLAY_MS - 1)
    playing.update()
    assert playing.scene == Scene.NAME_ENTRY

    clock.advance(1)
    playing.update()
    assert playing.scene == Scene.TITLE
    assert playing.session.score == 0


def test_name_entry_ignores_input_right_after_game_over(playing, clock, scores):
    enter_name_entry(playing, clock)
    playing.handle_button_press('A')
    assert not playing.name_entry.showing_scores
    assert len(scores) == 0


def test_name_entry_times_out_without_saving(playing, clock, scores):
    enter_name_entry(playing, clock)
    clock.advance(playing.config.NAME_ENTRY_TIMEOUT_MS)
    playing.update()
    assert playing.scene == Scene.TITLE
    assert len(scores) == 0


# ===================================================================
# Status line
# ===================================================================

def test_status_while_playing(playing):
    assert playing.status() == "Level: 1 - Score: 0 - 0% Filled - Lives: 3"


def test_status_on_title_is_empty(game):
    assert game.status() == ""
