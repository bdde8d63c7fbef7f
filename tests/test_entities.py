import random

import pytest

from pacxon.config import GameConfig
from pacxon.entities import Enemy, create_enemies, enemy_count, spawn_powerup, speed_multiplier
from pacxon.grid import Grid

W, H = 84, 28


@pytest.mark.parametrize("level, count", [
    (1, 2), (2, 2), (3, 3), (4, 3), (5, 4), (6, 4), (7, 5), (12, 5),
])
def test_enemy_count_scales_with_level(level, count):
    assert enemy_count(level) == count
    assert len(create_enemies(level, GameConfig())) == count


def test_enemy_speed_scales_with_level():
    config = GameConfig()
    assert speed_multiplier(1, config) == 1
    first = create_enemies(1, config)[0]
    later = create_enemies(5, config)[0]
    assert first.vx == pytest.approx(0.5)
    assert later.vx == pytest.approx(0.5 * 1.2)
    assert later.vy == pytest.approx(0.37 * 1.2)


def test_enemies_start_on_open_cells():
    config = GameConfig()
    grid = Grid(W, H)
    for enemy in create_enemies(7, config):
        assert not grid.is_wall(*enemy.cell)


def test_enemy_reflects_off_side_wall():
    grid = Grid(W, H)
    enemy = Enemy(0.9, 10, -0.5, 0)
    enemy.step(grid)
    assert enemy.vx == 0.5
    assert enemy.x == pytest.approx(1.4)
    assert not grid.is_wall(*enemy.cell)


def test_enemy_reflects_axes_independently():
    grid = Grid(W, H)
    enemy = Enemy(0.9, 0.9, -0.5, -0.5)
    enemy.step(grid)
    assert (enemy.vx, enemy.vy) == (0.5, 0.5)


def test_enemy_does_not_cut_through_wall_corner():
    grid = Grid(W, H)
    grid.claim(11, 11)
    enemy = Enemy(10.4, 10.4, 0.3, 0.3)
    enemy.step(grid)
    assert not grid.is_wall(*enemy.cell)


def test_corner_hit_reverses_vertical_velocity_only():
    grid = Grid(W, H)
    grid.claim(11, 11)
    enemy = Enemy(10.0, 10.4, 0.6, 0.2)
    enemy.step(grid)

    assert enemy.vx == pytest.approx(0.6)
    assert enemy.vy == pytest.approx(-0.2)
    assert enemy.x == pytest.approx(10.6)
    assert enemy.y == pytest.approx(10.4)
    assert enemy.cell == (11, 10)


def _random_walls(rng):
    grid = Grid(W, H)
    for _ in range(rng.randrange(5, 25)):
        x0, y0 = rng.randrange(1, W - 2), rng.randrange(1, H - 3)
        w, h = rng.randrange(1, 12), rng.randrange(1, 6)
        for y in range(y0, min(y0 + h, H - 2)):
            for x in range(x0, min(x0 + w, W - 1)):
                grid.claim(x, y)
    return grid


@pytest.mark.parametrize("seed", range(20))
def test_enemies_never_enter_claimed_cells(seed):
    rng = random.Random(seed)
    grid = _random_walls(rng)
    free = [(x, y) for y in range(1, H - 2) for x in range(1, W - 1) if not grid.is_wall(x, y)]

    enemies = []
    for _ in range(5):
        x, y = rng.choice(free)
        enemies.append(Enemy(x, y, rng.uniform(-0.65, 0.65), rng.uniform(-0.65, 0.65)))

    for _ in range(400):
        for enemy in enemies:
            enemy.step(grid)
            assert not grid.is_wall(*enemy.cell), enemy


def test_powerup_spawns_on_free_cell():
    grid = Grid(W, H)
    powerup = spawn_powerup(grid, random.Random(7))
    assert powerup is not None and powerup.active
    assert 2 <= powerup.x <= W - 3
    assert 2 <= powerup.y <= H - 3
    assert not grid.is_wall(powerup.x, powerup.y)


def test_powerup_gives_up_on_full_grid():
    grid = Grid(W, H)
    for y in range(H - 1):
        for x in range(W):
            grid.claim(x, y)
    assert spawn_powerup(grid, random.Random(7), attempts=20) is None
