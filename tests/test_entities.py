import os

os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import pytest

from sky_runner.config import (
    CEILING_Y,
    COL_OBSTACLE,
    COL_OBSTACLE_CRITICAL,
    COL_OBSTACLE_HIT,
    GROUND_Y,
    LASER_SPEED,
    PLAYER_SIZE,
    WINDOW_HEIGHT,
    WINDOW_WIDTH,
)
from sky_runner.entities import Laser, Obstacle, Player


def test_player_jump_then_integrate() -> None:
    """Jump impulse then one gravity step gives the expected motion."""
    player = Player(50, 100)
    player.jump(-8.0)
    player.integrate(0.3)
    assert player.velocity == pytest.approx(-7.7)
    assert player.y == pytest.approx(92.3)


def test_player_ceiling_clamp() -> None:
    """Climbing past the ceiling stops the player there."""
    player = Player(50, CEILING_Y - 3)
    player.velocity = -4.0
    assert player.clamp_ceiling() is True
    assert player.y == CEILING_Y
    assert player.velocity == 0.0
    assert player.clamp_ceiling() is False


def test_player_ground_clamp_sets_on_ground() -> None:
    """Landing snaps to the ground and allows the next jump."""
    player = Player(50, GROUND_Y - 5)
    player.velocity = 10.0
    player.integrate(0.8)
    player.clamp_ground()
    assert player.y == GROUND_Y
    assert player.velocity == 0.0
    assert player.on_ground is True
    player.jump(-15.0)
    assert player.on_ground is False


def test_player_fell_out() -> None:
    """Only strictly below the playfield counts as a fall."""
    player = Player(50, WINDOW_HEIGHT)
    assert not player.fell_out()
    player.y += 0.1
    assert player.fell_out()


def test_obstacle_scroll_and_offscreen() -> None:
    """Obstacle leaves once its right edge passes the left border."""
    obs = Obstacle(0, 100, 50, 40)
    obs.update(49.0)
    assert not obs.offscreen()
    obs.update(1.5)
    assert obs.offscreen()


def test_obstacle_color_tracks_hits() -> None:
    """Obstacle colour and destroyed flag follow hit count."""
    obs = Obstacle(100, 100, 30, 30)
    assert obs.color == COL_OBSTACLE
    obs.hit_count = 1
    assert obs.color == COL_OBSTACLE_HIT
    assert not obs.destroyed
    obs.hit_count = 2
    assert obs.color == COL_OBSTACLE_CRITICAL
    assert obs.destroyed


def test_laser_fired_from_leading_edge() -> None:
    """Laser starts at the player's right edge, vertically centred."""
    player = Player(50, 100)
    laser = Laser.fired_by(player)
    assert laser.x == 50 + PLAYER_SIZE
    assert laser.y == 100 + PLAYER_SIZE / 2 - 2
    assert laser.box == (laser.x, laser.y, 20, 4)


def test_laser_moves_and_expires() -> None:
    """Laser expires once past the right border."""
    laser = Laser(WINDOW_WIDTH - LASER_SPEED, 50)
    laser.update()
    assert not laser.offscreen()
    laser.update()
    assert laser.offscreen()
