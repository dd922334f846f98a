"""Game entities: the player, scrolling obstacles, and laser shots.

Entities only know how to move themselves and report their bounding box;
scoring and collision response live in the game state.
"""

from __future__ import annotations

from .config import (
    CEILING_Y,
    COL_OBSTACLE,
    COL_OBSTACLE_CRITICAL,
    COL_OBSTACLE_HIT,
    GROUND_Y,
    HITS_TO_DESTROY,
    LASER_LENGTH,
    LASER_SPEED,
    LASER_THICKNESS,
    PLAYER_SIZE,
    WINDOW_HEIGHT,
    WINDOW_WIDTH,
)


class Player:
    def __init__(self, x: float, y: float, on_ground: bool = False) -> None:
        self.x = float(x)
        self.y = float(y)
        self.velocity = 0.0
        self.on_ground = on_ground

    @property
    def box(self) -> tuple[float, float, float, float]:
        return (self.x, self.y, PLAYER_SIZE, PLAYER_SIZE)

    def jump(self, impulse: float) -> None:
        self.velocity = impulse
        self.on_ground = False

    def integrate(self, gravity: float) -> None:
        """Apply one frame of gravity, then move."""
        self.velocity += gravity
        self.y += self.velocity

    def clamp_ceiling(self, ceiling: float = CEILING_Y) -> bool:
        """Stop at the ceiling. Returns True if the player was clamped."""
        if self.y < ceiling:
            self.y = ceiling
            self.velocity = 0.0
            return True
        return False

    def clamp_ground(self, ground: float = GROUND_Y) -> None:
        if self.y >= ground:
            self.y = ground
            self.velocity = 0.0
            self.on_ground = True

    def fell_out(self) -> bool:
        return self.y > WINDOW_HEIGHT


class Obstacle:
    def __init__(self, x: float, y: float, width: float, height: float) -> None:
        self.x = float(x)
        self.y = float(y)
        self.width = float(width)
        self.height = float(height)
        self.hit_count = 0

    @property
    def box(self) -> tuple[float, float, float, float]:
        return (self.x, self.y, self.width, self.height)

    @property
    def destroyed(self) -> bool:
        return self.hit_count >= HITS_TO_DESTROY

    @property
    def color(self) -> tuple[int, int, int, int]:
        if self.hit_count == 0:
            return COL_OBSTACLE
        if self.hit_count == 1:
            return COL_OBSTACLE_HIT
        return COL_OBSTACLE_CRITICAL

    def update(self, scroll_speed: float) -> None:
        self.x -= scroll_speed

    def offscreen(self) -> bool:
        return self.x < -self.width


class Laser:
    def __init__(self, x: float, y: float) -> None:
        self.x = float(x)
        self.y = float(y)

    @classmethod
    def fired_by(cls, player: Player) -> "Laser":
        """A shot leaving the player's leading edge, vertically centred."""
        return cls(player.x + PLAYER_SIZE, player.y + PLAYER_SIZE / 2 - LASER_THICKNESS / 2)

    @property
    def box(self) -> tuple[float, float, float, float]:
        return (self.x, self.y, LASER_LENGTH, LASER_THICKNESS)

    def update(self) -> None:
        self.x += LASER_SPEED

    def offscreen(self) -> bool:
        return self.x > WINDOW_WIDTH
