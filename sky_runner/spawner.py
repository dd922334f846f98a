"""Timer-driven obstacle spawner with best-effort non-overlapping placement."""

from __future__ import annotations

import logging
import random

from .config import (
    MAX_BATCH,
    MAX_SPAWN_INTERVAL,
    MIN_SPAWN_INTERVAL,
    OBSTACLE_MAX_HEIGHT,
    OBSTACLE_MAX_WIDTH,
    OBSTACLE_MIN_HEIGHT,
    OBSTACLE_MIN_WIDTH,
    OBSTACLE_SIZE,
    OBSTACLE_Y_RANGE,
    PLACEMENT_ATTEMPTS,
    PLACEMENT_MARGIN,
    SPAWN_OFFSET,
    WINDOW_WIDTH,
    Rules,
)
from .entities import Obstacle
from .utils import any_overlap_with_margin

logger = logging.getLogger(__name__)

SPAWN_X = WINDOW_WIDTH + SPAWN_OFFSET


class ObstacleSpawner:
    """Counts frames and emits obstacle batches at the spawn boundary.

    Simple variants spawn one fixed-size obstacle every `rules.fixed_interval`
    frames. Randomized variants draw the interval, the batch size and each
    obstacle's size and height from `rng`.
    """

    def __init__(self, rules: Rules, rng: random.Random) -> None:
        self.rules = rules
        self.rng = rng
        self.timer = 0
        self.interval = self._next_interval()

    def _next_interval(self) -> int:
        if self.rules.randomized_obstacles:
            return self.rng.randint(MIN_SPAWN_INTERVAL, MAX_SPAWN_INTERVAL)
        return self.rules.fixed_interval

    def candidate(self) -> Obstacle:
        """Draw one obstacle at the spawn boundary."""
        if self.rules.randomized_obstacles:
            width = self.rng.randrange(OBSTACLE_MIN_WIDTH, OBSTACLE_MAX_WIDTH)
            height = self.rng.randrange(OBSTACLE_MIN_HEIGHT, OBSTACLE_MAX_HEIGHT)
        else:
            width = height = OBSTACLE_SIZE
        y = self.rng.randrange(OBSTACLE_Y_RANGE)
        return Obstacle(SPAWN_X, y, width, height)

    def place(self, existing: list[Obstacle]) -> tuple[Obstacle, bool]:
        """Pick a position for a new obstacle.

        Returns the obstacle and whether it was accepted before the attempt
        cap. After PLACEMENT_ATTEMPTS rejections the last candidate is used
        even though it overlaps.
        """
        boxes = [o.box for o in existing]
        candidate = self.candidate()
        if not self.rules.avoid_overlap:
            return candidate, True
        for attempt in range(1, PLACEMENT_ATTEMPTS + 1):
            if not any_overlap_with_margin(candidate.box, boxes, PLACEMENT_MARGIN):
                return candidate, True
            if attempt < PLACEMENT_ATTEMPTS:
                candidate = self.candidate()
        logger.debug(f"No free slot after {PLACEMENT_ATTEMPTS} attempts; accepting y={candidate.y:.0f}")
        return candidate, False

    def tick(self, obstacles: list[Obstacle]) -> list[Obstacle]:
        """Advance the spawn timer one frame, appending any new obstacles."""
        self.timer += 1
        if self.timer < self.interval:
            return []
        count = self.rng.randint(1, MAX_BATCH) if self.rules.randomized_obstacles else 1
        spawned: list[Obstacle] = []
        for _ in range(count):
            obstacle, _fitted = self.place(obstacles)
            obstacles.append(obstacle)
            spawned.append(obstacle)
        self.timer = 0
        self.interval = self._next_interval()
        logger.debug(f"Spawned {count} obstacle(s); next in {self.interval} frames")
        return spawned
