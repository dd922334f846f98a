from __future__ import annotations

"""Game configuration constants and variant rules for Sky Runner."""

import os
from dataclasses import dataclass

# Game configuration
WINDOW_WIDTH = 400
WINDOW_HEIGHT = 600
FPS = 60
TITLE = "Sky Runner"

# Player
PLAYER_X = 50.0
PLAYER_START_Y = 100.0  # starts mid-air
PLAYER_SIZE = 40

# Physics (per frame, fixed timestep)
GRAVITY = 0.3  # gentle float
JUMP_IMPULSE = -8.0
CEILING_Y = -50.0  # highest the player may climb
GROUND_GRAVITY = 0.8
GROUND_JUMP_IMPULSE = -15.0
GROUND_HEIGHT = 50
GROUND_Y = float(WINDOW_HEIGHT - GROUND_HEIGHT - PLAYER_SIZE)  # player top when standing

# Scrolling
BASE_SCROLL_SPEED = 1.5  # px/frame
SPEED_RAMP_FRAMES = 3600.0  # frames per +SPEED_RAMP_GAIN
SPEED_RAMP_GAIN = 2.0

# Obstacles
OBSTACLE_SIZE = 30  # fixed-size variants
SPAWN_OFFSET = 50  # spawn boundary = WINDOW_WIDTH + SPAWN_OFFSET
OBSTACLE_Y_RANGE = WINDOW_HEIGHT - 100
OBSTACLE_MIN_WIDTH = 20
OBSTACLE_MAX_WIDTH = 60  # exclusive
OBSTACLE_MIN_HEIGHT = 30
OBSTACLE_MAX_HEIGHT = 90  # exclusive
MIN_SPAWN_INTERVAL = 30  # frames, inclusive
MAX_SPAWN_INTERVAL = 120  # frames, inclusive
MAX_BATCH = 2
PLACEMENT_ATTEMPTS = 50
PLACEMENT_MARGIN = 10.0

# Lasers
LASER_LENGTH = 20  # horizontal extent
LASER_THICKNESS = 4  # vertical extent
LASER_SPEED = 8.0
HITS_TO_DESTROY = 2

# Scoring
DODGE_POINTS = 1
HIT_POINTS = 1
DESTROY_POINTS = 3

# Lives
MAX_LIVES = 4
LIFE_MARKER_SIZE = 20
LIFE_MARKER_SPACING = 25

# Palette (RGBA)
COL_SKY = (135, 206, 235, 255)
COL_PLAYER = (255, 0, 0, 255)
COL_OBSTACLE = (139, 69, 19, 255)
COL_OBSTACLE_HIT = (255, 165, 0, 255)
COL_OBSTACLE_CRITICAL = (255, 0, 0, 255)
COL_LASER = (255, 255, 0, 255)
COL_GROUND = (90, 160, 60, 255)
COL_LIFE = (255, 0, 0, 255)
COL_LIFE_LOST = (128, 128, 128, 255)
COL_TEXT = (255, 255, 255)

# Audio
SAMPLE_RATE = 44100
TONE_AMPLITUDE = 0.3
# cue -> (file name, fallback frequency Hz, fallback duration s)
CUES = {
    "jump": ("se_shot_002.wav", 800.0, 0.2),
    "hit": ("se_hit_004.wav", 400.0, 0.1),
    "destroy": ("se_hit_005.wav", 200.0, 0.3),
    "powerdown": ("se_powerdown_006.wav", 300.0, 0.4),
    "game_over": ("jingle_original_die_003.wav", 150.0, 1.0),
}

# Environment settings
ENV_VARIANT = "SKY_RUNNER_VARIANT"
ENV_SOUND_DIR = "SKY_RUNNER_SOUND_DIR"
ENV_DEBUG = "SKY_RUNNER_DEBUG"
DEFAULT_VARIANT = "arcade"
DEFAULT_SOUND_DIR = "sounds"


@dataclass(frozen=True)
class Rules:
    """Feature switches distinguishing the game's evolutionary variants."""

    name: str
    ground_physics: bool = False
    lives: bool = False
    lasers: bool = False
    sound: bool = False
    speed_ramp: bool = False
    randomized_obstacles: bool = False
    avoid_overlap: bool = False
    fixed_interval: int = 90
    # None keeps the ramp unbounded
    max_scroll_speed: float | None = None
    activate_sources: tuple[str, ...] = ("touch", "mouse")

    @property
    def gravity(self) -> float:
        return GROUND_GRAVITY if self.ground_physics else GRAVITY

    @property
    def jump_impulse(self) -> float:
        return GROUND_JUMP_IMPULSE if self.ground_physics else JUMP_IMPULSE

    @property
    def start_y(self) -> float:
        return GROUND_Y if self.ground_physics else PLAYER_START_Y


VARIANTS = {
    "ground": Rules(
        name="ground",
        ground_physics=True,
        fixed_interval=120,
        activate_sources=("space",),
    ),
    "float": Rules(name="float", fixed_interval=90),
    "random": Rules(name="random", randomized_obstacles=True, avoid_overlap=True),
    "lives": Rules(
        name="lives",
        lives=True,
        speed_ramp=True,
        randomized_obstacles=True,
        avoid_overlap=True,
    ),
    "arcade": Rules(
        name="arcade",
        lives=True,
        lasers=True,
        sound=True,
        speed_ramp=True,
        randomized_obstacles=True,
        avoid_overlap=True,
    ),
}


def get_rules(name: str) -> Rules:
    """Look up a variant preset by name."""
    try:
        return VARIANTS[name]
    except KeyError:
        raise ValueError(f"Unknown variant {name!r}; choose from {', '.join(VARIANTS)}") from None


def env_settings() -> tuple[str, str, bool]:
    """Read (variant, sound directory, debug flag) from the environment."""
    variant = os.getenv(ENV_VARIANT, DEFAULT_VARIANT)
    sound_dir = os.getenv(ENV_SOUND_DIR, DEFAULT_SOUND_DIR)
    debug = os.getenv(ENV_DEBUG, "false").lower() == "true"
    return variant, sound_dir, debug
