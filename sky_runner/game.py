"""Game state, per-frame update, and the pygame shell for Sky Runner."""

from __future__ import annotations

import contextlib
import logging
import random
import sys
from dataclasses import dataclass
from typing import Optional

import pygame

from .audio import SoundBank
from .config import (
    BASE_SCROLL_SPEED,
    COL_GROUND,
    COL_LASER,
    COL_LIFE,
    COL_LIFE_LOST,
    COL_PLAYER,
    COL_SKY,
    COL_TEXT,
    DESTROY_POINTS,
    DODGE_POINTS,
    FPS,
    GROUND_HEIGHT,
    HIT_POINTS,
    LIFE_MARKER_SIZE,
    LIFE_MARKER_SPACING,
    MAX_LIVES,
    PLAYER_X,
    SPEED_RAMP_FRAMES,
    SPEED_RAMP_GAIN,
    TITLE,
    WINDOW_HEIGHT,
    WINDOW_WIDTH,
    Rules,
    env_settings,
    get_rules,
)
from .entities import Laser, Obstacle, Player
from .spawner import ObstacleSpawner
from .utils import clamp, rects_overlap

logger = logging.getLogger(__name__)

Color = tuple[int, int, int, int]


@dataclass(frozen=True)
class FrameInput:
    """Buttons that went down since the previous frame."""

    touch: bool = False
    mouse: bool = False
    space: bool = False

    def activated(self, sources: tuple[str, ...]) -> bool:
        return any(getattr(self, source) for source in sources)


@dataclass(frozen=True)
class DrawRect:
    x: float
    y: float
    w: float
    h: float
    color: Color


@dataclass(frozen=True)
class DrawText:
    text: str
    x: int
    y: int


@dataclass(frozen=True)
class Frame:
    """Everything needed to draw one frame."""

    background: Color
    rects: tuple[DrawRect, ...]
    texts: tuple[DrawText, ...]


class GameState:
    """All simulation state for one run, advanced once per frame.

    A restart never mutates an existing instance; the owner builds a new one.
    """

    def __init__(
        self,
        rules: Rules,
        audio: Optional[SoundBank] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.rules = rules
        self.audio = audio
        self.rng = rng if rng is not None else random.Random()
        self.player = Player(PLAYER_X, rules.start_y, on_ground=rules.ground_physics)
        self.obstacles: list[Obstacle] = []
        self.lasers: list[Laser] = []
        self.score = 0
        self.game_over = False
        # Variants without lives behave as a single life
        self.max_lives = MAX_LIVES if rules.lives else 1
        self.lives = self.max_lives
        self.game_time = 0
        self.scroll_x = 0.0
        self.scroll_speed = BASE_SCROLL_SPEED
        self.spawner = ObstacleSpawner(rules, self.rng)

    def cue(self, name: str) -> None:
        if self.rules.sound and self.audio is not None:
            self.audio.play(name)

    def update(self, activate: bool) -> None:
        """Advance one frame. Does nothing once the game is over."""
        if self.game_over:
            return
        self.update_player(activate)
        if self.game_over:
            return
        self.update_scroll()
        self.spawner.tick(self.obstacles)
        if self.rules.lasers:
            if activate:
                self.fire()
            self.update_lasers()
        self.update_obstacles()

    # -- physics -----------------------------------------------------------

    def update_player(self, activate: bool) -> None:
        player = self.player
        rules = self.rules
        if activate and (player.on_ground or not rules.ground_physics):
            player.jump(rules.jump_impulse)
            logger.debug(f"Jump: velocity={player.velocity:.1f}")
            self.cue("jump")

        player.integrate(rules.gravity)

        if rules.ground_physics:
            player.clamp_ground()
        elif player.clamp_ceiling() and rules.lives:
            self.lose_life()
            if self.game_over:
                return

        if player.fell_out():
            self.end_game("fell")

    def update_scroll(self) -> None:
        self.scroll_x += self.scroll_speed
        self.game_time += 1
        if self.rules.speed_ramp:
            speed = BASE_SCROLL_SPEED + (self.game_time / SPEED_RAMP_FRAMES) * SPEED_RAMP_GAIN
            if self.rules.max_scroll_speed is not None:
                speed = clamp(speed, BASE_SCROLL_SPEED, self.rules.max_scroll_speed)
            self.scroll_speed = speed

    # -- lasers ------------------------------------------------------------

    def fire(self) -> Laser:
        laser = Laser.fired_by(self.player)
        self.lasers.append(laser)
        logger.debug(f"Laser fired at ({laser.x:.1f}, {laser.y:.1f}), {len(self.lasers)} in flight")
        return laser

    def update_lasers(self) -> None:
        alive: list[Laser] = []
        for laser in self.lasers:
            laser.update()
            if laser.offscreen():
                continue
            # Newest obstacle first; one laser damages at most one obstacle
            target = next(
                (o for o in reversed(self.obstacles) if rects_overlap(laser.box, o.box)),
                None,
            )
            if target is None:
                alive.append(laser)
            else:
                self.register_hit(target)
        self.lasers = alive

    def register_hit(self, obstacle: Obstacle) -> None:
        obstacle.hit_count += 1
        if obstacle.destroyed:
            self.obstacles.remove(obstacle)
            self.score += DESTROY_POINTS
            self.cue("destroy")
        else:
            self.score += HIT_POINTS
            self.cue("hit")

    # -- obstacles ---------------------------------------------------------

    def update_obstacles(self) -> None:
        alive: list[Obstacle] = []
        for obstacle in self.obstacles:
            obstacle.update(self.scroll_speed)
            if obstacle.offscreen():
                self.score += DODGE_POINTS
                continue
            if not self.game_over and rects_overlap(self.player.box, obstacle.box):
                self.lose_life()
                continue
            alive.append(obstacle)
        self.obstacles = alive

    # -- lifecycle ---------------------------------------------------------

    def lose_life(self) -> None:
        self.lives = max(0, self.lives - 1)
        if self.rules.lives:
            logger.debug(f"Life lost, {self.lives}/{self.max_lives} left")
            self.cue("powerdown")
        if self.lives == 0:
            self.end_game("out of lives" if self.rules.lives else "collision")

    def end_game(self, reason: str) -> None:
        if self.game_over:
            return
        self.game_over = True
        logger.info(f"Game over ({reason}), score {self.score}")
        self.cue("game_over")

    # -- rendering ---------------------------------------------------------

    def life_markers(self) -> list[DrawRect]:
        start_x = WINDOW_WIDTH - 30 - LIFE_MARKER_SPACING * self.max_lives
        return [
            DrawRect(
                start_x + i * LIFE_MARKER_SPACING,
                10,
                LIFE_MARKER_SIZE,
                LIFE_MARKER_SIZE,
                COL_LIFE if i < self.lives else COL_LIFE_LOST,
            )
            for i in range(self.max_lives)
        ]

    def snapshot(self) -> Frame:
        rules = self.rules
        rects: list[DrawRect] = []
        if rules.ground_physics:
            rects.append(DrawRect(0, WINDOW_HEIGHT - GROUND_HEIGHT, WINDOW_WIDTH, GROUND_HEIGHT, COL_GROUND))
        rects.append(DrawRect(*self.player.box, COL_PLAYER))
        rects.extend(DrawRect(*o.box, o.color) for o in self.obstacles)
        rects.extend(DrawRect(*laser.box, COL_LASER) for laser in self.lasers)
        if rules.lives:
            rects.extend(self.life_markers())

        control = "Space" if rules.activate_sources == ("space",) else "Tap"
        action = "Jump + Laser" if rules.lasers else "Jump"
        texts = [DrawText(f"Score: {self.score}", 0, 0)]
        if rules.speed_ramp:
            texts.append(DrawText(f"Speed: {self.scroll_speed:.1f}", 0, 20))
        texts.append(DrawText(f"{control}: {action}", 0, 40))
        if self.game_over:
            texts.append(DrawText("GAME OVER", WINDOW_WIDTH // 2 - 50, WINDOW_HEIGHT // 2 - 20))
            texts.append(DrawText(f"{control} to restart", WINDOW_WIDTH // 2 - 50, WINDOW_HEIGHT // 2 + 20))
        return Frame(COL_SKY, tuple(rects), tuple(texts))


class Game:
    """Top-level controller: owns the window, samples input, steps and draws."""

    def __init__(
        self,
        rules: Rules,
        audio: Optional[SoundBank] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        pygame.init()
        self.screen = pygame.display.set_mode((WINDOW_WIDTH, WINDOW_HEIGHT))
        pygame.display.set_caption(TITLE)
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont(None, 22)
        self.rules = rules
        self.audio = audio
        self.rng = rng if rng is not None else random.Random()
        self._pressed = {"touch": False, "mouse": False, "space": False}
        self.state = GameState(rules, audio, self.rng)

    def restart(self) -> None:
        logger.info(f"Restarting; previous score {self.state.score}")
        self.state = GameState(self.rules, self.audio, self.rng)

    def step(self, frame_input: FrameInput) -> None:
        activate = frame_input.activated(self.rules.activate_sources)
        if self.state.game_over:
            if activate:
                self.restart()
            return
        self.state.update(activate)

    def handle_input(self, event: pygame.event.Event) -> None:
        if event.type == pygame.KEYDOWN and event.key == pygame.K_SPACE:
            self._pressed["space"] = True
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            self._pressed["mouse"] = True
        elif event.type == pygame.FINGERDOWN:
            self._pressed["touch"] = True

    def take_input(self) -> FrameInput:
        """Collect this frame's presses and clear them for the next."""
        frame_input = FrameInput(**self._pressed)
        self._pressed = dict.fromkeys(self._pressed, False)
        return frame_input

    def draw(self) -> None:
        frame = self.state.snapshot()
        self.screen.fill(frame.background)
        for r in frame.rects:
            pygame.draw.rect(self.screen, r.color, pygame.Rect(int(r.x), int(r.y), int(r.w), int(r.h)))
        for t in frame.texts:
            self.screen.blit(self.font.render(t.text, True, COL_TEXT), (t.x, t.y))
        pygame.display.flip()

    def run(self) -> None:
        while True:
            self.clock.tick(FPS)
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    return
                if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                    return
                self.handle_input(event)

            self.step(self.take_input())
            self.draw()


def setup_logging(debug: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def main() -> None:
    variant, sound_dir, debug = env_settings()
    setup_logging(debug)
    logger.info(f"Sky Runner starting ({variant})")

    try:
        rules = get_rules(variant)
        with contextlib.ExitStack() as stack:
            audio = stack.enter_context(SoundBank(sound_dir)) if rules.sound else None
            Game(rules, audio).run()
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        sys.exit(1)
    finally:
        pygame.quit()

    logger.info("Sky Runner stopped")
