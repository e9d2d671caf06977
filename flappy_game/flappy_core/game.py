"""
Core Game
=========

Main game orchestrator: avatar, obstacles, score and high score, input
routing and the frame loop.

One frame = update (physics, spawn, recycle, score, collision) then render.
The loop re-arms itself through the injected scheduler; reset() cancels the
pending frame before arming a new one.
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from flappy_game.flappy_core.avatar import Avatar
from flappy_game.flappy_core.celebration import Celebration
from flappy_game.flappy_core.config_loader import GameConfig, get_config
from flappy_game.flappy_core.obstacle import Obstacle
from flappy_game.flappy_core.scheduler import FrameScheduler
from flappy_game.flappy_core.storage import HighScoreStore, MemoryStore
from flappy_game.flappy_core.surface import NullSurface, Surface

GAME_OVER_TITLE = "Game Over!"
RESTART_PROMPT = "Click / Tap / Space to Restart"


class GameState(str, Enum):
    PLAYING = "playing"
    GAME_OVER = "game_over"


class InputKind(str, Enum):
    POINTER_DOWN = "pointer_down"
    KEY_DOWN = "key_down"


@dataclass(frozen=True)
class InputEvent:
    """A pointer press or a key press. `key` is the key name for key presses."""
    kind: InputKind
    key: str = ""

    @staticmethod
    def pointer() -> "InputEvent":
        return InputEvent(InputKind.POINTER_DOWN)

    @staticmethod
    def key_down(key: str) -> "InputEvent":
        return InputEvent(InputKind.KEY_DOWN, key)


class Game:
    """
    Main game simulation class.

    Orchestrates:
    - Avatar physics
    - Obstacle spawning, scrolling and recycling
    - Scoring and the persisted high score
    - Collision and game over
    - Rendering to a Surface

    The game starts playing as soon as it is constructed: the persisted high
    score is loaded and one reset arms the frame loop.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        surface: Optional[Surface] = None,
        scheduler: Optional[FrameScheduler] = None,
        high_score_store: Optional[HighScoreStore] = None,
        celebrate: Optional[Celebration] = None,
        seed: Optional[int] = None
    ):
        """
        Initialize game.

        Args:
            config: Game configuration. Uses default if None.
            surface: Where frames are drawn. Draws nothing if None.
            scheduler: Frame and timer scheduler. Wall-clock scheduler if None.
            high_score_store: Best score persistence. In-memory if None.
            celebrate: Trigger fired on game over with a new high score.
            seed: Random seed for obstacle heights.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._surface = surface if surface is not None else NullSurface()
        self._scheduler = scheduler if scheduler is not None else FrameScheduler()
        if high_score_store is None:
            high_score_store = HighScoreStore(MemoryStore(), config.storage.key)
        self._store = high_score_store
        self._celebrate = celebrate
        self._rng = random.Random(seed)

        canvas = config.canvas
        self._avatar = Avatar(config.avatar, x=config.avatar.start_x, y=canvas.height / 2)
        self._obstacles: List[Obstacle] = []

        # Game state
        self._score: int = 0
        self._high_score: int = 0
        self._game_over: bool = False
        self._high_score_animating: bool = False
        self._high_score_celebrated: bool = False

        # Scheduler handles
        self._frame_handle: Optional[int] = None
        self._pulse_timer: Optional[int] = None
        self._frames_run: int = 0

        self._load_high_score()
        self.reset()

    # ---- properties ----

    @property
    def config(self) -> GameConfig:
        return self._config

    @property
    def avatar(self) -> Avatar:
        return self._avatar

    @property
    def obstacles(self) -> Tuple[Obstacle, ...]:
        """Active obstacles in spawn order (left to right)."""
        return tuple(self._obstacles)

    @property
    def score(self) -> int:
        return self._score

    @property
    def high_score(self) -> int:
        return self._high_score

    @property
    def is_over(self) -> bool:
        return self._game_over

    @property
    def state(self) -> GameState:
        return GameState.GAME_OVER if self._game_over else GameState.PLAYING

    @property
    def is_high_score_animating(self) -> bool:
        return self._high_score_animating

    @property
    def high_score_celebrated(self) -> bool:
        return self._high_score_celebrated

    @property
    def frames_run(self) -> int:
        """Frames processed since construction."""
        return self._frames_run

    # ---- lifecycle ----

    def reset(self, seed: Optional[int] = None) -> None:
        """
        Start a new round.

        Args:
            seed: New random seed for obstacle heights. Keeps current if None.
        """
        if seed is not None:
            self._rng = random.Random(seed)

        self._avatar.reset(self._config.canvas.height / 2)
        self._obstacles = []
        self._score = 0
        self._game_over = False
        self._high_score_animating = False
        self._high_score_celebrated = False

        self._scheduler.cancel_timer(self._pulse_timer)
        self._pulse_timer = None

        # Never leave two loops running
        self._scheduler.cancel_frame(self._frame_handle)
        self._frame_handle = self._scheduler.request_frame(self._game_loop)

    def handle_input(self, event: InputEvent) -> None:
        """
        Route a pointer or key press.

        Playing: pointer or activation key flaps.
        Game over: pointer or activation key restarts. Other keys are ignored.
        """
        is_pointer = event.kind == InputKind.POINTER_DOWN
        is_activation = (
            event.kind == InputKind.KEY_DOWN
            and event.key == self._config.input.activation_key
        )
        if not (is_pointer or is_activation):
            return

        if self._game_over:
            self.reset()
        else:
            self._avatar.flap()

    # ---- high score ----

    def _load_high_score(self) -> None:
        stored = self._store.load()
        self._high_score = stored if stored is not None else 0

    def reset_high_score(self) -> None:
        """Forget the best score, here and in storage, and redraw it."""
        self._high_score = 0
        self._store.clear()
        self._draw_high_score()

    def _update_high_score(self) -> None:
        if self._score > self._high_score:
            self._high_score = self._score
            self._store.save(self._high_score)
            self._start_high_score_animation()

    def _start_high_score_animation(self) -> None:
        self._high_score_animating = True
        self._scheduler.cancel_timer(self._pulse_timer)
        self._pulse_timer = self._scheduler.call_later(
            self._config.animation.pulse_duration_ms,
            self._end_high_score_animation
        )

    def _end_high_score_animation(self) -> None:
        self._high_score_animating = False
        self._pulse_timer = None

    # ---- update ----

    def update(self) -> None:
        """Advance the simulation by one frame. Does nothing once the game is over."""
        if self._game_over:
            return

        self._avatar.update()
        self._spawn_obstacles()
        self._update_obstacles()
        self._update_score()
        self._update_high_score()

        if self.check_collision():
            self._game_over = True

    def _spawn_obstacles(self) -> None:
        canvas = self._config.canvas
        last = self._obstacles[-1] if self._obstacles else None
        if last is None or last.x < canvas.width - self._config.obstacle.spawn_interval:
            low, high = self._config.top_height_range
            top_height = self._rng.uniform(low, high)
            self._obstacles.append(Obstacle(
                self._config.obstacle,
                x=float(canvas.width),
                top_height=top_height,
                canvas_height=canvas.height
            ))

    def _update_obstacles(self) -> None:
        for obstacle in self._obstacles:
            obstacle.update()
        self._obstacles = [o for o in self._obstacles if o.right_edge >= 0]

    def _update_score(self) -> None:
        for obstacle in self._obstacles:
            if not obstacle.passed and self._avatar.x > obstacle.right_edge:
                obstacle.passed = True
                self._score += 1

    def check_collision(self) -> bool:
        """True if the avatar left the canvas vertically or hit an obstacle."""
        if self._avatar.bottom > self._config.canvas.height or self._avatar.top < 0:
            return True
        return any(o.is_colliding(self._avatar) for o in self._obstacles)

    # ---- render ----

    def render(self) -> None:
        """Draw the current frame."""
        surface = self._surface
        surface.clear()

        for obstacle in self._obstacles:
            obstacle.draw(surface)
        self._avatar.draw(surface)
        self._draw_score()
        self._draw_high_score()

        if self._game_over:
            self._draw_game_over()

    def _draw_score(self) -> None:
        hud = self._config.hud
        surface = self._surface
        surface.set_fill(hud.score_color)
        surface.set_font(hud.font_size)
        surface.set_text_align("left")
        surface.fill_text(f"Score: {self._score}", hud.padding, hud.baseline_y)

    def high_score_scale(self) -> float:
        """Current pulse scale of the high score text (1.0 when not animating)."""
        if not self._high_score_animating:
            return 1.0
        anim = self._config.animation
        phase = self._scheduler.now() / (anim.pulse_duration_ms / 2)
        return 1 + abs(math.sin(phase)) * (anim.pulse_scale - 1)

    def _draw_high_score(self) -> None:
        hud = self._config.hud
        surface = self._surface
        x = self._config.canvas.width - hud.padding
        y = hud.baseline_y

        surface.save()
        surface.set_fill(hud.high_score_color)
        surface.set_font(hud.font_size)
        surface.set_text_align("right")
        scale = self.high_score_scale()
        if scale != 1.0:
            # Keep the anchor in place on screen
            surface.scale(scale)
            x, y = x / scale, y / scale
        surface.fill_text(f"High Score: {self._high_score}", x, y)
        surface.restore()

    def _draw_game_over(self) -> None:
        hud = self._config.hud
        surface = self._surface
        cx = self._config.canvas.width / 2
        cy = self._config.canvas.height / 2

        surface.save()
        surface.set_fill(hud.game_over_color)
        surface.set_text_align("center")
        surface.set_font(hud.font_size_large)
        surface.fill_text(GAME_OVER_TITLE, cx, cy - 75)
        surface.set_font(hud.font_size)
        surface.fill_text(f"Score: {self._score}", cx, cy - 25)
        surface.fill_text(f"High Score: {self._high_score}", cx, cy + 25)
        surface.fill_text(RESTART_PROMPT, cx, cy + 75)
        surface.restore()

        if self._score > 0 and self._score == self._high_score:
            self._celebrate_high_score()

    def _celebrate_high_score(self) -> None:
        if self._high_score_celebrated:
            return
        self._high_score_celebrated = True
        if self._celebrate is not None:
            celebration = self._config.celebration
            self._celebrate(
                celebration.particle_count,
                celebration.spread,
                celebration.origin
            )

    # ---- loop ----

    def _game_loop(self, timestamp: float) -> None:
        self._frame_handle = None
        self.update()
        self.render()
        self._frames_run += 1
        # A reset during this frame has already armed the next one
        if self._frame_handle is None:
            self._frame_handle = self._scheduler.request_frame(self._game_loop)

    def get_info(self) -> Dict[str, Any]:
        """Get state summary for tools and the Gymnasium wrapper."""
        return {
            "score": self._score,
            "high_score": self._high_score,
            "state": self.state.value,
            "avatar_y": self._avatar.y,
            "avatar_velocity": self._avatar.velocity,
            "obstacle_count": len(self._obstacles),
            "frames": self._frames_run,
        }
