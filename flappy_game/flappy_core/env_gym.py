"""
Gymnasium Environment Wrapper
=============================

Provides a standard Gymnasium interface to the game.
Reward is always 0.0 - agents must compute their own from info.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple, Union
import numpy as np

import gymnasium as gym
from gymnasium import spaces

from flappy_game.flappy_core.config_loader import GameConfig, load_config
from flappy_game.flappy_core.game import Game, InputEvent
from flappy_game.flappy_core.scheduler import FrameScheduler, ManualClock
from flappy_game.flappy_core.storage import HighScoreStore, MemoryStore

NOOP = 0
FLAP = 1


class FlappyEnv(gym.Env):
    """
    Flappy game as a Gymnasium environment.

    Action Space:
        Discrete(2): 0 = do nothing, 1 = flap.

    Observation Space:
        Dict with the avatar state and the next obstacle ahead of it.

    Reward:
        Always 0.0. Agents must compute their own reward from the info dict.

    Info:
        Contains score, delta_score, high_score, state, frames, etc.

    One step is one frame on a simulated clock. The best score is kept in
    memory only.
    """

    metadata = {
        "render_modes": ["rgb_array"],
        "render_fps": 60,
    }

    def __init__(
        self,
        config_path: Optional[str] = None,
        render_mode: Optional[str] = None,
        debug: bool = False,
    ):
        """
        Initialize environment.

        Args:
            config_path: Path to game_config.yaml. Uses default if None.
            render_mode: "rgb_array" for numpy frames, None for headless.
            debug: If True, enables verbose debug output for agent development.
        """
        super().__init__()

        if render_mode is not None and render_mode not in self.metadata["render_modes"]:
            raise ValueError(f"Unsupported render_mode: {render_mode!r}")

        self._config = load_config(config_path)
        self.render_mode = render_mode
        self._debug = debug

        self._clock = ManualClock()
        self._scheduler = FrameScheduler(clock=self._clock)

        self._surface = None
        if render_mode == "rgb_array":
            from flappy_game.flappy_core.render_pygame import PygameSurface
            self._surface = PygameSurface.offscreen(self._config)

        self._game = Game(
            config=self._config,
            surface=self._surface,
            scheduler=self._scheduler,
            high_score_store=HighScoreStore(MemoryStore(), self._config.storage.key),
        )

        self.action_space = spaces.Discrete(2)
        self.observation_space = self._build_observation_space()

        if self._debug:
            print(f"[DEBUG] FlappyEnv initialized")
            print(f"[DEBUG]   Canvas: {self._config.canvas.width}x{self._config.canvas.height}")
            print(f"[DEBUG]   Gap: {self._config.obstacle.gap}, speed: {self._config.obstacle.speed}")

    def _build_observation_space(self) -> spaces.Dict:
        """Build the observation space definition."""
        canvas = self._config.canvas
        return spaces.Dict({
            "avatar_y": spaces.Box(low=-np.inf, high=np.inf, shape=(), dtype=np.float32),
            "avatar_velocity": spaces.Box(low=-np.inf, high=np.inf, shape=(), dtype=np.float32),
            "next_obstacle_dx": spaces.Box(low=-np.inf, high=np.inf, shape=(), dtype=np.float32),
            "next_gap_top": spaces.Box(low=0, high=canvas.height, shape=(), dtype=np.float32),
            "next_gap_bottom": spaces.Box(low=0, high=canvas.height, shape=(), dtype=np.float32),
            "score": spaces.Box(low=0, high=np.iinfo(np.int64).max, shape=(), dtype=np.int64),
        })

    def _observe(self) -> Dict[str, np.ndarray]:
        """Observation for the current frame."""
        game = self._game
        avatar = game.avatar
        canvas = self._config.canvas

        # First obstacle whose right edge is still ahead of the avatar's left side
        ahead = [o for o in game.obstacles if o.right_edge >= avatar.x - avatar.radius]
        if ahead:
            nxt = ahead[0]
            dx = nxt.x - avatar.x
            gap_top = nxt.top_height
            gap_bottom = nxt.bottom_y
        else:
            # Nothing ahead yet: report the spawn point with the whole canvas open
            dx = canvas.width - avatar.x
            gap_top = 0.0
            gap_bottom = float(canvas.height)

        return {
            "avatar_y": np.array(avatar.y, dtype=np.float32),
            "avatar_velocity": np.array(avatar.velocity, dtype=np.float32),
            "next_obstacle_dx": np.array(dx, dtype=np.float32),
            "next_gap_top": np.array(gap_top, dtype=np.float32),
            "next_gap_bottom": np.array(gap_bottom, dtype=np.float32),
            "score": np.array(game.score, dtype=np.int64),
        }

    def _advance_frame(self) -> None:
        self._clock.advance(self._config.frame_ms)
        self._scheduler.run_timers()
        self._scheduler.run_frame()

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None
    ) -> Tuple[Dict[str, np.ndarray], Dict[str, Any]]:
        """
        Reset the environment.

        Args:
            seed: Random seed for obstacle heights.
            options: Additional options (unused).

        Returns:
            (observation, info) tuple.
        """
        super().reset(seed=seed)

        self._game.reset(seed=seed)

        obs = self._observe()
        info = self._game.get_info()
        info["delta_score"] = 0

        return obs, info

    def step(
        self,
        action: Union[int, np.ndarray]
    ) -> Tuple[Dict[str, np.ndarray], float, bool, bool, Dict[str, Any]]:
        """
        Execute one frame.

        Args:
            action: 0 = no-op, 1 = flap.

        Returns:
            (observation, reward, terminated, truncated, info) tuple.
            Reward is always 0.0.
        """
        if isinstance(action, np.ndarray):
            action = int(action.item())

        if not self.action_space.contains(int(action)):
            raise ValueError(f"Invalid action: {action}")

        score_before = self._game.score

        # Flapping after game over would restart the round
        if action == FLAP and not self._game.is_over:
            self._game.handle_input(InputEvent.pointer())

        self._advance_frame()

        obs = self._observe()
        terminated = self._game.is_over

        # Reward is always 0.0 - agents compute their own
        reward = 0.0

        info = self._game.get_info()
        info["delta_score"] = self._game.score - score_before

        if self._debug:
            print(f"[DEBUG] Step: action={action}, y={info['avatar_y']:.1f}, "
                  f"score={info['score']}")
            if terminated:
                print(f"[DEBUG] TERMINATED at frame {info['frames']}")

        return obs, reward, terminated, False, info

    def render(self) -> Optional[np.ndarray]:
        """
        Render the current game state.

        Returns:
            RGB array if render_mode is "rgb_array", None otherwise.
        """
        if self.render_mode == "rgb_array":
            self._game.render()
            return self._surface.to_array()
        return None

    def close(self) -> None:
        """Clean up resources."""
        self._scheduler.clear()
        self._surface = None

    @property
    def game(self) -> Game:
        """Access to underlying game (for debugging/tools)."""
        return self._game

    @property
    def config(self) -> GameConfig:
        """Game configuration."""
        return self._config
