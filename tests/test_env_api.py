"""
Tests for Gymnasium environment API.
"""

import pytest
import numpy as np

from flappy_game.flappy_core.config_loader import load_config
from flappy_game.flappy_core.env_gym import FLAP, NOOP, FlappyEnv


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def env():
    env = FlappyEnv()
    yield env
    env.close()


class TestFlappyEnv:
    """Test single environment API."""

    def test_reset_returns_obs_and_info(self, env):
        """Reset should return (observation, info) tuple."""
        result = env.reset(seed=42)

        assert isinstance(result, tuple)
        assert len(result) == 2

        obs, info = result
        assert isinstance(obs, dict)
        assert isinstance(info, dict)
        assert info["delta_score"] == 0

    def test_observation_structure(self, env):
        """Observation should have expected keys and fit the space."""
        obs, _ = env.reset(seed=42)

        for key in ("avatar_y", "avatar_velocity", "next_obstacle_dx",
                    "next_gap_top", "next_gap_bottom", "score"):
            assert key in obs
            assert obs[key].shape == ()

        assert env.observation_space.contains(obs)

    def test_nothing_ahead_after_reset(self, env, config):
        """Before the first spawn the whole canvas height is open."""
        obs, _ = env.reset(seed=42)
        assert obs["next_gap_top"] == 0.0
        assert obs["next_gap_bottom"] == config.canvas.height
        assert obs["next_obstacle_dx"] == config.canvas.width - config.avatar.start_x

    def test_step_returns_five_values(self, env):
        """Step should return (obs, reward, terminated, truncated, info)."""
        env.reset(seed=42)

        result = env.step(NOOP)

        assert isinstance(result, tuple)
        assert len(result) == 5

        obs, reward, terminated, truncated, info = result
        assert isinstance(obs, dict)
        assert isinstance(reward, float)
        assert terminated is False
        assert truncated is False
        assert isinstance(info, dict)

    def test_first_step_spawns_obstacle(self, env, config):
        env.reset(seed=42)
        obs, _, _, _, info = env.step(NOOP)

        assert info["obstacle_count"] == 1
        assert obs["next_gap_bottom"] - obs["next_gap_top"] == pytest.approx(config.obstacle.gap, abs=1e-3)
        assert env.observation_space.contains(obs)

    def test_reward_is_always_zero(self, env):
        """Reward should always be 0.0."""
        env.reset(seed=42)

        for i in range(50):
            _, reward, terminated, _, _ = env.step(FLAP if i % 12 == 0 else NOOP)
            assert reward == 0.0
            if terminated:
                break

    def test_flap_sets_velocity(self, env, config):
        env.reset(seed=42)
        obs, _, _, _, _ = env.step(FLAP)
        # Flap lands before the frame, gravity is applied in the frame
        expected = config.avatar.flap_strength + config.avatar.gravity
        assert obs["avatar_velocity"] == pytest.approx(expected)

    def test_numpy_action_accepted(self, env):
        env.reset(seed=42)
        env.step(np.array(1))

    def test_action_bounds(self, env):
        """Actions outside Discrete(2) are rejected."""
        env.reset(seed=42)

        with pytest.raises(ValueError):
            env.step(2)
        with pytest.raises(ValueError):
            env.step(-1)

    def test_deterministic_with_seed(self):
        """Same seed gives the same obstacle layout."""
        gaps = []
        for _ in range(2):
            env = FlappyEnv()
            env.reset(seed=7)
            obs, _, _, _, _ = env.step(NOOP)
            gaps.append(float(obs["next_gap_top"]))
            env.close()

        assert gaps[0] == gaps[1]

    def test_episode_terminates(self, env):
        """Never flapping falls through the floor."""
        env.reset(seed=42)

        terminated = False
        steps = 0
        while not terminated and steps < 200:
            _, _, terminated, truncated, info = env.step(NOOP)
            assert truncated is False
            steps += 1

        assert terminated
        assert steps == 34
        assert info["state"] == "game_over"

    def test_steps_after_termination_stay_over(self, env):
        env.reset(seed=42)
        for _ in range(34):
            env.step(NOOP)

        _, _, terminated, _, info = env.step(FLAP)
        assert terminated
        assert info["delta_score"] == 0

    def test_reset_after_termination(self, env, config):
        env.reset(seed=42)
        for _ in range(34):
            env.step(NOOP)

        obs, info = env.reset(seed=1)
        assert info["state"] == "playing"
        assert obs["avatar_y"] == config.canvas.height / 2
        assert obs["avatar_velocity"] == 0.0

    def test_render_none_without_mode(self, env):
        env.reset(seed=42)
        assert env.render() is None

    def test_unknown_render_mode(self):
        with pytest.raises(ValueError):
            FlappyEnv(render_mode="human")


class TestRgbArray:
    """Test off-screen rendering."""

    @pytest.fixture
    def rgb_env(self, monkeypatch):
        pytest.importorskip("pygame")
        monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
        env = FlappyEnv(render_mode="rgb_array")
        yield env
        env.close()

    def test_frame_shape(self, rgb_env, config):
        rgb_env.reset(seed=42)
        frame = rgb_env.render()

        assert frame.shape == (config.canvas.height, config.canvas.width, 3)
        assert frame.dtype == np.uint8

    def test_background_color(self, rgb_env, config):
        rgb_env.reset(seed=42)
        frame = rgb_env.render()

        # Bottom-right corner is clear of the avatar and the HUD
        assert tuple(frame[config.canvas.height - 5, config.canvas.width - 5]) == config.canvas.background

    def test_avatar_drawn(self, rgb_env, config):
        rgb_env.reset(seed=42)
        frame = rgb_env.render()

        # Lower half of the body, away from eye and wing
        x = int(config.avatar.start_x)
        y = int(config.canvas.height / 2) + 8
        assert tuple(frame[y, x]) == config.avatar.color


class TestDebug:
    def test_debug_output(self, capsys):
        env = FlappyEnv(debug=True)
        env.reset(seed=0)
        env.step(NOOP)
        env.close()

        out = capsys.readouterr().out
        assert "[DEBUG]" in out
