"""
Configuration Loader
====================

Loads and validates game_config.yaml, providing typed access to all parameters.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Tuple, Optional

import yaml


Color = Tuple[int, int, int]


@dataclass(frozen=True)
class CanvasConfig:
    """Drawing area geometry."""
    width: int
    height: int
    background: Color


@dataclass(frozen=True)
class AvatarConfig:
    """Avatar physics and appearance."""
    radius: float
    color: Color
    flap_strength: float         # Velocity set on flap (negative = up)
    gravity: float               # Added to velocity every frame
    start_x: float


@dataclass(frozen=True)
class ObstacleConfig:
    """Obstacle geometry, scroll speed and spawn spacing."""
    width: float
    gap: float
    speed: float
    color: Color
    spawn_interval: float        # Horizontal distance between spawns
    min_segment: float           # Smallest extent of either segment


@dataclass(frozen=True)
class HudConfig:
    """Score and overlay text styling."""
    score_color: Color
    high_score_color: Color
    game_over_color: Color
    font_size: int
    font_size_large: int
    padding: float
    baseline_y: float


@dataclass(frozen=True)
class AnimationConfig:
    """High score pulse animation."""
    pulse_duration_ms: float
    pulse_scale: float


@dataclass(frozen=True)
class CelebrationConfig:
    """Parameters handed to the celebration trigger."""
    particle_count: int
    spread: float
    origin_x: float
    origin_y: float

    @property
    def origin(self) -> Tuple[float, float]:
        return (self.origin_x, self.origin_y)


@dataclass(frozen=True)
class InputConfig:
    """Input mapping."""
    activation_key: str


@dataclass(frozen=True)
class DisplayConfig:
    """Window settings for the interactive host."""
    fps: int
    caption: str


@dataclass(frozen=True)
class StorageConfig:
    """Where the best score lives."""
    key: str
    path: str

    @property
    def resolved_path(self) -> Path:
        return Path(os.path.expanduser(self.path))


@dataclass(frozen=True)
class GameConfig:
    """
    Complete game configuration loaded from YAML.

    All values are immutable to prevent accidental modification during runtime.
    """
    canvas: CanvasConfig
    avatar: AvatarConfig
    obstacle: ObstacleConfig
    hud: HudConfig
    animation: AnimationConfig
    celebration: CelebrationConfig
    input: InputConfig
    display: DisplayConfig
    storage: StorageConfig

    @property
    def frame_ms(self) -> float:
        """Duration of one frame at the configured fps."""
        return 1000.0 / self.display.fps

    @property
    def top_height_range(self) -> Tuple[float, float]:
        """Bounds for a random top segment height."""
        low = self.obstacle.min_segment
        high = self.canvas.height - self.obstacle.gap - self.obstacle.min_segment
        return (low, high)


def _parse_color(color_data: List) -> Color:
    """Parse RGB color from YAML."""
    if len(color_data) != 3:
        raise ValueError(f"Color must have 3 values [R, G, B], got {color_data}")
    color = (int(color_data[0]), int(color_data[1]), int(color_data[2]))
    if any(c < 0 or c > 255 for c in color):
        raise ValueError(f"Color components must be in [0, 255], got {color_data}")
    return color


def _validate_config(config: GameConfig) -> None:
    """Validate configuration consistency."""
    canvas = config.canvas
    if canvas.width <= 0 or canvas.height <= 0:
        raise ValueError(f"Canvas size must be positive, got {canvas.width}x{canvas.height}")

    if config.avatar.radius <= 0:
        raise ValueError(f"avatar.radius must be positive, got {config.avatar.radius}")

    obstacle = config.obstacle
    if obstacle.width <= 0 or obstacle.gap <= 0 or obstacle.speed <= 0:
        raise ValueError("obstacle width, gap and speed must be positive")

    if obstacle.min_segment <= 0:
        raise ValueError(f"obstacle.min_segment must be positive, got {obstacle.min_segment}")

    # Both segments need at least min_segment of extent around the gap
    low, high = config.top_height_range
    if high <= low:
        raise ValueError(
            f"obstacle.gap ({obstacle.gap}) leaves no room for two segments of "
            f"{obstacle.min_segment} on a canvas of height {canvas.height}"
        )

    if not 0 < obstacle.spawn_interval < canvas.width:
        raise ValueError(
            f"obstacle.spawn_interval ({obstacle.spawn_interval}) must be in "
            f"(0, canvas.width={canvas.width})"
        )

    if config.animation.pulse_duration_ms <= 0:
        raise ValueError("animation.pulse_duration_ms must be positive")

    if config.display.fps <= 0:
        raise ValueError(f"display.fps must be positive, got {config.display.fps}")

    if not config.input.activation_key:
        raise ValueError("input.activation_key must not be empty")

    if not config.storage.key:
        raise ValueError("storage.key must not be empty")


def load_config(config_path: Optional[str] = None) -> GameConfig:
    """
    Load and validate game configuration from YAML.

    Args:
        config_path: Path to game_config.yaml. If None, uses default location.

    Returns:
        Validated GameConfig instance.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If config validation fails.
    """
    if config_path is None:
        config_path = os.path.join(
            os.path.dirname(os.path.dirname(__file__)),
            "game_config.yaml"
        )

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r") as f:
        raw = yaml.safe_load(f)

    canvas_data = raw["canvas"]
    canvas = CanvasConfig(
        width=int(canvas_data["width"]),
        height=int(canvas_data["height"]),
        background=_parse_color(canvas_data.get("background", [255, 255, 255]))
    )

    avatar_data = raw["avatar"]
    avatar = AvatarConfig(
        radius=float(avatar_data["radius"]),
        color=_parse_color(avatar_data["color"]),
        flap_strength=float(avatar_data["flap_strength"]),
        gravity=float(avatar_data["gravity"]),
        start_x=float(avatar_data["start_x"])
    )

    obstacle_data = raw["obstacle"]
    obstacle = ObstacleConfig(
        width=float(obstacle_data["width"]),
        gap=float(obstacle_data["gap"]),
        speed=float(obstacle_data["speed"]),
        color=_parse_color(obstacle_data["color"]),
        spawn_interval=float(obstacle_data["spawn_interval"]),
        min_segment=float(obstacle_data.get("min_segment", 50))
    )

    hud_data = raw["hud"]
    hud = HudConfig(
        score_color=_parse_color(hud_data["score_color"]),
        high_score_color=_parse_color(hud_data["high_score_color"]),
        game_over_color=_parse_color(hud_data["game_over_color"]),
        font_size=int(hud_data.get("font_size", 24)),
        font_size_large=int(hud_data.get("font_size_large", 48)),
        padding=float(hud_data.get("padding", 10)),
        baseline_y=float(hud_data.get("baseline_y", 30))
    )

    anim_data = raw.get("animation", {})
    animation = AnimationConfig(
        pulse_duration_ms=float(anim_data.get("pulse_duration_ms", 500)),
        pulse_scale=float(anim_data.get("pulse_scale", 1.2))
    )

    celebration_data = raw.get("celebration", {})
    celebration = CelebrationConfig(
        particle_count=int(celebration_data.get("particle_count", 150)),
        spread=float(celebration_data.get("spread", 70)),
        origin_x=float(celebration_data.get("origin_x", 0.5)),
        origin_y=float(celebration_data.get("origin_y", 0.6))
    )

    input_data = raw.get("input", {})
    input_config = InputConfig(
        activation_key=str(input_data.get("activation_key", "space"))
    )

    display_data = raw.get("display", {})
    display = DisplayConfig(
        fps=int(display_data.get("fps", 60)),
        caption=str(display_data.get("caption", "Flappy Arcade"))
    )

    storage_data = raw.get("storage", {})
    storage = StorageConfig(
        key=str(storage_data.get("key", "highScore")),
        path=str(storage_data.get("path", "~/.flappy_arcade/highscore.json"))
    )

    config = GameConfig(
        canvas=canvas,
        avatar=avatar,
        obstacle=obstacle,
        hud=hud,
        animation=animation,
        celebration=celebration,
        input=input_config,
        display=display,
        storage=storage
    )

    _validate_config(config)
    return config


# Module-level singleton for convenience
_cached_config: Optional[GameConfig] = None


def get_config() -> GameConfig:
    """Get the cached game configuration, loading if necessary."""
    global _cached_config
    if _cached_config is None:
        _cached_config = load_config()
    return _cached_config


def reload_config(config_path: Optional[str] = None) -> GameConfig:
    """Reload the configuration (useful for testing)."""
    global _cached_config
    _cached_config = load_config(config_path)
    return _cached_config
