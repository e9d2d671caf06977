"""
Flappy Core - The heart of the game.

This module provides the game simulation, its external adapters and a
Gymnasium environment wrapper.

Main exports:
- Game: Game controller (update/render frame loop)
- FlappyEnv: Gymnasium environment for agent training
- GameConfig: Configuration loaded from game_config.yaml
- FrameScheduler, ManualClock: Frame/timer scheduling
- HighScoreStore, JsonFileStore, MemoryStore: Best score persistence
"""

from flappy_game.flappy_core.config_loader import GameConfig, load_config
from flappy_game.flappy_core.geometry import Rect, intersects
from flappy_game.flappy_core.avatar import Avatar
from flappy_game.flappy_core.obstacle import Obstacle
from flappy_game.flappy_core.scheduler import FrameScheduler, ManualClock
from flappy_game.flappy_core.storage import HighScoreStore, JsonFileStore, MemoryStore
from flappy_game.flappy_core.surface import NullSurface, Surface
from flappy_game.flappy_core.celebration import ConfettiBurst
from flappy_game.flappy_core.game import Game, GameState, InputEvent, InputKind
from flappy_game.flappy_core.env_gym import FlappyEnv

__all__ = [
    "GameConfig",
    "load_config",
    "Rect",
    "intersects",
    "Avatar",
    "Obstacle",
    "FrameScheduler",
    "ManualClock",
    "HighScoreStore",
    "JsonFileStore",
    "MemoryStore",
    "NullSurface",
    "Surface",
    "ConfettiBurst",
    "Game",
    "GameState",
    "InputEvent",
    "InputKind",
    "FlappyEnv",
]
