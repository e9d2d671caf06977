"""
Flappy Game Package
===================

Core game logic, rendering and environment wrappers for Flappy Arcade.

- flappy_core: avatar, obstacles, game controller, scheduler, storage,
  pygame rendering and the Gymnasium environment

All tunable parameters are in game_config.yaml.
"""
