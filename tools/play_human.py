"""
Human Play Mode
================

Play Flappy Arcade interactively in a pygame window.

Controls:
    - Click/Space: Flap (restart after game over)
    - H: Reset high score
    - ESC: Quit

Usage:
    python -m tools.play_human [--seed SEED] [--fps FPS] [--config PATH] [--store PATH]
"""

from __future__ import annotations

import argparse
import sys
from typing import Optional

try:
    import pygame
    PYGAME_AVAILABLE = True
except ImportError:
    PYGAME_AVAILABLE = False

from flappy_game.flappy_core.celebration import ConfettiBurst
from flappy_game.flappy_core.config_loader import GameConfig, load_config
from flappy_game.flappy_core.game import Game, InputEvent
from flappy_game.flappy_core.scheduler import FrameScheduler
from flappy_game.flappy_core.storage import HighScoreStore, JsonFileStore


def translate_event(event: "pygame.event.Event") -> Optional[InputEvent]:
    """Map a pygame event to a game input, or None if the game ignores it."""
    # Buttons 4 and up are wheel/extra buttons
    if event.type == pygame.MOUSEBUTTONDOWN and event.button in (1, 2, 3):
        return InputEvent.pointer()
    if event.type == pygame.KEYDOWN:
        return InputEvent.key_down(pygame.key.name(event.key))
    return None


class HumanPlayer:
    """
    Hosts the game in a window: pumps the scheduler once per display
    refresh and forwards input between frames.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        store_path: Optional[str] = None,
        target_fps: Optional[int] = None
    ):
        if not PYGAME_AVAILABLE:
            raise ImportError("pygame required. Install: pip install pygame")

        # Deferred so the module stays importable without pygame
        from flappy_game.flappy_core.render_pygame import PygameSurface

        if config is None:
            config = load_config()

        self._config = config
        self._target_fps = target_fps or config.display.fps

        pygame.init()
        canvas = config.canvas
        self._screen = pygame.display.set_mode((canvas.width, canvas.height))
        pygame.display.set_caption(config.display.caption)
        self._clock = pygame.time.Clock()

        self._surface = PygameSurface(self._screen, canvas.background)
        self._scheduler = FrameScheduler()
        self._confetti = ConfettiBurst(canvas.width, canvas.height, seed=seed)

        store = JsonFileStore(store_path or config.storage.resolved_path)
        self._store_path = store.path

        self._game = Game(
            config=config,
            surface=self._surface,
            scheduler=self._scheduler,
            high_score_store=HighScoreStore(store, config.storage.key),
            celebrate=self._confetti,
            seed=seed
        )

        self._running = True
        self._last_high_score = self._game.high_score
        self._was_over = False

    def run(self) -> int:
        """Run the game loop. Returns the best score."""
        print("=== Flappy Arcade ===")
        print("Click or Space to flap, H to reset high score, ESC to quit")
        print(f"High score: {self._game.high_score} ({self._store_path})")
        print()

        while self._running:
            self._handle_events()

            delta_ms = self._clock.tick(self._target_fps)
            self._scheduler.run_timers()
            self._scheduler.run_frame()

            self._confetti.update(delta_ms)
            self._confetti.draw(self._surface)
            pygame.display.flip()

            self._report()

        pygame.quit()
        return self._game.high_score

    def _handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False

            elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                self._running = False

            elif event.type == pygame.KEYDOWN and event.key == pygame.K_h:
                self._game.reset_high_score()
                self._last_high_score = 0
                print("High score reset")

            else:
                game_input = translate_event(event)
                if game_input is not None:
                    self._game.handle_input(game_input)

    def _report(self) -> None:
        """Print score milestones."""
        game = self._game
        if game.high_score > self._last_high_score:
            print(f"  New high score: {game.high_score}")
            self._last_high_score = game.high_score

        if game.is_over and not self._was_over:
            print(f"\nGAME OVER - Score: {game.score}")
        elif self._was_over and not game.is_over:
            print("\n=== Game Restarted ===\n")
            self._confetti.clear()
        self._was_over = game.is_over


def main():
    parser = argparse.ArgumentParser(description="Play Flappy Arcade interactively")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--fps", type=int, default=None, help="Target FPS (default: from config)")
    parser.add_argument("--config", type=str, default=None, help="Path to game_config.yaml")
    parser.add_argument("--store", type=str, default=None, help="High score file")

    args = parser.parse_args()

    try:
        config = load_config(args.config)
        player = HumanPlayer(
            config=config,
            seed=args.seed,
            store_path=args.store,
            target_fps=args.fps
        )
        best = player.run()
        print(f"\nHigh Score: {best}")
        return 0
    except ImportError as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
