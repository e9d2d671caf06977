"""
Pygame Surface
==============

Canvas-style Surface implementation on top of pygame.
Supports both display mode (human play) and headless RGB output.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, List, Optional, Sequence, Tuple

try:
    import pygame
    PYGAME_AVAILABLE = True
except ImportError:
    PYGAME_AVAILABLE = False

import numpy as np

from flappy_game.flappy_core.config_loader import GameConfig, get_config
from flappy_game.flappy_core.surface import TEXT_ALIGNMENTS, Color, Point


@dataclass(frozen=True)
class DrawState:
    """Attributes captured by save() and restored by restore()."""
    fill: Color = (0, 0, 0)
    stroke: Color = (0, 0, 0)
    stroke_width: float = 1.0
    font_size: int = 24
    text_align: str = "left"
    scale: float = 1.0


class PygameSurface:
    """
    Draws game primitives onto a pygame.Surface.

    Coordinates and font sizes are multiplied by the current scale, so
    scale(s) followed by drawing at (x, y) lands at (s*x, s*y) like a canvas
    transform. Text y is the baseline.
    """

    def __init__(self, target: "pygame.Surface", background: Color = (255, 255, 255)):
        """
        Initialize surface.

        Args:
            target: pygame surface to draw on (window or off-screen).
            background: Color used by clear().
        """
        if not PYGAME_AVAILABLE:
            raise ImportError("pygame is required for PygameSurface")

        if not pygame.font.get_init():
            pygame.font.init()

        self._target = target
        self._background = background
        self._state = DrawState()
        self._stack: List[DrawState] = []
        self._font_cache: Dict[int, "pygame.font.Font"] = {}

    @classmethod
    def offscreen(cls, config: Optional[GameConfig] = None) -> "PygameSurface":
        """Create a surface backed by an off-screen buffer the size of the canvas."""
        if not PYGAME_AVAILABLE:
            raise ImportError("pygame is required for PygameSurface")
        if config is None:
            config = get_config()
        canvas = config.canvas
        return cls(pygame.Surface((canvas.width, canvas.height)), canvas.background)

    @property
    def state(self) -> DrawState:
        """Current drawing attributes."""
        return self._state

    def _font(self, size: int) -> "pygame.font.Font":
        size = max(1, size)
        if size not in self._font_cache:
            self._font_cache[size] = pygame.font.Font(None, size)
        return self._font_cache[size]

    def _xy(self, x: float, y: float) -> Tuple[int, int]:
        s = self._state.scale
        return (int(round(x * s)), int(round(y * s)))

    # ---- state ----

    def clear(self) -> None:
        self._target.fill(self._background)

    def save(self) -> None:
        self._stack.append(self._state)

    def restore(self) -> None:
        if self._stack:
            self._state = self._stack.pop()

    def scale(self, factor: float) -> None:
        self._state = replace(self._state, scale=self._state.scale * factor)

    def set_fill(self, color: Color) -> None:
        self._state = replace(self._state, fill=tuple(color))

    def set_stroke(self, color: Color, width: float = 1.0) -> None:
        self._state = replace(self._state, stroke=tuple(color), stroke_width=width)

    def set_font(self, size: int) -> None:
        self._state = replace(self._state, font_size=int(size))

    def set_text_align(self, align: str) -> None:
        if align not in TEXT_ALIGNMENTS:
            raise ValueError(f"Unknown text alignment: {align!r}")
        self._state = replace(self._state, text_align=align)

    # ---- primitives ----

    def fill_rect(self, x: float, y: float, width: float, height: float) -> None:
        s = self._state.scale
        left, top = self._xy(x, y)
        rect = pygame.Rect(left, top, int(round(width * s)), int(round(height * s)))
        pygame.draw.rect(self._target, self._state.fill, rect)

    def fill_circle(self, x: float, y: float, radius: float) -> None:
        radius = max(1, int(round(radius * self._state.scale)))
        pygame.draw.circle(self._target, self._state.fill, self._xy(x, y), radius)

    def fill_polygon(self, points: Sequence[Point]) -> None:
        pygame.draw.polygon(
            self._target,
            self._state.fill,
            [self._xy(px, py) for px, py in points]
        )

    def stroke_line(self, start: Point, end: Point) -> None:
        width = max(1, int(round(self._state.stroke_width * self._state.scale)))
        pygame.draw.line(
            self._target,
            self._state.stroke,
            self._xy(*start),
            self._xy(*end),
            width
        )

    def fill_text(self, text: str, x: float, y: float) -> None:
        state = self._state
        font = self._font(int(round(state.font_size * state.scale)))
        rendered = font.render(text, True, state.fill)
        anchor_x, baseline = self._xy(x, y)

        if state.text_align == "center":
            left = anchor_x - rendered.get_width() // 2
        elif state.text_align == "right":
            left = anchor_x - rendered.get_width()
        else:
            left = anchor_x

        self._target.blit(rendered, (left, baseline - font.get_ascent()))

    # ---- output ----

    def to_array(self) -> np.ndarray:
        """
        Copy the surface into an RGB array.

        Returns:
            (height, width, 3) uint8 array.
        """
        array = pygame.surfarray.array3d(self._target)
        return np.transpose(array, (1, 0, 2)).astype(np.uint8)
