"""
Render Surface
==============

The drawing interface the game core renders through. It mirrors a 2D canvas
context: styled primitives, text with alignment, a scale transform and a
save/restore stack for drawing state.

Implementations:
- PygameSurface (render_pygame.py): draws onto a pygame.Surface
- NullSurface: discards everything (headless training)
"""

from __future__ import annotations

from typing import Protocol, Sequence, Tuple

Color = Tuple[int, int, int]
Point = Tuple[float, float]

TEXT_ALIGNMENTS = ("left", "center", "right")


class Surface(Protocol):
    """Primitive drawing operations used by entities and the game."""

    def clear(self) -> None: ...

    def save(self) -> None: ...

    def restore(self) -> None: ...

    def scale(self, factor: float) -> None: ...

    def set_fill(self, color: Color) -> None: ...

    def set_stroke(self, color: Color, width: float = 1.0) -> None: ...

    def set_font(self, size: int) -> None: ...

    def set_text_align(self, align: str) -> None: ...

    def fill_rect(self, x: float, y: float, width: float, height: float) -> None: ...

    def fill_circle(self, x: float, y: float, radius: float) -> None: ...

    def fill_polygon(self, points: Sequence[Point]) -> None: ...

    def stroke_line(self, start: Point, end: Point) -> None: ...

    def fill_text(self, text: str, x: float, y: float) -> None: ...


class NullSurface:
    """Surface that draws nothing."""

    def clear(self) -> None:
        pass

    def save(self) -> None:
        pass

    def restore(self) -> None:
        pass

    def scale(self, factor: float) -> None:
        pass

    def set_fill(self, color: Color) -> None:
        pass

    def set_stroke(self, color: Color, width: float = 1.0) -> None:
        pass

    def set_font(self, size: int) -> None:
        pass

    def set_text_align(self, align: str) -> None:
        if align not in TEXT_ALIGNMENTS:
            raise ValueError(f"Unknown text alignment: {align!r}")

    def fill_rect(self, x: float, y: float, width: float, height: float) -> None:
        pass

    def fill_circle(self, x: float, y: float, radius: float) -> None:
        pass

    def fill_polygon(self, points: Sequence[Point]) -> None:
        pass

    def stroke_line(self, start: Point, end: Point) -> None:
        pass

    def fill_text(self, text: str, x: float, y: float) -> None:
        pass
