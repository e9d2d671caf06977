"""
Avatar
======

The player-controlled bird: gravity integration, flap impulse and drawing.
Boundary handling belongs to the game, not here.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from flappy_game.flappy_core.config_loader import AvatarConfig
from flappy_game.flappy_core.geometry import Rect
from flappy_game.flappy_core.surface import Surface

EYE_COLOR = (0, 0, 0)


@dataclass
class Avatar:
    """
    Falling avatar with a fixed x position.

    Uses semi-implicit Euler: velocity is updated before position.
    """
    config: AvatarConfig = field(repr=False)
    x: float
    y: float
    velocity: float = 0.0

    @property
    def radius(self) -> float:
        return self.config.radius

    @property
    def top(self) -> float:
        return self.y - self.config.radius

    @property
    def bottom(self) -> float:
        return self.y + self.config.radius

    def flap(self) -> None:
        """Set velocity to the flap impulse, whatever it was before."""
        self.velocity = self.config.flap_strength

    def update(self) -> None:
        """Advance one frame."""
        self.velocity += self.config.gravity
        self.y += self.velocity

    def reset(self, y: float) -> None:
        """Place the avatar at y with no vertical motion."""
        self.y = y
        self.velocity = 0.0

    def bounding_rect(self) -> Rect:
        """Square of side 2*radius centered on the avatar."""
        r = self.config.radius
        return Rect(self.x - r, self.y - r, 2 * r, 2 * r)

    def draw(self, surface: Surface) -> None:
        """Draw body, wing, eye and legs."""
        x, y, r = self.x, self.y, self.config.radius
        color = self.config.color

        surface.set_fill(color)
        surface.fill_circle(x, y, r)

        # Wing
        surface.fill_polygon([
            (x + r, y - 2),
            (x + r + 8, y - 6),
            (x + r, y + 4),
        ])

        # Eye
        surface.set_fill(EYE_COLOR)
        surface.fill_circle(x + 5, y - 5, 2)

        # Legs
        surface.set_stroke(color, 3)
        surface.stroke_line((x - 5, y + r), (x - 10, y + r + 10))
        surface.stroke_line((x + 5, y + r), (x + 10, y + r + 10))
