"""
Obstacle
========

A vertical gate: a top segment hanging from the ceiling and a bottom segment
standing on the floor, separated by a fixed gap. Scrolls left at constant speed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple

from flappy_game.flappy_core.avatar import Avatar
from flappy_game.flappy_core.config_loader import ObstacleConfig
from flappy_game.flappy_core.geometry import Rect, intersects
from flappy_game.flappy_core.surface import Surface


@dataclass
class Obstacle:
    """
    Pair of segments around a gap.

    The passed flag is owned by the game: it is set the first frame the
    avatar is past the obstacle's right edge.
    """
    config: ObstacleConfig = field(repr=False)
    x: float
    top_height: float
    canvas_height: float
    passed: bool = False

    @property
    def width(self) -> float:
        return self.config.width

    @property
    def gap(self) -> float:
        return self.config.gap

    @property
    def right_edge(self) -> float:
        return self.x + self.config.width

    @property
    def bottom_y(self) -> float:
        """Top of the bottom segment."""
        return self.top_height + self.config.gap

    def update(self) -> None:
        """Scroll left by one frame."""
        self.x -= self.config.speed

    def collision_rects(self) -> Tuple[Rect, Rect]:
        """(top segment, bottom segment)."""
        top = Rect(self.x, 0.0, self.config.width, self.top_height)
        bottom = Rect(
            self.x,
            self.bottom_y,
            self.config.width,
            self.canvas_height - self.bottom_y
        )
        return top, bottom

    def is_colliding(self, avatar: Avatar) -> bool:
        """True if the avatar's bounding square overlaps either segment."""
        box = avatar.bounding_rect()
        top, bottom = self.collision_rects()
        return intersects(box, top) or intersects(box, bottom)

    def draw(self, surface: Surface) -> None:
        surface.set_fill(self.config.color)
        for rect in self.collision_rects():
            surface.fill_rect(rect.x, rect.y, rect.width, rect.height)
