"""
Geometry
========

Axis-aligned rectangles and the overlap test used for all collisions.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle. (x, y) is the top-left corner."""
    x: float
    y: float
    width: float
    height: float


def intersects(a: Rect, b: Rect) -> bool:
    """
    True if the rectangles overlap on both axes.

    Strict inequalities: rectangles that only share an edge do not intersect.
    """
    return (
        a.x + a.width > b.x
        and a.x < b.x + b.width
        and a.y + a.height > b.y
        and a.y < b.y + b.height
    )
