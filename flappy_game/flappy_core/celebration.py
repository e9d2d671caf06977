"""
Celebration
===========

Fire-and-forget confetti burst shown when a game ends on a new high score.

The game only calls the trigger; the host owns the effect, steps it with the
frame time and draws it over the finished frame.
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from typing import List, Optional, Protocol, Tuple

from flappy_game.flappy_core.surface import Surface

CONFETTI_COLORS = [
    (38, 204, 255),
    (162, 90, 253),
    (255, 94, 126),
    (136, 255, 90),
    (252, 255, 66),
    (255, 166, 45),
    (255, 54, 255),
]


class Celebration(Protocol):
    """Callable trigger taking particle count, spread and origin."""

    def __call__(
        self,
        particle_count: int,
        spread: float,
        origin: Tuple[float, float]
    ) -> None: ...


@dataclass
class Particle:
    """A single confetti piece."""
    x: float
    y: float
    vx: float
    vy: float
    size: float
    color: Tuple[int, int, int]
    lifetime: float              # milliseconds
    age: float = 0.0

    @property
    def is_dead(self) -> bool:
        return self.age >= self.lifetime

    def update(self, delta_ms: float, gravity: float, drag: float) -> None:
        dt = delta_ms / 1000.0
        self.vy += gravity * dt
        decay = max(0.0, 1.0 - drag * dt)
        self.vx *= decay
        self.vy *= decay
        self.x += self.vx * dt
        self.y += self.vy * dt
        self.age += delta_ms


class ConfettiBurst:
    """
    Confetti particle effect.

    Origin is given as fractions of the canvas (0..1 on each axis). Particles
    are launched upward inside a cone of `spread` degrees.
    """

    GRAVITY = 900.0              # pixels / s^2
    DRAG = 1.2                   # velocity decay per second
    SPEED_MIN = 350.0
    SPEED_MAX = 750.0
    LIFETIME_MIN = 1500.0
    LIFETIME_MAX = 3000.0

    def __init__(self, width: float, height: float, seed: Optional[int] = None):
        self._width = width
        self._height = height
        self._rng = random.Random(seed)
        self._particles: List[Particle] = []
        self._bursts = 0

    def __call__(
        self,
        particle_count: int,
        spread: float,
        origin: Tuple[float, float]
    ) -> None:
        ox = origin[0] * self._width
        oy = origin[1] * self._height
        half_spread = math.radians(spread) / 2
        for _ in range(particle_count):
            # Straight up is -pi/2 in screen space
            angle = -math.pi / 2 + self._rng.uniform(-half_spread, half_spread)
            speed = self._rng.uniform(self.SPEED_MIN, self.SPEED_MAX)
            self._particles.append(Particle(
                x=ox,
                y=oy,
                vx=math.cos(angle) * speed,
                vy=math.sin(angle) * speed,
                size=self._rng.uniform(2.0, 5.0),
                color=self._rng.choice(CONFETTI_COLORS),
                lifetime=self._rng.uniform(self.LIFETIME_MIN, self.LIFETIME_MAX)
            ))
        self._bursts += 1

    @property
    def active(self) -> bool:
        return bool(self._particles)

    @property
    def particle_count(self) -> int:
        return len(self._particles)

    @property
    def bursts(self) -> int:
        """Number of times the effect has been triggered."""
        return self._bursts

    def update(self, delta_ms: float) -> None:
        for particle in self._particles:
            particle.update(delta_ms, self.GRAVITY, self.DRAG)
        self._particles = [
            p for p in self._particles
            if not p.is_dead and p.y - p.size < self._height
        ]

    def draw(self, surface: Surface) -> None:
        for particle in self._particles:
            surface.set_fill(particle.color)
            surface.fill_rect(
                particle.x - particle.size / 2,
                particle.y - particle.size / 2,
                particle.size,
                particle.size
            )

    def clear(self) -> None:
        self._particles.clear()
