"""
Particle effects and real-time cosmetic scheduling
"""

from __future__ import annotations

import heapq
import itertools
import math
import random
import time
from typing import TYPE_CHECKING, Callable, List, Optional, Sequence, Tuple

from .constants import (
    DAMAGE_EXPLOSION_COLORS,
    EXPLOSION_COLORS,
    MEGA_EXPLOSION_COLORS,
    MISSILE_EXPLOSION_COLORS,
    SPARK_COLORS,
    WHITE,
)
from .entities import Particle

if TYPE_CHECKING:
    from .world import WorldState

Color = Tuple[int, int, int]


def _ring(world: "WorldState", rng: random.Random, x: float, y: float, count: int,
          speed: float, jitter: float, life: int, colors: Sequence[Color],
          turns: float = 1.0):
    """Evenly spaced particles around a circle (turns > 1 draws a spiral)"""
    for i in range(count):
        angle = math.pi * 2 * turns * i / count
        s = speed + rng.random() * jitter
        world.particles.append(Particle(
            x, y, math.cos(angle) * s, math.sin(angle) * s, life, rng.choice(colors)
        ))


def _scatter(world: "WorldState", rng: random.Random, x: float, y: float, count: int,
             speed: float, jitter: float, life: int, colors: Sequence[Color]):
    """Particles at random angles"""
    for _ in range(count):
        angle = rng.random() * math.pi * 2
        s = speed + rng.random() * jitter
        world.particles.append(Particle(
            x, y, math.cos(angle) * s, math.sin(angle) * s, life, rng.choice(colors)
        ))


def explosion(world: "WorldState", x: float, y: float, rng: Optional[random.Random] = None):
    rng = rng or world.rng
    for _ in range(25):
        world.particles.append(Particle(
            x, y,
            (rng.random() - 0.5) * 20,
            (rng.random() - 0.5) * 20,
            50,
            rng.choice(EXPLOSION_COLORS),
        ))


def damage_explosion(world: "WorldState", x: float, y: float):
    _ring(world, world.rng, x, y, 40, 15, 10, 60, DAMAGE_EXPLOSION_COLORS)


def spectacular_explosion(world: "WorldState", x: float, y: float,
                          rng: Optional[random.Random] = None):
    """Mini-boss death burst"""
    rng = rng or world.rng
    colors = MEGA_EXPLOSION_COLORS[:7]
    _ring(world, rng, x, y, 80, 20, 15, 80, colors)
    _scatter(world, rng, x, y, 40, 10, 8, 70, colors)


def mega_boss_explosion(world: "WorldState", x: float, y: float):
    """Layered burst for the Harasser's death"""
    rng = world.rng
    colors = MEGA_EXPLOSION_COLORS
    _ring(world, rng, x, y, 720, 30, 25, 120, colors)
    _scatter(world, rng, x, y, 360, 20, 15, 100, colors)
    _scatter(world, rng, x, y, 240, 10, 10, 130, colors)
    for i in range(180):
        angle = math.pi * 8 * i / 180
        s = 22 + i * 0.4
        world.particles.append(Particle(
            x, y, math.cos(angle) * s, math.sin(angle) * s, 110, rng.choice(colors)
        ))
    for ring in range(5):
        color = colors[ring * 2 % len(colors)]
        _ring(world, rng, x, y, 120, 25 + ring * 8, 0, 100 + ring * 10, (color,))


def ultimate_explosion(world: "WorldState", x: float, y: float):
    """Player death burst"""
    rng = world.rng
    colors = MEGA_EXPLOSION_COLORS[:9]
    _ring(world, rng, x, y, 240, 25, 20, 100, colors)
    _scatter(world, rng, x, y, 120, 15, 12, 90, colors)
    _scatter(world, rng, x, y, 80, 8, 6, 110, colors)
    for i in range(60):
        angle = math.pi * 4 * i / 60
        s = 18 + i * 0.3
        world.particles.append(Particle(
            x, y, math.cos(angle) * s, math.sin(angle) * s, 85, rng.choice(colors)
        ))


def missile_explosion(world: "WorldState", x: float, y: float):
    _ring(world, world.rng, x, y, 60, 18, 12, 70, MISSILE_EXPLOSION_COLORS)
    _scatter(world, world.rng, x, y, 40, 8, 8, 50, (WHITE,))


def deflection_spark(world: "WorldState", x: float, y: float):
    _scatter(world, world.rng, x, y, 8, 4, 4, 15, SPARK_COLORS)


def shockwave(world: "WorldState", x: float, y: float, rings: int, per_ring: int,
              speed: float, step: float, life: int, color: Color):
    """Concentric expanding rings of a single colour"""
    for ring in range(rings):
        _ring(world, world.rng, x, y, per_ring, speed + ring * step, 0, life, (color,))


def flash(world: "WorldState", count: int, life: int, colors: Sequence[Color],
          spread: float = 20, origin: Optional[Tuple[float, float]] = None):
    """Particles thrown from the given origin, or from random points across the screen"""
    rng = world.rng
    for _ in range(count):
        if origin is None:
            x, y = rng.random() * world.width, rng.random() * world.height
        else:
            x, y = origin
        world.particles.append(Particle(
            x, y,
            (rng.random() - 0.5) * spread,
            (rng.random() - 0.5) * spread,
            life,
            rng.choice(colors),
        ))


class DelayedEffects:
    """
    Fire-and-forget cosmetic callbacks keyed by wall-clock time.

    Drained by the host once per rendered frame, independent of the tick
    counter. There is no cancellation: callbacks must only add particles.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self.clock = clock
        self._queue: List[Tuple[float, int, Callable[[], None]]] = []
        self._seq = itertools.count()

    def schedule(self, delay: float, callback: Callable[[], None]):
        heapq.heappush(self._queue, (self.clock() + delay, next(self._seq), callback))

    def drain(self, now: Optional[float] = None) -> int:
        """Run every callback that is due; returns how many ran"""
        if now is None:
            now = self.clock()
        ran = 0
        while self._queue and self._queue[0][0] <= now:
            _, _, callback = heapq.heappop(self._queue)
            callback()
            ran += 1
        return ran

    def __len__(self) -> int:
        return len(self._queue)
