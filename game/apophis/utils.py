"""
Utility functions for game mechanics
"""

from __future__ import annotations
import math
import random
from typing import Tuple, Optional
import numpy as np


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp value between low and high bounds"""
    return lo if x < lo else hi if x > hi else x


def normalize(x: float, y: float, eps: float = 1e-8) -> Tuple[float, float]:
    """Normalize a vector to unit length"""
    l = math.hypot(x, y)
    if l < eps:
        return 0.0, 0.0
    return x / l, y / l


def distance(x1: float, y1: float, x2: float, y2: float) -> float:
    """Euclidean distance between two points"""
    return math.hypot(x1 - x2, y1 - y2)


def within(x1: float, y1: float, x2: float, y2: float, radius: float) -> bool:
    """Strict circular proximity test used by every hit check"""
    dx = x1 - x2
    dy = y1 - y2
    return (dx * dx + dy * dy) < (radius * radius)


def quadratic_bezier(p0: float, p1: float, p2: float, t: float) -> float:
    """One coordinate of a quadratic Bezier curve at parameter t"""
    t1 = 1.0 - t
    return t1 * t1 * p0 + 2.0 * t1 * t * p1 + t * t * p2


def seed_everything(py_seed: Optional[int]):
    """Seed all random number generators"""
    if py_seed is None:
        return
    random.seed(py_seed)
    np.random.seed(py_seed)
