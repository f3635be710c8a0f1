#!/usr/bin/env python3
"""
Vector helper functions for 2D screen-space operations.

These are small, fast functions used by the hit-tester and the controller.
"""
import math
from typing import Tuple


def clamp(x: float, a: float, b: float) -> float:
    """Clamp x to the inclusive range [a, b]."""
    return max(a, min(b, x))


def vec_sub(a: Tuple[float, float], b: Tuple[float, float]) -> Tuple[float, float]:
    return (a[0] - b[0], a[1] - b[1])


def vec_len(a: Tuple[float, float]) -> float:
    return math.hypot(a[0], a[1])
