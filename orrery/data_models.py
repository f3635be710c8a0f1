#!/usr/bin/env python3
"""
Data models for the Solar System Orrery.

This module defines the dataclasses shared between mapping, rendering, hit-testing and UI.

Units and usage
- orbit radii are in millions of km, diameters in km; visual_size is diameter_km * SIZE_SCALE.
- Screen values (x, y, size) are canvas pixels with the origin at the top-left corner.
- Catalog entries are immutable. The last rendered position of each body lives in a separate
  frame-state table (index -> RenderedDisk) owned by the AnimationDriver.
"""
from dataclasses import dataclass
from typing import Tuple

from .constants import (
    BODY_SIZE_RANGE,
    CENTRAL_SIZE_RANGE,
    DEFAULT_VIEW_MODE,
    DISTANCE_SCALE_RANGE,
    SIZE_SCALE,
    SPEED_RANGE,
)

Color = Tuple[int, int, int]


@dataclass(frozen=True)
class Body:
    """
    Represents a planet on a parametric elliptical orbit.

    Fields:
    - name: Display label
    - color: RGB tuple used for rendering
    - orbit_radius_x / orbit_radius_y: Semi-axes of the orbit (millions of km)
    - angular_speed: Relative angular velocity (higher revolves faster)
    - diameter_km: True diameter
    - phase_offset: Initial angle in radians
    """
    name: str
    color: Color
    orbit_radius_x: float
    orbit_radius_y: float
    angular_speed: float
    diameter_km: float
    phase_offset: float = 0.0

    @property
    def visual_size(self) -> float:
        return self.diameter_km * SIZE_SCALE


@dataclass(frozen=True)
class CentralBody:
    """The star drawn at the center of the canvas."""
    name: str
    color: Color
    diameter_km: float

    @property
    def visual_size(self) -> float:
        return self.diameter_km * SIZE_SCALE


@dataclass(frozen=True)
class Catalog:
    name: str
    central: CentralBody
    bodies: Tuple[Body, ...]

    @property
    def max_orbit_radius(self) -> float:
        return max(b.orbit_radius_x for b in self.bodies)


@dataclass(frozen=True)
class SimulationParameters:
    """
    Current values of the user controls, read fresh every frame.

    view_mode is "realistic" or "illustrative"; every scale is strictly positive.
    """
    view_mode: str = DEFAULT_VIEW_MODE
    speed_multiplier: float = SPEED_RANGE[2]
    distance_scale: float = DISTANCE_SCALE_RANGE[2]
    central_size_scale: float = CENTRAL_SIZE_RANGE[2]
    body_size_scale: float = BODY_SIZE_RANGE[2]
    show_orbits: bool = True


@dataclass(frozen=True)
class RenderedDisk:
    """
    Where a body was last painted.

    radius holds the drawn diameter; the hit-tester and the draw routine both halve it.
    """
    x: float
    y: float
    radius: float


@dataclass(frozen=True)
class BodyFrame:
    """Mapped screen geometry of one body for a single frame."""
    index: int
    orbit_x: float
    orbit_y: float
    x: float
    y: float
    size: float


@dataclass(frozen=True)
class Frame:
    """Everything the renderer needs to paint one frame."""
    time_ms: float
    center: Tuple[float, float]
    central_size: float
    bodies: Tuple[BodyFrame, ...]
