#!/usr/bin/env python3
"""
Coordinate mapping for the Solar System Orrery.

Responsibilities
- Turn a body's orbital parameters plus the current wall-clock time into a screen position and
  pixel size, under one of two view modes.
- Build a complete Frame for the whole catalog.

View modes
- realistic: one scale factor per frame fits the outermost orbit inside the canvas; orbit radii
  and body sizes are proportional to their true values.
- illustrative: orbits are evenly spaced rings ranked by catalog order, and body sizes use a
  compressed square-root mapping so giants and small planets stay comparable.

Every function here is pure: the same inputs always produce the same output.
"""
import math
from dataclasses import dataclass
from typing import Callable, Dict, Tuple

from .constants import (
    CANVAS_MARGIN,
    ILLUSTRATIVE_CENTRAL_SIZE,
    ILLUSTRATIVE_MIN_SIZE,
    ILLUSTRATIVE_SIZE_GROWTH,
    MIN_BODY_SIZE,
    MIN_CENTRAL_SIZE,
    RING_BASE,
    RING_SPACING,
    TIME_SCALE,
    VIEW_ILLUSTRATIVE,
    VIEW_REALISTIC,
)
from .data_models import Body, BodyFrame, Catalog, Frame, SimulationParameters


@dataclass(frozen=True)
class FrameLayout:
    """Per-frame values shared by every body: canvas center and realistic scale factor."""
    center: Tuple[float, float]
    scale_factor: float
    central_diameter_km: float


def body_angle(body: Body, time_ms: float, speed_multiplier: float) -> float:
    """Angle in radians of body at time_ms (not reduced modulo 2*pi)."""
    return time_ms * TIME_SCALE * body.angular_speed * speed_multiplier + body.phase_offset


def realistic_scale_factor(catalog: Catalog, canvas_size: Tuple[int, int]) -> float:
    """Pixels per distance unit that fit the outermost orbit inside the canvas."""
    half_extent = min(canvas_size[0], canvas_size[1]) / 2
    return (half_extent - CANVAS_MARGIN) / catalog.max_orbit_radius


def _place(body: Body, index: int, time_ms: float, params: SimulationParameters,
           layout: FrameLayout, orbit_x: float, orbit_y: float, size: float) -> BodyFrame:
    angle = body_angle(body, time_ms, params.speed_multiplier)
    cx, cy = layout.center
    return BodyFrame(
        index=index,
        orbit_x=orbit_x,
        orbit_y=orbit_y,
        x=cx + orbit_x * math.cos(angle),
        y=cy + orbit_y * math.sin(angle),
        size=size,
    )


def map_realistic(body: Body, index: int, time_ms: float, params: SimulationParameters,
                  layout: FrameLayout) -> BodyFrame:
    scale = layout.scale_factor * params.distance_scale
    size = max(MIN_BODY_SIZE, body.visual_size * layout.scale_factor * params.body_size_scale)
    return _place(body, index, time_ms, params, layout,
                  body.orbit_radius_x * scale, body.orbit_radius_y * scale, size)


def illustrative_size(body: Body, central_diameter_km: float, body_size_scale: float) -> float:
    """Compressed body diameter: a fixed minimum plus square-root growth, bounded by the star."""
    ratio = min(1.0, body.diameter_km / central_diameter_km)
    size = (ILLUSTRATIVE_MIN_SIZE + ILLUSTRATIVE_SIZE_GROWTH * math.sqrt(ratio)) * body_size_scale
    return max(MIN_BODY_SIZE, size)


def map_illustrative(body: Body, index: int, time_ms: float, params: SimulationParameters,
                     layout: FrameLayout) -> BodyFrame:
    # Rank-based ring; true distance is ignored on purpose.
    orbit = (RING_BASE + index * RING_SPACING) * params.distance_scale
    size = illustrative_size(body, layout.central_diameter_km, params.body_size_scale)
    return _place(body, index, time_ms, params, layout, orbit, orbit, size)


Mapper = Callable[[Body, int, float, SimulationParameters, FrameLayout], BodyFrame]

MAPPERS: Dict[str, Mapper] = {
    VIEW_REALISTIC: map_realistic,
    VIEW_ILLUSTRATIVE: map_illustrative,
}


def get_mapper(view_mode: str) -> Mapper:
    try:
        return MAPPERS[view_mode]
    except KeyError:
        raise ValueError(f"unknown view mode: {view_mode!r}") from None


def map_body(body: Body, index: int, time_ms: float, params: SimulationParameters,
             layout: FrameLayout) -> BodyFrame:
    return get_mapper(params.view_mode)(body, index, time_ms, params, layout)


def central_body_size(catalog: Catalog, params: SimulationParameters, scale_factor: float) -> float:
    if params.view_mode == VIEW_REALISTIC:
        return max(MIN_CENTRAL_SIZE, catalog.central.visual_size * scale_factor * params.central_size_scale)
    return ILLUSTRATIVE_CENTRAL_SIZE * params.central_size_scale


def compute_frame(catalog: Catalog, time_ms: float, params: SimulationParameters,
                  canvas_size: Tuple[int, int]) -> Frame:
    """
    Map every body in catalog order for one frame.

    canvas_size is (width, height) in pixels; time_ms is wall-clock milliseconds.
    """
    get_mapper(params.view_mode)  # unknown modes fail before any body is mapped
    layout = FrameLayout(
        center=(canvas_size[0] / 2, canvas_size[1] / 2),
        scale_factor=realistic_scale_factor(catalog, canvas_size),
        central_diameter_km=catalog.central.diameter_km,
    )
    bodies = tuple(
        map_body(body, i, time_ms, params, layout) for i, body in enumerate(catalog.bodies)
    )
    return Frame(
        time_ms=time_ms,
        center=layout.center,
        central_size=central_body_size(catalog, params, layout.scale_factor),
        bodies=bodies,
    )
