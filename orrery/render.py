#!/usr/bin/env python3
"""
Frame renderer for the Solar System Orrery.

render_frame paints one Frame onto any DrawingSurface and returns the frame-state table that
the hit-tester reads until the next frame completes. PygameSurface adapts a pygame Surface;
tests use a recording fake instead.
"""
from typing import Dict, Optional, Protocol, Tuple

import pygame
from pygame import gfxdraw

from .constants import (
    BACKGROUND_COLOR,
    HOVER_SCALE,
    MIN_DRAW_RADIUS,
    ORBIT_COLOR,
    SAFE_COORD_LIMIT,
)
from .data_models import Catalog, Frame, RenderedDisk

ColorLike = Tuple[int, ...]


class DrawingSurface(Protocol):
    """Minimal 2D drawing context the renderer needs."""

    @property
    def size(self) -> Tuple[int, int]: ...

    def fill(self, color: ColorLike) -> None: ...

    def fill_circle(self, center: Tuple[float, float], radius: float, color: ColorLike) -> None: ...

    def stroke_ellipse(self, center: Tuple[float, float], radius_x: float, radius_y: float,
                       color: ColorLike) -> None: ...


def _safe_point(pt) -> Optional[Tuple[int, int]]:
    x, y = int(round(pt[0])), int(round(pt[1]))
    if -SAFE_COORD_LIMIT <= x <= SAFE_COORD_LIMIT and -SAFE_COORD_LIMIT <= y <= SAFE_COORD_LIMIT:
        return (x, y)
    return None


def _pixel_radius(radius: float) -> int:
    return max(1, min(SAFE_COORD_LIMIT, int(round(radius))))


class PygameSurface:
    """
    DrawingSurface backed by a pygame Surface.

    gfxdraw primitives blend RGBA colors, which gives the translucent orbit strokes.
    """

    def __init__(self, surface: pygame.Surface):
        self.surface = surface

    @property
    def size(self) -> Tuple[int, int]:
        return self.surface.get_size()

    def fill(self, color: ColorLike) -> None:
        self.surface.fill(color)

    def fill_circle(self, center, radius, color) -> None:
        pt = _safe_point(center)
        if pt is None:
            return
        r = _pixel_radius(radius)
        gfxdraw.filled_circle(self.surface, pt[0], pt[1], r, color)
        gfxdraw.aacircle(self.surface, pt[0], pt[1], r, color)

    def stroke_ellipse(self, center, radius_x, radius_y, color) -> None:
        pt = _safe_point(center)
        if pt is None:
            return
        gfxdraw.aaellipse(self.surface, pt[0], pt[1], _pixel_radius(radius_x), _pixel_radius(radius_y), color)


def draw_body(surface: DrawingSurface, x: float, y: float, size: float, color: ColorLike,
              hovered: bool) -> None:
    """Draw a disk whose diameter is size, enlarged when hovered."""
    scale = HOVER_SCALE if hovered else 1.0
    surface.fill_circle((x, y), max(MIN_DRAW_RADIUS, size * scale / 2), color)


def draw_orbit(surface: DrawingSurface, center: Tuple[float, float], orbit_x: float, orbit_y: float) -> None:
    surface.stroke_ellipse(center, orbit_x, orbit_y, ORBIT_COLOR)


def render_frame(surface: DrawingSurface, frame: Frame, catalog: Catalog, show_orbits: bool,
                 hovered_index: Optional[int] = None) -> Dict[int, RenderedDisk]:
    """
    Paint one frame and return index -> RenderedDisk for every body painted.

    The returned table stores the nominal size, not the hover-enlarged one.
    """
    surface.fill(BACKGROUND_COLOR)
    surface.fill_circle(frame.center, frame.central_size / 2, catalog.central.color)

    table: Dict[int, RenderedDisk] = {}
    for bf in frame.bodies:
        if show_orbits:
            draw_orbit(surface, frame.center, bf.orbit_x, bf.orbit_y)
        body = catalog.bodies[bf.index]
        draw_body(surface, bf.x, bf.y, bf.size, body.color, bf.index == hovered_index)
        table[bf.index] = RenderedDisk(bf.x, bf.y, bf.size)
    return table
