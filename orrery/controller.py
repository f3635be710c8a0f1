#!/usr/bin/env python3
"""
Shared state between the control panel (Dear PyGui, main thread) and the viewport
(pygame thread).

The controller owns the current parameter values plus the selection and hover state. All
access is guarded by a re-entrant lock. The viewport reads a SimulationParameters snapshot
once per frame and feeds pointer events in; the control panel writes parameters and reads the
selection for its info panel.
"""
import logging
import threading
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

from .constants import (
    BODY_SIZE_RANGE,
    CENTRAL_SIZE_RANGE,
    DEFAULT_VIEW_MODE,
    DISTANCE_SCALE_RANGE,
    SPEED_RANGE,
    VIEW_MODES,
)
from .data_models import Body, Catalog, RenderedDisk, SimulationParameters
from .hit_test import hit_test
from .vector_utils import clamp

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SelectionDetails:
    """Fields shown by the selection info panel."""
    name: str
    distance_text: str
    diameter_text: str


def describe_body(body: Body) -> SelectionDetails:
    return SelectionDetails(
        name=body.name,
        distance_text=f"{body.orbit_radius_x:.1f} million km",
        diameter_text=f"{body.diameter_km:.0f} km",
    )


class SimulationController:
    """
    Parameter values, selection and hover, guarded by a lock.
    """
    def __init__(self, catalog: Catalog, view_mode: str = DEFAULT_VIEW_MODE):
        if view_mode not in VIEW_MODES:
            raise ValueError(f"unknown view mode: {view_mode!r}")
        self.lock = threading.RLock()
        self.catalog = catalog
        self.running = True  # app running
        self.view_mode = view_mode
        self.speed_multiplier = SPEED_RANGE[2]
        self.distance_scale = DISTANCE_SCALE_RANGE[2]
        self.central_size_scale = CENTRAL_SIZE_RANGE[2]
        self.body_size_scale = BODY_SIZE_RANGE[2]
        self.show_orbits = True
        self.selected_index: Optional[int] = None
        self.hovered_index: Optional[int] = None

    # -----------------------
    # Parameters
    # -----------------------

    def set_view_mode(self, mode: str):
        if mode not in VIEW_MODES:
            raise ValueError(f"unknown view mode: {mode!r}")
        with self.lock:
            self.view_mode = mode

    def set_speed_multiplier(self, val: float):
        with self.lock:
            self.speed_multiplier = clamp(float(val), SPEED_RANGE[0], SPEED_RANGE[1])

    def set_distance_scale(self, val: float):
        with self.lock:
            self.distance_scale = clamp(float(val), DISTANCE_SCALE_RANGE[0], DISTANCE_SCALE_RANGE[1])

    def set_central_size_scale(self, val: float):
        with self.lock:
            self.central_size_scale = clamp(float(val), CENTRAL_SIZE_RANGE[0], CENTRAL_SIZE_RANGE[1])

    def set_body_size_scale(self, val: float):
        with self.lock:
            self.body_size_scale = clamp(float(val), BODY_SIZE_RANGE[0], BODY_SIZE_RANGE[1])

    def set_show_orbits(self, value: bool):
        with self.lock:
            self.show_orbits = bool(value)

    def parameters(self) -> SimulationParameters:
        """Snapshot of the current control values."""
        with self.lock:
            return SimulationParameters(
                view_mode=self.view_mode,
                speed_multiplier=self.speed_multiplier,
                distance_scale=self.distance_scale,
                central_size_scale=self.central_size_scale,
                body_size_scale=self.body_size_scale,
                show_orbits=self.show_orbits,
            )

    # -----------------------
    # Pointer events
    # -----------------------

    def handle_click(self, point: Tuple[float, float], frame_state: Mapping[int, RenderedDisk]) -> Optional[int]:
        """Select the body under point; clicking empty space clears the selection."""
        idx = hit_test(point, frame_state, len(self.catalog.bodies))
        with self.lock:
            self.selected_index = idx
        if idx is not None:
            logger.info("Selected %s", self.catalog.bodies[idx].name)
        return idx

    def handle_motion(self, point: Tuple[float, float], frame_state: Mapping[int, RenderedDisk]) -> Optional[int]:
        idx = hit_test(point, frame_state, len(self.catalog.bodies))
        with self.lock:
            self.hovered_index = idx
        return idx

    def handle_leave(self):
        with self.lock:
            self.hovered_index = None

    def dismiss_selection(self):
        with self.lock:
            self.selected_index = None

    def get_hovered_index(self) -> Optional[int]:
        with self.lock:
            return self.hovered_index

    def selected_body(self) -> Optional[Body]:
        with self.lock:
            if self.selected_index is not None and 0 <= self.selected_index < len(self.catalog.bodies):
                return self.catalog.bodies[self.selected_index]
        return None

    def selection_details(self) -> Optional[SelectionDetails]:
        body = self.selected_body()
        if body is None:
            return None
        return describe_body(body)
