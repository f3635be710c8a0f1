#!/usr/bin/env python3
"""
Solar System Orrery application entry point and UI/viewport coordination.

What this module does
- Starts two event loops: a Pygame viewport thread that animates the orrery and handles pointer
  input, and the Dear PyGui control panel (running on the main thread).
- Maintains a shared SimulationController that owns the control values and the
  selection/hover state; all access is guarded by a re-entrant lock for thread-safety.

Threading model
- SolarViewport runs in a background thread. Every display refresh it handles pygame events
  (click, move, leave), runs the FrameScheduler's pending callbacks (the AnimationDriver tick
  that maps and paints a frame) and flips the display. Frames and pointer events therefore
  never interleave.
- The ControlPanel class runs in the main thread via Dear PyGui. Widget callbacks write
  parameters through the controller; a periodic frame callback refreshes the selection panel.

Running
1) Install the project: `pip install -e .`
2) Run: `python solar_system.py` (or the `solar-orrery` script). `--help` lists the options.

Windows/OS notes
- Two windows will open: the viewport (Pygame) and the controls (Dear PyGui). Closing either
  will shut down the application cleanly.
"""

import argparse
import logging
import sys
import threading
from typing import Optional, Tuple

# GUI and Rendering libs
import pygame
import dearpygui.dearpygui as dpg

from orrery.animation import AnimationDriver, FrameScheduler
from orrery.catalog import CatalogError, list_catalogs, resolve_catalog
from orrery.constants import (
    BODY_SIZE_RANGE,
    CENTRAL_SIZE_RANGE,
    DEFAULT_VIEW_MODE,
    DISTANCE_SCALE_RANGE,
    SPEED_RANGE,
    TARGET_FPS,
    VIEW_HEIGHT,
    VIEW_ILLUSTRATIVE,
    VIEW_MODES,
    VIEW_REALISTIC,
    VIEW_WIDTH,
)
from orrery.controller import SimulationController
from orrery.data_models import Catalog
from orrery.render import PygameSurface

logger = logging.getLogger(__name__)

HUD_COLOR = (200, 200, 200)

VIEW_MODE_LABELS = {
    VIEW_REALISTIC: "Realistic view",
    VIEW_ILLUSTRATIVE: "Illustrative view",
}


def setup_logging(level):
    """Setup logging with specified level"""
    logging.basicConfig(
        level=level,
        format='%(levelname)s: %(message)s',
        stream=sys.stdout,
    )


# ============================================================
# Pygame Viewport Thread
# ============================================================

class SolarViewport(threading.Thread):
    """
    Pygame loop: owns the window, the frame scheduler and the animation driver.
    Routes click/move/leave events to the controller.
    """
    def __init__(self, sim: SimulationController, size: Tuple[int, int] = (VIEW_WIDTH, VIEW_HEIGHT),
                 fps: int = TARGET_FPS):
        super().__init__(daemon=True)
        self.sim = sim
        self.size = size
        self.fps = fps
        self.surface: Optional[pygame.Surface] = None
        self.clock = None
        self.running = True
        self.scheduler = FrameScheduler()
        self.driver = AnimationDriver(
            sim.catalog,
            self.scheduler,
            parameters=sim.parameters,
            surface=self._drawing_surface,
            hovered=sim.get_hovered_index,
        )

    def _drawing_surface(self) -> Optional[PygameSurface]:
        if self.surface is None or not pygame.display.get_init():
            return None
        return PygameSurface(self.surface)

    def stop(self):
        self.running = False

    def run(self):
        pygame.init()
        pygame.display.set_caption(f"Solar System Orrery - {self.sim.catalog.name}")
        self.surface = pygame.display.set_mode(self.size)
        self.clock = pygame.time.Clock()
        self.driver.start()
        logger.info("Viewport running at %dx%d, %d fps", self.size[0], self.size[1], self.fps)
        try:
            while self.running and self.sim.running:
                self.handle_events()
                self.scheduler.run_pending()
                self.draw_hud()
                pygame.display.flip()
                self.clock.tick(self.fps)
        finally:
            self.driver.stop()
            self.surface = None
            pygame.quit()
            self.sim.running = False
            logger.info("Viewport closed after %d frames", self.driver.frames_rendered)

    def handle_events(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.sim.running = False
                self.running = False

            elif event.type == pygame.MOUSEBUTTONDOWN:
                if event.button == 1:  # left click
                    self.sim.handle_click(event.pos, self.driver.frame_state)

            elif event.type == pygame.MOUSEMOTION:
                self.sim.handle_motion(event.pos, self.driver.frame_state)

            elif event.type == pygame.WINDOWLEAVE:
                self.sim.handle_leave()

    def draw_hud(self):
        if self.surface is None:
            return
        params = self.sim.parameters()
        draw_text(self.surface, "Left-click: select body | Hover: highlight", 10, 10, HUD_COLOR)
        draw_text(self.surface, f"{VIEW_MODE_LABELS[params.view_mode]}  Speed: {params.speed_multiplier:.1f}x",
                  10, 30, HUD_COLOR)


_cached_font = None

def draw_text(surface, text, x, y, color):
    global _cached_font
    if not pygame.font.get_init():
        pygame.font.init()
    if _cached_font is None:
        try:
            _cached_font = pygame.font.SysFont("consolas", 16)
        except (pygame.error, OSError) as exc:
            logger.debug("System font unavailable (%s), using the default font", exc)
            _cached_font = pygame.font.Font(None, 16)
    img = _cached_font.render(text, True, color)
    surface.blit(img, (x, y))


# ============================================================
# Dear PyGui Control Panel
# ============================================================

class ControlPanel:
    """
    Dear PyGui interface: view mode, scale sliders, orbit toggle and the selected body panel.
    """
    def __init__(self, sim: SimulationController):
        self.sim = sim

        # IDs for widgets
        self.view_mode_id = None
        self.info_group_id = None
        self.info_name_id = None
        self.info_distance_id = None
        self.info_diameter_id = None
        self.no_selection_id = None

        # Avoid rewriting the info panel every sync when nothing changed
        self._last_details = None

        self._build_ui()
        self._schedule_sync()

    def _schedule_sync(self):
        """Reschedule the periodic sync callback using frame callbacks (approx ~10Hz)."""
        current = dpg.get_frame_count()
        # schedule next sync ~ every 6 frames (~100ms at 60 FPS)
        dpg.set_frame_callback(current + 6, self._sync_ui_with_sim)

    # -----------------------
    # UI Construction
    # -----------------------

    def _build_ui(self):
        dpg.create_context()
        dpg.create_viewport(title='Solar System Orrery - Controls', width=420, height=420)

        with dpg.window(label="Controls", width=400, height=400, pos=(10, 10), tag="main_window"):
            dpg.add_text(f"Catalog: {self.sim.catalog.name}")
            dpg.add_separator()

            dpg.add_text("View mode")
            with self.sim.lock:
                mode = self.sim.view_mode
            self.view_mode_id = dpg.add_radio_button(
                items=[VIEW_MODE_LABELS[m] for m in VIEW_MODES],
                default_value=VIEW_MODE_LABELS[mode],
                horizontal=True,
                callback=lambda s, a, u: self._set_view_mode(a),
            )

            dpg.add_separator()
            dpg.add_text("Simulation Controls")
            dpg.add_slider_float(label="Speed (x)", min_value=SPEED_RANGE[0], max_value=SPEED_RANGE[1],
                                 default_value=SPEED_RANGE[2], format="%.1fx", width=220, tag="speed_slider",
                                 callback=lambda s, a, u: self.sim.set_speed_multiplier(a))
            dpg.add_slider_float(label="Distance scale", min_value=DISTANCE_SCALE_RANGE[0],
                                 max_value=DISTANCE_SCALE_RANGE[1], default_value=DISTANCE_SCALE_RANGE[2],
                                 format="%.1f", width=220, tag="distance_slider",
                                 callback=lambda s, a, u: self.sim.set_distance_scale(a))
            dpg.add_slider_float(label="Sun size", min_value=CENTRAL_SIZE_RANGE[0],
                                 max_value=CENTRAL_SIZE_RANGE[1], default_value=CENTRAL_SIZE_RANGE[2],
                                 format="%.1f", width=220, tag="central_size_slider",
                                 callback=lambda s, a, u: self.sim.set_central_size_scale(a))
            dpg.add_slider_float(label="Planet size", min_value=BODY_SIZE_RANGE[0],
                                 max_value=BODY_SIZE_RANGE[1], default_value=BODY_SIZE_RANGE[2],
                                 format="%.1f", width=220, tag="body_size_slider",
                                 callback=lambda s, a, u: self.sim.set_body_size_scale(a))
            dpg.add_checkbox(label="Show orbits", default_value=True,
                             callback=lambda s, a, u: self.sim.set_show_orbits(a))

            dpg.add_separator()
            dpg.add_text("Selected Body")
            self.no_selection_id = dpg.add_text("Click a planet in the viewport.", color=(160, 160, 160))
            with dpg.group(show=False) as self.info_group_id:
                self.info_name_id = dpg.add_text("", color=(255, 215, 0))
                self.info_distance_id = dpg.add_text("")
                self.info_diameter_id = dpg.add_text("")
                dpg.add_button(label="Close", callback=self._dismiss_selection)

        dpg.setup_dearpygui()
        dpg.show_viewport()
        dpg.set_primary_window("main_window", True)

    # -----------------------
    # UI Callbacks
    # -----------------------

    def _set_view_mode(self, label: str):
        for mode, mode_label in VIEW_MODE_LABELS.items():
            if mode_label == label:
                self.sim.set_view_mode(mode)
                logger.debug("View mode: %s", mode)
                return

    def _dismiss_selection(self):
        self.sim.dismiss_selection()
        self._refresh_selection_panel()

    def _refresh_selection_panel(self):
        details = self.sim.selection_details()
        if details == self._last_details:
            return
        self._last_details = details
        if details is None:
            dpg.configure_item(self.info_group_id, show=False)
            dpg.configure_item(self.no_selection_id, show=True)
            return
        dpg.set_value(self.info_name_id, details.name)
        dpg.set_value(self.info_distance_id, f"Distance from the Sun: {details.distance_text}")
        dpg.set_value(self.info_diameter_id, f"Diameter: {details.diameter_text}")
        dpg.configure_item(self.no_selection_id, show=False)
        dpg.configure_item(self.info_group_id, show=True)

    def _sync_ui_with_sim(self):
        """
        Periodic UI update: mirror the selection into the info panel and shut down when the
        viewport has been closed.
        """
        if not self.sim.running:
            dpg.stop_dearpygui()
            return
        self._refresh_selection_panel()
        # Reschedule next sync
        self._schedule_sync()


# ============================================================
# Application Entry
# ============================================================

def parse_args(argv=None):
    parser = argparse.ArgumentParser(description='Solar System Orrery - animated 2D solar system')
    parser.add_argument('--size', type=int, default=VIEW_WIDTH, help='Canvas edge length in pixels (default: %(default)s)')
    parser.add_argument('--fps', type=int, default=TARGET_FPS, help='Target frames per second (default: %(default)s)')
    parser.add_argument('--view-mode', choices=VIEW_MODES, default=DEFAULT_VIEW_MODE, help='Initial view mode')
    parser.add_argument('--catalog', default=None, help='Catalog JSON path or bundled catalog file name')
    parser.add_argument('--list-catalogs', action='store_true', help='List bundled catalogs and exit')
    parser.add_argument('-v', '--verbose', action='store_true', help='Verbose mode (info)')
    parser.add_argument('--debug', action='store_true', help='Debug mode (debug)')
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    if args.debug:
        setup_logging(logging.DEBUG)
    elif args.verbose:
        setup_logging(logging.INFO)
    else:
        setup_logging(logging.WARNING)

    if args.list_catalogs:
        for fn, display in list_catalogs():
            print(f"{fn}\t{display}")
        return 0

    try:
        catalog: Catalog = resolve_catalog(args.catalog)
    except CatalogError as exc:
        logger.error("%s", exc)
        return 2

    sim = SimulationController(catalog, view_mode=args.view_mode)
    viewport = SolarViewport(sim, size=(args.size, args.size), fps=args.fps)

    # Start Pygame viewport thread
    viewport.start()

    ControlPanel(sim)

    # Run Dear PyGui event loop
    try:
        dpg.start_dearpygui()
    finally:
        # Stop animation and viewport
        sim.running = False
        viewport.stop()
        viewport.join(timeout=2.0)
        dpg.destroy_context()
    return 0


if __name__ == "__main__":
    sys.exit(main())
