#!/usr/bin/env python3
"""
Shared constants for the Solar System Orrery (pixels unless stated otherwise).

Keeping constants in one place helps ensure values are consistent across the
codebase and makes tuning easier.
"""

# Catalog units
SIZE_SCALE = 1e-5  # visual size units per km of true diameter

# Time base
TIME_SCALE = 1e-5  # radians per (ms * angular speed unit)

# View modes
VIEW_REALISTIC = "realistic"
VIEW_ILLUSTRATIVE = "illustrative"
VIEW_MODES = (VIEW_REALISTIC, VIEW_ILLUSTRATIVE)
DEFAULT_VIEW_MODE = VIEW_ILLUSTRATIVE

# Realistic mapping
CANVAS_MARGIN = 20  # px kept free between the outermost orbit and the edge
MIN_BODY_SIZE = 1.0  # px, smallest body diameter in either mode
MIN_CENTRAL_SIZE = 2.0  # px, smallest star diameter in realistic mode

# Illustrative mapping
RING_BASE = 50  # px, radius of the innermost ring
RING_SPACING = 50  # px between consecutive rings
ILLUSTRATIVE_MIN_SIZE = 5.0  # px
ILLUSTRATIVE_SIZE_GROWTH = 15.0  # px added for a body as large as the star
ILLUSTRATIVE_CENTRAL_SIZE = 20.0  # px

# Rendering (viewport)
VIEW_WIDTH = 800
VIEW_HEIGHT = 800
TARGET_FPS = 60
BACKGROUND_COLOR = (0, 0, 0)
ORBIT_COLOR = (255, 255, 255, 77)  # ~30% white
HOVER_SCALE = 1.2
MIN_DRAW_RADIUS = 0.5

# Parameter control ranges (min, max, default)
SPEED_RANGE = (0.1, 10.0, 1.0)
DISTANCE_SCALE_RANGE = (0.1, 2.0, 1.0)
CENTRAL_SIZE_RANGE = (0.1, 2.0, 1.0)
BODY_SIZE_RANGE = (0.1, 2.0, 1.0)

# Safety: avoid drawing outside reasonable integer pixel ranges
SAFE_COORD_LIMIT = 30000
