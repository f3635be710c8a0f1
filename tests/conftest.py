import pytest

from orrery.catalog import default_catalog
from orrery.data_models import SimulationParameters


class RecordingSurface:
    """DrawingSurface fake that records every call."""

    def __init__(self, size=(800, 800)):
        self._size = size
        self.calls = []

    @property
    def size(self):
        return self._size

    def fill(self, color):
        self.calls.append(("fill", color))

    def fill_circle(self, center, radius, color):
        self.calls.append(("circle", center, radius, color))

    def stroke_ellipse(self, center, radius_x, radius_y, color):
        self.calls.append(("ellipse", center, radius_x, radius_y, color))

    def of_kind(self, kind):
        return [c for c in self.calls if c[0] == kind]


@pytest.fixture
def catalog():
    return default_catalog()


@pytest.fixture
def params():
    return SimulationParameters()


@pytest.fixture
def make_surface():
    return RecordingSurface
