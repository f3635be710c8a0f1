import pytest

from orrery.controller import SimulationController, describe_body
from orrery.data_models import RenderedDisk, SimulationParameters
from orrery.mapping import compute_frame
from orrery.render import render_frame


@pytest.fixture
def sim(catalog):
    return SimulationController(catalog)


@pytest.fixture
def frame_state(catalog, make_surface):
    surface = make_surface()
    frame = compute_frame(catalog, 1_700_000_000_000.0, SimulationParameters(), surface.size)
    return render_frame(surface, frame, catalog, show_orbits=True)


def test_default_parameters(sim):
    assert sim.parameters() == SimulationParameters(view_mode="illustrative")


def test_setters_clamp_to_control_ranges(sim):
    sim.set_speed_multiplier(50)
    sim.set_distance_scale(0)
    sim.set_central_size_scale(-3)
    sim.set_body_size_scale(1.5)
    params = sim.parameters()
    assert params.speed_multiplier == 10.0
    assert params.distance_scale == 0.1
    assert params.central_size_scale == 0.1
    assert params.body_size_scale == 1.5


def test_view_mode_and_orbits(sim):
    sim.set_view_mode("realistic")
    sim.set_show_orbits(False)
    params = sim.parameters()
    assert params.view_mode == "realistic"
    assert params.show_orbits is False
    with pytest.raises(ValueError):
        sim.set_view_mode("isometric")


def test_unknown_initial_view_mode_rejected(catalog):
    with pytest.raises(ValueError):
        SimulationController(catalog, view_mode="3d")


def test_click_at_cached_center_selects_that_body(sim, frame_state, catalog):
    disk = frame_state[2]
    assert sim.handle_click((disk.x, disk.y), frame_state) == 2
    assert sim.selected_body() is catalog.bodies[2]


def test_click_on_empty_space_clears_selection(sim, frame_state):
    disk = frame_state[4]
    sim.handle_click((disk.x, disk.y), frame_state)
    assert sim.handle_click((-500.0, -500.0), frame_state) is None
    assert sim.selected_body() is None


def test_selection_persists_until_dismissed(sim, frame_state):
    disk = frame_state[1]
    sim.handle_click((disk.x, disk.y), frame_state)
    sim.handle_motion((-1.0, -1.0), frame_state)
    sim.handle_leave()
    assert sim.selected_index == 1
    sim.dismiss_selection()
    assert sim.selection_details() is None


def test_hover_follows_pointer_and_clears_on_leave(sim, frame_state):
    disk = frame_state[5]
    assert sim.handle_motion((disk.x, disk.y), frame_state) == 5
    assert sim.get_hovered_index() == 5
    sim.handle_leave()
    assert sim.get_hovered_index() is None


def test_pointer_before_first_frame_matches_nothing(sim):
    assert sim.handle_click((400.0, 400.0), {}) is None
    assert sim.handle_motion((400.0, 400.0), {}) is None


def test_hover_uses_only_the_given_table(sim):
    table = {0: RenderedDisk(10.0, 10.0, 4.0)}
    assert sim.handle_motion((11.0, 10.0), table) == 0
    assert sim.handle_motion((13.0, 10.0), table) is None


def test_selection_details_for_info_panel(sim, frame_state, catalog):
    disk = frame_state[2]
    sim.handle_click((disk.x, disk.y), frame_state)
    details = sim.selection_details()
    assert details.name == "Earth"
    assert details.distance_text == "149.6 million km"
    assert details.diameter_text == "12742 km"
    assert describe_body(catalog.bodies[4]).diameter_text == "139820 km"
