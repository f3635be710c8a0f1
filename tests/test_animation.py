import pytest

from orrery.animation import IDLE, RUNNING, STOPPED, AnimationDriver, FrameScheduler
from orrery.data_models import SimulationParameters
from orrery.mapping import compute_frame


class SyntheticClock:
    def __init__(self, start=1_700_000_000_000.0, step=16.0):
        self.now = start
        self.step = step

    def __call__(self):
        value = self.now
        self.now += self.step
        return value


@pytest.fixture
def scheduler():
    return FrameScheduler()


def make_driver(catalog, scheduler, surface, params=None, hovered=None, clock=None):
    holder = {"params": params or SimulationParameters(), "hovered": hovered}
    driver = AnimationDriver(
        catalog,
        scheduler,
        parameters=lambda: holder["params"],
        surface=lambda: surface,
        hovered=lambda: holder["hovered"],
        clock=clock or SyntheticClock(),
    )
    return driver, holder


def test_scheduler_defers_callbacks_requested_during_run(scheduler):
    seen = []

    def again():
        seen.append("again")

    def first():
        seen.append("first")
        scheduler.request_frame(again)

    scheduler.request_frame(first)
    assert scheduler.run_pending() == 1
    assert seen == ["first"]
    assert scheduler.pending == 1
    assert scheduler.run_pending() == 1
    assert seen == ["first", "again"]


def test_scheduler_cancel(scheduler):
    seen = []
    handle = scheduler.request_frame(lambda: seen.append(1))
    scheduler.cancel_frame(handle)
    assert scheduler.run_pending() == 0
    assert seen == []


def test_cancel_inside_batch_prevents_later_callback(scheduler):
    seen = []
    handles = {}
    handles["a"] = scheduler.request_frame(lambda: scheduler.cancel_frame(handles["b"]))
    handles["b"] = scheduler.request_frame(lambda: seen.append("b"))
    assert scheduler.run_pending() == 1
    assert seen == []


def test_driver_lifecycle(catalog, scheduler, make_surface):
    driver, _ = make_driver(catalog, scheduler, make_surface())
    assert driver.state == IDLE
    assert driver.frame_state == {}
    driver.start()
    assert driver.state == RUNNING
    assert scheduler.pending == 1
    for _ in range(3):
        scheduler.run_pending()
    assert driver.frames_rendered == 3
    assert scheduler.pending == 1
    driver.stop()
    assert driver.state == STOPPED
    assert scheduler.pending == 0
    with pytest.raises(RuntimeError):
        driver.start()


def test_no_frame_after_stop(catalog, scheduler, make_surface):
    surface = make_surface()
    driver, _ = make_driver(catalog, scheduler, surface)
    driver.start()
    scheduler.run_pending()
    calls_before = len(surface.calls)
    driver.stop()
    driver.stop()
    scheduler.run_pending()
    assert len(surface.calls) == calls_before
    assert driver.frames_rendered == 1


def test_stop_from_another_callback_in_same_batch(catalog, scheduler, make_surface):
    surface = make_surface()
    driver, _ = make_driver(catalog, scheduler, surface)
    scheduler.request_frame(driver.stop)
    driver.start()
    scheduler.run_pending()
    assert driver.frames_rendered == 0
    assert surface.calls == []
    assert scheduler.pending == 0


def test_frame_state_matches_last_frame(catalog, scheduler, make_surface):
    clock = SyntheticClock()
    driver, _ = make_driver(catalog, scheduler, make_surface(), clock=clock)
    driver.start()
    scheduler.run_pending()
    expected = compute_frame(catalog, clock.now - clock.step, SimulationParameters(), (800, 800))
    assert driver.last_frame == expected
    for bf in expected.bodies:
        disk = driver.frame_state[bf.index]
        assert (disk.x, disk.y, disk.radius) == (bf.x, bf.y, bf.size)
    with pytest.raises(TypeError):
        driver.frame_state[0] = None


def test_parameter_changes_apply_on_next_frame(catalog, scheduler, make_surface):
    surface = make_surface()
    driver, holder = make_driver(catalog, scheduler, surface)
    driver.start()
    scheduler.run_pending()
    assert surface.of_kind("ellipse")
    holder["params"] = SimulationParameters(show_orbits=False)
    surface.calls.clear()
    scheduler.run_pending()
    assert surface.of_kind("ellipse") == []


def test_hover_state_read_each_frame(catalog, scheduler, make_surface):
    surface = make_surface()
    driver, holder = make_driver(catalog, scheduler, surface)
    driver.start()
    holder["hovered"] = 0
    scheduler.run_pending()
    first_disk = surface.of_kind("circle")[1]
    assert first_disk[2] == pytest.approx(driver.last_frame.bodies[0].size * 1.2 / 2)


def test_missing_surface_skips_frame_but_keeps_running(catalog, scheduler, make_surface):
    state = {"surface": None}
    driver = AnimationDriver(
        catalog,
        scheduler,
        parameters=SimulationParameters,
        surface=lambda: state["surface"],
        clock=SyntheticClock(),
    )
    driver.start()
    scheduler.run_pending()
    assert driver.frames_skipped == 1
    assert driver.frames_rendered == 0
    assert driver.frame_state == {}
    assert scheduler.pending == 1
    state["surface"] = make_surface()
    scheduler.run_pending()
    assert driver.frames_rendered == 1
    assert len(driver.frame_state) == len(catalog.bodies)


def test_draw_frame_is_repeatable(catalog, scheduler, make_surface):
    driver, _ = make_driver(catalog, scheduler, make_surface())
    driver.draw_frame(1234.0)
    first = dict(driver.frame_state)
    driver.draw_frame(1234.0)
    assert dict(driver.frame_state) == first
