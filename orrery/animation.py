#!/usr/bin/env python3
"""
Animation driver for the Solar System Orrery.

What this module does
- FrameScheduler queues "run me on the next refresh" callbacks. The host loop (the pygame
  viewport thread) calls run_pending() once per display refresh; tests call it directly.
- AnimationDriver repeatedly computes and renders a frame, rescheduling itself after each tick,
  until stop() is called.

State machine
- IDLE -> RUNNING on start(); RUNNING -> STOPPED on stop(). stop() cancels the pending tick,
  and a tick that was already dequeued re-checks the state before doing anything.

Time base
- The default clock is absolute wall-clock time in milliseconds, so a paused host jumps ahead
  when it resumes instead of catching up.
"""
import logging
import threading
import time
from types import MappingProxyType
from typing import Callable, Dict, Mapping, Optional

from .data_models import Catalog, Frame, RenderedDisk, SimulationParameters
from .mapping import compute_frame
from .render import DrawingSurface, render_frame

logger = logging.getLogger(__name__)

IDLE = "idle"
RUNNING = "running"
STOPPED = "stopped"

FrameCallback = Callable[[], None]


def wall_clock_ms() -> float:
    return time.time() * 1000.0


class FrameScheduler:
    """
    Host-agnostic equivalent of requestAnimationFrame/cancelAnimationFrame.

    Callbacks requested while run_pending() is executing are deferred to the next call.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._pending: Dict[int, FrameCallback] = {}
        self._running_batch: Dict[int, FrameCallback] = {}
        self._next_handle = 1

    @property
    def pending(self) -> int:
        with self._lock:
            return len(self._pending)

    def request_frame(self, callback: FrameCallback) -> int:
        with self._lock:
            handle = self._next_handle
            self._next_handle += 1
            self._pending[handle] = callback
            return handle

    def cancel_frame(self, handle: int) -> None:
        with self._lock:
            self._pending.pop(handle, None)
            self._running_batch.pop(handle, None)

    def run_pending(self) -> int:
        """Run every callback queued before this call. Returns how many ran."""
        with self._lock:
            self._running_batch = self._pending
            self._pending = {}
            handles = list(self._running_batch)
        ran = 0
        for handle in handles:
            with self._lock:
                callback = self._running_batch.pop(handle, None)
            if callback is None:
                continue
            callback()
            ran += 1
        return ran


class AnimationDriver:
    """
    Cancellable repeating "compute frame -> render" task.

    parameters, surface and hovered are polled on every tick, so control changes take effect on
    the very next frame. surface may return None when no drawing context is available; that
    frame is skipped and the next tick is still scheduled.
    """

    def __init__(
        self,
        catalog: Catalog,
        scheduler: FrameScheduler,
        parameters: Callable[[], SimulationParameters],
        surface: Callable[[], Optional[DrawingSurface]],
        hovered: Callable[[], Optional[int]] = lambda: None,
        clock: Callable[[], float] = wall_clock_ms,
    ):
        self.catalog = catalog
        self.scheduler = scheduler
        self._parameters = parameters
        self._surface = surface
        self._hovered = hovered
        self._clock = clock
        self._state = IDLE
        self._handle: Optional[int] = None
        self._frame_state: Mapping[int, RenderedDisk] = MappingProxyType({})
        self.last_frame: Optional[Frame] = None
        self.frames_rendered = 0
        self.frames_skipped = 0

    @property
    def state(self) -> str:
        return self._state

    @property
    def frame_state(self) -> Mapping[int, RenderedDisk]:
        """Read-only index -> RenderedDisk table of the last completed frame."""
        return self._frame_state

    def start(self) -> None:
        if self._state != IDLE:
            raise RuntimeError(f"cannot start animation driver in state {self._state!r}")
        self._state = RUNNING
        logger.debug("Animation driver started for catalog %r", self.catalog.name)
        self._schedule()

    def stop(self) -> None:
        if self._state == STOPPED:
            return
        if self._handle is not None:
            self.scheduler.cancel_frame(self._handle)
            self._handle = None
        self._state = STOPPED
        logger.debug("Animation driver stopped after %d frames", self.frames_rendered)

    def _schedule(self) -> None:
        self._handle = self.scheduler.request_frame(self._tick)

    def _tick(self) -> None:
        self._handle = None
        if self._state != RUNNING:
            return
        self.draw_frame(self._clock())
        self._schedule()

    def draw_frame(self, time_ms: float) -> bool:
        """
        Compute and paint one frame at time_ms. Returns False when the surface is unavailable.
        """
        surface = self._surface()
        if surface is None:
            self.frames_skipped += 1
            logger.debug("No drawing surface, skipping frame at t=%.0f ms", time_ms)
            return False
        params = self._parameters()
        frame = compute_frame(self.catalog, time_ms, params, surface.size)
        table = render_frame(surface, frame, self.catalog, params.show_orbits, self._hovered())
        # Swap the whole table at once so pointer handlers never see a partial frame.
        self._frame_state = MappingProxyType(table)
        self.last_frame = frame
        self.frames_rendered += 1
        return True
