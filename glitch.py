"""
glitch.py

Randomised glitch pulses for degraded feeds (FLICKER, INTERFERENCE,
LOST SIGNAL).  One pending pulse at most; each pulse reschedules the next.
"""

from __future__ import annotations

import math
import random
from typing import Callable, Optional

import config
from session import ViewerSession
from timing import FrameScheduler, TaskHandle


class GlitchScheduler:
    def __init__(
        self,
        session: ViewerSession,
        scheduler: FrameScheduler,
        rng: Optional[random.Random] = None,
        on_pulse: Optional[Callable[[float], None]] = None,
    ):
        self.session    = session
        self._scheduler = scheduler
        self._rng       = rng or random.Random()
        self._on_pulse  = on_pulse
        self._bounds    = (0.0, 0.0)

        self.showing    = False
        self.pulse_at: Optional[float] = None
        self.pulses     = 0
        self.last_delay: Optional[float] = None

    @property
    def running(self) -> bool:
        task = self.session.glitch_task
        return task is not None and task.active

    # ── control ─────────────────────────────────────────────────────────
    def start(self, min_ms: float, max_ms: float) -> TaskHandle:
        self.stop()
        self._bounds = (float(min_ms), float(max_ms))
        return self._schedule()

    def stop(self) -> None:
        self._scheduler.cancel(self.session.glitch_task)
        self.session.glitch_task = None
        self.showing  = False
        self.pulse_at = None

    # ── internals ───────────────────────────────────────────────────────
    def next_delay(self) -> float:
        """Uniform in [min, max); exactly min when the bounds coincide."""
        lo, hi = self._bounds
        if hi <= lo:
            return lo
        delay = lo + self._rng.random() * (hi - lo)
        if delay >= hi:
            delay = math.nextafter(hi, lo)
        return delay

    def _schedule(self) -> TaskHandle:
        self.last_delay = self.next_delay()
        self.session.glitch_task = self._scheduler.call_later(self.last_delay, self._pulse)
        return self.session.glitch_task

    def _pulse(self) -> None:
        # off then on: restarts the flash even if the last one is still visible
        self.showing  = False
        now           = self._scheduler.now()
        self.showing  = True
        self.pulse_at = now
        self.pulses  += 1
        if self._on_pulse:
            self._on_pulse(now)
        self._schedule()

    def visible(self, now: Optional[float] = None) -> bool:
        if not self.showing or self.pulse_at is None:
            return False
        now = self._scheduler.now() if now is None else now
        return now - self.pulse_at < config.GLITCH_FLASH_MS
