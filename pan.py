"""
pan.py

Horizontal back-and-forth sweep across a feed wider than the viewport.

The sweep is a ping-pong over *duration* seconds of *running* time, so
pausing freezes the picture where it is and resuming carries on from the
same spot.  The paused flag lives on the shared `ViewerSession`.
"""

from __future__ import annotations

from typing import Optional

from session import ViewerSession
from timing import monotonic_ms, pingpong_phase

PAUSE_LABEL  = "PAUSE PAN"
RESUME_LABEL = "RESUME PAN"


class PanController:
    def __init__(self, session: ViewerSession, clock=monotonic_ms):
        self.session   = session
        self._clock    = clock
        self.enabled   = False
        self.duration  = 0.0
        self._run_ms   = 0.0                 # running time banked before the last resume
        self._resumed: Optional[float] = None

    # ── state ───────────────────────────────────────────────────────────
    @property
    def paused(self) -> bool:
        return self.session.pan_paused

    @property
    def label(self) -> str:
        return RESUME_LABEL if self.paused else PAUSE_LABEL

    # ── control ─────────────────────────────────────────────────────────
    def reset(self) -> None:
        self.session.pan_paused = False
        self._run_ms  = 0.0
        self._resumed = self._clock()

    def enable(self, duration: float) -> None:
        self.enabled  = True
        self.duration = float(duration)
        self.reset()

    def disable(self) -> None:
        self.enabled  = False
        self.duration = 0.0
        self.reset()

    def toggle(self) -> bool:
        now = self._clock()
        if self.paused:
            self._resumed = now
            self.session.pan_paused = False
        else:
            if self._resumed is not None:
                self._run_ms += now - self._resumed
            self._resumed = None
            self.session.pan_paused = True
        return self.paused

    # ── sampling ────────────────────────────────────────────────────────
    def elapsed(self, now: Optional[float] = None) -> float:
        """Seconds of running (unpaused) sweep time."""
        ms = self._run_ms
        if not self.paused and self._resumed is not None:
            ms += (self._clock() if now is None else now) - self._resumed
        return ms / 1000.0

    def phase(self, now: Optional[float] = None) -> float:
        """Sweep position in [0, 1]; centred when the sweep is disabled."""
        if not self.enabled:
            return 0.5
        return pingpong_phase(self.elapsed(now), self.duration)
