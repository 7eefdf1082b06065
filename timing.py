# =========  timing.py  =========
"""
Cooperative timing for the feed effects.

Everything that animates (glitch pulses, lost-signal static) runs as a
callback on the main pygame loop.  `FrameScheduler` gives those callbacks
browser-like semantics:

    call_later(ms, cb)   one-shot timer           (setTimeout)
    request_frame(cb)    cb(now_ms) next pump     (requestAnimationFrame)
    cancel(handle)       idempotent

The clock is injected so tests can step time by hand.
"""

from __future__ import annotations

import itertools
import math
import time
from typing import Callable, List, Optional


def monotonic_ms() -> float:
    return time.monotonic() * 1000.0


def pingpong_phase(elapsed: float, period: float) -> float:
    """
    Mirrors *elapsed* within *period* and returns a position in [0, 1]:
        0 → period/2  : forward ramp 0 → 1
        period/2 → 0  : backward ramp 1 → 0
    """
    if period <= 0:
        return 0.0

    p = math.fmod(elapsed, period)
    if p < 0:
        p += period

    half = period / 2.0
    if p < half:
        return p / half
    return (period - p) / half


class TaskHandle:
    """Returned by every schedule call; consumed by `FrameScheduler.cancel`."""

    __slots__ = ("seq", "kind", "due_ms", "callback", "cancelled", "fired")

    def __init__(self, seq: int, kind: str, due_ms: float, callback: Callable):
        self.seq       = seq
        self.kind      = kind        # "timer" | "frame"
        self.due_ms    = due_ms
        self.callback  = callback
        self.cancelled = False
        self.fired     = False

    @property
    def active(self) -> bool:
        return not (self.cancelled or self.fired)

    def __repr__(self) -> str:
        state = "active" if self.active else ("cancelled" if self.cancelled else "fired")
        return f"<TaskHandle #{self.seq} {self.kind} due={self.due_ms:.1f} {state}>"


class FrameScheduler:
    """Single-threaded timer / frame-callback queue pumped once per loop."""

    def __init__(self, clock: Callable[[], float] = monotonic_ms):
        self._clock   = clock
        self._seq     = itertools.count(1)
        self._timers: List[TaskHandle] = []
        self._frames: List[TaskHandle] = []

    def now(self) -> float:
        return self._clock()

    # ── scheduling ──────────────────────────────────────────────────────
    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> TaskHandle:
        handle = TaskHandle(next(self._seq), "timer",
                            self.now() + max(0.0, delay_ms), callback)
        self._timers.append(handle)
        return handle

    def request_frame(self, callback: Callable[[float], None]) -> TaskHandle:
        handle = TaskHandle(next(self._seq), "frame", self.now(), callback)
        self._frames.append(handle)
        return handle

    def cancel(self, handle: Optional[TaskHandle]) -> None:
        if handle is None or not handle.active:
            return
        handle.cancelled = True
        queue = self._timers if handle.kind == "timer" else self._frames
        try:
            queue.remove(handle)
        except ValueError:
            pass

    def pending(self) -> List[TaskHandle]:
        return [h for h in self._timers + self._frames if h.active]

    # ── main-loop consumer ──────────────────────────────────────────────
    def pump(self) -> int:
        """
        Run due timers (in due order) and the frame callbacks queued before
        this pump started.  Anything scheduled from inside a callback waits
        for the next pump.  Returns the number of callbacks run.
        """
        now = self.now()
        ran = 0

        due = sorted((h for h in self._timers if h.due_ms <= now),
                     key=lambda h: (h.due_ms, h.seq))
        for h in due:
            self._timers.remove(h)
        frames, self._frames = self._frames, []

        for h in due:
            if h.cancelled:
                continue
            h.fired = True
            h.callback()
            ran += 1

        for h in frames:
            if h.cancelled:
                continue
            h.fired = True
            h.callback(now)
            ran += 1

        return ran
