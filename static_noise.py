#!/usr/bin/env python3
"""
static_noise.py

Procedural analog static for LOST SIGNAL cameras.

  • Works on a low-res buffer (0.28 × surface, at least 64 × 64) and upscales
    nearest-neighbour so the snow stays blocky
  • Mid-grey noise, a slow drifting luminance band, sparse white speckles
  • 85 % phosphor persistence: each frame is blended over the previous one
  • Paced to 24 fps from a frame callback, whatever the loop rate is

Frames are HxWx3 uint8 arrays, the same shape VideoPlayer.decode_frame()
returns, so the renderer treats both feeds alike.
"""

from __future__ import annotations

from typing import Optional, Tuple

import numpy as np

import config
from session import ViewerSession
from timing import FrameScheduler, TaskHandle


def buffer_size(w: int, h: int) -> Tuple[int, int]:
    scale = config.NOISE_SCALE
    lo    = config.NOISE_MIN_SIZE
    return max(lo, int(w * scale)), max(lo, int(h * scale))


class StaticNoiseGenerator:
    def __init__(
        self,
        size: Tuple[int, int],
        scheduler: FrameScheduler,
        session: Optional[ViewerSession] = None,
        rng: Optional[np.random.Generator] = None,
    ):
        self.size       = (max(1, int(size[0])), max(1, int(size[1])))
        self.session    = session or ViewerSession()
        self._scheduler = scheduler
        self._rng       = rng or np.random.default_rng()

        self.buf_w, self.buf_h = buffer_size(*self.size)
        self.interval_ms = 1000.0 / config.NOISE_FPS

        # nearest-neighbour lookup tables for the upscale
        w, h = self.size
        self._cols = (np.arange(w) * self.buf_w // w).astype(np.intp)
        self._rows = (np.arange(h) * self.buf_h // h).astype(np.intp)

        self._reset_state()

    # ── state ───────────────────────────────────────────────────────────
    def _reset_state(self) -> None:
        self._current:  Optional[np.ndarray] = None
        self._previous: Optional[np.ndarray] = None
        self._last_ms:  Optional[float]      = None
        self.elapsed   = 0.0        # seconds of rendered time
        self.frames    = 0

    @property
    def running(self) -> bool:
        task = self.session.noise_task
        return task is not None and task.active

    @property
    def frame(self) -> Optional[np.ndarray]:
        """Latest low-res frame (bufH × bufW × 3) or None before the first."""
        return self._previous

    # ── control ─────────────────────────────────────────────────────────
    def start(self) -> TaskHandle:
        self.stop()
        self._current = np.zeros((self.buf_h, self.buf_w, 3), np.uint8)
        self.session.noise_task = self._scheduler.request_frame(self.tick)
        return self.session.noise_task

    def stop(self) -> None:
        self._scheduler.cancel(self.session.noise_task)
        self.session.noise_task = None
        self._reset_state()

    # ── frame callback ──────────────────────────────────────────────────
    def tick(self, now: float) -> None:
        self.session.noise_task = self._scheduler.request_frame(self.tick)

        if self._last_ms is not None:
            dt = now - self._last_ms
            if dt < self.interval_ms:
                return
            self.elapsed += dt / 1000.0
        self._last_ms = now
        self.render()

    def render(self) -> np.ndarray:
        """Draw one frame into the current buffer, then swap buffers."""
        if self._current is None:
            self._current = np.zeros((self.buf_h, self.buf_w, 3), np.uint8)
        w, h = self.buf_w, self.buf_h
        rng  = self._rng

        # 1) mid-grey base noise
        lum = config.NOISE_BASE + rng.random((h, w)) * config.NOISE_SPAN

        # 2) slow drifting luminance band
        band_y = int((self.elapsed * config.NOISE_BAND_SPEED) % h)
        half   = config.NOISE_BAND_HEIGHT // 2
        y0, y1 = max(0, band_y - half), min(h, band_y - half + config.NOISE_BAND_HEIGHT)
        if y0 < y1:
            lum[y0:y1] = np.minimum(255.0, lum[y0:y1] + config.NOISE_BAND_GAIN)

        # 3) sparse white speckles
        n = int(w * h * config.NOISE_SPECKLE_DENSITY)
        if n:
            lum[rng.integers(0, h, n), rng.integers(0, w, n)] = 255.0

        img = np.repeat(lum[..., None], 3, axis=2)

        # 4) phosphor persistence
        if self._previous is not None and self._previous.shape == img.shape:
            keep = config.NOISE_PERSISTENCE
            img  = img * (1.0 - keep) + self._previous * keep

        np.clip(np.rint(img), 0, 255, out=img)
        self._current[...] = img.astype(np.uint8)

        self._current, self._previous = self._previous, self._current
        self.frames += 1
        return self._previous

    # ── output ──────────────────────────────────────────────────────────
    def surface_frame(self) -> Optional[np.ndarray]:
        """Latest frame upscaled (nearest) to the full surface size."""
        if self._previous is None:
            return None
        return self._previous[self._rows][:, self._cols]
