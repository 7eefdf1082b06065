# =========  video_player.py  =========
"""
Looping, muted VideoPlayer for camera feeds (PyAV).

Public API
----------
open(path, start)
decode_frame()  → frame for the current wall time (HxWx3 uint8)
close() / stop()
Properties
----------
.path  → current file path / URL
.sar   → sample-aspect ratio
.loops → times the clip has wrapped since open()
"""
from __future__ import annotations

import time
from typing import Iterator, Optional

import av
import numpy as np

# used when the container reports no frame rate
FALLBACK_RATE = 25


class VideoPlayer:
    def __init__(self, clock=time.monotonic):
        self._clock = clock
        self._container = None
        self._stream    = None
        self._frames: Optional[Iterator] = None
        self._last: Optional[np.ndarray] = None
        self._last_pts  = 0.0
        self._t0        = 0.0
        self._loop_base = 0.0
        self.loops      = 0
        self.sar  = 1.0
        self.path = ""

    # ── public API ──────────────────────────────────────────────────────────
    def open(self, fp: str, start: float = 0.0):
        self.close()

        self._container = av.open(fp)
        self._stream = next(s for s in self._container.streams if s.type == "video")
        self._stream.thread_type = "AUTO"

        sar = self._stream.sample_aspect_ratio
        self.sar = float(sar) if sar else 1.0
        self.path = fp

        if start > 0:
            self._seek(start)
        self._t0 = self._clock() - max(0.0, start)
        self._loop_base = 0.0
        self.loops      = 0
        self._last_pts  = 0.0
        self._frames = self._container.decode(self._stream)

        # grab first frame so decode_frame() never returns None
        self._last = self._next_frame()

    def decode_frame(self):
        """Advance to the newest frame whose pts has passed; loop at EOS."""
        if self._container is None:
            return self._last

        target = self._clock() - self._t0
        while self._loop_base + self._last_pts < target:
            frame = self._next_frame()
            if frame is None:
                break
            self._last = frame
        return self._last

    def close(self):
        if self._container is not None:
            try:
                self._container.close()
            except av.error.FFmpegError:
                pass
        self._container = None
        self._stream = None
        self._frames = None
        self.path = ""

    stop = close  # alias

    # ── internals ───────────────────────────────────────────────────────────
    def _seek(self, sec: float):
        tb = self._stream.time_base
        self._container.seek(int(sec / tb), stream=self._stream)

    def _frame_duration(self) -> float:
        rate = self._stream.average_rate or self._stream.guessed_rate
        return float(1 / rate) if rate else 1.0 / FALLBACK_RATE

    def _rewind(self) -> bool:
        """Carry the clip length into the loop base and restart decoding."""
        clip = self._last_pts + self._frame_duration()
        if clip <= 0:
            return False
        self._loop_base += clip
        # a long stall would otherwise replay every missed loop frame by frame
        behind = self._clock() - self._t0 - self._loop_base
        if behind > clip:
            self._loop_base += (behind // clip) * clip
        self.loops += 1
        self._container.seek(0, stream=self._stream)
        self._frames = self._container.decode(self._stream)
        return True

    def _next_frame(self) -> Optional[np.ndarray]:
        for attempt in range(2):
            try:
                frame = next(self._frames)
            except StopIteration:
                if attempt or not self._rewind():
                    return None
                continue
            if frame.pts is not None:
                self._last_pts = float(frame.pts * self._stream.time_base)
            return frame.to_ndarray(format="rgb24")
        return None
