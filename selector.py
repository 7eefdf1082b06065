"""
selector.py

Scene selector: the Idle / Viewing(camera) state machine behind the
viewport.

Every selection tears the previous view down completely (static loop,
glitch timer, media) before the next one is built, so at any moment there
is one presentation, at most one pending glitch pulse and at most one
static-noise frame request.
"""

from __future__ import annotations

import random
from typing import Callable, Optional, Tuple

import numpy as np
from loguru import logger

from camera_registry import Camera, CameraRegistry, CameraStatus
from glitch import GlitchScheduler
from pan import PanController
from presentation import MediaPresentation, NoisePresentation
from session import ViewerSession
from static_noise import StaticNoiseGenerator
from timing import FrameScheduler


class UnknownCameraId(LookupError):
    """Selection of an id that is not in the registry."""

    def __init__(self, cam_id):
        super().__init__(f"Camera {cam_id!r} not found")
        self.cam_id = cam_id


class SceneSelector:
    def __init__(
        self,
        registry: CameraRegistry,
        scheduler: FrameScheduler,
        surface_size: Tuple[int, int],
        rng: Optional[random.Random] = None,
        noise_rng: Optional[np.random.Generator] = None,
        media_factory: Callable[[Camera], object] = MediaPresentation,
    ):
        self.registry      = registry
        self.scheduler     = scheduler
        self.surface_size  = surface_size
        self.session       = ViewerSession()
        self.media_factory = media_factory
        self._noise_rng    = noise_rng

        self.pan    = PanController(self.session, scheduler.now)
        self.glitch = GlitchScheduler(self.session, scheduler, rng)
        self.noise: Optional[StaticNoiseGenerator] = None

    # ── state ───────────────────────────────────────────────────────────
    @property
    def state(self) -> str:
        return "idle" if self.session.idle else "viewing"

    @property
    def active_camera(self) -> Optional[Camera]:
        if self.session.active_id is None:
            return None
        return self.registry.get(self.session.active_id)

    @property
    def presentation(self):
        return self.session.presentation

    @property
    def hud_line(self) -> str:
        cam = self.active_camera
        return cam.hud_line if cam else ""

    @property
    def pan_label(self) -> str:
        return self.pan.label

    # ── transitions ─────────────────────────────────────────────────────
    def select_camera(self, cam_id: str) -> Camera:
        cam = self.registry.get(cam_id)
        if cam is None:
            raise UnknownCameraId(cam_id)

        self._teardown()

        if cam.status is CameraStatus.LOST_SIGNAL:
            self.noise = StaticNoiseGenerator(
                self.surface_size, self.scheduler, self.session, self._noise_rng)
            presentation = NoisePresentation(self.noise)
        else:
            presentation = self.media_factory(cam)
        self.session.presentation = presentation

        if cam.pan_enabled and presentation.pannable:
            self.pan.enable(cam.pan_duration)
        else:
            self.pan.disable()

        if cam.status.glitches:
            self.glitch.start(cam.glitch_min_ms, cam.glitch_max_ms)

        self.session.active_id      = cam.id
        self.session.highlighted_id = cam.id
        logger.info(f"Camera {cam.id} ({cam.location}) – {cam.status.label}")
        return cam

    def toggle_pan(self) -> str:
        self.pan.toggle()
        return self.pan.label

    def resize(self, size: Tuple[int, int]) -> None:
        """New viewport size; rebuilds the current view at the new size."""
        if tuple(size) == tuple(self.surface_size):
            return
        self.surface_size = tuple(size)
        if self.session.active_id is not None:
            self.select_camera(self.session.active_id)

    def unload(self) -> None:
        self._teardown()
        self.session.active_id      = None
        self.session.highlighted_id = None

    # ── internals ───────────────────────────────────────────────────────
    def _teardown(self) -> None:
        if self.noise is not None:
            self.noise.stop()
            self.noise = None
        self.scheduler.cancel(self.session.noise_task)
        self.session.noise_task = None

        self.glitch.stop()

        if self.session.presentation is not None:
            self.session.presentation.close()
            self.session.presentation = None

        self.pan.reset()
