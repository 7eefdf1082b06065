"""
presentation.py

What the viewport shows for the active camera.

MediaPresentation  – still image or looping muted video; loaded lazily on
                     the first frame() so selection itself never blocks
NoisePresentation  – procedural static for LOST SIGNAL cameras

Both expose frame() → HxWx3 uint8 array (or None for a placeholder card),
close(), .pannable and .overlay_text.
"""

from __future__ import annotations

import io
import os
from typing import Optional

import av
import numpy as np
import pygame
import requests
from loguru import logger

import config
from camera_registry import Camera
from static_noise import StaticNoiseGenerator
from video_player import VideoPlayer


def _is_remote(url: str) -> bool:
    return url.lower().startswith(("http://", "https://"))


def load_image(url: str) -> np.ndarray:
    """Decode a still image (local path or http(s) URL) to HxWx3 uint8."""
    if _is_remote(url):
        resp = requests.get(url, timeout=config.HTTP_TIMEOUT)
        resp.raise_for_status()
        ext  = os.path.splitext(url.split("?", 1)[0])[1] or ".png"
        surf = pygame.image.load(io.BytesIO(resp.content), f"feed{ext}")
    else:
        surf = pygame.image.load(url)
    # surfarray is column-major (W, H, 3)
    return np.ascontiguousarray(pygame.surfarray.array3d(surf).swapaxes(0, 1))


class MediaPresentation:
    pannable = True
    overlay_text = ""

    def __init__(self, camera: Camera):
        self.camera  = camera
        self.player: Optional[VideoPlayer] = None
        self.image: Optional[np.ndarray] = None
        self.placeholder: Optional[str] = None
        self._loaded = False
        self.closed  = False

    def _load(self) -> None:
        self._loaded = True
        url = self.camera.media_url
        if not url:
            self.placeholder = config.NO_FEED_TEXT
            return
        try:
            if self.camera.is_video:
                self.player = VideoPlayer()
                self.player.open(url)
            else:
                self.image = load_image(url)
        except Exception as exc:
            logger.warning(f"Feed load error for {self.camera.id} ({url}): {exc}")
            if self.player is not None:
                self.player.close()
                self.player = None
            self.placeholder = config.LOAD_ERROR_TEXT

    def frame(self) -> Optional[np.ndarray]:
        if self.closed:
            return None
        if not self._loaded:
            self._load()
        if self.player is not None:
            try:
                return self.player.decode_frame()
            except av.error.FFmpegError as exc:
                logger.warning(f"Feed decode error for {self.camera.id}: {exc}")
                self.player.close()
                self.player = None
                self.placeholder = config.LOAD_ERROR_TEXT
                return None
        return self.image

    def close(self) -> None:
        if self.player is not None:
            self.player.close()
            self.player = None
        self.image  = None
        self.closed = True


class NoisePresentation:
    pannable = False
    overlay_text = "NO SIGNAL"
    placeholder = None

    def __init__(self, generator: StaticNoiseGenerator):
        self.generator = generator
        self.closed    = False
        generator.start()

    def frame(self) -> Optional[np.ndarray]:
        if self.closed:
            return None
        return self.generator.surface_frame()

    def close(self) -> None:
        self.generator.stop()
        self.closed = True
