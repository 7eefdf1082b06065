#!/usr/bin/env python3
"""
app.py – camera-matrix terminal main loop

Camera list on the left, active feed on the right.  Input is dispatched by
events.py; feed effects (glitch pulses, lost-signal static) are callbacks on
the FrameScheduler, pumped once per loop iteration.
"""
from __future__ import annotations

import random
import time
from typing import List, Optional

import pygame
from loguru import logger

import config
from camera_registry import CameraRegistry
from events import EventManager
from overlays import (draw_camera_list, draw_clock, draw_hud, draw_message_panel,
                      draw_no_signal, draw_status, error_lines)
from renderer import apply_glitch, draw_placeholder, render_frame
from selector import SceneSelector, UnknownCameraId
from timing import FrameScheduler


# ── main application ───────────────────────────────────────────────────────
class CamMatrixViewer:
    def __init__(self, registry: Optional[CameraRegistry] = None,
                 error: Optional[str] = None, title: str = config.DEFAULT_TITLE):

        # window ----------------------------------------------------------
        pygame.init()
        pygame.display.set_caption(title)
        self.screen = self._open_window()
        self.clock  = pygame.time.Clock()

        # core state ------------------------------------------------------
        self.registry  = registry if registry is not None else CameraRegistry()
        self.error     = error
        self.scheduler = FrameScheduler()
        self._rng      = random.Random()
        self.selector  = SceneSelector(self.registry, self.scheduler, self.view_rect.size)

        # list hit boxes / pan button from the last drawn frame
        self.hits: List = []
        self.pan_button: Optional[pygame.Rect] = None

        if not self.error and self.registry.first_id is not None:
            self.select(self.registry.first_id)

    # ── layout -------------------------------------------------------------
    def _open_window(self) -> pygame.Surface:
        return pygame.display.set_mode(
            (0, 0) if config.FULLSCREEN else config.WINDOWED_SIZE,
            pygame.FULLSCREEN if config.FULLSCREEN else 0,
        )

    @property
    def list_rect(self) -> pygame.Rect:
        w, h = self.screen.get_size()
        return pygame.Rect(0, 0, int(w * config.LIST_WIDTH_PCT), h)

    @property
    def view_rect(self) -> pygame.Rect:
        w, h = self.screen.get_size()
        lw   = self.list_rect.width
        return pygame.Rect(lw, 0, w - lw, h)

    # ── actions ------------------------------------------------------------
    def select(self, cam_id: str) -> bool:
        try:
            self.selector.select_camera(cam_id)
        except UnknownCameraId as exc:
            logger.warning(str(exc))
            return False
        return True

    def _dispatch(self, act: dict) -> bool:
        """Apply one queued action; False means quit."""
        t = act.get("type")
        if t == "quit":
            return False
        if t == "select_camera":
            self.select(act.get("id"))
        elif t == "select_next":
            dest = self.registry.next_id(self.selector.session.active_id)
            if dest is not None:
                self.select(dest)
        elif t == "select_prev":
            dest = self.registry.prev_id(self.selector.session.active_id)
            if dest is not None:
                self.select(dest)
        elif t == "toggle_pan":
            if self.selector.pan.enabled:
                logger.debug(f"Pan → {self.selector.toggle_pan()}")
        elif t == "toggle_fullscreen":
            config.FULLSCREEN ^= True
            self.screen = self._open_window()
            self.selector.resize(self.view_rect.size)
        return True

    # ── drawing ------------------------------------------------------------
    def _draw_view(self):
        view = self.view_rect
        pres = self.selector.presentation
        if pres is None:
            self.screen.fill((0, 0, 0), view)
            return

        frame = pres.frame()
        if frame is None:
            draw_placeholder(self.screen, view, pres.placeholder or "")
        else:
            if self.selector.glitch.visible():
                frame = apply_glitch(frame, self._rng)
            render_frame(self.screen, view, frame,
                         self.selector.pan.phase(), self.selector.pan.enabled)

        if pres.overlay_text:
            draw_no_signal(self.screen, view, pres.overlay_text)

    def draw(self):
        self.screen.fill((0, 0, 0))
        if self.error:
            draw_message_panel(self.screen, self.list_rect, error_lines(self.error))
            self.hits = []
        else:
            self.hits = draw_camera_list(self.screen, self.list_rect, self.registry,
                                         self.selector.session.highlighted_id)
        self._draw_view()

        view = self.view_rect
        self.pan_button = draw_status(self.screen, view, self.selector.active_camera,
                                      self.selector.pan_label, self.selector.pan.enabled)
        draw_hud(self.screen, view, self.selector.hud_line)
        draw_clock(self.screen, time.time())

    # ── main loop ---------------------------------------------------------
    def run(self):
        running = True
        while running:
            for e in pygame.event.get():
                EventManager.handle(e, self.registry, self.selector.session.active_id,
                                    self.hits, self.pan_button)

            # drain local + external queue (non-blocking)
            while (act := EventManager.poll()):
                if not self._dispatch(act):
                    running = False
                    break

            self.scheduler.pump()
            self.draw()
            pygame.display.flip()
            self.clock.tick(config.FPS)

        self.selector.unload()
        pygame.quit()
