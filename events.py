#!/usr/bin/env python3
"""
events.py  – central hub

• Translates raw Pygame events to high-level action dicts.
• Exposes a thread-safe queue so *any* external source can inject
  the same actions (web remote, scripts, etc.).

Actions
-------
{"type": "select_camera", "id": <camId>}
{"type": "toggle_pan"}
{"type": "toggle_fullscreen"}
{"type": "quit"}
"""

from __future__ import annotations
import queue
from typing import Optional, Sequence

import pygame
from pygame.locals import *

Action = dict      # alias for readability


class EventManager:
    _fifo: "queue.Queue[Action]" = queue.Queue()      # global, thread-safe

    # ── SDL / keyboard / mouse path ────────────────────────────────────
    @classmethod
    def handle(cls, event, registry, active_id, hits: Sequence = (),
               pan_button: Optional[pygame.Rect] = None) -> None:
        """Translate one Pygame event → action and enqueue it."""
        act = cls._translate_pygame(event, registry, active_id, hits, pan_button)
        if act:
            cls._fifo.put(act)

    # ── external / programmatic path ───────────────────────────────────
    @classmethod
    def post(cls, action: Action) -> None:
        """
        Any thread may call this to inject an already-formed action dict, e.g.:
            EventManager.post({"type": "select_camera", "id": "cam-corridor"})
        """
        cls._fifo.put(action)

    # ── main-loop consumer ─────────────────────────────────────────────
    @classmethod
    def poll(cls) -> Action | None:
        """Return next queued action or None (non-blocking)."""
        try:
            return cls._fifo.get_nowait()
        except queue.Empty:
            return None

    @classmethod
    def clear(cls) -> None:
        while cls.poll() is not None:
            pass

    # ── internal translator ───────────────────────────────────────────
    @staticmethod
    def _translate_pygame(event, registry, active_id, hits, pan_button) -> Action | None:
        if event.type == QUIT:
            return {"type": "quit"}

        if event.type == KEYDOWN:
            if event.key in (K_ESCAPE, K_q):
                return {"type": "quit"}
            if event.key == K_p:
                return {"type": "toggle_pan"}
            if event.key == K_f:
                return {"type": "toggle_fullscreen"}
            if registry is not None and event.key in (K_DOWN, K_UP):
                dest = registry.next_id(active_id) if event.key == K_DOWN \
                      else registry.prev_id(active_id)
                if dest is not None:
                    return {"type": "select_camera", "id": dest}

        if event.type == MOUSEBUTTONDOWN and event.button == 1:
            if pan_button is not None and pan_button.collidepoint(event.pos):
                return {"type": "toggle_pan"}
            for rect, cam_id in hits:
                if rect.collidepoint(event.pos):
                    return {"type": "select_camera", "id": cam_id}

        return None
