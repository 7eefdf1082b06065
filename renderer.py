from __future__ import annotations

import random
from typing import Optional, Tuple

import numpy as np
import pygame

import config


def cover_geometry(frame_size: Tuple[int, int],
                   view_size: Tuple[int, int],
                   phase: float,
                   pannable: bool) -> Tuple[int, int, int, int]:
    """
    Scale (w, h, x, y) for a frame filling the viewport height.  A frame
    wider than the viewport is cropped: swept by *phase* (0 → left edge,
    1 → right edge) when pannable, centred otherwise.
    """
    fw, fh = frame_size
    vw, vh = view_size
    if fw <= 0 or fh <= 0:
        return 0, 0, 0, 0

    scale = max(vw / fw, vh / fh)
    if pannable:
        scale = max(scale, vw * config.PAN_OVERSCAN / fw)
    w, h  = max(1, int(round(fw * scale))), max(1, int(round(fh * scale)))
    excess = w - vw
    if excess > 0 and pannable:
        x = -int(round(excess * min(1.0, max(0.0, phase))))
    else:
        x = -excess // 2
    y = (vh - h) // 2
    return w, h, x, y


def apply_glitch(frame: np.ndarray, rng: Optional[random.Random] = None) -> np.ndarray:
    """Horizontal tear plus a global brightness flicker; returns a new frame."""
    rng  = rng or random.Random()
    h, w = frame.shape[:2]
    img  = frame.copy()

    band_h = max(1, int(h * config.GLITCH_TEAR_BAND_PCT))
    y0 = rng.randrange(0, h - band_h) if band_h < h else 0
    dx = rng.randint(-config.GLITCH_TEAR_MAX_SHIFT, config.GLITCH_TEAR_MAX_SHIFT)
    img[y0:y0 + band_h] = np.roll(img[y0:y0 + band_h], dx, axis=1)

    lo, hi = config.GLITCH_FLICKER_RANGE
    flick  = rng.uniform(lo, hi)
    return np.clip(img * flick, 0, 255).astype(np.uint8)


def draw_placeholder(screen: pygame.Surface, rect: pygame.Rect, text: str) -> None:
    screen.fill(config.PLACEHOLDER_BG, rect)
    font = pygame.font.SysFont("monospace", max(16, rect.height // 12), bold=True)
    surf = font.render(text, True, config.PLACEHOLDER_FG)
    screen.blit(surf, surf.get_rect(center=rect.center))


def render_frame(screen: pygame.Surface, rect: pygame.Rect, frame,
                 phase: float = 0.5, pannable: bool = False) -> None:
    """
    Cover-scale a raw RGB frame into `rect` on `screen`, cropping to the
    viewport and panning across the excess width.
    """
    surf = pygame.image.frombuffer(np.ascontiguousarray(frame), frame.shape[1::-1], "RGB")
    w, h, x, y = cover_geometry(surf.get_size(), rect.size, phase, pannable)
    surf = pygame.transform.scale(surf, (w, h))

    prev_clip = screen.get_clip()
    screen.set_clip(rect)
    screen.fill((0, 0, 0), rect)
    screen.blit(surf, (rect.x + x, rect.y + y))
    screen.set_clip(prev_clip)
