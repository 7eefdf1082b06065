"""
overlays.py

Pygame chrome for the camera-matrix terminal: clock, camera list, status
line, HUD strip, pan control, NO SIGNAL banner and message panels.
"""

from __future__ import annotations

import time
from typing import List, Optional, Tuple

import pygame

from camera_registry import Camera, CameraRegistry

# ── colours ────────────────────────────────────────────────────────────────
WHITE  = (255, 255, 255)
GREEN  = (0, 255, 0)
RED    = (255,  50, 50)
YEL    = (200, 200, 50)
CYAN   = (90, 200, 230)
DIM    = (120, 130, 135)
PANEL  = (6, 14, 18)
ACTIVE = (20, 60, 75)
BG     = (0, 0, 0, 180)

DOT_COLOURS = {"ok": GREEN, "warn": YEL, "err": RED}

pygame.font.init()

HitBox = Tuple[pygame.Rect, str]


# ── helpers ────────────────────────────────────────────────────────────────
def _compute_font_sizes(h: int) -> tuple[int, int, int]:
    return max(12, h // 60), max(16, h // 45), max(24, h // 15)


def _fonts(h: int):
    tiny_pt, small_pt, large_pt = _compute_font_sizes(h)
    return (pygame.font.SysFont("monospace", tiny_pt),
            pygame.font.SysFont("monospace", small_pt),
            pygame.font.SysFont("monospace", large_pt, bold=True))


def _badge(surface: pygame.Surface, text: str, font, colour,
           pos: tuple[int, int], anchor: str = "topleft") -> pygame.Rect:
    """Text on a translucent black box; returns the box rect."""
    pt   = font.get_height()
    tsurf = font.render(text, True, colour)
    bg   = pygame.Surface((tsurf.get_width() + pt // 2, tsurf.get_height() + pt // 4),
                          pygame.SRCALPHA)
    bg.fill(BG)
    bg.blit(tsurf, (pt // 4, pt // 8))
    rect = bg.get_rect(**{anchor: pos})
    surface.blit(bg, rect)
    return rect


def _fit(text: str, font, width: int) -> str:
    if font.size(text)[0] <= width:
        return text
    while text and font.size(text + "…")[0] > width:
        text = text[:-1]
    return text + "…"


# ── clock ──────────────────────────────────────────────────────────────────
def draw_clock(surface: pygame.Surface, now: Optional[float] = None) -> None:
    _, fs, _ = _fonts(surface.get_height())
    _badge(surface, time.strftime("%H:%M:%S", time.localtime(now)), fs, YEL,
           (surface.get_width() - 10, 10), "topright")


# ── camera list ────────────────────────────────────────────────────────────
def draw_camera_list(surface: pygame.Surface, rect: pygame.Rect,
                     registry: CameraRegistry, active_id: Optional[str]) -> List[HitBox]:
    """Sectioned list with status dots; returns click boxes per camera."""
    ft, fs, _ = _fonts(surface.get_height())
    surface.fill(PANEL, rect)

    if not len(registry):
        msg = fs.render("No cameras found", True, DIM)
        surface.blit(msg, msg.get_rect(midtop=(rect.centerx, rect.y + 20)))
        return []

    hits: List[HitBox] = []
    line = ft.get_linesize() + 6
    pad  = 10
    y    = rect.y + pad
    for label, cams in registry.sections():
        if y > rect.bottom:
            break
        surface.blit(fs.render(label, True, CYAN), (rect.x + pad, y))
        y += fs.get_linesize() + 4

        for cam in cams:
            row = pygame.Rect(rect.x, y - 3, rect.width, line)
            if cam.id == active_id:
                surface.fill(ACTIVE, row)
            r = max(3, ft.get_height() // 4)
            pygame.draw.circle(surface, DOT_COLOURS[cam.status.dot],
                               (rect.x + pad + r, row.centery), r)

            dist = ft.render(cam.distance, True, DIM)
            surface.blit(dist, dist.get_rect(midright=(rect.right - pad, row.centery)))

            loc_w = rect.width - 3 * pad - 2 * r - dist.get_width() - pad
            loc   = ft.render(_fit(cam.location, ft, max(10, loc_w)), True, WHITE)
            surface.blit(loc, loc.get_rect(midleft=(rect.x + 2 * pad + 2 * r, row.centery)))

            hits.append((row, cam.id))
            y += line
        y += 6
    return hits


# ── viewport chrome ────────────────────────────────────────────────────────
def draw_status(surface: pygame.Surface, view: pygame.Rect,
                camera: Optional[Camera], pan_label: str,
                show_pan: bool) -> Optional[pygame.Rect]:
    """Location + state top-left, pan control top-right; returns button rect."""
    ft, fs, _ = _fonts(surface.get_height())
    if camera is None:
        _badge(surface, "—", fs, WHITE, (view.x + 10, view.y + 10))
        return None

    colour = DOT_COLOURS[camera.status.dot]
    box = _badge(surface, camera.location, fs, WHITE, (view.x + 10, view.y + 10))
    _badge(surface, camera.status.label, ft, colour, (view.x + 10, box.bottom + 4))

    if not show_pan:
        return None
    return _badge(surface, f"[P] {pan_label}", ft, CYAN,
                  (view.right - 10, view.y + 10), "topright")


def draw_hud(surface: pygame.Surface, view: pygame.Rect, hud_line: str) -> None:
    if not hud_line:
        return
    ft, _, _ = _fonts(surface.get_height())
    _badge(surface, _fit(hud_line, ft, view.width - 40), ft, GREEN,
           (view.centerx, view.bottom - 10), "midbottom")


def draw_no_signal(surface: pygame.Surface, view: pygame.Rect, text: str) -> None:
    _, _, fl = _fonts(surface.get_height())
    _badge(surface, text, fl, WHITE, view.center, "center")


def draw_message_panel(surface: pygame.Surface, rect: pygame.Rect,
                       lines: List[Tuple[str, tuple]]) -> None:
    """Stacked (text, colour) lines, e.g. the sheet error panel."""
    ft, fs, _ = _fonts(surface.get_height())
    surface.fill(PANEL, rect)
    y = rect.y + 16
    for i, (text, colour) in enumerate(lines):
        font = fs if i == 0 else ft
        for chunk in _wrap(text, font, rect.width - 32):
            surface.blit(font.render(chunk, True, colour), (rect.x + 16, y))
            y += font.get_linesize() + 2
        y += 8


def _wrap(text: str, font, width: int) -> List[str]:
    words, out, cur = text.split(), [], ""
    for w in words:
        trial = f"{cur} {w}".strip()
        if font.size(trial)[0] <= width or not cur:
            cur = trial
        else:
            out.append(cur)
            cur = w
    if cur:
        out.append(cur)
    return out or [""]


def error_lines(message: str) -> List[Tuple[str, tuple]]:
    return [
        ("ERROR", RED),
        (message, RED),
        ("Check Sheet ID and API Key configuration.", DIM),
    ]

