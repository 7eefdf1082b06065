"""
camera_registry.py

Camera descriptors for the matrix view, built once from the "Cams" sheet.

* One `Camera` per sheet row with a camId; later rows reusing an id are
  ignored.
* Sections are not stored: they are derived from the cameras' section
  labels, ordered by label, load order inside each group.
* `next_id()` / `prev_id()` walk the list in display order and wrap.
"""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

from loguru import logger

import config
from sheets import SheetError, fetch_sheet_data, parse_sheet_data

# ── Regex helpers ───────────────────────────────────────────────────────────
_FLOAT_RE = re.compile(r"^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_INT_RE   = re.compile(r"^\s*[+-]?\d+")
_SEP_RE   = re.compile(r"[\s_-]+")


def _leading_float(text: str) -> Optional[float]:
    m = _FLOAT_RE.match(text or "")
    return float(m.group(0)) if m else None


def _leading_int(text: str) -> Optional[int]:
    m = _INT_RE.match(text or "")
    return int(m.group(0)) if m else None


# ── Status ──────────────────────────────────────────────────────────────────
class CameraStatus(enum.Enum):
    ONLINE       = "ONLINE"
    FLICKER      = "FLICKER"
    INTERFERENCE = "INTERFERENCE"
    LOST_SIGNAL  = "LOST SIGNAL"
    OFFLINE      = "OFFLINE"

    @classmethod
    def parse(cls, raw: str) -> "CameraStatus":
        text = _SEP_RE.sub("_", (raw or "").strip().upper())
        if not text:
            return cls.OFFLINE
        try:
            return cls[text]
        except KeyError:
            logger.warning(f"Unknown camera status {raw!r}, treating as OFFLINE")
            return cls.OFFLINE

    @property
    def label(self) -> str:
        return self.value

    @property
    def glitches(self) -> bool:
        return self in _GLITCHING

    @property
    def dot(self) -> str:
        """List-dot class: ok / warn / err."""
        if self is CameraStatus.ONLINE:
            return "ok"
        if self is CameraStatus.FLICKER:
            return "warn"
        return "err"


_GLITCHING = frozenset({
    CameraStatus.FLICKER,
    CameraStatus.INTERFERENCE,
    CameraStatus.LOST_SIGNAL,
})


# ── Data structures ─────────────────────────────────────────────────────────
@dataclass(frozen=True)
class Camera:
    id: str
    section: str = config.DEFAULT_SECTION
    location: str = config.DEFAULT_LOCATION
    status: CameraStatus = CameraStatus.OFFLINE
    distance: str = config.DEFAULT_DISTANCE
    hud_text: str = config.DEFAULT_HUD_TEXT
    media_url: str = ""
    pan_enabled: bool = False
    pan_duration: float = config.DEFAULT_PAN_DURATION
    glitch_min_ms: int = config.DEFAULT_GLITCH_MIN_MS
    glitch_max_ms: int = config.DEFAULT_GLITCH_MAX_MS

    @property
    def hud_line(self) -> str:
        return f"{self.hud_text}  |  CAMERA: {self.id.upper()}"

    @property
    def is_video(self) -> bool:
        return self.media_url.lower().endswith(config.VIDEO_EXTENSIONS)


def camera_from_row(row: Mapping[str, str]) -> Optional[Camera]:
    """Map one parsed sheet row (lower-cased keys) to a `Camera`."""
    cam_id = (row.get("camid") or "").strip()
    if not cam_id:
        return None

    pan_duration = _leading_float(row.get("panduration", ""))
    if pan_duration is None or pan_duration <= 0:
        pan_duration = config.DEFAULT_PAN_DURATION

    g_min = _leading_int(row.get("glitchminms", ""))
    g_max = _leading_int(row.get("glitchmaxms", ""))
    if g_min is None or g_min < 0:
        g_min = config.DEFAULT_GLITCH_MIN_MS
    if g_max is None or g_max < 0:
        g_max = config.DEFAULT_GLITCH_MAX_MS
    if g_min > g_max:
        g_min, g_max = g_max, g_min

    return Camera(
        id=cam_id,
        section=row.get("section") or config.DEFAULT_SECTION,
        location=row.get("location") or config.DEFAULT_LOCATION,
        status=CameraStatus.parse(row.get("status", "")),
        distance=row.get("distance") or config.DEFAULT_DISTANCE,
        hud_text=row.get("hudtext") or config.DEFAULT_HUD_TEXT,
        media_url=(row.get("imageurl") or "").strip(),
        pan_enabled=(row.get("panenabled") or "").strip().lower() == "true",
        pan_duration=pan_duration,
        glitch_min_ms=g_min,
        glitch_max_ms=g_max,
    )


# ── Registry ────────────────────────────────────────────────────────────────
class CameraRegistry:
    """Cameras keyed by id, in load order."""

    def __init__(self, cameras: Iterable[Camera] = ()) -> None:
        self._cameras: Dict[str, Camera] = {}
        for cam in cameras:
            if cam.id in self._cameras:
                logger.warning(f"Duplicate camId {cam.id!r} ignored")
                continue
            self._cameras[cam.id] = cam

    @classmethod
    def from_rows(cls, rows: Iterable[Mapping[str, str]]) -> "CameraRegistry":
        cams = []
        for row in rows:
            cam = camera_from_row(row)
            if cam is None:
                logger.warning("Skipping camera row without camId")
                continue
            cams.append(cam)
        return cls(cams)

    # ---------------------------------------------------------------- lookup
    def get(self, cam_id: str) -> Optional[Camera]:
        return self._cameras.get(cam_id)

    def __contains__(self, cam_id: object) -> bool:
        return cam_id in self._cameras

    def __len__(self) -> int:
        return len(self._cameras)

    def __iter__(self) -> Iterator[Camera]:
        return iter(self._cameras.values())

    @property
    def first_id(self) -> Optional[str]:
        return next(iter(self._cameras), None)

    # -------------------------------------------------------------- sections
    def sections(self) -> List[Tuple[str, List[Camera]]]:
        groups: Dict[str, List[Camera]] = {}
        for cam in self._cameras.values():
            groups.setdefault(cam.section, []).append(cam)
        return [(label, groups[label]) for label in sorted(groups)]

    def ordered_ids(self) -> List[str]:
        return [cam.id for _, cams in self.sections() for cam in cams]

    # ------------------------------------------------------------ navigation
    def next_id(self, cur: Optional[str]) -> Optional[str]:
        keys = self.ordered_ids()
        if not keys:
            return cur
        if cur not in keys:
            return keys[0]
        return keys[(keys.index(cur) + 1) % len(keys)]

    def prev_id(self, cur: Optional[str]) -> Optional[str]:
        keys = self.ordered_ids()
        if not keys:
            return cur
        if cur not in keys:
            return keys[-1]
        return keys[(keys.index(cur) - 1) % len(keys)]


def load_registry(
    sheet_id: Optional[str] = None,
    api_key: Optional[str] = None,
    tab: Optional[str] = None,
    session=None,
) -> CameraRegistry:
    """Fetch the Cams tab and build the registry.  Raises `SheetError`."""
    sheet_id = config.SHEET_ID if sheet_id is None else sheet_id
    api_key  = config.API_KEY if api_key is None else api_key
    tab      = tab or config.CAMS_TAB_NAME
    rows = fetch_sheet_data(sheet_id, f"{tab}!{config.CAMS_RANGE}", api_key, session)
    if not rows:
        raise SheetError(f"No camera data found in {tab} sheet")

    registry = CameraRegistry.from_rows(parse_sheet_data(rows))
    logger.info(f"Loaded {len(registry)} cameras in {len(registry.sections())} sections")
    return registry
