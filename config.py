# config.py
"""
Configuration settings for the camera-matrix terminal.
"""
import os

FPS = 30

# ── Sheet source ───────────────────────────────────────────────────────────

# Google Sheet holding the "Cams" tab; override from the environment
SHEET_ID      = os.environ.get("CAMMATRIX_SHEET_ID", "")
API_KEY       = os.environ.get("CAMMATRIX_API_KEY", "")
CAMS_TAB_NAME = os.environ.get("CAMMATRIX_CAMS_TAB", "Cams")
CAMS_RANGE    = "A1:Z1000"

SHEETS_API_BASE = "https://sheets.googleapis.com/v4/spreadsheets"
HTTP_TIMEOUT    = 10.0   # seconds, sheet fetch and remote media

DEFAULT_TITLE     = "CAMERA MATRIX"
DEFAULT_LOCALE    = "en_US"
DEFAULT_TIME_ZONE = "America/New_York"

# ── Camera row defaults ────────────────────────────────────────────────────

DEFAULT_SECTION       = "UNKNOWN"
DEFAULT_LOCATION      = "Unknown Location"
DEFAULT_DISTANCE      = "--"
DEFAULT_HUD_TEXT      = "CAMERA FEED"
DEFAULT_PAN_DURATION  = 7.0
DEFAULT_GLITCH_MIN_MS = 400
DEFAULT_GLITCH_MAX_MS = 1200

VIDEO_EXTENSIONS = (".mp4", ".webm", ".mov")

# ── Display settings ───────────────────────────────────────────────────────

FULLSCREEN    = False
WINDOWED_SIZE = (1280, 720)
LIST_WIDTH_PCT = 0.28      # share of the window used by the camera list
PAN_OVERSCAN   = 1.35      # panned feeds are at least this much wider than the view

# Placeholder card for cameras without a usable feed
PLACEHOLDER_BG = (3, 16, 24)
PLACEHOLDER_FG = (29, 91, 114)
NO_FEED_TEXT    = "NO CAMERA FEED"
LOAD_ERROR_TEXT = "IMAGE LOAD ERROR"

# ── Lost-signal static (procedural, low-res + nearest upscale) ─────────────

NOISE_FPS             = 24
NOISE_SCALE           = 0.28   # working buffer vs. surface size
NOISE_MIN_SIZE        = 64     # buffer floor, per axis
NOISE_BASE            = 100    # grey floor
NOISE_SPAN            = 70     # grey range above the floor
NOISE_BAND_HEIGHT     = 6      # rows in the drifting luminance band
NOISE_BAND_SPEED      = 20     # band rows per second
NOISE_BAND_GAIN       = 10
NOISE_SPECKLE_DENSITY = 0.002
NOISE_PERSISTENCE     = 0.85   # share of the previous frame kept

# ── Glitch pulses ──────────────────────────────────────────────────────────

GLITCH_FLASH_MS       = 180
GLITCH_TEAR_BAND_PCT  = 0.10
GLITCH_TEAR_MAX_SHIFT = 40
GLITCH_FLICKER_RANGE  = (0.75, 1.35)

# ── Remote control ─────────────────────────────────────────────────────────

WEB_REMOTE_ENABLED = True
WEB_REMOTE_PORT    = int(os.environ.get("CAMMATRIX_PORT", "8088"))

# ── Logging ────────────────────────────────────────────────────────────────

LOG_LEVEL = os.environ.get("CAMMATRIX_LOG_LEVEL", "INFO")
LOG_FILE  = "runtime.log"
