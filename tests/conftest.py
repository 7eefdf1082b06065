"""Shared fixtures: headless SDL, a hand-stepped clock, sample cameras."""

import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pytest

from camera_registry import Camera, CameraRegistry, CameraStatus
from events import EventManager
from timing import FrameScheduler


class ManualClock:
    """Millisecond clock advanced by hand."""

    def __init__(self, start: float = 0.0):
        self.ms = start

    def __call__(self) -> float:
        return self.ms

    def advance(self, ms: float) -> float:
        self.ms += ms
        return self.ms


@pytest.fixture
def clock():
    return ManualClock(1000.0)


@pytest.fixture
def scheduler(clock):
    return FrameScheduler(clock)


class StubMedia:
    """Media presentation that never touches files or the network."""

    pannable = True
    overlay_text = ""
    placeholder = None

    def __init__(self, camera):
        self.camera = camera
        self.closed = False

    def frame(self):
        return None

    def close(self):
        self.closed = True


@pytest.fixture
def cameras():
    return [
        Camera(id="cam-corridor", section="SECTION A", location="A-03 CORRIDOR",
               status=CameraStatus.ONLINE, pan_enabled=True, pan_duration=7.0,
               hud_text="ZOOM: 1.0x"),
        Camera(id="cam-lab", section="SECTION B", location="B-12 LAB",
               status=CameraStatus.FLICKER, glitch_min_ms=400, glitch_max_ms=1200),
        Camera(id="cam-vault", section="SECTION A", location="A-09 VAULT",
               status=CameraStatus.LOST_SIGNAL, pan_enabled=True,
               hud_text="ZOOM: 2.0x"),
        Camera(id="cam-dock", section="SECTION C", location="C-01 DOCK",
               status=CameraStatus.OFFLINE),
        Camera(id="cam-reactor", section="SECTION B", location="B-02 REACTOR",
               status=CameraStatus.INTERFERENCE, glitch_min_ms=100, glitch_max_ms=200),
    ]


@pytest.fixture
def registry(cameras):
    return CameraRegistry(cameras)


@pytest.fixture(autouse=True)
def _empty_event_queue():
    EventManager.clear()
    yield
    EventManager.clear()
