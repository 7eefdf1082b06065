"""Scene selector: transitions, teardown-before-start, scenario checks."""
from __future__ import annotations

import random

import numpy as np
import pytest

from camera_registry import CameraRegistry
from presentation import MediaPresentation, NoisePresentation
from selector import SceneSelector, UnknownCameraId

from conftest import StubMedia


@pytest.fixture
def selector(registry, scheduler):
    return SceneSelector(registry, scheduler, (800, 600),
                         rng=random.Random(5), noise_rng=np.random.default_rng(5),
                         media_factory=StubMedia)


def _timers(scheduler):
    return [h for h in scheduler.pending() if h.kind == "timer"]


def _frames(scheduler):
    return [h for h in scheduler.pending() if h.kind == "frame"]


@pytest.mark.unit
class TestSceneSelector:
    def test_starts_idle(self, selector):
        assert selector.state == "idle"
        assert selector.presentation is None
        assert selector.active_camera is None
        assert selector.hud_line == ""

    def test_every_camera_single_presentation(self, selector, registry, scheduler):
        for cam in registry:
            selector.select_camera(cam.id)
            assert selector.state == "viewing"
            assert selector.presentation is not None
            assert len(_timers(scheduler)) <= 1
            assert len(_frames(scheduler)) <= 1

    def test_online_pan_scenario(self, selector):
        selector.select_camera("cam-corridor")
        assert selector.pan.enabled
        assert selector.pan.duration == 7.0
        assert not selector.session.pan_paused
        assert selector.pan_label == "PAUSE PAN"
        assert selector.toggle_pan() == "RESUME PAN"
        assert selector.session.pan_paused

    def test_online_has_no_effects(self, selector, scheduler):
        selector.select_camera("cam-corridor")
        assert not selector.glitch.running
        assert scheduler.pending() == []

    def test_lost_signal_scenario(self, selector, scheduler):
        selector.select_camera("cam-vault")
        assert isinstance(selector.presentation, NoisePresentation)
        assert not isinstance(selector.presentation, (MediaPresentation, StubMedia))
        assert selector.hud_line == "ZOOM: 2.0x  |  CAMERA: CAM-VAULT"
        assert selector.presentation.overlay_text == "NO SIGNAL"
        assert selector.noise.running
        assert selector.glitch.running
        assert not selector.pan.enabled         # nothing to sweep on static

    def test_lost_signal_renders_frames(self, selector, scheduler, clock):
        selector.select_camera("cam-vault")
        scheduler.pump()
        frame = selector.presentation.frame()
        assert frame.shape == (600, 800, 3)

    def test_offline_scenario(self, selector, scheduler):
        selector.select_camera("cam-dock")
        assert not selector.glitch.running
        assert selector.noise is None
        assert selector.session.glitch_task is None
        assert selector.session.noise_task is None
        assert scheduler.pending() == []

    @pytest.mark.parametrize("cam_id", ["cam-lab", "cam-reactor", "cam-vault"])
    def test_glitching_statuses_start_scheduler(self, selector, cam_id):
        selector.select_camera(cam_id)
        assert selector.glitch.running

    def test_unknown_id_changes_nothing(self, selector):
        selector.select_camera("cam-lab")
        before = (selector.session.active_id, selector.presentation,
                  selector.session.glitch_task)
        with pytest.raises(UnknownCameraId) as info:
            selector.select_camera("nonexistent")
        assert info.value.cam_id == "nonexistent"
        assert (selector.session.active_id, selector.presentation,
                selector.session.glitch_task) == before
        assert selector.glitch.running
        assert not selector.presentation.closed

    def test_unknown_id_from_idle(self, selector):
        with pytest.raises(UnknownCameraId):
            selector.select_camera("nonexistent")
        assert selector.state == "idle"

    def test_switch_tears_down_before_start(self, selector, scheduler, clock):
        events = []
        real_cancel = scheduler.cancel
        real_later = scheduler.call_later
        real_frame = scheduler.request_frame

        def cancel(h):
            if h is not None and h.active:
                events.append(("cancel", h))
            real_cancel(h)

        def call_later(ms, cb):
            h = real_later(ms, cb)
            events.append(("start", h))
            return h

        def request_frame(cb):
            h = real_frame(cb)
            events.append(("start", h))
            return h

        scheduler.cancel = cancel
        scheduler.call_later = call_later
        scheduler.request_frame = request_frame

        selector.select_camera("cam-vault")
        a_glitch = selector.session.glitch_task
        a_noise = selector.session.noise_task
        del events[:]

        selector.select_camera("cam-reactor")
        kinds = [kind for kind, _ in events]
        assert ("cancel", a_noise) in events
        assert ("cancel", a_glitch) in events
        first_start = kinds.index("start")
        assert events.index(("cancel", a_noise)) < first_start
        assert events.index(("cancel", a_glitch)) < first_start

    def test_no_stale_callbacks_after_switch(self, selector, scheduler, clock):
        selector.select_camera("cam-vault")
        scheduler.pump()
        noise = selector.noise
        old_glitch_pulses = selector.glitch.pulses
        selector.select_camera("cam-corridor")
        frames_before = noise.frames
        for _ in range(50):
            clock.advance(100)
            scheduler.pump()
        assert noise.frames == 0 and frames_before == 0   # stop() discarded state
        assert noise.frame is None
        assert selector.glitch.pulses == old_glitch_pulses
        assert scheduler.pending() == []

    def test_previous_presentation_closed(self, selector):
        selector.select_camera("cam-corridor")
        first = selector.presentation
        selector.select_camera("cam-dock")
        assert first.closed

    def test_pan_reset_on_new_selection(self, selector):
        selector.select_camera("cam-corridor")
        selector.toggle_pan()
        selector.select_camera("cam-corridor")
        assert not selector.session.pan_paused
        assert selector.pan_label == "PAUSE PAN"

    def test_pan_disabled_without_flag(self, selector):
        selector.select_camera("cam-lab")
        assert not selector.pan.enabled
        assert selector.pan.phase() == 0.5

    def test_highlight_follows_selection(self, selector):
        selector.select_camera("cam-lab")
        assert selector.session.highlighted_id == "cam-lab"
        selector.select_camera("cam-dock")
        assert selector.session.highlighted_id == "cam-dock"

    def test_unload_tears_everything_down(self, selector, scheduler):
        selector.select_camera("cam-vault")
        pres = selector.presentation
        selector.unload()
        assert selector.state == "idle"
        assert pres.closed
        assert scheduler.pending() == []
        assert selector.session.highlighted_id is None

    def test_resize_rebuilds_noise_at_new_size(self, selector, scheduler):
        selector.select_camera("cam-vault")
        selector.resize((400, 300))
        assert selector.noise.size == (400, 300)
        assert len(_frames(scheduler)) == 1
        assert len(_timers(scheduler)) == 1

    def test_default_media_factory_is_lazy(self, scheduler):
        reg = CameraRegistry()
        sel = SceneSelector(reg, scheduler, (640, 480))
        assert sel.media_factory is MediaPresentation
