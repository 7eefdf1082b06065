"""CamMatrixViewer selection and action dispatch on the dummy SDL driver."""
from __future__ import annotations

import pytest
from loguru import logger

import config
from app import CamMatrixViewer

from conftest import StubMedia


@pytest.fixture
def viewer(registry, monkeypatch):
    monkeypatch.setattr(config, "FULLSCREEN", False)
    v = CamMatrixViewer(registry)
    v.selector.media_factory = StubMedia
    v.select("cam-corridor")
    yield v
    v.selector.unload()


@pytest.fixture
def warned():
    seen = []
    sink = logger.add(lambda msg: seen.append(msg.record["message"]), level="WARNING")
    yield seen
    logger.remove(sink)


@pytest.mark.unit
class TestCamMatrixViewer:
    def test_first_camera_selected_on_start(self, registry, monkeypatch):
        monkeypatch.setattr(config, "FULLSCREEN", False)
        v = CamMatrixViewer(registry)
        assert v.selector.session.active_id == "cam-corridor"
        v.selector.unload()

    def test_error_skips_initial_selection(self, registry, monkeypatch):
        monkeypatch.setattr(config, "FULLSCREEN", False)
        v = CamMatrixViewer(registry, error="Network error")
        assert v.selector.state == "idle"

    def test_unknown_id_is_logged_and_ignored(self, viewer, warned):
        pres = viewer.selector.presentation
        assert viewer.select("nonexistent") is False
        assert viewer.selector.session.active_id == "cam-corridor"
        assert viewer.selector.presentation is pres
        assert not pres.closed
        assert any("nonexistent" in m for m in warned)

    def test_dispatch_unknown_select_keeps_running(self, viewer):
        assert viewer._dispatch({"type": "select_camera", "id": "nonexistent"}) is True
        assert viewer.selector.session.active_id == "cam-corridor"

    def test_dispatch_navigation(self, viewer):
        viewer._dispatch({"type": "select_next"})
        assert viewer.selector.session.active_id == "cam-vault"
        viewer._dispatch({"type": "select_prev"})
        assert viewer.selector.session.active_id == "cam-corridor"

    def test_dispatch_toggle_pan(self, viewer):
        viewer._dispatch({"type": "toggle_pan"})
        assert viewer.selector.pan_label == "RESUME PAN"

    def test_dispatch_quit(self, viewer):
        assert viewer._dispatch({"type": "quit"}) is False

    def test_view_right_of_list(self, viewer):
        assert viewer.view_rect.left == viewer.list_rect.width
        assert viewer.view_rect.right == viewer.screen.get_width()
