"""Media presentations: lazy loading, placeholders, local images."""
from __future__ import annotations

import av
import pygame
import pytest

import config
from camera_registry import Camera, CameraStatus
from presentation import MediaPresentation


@pytest.mark.unit
class TestMediaPresentation:
    def test_empty_url_placeholder(self):
        pres = MediaPresentation(Camera(id="c", status=CameraStatus.ONLINE))
        assert pres.frame() is None
        assert pres.placeholder == config.NO_FEED_TEXT

    def test_missing_file_placeholder(self, tmp_path):
        pres = MediaPresentation(Camera(id="c", media_url=str(tmp_path / "nope.png")))
        assert pres.frame() is None
        assert pres.placeholder == config.LOAD_ERROR_TEXT

    def test_lazy_until_first_frame(self, tmp_path):
        pres = MediaPresentation(Camera(id="c", media_url=str(tmp_path / "nope.png")))
        assert pres.placeholder is None

    def test_local_image(self, tmp_path):
        surf = pygame.Surface((40, 20))
        surf.fill((10, 20, 30))
        path = tmp_path / "feed.png"
        pygame.image.save(surf, str(path))

        pres = MediaPresentation(Camera(id="c", media_url=str(path)))
        frame = pres.frame()
        assert frame.shape == (20, 40, 3)
        assert tuple(frame[5, 5]) == (10, 20, 30)
        assert pres.pannable

    def test_close(self, tmp_path):
        pres = MediaPresentation(Camera(id="c"))
        pres.close()
        assert pres.closed
        assert pres.frame() is None

    def test_decode_error_falls_back_to_placeholder(self):
        class CorruptPlayer:
            closed = False

            def decode_frame(self):
                raise av.error.FFmpegError(-1, "corrupt packet")

            def close(self):
                self.closed = True

        pres = MediaPresentation(Camera(id="c", media_url="feed.mp4"))
        player = CorruptPlayer()
        pres._loaded = True
        pres.player = player
        assert pres.frame() is None
        assert pres.placeholder == config.LOAD_ERROR_TEXT
        assert pres.player is None
        assert player.closed
        assert pres.frame() is None
