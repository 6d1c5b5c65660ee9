"""
Tests for Camera Module
========================
"""

import sys
from pathlib import Path
from unittest.mock import MagicMock, patch

import numpy as np
import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from clockduel.capture.camera import Camera, CameraConfig, Frame


class TestCameraConfig:

    def test_default_values(self):
        config = CameraConfig()
        assert config.device_id == 0
        assert (config.width, config.height) == (960, 720)
        assert config.flip_horizontal is True

    def test_from_dict_partial(self):
        config = CameraConfig.from_dict({"device_id": 2, "flip_horizontal": False})
        assert config.device_id == 2
        assert config.flip_horizontal is False
        assert config.width == 960


class TestFrame:

    def test_rgb_conversion(self):
        image = np.zeros((1, 1, 3), dtype=np.uint8)
        image[0, 0] = [255, 0, 0]  # Blue in BGR
        rgb = Frame(image=image, timestamp=0, frame_number=0).rgb
        assert list(rgb[0, 0]) == [0, 0, 255]

    def test_timestamp_ms(self):
        frame = Frame(image=np.zeros((1, 1, 3), dtype=np.uint8), timestamp=12.3456, frame_number=1)
        assert frame.timestamp_ms == 12345


class TestCamera:

    @pytest.fixture
    def mock_cap(self):
        with patch("clockduel.capture.camera.cv2.VideoCapture") as video_capture:
            cap = MagicMock()
            cap.isOpened.return_value = True
            image = np.zeros((4, 4, 3), dtype=np.uint8)
            image[0, 0] = [0, 0, 255]
            cap.read.return_value = (True, image)
            cap.get.return_value = 4
            video_capture.return_value = cap
            yield cap

    def test_not_running_before_start(self):
        camera = Camera(CameraConfig())
        assert not camera.is_running
        assert camera.read() is None

    def test_sync_read_is_mirrored(self, mock_cap):
        with Camera(CameraConfig(warmup_frames=0, threaded=False)) as camera:
            frame = camera.read()
            assert frame.frame_number == 1
            assert list(frame.image[0, 3]) == [0, 0, 255]
            assert list(frame.image[0, 0]) == [0, 0, 0]
        assert not camera.is_running
        mock_cap.release.assert_called_once()

    def test_start_fails_when_device_closed(self, mock_cap):
        mock_cap.isOpened.return_value = False
        camera = Camera(CameraConfig(threaded=False))
        assert camera.start() is False
        assert not camera.is_running

    def test_start_fails_without_frames(self, mock_cap):
        mock_cap.read.return_value = (False, None)
        camera = Camera(CameraConfig(threaded=False))
        assert camera.start() is False
        mock_cap.release.assert_called_once()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
