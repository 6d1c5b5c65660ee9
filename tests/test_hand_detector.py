"""
Tests for Hand Detection
=========================
"""

import sys
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import numpy as np
import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from clockduel.detection.hand_detector import HandDetector, HandDetectorConfig
from clockduel.detection.landmarks import HandLandmarks, Handedness, Landmark, LandmarkIndex


def mp_hand(x_offset=0.0):
    return [SimpleNamespace(x=0.2 + x_offset + i * 0.01, y=0.5, z=0.0) for i in range(21)]


def mp_category(label, score=0.9):
    return [SimpleNamespace(category_name=label, score=score)]


@pytest.fixture
def detector():
    det = HandDetector(HandDetectorConfig())
    det._landmarker = MagicMock()
    with patch("clockduel.detection.hand_detector.mp"):
        yield det


IMAGE = np.zeros((720, 960, 3), dtype=np.uint8)


class TestHandDetectorConfig:

    def test_defaults_fit_two_players(self):
        config = HandDetectorConfig()
        assert config.max_num_hands == 4
        assert config.min_detection_confidence == 0.6
        assert config.min_tracking_confidence == 0.55

    def test_from_dict(self):
        config = HandDetectorConfig.from_dict({"max_num_hands": 2, "running_mode": "IMAGE"})
        assert config.max_num_hands == 2
        assert config.running_mode == "IMAGE"


class TestDetect:

    def test_not_started_returns_empty(self):
        assert HandDetector().detect(IMAGE) == []

    def test_converts_hands_in_order(self, detector):
        detector._landmarker.detect_for_video.return_value = SimpleNamespace(
            hand_landmarks=[mp_hand(), mp_hand(0.5)],
            handedness=[mp_category("Right"), mp_category("Left", 0.8)],
        )

        hands = detector.detect(IMAGE, timestamp_ms=100)

        assert len(hands) == 2
        assert hands[0].handedness is Handedness.RIGHT
        assert hands[1].handedness is Handedness.LEFT
        assert hands[1].confidence == 0.8
        assert hands[0].image_width == 960
        assert hands[0].get(LandmarkIndex.WRIST).x == pytest.approx(0.2)
        assert hands[1].center_x > 0.5

    def test_no_hands(self, detector):
        detector._landmarker.detect_for_video.return_value = SimpleNamespace(
            hand_landmarks=[], handedness=[])
        assert detector.detect(IMAGE) == []

    def test_unknown_label_is_skipped(self, detector):
        detector._landmarker.detect_for_video.return_value = SimpleNamespace(
            hand_landmarks=[mp_hand(), mp_hand()],
            handedness=[mp_category("Unknown"), mp_category("Left")],
        )
        hands = detector.detect(IMAGE)
        assert [h.handedness for h in hands] == [Handedness.LEFT]
        assert detector.skipped_labels == 1

    def test_video_timestamps_increase(self, detector):
        detector._landmarker.detect_for_video.return_value = SimpleNamespace(
            hand_landmarks=[], handedness=[])
        detector.detect(IMAGE)
        detector.detect(IMAGE)
        stamps = [c.args[1] for c in detector._landmarker.detect_for_video.call_args_list]
        assert stamps[0] < stamps[1]


class TestHandLandmarks:

    @pytest.fixture
    def hand(self):
        return HandLandmarks(
            landmarks=[Landmark(x=0.1 * (i % 10), y=0.5) for i in range(21)],
            handedness=Handedness.RIGHT,
            image_width=100,
            image_height=100,
        )

    def test_center_x(self, hand):
        assert hand.center_x == pytest.approx(sum(0.1 * (i % 10) for i in range(21)) / 21)

    def test_get_pixel(self, hand):
        assert hand.get_pixel(LandmarkIndex.THUMB_CMC) == (10, 50)

    def test_landmark_to_pixel(self):
        assert Landmark(x=0.5, y=0.5).to_pixel(1280, 720) == (640, 360)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
