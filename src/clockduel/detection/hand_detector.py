"""
Hand Detection Module - MediaPipe Tasks API
=============================================

Wraps the MediaPipe HandLandmarker so each camera frame yields a list of
HandLandmarks (empty when no hands are visible).
"""

import logging
import urllib.request
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

import numpy as np
import mediapipe as mp
from mediapipe.tasks import python
from mediapipe.tasks.python import vision

from .landmarks import HandLandmarks, Handedness, Landmark

logger = logging.getLogger(__name__)

HAND_LANDMARKER_MODEL_URL = "https://storage.googleapis.com/mediapipe-models/hand_landmarker/hand_landmarker/float16/1/hand_landmarker.task"
DEFAULT_MODEL_PATH = Path(__file__).parent.parent.parent.parent / "models" / "hand_landmarker.task"


@dataclass
class HandDetectorConfig:
    """Configuration for hand detector."""
    model_path: str = ""
    max_num_hands: int = 4  # two players, two hands each
    min_detection_confidence: float = 0.6
    min_tracking_confidence: float = 0.55
    min_presence_confidence: float = 0.5
    running_mode: str = "VIDEO"  # IMAGE or VIDEO

    @classmethod
    def from_dict(cls, d: dict) -> "HandDetectorConfig":
        """Create config from dictionary."""
        return cls(
            model_path=d.get("model_path", ""),
            max_num_hands=d.get("max_num_hands", 4),
            min_detection_confidence=d.get("min_detection_confidence", 0.6),
            min_tracking_confidence=d.get("min_tracking_confidence", 0.55),
            min_presence_confidence=d.get("min_presence_confidence", 0.5),
            running_mode=d.get("running_mode", "VIDEO"),
        )


def download_model(url: str, save_path: Path) -> bool:
    """Download the hand landmarker model if not present."""
    if save_path.exists():
        logger.info("Model already exists at %s", save_path)
        return True

    try:
        save_path.parent.mkdir(parents=True, exist_ok=True)
        logger.info("Downloading hand landmarker model to %s...", save_path)
        urllib.request.urlretrieve(url, save_path)
        logger.info("Model download complete")
        return True
    except OSError as e:
        logger.error("Failed to download model: %s", e)
        return False


class HandDetector:
    """
    Multi-hand detector built on MediaPipe HandLandmarker.

    Example:
        >>> with HandDetector(HandDetectorConfig()) as detector:
        ...     hands = detector.detect(frame.rgb)
    """

    def __init__(self, config: Optional[HandDetectorConfig] = None):
        self.config = config or HandDetectorConfig()
        self._landmarker: Optional[vision.HandLandmarker] = None
        self._frame_timestamp = 0
        self.skipped_labels = 0

    def start(self) -> bool:
        """Initialize the hand landmarker. Returns False on failure."""
        model_path = self.config.model_path or str(DEFAULT_MODEL_PATH)

        if not Path(model_path).exists():
            if not download_model(HAND_LANDMARKER_MODEL_URL, Path(model_path)):
                logger.error("Could not download hand landmarker model")
                return False

        if self.config.running_mode == "IMAGE":
            running_mode = vision.RunningMode.IMAGE
        else:
            running_mode = vision.RunningMode.VIDEO

        options = vision.HandLandmarkerOptions(
            base_options=python.BaseOptions(model_asset_path=model_path),
            running_mode=running_mode,
            num_hands=self.config.max_num_hands,
            min_hand_detection_confidence=self.config.min_detection_confidence,
            min_hand_presence_confidence=self.config.min_presence_confidence,
            min_tracking_confidence=self.config.min_tracking_confidence,
        )

        try:
            self._landmarker = vision.HandLandmarker.create_from_options(options)
        except (RuntimeError, ValueError) as e:
            logger.error("Failed to initialize HandLandmarker: %s", e)
            return False

        logger.info("HandLandmarker initialized with model: %s", model_path)
        logger.info("Running mode: %s, Max hands: %d",
                    self.config.running_mode, self.config.max_num_hands)
        return True

    def stop(self) -> None:
        """Release resources."""
        if self._landmarker:
            self._landmarker.close()
            self._landmarker = None
        logger.info("HandLandmarker stopped")

    def detect(self, image: np.ndarray, timestamp_ms: Optional[int] = None) -> List[HandLandmarks]:
        """
        Detect hands in an RGB image.

        Returns:
            Hands in detection order; an empty list means no hands.
        """
        if self._landmarker is None:
            logger.warning("HandLandmarker not initialized. Call start() first.")
            return []

        height, width = image.shape[:2]
        mp_image = mp.Image(image_format=mp.ImageFormat.SRGB, data=image)

        if self.config.running_mode == "IMAGE":
            result = self._landmarker.detect(mp_image)
        else:
            if timestamp_ms is None:
                self._frame_timestamp += 33
                timestamp_ms = self._frame_timestamp
            result = self._landmarker.detect_for_video(mp_image, timestamp_ms)

        if not result.hand_landmarks or not result.handedness:
            return []

        hands = []
        for hand_landmarks, categories in zip(result.hand_landmarks, result.handedness):
            category = categories[0]
            try:
                handedness = Handedness.from_label(category.category_name)
            except ValueError:
                self.skipped_labels += 1
                logger.debug("Skipping hand with label %r", category.category_name)
                continue

            hands.append(HandLandmarks(
                landmarks=[Landmark(x=lm.x, y=lm.y, z=lm.z) for lm in hand_landmarks],
                handedness=handedness,
                confidence=category.score,
                image_width=width,
                image_height=height,
            ))

        return hands

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.stop()
        return False
