"""
Hand Landmark Types
====================

Plain containers for MediaPipe hand landmarks, kept free of the
MediaPipe runtime so the game logic can be exercised without a camera.
"""

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import List, NamedTuple, Tuple


class LandmarkIndex(IntEnum):
    """Hand landmark indices following MediaPipe convention."""
    WRIST = 0
    THUMB_CMC = 1
    THUMB_MCP = 2
    THUMB_IP = 3
    THUMB_TIP = 4
    INDEX_MCP = 5
    INDEX_PIP = 6
    INDEX_DIP = 7
    INDEX_TIP = 8
    MIDDLE_MCP = 9
    MIDDLE_PIP = 10
    MIDDLE_DIP = 11
    MIDDLE_TIP = 12
    RING_MCP = 13
    RING_PIP = 14
    RING_DIP = 15
    RING_TIP = 16
    PINKY_MCP = 17
    PINKY_PIP = 18
    PINKY_DIP = 19
    PINKY_TIP = 20


NUM_LANDMARKS = len(LandmarkIndex)


class Handedness(Enum):
    """Which hand MediaPipe reports, from the subject's own perspective."""
    LEFT = "Left"
    RIGHT = "Right"

    @classmethod
    def from_label(cls, label: str) -> "Handedness":
        """Convert a MediaPipe category name ("Left"/"Right")."""
        try:
            return cls(label)
        except ValueError:
            raise ValueError(f"Unknown handedness label: {label!r}") from None


class Landmark(NamedTuple):
    """A single landmark point with normalized coordinates."""
    x: float  # 0.0 to 1.0, normalized by image width
    y: float  # 0.0 to 1.0, normalized by image height
    z: float = 0.0  # Depth relative to wrist

    def to_pixel(self, width: int, height: int) -> Tuple[int, int]:
        """Convert normalized coordinates to pixel coordinates."""
        return (int(self.x * width), int(self.y * height))


@dataclass
class HandLandmarks:
    """One detected hand: 21 landmarks plus its handedness label."""
    landmarks: List[Landmark]
    handedness: Handedness
    confidence: float = 1.0
    image_width: int = 960
    image_height: int = 720

    def get(self, index: LandmarkIndex) -> Landmark:
        """Get landmark by index."""
        return self.landmarks[index]

    def get_pixel(self, index: LandmarkIndex) -> Tuple[int, int]:
        """Get landmark as pixel coordinates."""
        return self.get(index).to_pixel(self.image_width, self.image_height)

    @property
    def center_x(self) -> float:
        """Mean x-coordinate over all landmarks."""
        return sum(lm.x for lm in self.landmarks) / len(self.landmarks)

    @property
    def wrist_pixel(self) -> Tuple[int, int]:
        return self.get_pixel(LandmarkIndex.WRIST)
