"""
HUD Overlay
============

Draws the game state as text over the camera frame, plus the hand
skeletons colored by the role each hand plays.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

import cv2
import numpy as np

from ..detection.landmarks import HandLandmarks, Handedness, LandmarkIndex


@dataclass
class VisualizerConfig:
    """HUD settings. Colors are BGR."""
    show_landmarks: bool = True
    show_split_line: bool = True
    hour_hand_color: Tuple[int, int, int] = (22, 115, 249)    # orange
    minute_hand_color: Tuple[int, int, int] = (248, 189, 56)  # sky blue
    text_color: Tuple[int, int, int] = (240, 232, 226)
    accent_color: Tuple[int, int, int] = (238, 211, 34)
    font_scale: float = 0.7
    font_thickness: int = 2

    @classmethod
    def from_dict(cls, config: dict) -> "VisualizerConfig":
        colors = config.get("colors", {})
        return cls(
            show_landmarks=config.get("show_landmarks", True),
            show_split_line=config.get("show_split_line", True),
            hour_hand_color=tuple(colors.get("hour_hand", [22, 115, 249])),
            minute_hand_color=tuple(colors.get("minute_hand", [248, 189, 56])),
            text_color=tuple(colors.get("text", [240, 232, 226])),
            accent_color=tuple(colors.get("accent", [238, 211, 34])),
            font_scale=config.get("font_scale", 0.7),
            font_thickness=config.get("font_thickness", 2),
        )


class Visualizer:
    """Renders controller snapshots onto BGR frames."""

    HAND_CONNECTIONS = [
        (0, 1), (1, 2), (2, 3), (3, 4),
        (0, 5), (5, 6), (6, 7), (7, 8),
        (5, 9), (9, 10), (10, 11), (11, 12),
        (9, 13), (13, 14), (14, 15), (15, 16),
        (13, 17), (17, 18), (18, 19), (19, 20),
        (0, 17),
    ]

    def __init__(self, config: Optional[VisualizerConfig] = None):
        self.config = config or VisualizerConfig()
        self._font = cv2.FONT_HERSHEY_SIMPLEX

    def _text(self, image, text, org, scale=None, color=None, thickness=None):
        cv2.putText(image, text, org, self._font,
                    scale or self.config.font_scale,
                    color or self.config.text_color,
                    thickness or self.config.font_thickness)

    def draw_hands(self, image: np.ndarray, hands: List[HandLandmarks]) -> np.ndarray:
        if not self.config.show_landmarks:
            return image
        for hand in hands:
            if hand.handedness is Handedness.RIGHT:
                color = self.config.hour_hand_color
            else:
                color = self.config.minute_hand_color
            for start_idx, end_idx in self.HAND_CONNECTIONS:
                cv2.line(image, hand.get_pixel(LandmarkIndex(start_idx)),
                         hand.get_pixel(LandmarkIndex(end_idx)), color, 2)
            # wrist -> middle tip is the clock hand being read
            cv2.arrowedLine(image, hand.wrist_pixel, hand.get_pixel(LandmarkIndex.MIDDLE_TIP),
                            self.config.accent_color, 3, tipLength=0.2)
        return image

    def draw_game(self, image: np.ndarray, snapshot: dict, split_x: float = 0.5) -> np.ndarray:
        """Target, both readouts and scores, status line."""
        height, width = image.shape[:2]

        if self.config.show_split_line:
            x = int(width * split_x)
            cv2.line(image, (x, 0), (x, height), (90, 90, 90), 1)

        target = f"Target {snapshot['target']}"
        size = cv2.getTextSize(target, self._font, 1.2, 3)[0]
        self._text(image, target, ((width - size[0]) // 2, 45), 1.2, self.config.accent_color, 3)

        if snapshot["policy"] == "coop":
            self._text(image, f"Rounds: {snapshot['rounds_completed']}", (20, 45))

        for key, x in (("p1", 20), ("p2", width - 230)):
            player = snapshot["players"][key]
            label = "Player 1" if key == "p1" else "Player 2"
            self._text(image, label, (x, 90))
            self._text(image, player["time"], (x, 125), 1.0)
            if snapshot["policy"] == "duel":
                self._text(image, f"Points: {player['score']}", (x, 160), 0.6)

        if snapshot["status"]:
            self._text(image, snapshot["status"], (20, height - 20), 0.55, thickness=1)

        return image

    def draw_performance(self, image: np.ndarray, fps: float) -> np.ndarray:
        height, width = image.shape[:2]
        self._text(image, f"FPS: {fps:.1f}", (width - 120, height - 20), 0.5, thickness=1)
        return image
