"""
Clock Angle Decoder
====================

Turns the direction a hand points (wrist -> middle fingertip) into a
reading on a 12-hour analog dial.

Angle convention: "straight up" in the image is 0 rad and the angle grows
clockwise, since image x grows to the right and image y grows downward.
"""

import math
from dataclasses import dataclass
from typing import NamedTuple, Sequence

from ..detection.landmarks import Landmark, LandmarkIndex

TWO_PI = 2 * math.pi
MINUTE_TICK = 5


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


@dataclass(frozen=True)
class ClockTime:
    """A time on the dial: hour 1..12, minute on a 5-minute tick."""
    hour: int
    minute: int

    def __post_init__(self):
        if not 1 <= self.hour <= 12:
            raise ValueError(f"hour must be in 1..12, got {self.hour}")
        if not 0 <= self.minute < 60 or self.minute % MINUTE_TICK:
            raise ValueError(f"minute must be a multiple of {MINUTE_TICK} in 0..55, got {self.minute}")

    def format(self) -> str:
        """Zero-padded HH:MM."""
        return f"{self.hour:02d}:{self.minute:02d}"

    def __str__(self) -> str:
        return self.format()


class RawReading(NamedTuple):
    """Decoder output before quantization: hour 1..12, minute 0..59."""
    hour: int
    minute: int


def pointing_angle(wrist: Landmark, tip: Landmark) -> float:
    """Clockwise angle from 12 o'clock, normalized into [0, 2*pi)."""
    dx = tip.x - wrist.x
    dy = tip.y - wrist.y
    angle = math.atan2(dx, -dy)
    return (angle + TWO_PI) % TWO_PI


def angle_to_reading(angle: float) -> RawReading:
    """
    Map a normalized angle onto the dial.

    The 12-step value is shifted by 11 before the modulo so that the top
    of the dial wraps to 12 instead of 0.
    """
    turn = angle / TWO_PI
    minute = _round_half_up(turn * 60) % 60
    hour = ((_round_half_up(turn * 12) + 11) % 12) + 1
    return RawReading(hour=hour, minute=minute)


def decode_hand(landmarks: Sequence[Landmark]) -> RawReading:
    """Decode one hand's landmarks (only wrist and middle tip are used)."""
    wrist = landmarks[LandmarkIndex.WRIST]
    tip = landmarks[LandmarkIndex.MIDDLE_TIP]
    return angle_to_reading(pointing_angle(wrist, tip))


def snap_minute(minute: float) -> int:
    """Snap to the nearest 5-minute tick, wrapping 60 back to 0."""
    snapped = _round_half_up(minute / MINUTE_TICK) * MINUTE_TICK
    return 0 if snapped == 60 else snapped


def clamp_hour(hour: int) -> int:
    return min(12, max(1, int(hour)))
