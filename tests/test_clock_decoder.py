"""
Tests for the Clock Angle Decoder
==================================
"""

import math
import sys
from pathlib import Path

import numpy as np
import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from clockduel.detection.landmarks import Landmark
from clockduel.recognition.clock_decoder import (
    ClockTime,
    angle_to_reading,
    clamp_hour,
    decode_hand,
    pointing_angle,
    snap_minute,
)
from landmark_factory import make_hand


class TestPointingAngle:
    """Angle convention: up is zero, clockwise positive."""

    def test_straight_up_is_zero(self):
        assert pointing_angle(Landmark(0.5, 0.6), Landmark(0.5, 0.4)) == pytest.approx(0.0)

    def test_right_is_quarter_turn(self):
        assert pointing_angle(Landmark(0.5, 0.5), Landmark(0.7, 0.5)) == pytest.approx(math.pi / 2)

    def test_down_is_half_turn(self):
        assert pointing_angle(Landmark(0.5, 0.4), Landmark(0.5, 0.6)) == pytest.approx(math.pi)

    def test_left_is_normalized_positive(self):
        """atan2 gives -pi/2 for left; it must come back as 3pi/2."""
        angle = pointing_angle(Landmark(0.5, 0.5), Landmark(0.3, 0.5))
        assert angle == pytest.approx(3 * math.pi / 2)


class TestDecodeHand:
    """Decoding whole hands into raw readings."""

    @pytest.mark.parametrize("hour", range(1, 13))
    def test_every_hour_position(self, hour):
        reading = decode_hand(make_hand(hour * 30).landmarks)
        assert reading.hour == hour
        assert reading.minute == (hour * 5) % 60

    def test_top_wraps_to_twelve(self):
        """Raw 12-step value 0 must read as 12, not 0."""
        reading = decode_hand(make_hand(0).landmarks)
        assert reading.hour == 12
        assert reading.minute == 0

    def test_one_step_reads_one(self):
        assert decode_hand(make_hand(30).landmarks).hour == 1

    def test_just_left_of_top_still_twelve(self):
        """359 degrees rounds up to a full turn and wraps."""
        reading = decode_hand(make_hand(359).landmarks)
        assert reading.hour == 12
        assert reading.minute == 0

    def test_unquantized_minute(self):
        assert decode_hand(make_hand(28 * 6).landmarks).minute == 28

    def test_only_wrist_and_middle_tip_matter(self):
        hand = make_hand(90)
        scrambled = list(hand.landmarks)
        for i in range(1, 21):
            if i != 12:
                scrambled[i] = Landmark(0.9, 0.1)
        assert decode_hand(scrambled) == decode_hand(hand.landmarks)

    def test_bounds_over_full_circle(self):
        for angle in np.linspace(0, 2 * math.pi, 721, endpoint=False):
            reading = angle_to_reading(float(angle))
            assert 1 <= reading.hour <= 12
            assert 0 <= reading.minute < 60
            assert 0 <= snap_minute(reading.minute) <= 55
            assert snap_minute(reading.minute) % 5 == 0


class TestSnapMinute:
    """Quantization to 5-minute ticks."""

    @pytest.mark.parametrize("minute, expected", [
        (0, 0), (2, 0), (3, 5), (28, 30), (32, 30), (33, 35), (57, 55), (58, 0), (59, 0),
    ])
    def test_nearest_tick(self, minute, expected):
        assert snap_minute(minute) == expected

    def test_half_rounds_up(self):
        assert snap_minute(12.5) == 15
        assert snap_minute(57.5) == 0

    def test_idempotent(self):
        for minute in range(60):
            once = snap_minute(minute)
            assert snap_minute(once) == once


class TestClampHour:

    @pytest.mark.parametrize("raw, expected", [(0, 1), (1, 1), (7, 7), (12, 12), (13, 12)])
    def test_clamps_into_dial(self, raw, expected):
        assert clamp_hour(raw) == expected


class TestClockTime:
    """ClockTime invariants and formatting."""

    def test_format_zero_padded(self):
        assert ClockTime(3, 5).format() == "03:05"
        assert str(ClockTime(12, 0)) == "12:00"

    @pytest.mark.parametrize("hour, minute", [(0, 0), (13, 0), (3, 7), (3, 60), (3, -5)])
    def test_rejects_invalid(self, hour, minute):
        with pytest.raises(ValueError):
            ClockTime(hour, minute)

    def test_is_hashable_value(self):
        assert ClockTime(6, 30) == ClockTime(6, 30)
        assert len({ClockTime(6, 30), ClockTime(6, 30)}) == 1


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
