"""Gesture-to-clock decoding and per-player state."""
from .clock_decoder import ClockTime, RawReading, decode_hand, snap_minute, clamp_hour
from .player_tracker import PlayerId, PlayerState, PlayerTracker

__all__ = [
    "ClockTime",
    "RawReading",
    "decode_hand",
    "snap_minute",
    "clamp_hour",
    "PlayerId",
    "PlayerState",
    "PlayerTracker",
]
