"""
Player State Tracker
=====================

Routes every detected hand to a player (by which half of the mirrored
image it sits in) and to a role (right hand sets the hour, left hand sets
the minute).
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Optional

from ..detection.landmarks import HandLandmarks, Handedness
from .clock_decoder import clamp_hour, decode_hand, snap_minute

logger = logging.getLogger(__name__)


class PlayerId(Enum):
    P1 = "p1"
    P2 = "p2"

    @property
    def label(self) -> str:
        return "Player 1" if self is PlayerId.P1 else "Player 2"


@dataclass
class PlayerState:
    """
    One player's dial and score.

    has_hour / has_minute only describe the current frame: they are cleared
    at the start of every detection result and set again by apply().
    """
    hour: int = 12
    minute: int = 0
    has_hour: bool = False
    has_minute: bool = False
    score: int = 0

    @property
    def is_complete(self) -> bool:
        return self.has_hour and self.has_minute

    def clear_flags(self) -> None:
        self.has_hour = False
        self.has_minute = False

    def format_time(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"


class PlayerTracker:
    """
    Applies decoded hands to the two players.

    Example:
        >>> tracker = PlayerTracker()
        >>> if not tracker.update(hands):
        ...     print("Show your hands")
        >>> tracker.players[PlayerId.P1].hour
    """

    def __init__(self, players: Optional[Dict[PlayerId, PlayerState]] = None,
                 split_x: float = 0.5):
        self.players = players or {PlayerId.P1: PlayerState(), PlayerId.P2: PlayerState()}
        self.split_x = split_x

    def begin_frame(self) -> None:
        """Reset every frame-local flag."""
        for player in self.players.values():
            player.clear_flags()

    def assign_player(self, hand: HandLandmarks) -> PlayerId:
        """Left half of the (mirrored) image is player 1."""
        return PlayerId.P1 if hand.center_x < self.split_x else PlayerId.P2

    def apply(self, player_id: PlayerId, hand: HandLandmarks) -> None:
        """Decode one hand and write its role's value into the player."""
        reading = decode_hand(hand.landmarks)
        player = self.players[player_id]

        if hand.handedness is Handedness.RIGHT:
            player.hour = clamp_hour(reading.hour)
            player.has_hour = True
        elif hand.handedness is Handedness.LEFT:
            player.minute = snap_minute(reading.minute)
            player.has_minute = True
        else:
            raise ValueError(f"Unsupported handedness: {hand.handedness!r}")

    def update(self, hands: Optional[Iterable[HandLandmarks]]) -> bool:
        """
        Process one detection result.

        Hands are applied in detection order, so when two hands share a
        player and role the later one wins.

        Returns:
            False when the result contained no hands.
        """
        self.begin_frame()
        hands = list(hands or [])
        if not hands:
            return False

        for hand in hands:
            player_id = self.assign_player(hand)
            self.apply(player_id, hand)
            logger.debug("%s %s hand -> %s", player_id.value,
                         hand.handedness.value, self.players[player_id].format_time())
        return True

    def reset_scores(self) -> None:
        for player in self.players.values():
            player.score = 0
