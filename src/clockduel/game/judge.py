"""
Round Judge
============

Stateless evaluation of the two players against the target time.

Two policies share the same per-player test:
    - FIRST_TO_SOLVE: competitive, the first player to match wins the
      round; both matching in the same frame is a tie.
    - COOPERATIVE: the round succeeds only when both players match.
"""

from enum import Enum, auto

from ..recognition.clock_decoder import ClockTime
from ..recognition.player_tracker import PlayerState

DEFAULT_MINUTE_TOLERANCE = 2


class JudgePolicy(Enum):
    FIRST_TO_SOLVE = "duel"
    COOPERATIVE = "coop"

    @classmethod
    def from_string(cls, name: str) -> "JudgePolicy":
        """Accept either the mode name ("duel"/"coop") or the member name."""
        try:
            return cls(name.lower())
        except ValueError:
            pass
        try:
            return cls[name.upper()]
        except KeyError:
            raise ValueError(f"Unknown judge policy: {name!r}") from None


class RoundOutcome(Enum):
    UNRESOLVED = auto()
    P1_WINS = auto()
    P2_WINS = auto()
    TIE = auto()
    SUCCESS = auto()

    @property
    def is_resolved(self) -> bool:
        return self is not RoundOutcome.UNRESOLVED


def is_solved(player: PlayerState, target: ClockTime,
              tolerance: int = DEFAULT_MINUTE_TOLERANCE) -> bool:
    """Both hands seen this frame, hour equal mod 12, minute within tolerance."""
    if not player.has_hour or not player.has_minute:
        return False
    hour_match = (player.hour % 12) == (target.hour % 12)
    return hour_match and abs(player.minute - target.minute) <= tolerance


def cooperative_success(p1: PlayerState, p2: PlayerState, target: ClockTime,
                        tolerance: int = DEFAULT_MINUTE_TOLERANCE) -> bool:
    return is_solved(p1, target, tolerance) and is_solved(p2, target, tolerance)


class RoundJudge:
    """
    Evaluates one frame for a given policy.

    Example:
        >>> judge = RoundJudge(JudgePolicy.FIRST_TO_SOLVE)
        >>> judge.evaluate(p1, p2, ClockTime(3, 15))
        <RoundOutcome.P1_WINS: 2>
    """

    def __init__(self, policy: JudgePolicy = JudgePolicy.FIRST_TO_SOLVE,
                 tolerance: int = DEFAULT_MINUTE_TOLERANCE):
        self.policy = policy
        self.tolerance = tolerance

    def evaluate(self, p1: PlayerState, p2: PlayerState, target: ClockTime) -> RoundOutcome:
        if self.policy is JudgePolicy.COOPERATIVE:
            if cooperative_success(p1, p2, target, self.tolerance):
                return RoundOutcome.SUCCESS
            return RoundOutcome.UNRESOLVED

        p1_solved = is_solved(p1, target, self.tolerance)
        p2_solved = is_solved(p2, target, self.tolerance)

        if p1_solved and p2_solved:
            return RoundOutcome.TIE
        if p1_solved:
            return RoundOutcome.P1_WINS
        if p2_solved:
            return RoundOutcome.P2_WINS
        return RoundOutcome.UNRESOLVED
