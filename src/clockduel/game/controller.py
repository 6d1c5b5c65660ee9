"""
Round / Match Controller
=========================

Owns the target time, both players and the round state machine:

    ACTIVE --(judge resolves)--> RESOLVING --(deferred next_round)--> ACTIVE
                    \\
                     +--(winner reaches win_points)--> MATCH_OVER

RESOLVING exists because detection runs on every frame: a solved pose is
seen on many consecutive frames before the deferred next round fires, and
only the first of them may count.
"""

import logging
import random
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterable, List, Optional

from ..detection.landmarks import HandLandmarks
from ..recognition.clock_decoder import ClockTime
from ..recognition.player_tracker import PlayerId, PlayerState, PlayerTracker
from .events import EventBus, GameEvents
from .judge import DEFAULT_MINUTE_TOLERANCE, JudgePolicy, RoundJudge, RoundOutcome
from .scheduler import RoundScheduler, ScheduledTask
from .task_pool import DEFAULT_POOL_SIZE, TaskPool, random_clock_time

logger = logging.getLogger(__name__)

STATUS_SHOW_HANDS = "Show your hands to the camera."
STATUS_TIE = "Tie this round. New target..."
STATUS_SKIPPED = "Target skipped. New target..."


class RoundState(Enum):
    ACTIVE = auto()
    RESOLVING = auto()
    MATCH_OVER = auto()


@dataclass
class GameConfig:
    """Game rules and timing."""
    policy: JudgePolicy = JudgePolicy.FIRST_TO_SOLVE
    win_points: int = 10
    task_pool_size: int = DEFAULT_POOL_SIZE
    duel_delay_s: float = 0.9
    coop_delay_s: float = 1.2
    minute_tolerance: int = DEFAULT_MINUTE_TOLERANCE
    player_split_x: float = 0.5
    target_source: str = ""  # "pool", "random", or "" for the policy default

    @classmethod
    def from_dict(cls, config: dict) -> "GameConfig":
        """Create config from dictionary (YAML parsed)."""
        return cls(
            policy=JudgePolicy.from_string(config.get("policy", "duel")),
            win_points=config.get("win_points", 10),
            task_pool_size=config.get("task_pool_size", DEFAULT_POOL_SIZE),
            duel_delay_s=config.get("duel_delay_s", 0.9),
            coop_delay_s=config.get("coop_delay_s", 1.2),
            minute_tolerance=config.get("minute_tolerance", DEFAULT_MINUTE_TOLERANCE),
            player_split_x=config.get("player_split_x", 0.5),
            target_source=config.get("target_source", ""),
        )

    @property
    def next_round_delay_s(self) -> float:
        if self.policy is JudgePolicy.COOPERATIVE:
            return self.coop_delay_s
        return self.duel_delay_s

    @property
    def uses_pool(self) -> bool:
        if self.target_source:
            if self.target_source not in ("pool", "random"):
                raise ValueError(f"Unknown target_source: {self.target_source!r}")
            return self.target_source == "pool"
        return self.policy is JudgePolicy.FIRST_TO_SOLVE


class MatchController:
    """
    Drives rounds from per-frame detection results.

    Example:
        >>> controller = MatchController(GameConfig(), scheduler=scheduler)
        >>> controller.start()
        >>> while running:
        ...     scheduler.run_due()
        ...     outcome = controller.on_results(detector.detect(frame.rgb))
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        scheduler: Optional[RoundScheduler] = None,
        rng: Optional[random.Random] = None,
        event_bus: Optional[EventBus] = None,
    ):
        self.config = config or GameConfig()
        if self.config.win_points <= 0:
            raise ValueError(f"win_points must be positive, got {self.config.win_points}")

        self.scheduler = scheduler or RoundScheduler()
        self.bus = event_bus or EventBus()
        self._rng = rng or random.Random()

        self.tracker = PlayerTracker(split_x=self.config.player_split_x)
        self.judge = RoundJudge(self.config.policy, self.config.minute_tolerance)
        self.pool = TaskPool(self.config.task_pool_size, self._rng) if self.config.uses_pool else None

        self.state = RoundState.ACTIVE
        self.target = ClockTime(12, 0)
        self.round_number = 0
        self.rounds_completed = 0
        self.winner: Optional[PlayerId] = None
        self.status = ""
        self._scheduled: List[ScheduledTask] = []

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def policy(self) -> JudgePolicy:
        return self.config.policy

    @property
    def players(self):
        return self.tracker.players

    @property
    def p1(self) -> PlayerState:
        return self.tracker.players[PlayerId.P1]

    @property
    def p2(self) -> PlayerState:
        return self.tracker.players[PlayerId.P2]

    @property
    def game_over(self) -> bool:
        return self.state is RoundState.MATCH_OVER

    @property
    def pending_round(self) -> Optional[ScheduledTask]:
        """The most recently scheduled next round, while one is pending."""
        for task in reversed(self._scheduled):
            if task.is_pending:
                return task
        return None

    # ------------------------------------------------------------------
    # Round lifecycle
    # ------------------------------------------------------------------

    def start(self) -> ClockTime:
        """Draw the first target."""
        logger.info("Match started (%s, first to %d)",
                    self.policy.name, self.config.win_points)
        return self.next_round()

    def draw_target(self) -> ClockTime:
        if self.pool is not None:
            return self.pool.draw()
        return random_clock_time(self._rng)

    def next_round(self) -> ClockTime:
        """Replace the target and reopen the round."""
        if self.game_over:
            return self.target

        self.target = self.draw_target()
        self.state = RoundState.ACTIVE
        self.round_number += 1
        logger.debug("Round %d target %s", self.round_number, self.target)
        self.bus.emit(GameEvents.ROUND_STARTED, round_number=self.round_number, target=self.target)
        return self.target

    def skip_round(self) -> bool:
        """Manual skip: new target now, no scoring, no cooldown."""
        if self.game_over:
            return False

        skipped = self.target
        self.status = STATUS_SKIPPED
        logger.info("Round %d skipped (target %s)", self.round_number, skipped)
        self.bus.emit(GameEvents.ROUND_SKIPPED, round_number=self.round_number, target=skipped)
        self.next_round()
        return True

    def reset_match(self) -> ClockTime:
        """Start a fresh match: zero scores and drop every pending round."""
        for task in self._scheduled:
            task.cancel()
        self._scheduled.clear()
        self.tracker.reset_scores()
        self.tracker.begin_frame()
        self.rounds_completed = 0
        self.round_number = 0
        self.winner = None
        self.status = ""
        self.state = RoundState.ACTIVE
        return self.start()

    def _schedule_next_round(self) -> None:
        # A skip during RESOLVING leaves the earlier transition queued
        self._scheduled = [task for task in self._scheduled if task.is_pending]
        self._scheduled.append(self.scheduler.schedule(
            self.config.next_round_delay_s, self.next_round, name="next_round"
        ))

    # ------------------------------------------------------------------
    # Per-frame processing
    # ------------------------------------------------------------------

    def on_results(self, hands: Optional[Iterable[HandLandmarks]]) -> RoundOutcome:
        """
        Handle one detection result.

        Args:
            hands: Detected hands in detection order; None or empty when
                no hands were found.

        Returns:
            The outcome this frame resolved, or UNRESOLVED.
        """
        if self.game_over:
            return RoundOutcome.UNRESOLVED

        if not self.tracker.update(hands):
            self.status = STATUS_SHOW_HANDS
            self.bus.emit(GameEvents.HANDS_MISSING)
            return RoundOutcome.UNRESOLVED

        if self.state is RoundState.ACTIVE:
            self.status = self.progress_status()

        return self.resolve_round()

    def resolve_round(self) -> RoundOutcome:
        """Judge the current frame and apply the outcome."""
        if self.state is not RoundState.ACTIVE:
            return RoundOutcome.UNRESOLVED

        outcome = self.judge.evaluate(self.p1, self.p2, self.target)
        if not outcome.is_resolved:
            return outcome

        self.state = RoundState.RESOLVING

        if outcome is RoundOutcome.TIE:
            self.status = STATUS_TIE
            logger.info("Round %d tied on %s", self.round_number, self.target)
            self.bus.emit(GameEvents.ROUND_TIED, round_number=self.round_number, target=self.target)
            self._schedule_next_round()
        elif outcome is RoundOutcome.SUCCESS:
            self.rounds_completed += 1
            self.status = (f"Both clocks match! Round {self.rounds_completed} complete. "
                           f"Next target...")
            logger.info("Round %d solved together on %s", self.round_number, self.target)
            self.bus.emit(GameEvents.ROUND_SOLVED, round_number=self.round_number,
                          target=self.target, rounds_completed=self.rounds_completed)
            self._schedule_next_round()
        else:
            self._award_point(PlayerId.P1 if outcome is RoundOutcome.P1_WINS else PlayerId.P2)

        return outcome

    def _award_point(self, winner_id: PlayerId) -> None:
        winner = self.players[winner_id]
        winner.score += 1
        self.bus.emit(GameEvents.ROUND_WON, round_number=self.round_number, player=winner_id,
                      target=self.target, score=winner.score)

        if winner.score >= self.config.win_points:
            self.state = RoundState.MATCH_OVER
            self.winner = winner_id
            self.status = f"{winner_id.label} wins the match with {self.config.win_points} points!"
            logger.info("%s wins the match %d-%d", winner_id.label, self.p1.score, self.p2.score)
            self.bus.emit(GameEvents.MATCH_OVER, winner=winner_id,
                          scores=(self.p1.score, self.p2.score))
            return

        self.status = f"{winner_id.label} was first and takes the point! Next target..."
        logger.info("Round %d won by %s (%d-%d)", self.round_number, winner_id.label,
                    self.p1.score, self.p2.score)
        self._schedule_next_round()

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    def progress_status(self) -> str:
        """Which hands each player currently shows."""
        parts = []
        for player_id in (PlayerId.P1, PlayerId.P2):
            player = self.players[player_id]
            hour = "hour ok" if player.has_hour else "hour --"
            minute = "minute ok" if player.has_minute else "minute --"
            parts.append(f"{player_id.label}: {hour}, {minute}")
        return " | ".join(parts)

    def snapshot(self) -> dict:
        """Everything the display sink needs for one frame."""
        return {
            "policy": self.policy.value,
            "state": self.state.name,
            "round_number": self.round_number,
            "rounds_completed": self.rounds_completed,
            "target": self.target.format(),
            "players": {
                player_id.value: {
                    "time": player.format_time(),
                    "hour": player.hour,
                    "minute": player.minute,
                    "has_hour": player.has_hour,
                    "has_minute": player.has_minute,
                    "score": player.score,
                }
                for player_id, player in self.players.items()
            },
            "status": self.status,
            "winner": self.winner.value if self.winner else None,
        }
