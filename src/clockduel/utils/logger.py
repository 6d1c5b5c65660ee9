"""
Logging setup and the match event log.
"""

import logging
import logging.handlers
import os
import time

from ..game.events import EventBus, GameEvents


def setup_logging(level="INFO", log_file=None, max_size_mb=10, backup_count=3):
    """Configure the root logger: compact console output plus an optional rotating file."""
    console_format = "%(asctime)s  %(levelname)-5s  %(message)s"
    file_format = "%(asctime)s [%(levelname)-7s] %(name)-28s | %(message)s"
    date_format = "%H:%M:%S"

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, str(level).upper(), logging.INFO))
    root_logger.handlers.clear()

    console = logging.StreamHandler()
    console.setLevel(root_logger.level)
    console.setFormatter(logging.Formatter(console_format, datefmt=date_format))
    root_logger.addHandler(console)

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=max_size_mb * 1024 * 1024,
            backupCount=backup_count,
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(file_format, datefmt=date_format))
        root_logger.addHandler(file_handler)

    return root_logger


class MatchLogger:
    """Records every round outcome published on the event bus."""

    def __init__(self, bus: EventBus):
        self.logger = logging.getLogger("match_events")
        self._history = []
        self._scores = {"p1": 0, "p2": 0}
        bus.subscribe(GameEvents.ROUND_WON, self._on_round_won)
        bus.subscribe(GameEvents.ROUND_TIED, self._on_round_tied)
        bus.subscribe(GameEvents.ROUND_SOLVED, self._on_round_solved)
        bus.subscribe(GameEvents.ROUND_SKIPPED, self._on_round_skipped)
        bus.subscribe(GameEvents.MATCH_OVER, self._on_match_over)

    def _record(self, round_number, outcome, target, detail=""):
        self._history.append({
            "timestamp": time.time(),
            "round": round_number,
            "outcome": outcome,
            "target": target.format(),
        })
        self.logger.info(
            "Round %-3d | %-8s | target %s | %s",
            round_number, outcome, target.format(), detail,
        )

    def _on_round_won(self, round_number, player, target, score):
        self._scores[player.value] = score
        self._record(round_number, f"{player.value.upper()}_WINS", target,
                     f"score {self._scores['p1']}-{self._scores['p2']}")

    def _on_round_tied(self, round_number, target):
        self._record(round_number, "TIE", target)

    def _on_round_solved(self, round_number, target, rounds_completed):
        self._record(round_number, "SUCCESS", target, f"{rounds_completed} solved")

    def _on_round_skipped(self, round_number, target):
        self._record(round_number, "SKIPPED", target)

    def _on_match_over(self, winner, scores):
        self.logger.info("Match over: %s wins %d-%d", winner.label, scores[0], scores[1])

    def get_history(self, last_n=None):
        if last_n:
            return self._history[-last_n:]
        return self._history.copy()

    @property
    def total_rounds(self):
        return len(self._history)
