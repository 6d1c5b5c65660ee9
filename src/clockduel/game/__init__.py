"""Round judging, target generation and match progression."""
from .controller import GameConfig, MatchController, RoundState
from .events import EventBus, GameEvents
from .judge import JudgePolicy, RoundJudge, RoundOutcome, cooperative_success, is_solved
from .scheduler import ManualClock, RoundScheduler, ScheduledTask
from .task_pool import TaskPool, build_task_pool, random_clock_time

__all__ = [
    "GameConfig",
    "MatchController",
    "RoundState",
    "EventBus",
    "GameEvents",
    "JudgePolicy",
    "RoundJudge",
    "RoundOutcome",
    "cooperative_success",
    "is_solved",
    "ManualClock",
    "RoundScheduler",
    "ScheduledTask",
    "TaskPool",
    "build_task_pool",
    "random_clock_time",
]
