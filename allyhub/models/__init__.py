"""Data models."""

from allyhub.models.task import DEFAULT_SEED_TITLES, NO_TASKS_TITLE, Task
from allyhub.models.timer import DEFAULT_TICK_INTERVAL, DEFAULT_TOTAL_DURATION, TimerStatus

__all__ = [
    "DEFAULT_SEED_TITLES",
    "DEFAULT_TICK_INTERVAL",
    "DEFAULT_TOTAL_DURATION",
    "NO_TASKS_TITLE",
    "Task",
    "TimerStatus",
]
