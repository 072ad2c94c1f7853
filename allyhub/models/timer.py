"""Countdown timer status values."""

import enum

DEFAULT_TOTAL_DURATION = 60 * 60  # 60 minutes
DEFAULT_TICK_INTERVAL = 1.0


class TimerStatus(str, enum.Enum):
    """Stored status of the countdown timer.

    Completion is not a stored status; it is derived from the remaining time.
    """

    STOPPED = "stopped"
    RUNNING = "running"
    PAUSED = "paused"

    @property
    def label(self) -> str:
        return self.value.capitalize()
