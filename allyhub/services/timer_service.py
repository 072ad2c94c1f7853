"""Countdown timer state machine."""

import logging

from allyhub.models.timer import DEFAULT_TICK_INTERVAL, DEFAULT_TOTAL_DURATION, TimerStatus
from allyhub.utils.execution_context import ExecutionContext, ScheduledCall
from allyhub.utils.observable import Observable, Signal

logger = logging.getLogger(__name__)


def format_seconds(seconds: float) -> str:
    """Format seconds as zero-padded ``HH:MM:SS``; negative values show as zero."""
    total = int(max(0, seconds))
    hours = total // 3600
    minutes = (total % 3600) // 60
    secs = total % 60
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


class CountdownTimer:
    """Countdown from ``total_duration`` with start/pause/stop/reset/toggle.

    States are ``STOPPED`` (initial), ``RUNNING`` and ``PAUSED``. A timer whose
    remaining time is ``<= 0`` is completed regardless of its stored status and
    refuses to start. While running, a single tick is armed on the execution
    context; every other status has none.

    Observables:
        remaining_time: seconds left (may be assigned directly)
        status: the stored ``TimerStatus``
        completed: one-shot event, fired when a tick crosses from positive
            remaining time to ``<= 0``
    """

    def __init__(
        self,
        context: ExecutionContext,
        total_duration: float = DEFAULT_TOTAL_DURATION,
        tick_interval: float = DEFAULT_TICK_INTERVAL,
    ):
        self.context = context
        self.total_duration = total_duration
        self.tick_interval = tick_interval
        self.remaining_time_changes: Observable[float] = Observable(
            context, total_duration, name="remaining_time"
        )
        self.status_changes: Observable[TimerStatus] = Observable(
            context, TimerStatus.STOPPED, name="status"
        )
        self.completed = Signal(context, name="completed")
        self._tick_call: ScheduledCall | None = None
        self._closed = False

    # --- Observed state ---

    @property
    def remaining_time(self) -> float:
        return self.remaining_time_changes.value

    @remaining_time.setter
    def remaining_time(self, value: float) -> None:
        self.remaining_time_changes.set(value)

    @property
    def status(self) -> TimerStatus:
        return self.status_changes.value

    @property
    def is_running(self) -> bool:
        return self.status == TimerStatus.RUNNING

    @property
    def is_paused(self) -> bool:
        return self.status == TimerStatus.PAUSED

    @property
    def is_completed(self) -> bool:
        return self.remaining_time <= 0

    @property
    def is_ticking(self) -> bool:
        """Whether a tick is currently armed."""
        return self._tick_call is not None

    @property
    def progress(self) -> float:
        """Fraction of the duration used up, clamped to [0, 1]."""
        if self.total_duration <= 0:
            return 1.0
        fraction = (self.total_duration - self.remaining_time) / self.total_duration
        return max(0.0, min(1.0, fraction))

    @property
    def formatted_time(self) -> str:
        return format_seconds(self.remaining_time)

    @property
    def status_label(self) -> str:
        return self.status.label

    # --- Commands ---

    def start(self) -> None:
        """Start or resume counting down. No-op when completed or already running."""
        if self._closed or self.is_completed or self.is_running:
            return
        self.status_changes.set(TimerStatus.RUNNING)
        self._arm_tick()
        logger.debug(f"Timer started at {self.formatted_time}")

    def pause(self) -> None:
        """Pause a running timer, keeping the remaining time."""
        if not self.is_running:
            return
        self._disarm_tick()
        self.status_changes.set(TimerStatus.PAUSED)
        logger.debug(f"Timer paused at {self.formatted_time}")

    def stop(self) -> None:
        """Stop without resetting the remaining time."""
        self._disarm_tick()
        self.status_changes.set(TimerStatus.STOPPED)
        logger.debug(f"Timer stopped at {self.formatted_time}")

    def reset(self) -> None:
        """Stop and restore the full duration."""
        self._disarm_tick()
        self.remaining_time_changes.set(self.total_duration)
        self.status_changes.set(TimerStatus.STOPPED)
        logger.debug("Timer reset")

    def toggle(self) -> None:
        """Pause when running, otherwise start or resume."""
        if self.is_completed:
            return
        if self.is_running:
            self.pause()
        else:
            self.start()

    def close(self) -> None:
        """Dispose the timer: cancel the tick and refuse further starts."""
        if self._closed:
            return
        self._closed = True
        self._disarm_tick()
        self.status_changes.set(TimerStatus.STOPPED)

    # --- Ticking ---

    def tick(self) -> None:
        """Advance by one second. Ignored unless running."""
        if not self.is_running:
            return

        previous = self.remaining_time
        self.remaining_time_changes.set(previous - 1)

        if self.remaining_time <= 0:
            self._disarm_tick()
            self.status_changes.set(TimerStatus.STOPPED)
            if previous > 0:
                logger.info("Timer completed")
                self.completed.emit(None)

    def _arm_tick(self) -> None:
        self._disarm_tick()
        self._tick_call = self.context.call_later(self.tick_interval, self._on_tick)

    def _disarm_tick(self) -> None:
        if self._tick_call is not None:
            self._tick_call.cancel()
            self._tick_call = None

    def _on_tick(self) -> None:
        self._tick_call = None
        self.tick()
        if self.is_running and self._tick_call is None:
            self._tick_call = self.context.call_later(self.tick_interval, self._on_tick)
