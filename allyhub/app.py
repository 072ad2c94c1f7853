"""Composition root owning the timer, the task list and the completion alert."""

import logging
import threading

from allyhub.services.notification_service import NotificationService
from allyhub.services.task_list_service import TaskList
from allyhub.services.timer_service import CountdownTimer
from allyhub.utils.config import Config, get_config
from allyhub.utils.execution_context import ExecutionContext
from allyhub.utils.observable import SubscriptionBag

logger = logging.getLogger(__name__)


class AllyHub:
    """Owns both state machines for the lifetime of the process.

    Presentation code receives ``timer`` and ``tasks`` and calls their commands
    directly; nothing here holds a reference back to it.
    """

    def __init__(
        self,
        context: ExecutionContext,
        config: Config | None = None,
        notification_service: NotificationService | None = None,
    ):
        self.context = context
        self.config = config or get_config()
        self.timer = CountdownTimer(
            context,
            total_duration=self.config.timer.total_duration_seconds,
            tick_interval=self.config.timer.tick_interval_seconds,
        )
        self.tasks = TaskList(context, seed_titles=self.config.tasks.seed_titles)
        self.notification_service = notification_service or NotificationService(
            self.config.notifications
        )
        self.subscriptions = SubscriptionBag()
        self.subscriptions.add(self.timer.completed.subscribe(self._on_timer_completed))
        self._alert_threads: list[threading.Thread] = []
        self._closed = False

    @property
    def status_tooltip(self) -> str:
        """Status item tooltip, e.g. ``AllyHub - 00:59:59 (Running)``."""
        return f"AllyHub - {self.timer.formatted_time} ({self.timer.status_label})"

    @property
    def status_summary(self) -> str:
        """One-line summary of the current task and overall task progress."""
        done = self.tasks.completed_tasks_count
        total = len(self.tasks.tasks)
        return f"{self.tasks.current_task_title} ({done}/{total} done)"

    def _on_timer_completed(self, _payload: object) -> None:
        logger.info("Countdown finished, sending alert")

        # Sending may wait on osascript; keep it off the execution context
        thread = threading.Thread(
            target=self.notification_service.notify_timer_completed,
            name="allyhub-alert",
        )
        thread.daemon = True
        thread.start()
        self._alert_threads.append(thread)

    def wait_for_alerts(self, timeout: float | None = None) -> None:
        """Wait for alerts already handed to worker threads.

        Meant for shutdown paths outside the execution context, e.g. the CLI
        after its event loop has finished.

        Args:
            timeout: Seconds to wait per alert (None waits indefinitely)
        """
        for thread in self._alert_threads:
            thread.join(timeout)
        self._alert_threads = [thread for thread in self._alert_threads if thread.is_alive()]

    def close(self) -> None:
        """Release subscriptions and cancel the timer's tick."""
        if self._closed:
            return
        self._closed = True
        self.subscriptions.dispose()
        self.timer.close()
