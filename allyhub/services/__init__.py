"""Business logic services."""

from allyhub.services.notification_service import (
    Notification,
    NotificationService,
    NotificationType,
)
from allyhub.services.task_list_service import TaskList
from allyhub.services.timer_service import CountdownTimer, format_seconds

__all__ = [
    "CountdownTimer",
    "Notification",
    "NotificationService",
    "NotificationType",
    "TaskList",
    "format_seconds",
]
