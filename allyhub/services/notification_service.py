"""Notification service for macOS notifications and terminal alerts.

Supports native macOS notifications via osascript and fallback terminal alerts.
"""

import logging
import subprocess
import sys
from dataclasses import dataclass
from enum import Enum

from allyhub.utils.config import NotificationConfig

logger = logging.getLogger(__name__)

TIMER_COMPLETED_TITLE = "AllyHub Timer"
TIMER_COMPLETED_MESSAGE = "Timer completed! Time for the next task."


class NotificationType(str, Enum):
    """Types of notifications."""

    INFO = "info"
    TIMER_COMPLETED = "timer_completed"


@dataclass
class Notification:
    """A notification to be sent."""

    title: str
    message: str
    type: NotificationType = NotificationType.INFO
    sound: bool = True
    subtitle: str | None = None


class NotificationService:
    """Service for sending notifications."""

    def __init__(self, config: NotificationConfig):
        """Initialize the notification service.

        Args:
            config: Notification configuration
        """
        self.config = config
        self._is_macos = sys.platform == "darwin"

    def send(self, notification: Notification) -> bool:
        """Send a notification.

        Args:
            notification: The notification to send

        Returns:
            True if notification was sent successfully
        """
        if not self.config.enabled:
            logger.debug("Notifications disabled, skipping")
            return False

        play_sound = notification.sound and self.config.sound

        if self._is_macos:
            return self._send_macos_notification(notification, play_sound)
        else:
            return self._send_terminal_notification(notification, play_sound)

    def _send_macos_notification(self, notification: Notification, play_sound: bool) -> bool:
        """Send a macOS notification using osascript.

        Args:
            notification: The notification to send
            play_sound: Whether to play a sound

        Returns:
            True if successful
        """
        try:
            script_parts = [
                f'display notification "{self._escape_applescript(notification.message)}"',
                f'with title "{self._escape_applescript(notification.title)}"',
            ]

            if notification.subtitle:
                script_parts.append(
                    f'subtitle "{self._escape_applescript(notification.subtitle)}"'
                )

            if play_sound:
                script_parts.append('sound name "default"')

            result = subprocess.run(
                ["osascript", "-e", " ".join(script_parts)],
                capture_output=True,
                text=True,
                timeout=5,
            )

            if result.returncode != 0:
                logger.error(f"osascript failed: {result.stderr}")
                return False

            logger.debug(f"Sent macOS notification: {notification.title}")
            return True

        except subprocess.TimeoutExpired:
            logger.error("Notification timed out")
            return False
        except OSError as e:
            logger.error(f"Failed to send macOS notification: {e}")
            return False

    def _send_terminal_notification(self, notification: Notification, play_sound: bool) -> bool:
        """Print the notification to the terminal (fallback for non-macOS)."""
        colors = {
            NotificationType.INFO: "\033[94m",  # Blue
            NotificationType.TIMER_COMPLETED: "\033[92m",  # Green
        }
        reset = "\033[0m"
        color = colors.get(notification.type, reset)

        print(f"\n{color}╔{'═' * 50}╗{reset}")
        print(f"{color}║ 🔔 {notification.title}{reset}")
        if notification.subtitle:
            print(f"{color}║    {notification.subtitle}{reset}")
        print(f"{color}║{reset}")
        print(f"{color}║ {notification.message}{reset}")
        print(f"{color}╚{'═' * 50}╝{reset}\n")

        if play_sound:
            print("\a", end="", flush=True)

        return True

    def _escape_applescript(self, text: str) -> str:
        """Escape text for AppleScript."""
        return text.replace("\\", "\\\\").replace('"', '\\"')

    def notify_timer_completed(self, _payload: object = None) -> bool:
        """Send the one-time alert for a finished countdown.

        Shaped as a ``CountdownTimer.completed`` subscriber.

        Returns:
            True if notification sent
        """
        if not self.config.on_timer_completed:
            return False

        notification = Notification(
            title=TIMER_COMPLETED_TITLE,
            message=TIMER_COMPLETED_MESSAGE,
            type=NotificationType.TIMER_COMPLETED,
        )
        return self.send(notification)

    def notify_info(self, title: str, message: str) -> bool:
        """Send an informational notification."""
        notification = Notification(
            title=title,
            message=message,
            type=NotificationType.INFO,
            sound=False,
        )
        return self.send(notification)


def create_notification_service(config: NotificationConfig | None = None) -> NotificationService:
    """Create a notification service with config.

    Args:
        config: Optional notification config (uses default if not provided)

    Returns:
        NotificationService instance
    """
    if config is None:
        from allyhub.utils.config import get_config
        config = get_config().notifications
    return NotificationService(config)
