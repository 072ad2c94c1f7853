"""Pytest configuration and fixtures."""

import pytest

from allyhub.services.notification_service import NotificationService
from allyhub.services.task_list_service import TaskList
from allyhub.services.timer_service import CountdownTimer
from allyhub.utils.config import Config, NotificationConfig, reset_config
from allyhub.utils.execution_context import ManualExecutionContext


@pytest.fixture(autouse=True)
def clean_global_config():
    """Make sure no test leaks the lazily loaded global config."""
    reset_config()
    yield
    reset_config()


@pytest.fixture(scope="function")
def test_config():
    """Create a test configuration."""
    return Config(
        timer={"total_duration_seconds": 3600, "tick_interval_seconds": 1.0},
        notifications={"enabled": False},
    )


@pytest.fixture
def context():
    """Deterministic execution context with a virtual clock."""
    return ManualExecutionContext()


@pytest.fixture
def timer(context):
    """A fresh 60-minute countdown timer."""
    timer = CountdownTimer(context)
    yield timer
    timer.close()


@pytest.fixture
def task_list(context):
    """Task list seeded with the four default tasks."""
    return TaskList(context)


@pytest.fixture
def recorder():
    """Callable that records every value delivered to it."""

    class Recorder:
        def __init__(self):
            self.values = []

        def __call__(self, value):
            self.values.append(value)

    return Recorder()


@pytest.fixture
def silent_notifications():
    """Notification service with notifications disabled."""
    return NotificationService(NotificationConfig(enabled=False))
