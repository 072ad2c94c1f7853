"""Tests for Task model."""

import dataclasses

import pytest

from allyhub.models.task import Task
from allyhub.models.timer import TimerStatus


def test_task_creation():
    """Test creating a task."""
    task = Task(title="Test Task")

    assert task.title == "Test Task"
    assert task.is_completed is False


def test_task_is_immutable():
    """Test that tasks change only through copies."""
    task = Task(title="Test Task")

    with pytest.raises(dataclasses.FrozenInstanceError):
        task.is_completed = True


def test_with_completed_returns_copy():
    task = Task(title="Test Task")
    done = task.with_completed(True)

    assert done.is_completed
    assert done.title == "Test Task"
    assert not task.is_completed


def test_with_title_keeps_completion():
    task = Task(title="Old", is_completed=True)

    assert task.with_title("New") == Task(title="New", is_completed=True)


def test_task_repr():
    assert repr(Task(title="Break", is_completed=True)) == "<Task([x] 'Break')>"


def test_timer_status_labels():
    assert TimerStatus.RUNNING.label == "Running"
    assert TimerStatus.PAUSED.label == "Paused"
    assert TimerStatus.STOPPED.label == "Stopped"
