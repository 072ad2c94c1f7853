"""Task list state machine: ordered tasks with a navigable cursor."""

import logging
from typing import Iterable

from allyhub.models.task import DEFAULT_SEED_TITLES, NO_TASKS_TITLE, Task
from allyhub.utils.execution_context import ExecutionContext
from allyhub.utils.observable import Observable

logger = logging.getLogger(__name__)


class TaskList:
    """Ordered tasks plus a current-task cursor.

    ``current_index`` is kept in ``[0, len(tasks))`` while the list is non-empty
    and is 0 (meaningless) when it is empty. Every command is total: invalid
    indices and commands on an empty list are ignored.
    """

    def __init__(self, context: ExecutionContext, seed_titles: Iterable[str] = DEFAULT_SEED_TITLES):
        self.context = context
        self.seed_titles = tuple(seed_titles)
        self.tasks_changes: Observable[tuple[Task, ...]] = Observable(
            context, self._seed_tasks(), name="tasks"
        )
        self.current_index_changes: Observable[int] = Observable(context, 0, name="current_index")

    def _seed_tasks(self) -> tuple[Task, ...]:
        return tuple(Task(title=title) for title in self.seed_titles)

    # --- Observed state ---

    @property
    def tasks(self) -> tuple[Task, ...]:
        return self.tasks_changes.value

    @property
    def current_index(self) -> int:
        return self.current_index_changes.value

    @property
    def current_task(self) -> Task | None:
        tasks = self.tasks
        if not tasks or not 0 <= self.current_index < len(tasks):
            return None
        return tasks[self.current_index]

    @property
    def current_task_title(self) -> str:
        task = self.current_task
        return task.title if task else NO_TASKS_TITLE

    @property
    def has_next_task(self) -> bool:
        return self.current_index < len(self.tasks) - 1

    @property
    def has_previous_task(self) -> bool:
        return bool(self.tasks) and self.current_index > 0

    @property
    def completed_tasks_count(self) -> int:
        return sum(1 for task in self.tasks if task.is_completed)

    @property
    def progress(self) -> float:
        if not self.tasks:
            return 0.0
        return self.completed_tasks_count / len(self.tasks)

    @property
    def all_task_titles(self) -> list[str]:
        return [task.title for task in self.tasks]

    @property
    def completed_task_titles(self) -> list[str]:
        return [task.title for task in self.tasks if task.is_completed]

    @property
    def incomplete_task_titles(self) -> list[str]:
        return [task.title for task in self.tasks if not task.is_completed]

    # --- Navigation ---

    def next_task(self) -> None:
        if self.has_next_task:
            self.current_index_changes.set(self.current_index + 1)

    def previous_task(self) -> None:
        if self.has_previous_task:
            self.current_index_changes.set(self.current_index - 1)

    def go_to_task(self, index: int) -> None:
        if 0 <= index < len(self.tasks):
            self.current_index_changes.set(index)

    # --- Mutation ---

    def add_task(self, title: str) -> None:
        """Append an incomplete task; the cursor does not move."""
        self.tasks_changes.set(self.tasks + (Task(title=title),))
        logger.debug(f"Added task '{title}'")

    def remove_task(self, index: int) -> None:
        """Remove the task at ``index`` and keep the cursor on a valid task.

        Removing a task before the cursor shifts the cursor back so it stays on
        the same task. Removing the current task leaves the cursor on the task
        that took its place, or on the new last task when the tail was removed.
        """
        tasks = self.tasks
        if not 0 <= index < len(tasks):
            return

        removed = tasks[index]
        remaining = tasks[:index] + tasks[index + 1:]

        current = self.current_index
        if index < current:
            current -= 1
        current = max(0, min(current, len(remaining) - 1))

        self.tasks_changes.set(remaining)
        self.current_index_changes.set(current)
        logger.debug(f"Removed task '{removed.title}' at {index}")

    def rename_task(self, index: int, title: str) -> None:
        """Change the title of the task at ``index``."""
        if 0 <= index < len(self.tasks):
            self._replace(index, self.tasks[index].with_title(title))

    def mark_current_task_completed(self) -> None:
        """Complete the current task and advance to the next one if any."""
        task = self.current_task
        if task is None:
            return
        self._replace(self.current_index, task.with_completed(True))
        logger.debug(f"Completed task '{task.title}'")
        if self.has_next_task:
            self.next_task()

    def mark_current_task_incomplete(self) -> None:
        task = self.current_task
        if task is None:
            return
        self._replace(self.current_index, task.with_completed(False))

    def toggle_current_task_completion(self) -> None:
        """Flip completion of the current task without moving the cursor."""
        task = self.current_task
        if task is None:
            return
        self._replace(self.current_index, task.with_completed(not task.is_completed))

    def reset_tasks(self) -> None:
        """Restore the seed tasks, all incomplete, with the cursor on the first."""
        self.tasks_changes.set(self._seed_tasks())
        self.current_index_changes.set(0)
        logger.debug("Tasks reset to seed")

    def _replace(self, index: int, task: Task) -> None:
        tasks = list(self.tasks)
        tasks[index] = task
        self.tasks_changes.set(tuple(tasks))
