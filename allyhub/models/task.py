"""Task model for the navigable task list."""

from dataclasses import dataclass, replace

DEFAULT_SEED_TITLES: tuple[str, ...] = (
    "Email triage",
    "Spec doc review",
    "Prototype create",
    "Break",
)

NO_TASKS_TITLE = "No tasks available"


@dataclass(frozen=True)
class Task:
    """A completable work item. Identity is its position in the owning list."""

    title: str
    is_completed: bool = False

    def with_completed(self, is_completed: bool) -> "Task":
        """Return a copy with the completion flag set."""
        return replace(self, is_completed=is_completed)

    def with_title(self, title: str) -> "Task":
        """Return a copy with a new title."""
        return replace(self, title=title)

    def __repr__(self) -> str:
        mark = "x" if self.is_completed else " "
        return f"<Task([{mark}] '{self.title[:30]}')>"
