"""Read-only projection of the store for rendering.

All functions are pure over a task sequence. The filter only affects
`visible`; counters and progress always look at the full collection.
"""
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from models import Task, TodoFilter


def _matches(task: Task, todo_filter: TodoFilter) -> bool:
    if todo_filter is TodoFilter.ACTIVE:
        return not task.is_done
    if todo_filter is TodoFilter.COMPLETED:
        return task.is_done
    return True


def visible(tasks: Sequence[Task], todo_filter: TodoFilter) -> List[Task]:
    """Tasks passing the filter, original order preserved."""
    todo_filter = TodoFilter(todo_filter)
    return [t for t in tasks if _matches(t, todo_filter)]


def active_count(tasks: Sequence[Task]) -> int:
    return sum(1 for t in tasks if not t.is_done)


def completed_count(tasks: Sequence[Task]) -> int:
    return sum(1 for t in tasks if t.is_done)


def progress(tasks: Sequence[Task]) -> float:
    """Completed fraction in [0, 1]; an empty collection is 0."""
    if not tasks:
        return 0.0
    return completed_count(tasks) / len(tasks)


@dataclass(frozen=True)
class Projection:
    filter: TodoFilter
    visible: Tuple[Task, ...]
    total: int
    active: int
    completed: int
    progress: float

    @property
    def shown(self) -> int:
        return len(self.visible)


def project(store) -> Projection:
    """Snapshot a TaskStore (or anything with all_tasks() and .filter)."""
    tasks = store.all_tasks()
    return Projection(
        filter=store.filter,
        visible=tuple(visible(tasks, store.filter)),
        total=len(tasks),
        active=active_count(tasks),
        completed=completed_count(tasks),
        progress=progress(tasks),
    )
