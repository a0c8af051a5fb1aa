"""Task store: owns the ordered task collection and the active filter.

Tasks are addressed by their opaque id. Row numbers shown on screen are a
presentation detail resolved by the CLI against the current projection.
Every mutation is all-or-nothing: lookups happen before anything changes.
"""
import logging
from typing import Iterable, Iterator, List, Optional, Tuple

from models import Priority, Task, TodoFilter
from validation import normalize_title

logger = logging.getLogger(__name__)

SAMPLE_TASKS: Tuple[Tuple[str, bool], ...] = (
    ("Buy milk", False),
    ("Finish lab", True),
    ("Workout", False),
)


class NotFoundError(KeyError):
    """Raised when an operation references an id that is no longer present."""

    def __init__(self, task_id: str):
        super().__init__(task_id)
        self.task_id = task_id

    def __str__(self) -> str:
        return f'Task id {self.task_id} not found.'


class TaskStore:
    def __init__(self, tasks: Optional[Iterable[Task]] = None):
        self._tasks: List[Task] = []
        self.filter: TodoFilter = TodoFilter.ALL
        if tasks:
            self._load(tasks)

    @classmethod
    def with_samples(cls) -> "TaskStore":
        return cls(Task(title=title, is_done=done) for title, done in SAMPLE_TASKS)

    # -------------------- loading --------------------
    def _load(self, tasks: Iterable[Task]) -> None:
        # validate the whole batch before touching any task
        batch = list(tasks)
        titles = [normalize_title(t.title) for t in batch]
        if len({t.id for t in batch}) != len(batch):
            raise ValueError("Duplicate task id in seed tasks")
        for task, title in zip(batch, titles):
            task.title = title
        self._tasks.extend(batch)

    # -------------------- queries --------------------
    def all_tasks(self) -> List[Task]:
        return list(self._tasks)

    def get(self, task_id: str) -> Task:
        return self._tasks[self._index_of(task_id)]

    def _index_of(self, task_id: str) -> int:
        for idx, task in enumerate(self._tasks):
            if task.id == task_id:
                return idx
        raise NotFoundError(task_id)

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(self._tasks)

    # -------------------- task operations --------------------
    def add(self, title: str, priority: Priority = Priority.MEDIUM) -> str:
        task = Task(title=normalize_title(title), priority=Priority(priority))
        self._tasks.append(task)
        logger.debug("added task %s (%s)", task.id, task.priority.value)
        return task.id

    def add_sample(self) -> str:
        return self.add(f"Task {len(self._tasks) + 1}")

    def toggle_done(self, task_id: str) -> None:
        task = self.get(task_id)
        task.is_done = not task.is_done
        logger.debug("toggled task %s -> done=%s", task_id, task.is_done)

    def delete(self, task_id: str) -> None:
        del self._tasks[self._index_of(task_id)]
        logger.debug("deleted task %s", task_id)

    # -------------------- bulk operations --------------------
    def clear_completed(self) -> int:
        remaining = [t for t in self._tasks if not t.is_done]
        removed = len(self._tasks) - len(remaining)
        self._tasks = remaining
        logger.debug("cleared %d completed task(s)", removed)
        return removed

    def mark_all_done(self) -> None:
        for task in self._tasks:
            task.is_done = True
        logger.debug("marked %d task(s) done", len(self._tasks))

    # -------------------- filter --------------------
    def set_filter(self, todo_filter: TodoFilter) -> None:
        self.filter = TodoFilter(todo_filter)

    def __str__(self) -> str:
        done = sum(1 for t in self._tasks if t.is_done)
        return f'Tasks: {len(self._tasks)}, Active: {len(self._tasks) - done}, Done: {done}'
