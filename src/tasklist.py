"""Task store: holds the ordered task list and all mutations on it.

IDs are positions. A task's ID is its current index in the list, so
removing a task shifts every later task down by one and sorting
renumbers everything. Callers must re-read IDs after either.
"""
from __future__ import annotations
from datetime import date, timedelta
import logging
from typing import Iterable, Iterator, List, Optional, Tuple, Union

from models import (
    NO_DUE_DATE, DueValue, Task, normalize_priority, normalize_repeat, parse_done, parse_due,
)

logger = logging.getLogger(__name__)

EDITABLE_FIELDS: Tuple[str, ...] = ('title', 'due', 'priority', 'repeat', 'label', 'done', 'notes')
DUE_SOON_DAYS = 3


class InvalidTaskId(IndexError):
    """Raised when an ID is outside 0 <= id < len(store)."""

    def __init__(self, task_id: int, size: int):
        super().__init__(f'Invalid task ID {task_id} (valid: 0 to {size - 1}).')
        self.task_id = task_id
        self.size = size


class TaskList:
    def __init__(self, tasks: Optional[Iterable[Task]] = None):
        self._tasks: List[Task] = list(tasks) if tasks else []

    # -------------------- queries --------------------
    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(self._tasks)

    @property
    def tasks(self) -> List[Task]:
        return list(self._tasks)

    def get(self, task_id: int) -> Task:
        self._check_id(task_id)
        return self._tasks[task_id]

    def list_tasks(self, label: str = '') -> List[Tuple[int, Task]]:
        """Return (id, task) pairs in store order.

        A non-empty label keeps only exact (case-sensitive) matches; the
        pairs keep their positional IDs rather than being renumbered.
        """
        return [(i, t) for i, t in enumerate(self._tasks) if not label or t.label == label]

    def due_soon(self, window_days: int = DUE_SOON_DAYS, today: Optional[date] = None) -> List[Task]:
        """Open tasks due within [today, today + window_days], in store order.

        Undated tasks are compared as NO_DUE_DATE, so they only show up
        when the window reaches that date.
        """
        start = today or date.today()
        end = start + timedelta(days=window_days)
        return [t for t in self._tasks if not t.done and start <= (t.due or NO_DUE_DATE) <= end]

    # -------------------- task operations --------------------
    def add_task(self, title: str, due: DueValue = None, priority: str = '', repeat: str = '',
                 label: str = '', done: Union[bool, str] = False, notes: str = '') -> Task:
        if not title or not title.strip():
            raise ValueError('Task title cannot be empty!')
        task = Task(
            title=title,
            due=parse_due(due),
            priority=normalize_priority(priority),
            repeat=normalize_repeat(repeat),
            label=label,
            done=parse_done(done),
            notes=notes,
        )
        self._tasks.append(task)
        logger.debug('Added task %d: %s', len(self._tasks) - 1, task.title)
        return task

    def edit_task(self, task_id: int, field: str, value) -> Task:
        """Set one field, normalized the same way add_task does.

        Blank title or due leaves the old value in place; blank label or
        notes clears the field.
        """
        task = self.get(task_id)
        if field not in EDITABLE_FIELDS:
            raise ValueError(f'Unknown field: {field}')
        blank = value is None or (isinstance(value, str) and not value.strip())
        if field == 'title':
            if not blank:
                task.title = value
        elif field == 'due':
            if not blank:
                task.due = parse_due(value)
        elif field == 'priority':
            task.priority = normalize_priority(value)
        elif field == 'repeat':
            task.repeat = normalize_repeat(value)
        elif field == 'done':
            task.done = parse_done(value)
        elif field == 'label':
            task.label = value or ''
        else:
            task.notes = value or ''
        return task

    def remove_task(self, task_id: int) -> Task:
        self._check_id(task_id)
        task = self._tasks.pop(task_id)
        logger.debug('Removed task %d: %s', task_id, task.title)
        return task

    def mark_done(self, task_id: int) -> Task:
        task = self.get(task_id)
        task.done = True
        return task

    # -------------------- sorting (stable) --------------------
    def sort_by_name(self) -> None:
        self._tasks.sort(key=lambda t: t.title)

    def sort_by_priority(self) -> None:
        self._tasks.sort(key=lambda t: t.priority.value)

    def sort_by_due_date(self) -> None:
        self._tasks.sort(key=lambda t: (t.due is None, t.due_text))

    # -------------------- recurrence --------------------
    def advance_recurring(self, today: Optional[date] = None) -> int:
        """Roll completed recurring tasks that are due forward one interval.

        Each qualifying task advances once and is reopened. Returns the
        number of tasks advanced.
        """
        today = today or date.today()
        advanced = 0
        for task in self._tasks:
            if task.done and task.repeat.value and task.due is not None and task.due <= today:
                task.due = task.repeat.advance(task.due)
                task.done = False
                advanced += 1
        if advanced:
            logger.info('Advanced %d recurring task(s) as of %s', advanced, today.isoformat())
        return advanced

    # -------------------- helpers --------------------
    def _check_id(self, task_id: int) -> None:
        if not 0 <= task_id < len(self._tasks):
            raise InvalidTaskId(task_id, len(self._tasks))

    def __str__(self) -> str:
        open_count = sum(1 for t in self._tasks if not t.done)
        return f'Tasks: {len(self._tasks)} ({open_count} open)'
