"""Persistence helpers (load/save) for the task list.

One task per line, seven quoted fields:

    "title","YYYY-MM-DD","priority","repeat","label","Yes|No","notes"

There is no escaping. A title or note containing "," or a quote will not
survive a save/load cycle. A task with no due date is written with the
NO_DUE_TEXT placeholder date and read back as None.
"""
from __future__ import annotations
import logging
from pathlib import Path
from typing import Iterable, List, Union

from models import NO_DUE_TEXT, DATE_FORMAT, Priority, Repeat, Task, parse_date
from tasklist import TaskList

logger = logging.getLogger(__name__)

FIELD_SEP = '","'
FIELD_COUNT = 7
LINE_PADDING = ' \t\r'
DONE_TEXT = {True: 'Yes', False: 'No'}
DONE_VALUES = {'Yes': True, 'No': False}

PathLike = Union[str, Path]


class StorageError(Exception):
    """Base class for data file failures."""


class TaskFileNotFound(StorageError):
    pass


class TaskFileReadError(StorageError):
    pass


class TaskFileWriteError(StorageError):
    pass


class TaskFileParseError(StorageError):
    def __init__(self, line_no: int, reason: str):
        super().__init__(f'line {line_no}: {reason}')
        self.line_no = line_no
        self.reason = reason


def format_line(task: Task) -> str:
    due = task.due.strftime(DATE_FORMAT) if task.due else NO_DUE_TEXT
    fields = (task.title, due, task.priority.value, task.repeat.value,
              task.label, DONE_TEXT[task.done], task.notes)
    return '"' + FIELD_SEP.join(fields) + '"'


def parse_line(text: str, line_no: int = 1) -> Task:
    """Parse one stripped data line; raises TaskFileParseError when malformed."""
    if len(text) < 2 or not (text.startswith('"') and text.endswith('"')):
        raise TaskFileParseError(line_no, 'fields must be wrapped in double quotes')
    fields = text[1:-1].split(FIELD_SEP)
    if len(fields) != FIELD_COUNT:
        raise TaskFileParseError(line_no, f'expected {FIELD_COUNT} fields, found {len(fields)}')
    title, due_raw, priority, repeat, label, done, notes = fields
    try:
        due = None if due_raw == NO_DUE_TEXT else parse_date(due_raw)
    except ValueError:
        raise TaskFileParseError(line_no, f'bad due date {due_raw!r}') from None
    if priority not in {p.value for p in Priority}:
        raise TaskFileParseError(line_no, f'bad priority {priority!r}')
    if repeat not in {r.value for r in Repeat}:
        raise TaskFileParseError(line_no, f'bad repeat {repeat!r}')
    if done not in DONE_VALUES:
        raise TaskFileParseError(line_no, f'bad done flag {done!r}')
    return Task(
        title=title,
        due=due,
        priority=Priority(priority),
        repeat=Repeat(repeat),
        label=label,
        done=DONE_VALUES[done],
        notes=notes,
    )


class Storage:
    @staticmethod
    def load_tasks(path: PathLike) -> TaskList:
        """Read the data file into a new TaskList.

        Blank lines are skipped. Any malformed line fails the whole load
        with TaskFileParseError; the caller decides whether to continue
        with an empty list.
        """
        path = Path(path)
        try:
            with open(path, 'r', encoding='utf-8', newline='') as f:
                lines = f.read().split('\n')
        except FileNotFoundError:
            raise TaskFileNotFound(f'Data file not found: {path}') from None
        except (OSError, UnicodeDecodeError) as e:
            raise TaskFileReadError(f'Error reading {path}: {e}') from e
        tasks: List[Task] = []
        for line_no, raw in enumerate(lines, start=1):
            # records end at '\n' only; other line breaks may sit inside fields
            line = raw.strip(LINE_PADDING)
            if not line:
                continue
            tasks.append(parse_line(line, line_no))
        logger.info('Loaded %d task(s) from %s', len(tasks), path)
        return TaskList(tasks)

    @staticmethod
    def save_tasks(tasks: Union[TaskList, Iterable[Task]], path: PathLike) -> None:
        """Overwrite the data file with one line per task, in list order.

        Lines written before an I/O failure are left on disk.
        """
        path = Path(path)
        count = 0
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, 'w', encoding='utf-8', newline='\n') as f:
                for task in tasks:
                    f.write(format_line(task) + '\n')
                    count += 1
        except OSError as e:
            raise TaskFileWriteError(f'Error writing {path}: {e}') from e
        logger.info('Saved %d task(s) to %s', count, path)
