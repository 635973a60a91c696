"""Data models for the TaskMan task tracker.

Exposes the Task dataclass plus the two closed enumerations it uses.
Enum values are the exact literals written to the data file ("1"/"2"/"3",
""/"Daily"/"Weekly"/"Monthly"), so serialization is just `.value`.
A missing due date is None in memory; only the data file spells it as
NO_DUE_TEXT.
"""
from __future__ import annotations
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Optional, Union
import re

DATE_FORMAT = '%Y-%m-%d'
NO_DUE_TEXT = '2099-12-31'
NO_DUE_DATE = date(2099, 12, 31)
_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

DueValue = Union[str, date, datetime, None]


class Priority(str, Enum):
    HIGH = '1'
    MEDIUM = '2'
    LOW = '3'


class Repeat(str, Enum):
    NONE = ''
    DAILY = 'Daily'
    WEEKLY = 'Weekly'
    MONTHLY = 'Monthly'

    def advance(self, due: date) -> date:
        """Return the next occurrence after `due` for this interval."""
        if self is Repeat.DAILY:
            return due + timedelta(days=1)
        if self is Repeat.WEEKLY:
            return due + timedelta(days=7)
        if self is Repeat.MONTHLY:
            return add_month(due)
        return due


REPEAT_ALIASES = {
    'd': Repeat.DAILY,
    'daily': Repeat.DAILY,
    'w': Repeat.WEEKLY,
    'weekly': Repeat.WEEKLY,
    'm': Repeat.MONTHLY,
    'monthly': Repeat.MONTHLY,
}


@dataclass
class Task:
    """A single task.

    Fields:
        title: Short single-line title (length bounded by the shell).
        due: Calendar date the task is due, or None for no due date.
        priority: Priority.HIGH / MEDIUM / LOW ("1" / "2" / "3").
        repeat: Recurrence interval; Repeat.NONE for one-off tasks.
        label: Free-text category, matched exactly when filtering.
        done: Completion flag (stored as "Yes" / "No").
        notes: Free-text notes.
    """
    title: str
    due: Optional[date] = None
    priority: Priority = Priority.LOW
    repeat: Repeat = Repeat.NONE
    label: str = ''
    done: bool = False
    notes: str = ''

    @property
    def due_text(self) -> str:
        """Due date as YYYY-MM-DD, or '' when unset."""
        return self.due.strftime(DATE_FORMAT) if self.due else ''

    def __repr__(self) -> str:  # pragma: no cover - convenience only
        return f"Task(title={self.title}, due={self.due_text}, done={self.done})"


def add_month(d: date) -> date:
    """Add one calendar month; day-of-month overflow rolls into the next month.

    Jan 31 -> Mar 3 (Mar 2 in a leap year), Mar 31 -> May 1.
    """
    year, month = (d.year + 1, 1) if d.month == 12 else (d.year, d.month + 1)
    return date(year, month, 1) + timedelta(days=d.day - 1)


def parse_date(text: str) -> date:
    """Strict zero-padded YYYY-MM-DD parse; raises ValueError otherwise."""
    if not _DATE_RE.match(text):
        raise ValueError(f'not a YYYY-MM-DD date: {text!r}')
    return datetime.strptime(text, DATE_FORMAT).date()


def parse_due(value: DueValue) -> Optional[date]:
    """Normalize a due value to a date, or None for empty/unparsable input."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = value.strip()
    if not text or text == NO_DUE_TEXT:
        return None
    try:
        return parse_date(text)
    except ValueError:
        return None


def normalize_priority(value: Union[str, Priority, None]) -> Priority:
    """Keep HIGH ('1') and MEDIUM ('2'); anything else, including empty, is LOW."""
    if value in (Priority.HIGH, Priority.MEDIUM):
        return Priority(value)
    return Priority.LOW


def normalize_repeat(value: Union[str, Repeat, None]) -> Repeat:
    """Map d/daily, w/weekly, m/monthly (any case) to a Repeat; else NONE."""
    if isinstance(value, Repeat):
        return value
    return REPEAT_ALIASES.get((value or '').strip().lower(), Repeat.NONE)


def parse_done(value: Union[str, bool, None]) -> bool:
    """True only for y/yes (any case) or an actual True."""
    if isinstance(value, bool):
        return value
    return (value or '').strip().lower() in {'y', 'yes'}
