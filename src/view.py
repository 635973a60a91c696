"""Table rendering for the task list and the due-soon line.

Pure formatting: functions take tasks and return strings, never mutate.
"""
from __future__ import annotations
from datetime import date
from typing import Iterable, List, Optional

from models import NO_DUE_TEXT, Task
from theme import color, BOLD, HEADER_COLOR, DONE_COLOR, OVERDUE_COLOR, TODAY_COLOR

RULE_WIDTH = 70
DONE_TEXT = {True: 'Yes', False: 'No'}


def format_header() -> str:
    header = f"{'ID':<3}{'Title':<20}{'Due':<12}{'Prty':<6}{'Repeat':<9}{'Label':<12}{'Done':<4}"
    return color(header, HEADER_COLOR, BOLD) + '\n' + color('-' * RULE_WIDTH, HEADER_COLOR)


def row_color(task: Task, today: date) -> str:
    """Done beats overdue beats due today; everything else uncolored."""
    if task.done:
        return DONE_COLOR
    if task.due is None:
        return ''
    if task.due < today:
        return OVERDUE_COLOR
    if task.due == today:
        return TODAY_COLOR
    return ''


def format_task(task_id: int, task: Task, today: Optional[date] = None) -> str:
    today = today or date.today()
    row = (f"{task_id:<3}{task.title:<20}{task.due_text:<12}"
           f" {task.priority.value:<5}{task.repeat.value:<10}{task.label:<11}{DONE_TEXT[task.done]:<5}")
    return color(row, row_color(task, today))


def format_table(rows: Iterable[tuple[int, Task]], today: Optional[date] = None) -> str:
    lines: List[str] = [format_header()]
    lines.extend(format_task(i, t, today) for i, t in rows)
    return '\n'.join(lines)


def format_due_soon(tasks: Iterable[Task]) -> str:
    entries = [f"{t.title} ({t.due_text or NO_DUE_TEXT}), " for t in tasks]
    if not entries:
        return ''
    return "-- Tasks Due soon ----\n" + ''.join(entries)
