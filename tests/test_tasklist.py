# tests/test_tasklist.py

from __future__ import annotations

from datetime import date

import pytest

from models import Priority, Repeat, Task
from tasklist import InvalidTaskId, TaskList


def titles(tl: TaskList) -> list[str]:
    return [t.title for t in tl]


def test_add_normalizes_fields() -> None:
    tl = TaskList()
    task = tl.add_task("Odd one", "not a date", "9", "Tues", "x", "y", "n")
    assert task.priority is Priority.LOW
    assert task.due is None
    assert task.repeat is Repeat.NONE
    assert task.done is True
    assert tl.get(0) is task


def test_add_appends_with_highest_id(tasks: TaskList) -> None:
    tasks.add_task("Newest")
    assert len(tasks) == 6
    assert tasks.get(5).title == "Newest"


def test_add_rejects_blank_title() -> None:
    with pytest.raises(ValueError):
        TaskList().add_task("   ")


def test_remove_shifts_later_ids(tasks: TaskList) -> None:
    before = tasks.tasks
    removed = tasks.remove_task(1)
    assert removed is before[1]
    assert len(tasks) == 4
    for j in range(2, 5):
        assert tasks.get(j - 1) is before[j]
    assert tasks.get(0) is before[0]


@pytest.mark.parametrize("bad_id", [-1, 5, 99])
def test_invalid_ids_raise(tasks: TaskList, bad_id: int) -> None:
    with pytest.raises(InvalidTaskId):
        tasks.remove_task(bad_id)
    with pytest.raises(InvalidTaskId):
        tasks.mark_done(bad_id)
    with pytest.raises(InvalidTaskId):
        tasks.edit_task(bad_id, "title", "x")
    assert len(tasks) == 5


def test_mark_done_is_idempotent(tasks: TaskList) -> None:
    tasks.mark_done(0)
    tasks.mark_done(0)
    assert tasks.get(0).done is True


def test_list_keeps_original_ids(tasks: TaskList) -> None:
    work = tasks.list_tasks("work")
    assert [i for i, _ in work] == [1, 3]
    assert [t.title for _, t in work] == ["Write report", "Team sync"]
    assert [i for i, _ in tasks.list_tasks()] == [0, 1, 2, 3, 4]


def test_list_filter_is_case_sensitive(tasks: TaskList) -> None:
    assert tasks.list_tasks("Work") == []


def test_edit_blank_title_and_due_are_noops(tasks: TaskList) -> None:
    tasks.edit_task(0, "title", "")
    tasks.edit_task(0, "due", "  ")
    assert tasks.get(0).title == "Pay rent"
    assert tasks.get(0).due == date(2024, 6, 3)


def test_edit_blank_notes_and_label_clear(tasks: TaskList) -> None:
    tasks.edit_task(0, "notes", "")
    tasks.edit_task(0, "label", "")
    assert tasks.get(0).notes == ""
    assert tasks.get(0).label == ""


def test_edit_normalizes_like_add(tasks: TaskList) -> None:
    tasks.edit_task(1, "priority", "")
    tasks.edit_task(1, "repeat", "D")
    tasks.edit_task(1, "due", "someday")
    tasks.edit_task(1, "done", "yes")
    task = tasks.get(1)
    assert task.priority is Priority.LOW
    assert task.repeat is Repeat.DAILY
    assert task.due is None
    assert task.done is True


def test_edit_unknown_field(tasks: TaskList) -> None:
    with pytest.raises(ValueError):
        tasks.edit_task(0, "colour", "red")


def test_sort_by_priority_is_stable(tasks: TaskList) -> None:
    tasks.sort_by_priority()
    # "2" ties: Write report before Team sync; "3" ties: Buy milk before Call mum
    assert titles(tasks) == ["Pay rent", "Write report", "Team sync", "Buy milk", "Call mum"]


def test_sort_by_due_date_puts_missing_last(tasks: TaskList) -> None:
    tasks.add_task("Also undated")
    tasks.sort_by_due_date()
    assert titles(tasks) == [
        "Call mum", "Write report", "Pay rent", "Team sync", "Buy milk", "Also undated",
    ]


def test_sort_by_name_is_stable_and_raw() -> None:
    tl = TaskList([Task("b", notes="1"), Task("B"), Task("a"), Task("b", notes="2")])
    tl.sort_by_name()
    assert [(t.title, t.notes) for t in tl] == [("B", ""), ("a", ""), ("b", "1"), ("b", "2")]


def test_due_soon_window_is_inclusive() -> None:
    tl = TaskList()
    tl.add_task("edge in", date(2024, 6, 4))
    tl.add_task("edge out", date(2024, 6, 5))
    tl.add_task("today", date(2024, 6, 1))
    tl.add_task("yesterday", date(2024, 5, 31))
    tl.add_task("finished", date(2024, 6, 2), done=True)
    tl.add_task("undated")
    soon = tl.due_soon(today=date(2024, 6, 1))
    assert [t.title for t in soon] == ["edge in", "today"]


def test_advance_recurring_weekly() -> None:
    tl = TaskList()
    tl.add_task("Bins", date(2024, 1, 1), repeat="Weekly", done=True)
    assert tl.advance_recurring(date(2024, 1, 2)) == 1
    task = tl.get(0)
    assert task.due == date(2024, 1, 8)
    assert task.done is False


def test_advance_recurring_skips_ineligible() -> None:
    tl = TaskList()
    tl.add_task("not done", date(2024, 1, 1), repeat="d")
    tl.add_task("future", date(2024, 2, 1), repeat="d", done=True)
    tl.add_task("one-off", date(2024, 1, 1), done=True)
    tl.add_task("undated", repeat="m", done=True)
    assert tl.advance_recurring(date(2024, 1, 10)) == 0
    assert [t.due for t in tl] == [date(2024, 1, 1), date(2024, 2, 1), date(2024, 1, 1), None]


def test_advance_recurring_monthly_on_due_day() -> None:
    tl = TaskList()
    tl.add_task("Invoice", date(2023, 1, 31), repeat="m", done=True)
    tl.advance_recurring(date(2023, 1, 31))
    assert tl.get(0).due == date(2023, 3, 3)


def test_due_soon_undated_compares_as_placeholder_date() -> None:
    tl = TaskList()
    tl.add_task("undated")
    tl.add_task("dated", date(2099, 12, 30))
    assert [t.title for t in tl.due_soon(today=date(2099, 12, 29))] == ["undated", "dated"]
    assert [t.title for t in tl.due_soon(today=date(2099, 12, 27))] == ["dated"]
