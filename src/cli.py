"""Interactive menu loop for the task tracker.

Every cycle: advance finished recurring tasks, redraw the table (filtered
by the active label), show what is due soon, then prompt for one command.
IDs shown in the table are positions and change after sort/remove.
"""
from __future__ import annotations
import logging
import os
from datetime import date
from typing import Callable, Dict, Optional

from storage import Storage, StorageError
from tasklist import EDITABLE_FIELDS, InvalidTaskId, TaskList
from view import format_due_soon, format_table

logger = logging.getLogger(__name__)

TITLE_LIMIT = 20
EDIT_TITLE_LIMIT = 30
DUE_LIMIT = 12
LABEL_LIMIT = 12
NOTES_LIMIT = 100
MENU = "\nOptions: (a)dd, (e)dit, (d)one, (s)ort, (f)ilter, (r)emove, (q)uit? "

COMMAND_ALIASES = {
    'a': 'add', 'add': 'add',
    'e': 'edit', 'edit': 'edit',
    'd': 'done', 'done': 'done',
    's': 'sort', 'sort': 'sort',
    'f': 'filter', 'filter': 'filter',
    'r': 'remove', 'remove': 'remove',
    'q': 'quit', 'quit': 'quit',
}

SORT_ALIASES = {
    'n': 'sort_by_name', 'name': 'sort_by_name',
    'p': 'sort_by_priority', 'priority': 'sort_by_priority',
    'd': 'sort_by_due_date', 'due': 'sort_by_due_date',
}


def _truthy_env(value: Optional[str], default: bool = True) -> bool:
    if value is None:
        return default
    return value.strip().lower() not in {"0", "false", "no", "off", ""}


def _clear_screen() -> None:
    print("\033[H\033[2J", end="", flush=True)


# -------------------- input helpers --------------------
def input_str(prompt: str, length: int) -> str:
    """Read a stripped line, truncated to `length` characters."""
    return input(prompt).strip()[:length]


def yes_no_input(prompt: str) -> bool:
    return input_str(prompt + " (y/n): ", 5).lower() in {'y', 'yes'}


def input_int(prompt: str, lo: int, hi: int) -> Optional[int]:
    """Read an integer in [lo, hi]; None (with a message) when invalid."""
    raw = input_str(prompt, 4)
    try:
        value = int(raw)
    except ValueError:
        value = None
    if value is None or not lo <= value <= hi:
        print(f"Number out of range ({lo} to {hi}).")
        return None
    return value


class CLI:
    def __init__(self, tasks: TaskList, data_file: str, read_only: bool = False):
        self.tasks: TaskList = tasks
        self.data_file: str = data_file
        # set when the data file exists but could not be loaded
        self.read_only: bool = read_only
        self.label: str = ''
        self.message: Optional[str] = None
        self.clear: bool = _truthy_env(os.getenv("TASKMAN_CLEAR_SCREEN"), True)
        self._commands: Dict[str, Callable[[], Optional[str]]] = {
            'add': self._add,
            'edit': self._edit,
            'done': self._done,
            'sort': self._sort,
            'filter': self._filter,
            'remove': self._remove,
        }

    def run(self) -> bool:
        """Main loop. Saves on quit, Ctrl-C or EOF; returns the save result."""
        self.tasks.sort_by_due_date()
        print("TaskMan Task Manager:")
        try:
            while True:
                self.tasks.advance_recurring()
                self.show()
                choice = input_str(MENU, 5).lower()
                command = COMMAND_ALIASES.get(choice)
                if command == 'quit':
                    break
                if command is None:
                    continue
                self.message = self._commands[command]()
        except (KeyboardInterrupt, EOFError):
            print("\nInterrupted.")
        return self.save()

    def show(self, today: Optional[date] = None) -> None:
        today = today or date.today()
        if self.clear:
            _clear_screen()
        if len(self.tasks) == 0:
            print("No tasks found. Create one now!")
        else:
            print()
            print(format_table(self.tasks.list_tasks(self.label), today))
        due = format_due_soon(self.tasks.due_soon(today=today))
        if due:
            print()
            print(due)
        if self.message:
            print(self.message)
            self.message = None

    def save(self) -> bool:
        if self.read_only:
            logger.warning('Not saving over unloaded file %s', self.data_file)
            print(f"Not saved: '{self.data_file}' could not be loaded, so it was left untouched.")
            return False
        try:
            Storage.save_tasks(self.tasks, self.data_file)
        except StorageError as e:
            logger.error('Save failed: %s', e)
            print(f"Error writing to file! {e}")
            return False
        print("Tasks saved to:", self.data_file)
        return True

    # -------------------- commands --------------------
    def _add(self) -> Optional[str]:
        print("\n----- Add new task -----")
        title = input_str("Task title: ", TITLE_LIMIT)
        if not title:
            return "Task title cannot be empty!"
        due = input_str("Due date (YYYY-MM-DD): ", DUE_LIMIT)
        priority = input_str("Priority (1, 2, 3): ", 3)
        repeat = input_str("Repeat (d)aily, (w)eekly, (m)onthly: ", 10)
        label = input_str("Label/category: ", LABEL_LIMIT)
        done = yes_no_input("Is the task done? ")
        notes = input_str("Additional notes: ", NOTES_LIMIT)
        self.tasks.add_task(title, due, priority, repeat, label, done, notes)
        return None

    def _edit(self) -> Optional[str]:
        if len(self.tasks) == 0:
            return "No tasks to edit!"
        task_id = input_int("Enter task ID to edit: ", 0, len(self.tasks) - 1)
        if task_id is None:
            return "Invalid task ID!"
        task = self.tasks.get(task_id)
        print("\n----- Edit task -----")
        print("1 Title:", task.title)
        print("2 Due date:", task.due_text)
        print("3 Priority:", task.priority.value)
        print("4 Repeat:", task.repeat.value)
        print("5 Label:", task.label)
        print("6 Done:", 'Yes' if task.done else 'No')
        print("7 Notes:", task.notes)
        choice = input_int("\nNumber of field to edit (Enter cancels): ", 0, len(EDITABLE_FIELDS))
        if not choice:
            return None
        field = EDITABLE_FIELDS[choice - 1]
        if field == 'title':
            value = input_str("New title: ", EDIT_TITLE_LIMIT)
        elif field == 'due':
            value = input_str("Due date (YYYY-MM-DD): ", DUE_LIMIT)
        elif field == 'priority':
            value = input_str("New priority (1, 2, 3): ", 3)
        elif field == 'repeat':
            value = input_str("New (d)aily, (w)eekly, (m)onthly: ", 10)
        elif field == 'label':
            value = input_str("New label: ", LABEL_LIMIT)
        elif field == 'done':
            value = 'Yes' if yes_no_input("Is the task done? ") else 'No'
        else:
            value = input_str("Additional notes: ", NOTES_LIMIT)
        self.tasks.edit_task(task_id, field, value)
        return None

    def _done(self) -> Optional[str]:
        if len(self.tasks) == 0:
            return "No tasks to mark as done!"
        task_id = input_int("Enter task ID to mark as done: ", 0, len(self.tasks) - 1)
        try:
            task = self.tasks.mark_done(task_id if task_id is not None else -1)
        except InvalidTaskId:
            return "Invalid task ID!"
        return f'Task "{task.title}" marked as done.'

    def _sort(self) -> Optional[str]:
        choice = input_str("Sort by (n)ame, (p)riority, (d)ue: ", 5).lower()
        method = SORT_ALIASES.get(choice)
        if method is None:
            return "Invalid sort option!"
        getattr(self.tasks, method)()
        return None

    def _filter(self) -> Optional[str]:
        self.label = input_str("Enter label to filter by (leave empty for no filter): ", LABEL_LIMIT)
        return None

    def _remove(self) -> Optional[str]:
        if len(self.tasks) == 0:
            return "No tasks to delete!"
        task_id = input_int("Enter task ID to delete: ", 0, len(self.tasks) - 1)
        try:
            self.tasks.remove_task(task_id if task_id is not None else -1)
        except InvalidTaskId:
            return "Invalid task ID!"
        return "Task deleted."
