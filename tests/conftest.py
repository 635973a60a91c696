# tests/conftest.py

from __future__ import annotations

from datetime import date
from pathlib import Path

import pytest

from tasklist import TaskList


@pytest.fixture()
def tasks() -> TaskList:
    """
    Five tasks with mixed labels, dates and priorities.

    Positions 1 and 3 carry the "work" label.
    """
    tl = TaskList()
    tl.add_task("Pay rent", date(2024, 6, 3), "1", "m", "home", False, "before noon")
    tl.add_task("Write report", date(2024, 6, 1), "2", "", "work", False, "")
    tl.add_task("Buy milk", "", "3", "", "home", False, "")
    tl.add_task("Team sync", date(2024, 6, 5), "2", "w", "work", True, "zoom")
    tl.add_task("Call mum", date(2024, 5, 30), "9", "", "", False, "")
    return tl


@pytest.fixture()
def data_file(tmp_path: Path) -> Path:
    return tmp_path / "data" / "TaskMan.txt"


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep config, logs and screen clearing away from the real user environment."""
    monkeypatch.setenv("TASKMAN_CONFIG", str(tmp_path / "TaskManConfig.txt"))
    monkeypatch.setenv("TASKMAN_LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.setenv("TASKMAN_CLEAR_SCREEN", "0")
    monkeypatch.delenv("TASKMAN_DATA_FILE", raising=False)
