# tests/conftest.py

from __future__ import annotations

from pathlib import Path

import pytest

from storage import Storage
from store import TaskStore


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep the developer's terminal and data file out of the tests."""
    for name in ("FORCE_COLOR", "NO_COLOR", "COLORTERM", "TASKBOARD_DONE",
                 "TASKBOARD_PENDING", "TASKBOARD_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("TASKBOARD_FILE", str(tmp_path / "default.json"))
    monkeypatch.setenv("TASKBOARD_ALT_SCREEN", "0")
    monkeypatch.chdir(tmp_path)


@pytest.fixture()
def store() -> TaskStore:
    """Two boards: 'actual' with 3 done / 1 pending, 'work' with one pending task."""
    s = TaskStore()
    s.add_task("buy milk")
    s.add_task("write report")
    s.add_task("call mom")
    s.add_task("fix bike")
    s.add_board("work", active=True)
    s.add_task("review pull request", "work")
    for tid in (1, 2, 3):
        s.mark_done(tid)
    return s


@pytest.fixture()
def storage(tmp_path: Path) -> Storage:
    return Storage(tmp_path / "tasks.json")
