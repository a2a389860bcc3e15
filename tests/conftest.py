from datetime import datetime, timedelta, timezone
import json
from pathlib import Path

import pytest

from todotree.todo_api.data_models import Task, TaskState
from todotree.todo_api.task_tree import TaskTree

T = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)
HOUR = timedelta(hours=1)


@pytest.fixture()
def now() -> datetime:
    return T


@pytest.fixture()
def school_tree() -> TaskTree:
    """School > AP CSP with one upcoming, one late and one long-finished task."""
    return TaskTree([
        Task(label="School", children=[
            Task(label="AP CSP", children=[
                Task(label="Computering", due_at=T + HOUR),
                Task(label="Computering alos", due_at=T - HOUR, late_at=T),
                Task(label="Computering alos2", state=TaskState.done, due_at=T - 25 * HOUR),
            ]),
        ]),
    ])


@pytest.fixture()
def school_document() -> dict:
    """The school tree as it appears in a task file."""
    return {
        "tasks": [
            {"label": "School", "children": [
                {"label": "AP CSP", "children": [
                    {"label": "Computering", "dueDate": (T + HOUR).isoformat()},
                    {"label": "Computering alos", "dueDate": (T - HOUR).isoformat(), "lateDate": T.isoformat()},
                    {"label": "Computering alos2", "state": "done", "dueDate": (T - 25 * HOUR).isoformat()},
                ]},
            ]},
        ]
    }


@pytest.fixture()
def write_task_file(tmp_path: Path):
    def _write(data, name: str = "tasks.json") -> Path:
        p = tmp_path / name
        p.write_text(json.dumps(data) if not isinstance(data, str) else data)
        return p
    return _write
