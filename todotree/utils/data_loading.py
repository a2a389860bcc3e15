"""Read and write the JSON task file.

The loader is the only place where structural problems are detected: every
tree it returns has passed ``validate_tree``. The core modules assume a valid
tree and never re-check it.
"""
import json
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from dateutil import parser as date_parser
from dateutil import tz
from pydantic import ValidationError

from ..todo_api.data_models import DEFAULT_DONE_VISIBLE, Task
from ..todo_api.errors import (
    InvalidDeadlineOrderError,
    NegativeVisibilityWindowError,
    SharedChildError,
    TaskFileError,
)
from ..todo_api.task_tree import TaskTree
from .export_schema import TaskListModel, TaskModel
from .logger import get_logger

log = get_logger(__name__)

PathLike = Union[str, Path]


def parse_timestamp(value: Optional[str], label: str = "") -> Optional[datetime]:
    """Parse an ISO 8601 string; naive values are taken as local time."""
    if not value:
        return None
    try:
        parsed = date_parser.isoparse(value)
    except (ValueError, OverflowError) as e:
        raise TaskFileError(f"Task '{label}': cannot parse timestamp {value!r} ({e})") from e
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=tz.tzlocal())
    return parsed


def _hours(window: timedelta) -> float:
    return window.total_seconds() / 3600


def visibility_window(hours: float, label: str = "") -> timedelta:
    """Convert a doneVisibleHours value, rejecting NaN and out-of-range numbers."""
    try:
        return timedelta(hours=hours)
    except (OverflowError, ValueError) as e:
        raise TaskFileError(f"Task '{label}': invalid doneVisibleHours {hours!r} ({e})") from e


def build_task(model: TaskModel, default_window: timedelta = DEFAULT_DONE_VISIBLE) -> Task:
    window = default_window if model.doneVisibleHours is None else visibility_window(model.doneVisibleHours, model.label)
    return Task(
        label=model.label,
        state=model.state,
        due_at=parse_timestamp(model.dueDate, model.label),
        late_at=parse_timestamp(model.lateDate, model.label),
        done_at=parse_timestamp(model.completionDate, model.label),
        created_at=parse_timestamp(model.createdDate, model.label),
        done_visible_duration=window,
        archived=model.archived,
        collapsed=model.collapsed,
        children=[build_task(child, default_window) for child in model.children],
    )


def validate_tree(tree: TaskTree) -> TaskTree:
    """Reject cycles, shared children, inverted deadlines and negative windows."""
    seen = set()
    for task, _ in tree.walk():  # raises CyclicReferenceError
        if id(task) in seen:
            raise SharedChildError(task.label)
        seen.add(id(task))
        if task.due_at is not None and task.late_at is not None and task.late_at < task.due_at:
            raise InvalidDeadlineOrderError(task.label, task.due_at, task.late_at)
        if task.done_visible_duration < timedelta(0):
            raise NegativeVisibilityWindowError(task.label, task.done_visible_duration)
    return tree


def parse_task_list(raw_data: Any, default_window: timedelta = DEFAULT_DONE_VISIBLE) -> TaskTree:
    """Validate an already-decoded JSON document and build the tree."""
    try:
        document = TaskListModel.model_validate(raw_data)
    except ValidationError as e:
        raise TaskFileError(f"Task file does not match the expected format:\n{e}") from e
    if document.doneVisibleHours is not None:
        default_window = visibility_window(document.doneVisibleHours, "<document>")
    tree = TaskTree(build_task(model, default_window) for model in document.tasks)
    return validate_tree(tree)


def load_task_tree(json_file_path: PathLike, default_window: timedelta = DEFAULT_DONE_VISIBLE) -> TaskTree:
    """
    Loads the task list from a JSON file and returns a validated TaskTree.
    Raises TaskFileError (or another TaskTreeError) when the input is rejected.
    """
    path = Path(json_file_path)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            raw_data = json.load(f)
    except FileNotFoundError as e:
        raise TaskFileError(f"File not found at {path}") from e
    except json.JSONDecodeError as e:
        raise TaskFileError(f"Could not decode JSON from {path}: {e}") from e
    try:
        tree = parse_task_list(raw_data, default_window)
    except TaskFileError:
        log.warning("Rejected task file %s", path)
        raise
    log.debug("Loaded %d tasks (%d top-level) from %s", tree.size(), len(tree), path)
    return tree


def _dump_task(task: Task) -> Dict[str, Any]:
    out: Dict[str, Any] = {"label": task.label, "state": task.state.value}
    for key, value in (
        ("dueDate", task.due_at),
        ("lateDate", task.late_at),
        ("completionDate", task.done_at),
        ("createdDate", task.created_at),
    ):
        if value is not None:
            out[key] = value.isoformat()
    if task.done_visible_duration != DEFAULT_DONE_VISIBLE:
        out["doneVisibleHours"] = _hours(task.done_visible_duration)
    if task.archived:
        out["archived"] = True
    if task.collapsed:
        out["collapsed"] = True
    if task.children:
        out["children"] = [_dump_task(child) for child in task.children]
    return out


def dump_task_tree(tree: TaskTree) -> Dict[str, Any]:
    return {"tasks": [_dump_task(root) for root in validate_tree(tree).roots]}


def write_task_tree(tree: TaskTree, json_file_path: PathLike) -> Path:
    path = Path(json_file_path)
    document = dump_task_tree(tree)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(document, f, indent=2)
            f.write("\n")
    except OSError as e:
        raise TaskFileError(f"Could not write {path}: {e}") from e
    log.debug("Wrote task file %s", path)
    return path


def default_task_tree(now: Optional[datetime] = None) -> TaskTree:
    """Starter list written by ``todotree init``."""
    now = now or datetime.now(tz.tzlocal())

    def todo(label: str) -> Task:
        return Task(label=label, created_at=now)

    welcome: List[Task] = [
        todo("Welcome to todotree!"),
        todo("Run 'todotree --help' for help"),
        Task(label="Subgroup", created_at=now, children=[todo("This is a subgroup")]),
        Task(label="Another subgroup", created_at=now, children=[todo("This is another subgroup")]),
    ]
    return TaskTree([Task(label="Welcome", created_at=now, children=welcome)])


def parse_cli_datetime(value: Optional[str]) -> Optional[datetime]:
    """Parse a ``--now`` style value: ISO 8601 first, then natural language ('tomorrow 9am')."""
    if not value:
        return None
    try:
        return parse_timestamp(value)
    except TaskFileError:
        pass
    # Imported lazily: dateparser loads its language data on import.
    import dateparser
    parsed = dateparser.parse(value, settings={"RETURN_AS_TIMEZONE_AWARE": True})
    if parsed is None:
        log.debug("Could not parse date string %r", value)
    return parsed
