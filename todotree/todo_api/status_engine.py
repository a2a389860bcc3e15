"""Effective status computation.

Everything here is a pure function of ``(task, now)``. Results are never
written back to a ``Task`` and never kept between calls, since the answer
changes as ``now`` moves forward.
"""
from datetime import datetime, timedelta
from typing import Dict, Iterable, Optional

from .data_models import EffectiveStatus, NodeStatus, Task, TaskState
from .errors import CyclicReferenceError
from .task_tree import TaskTree, is_leaf

DUE_SOON_WINDOW = timedelta(hours=24)


def _completion_anchor(task: Task) -> Optional[datetime]:
    anchors = [ts for ts in (task.due_at, task.done_at) if ts is not None]
    return max(anchors) if anchors else None


def leaf_status(task: Task, now: datetime) -> EffectiveStatus:
    """Status of a task from its own fields, ignoring any children."""
    if task.state == TaskState.done:
        # Completion freezes deadlines: a done task is never due or late.
        if task.archived:
            return EffectiveStatus.done_expired
        anchor = _completion_anchor(task)
        if anchor is None:
            return EffectiveStatus.done_visible
        if now - anchor > task.done_visible_duration:
            return EffectiveStatus.done_expired
        return EffectiveStatus.done_visible

    if task.late_at is not None and now >= task.late_at:
        return EffectiveStatus.late
    if task.due_at is not None and now >= task.due_at:
        return EffectiveStatus.due
    if task.state == TaskState.in_progress:
        return EffectiveStatus.in_progress
    return EffectiveStatus.open


def aggregate_status(child_statuses: Iterable[EffectiveStatus]) -> EffectiveStatus:
    """Fold the statuses of a parent's children into the parent's status."""
    statuses = list(child_statuses)
    if EffectiveStatus.late in statuses:
        return EffectiveStatus.late
    if EffectiveStatus.due in statuses:
        return EffectiveStatus.due
    if all(s.is_done for s in statuses):
        if EffectiveStatus.done_visible in statuses:
            return EffectiveStatus.done_visible
        return EffectiveStatus.done_expired
    if EffectiveStatus.in_progress in statuses:
        return EffectiveStatus.in_progress
    return EffectiveStatus.open


def _compute(task: Task, now: datetime, out: Dict[Task, NodeStatus], on_path: set) -> NodeStatus:
    if id(task) in on_path:
        raise CyclicReferenceError(task.label)
    if is_leaf(task):
        status = leaf_status(task, now)
        result = NodeStatus(status, 0 if status.is_done else 1)
    else:
        on_path.add(id(task))
        children = [_compute(child, now, out, on_path) for child in task.children]
        on_path.discard(id(task))
        result = NodeStatus(
            aggregate_status(c.status for c in children),
            sum(c.open_count for c in children),
        )
    out[task] = result
    return result


def compute_status(task: Task, now: datetime) -> NodeStatus:
    """EffectiveStatus of ``task`` at ``now`` plus its open-count.

    The open-count is the number of descendant leaves (the task itself when
    it is a leaf) whose status is neither done-visible nor done-expired.
    """
    return _compute(task, now, {}, set())


def compute_statuses(tree: TaskTree, now: datetime) -> Dict[Task, NodeStatus]:
    """Status of every node of ``tree`` in one bottom-up pass."""
    out: Dict[Task, NodeStatus] = {}
    for root in tree.roots:
        _compute(root, now, out, set())
    return out


def is_due_soon(task: Task, now: datetime, window: timedelta = DUE_SOON_WINDOW) -> bool:
    """True for an unfinished leaf whose due time is still ahead but within ``window``."""
    if not is_leaf(task) or task.state == TaskState.done or task.due_at is None:
        return False
    return now < task.due_at and task.due_at - now < window
