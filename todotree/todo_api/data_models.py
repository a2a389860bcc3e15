"""
Data models representing todo list objects (tasks and computed statuses).
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import List, Optional

DEFAULT_DONE_VISIBLE = timedelta(hours=24)


class TaskState(str, Enum):
    """State the user set directly on a task."""
    open = "open"
    in_progress = "in-progress"
    done = "done"


class EffectiveStatus(str, Enum):
    """Computed, time-dependent display state of a task."""
    open = "open"
    in_progress = "in-progress"
    due = "due"
    late = "late"
    done_visible = "done-visible"
    done_expired = "done-expired"

    @property
    def is_done(self) -> bool:
        return self in (EffectiveStatus.done_visible, EffectiveStatus.done_expired)


class FlatCategory(str, Enum):
    late = "late"
    due = "due"
    complete = "complete"


# Task is compared and hashed by identity: status maps are keyed by node.
@dataclass(eq=False)
class Task:
    label: str
    state: TaskState = TaskState.open
    due_at: Optional[datetime] = None
    late_at: Optional[datetime] = None
    done_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    done_visible_duration: timedelta = DEFAULT_DONE_VISIBLE
    archived: bool = False
    collapsed: bool = False
    children: List["Task"] = field(default_factory=list)


@dataclass(frozen=True)
class NodeStatus:
    status: EffectiveStatus
    open_count: int


@dataclass(frozen=True)
class HierarchyRow:
    task: Task
    depth: int
    status: EffectiveStatus
    summary_count: int

    def to_dict(self):
        return {
            "label": self.task.label,
            "depth": self.depth,
            "status": self.status.value,
            "summary_count": self.summary_count,
            "due_at": self.task.due_at.isoformat() if self.task.due_at else None,
            "collapsed": self.task.collapsed,
        }


@dataclass(frozen=True)
class FlatEntry:
    task: Task
    breadcrumb: str

    def to_dict(self):
        return {
            "label": self.task.label,
            "breadcrumb": self.breadcrumb,
            "due_at": self.task.due_at.isoformat() if self.task.due_at else None,
            "late_at": self.task.late_at.isoformat() if self.task.late_at else None,
        }
