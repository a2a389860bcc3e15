"""
Todo list core: task tree, status engine and view projections.
"""

from .data_models import EffectiveStatus, FlatCategory, FlatEntry, HierarchyRow, NodeStatus, Task, TaskState
from .errors import (
    CyclicReferenceError,
    InvalidDeadlineOrderError,
    NegativeVisibilityWindowError,
    SharedChildError,
    TaskFileError,
    TaskTreeError,
)
from .status_engine import compute_status, compute_statuses
from .task_tree import TaskTree
from .view_projector import render_flat, render_hierarchy

__all__ = [
    'EffectiveStatus',
    'FlatCategory',
    'FlatEntry',
    'HierarchyRow',
    'NodeStatus',
    'Task',
    'TaskState',
    'TaskTree',
    'compute_status',
    'compute_statuses',
    'render_flat',
    'render_hierarchy',
    'TaskTreeError',
    'CyclicReferenceError',
    'SharedChildError',
    'InvalidDeadlineOrderError',
    'NegativeVisibilityWindowError',
    'TaskFileError',
]
