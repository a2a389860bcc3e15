"""
Projections of a task tree for display: a nested outline and a flat
Late / Due / Complete listing. Both are rebuilt from scratch on each call.
"""

from datetime import datetime
from typing import Dict, List, Optional

from .data_models import EffectiveStatus, FlatCategory, FlatEntry, HierarchyRow
from .status_engine import compute_statuses
from .task_tree import TaskTree, is_leaf

BREADCRUMB_SEPARATOR = " > "

_FLAT_BUCKETS = {
    EffectiveStatus.late: FlatCategory.late,
    EffectiveStatus.due: FlatCategory.due,
    EffectiveStatus.done_visible: FlatCategory.complete,
}


def render_hierarchy(
    tree: TaskTree, now: datetime, include_expired: bool = False, expand_all: bool = False
) -> List[HierarchyRow]:
    """
    Pre-order rows of the whole tree. Done-expired nodes are skipped unless
    asked for; a collapsed group shows its own row but none of its descendants
    unless expand_all is set.
    """
    statuses = compute_statuses(tree, now)
    rows: List[HierarchyRow] = []
    hidden_below: Optional[int] = None
    for task, path in tree.walk():
        depth = len(path)
        if hidden_below is not None:
            if depth > hidden_below:
                continue
            hidden_below = None
        node = statuses[task]
        if node.status == EffectiveStatus.done_expired and not include_expired:
            continue
        rows.append(HierarchyRow(task=task, depth=depth, status=node.status, summary_count=node.open_count))
        if task.collapsed and task.children and not expand_all:
            hidden_below = depth
    return rows


def render_flat(
    tree: TaskTree, now: datetime, separator: str = BREADCRUMB_SEPARATOR
) -> Dict[FlatCategory, List[FlatEntry]]:
    """Leaf tasks that are late, due, or recently done, grouped in that order."""
    statuses = compute_statuses(tree, now)
    buckets: Dict[FlatCategory, List[FlatEntry]] = {category: [] for category in FlatCategory}
    for task, path in tree.walk():
        if not is_leaf(task):
            continue
        category = _FLAT_BUCKETS.get(statuses[task].status)
        if category is None:
            continue
        buckets[category].append(FlatEntry(task=task, breadcrumb=separator.join(path)))
    return buckets
