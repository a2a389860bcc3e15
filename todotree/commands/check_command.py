from collections import Counter

from rich.console import Console
from rich.table import Table

from ..todo_api.data_models import EffectiveStatus
from ..todo_api.status_engine import compute_statuses
from ..todo_api.task_tree import is_leaf
from ..utils.data_loading import load_task_tree
from ..utils.logger import get_logger

log = get_logger(__name__)


def handle_check(args):
    """Validate the task file and summarise the statuses of its tasks."""
    console = Console()
    tree = load_task_tree(args.file, args.done_visible)
    statuses = compute_statuses(tree, args.now)

    total = len(statuses)
    leaves = sum(1 for task in statuses if is_leaf(task))
    console.print(
        f"✅ Task file OK – {total} tasks, {leaves} leaves, {len(tree)} top-level groups ({args.file})",
        style="green",
        highlight=False,
        soft_wrap=True,
    )
    log.debug("Checked %s at %s", args.file, args.now.isoformat())

    histogram = Counter(node.status for task, node in statuses.items() if is_leaf(task))
    table = Table(show_header=True, header_style="bold")
    table.add_column("Status", style="magenta")
    table.add_column("Leaves", justify="right")
    for status in EffectiveStatus:
        table.add_row(status.value, str(histogram.get(status, 0)))
    console.print(table)
