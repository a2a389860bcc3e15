import json
from datetime import datetime, timedelta

from rich.console import Console
from rich.text import Text

from ..todo_api.status_engine import DUE_SOON_WINDOW, is_due_soon
from ..todo_api.view_projector import render_hierarchy
from ..utils.data_loading import load_task_tree
from ..utils.format_utils import DUE_SOON_STYLE, STATUS_STYLES, format_row


def handle_tree(args):
    """
    Prints the nested outline of the task file, one line per task, with the
    status marker or open-count in front of each label.
    """
    now: datetime = args.now
    tree = load_task_tree(args.file, args.done_visible)
    rows = render_hierarchy(
        tree,
        now,
        include_expired=getattr(args, 'include_expired', False),
        expand_all=getattr(args, 'expand_all', False),
    )

    if getattr(args, 'json', False):
        print(json.dumps([row.to_dict() for row in rows], indent=2))
        return

    console = Console()
    if not rows:
        console.print("No tasks to show.")
        return

    due_soon: timedelta = getattr(args, 'due_soon', DUE_SOON_WINDOW)
    for row in rows:
        style = STATUS_STYLES[row.status]
        if is_due_soon(row.task, now, due_soon):
            style = DUE_SOON_STYLE
        console.print(Text(format_row(row, now), style=style), soft_wrap=True)
