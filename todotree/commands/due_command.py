import json

from rich.console import Console
from rich.table import Table
from rich.text import Text

from ..todo_api.data_models import FlatCategory
from ..todo_api.view_projector import BREADCRUMB_SEPARATOR, render_flat
from ..utils.data_loading import load_task_tree
from ..utils.format_utils import format_relative

CATEGORY_TITLES = {
    FlatCategory.late: ("Late", "bold red"),
    FlatCategory.due: ("Due", "yellow"),
    FlatCategory.complete: ("Complete", "dim"),
}


def handle_due(args):
    """
    Lists leaf tasks that need attention, grouped Late -> Due -> Complete,
    each with the path of groups it lives under.
    """
    now = args.now
    separator = getattr(args, 'separator', None) or BREADCRUMB_SEPARATOR
    tree = load_task_tree(args.file, args.done_visible)
    buckets = render_flat(tree, now, separator=separator)

    if getattr(args, 'json', False):
        print(json.dumps({category.value: [e.to_dict() for e in entries] for category, entries in buckets.items()}, indent=2))
        return

    console = Console()
    if not any(buckets.values()):
        console.print("Nothing late, due or recently completed.")
        return

    for category, entries in buckets.items():
        title, style = CATEGORY_TITLES[category]
        if not entries:
            console.print(f"{title}: nothing", style=style)
            continue
        table = Table(title=f"{title} ({len(entries)})", title_style=style, title_justify="left", show_header=True, header_style="bold")
        table.add_column("Task", style=style)
        table.add_column("Location", style="cyan")
        table.add_column("Due", style="magenta")
        for entry in entries:
            due = format_relative(entry.task.due_at, now) if entry.task.due_at else "-"
            table.add_row(Text(entry.task.label), Text(entry.breadcrumb or "-"), due)
        console.print(table)
