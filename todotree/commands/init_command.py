from pathlib import Path

import typer
from rich.console import Console

from ..utils.data_loading import default_task_tree, write_task_tree


def handle_init(args):
    """Write the starter task list, refusing to clobber an existing file unless forced."""
    console = Console()
    path = Path(args.file)
    if path.exists() and not getattr(args, 'force', False):
        console.print(f"❌ {path} already exists (use --force to overwrite)", style="red", highlight=False)
        raise typer.Exit(code=1)
    write_task_tree(default_task_tree(args.now), path)
    console.print(f"✅ Wrote starter task list to {path}", style="green", highlight=False)
