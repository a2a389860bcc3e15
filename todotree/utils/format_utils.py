from datetime import datetime
from typing import Optional

from dateutil.relativedelta import relativedelta

from ..todo_api.data_models import EffectiveStatus, HierarchyRow

INDENT = "  "

LEAF_GLYPHS = {
    EffectiveStatus.open: " ",
    EffectiveStatus.in_progress: "~",
    EffectiveStatus.due: "!",
    EffectiveStatus.late: "X",
    EffectiveStatus.done_visible: "*",
    EffectiveStatus.done_expired: "*",
}

STATUS_STYLES = {
    EffectiveStatus.open: "",
    EffectiveStatus.in_progress: "cyan",
    EffectiveStatus.due: "yellow",
    EffectiveStatus.late: "bold red",
    EffectiveStatus.done_visible: "dim",
    EffectiveStatus.done_expired: "dim strike",
}
DUE_SOON_STYLE = "yellow"

_UNITS = ("years", "months", "days", "hours", "minutes")


def format_counter(count: int) -> str:
    """Single character open-count: digits up to 9, '+' beyond."""
    return str(count) if count < 10 else "+"


def status_marker(row: HierarchyRow) -> str:
    """Bracketed marker shown in front of a row: [ ], [~], [!], [X], [*], or [n] for parents."""
    if not row.task.children or row.status.is_done:
        return f"[{LEAF_GLYPHS[row.status]}]"
    return f"[{format_counter(row.summary_count)}]"


def format_relative(when: datetime, now: datetime) -> str:
    """Describe ``when`` relative to ``now``, e.g. 'in 2 hours' or '3 days ago'."""
    future = when >= now
    delta = relativedelta(when, now) if future else relativedelta(now, when)
    for unit in _UNITS:
        amount = getattr(delta, unit)
        if amount:
            text = f"{amount} {unit if amount != 1 else unit[:-1]}"
            return f"in {text}" if future else f"{text} ago"
    return "now"


def format_row(row: HierarchyRow, now: Optional[datetime] = None) -> str:
    """One plain-text outline line (without color)."""
    line = f"{INDENT * row.depth}{status_marker(row)} {row.task.label}"
    if row.task.due_at is not None and not row.task.children:
        if now is not None:
            line += f" ({format_relative(row.task.due_at, now)})"
        else:
            line += f" ({row.task.due_at:%Y-%m-%d %H:%M})"
    return line
