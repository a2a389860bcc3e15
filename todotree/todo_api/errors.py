"""
Structural errors raised while building or validating a task tree.
"""


class TaskTreeError(Exception):
    """Base class for every rejected task tree."""


class CyclicReferenceError(TaskTreeError):
    def __init__(self, label: str):
        super().__init__(f"Task '{label}' is its own ancestor")
        self.label = label


class SharedChildError(TaskTreeError):
    def __init__(self, label: str):
        super().__init__(f"Task '{label}' is listed under more than one parent")
        self.label = label


class InvalidDeadlineOrderError(TaskTreeError):
    def __init__(self, label: str, due_at, late_at):
        super().__init__(
            f"Task '{label}' becomes late ({late_at.isoformat()}) before it is due ({due_at.isoformat()})"
        )
        self.label = label
        self.due_at = due_at
        self.late_at = late_at


class NegativeVisibilityWindowError(TaskTreeError):
    def __init__(self, label: str, window):
        super().__init__(f"Task '{label}' has a negative done visibility window ({window})")
        self.label = label
        self.window = window


class TaskFileError(TaskTreeError):
    """The task file could not be read or does not match the expected shape."""
