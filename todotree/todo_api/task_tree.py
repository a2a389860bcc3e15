"""Read model over a hierarchy of tasks.

The tree owns its tasks top-down through ``Task.children``. Tasks carry no
parent pointer; ancestry is either passed along during traversal (the
ancestor path) or looked up on demand with ``parent_of`` / ``path_to``.
"""
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from .data_models import Task
from .errors import CyclicReferenceError

AncestorPath = Tuple[str, ...]


def is_leaf(task: Task) -> bool:
    return not task.children


def _walk(task: Task, path: AncestorPath, on_path: set) -> Iterator[Tuple[Task, AncestorPath]]:
    if id(task) in on_path:
        raise CyclicReferenceError(task.label)
    on_path.add(id(task))
    yield task, path
    child_path = path + (task.label,)
    for child in task.children:
        yield from _walk(child, child_path, on_path)
    on_path.discard(id(task))


def walk_subtree(task: Task, path: AncestorPath = ()) -> Iterator[Tuple[Task, AncestorPath]]:
    """Pre-order traversal of ``task`` and its descendants."""
    return _walk(task, tuple(path), set())


def iter_leaves(task: Task) -> Iterator[Task]:
    """All descendant leaves of ``task`` in stored order (a leaf yields itself)."""
    for node, _ in walk_subtree(task):
        if is_leaf(node):
            yield node


class TaskTree:
    def __init__(self, roots: Optional[Iterable[Task]] = None):
        self.roots: List[Task] = list(roots or [])

    def __iter__(self) -> Iterator[Task]:
        return iter(self.roots)

    def __len__(self) -> int:
        return len(self.roots)

    def walk(self) -> Iterator[Tuple[Task, AncestorPath]]:
        """Depth-first pre-order traversal yielding ``(task, ancestor_path)``.

        ``ancestor_path`` holds the labels from the root down to the
        immediate parent; it is empty for root tasks. Raises
        ``CyclicReferenceError`` instead of looping if a task is reached again
        while still on the current path.
        """
        for root in self.roots:
            yield from walk_subtree(root)

    def leaves(self) -> Iterator[Task]:
        for root in self.roots:
            yield from iter_leaves(root)

    def size(self) -> int:
        return sum(1 for _ in self.walk())

    def parent_index(self) -> Dict[int, Task]:
        """Map ``id(child)`` to its parent task, built fresh on every call."""
        index: Dict[int, Task] = {}
        for task, _ in self.walk():
            for child in task.children:
                index[id(child)] = task
        return index

    def parent_of(self, task: Task) -> Optional[Task]:
        return self.parent_index().get(id(task))

    def path_to(self, task: Task) -> Optional[AncestorPath]:
        """Ancestor labels of ``task``, or None if it is not in this tree."""
        for node, path in self.walk():
            if node is task:
                return path
        return None

    def find(self, label_path: Sequence[str]) -> Optional[Task]:
        """Follow labels from a root down; first match wins at each level."""
        candidates = self.roots
        found = None
        for label in label_path:
            found = next((t for t in candidates if t.label == label), None)
            if found is None:
                return None
            candidates = found.children
        return found
