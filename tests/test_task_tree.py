import pytest

from todotree.todo_api.data_models import Task
from todotree.todo_api.errors import CyclicReferenceError
from todotree.todo_api.task_tree import TaskTree, is_leaf, iter_leaves


def _labels(pairs):
    return [(task.label, path) for task, path in pairs]


def test_walk_is_preorder_with_ancestor_paths(school_tree):
    assert _labels(school_tree.walk()) == [
        ("School", ()),
        ("AP CSP", ("School",)),
        ("Computering", ("School", "AP CSP")),
        ("Computering alos", ("School", "AP CSP")),
        ("Computering alos2", ("School", "AP CSP")),
    ]


def test_walk_keeps_stored_child_order():
    tree = TaskTree([
        Task(label="b", children=[Task(label="z"), Task(label="a")]),
        Task(label="a"),
    ])
    assert [t.label for t, _ in tree.walk()] == ["b", "z", "a", "a"]


def test_leaf_detection_and_leaves(school_tree):
    school = school_tree.roots[0]
    assert not is_leaf(school)
    assert [t.label for t in school_tree.leaves()] == ["Computering", "Computering alos", "Computering alos2"]
    lone = Task(label="lone")
    assert is_leaf(lone)
    assert list(iter_leaves(lone)) == [lone]


def test_parent_lookup_is_computed_not_stored(school_tree):
    ap_csp = school_tree.find(["School", "AP CSP"])
    leaf = ap_csp.children[1]
    assert school_tree.parent_of(leaf) is ap_csp
    assert school_tree.parent_of(school_tree.roots[0]) is None
    assert school_tree.path_to(leaf) == ("School", "AP CSP")
    assert school_tree.path_to(Task(label="stranger")) is None
    assert not hasattr(leaf, "parent")


def test_find_and_size(school_tree):
    assert school_tree.find(["School", "AP CSP", "Computering"]).label == "Computering"
    assert school_tree.find(["School", "Nope"]) is None
    assert school_tree.size() == 5
    assert len(school_tree) == 1


def test_walk_fails_fast_on_cycle():
    a = Task(label="a")
    b = Task(label="b", children=[a])
    a.children.append(b)
    with pytest.raises(CyclicReferenceError) as exc:
        list(TaskTree([a]).walk())
    assert exc.value.label == "a"


def test_same_task_under_two_parents_is_not_a_cycle():
    shared = Task(label="shared")
    tree = TaskTree([Task(label="x", children=[shared]), Task(label="y", children=[shared])])
    assert [t.label for t, _ in tree.walk()] == ["x", "shared", "y", "shared"]
