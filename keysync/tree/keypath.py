"""Dotted key-path helpers over nested translation trees.

A translation tree is a plain JSON object: every value is either a branch
(another dict) or a leaf (normally a string). A key path such as
``"menu.file.open"`` addresses one leaf.
"""

from typing import Any, Dict, List

Tree = Dict[str, Any]

SEPARATOR = "."


class _Missing:
    """Sentinel for a path that does not resolve to anything."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"


MISSING = _Missing()


def is_branch(value: Any) -> bool:
    return isinstance(value, dict)


def split_path(path: str) -> List[str]:
    return path.split(SEPARATOR)


def last_segment(path: str) -> str:
    return path.rsplit(SEPARATOR, 1)[-1]


def flatten(tree: Tree, parent: str = "") -> List[str]:
    """Return the dotted path of every leaf in ``tree``.

    Keys are visited in sorted order at each level, depth first. Empty
    branches contribute nothing; anything that is not a dict is a leaf.
    """
    paths: List[str] = []
    for key in sorted(tree):
        value = tree[key]
        current_path = f"{parent}{SEPARATOR}{key}" if parent else key
        if is_branch(value):
            paths.extend(flatten(value, current_path))
        else:
            paths.append(current_path)
    return paths


def get_value(tree: Tree, path: str, default: Any = MISSING) -> Any:
    """Resolve ``path`` in ``tree``.

    Returns ``default`` as soon as a segment is missing or an intermediate
    node is not a branch. Never raises for a missing path.
    """
    node: Any = tree
    for segment in split_path(path):
        if not is_branch(node) or segment not in node:
            return default
        node = node[segment]
    return node


def set_value(tree: Tree, path: str, value: Any) -> Tree:
    """Set the leaf at ``path``, creating intermediate branches on the way.

    An intermediate segment that currently holds a leaf is replaced by a new
    empty branch. Sibling keys are left untouched. Mutates and returns
    ``tree``.
    """
    segments = split_path(path)
    node = tree
    for segment in segments[:-1]:
        child = node.get(segment)
        if not is_branch(child):
            child = {}
            node[segment] = child
        node = child
    node[segments[-1]] = value
    return tree
