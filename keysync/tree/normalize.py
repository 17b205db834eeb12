"""Deterministic key ordering for persisted translation trees."""

from .keypath import Tree, is_branch


def sort_tree(tree: Tree) -> Tree:
    """Return a copy of ``tree`` with keys sorted at every nesting level."""
    return {
        key: sort_tree(tree[key]) if is_branch(tree[key]) else tree[key]
        for key in sorted(tree)
    }
