"""Reconciliation of an existing translation tree with its reference tree."""

import copy
from typing import Any, Iterable, Tuple

from .diff import KeyDiff, diff_keys, prune_stale
from .keypath import MISSING, Tree, flatten, get_value, is_branch, last_segment, set_value
from .normalize import sort_tree


def placeholder_for(key: str, prefix: str) -> str:
    return f"{prefix}{last_segment(key)}"


def deep_merge(target: Tree, *sources: Tree) -> Tree:
    """Deep merge ``sources`` into ``target`` from left to right.

    When both sides hold a branch they are merged recursively; otherwise the
    source value replaces the target value. Values taken from a source are
    copied, so ``target`` never shares nodes with the sources.
    """
    for source in sources:
        for key, value in source.items():
            if is_branch(value):
                if not is_branch(target.get(key)):
                    target[key] = {}
                deep_merge(target[key], value)
            else:
                target[key] = copy.deepcopy(value)
    return target


def reconcile(
    existing_tree: Tree,
    reference_tree: Tree,
    selected_keys: Iterable[str],
    prefix: str,
    copy_values: bool = False,
) -> Tree:
    """Build the new output tree.

    Stale keys are pruned from ``existing_tree``, then every selected key is
    filled either with a placeholder (``prefix`` + last key segment) or, when
    ``copy_values`` is set, with the reference tree's own value.

    Args:
        existing_tree: Tree currently persisted for the language
        reference_tree: Source-of-truth tree
        selected_keys: Keys returned by ``classify_keys``
        prefix: Placeholder marker
        copy_values: Copy reference values instead of writing placeholders

    Returns:
        A new tree sharing no nodes with either input
    """
    base = prune_stale(existing_tree, flatten(reference_tree))

    for key in selected_keys:
        value: Any = MISSING
        if copy_values:
            value = get_value(reference_tree, key)
        if value is MISSING or is_branch(value):
            value = placeholder_for(key, prefix)
        set_value(base, key, value)

    return deep_merge({}, base)


def synchronize(
    existing_tree: Tree,
    reference_tree: Tree,
    prefix: str,
    copy_values: bool = False,
) -> Tuple[Tree, KeyDiff]:
    """Run the whole pipeline for one output tree: diff, reconcile, sort."""
    reference_keys = flatten(reference_tree)
    diff = diff_keys(reference_keys, existing_tree, prefix)
    result = reconcile(existing_tree, reference_tree, diff.selected, prefix, copy_values)
    return sort_tree(result), diff
