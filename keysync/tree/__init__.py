"""Translation tree algorithms: key paths, diffing, merging and ordering."""

from .keypath import (
    MISSING,
    Tree,
    flatten,
    get_value,
    is_branch,
    last_segment,
    set_value,
)
from .diff import KeyDiff, classify_keys, diff_keys, prune_stale
from .merge import deep_merge, placeholder_for, reconcile, synchronize
from .normalize import sort_tree

__all__ = [
    "MISSING",
    "Tree",
    "flatten",
    "get_value",
    "is_branch",
    "last_segment",
    "set_value",
    "KeyDiff",
    "classify_keys",
    "diff_keys",
    "prune_stale",
    "deep_merge",
    "placeholder_for",
    "reconcile",
    "synchronize",
    "sort_tree",
]
