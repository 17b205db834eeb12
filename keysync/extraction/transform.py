"""Key normalization for extracted strings and reference trees."""

import re
from typing import Any, Dict

_NON_WORD_RE = re.compile(r"[^a-z0-9]+")


def transformise(text: str) -> str:
    """Turn a UI string into a stable map key.

    ``"Save changes."`` becomes ``"save_changes"``. The result never
    contains dots, so it is always a single key-path segment.
    """
    return _NON_WORD_RE.sub("_", (text or "").strip().lower()).strip("_")


def transform_tree(tree: Dict[str, Any]) -> Dict[str, Any]:
    """Apply ``transformise`` to every key of a nested tree, segment by segment.

    Nesting and values are kept. Keys that normalize to nothing are dropped;
    when two keys normalize to the same segment the later one in sorted order
    wins.
    """
    result: Dict[str, Any] = {}
    for key in sorted(tree):
        segment = transformise(key)
        if not segment:
            continue
        value = tree[key]
        result[segment] = transform_tree(value) if isinstance(value, dict) else value
    return result
