"""Key classification between a reference key set and an existing translation tree."""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List

from .keypath import MISSING, Tree, flatten, get_value, is_branch


@dataclass
class KeyDiff:
    """How the keys of one output tree relate to its reference keys."""

    new: List[str] = field(default_factory=list)
    placeholder: List[str] = field(default_factory=list)
    stale: List[str] = field(default_factory=list)
    translated: List[str] = field(default_factory=list)

    @property
    def selected(self) -> List[str]:
        """Keys that get (re)generated, sorted."""
        return sorted(self.new + self.placeholder)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "new": list(self.new),
            "placeholder": list(self.placeholder),
            "stale": list(self.stale),
            "translated": len(self.translated),
        }


def _unique(keys: Iterable[str]) -> List[str]:
    seen = set()
    result = []
    for key in keys:
        if key not in seen:
            seen.add(key)
            result.append(key)
    return result


def _is_placeholder(value: Any, prefix: str) -> bool:
    return isinstance(value, str) and value.startswith(prefix)


def _has_leaf(value: Any) -> bool:
    # only real absence counts: "", 0 and False are deliberate translations
    return value is not MISSING and not is_branch(value)


def classify_keys(reference_keys: Iterable[str], existing_tree: Tree, prefix: str) -> List[str]:
    """Return the reference keys that need (re)generation.

    A key is selected when it has no leaf in ``existing_tree`` or when its
    leaf is a string still starting with ``prefix``. Keys holding any other
    value are already translated and are never selected.
    """
    selected = []
    for key in _unique(reference_keys):
        value = get_value(existing_tree, key)
        if not _has_leaf(value) or _is_placeholder(value, prefix):
            selected.append(key)
    return selected


def diff_keys(reference_keys: Iterable[str], existing_tree: Tree, prefix: str) -> KeyDiff:
    """Classify every key of a reference set and of an existing tree."""
    reference = _unique(reference_keys)
    reference_set = set(reference)
    diff = KeyDiff()

    for key in reference:
        value = get_value(existing_tree, key)
        if not _has_leaf(value):
            diff.new.append(key)
        elif _is_placeholder(value, prefix):
            diff.placeholder.append(key)
        else:
            diff.translated.append(key)

    diff.stale = [key for key in flatten(existing_tree) if key not in reference_set]
    return diff


def _prune(node: Tree, reference_set: set, parent: str) -> Tree:
    pruned: Tree = {}
    for key, value in node.items():
        current_path = f"{parent}.{key}" if parent else key
        if is_branch(value):
            child = _prune(value, reference_set, current_path)
            if child:
                pruned[key] = child
        elif current_path in reference_set:
            pruned[key] = value
    return pruned


def prune_stale(existing_tree: Tree, reference_keys: Iterable[str]) -> Tree:
    """Copy ``existing_tree`` without the leaves absent from ``reference_keys``.

    Branches that end up empty are dropped bottom-up. The input tree is not
    modified.
    """
    return _prune(existing_tree, set(reference_keys), "")
