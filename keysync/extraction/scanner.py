"""Extraction of translatable strings from source code.

Looks for calls of a marker function, ``__('Some text')`` by default, in
JavaScript, TypeScript, Vue, Python and HTML sources, and turns the texts
found into a reference translation tree.
"""

import re
from pathlib import Path
from typing import Iterable, List, Optional, Pattern, Sequence

import structlog

from ..tree.keypath import MISSING, SEPARATOR, Tree, get_value, is_branch, set_value, split_path
from .transform import transformise

logger = structlog.get_logger(__name__)

DEFAULT_CODE_PATTERNS = (
    "**/*.js",
    "**/*.jsx",
    "**/*.ts",
    "**/*.tsx",
    "**/*.vue",
    "**/*.py",
    "**/*.html",
)

DEFAULT_EXCLUDED_DIRS = ("node_modules", ".git", "__pycache__", "dist", "build")

_ESCAPES = {"n": "\n", "t": "\t", "r": "\r"}


def call_pattern(function_name: str) -> Pattern:
    """Regex matching ``function_name('text')`` with ', " or ` quotes."""
    return re.compile(
        r"(?<![\w$])" + re.escape(function_name)
        + r"\(\s*(['\"`])((?:\\.|(?!\1)[^\\])*)\1\s*[,)]",
        re.S,
    )


def _unescape(text: str) -> str:
    return re.sub(r"\\(.)", lambda m: _ESCAPES.get(m.group(1), m.group(1)), text, flags=re.S)


def extract_calls(text: str, function_name: str = "__") -> List[str]:
    """Return the literal arguments of every marker call in ``text``."""
    found = []
    for match in call_pattern(function_name).finditer(text):
        quote, literal = match.group(1), match.group(2)
        if quote == "`" and "${" in literal:
            # interpolated template literal, not a static key
            continue
        found.append(_unescape(literal))
    return found


def iter_source_files(
    root: Path,
    patterns: Sequence[str] = DEFAULT_CODE_PATTERNS,
    exclude_dirs: Iterable[str] = DEFAULT_EXCLUDED_DIRS,
    skip: Optional[Path] = None,
) -> List[Path]:
    """Sorted source files under ``root`` matching any of ``patterns``."""
    excluded = set(exclude_dirs)
    skip_resolved = skip.resolve() if skip is not None else None
    files = set()
    for pattern in patterns:
        for path in root.glob(pattern):
            if not path.is_file():
                continue
            relative_parts = path.relative_to(root).parts[:-1]
            if excluded.intersection(relative_parts):
                continue
            if skip_resolved is not None and skip_resolved in path.resolve().parents:
                continue
            files.add(path)
    return sorted(files)


def scan_source(
    root: Path,
    function_name: str = "__",
    patterns: Sequence[str] = DEFAULT_CODE_PATTERNS,
    exclude_dirs: Iterable[str] = DEFAULT_EXCLUDED_DIRS,
    skip: Optional[Path] = None,
) -> List[str]:
    """Collect the unique marker-call texts under ``root`` in discovery order.

    Args:
        root: Directory to scan
        function_name: Name of the marker function
        patterns: Glob patterns selecting source files
        exclude_dirs: Directory names never descended into
        skip: Directory to leave out entirely (usually the output directory)

    Returns:
        Texts without duplicates, in the order they were first found
    """
    texts: List[str] = []
    seen = set()
    scanned = 0

    for path in iter_source_files(root, patterns, exclude_dirs, skip):
        try:
            content = path.read_text(encoding="utf-8")
        except (UnicodeDecodeError, OSError) as e:
            logger.warning("Skipping unreadable source file", file=str(path), error=str(e))
            continue

        scanned += 1
        for text in extract_calls(content, function_name):
            if text not in seen:
                seen.add(text)
                texts.append(text)

    logger.debug("Scanned source files", root=str(root), files=scanned, strings=len(texts))
    return texts


def build_reference_tree(texts: Iterable[str], transform: bool = False) -> Tree:
    """Build a reference tree whose values are the extracted texts.

    Each text is keyed by itself, or by ``transformise(text)`` when
    ``transform`` is set. Later duplicates win; empty keys are dropped.
    """
    tree: Tree = {}
    for text in texts:
        key = transformise(text) if transform else text
        if not key:
            continue
        lost = _overwritten_texts(tree, key)
        if lost:
            logger.warning("Extracted string replaces another key", key=key, text=text, lost=lost)
        set_value(tree, key, text)
    return tree


def _overwritten_texts(tree: Tree, key: str) -> List[str]:
    """Texts that setting ``key`` would drop: a leaf on the way down or a branch at the key."""
    segments = split_path(key)
    for depth in range(1, len(segments)):
        value = get_value(tree, SEPARATOR.join(segments[:depth]))
        if value is MISSING:
            return []
        if not is_branch(value):
            return [value]
    value = get_value(tree, key)
    if is_branch(value):
        return _leaves(value)
    return []


def _leaves(tree: Tree) -> List[str]:
    found: List[str] = []
    for value in tree.values():
        found.extend(_leaves(value) if is_branch(value) else [value])
    return found
