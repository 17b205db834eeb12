"""Reading, writing and discovering JSON translation files."""

import json
import os
import tempfile
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

import structlog

from ..errors import ReferenceFileError, TranslationWriteError
from ..tree.keypath import Tree

logger = structlog.get_logger()

JSON_SUFFIX = ".json"


def load_translation_file(path: Path, language: str) -> Tree:
    """Load the translation tree currently persisted for ``language``.

    A missing, unreadable or malformed file is not fatal: a warning is logged
    and an empty tree is returned so the file gets regenerated.
    """
    if not path.exists():
        logger.warning("No translation file exists", language=language, file=str(path))
        return {}

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        logger.warning(
            "Translation file is not valid JSON, starting from an empty tree",
            language=language,
            file=str(path),
            line=e.lineno,
            column=e.colno,
        )
        return {}
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Failed to read translation file", language=language, file=str(path), error=str(e))
        return {}

    if not isinstance(data, dict):
        logger.warning(
            "Translation file does not hold a JSON object, starting from an empty tree",
            language=language,
            file=str(path),
        )
        return {}
    return data


def load_reference_file(path: Path) -> Tree:
    """Load a reference tree. Any problem is fatal for the files built from it."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ReferenceFileError(
            f"Invalid JSON in {path}: line {e.lineno}, column {e.colno}",
            path=path,
            previous_error=e,
        ) from e
    except (OSError, UnicodeDecodeError) as e:
        raise ReferenceFileError(f"Cannot read {path}: {e}", path=path, previous_error=e) from e

    if not isinstance(data, dict):
        raise ReferenceFileError(f"{path} does not contain a JSON object", path=path)
    return data


def serialize_tree(tree: Tree) -> str:
    return json.dumps(tree, indent=2, ensure_ascii=False)


def read_current_text(path: Path) -> Optional[str]:
    """Raw text of an output file, or None when it cannot be read."""
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return None


def write_translation_file(path: Path, tree: Tree, language: Optional[str] = None) -> None:
    """Write ``tree`` to ``path``, replacing the previous file in one step.

    Parent directories are created as needed. The content goes to a temporary
    file next to the target first, so readers never see a partial file.
    """
    content = serialize_tree(tree)
    tmp_name = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
        os.replace(tmp_name, path)
    except OSError as e:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise TranslationWriteError(
            f"Failed to write {path}: {e}",
            path=path,
            language=language,
            previous_error=e,
        ) from e

    logger.debug("Translation file written", file=str(path), language=language)


def _is_within(path: Path, directory: Optional[Path]) -> bool:
    if directory is None:
        return False
    return directory.resolve() in path.resolve().parents


def discover_source_files(
    source: Path,
    pattern: str = "**/*.json",
    exclude: Iterable[str] = (),
    output_dir: Optional[Path] = None,
) -> List[Tuple[Path, str]]:
    """Find translation source files under ``source``.

    Args:
        source: Root directory to scan
        pattern: Glob pattern relative to ``source``
        exclude: File names (with or without ``.json``) to leave out
        output_dir: Generated files are skipped when it lies inside ``source``

    Returns:
        Sorted ``(path, relative_path)`` pairs, relative paths POSIX style
    """
    excluded = {name[:-len(JSON_SUFFIX)] if name.endswith(JSON_SUFFIX) else name for name in exclude}
    found = []
    for path in source.glob(pattern):
        if not path.is_file() or path.suffix != JSON_SUFFIX:
            continue
        if path.stem in excluded:
            continue
        if _is_within(path, output_dir):
            continue
        found.append((path, path.relative_to(source).as_posix()))
    return sorted(found, key=lambda item: item[1])
