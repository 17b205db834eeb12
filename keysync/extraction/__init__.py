"""Reference key extraction from source code."""

from .scanner import (
    DEFAULT_CODE_PATTERNS,
    build_reference_tree,
    extract_calls,
    iter_source_files,
    scan_source,
)
from .transform import transform_tree, transformise

__all__ = [
    "DEFAULT_CODE_PATTERNS",
    "build_reference_tree",
    "extract_calls",
    "iter_source_files",
    "scan_source",
    "transform_tree",
    "transformise",
]
