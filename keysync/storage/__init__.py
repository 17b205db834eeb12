"""Persistence of translation trees as JSON files."""

from .translation_files import (
    discover_source_files,
    load_reference_file,
    load_translation_file,
    read_current_text,
    serialize_tree,
    write_translation_file,
)

__all__ = [
    "discover_source_files",
    "load_reference_file",
    "load_translation_file",
    "read_current_text",
    "serialize_tree",
    "write_translation_file",
]
