"""Trash archive and metadata engine.

This module provides the engine that moves items into a trash folder as
compressed archives, tracks where they came from, and restores, lists
and empties them.
"""

from trashctl.trash.engine import TrashEngine, select_entry
from trashctl.trash.errors import (
    MetadataCorruptError,
    TrashConflictError,
    TrashError,
    TrashIOError,
    TrashNotFoundError,
    TrashSelectionError,
)
from trashctl.trash.metadata import METADATA_FILENAME, MetadataStore, migrate_records
from trashctl.trash.models import EntryKind, TrashActionResult, TrashEntry, TrashRecord
from trashctl.trash.naming import lookup_keys, strip_archive_suffix, unique_name

__all__ = [
    "METADATA_FILENAME",
    "EntryKind",
    "MetadataCorruptError",
    "MetadataStore",
    "TrashActionResult",
    "TrashConflictError",
    "TrashEngine",
    "TrashEntry",
    "TrashError",
    "TrashIOError",
    "TrashNotFoundError",
    "TrashRecord",
    "TrashSelectionError",
    "lookup_keys",
    "migrate_records",
    "select_entry",
    "strip_archive_suffix",
    "unique_name",
]
