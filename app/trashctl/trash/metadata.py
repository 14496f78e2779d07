"""Trash metadata persistence.

This module provides the MetadataStore class, which maps each trash entry
name to the path it was moved from and whether it was a directory.

Storage location: <trash folder>/.metadata

The file is a flat JSON object. Each value is itself a JSON-encoded
record string:

    {"notes.txt.tar.gz": "{\\"path\\": \\"/home/u/notes.txt\\", \\"is_directory\\": false}"}

Two older shapes are still read:
- bare path strings with no type bit ({"notes.txt.tar.gz": "/home/u/notes.txt"})
- records spelling the type bit "is_dir"
"""

import json
import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from trashctl.trash.errors import MetadataCorruptError, TrashIOError
from trashctl.trash.models import TrashRecord

logger = logging.getLogger(__name__)

METADATA_FILENAME = ".metadata"


def _parse_record(value: object) -> TrashRecord | None:
    """Interpret a stored value as a structured record.

    Args:
        value: Raw value from the metadata file.

    Returns:
        TrashRecord if the value is a structured record, None otherwise.
    """
    data: object = value
    if isinstance(value, str):
        if not value.lstrip().startswith("{"):
            return None
        try:
            data = json.loads(value)
        except json.JSONDecodeError:
            return None

    if not isinstance(data, dict):
        return None
    try:
        return TrashRecord.from_dict(data)
    except (KeyError, ValueError):
        return None


def migrate_records(raw: Mapping[str, object]) -> dict[str, TrashRecord]:
    """Upgrade raw metadata values to TrashRecords.

    Structured values are used as-is. Any other string is a legacy bare
    path: its type is recovered by probing the filesystem, defaulting to
    a file when the path no longer exists. Never raises.

    Args:
        raw: Mapping as read from the metadata file.

    Returns:
        Records keyed by trash name.
    """
    records: dict[str, TrashRecord] = {}

    for key, value in raw.items():
        record = _parse_record(value)
        if record is not None:
            records[key] = record
            continue

        if not isinstance(value, str) or not value:
            logger.warning("Skipping unreadable metadata value for %s", key)
            continue

        is_directory = os.path.exists(value) and os.path.isdir(value)
        logger.debug("Migrating legacy metadata for %s (directory=%s)", key, is_directory)
        records[key] = TrashRecord(path=value, is_directory=is_directory)

    return records


class MetadataStore:
    """Reads and writes the trash metadata file.

    The store is loaded once at the start of an operation and saved once
    at the end; it never writes incrementally.

    Attributes:
        trash_dir: Trash folder containing the metadata file.
    """

    def __init__(self, trash_dir: Path) -> None:
        """Initialize MetadataStore.

        Args:
            trash_dir: Trash folder containing the metadata file.
        """
        self._trash_dir = trash_dir

    @property
    def path(self) -> Path:
        """Path to the .metadata file."""
        return self._trash_dir / METADATA_FILENAME

    def load_raw(self) -> dict[str, object]:
        """Read the metadata file without interpreting its values.

        Returns:
            Raw mapping; empty when the file is missing or corrupt.

        Raises:
            TrashIOError: If the file exists but cannot be read.
        """
        try:
            content = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except (OSError, UnicodeDecodeError) as e:
            raise TrashIOError(f"Failed to read metadata {self.path}: {e}") from e

        try:
            return self._decode(content)
        except MetadataCorruptError as e:
            logger.warning("Ignoring corrupt trash metadata %s: %s", self.path, e)
            return {}

    def load(self) -> dict[str, TrashRecord]:
        """Read and migrate the metadata file.

        Returns:
            Records keyed by trash name.

        Raises:
            TrashIOError: If the file exists but cannot be read.
        """
        return migrate_records(self.load_raw())

    def save(self, records: Mapping[str, TrashRecord]) -> None:
        """Overwrite the metadata file with the given records.

        Args:
            records: Records keyed by trash name.

        Raises:
            TrashIOError: If the file cannot be written.
        """
        data = {key: json.dumps(record.to_dict()) for key, record in records.items()}
        try:
            self._trash_dir.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(data), encoding="utf-8")
        except OSError as e:
            raise TrashIOError(f"Failed to write metadata {self.path}: {e}") from e

    @staticmethod
    def _decode(content: str) -> dict[str, object]:
        """Parse metadata file content.

        Raises:
            MetadataCorruptError: If the content is not a JSON object.
        """
        if not content.strip():
            return {}
        try:
            data: Any = json.loads(content)
        except json.JSONDecodeError as e:
            raise MetadataCorruptError(str(e)) from e
        if not isinstance(data, dict):
            raise MetadataCorruptError(f"expected a JSON object, got {type(data).__name__}")
        return {str(key): value for key, value in data.items()}
