"""Trash domain models.

This module defines the metadata record stored for every trashed item,
the listing view of a trash entry, and per-item operation results.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class EntryKind(str, Enum):
    """How an item is stored in the trash folder.

    Attributes:
        ARCHIVE: A .tar.gz container holding the item.
        LEGACY: A single gzip stream without a container (.gz, read only).
        RAW: The item itself, moved unmodified (empty directories).
    """

    ARCHIVE = "archive"
    LEGACY = "legacy"
    RAW = "raw"


@dataclass(frozen=True, slots=True)
class TrashRecord:
    """Metadata stored for one trash entry.

    Attributes:
        path: Absolute path the item was moved from.
        is_directory: Whether the original item was a directory.
    """

    path: str
    is_directory: bool = False

    def __post_init__(self) -> None:
        """Validate record data after initialization."""
        if not self.path:
            msg = "Original path cannot be empty"
            raise ValueError(msg)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for JSON storage.

        Returns:
            Dictionary with "path" and "is_directory" keys.
        """
        return {"path": self.path, "is_directory": self.is_directory}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TrashRecord":
        """Deserialize from dictionary.

        Older releases wrote the type bit as "is_dir"; both spellings
        are accepted.

        Args:
            data: Dictionary containing record data.

        Returns:
            TrashRecord instance.

        Raises:
            KeyError: If "path" is missing.
            ValueError: If the fields have the wrong types.
        """
        path = data["path"]
        is_directory = data.get("is_directory", data.get("is_dir", False))
        if not isinstance(path, str) or not isinstance(is_directory, bool):
            msg = f"Malformed trash record: {data!r}"
            raise ValueError(msg)
        return cls(path=path, is_directory=is_directory)


@dataclass(frozen=True, slots=True)
class TrashEntry:
    """An item currently in the trash folder, as shown to the user.

    Attributes:
        index: Stable 1-based position in the listing.
        trash_name: File name under the trash folder.
        display_name: Name without archive suffix, "/" appended for directories.
        is_directory: Whether the trashed item is a directory.
        original_path: Where the item came from, None if unknown.
    """

    index: int
    trash_name: str
    display_name: str
    is_directory: bool
    original_path: str | None = None

    @property
    def location(self) -> str:
        """Original location for display ("Unknown" without metadata)."""
        return self.original_path or "Unknown"

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for JSON output."""
        return {
            "index": self.index,
            "trash_name": self.trash_name,
            "display_name": self.display_name,
            "is_directory": self.is_directory,
            "original_path": self.original_path,
        }


@dataclass(frozen=True, slots=True)
class TrashActionResult:
    """Result of moving one item to, or restoring one item from, the trash.

    Attributes:
        path: Source path (move) or restored path (restore).
        success: Whether the operation completed successfully.
        trash_name: Name of the entry in the trash folder, if known.
        is_directory: Whether the item is a directory.
        error: Error message if the operation failed, None otherwise.
    """

    path: str
    success: bool
    trash_name: str | None = None
    is_directory: bool = False
    error: str | None = None

    @property
    def failed(self) -> bool:
        """Check if the operation failed."""
        return not self.success
