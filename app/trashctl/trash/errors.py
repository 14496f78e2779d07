"""Exceptions raised by the trash engine."""


class TrashError(Exception):
    """Base exception for trash operations."""


class TrashNotFoundError(TrashError):
    """Raised when a source path or trash entry does not exist.

    Also raised when a trash entry's on-disk type contradicts its
    metadata record, since there is then nothing restorable under that name.
    """


class TrashIOError(TrashError):
    """Raised when a filesystem or compression step fails."""


class MetadataCorruptError(TrashError):
    """Raised when the metadata file cannot be parsed.

    Never escapes the metadata store: a corrupt file is read as empty.
    """


class TrashConflictError(TrashError):
    """Raised when a restore target already exists."""


class TrashSelectionError(TrashError):
    """Raised when an interactive selection is not a valid entry index."""
