"""Trash engine.

Orchestrates moving items into the trash folder, restoring them, listing
and emptying, using the naming resolver, the archive codec and the
metadata store.

Storage strategy:
- files: single-entry .tar.gz archive
- empty directories: moved into the trash folder as-is
- non-empty directories: .tar.gz archive of the whole tree

The original item is only removed after its copy in the trash folder has
been completely written.
"""

import errno
import logging
import os
import shutil
from collections.abc import Callable, Iterable, Sequence
from pathlib import Path

from trashctl.trash.archive import (
    MAX_COMPRESSION_LEVEL,
    archive_directory,
    archive_file,
    archive_root_directory,
    decompress_legacy,
    extract,
)
from trashctl.trash.errors import (
    TrashConflictError,
    TrashError,
    TrashIOError,
    TrashNotFoundError,
    TrashSelectionError,
)
from trashctl.trash.metadata import METADATA_FILENAME, MetadataStore
from trashctl.trash.models import EntryKind, TrashActionResult, TrashEntry, TrashRecord
from trashctl.trash.naming import (
    ARCHIVE_SUFFIX,
    display_name,
    entry_kind,
    find_record,
    strip_archive_suffix,
    unique_name,
)

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str], None]


def _move_raw(source: Path, destination: Path) -> None:
    """Rename a path, falling back to copy-and-delete across filesystems.

    Raises:
        OSError: If the move fails.
    """
    try:
        os.replace(source, destination)
    except OSError as e:
        if e.errno != errno.EXDEV:
            raise
        if destination.is_dir() and not destination.is_symlink():
            shutil.rmtree(destination)
        shutil.move(str(source), str(destination))


def _is_empty_dir(path: Path) -> bool:
    with os.scandir(path) as it:
        return next(it, None) is None


class TrashEngine:
    """Moves items to and from a trash folder.

    Each public operation loads the metadata store once and saves it once.
    Operations are synchronous and not safe against concurrent processes
    sharing the same trash folder.

    Attributes:
        _trash_dir: Trash folder this engine operates on.
        _compression_level: gzip level used for new archives.
        _cwd: Directory for restoring entries without metadata (None = current).
    """

    def __init__(
        self,
        trash_dir: Path,
        compression_level: int = MAX_COMPRESSION_LEVEL,
        cwd: Path | None = None,
    ) -> None:
        """Initialize the TrashEngine.

        Args:
            trash_dir: Trash folder. Created on the first move if missing.
            compression_level: gzip level for new archives, 1-9.
            cwd: Fallback restore directory for entries without metadata.
                Defaults to the process working directory at restore time.
        """
        self._trash_dir = Path(os.path.abspath(trash_dir))
        self._compression_level = compression_level
        self._cwd = cwd
        self._store = MetadataStore(self._trash_dir)

    @property
    def trash_dir(self) -> Path:
        """Trash folder this engine operates on."""
        return self._trash_dir

    @property
    def store(self) -> MetadataStore:
        """Metadata store for the trash folder."""
        return self._store

    # ------------------------------------------------------------------
    # move
    # ------------------------------------------------------------------

    def move(
        self,
        path: str | os.PathLike[str],
        on_entry: ProgressCallback | None = None,
    ) -> TrashActionResult:
        """Move a file or directory into the trash.

        Args:
            path: Item to trash. Relative paths are resolved against the
                working directory; symlinks are trashed as links.
            on_entry: Progress hook, called per archived entry of a directory.

        Returns:
            Successful TrashActionResult naming the new trash entry.

        Raises:
            TrashNotFoundError: If path does not exist.
            TrashError: If path is the trash folder or contains it.
            TrashIOError: If archiving, moving or saving metadata fails.
        """
        source = Path(os.path.abspath(os.fspath(path)))
        if not os.path.lexists(source):
            raise TrashNotFoundError(f"{path} not found")
        if source == self._trash_dir or source in self._trash_dir.parents:
            raise TrashError(f"Refusing to move {source}: it contains the trash folder")

        try:
            self._trash_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise TrashIOError(f"Cannot create trash folder {self._trash_dir}: {e}") from e

        records = self._store.load()
        original = str(source)
        is_directory = source.is_dir() and not source.is_symlink()

        try:
            empty_dir = is_directory and _is_empty_dir(source)
        except OSError as e:
            raise TrashIOError(f"Cannot read directory {source}: {e}") from e

        if empty_dir:
            name = unique_name(self._trash_dir, source.name, original, True, records)
            try:
                _move_raw(source, self._trash_dir / name)
            except OSError as e:
                raise TrashIOError(f"Failed to move {source} to trash: {e}") from e
        else:
            candidate = source.name
            if not candidate.endswith(ARCHIVE_SUFFIX):
                candidate += ARCHIVE_SUFFIX
            name = unique_name(self._trash_dir, candidate, original, is_directory, records)
            target = self._trash_dir / name

            if is_directory:
                archive_directory(source, target, self._compression_level, on_entry)
            else:
                archive_file(source, target, source.name, self._compression_level)

            try:
                if is_directory:
                    shutil.rmtree(source)
                else:
                    source.unlink()
            except OSError as e:
                # The archive is complete, so keep it restorable
                records[name] = TrashRecord(path=original, is_directory=is_directory)
                self._store.save(records)
                raise TrashIOError(
                    f"{source} was archived as {name} but could not be removed: {e}"
                ) from e

        records[name] = TrashRecord(path=original, is_directory=is_directory)
        self._store.save(records)

        logger.info("Moved %s to trash as %s", original, name)
        return TrashActionResult(
            path=original,
            success=True,
            trash_name=name,
            is_directory=is_directory,
        )

    def move_many(
        self,
        paths: Iterable[str | os.PathLike[str]],
        on_entry: ProgressCallback | None = None,
    ) -> list[TrashActionResult]:
        """Move several items into the trash.

        Failures are isolated per item: a missing path or an I/O error is
        reported in that item's result and the remaining items are still
        processed.

        Args:
            paths: Items to trash.
            on_entry: Progress hook passed to move().

        Returns:
            List of TrashActionResult, one per input path.
        """
        results: list[TrashActionResult] = []

        for path in paths:
            try:
                results.append(self.move(path, on_entry))
            except TrashError as e:
                logger.warning("Could not trash %s: %s", path, e)
                results.append(TrashActionResult(path=os.fspath(path), success=False, error=str(e)))

        return results

    # ------------------------------------------------------------------
    # restore
    # ------------------------------------------------------------------

    def restore(self, trash_name: str, overwrite: bool = False) -> TrashActionResult:
        """Restore a trash entry to its original location.

        Without a metadata record the entry is restored into the working
        directory under its name minus the archive suffix, or for a
        directory archive under the archive's top-level directory name.

        Args:
            trash_name: Name of the entry under the trash folder.
            overwrite: Replace (files) or merge into (directories) an
                existing item at the restore location.

        Returns:
            Successful TrashActionResult with the restored path.

        Raises:
            TrashNotFoundError: If the entry does not exist, or its on-disk
                type contradicts its metadata.
            TrashConflictError: If the restore location exists and overwrite is False.
            TrashIOError: If extraction, copying or saving metadata fails.
        """
        if trash_name in ("", ".", "..", METADATA_FILENAME) or os.sep in trash_name:
            raise TrashNotFoundError(f"{trash_name!r} is not a trash entry")

        trash_path = self._trash_dir / trash_name
        if not os.path.lexists(trash_path):
            raise TrashNotFoundError(f"{trash_name} not found in trash")

        records = self._store.load()
        on_disk_dir = trash_path.is_dir()
        kind = entry_kind(trash_name, on_disk_dir)

        found = find_record(records, trash_name, set(self._entry_names()))
        if found is not None:
            key, record = found
            destination = Path(record.path)
            is_directory = record.is_directory
        else:
            key = None
            root = archive_root_directory(trash_path) if kind is EntryKind.ARCHIVE else None
            # A directory archive unpacks under its own top-level name
            destination = self._fallback_dir() / (root or strip_archive_suffix(trash_name))
            is_directory = on_disk_dir or root is not None
            logger.debug("No metadata for %s, restoring to %s", trash_name, destination)

        file_backed = trash_path.is_file()
        if not file_backed and not (on_disk_dir and is_directory):
            raise TrashNotFoundError(
                f"Failed to restore: {trash_name} not found in trash or type mismatch"
            )

        if os.path.lexists(destination) and not overwrite:
            raise TrashConflictError(f"{destination} already exists")

        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise TrashIOError(f"Cannot create {destination.parent}: {e}") from e

        if file_backed:
            self._restore_file_backed(trash_path, kind, destination, is_directory)
        else:
            try:
                if destination.is_dir():
                    # Raw entries are empty directories: nothing to merge
                    trash_path.rmdir()
                else:
                    _move_raw(trash_path, destination)
            except OSError as e:
                raise TrashIOError(f"Failed to restore {trash_name}: {e}") from e

        if key is not None:
            records.pop(key, None)
        records.pop(trash_name, None)
        self._store.save(records)

        logger.info("Restored %s to %s", trash_name, destination)
        return TrashActionResult(
            path=str(destination),
            success=True,
            trash_name=trash_name,
            is_directory=is_directory,
        )

    def _restore_file_backed(
        self, trash_path: Path, kind: EntryKind, destination: Path, is_directory: bool
    ) -> None:
        """Unpack an archive, legacy stream or plain file, then drop it from the trash."""
        if kind is EntryKind.ARCHIVE:
            extract(trash_path, destination, is_directory)
        elif kind is EntryKind.LEGACY:
            decompress_legacy(trash_path, destination)
        else:
            try:
                shutil.copy2(trash_path, destination)
            except OSError as e:
                raise TrashIOError(f"Failed to copy {trash_path.name}: {e}") from e

        try:
            trash_path.unlink()
        except OSError as e:
            raise TrashIOError(
                f"Restored {destination} but could not remove {trash_path}: {e}"
            ) from e

    def _fallback_dir(self) -> Path:
        return self._cwd if self._cwd is not None else Path.cwd().resolve()

    # ------------------------------------------------------------------
    # list / empty
    # ------------------------------------------------------------------

    def _entry_names(self) -> list[str]:
        """Names under the trash folder, sorted, without the metadata file."""
        try:
            names = os.listdir(self._trash_dir)
        except FileNotFoundError:
            return []
        except OSError as e:
            raise TrashIOError(f"Cannot list trash folder {self._trash_dir}: {e}") from e
        return sorted(name for name in names if name != METADATA_FILENAME)

    def list_entries(self) -> list[TrashEntry]:
        """List trash entries with their original locations.

        Never modifies the trash folder or the metadata file.

        Returns:
            TrashEntry per item, sorted by trash name and numbered from 1.
        """
        names = self._entry_names()
        if not names:
            return []

        records = self._store.load()
        taken = set(names)
        entries: list[TrashEntry] = []

        for index, name in enumerate(names, start=1):
            found = find_record(records, name, taken)
            if found is not None:
                record = found[1]
                is_directory = record.is_directory
                original_path: str | None = record.path
            else:
                is_directory = (self._trash_dir / name).is_dir()
                original_path = None

            entries.append(
                TrashEntry(
                    index=index,
                    trash_name=name,
                    display_name=display_name(name, is_directory),
                    is_directory=is_directory,
                    original_path=original_path,
                )
            )

        return entries

    def empty(self, on_entry: ProgressCallback | None = None) -> int:
        """Permanently delete everything in the trash folder.

        Entries are removed one at a time, the metadata file included;
        the trash folder itself is kept.

        Args:
            on_entry: Called with each name after it is deleted.

        Returns:
            Number of entries removed (including the metadata file).

        Raises:
            TrashIOError: If an entry cannot be deleted. Entries removed
                before the failure stay removed.
        """
        try:
            with os.scandir(self._trash_dir) as it:
                items = list(it)
        except FileNotFoundError:
            return 0
        except OSError as e:
            raise TrashIOError(f"Cannot list trash folder {self._trash_dir}: {e}") from e

        removed = 0
        for item in items:
            try:
                if item.is_dir(follow_symlinks=False):
                    shutil.rmtree(item.path)
                else:
                    os.unlink(item.path)
            except OSError as e:
                raise TrashIOError(f"Failed to delete {item.name}: {e}") from e
            removed += 1
            if on_entry is not None:
                on_entry(item.name)

        logger.info("Emptied trash folder %s (%d entries)", self._trash_dir, removed)
        return removed


def select_entry(entries: Sequence[TrashEntry], choice: str) -> TrashEntry:
    """Pick an entry by its 1-based listing index.

    Args:
        entries: Entries as returned by TrashEngine.list_entries().
        choice: User input.

    Returns:
        The selected entry.

    Raises:
        TrashSelectionError: If choice is not a number or out of range.
    """
    try:
        index = int(choice.strip())
    except ValueError:
        raise TrashSelectionError("Invalid input.") from None

    if not 1 <= index <= len(entries):
        raise TrashSelectionError("Invalid choice.")
    return entries[index - 1]
