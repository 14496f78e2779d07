"""Compressed archive codec for trash entries.

Files and non-empty directories are stored in the trash folder as gzip
compressed tar archives. Internal paths keep the item's own base name at
the top, so a directory "project" is archived as "project/...", and
extracting into the original parent directory rebuilds it in place.

Older trash folders may also contain bare gzip streams (".gz") holding a
single file's bytes; those can still be decompressed but are never written.
"""

import gzip
import logging
import os
import shutil
import tarfile
import zlib
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from tempfile import NamedTemporaryFile

from trashctl.trash.errors import TrashIOError

logger = logging.getLogger(__name__)

MAX_COMPRESSION_LEVEL = 9

# Errors that mean "the archive could not be read or written"
_ARCHIVE_ERRORS = (OSError, tarfile.TarError, EOFError, zlib.error)


@dataclass(frozen=True, slots=True)
class TreeNode:
    """One entry to append to a directory archive.

    Attributes:
        arcname: Path inside the archive, relative to the directory's parent.
        path: Absolute path on disk.
        is_directory: Whether the node is a real directory (not a symlink).
    """

    arcname: str
    path: Path
    is_directory: bool


def walk_tree(source_dir: Path) -> list[TreeNode]:
    """List a directory and all its descendants in archive order.

    The directory itself comes first, then each child; every directory is
    followed by its own contents. Siblings are visited in name order.
    Symlinks are reported as leaves and never followed.

    Args:
        source_dir: Directory to walk.

    Returns:
        TreeNodes for the directory and every file and sub-directory below it,
        including empty sub-directories.

    Raises:
        OSError: If a directory cannot be listed.
    """
    base = source_dir.parent
    nodes = [TreeNode(arcname=source_dir.name, path=source_dir, is_directory=True)]

    def visit(directory: Path) -> None:
        with os.scandir(directory) as it:
            children = sorted(it, key=lambda e: e.name)
        for child in children:
            path = Path(child.path)
            is_dir = child.is_dir(follow_symlinks=False)
            nodes.append(
                TreeNode(
                    arcname=path.relative_to(base).as_posix(),
                    path=path,
                    is_directory=is_dir,
                )
            )
            if is_dir:
                visit(path)

    visit(source_dir)
    return nodes


def _write_archive(
    target: Path,
    nodes: list[TreeNode],
    compression_level: int,
    on_entry: Callable[[str], None] | None = None,
) -> None:
    """Write nodes to a .tar.gz archive, replacing target only on success.

    The archive is built in a temporary file next to target and moved into
    place with os.replace(), so an existing target is left untouched and no
    partial archive remains when writing fails.

    Raises:
        TrashIOError: If any node cannot be read or the archive cannot be written.
    """
    tmp_path: Path | None = None
    try:
        with NamedTemporaryFile(
            dir=target.parent,
            prefix=f".{target.name}.",
            suffix=".part",
            delete=False,
        ) as f:
            tmp_path = Path(f.name)
            with tarfile.open(fileobj=f, mode="w:gz", compresslevel=compression_level) as tar:
                for node in nodes:
                    tar.add(str(node.path), arcname=node.arcname, recursive=False)
                    if on_entry is not None:
                        on_entry(node.arcname)
        os.replace(tmp_path, target)
    except _ARCHIVE_ERRORS as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise TrashIOError(f"Failed to create archive {target}: {e}") from e


def archive_file(
    source: Path,
    target: Path,
    arcname: str | None = None,
    compression_level: int = MAX_COMPRESSION_LEVEL,
) -> None:
    """Wrap a single file in a compressed archive.

    Args:
        source: File (or symlink) to archive.
        target: Archive path to create.
        arcname: Name stored inside the archive. Defaults to source's base name.
        compression_level: gzip level, 1-9.

    Raises:
        TrashIOError: If the source cannot be read or the target cannot be created.
    """
    node = TreeNode(arcname=arcname or source.name, path=source, is_directory=False)
    _write_archive(target, [node], compression_level)
    logger.debug("Archived file %s as %s", source, target.name)


def archive_directory(
    source_dir: Path,
    target: Path,
    compression_level: int = MAX_COMPRESSION_LEVEL,
    on_entry: Callable[[str], None] | None = None,
) -> int:
    """Archive a directory and its full contents.

    Args:
        source_dir: Directory to archive.
        target: Archive path to create.
        compression_level: gzip level, 1-9.
        on_entry: Called with each internal path after it is added.

    Returns:
        Number of entries written, including the directory itself.

    Raises:
        TrashIOError: If the tree cannot be walked or any entry cannot be read.
    """
    try:
        nodes = walk_tree(source_dir)
    except OSError as e:
        raise TrashIOError(f"Failed to read directory {source_dir}: {e}") from e

    _write_archive(target, nodes, compression_level, on_entry)
    logger.debug("Archived %d entries from %s as %s", len(nodes), source_dir, target.name)
    return len(nodes)


def _restore_filter(member: tarfile.TarInfo, dest_path: str) -> tarfile.TarInfo:
    """Apply the "tar" filter, keeping the member's permission bits.

    The filter rejects absolute and escaping paths but also clears group
    and other write bits. Those are put back; setuid, setgid and sticky
    bits stay cleared.
    """
    filtered = tarfile.tar_filter(member, dest_path)
    if member.mode is None or filtered.issym() or filtered.islnk():
        return filtered
    return filtered.replace(mode=member.mode & 0o777, deep=False)


def extract(archive: Path, destination: Path, is_directory: bool) -> None:
    """Unpack a trash archive to its restore location.

    Directory archives are unpacked in full into destination's parent;
    their internal paths recreate the tree. For file archives only the
    first member is used, and it is written to exactly destination, so an
    entry renamed in the trash still comes back under its original name.

    Permission bits are restored as archived, except setuid, setgid and
    sticky, which are dropped.

    Args:
        archive: The .tar.gz archive.
        destination: Path to restore to.
        is_directory: Whether the archive holds a directory tree.

    Raises:
        TrashIOError: If the archive is empty, unreadable, or cannot be written out.
    """
    try:
        with tarfile.open(archive, mode="r:gz") as tar:
            if is_directory:
                tar.extractall(path=destination.parent, filter=_restore_filter)
                return

            member = tar.next()
            if member is None:
                raise TrashIOError(f"Archive {archive} is empty")
            member.name = destination.name
            tar.extract(member, path=destination.parent, filter=_restore_filter)
    except _ARCHIVE_ERRORS as e:
        raise TrashIOError(f"Failed to extract {archive}: {e}") from e


def archive_root_directory(archive: Path) -> str | None:
    """Top-level directory name of a directory archive.

    Used to restore an entry that has no metadata record: a directory
    archive is unpacked under its own top-level name, whatever the entry
    is called in the trash.

    Returns:
        First path component of the first member if that member is a
        directory, otherwise None.

    Raises:
        TrashIOError: If the archive cannot be read.
    """
    try:
        with tarfile.open(archive, mode="r:gz") as tar:
            member = tar.next()
    except _ARCHIVE_ERRORS as e:
        raise TrashIOError(f"Failed to read {archive}: {e}") from e
    if member is None or not member.isdir():
        return None
    parts = [part for part in member.name.split("/") if part not in ("", ".")]
    if not parts or parts[0] == "..":
        return None
    return parts[0]


def decompress_legacy(source: Path, destination: Path) -> None:
    """Restore a file stored as a bare gzip stream.

    Args:
        source: The .gz file.
        destination: File to write the decompressed bytes to.

    Raises:
        TrashIOError: If decompression or writing fails.
    """
    try:
        with gzip.open(source, "rb") as src, open(destination, "wb") as dst:
            shutil.copyfileobj(src, dst)
    except _ARCHIVE_ERRORS as e:
        raise TrashIOError(f"Failed to decompress {source}: {e}") from e
