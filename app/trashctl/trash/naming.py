"""Trash entry naming.

Every item in the trash folder needs a name that is unique at the moment
it is written. Archive suffixes (.tar.gz and the legacy .gz) are treated
as a single compound extension: they are stripped before numbering and
re-attached afterwards, so a second "report.txt" becomes
"report(1).txt.tar.gz" rather than "report.txt(1).gz".
"""

import logging
import os
from collections.abc import Container, Mapping
from pathlib import Path

from trashctl.trash.metadata import METADATA_FILENAME
from trashctl.trash.models import EntryKind, TrashRecord

logger = logging.getLogger(__name__)

ARCHIVE_SUFFIX = ".tar.gz"
LEGACY_SUFFIX = ".gz"

# Longest first: ".tar.gz" must win over ".gz"
COMPOUND_SUFFIXES = (ARCHIVE_SUFFIX, LEGACY_SUFFIX)


def split_archive_suffix(name: str) -> tuple[str, str]:
    """Split a trash name into its base and archive suffix.

    Args:
        name: File name, e.g. "notes.txt.tar.gz".

    Returns:
        Tuple of (base, suffix), e.g. ("notes.txt", ".tar.gz").
        The suffix is "" when the name carries no archive suffix.
    """
    for suffix in COMPOUND_SUFFIXES:
        if name.endswith(suffix) and len(name) > len(suffix):
            return name[: -len(suffix)], suffix
    return name, ""


def strip_archive_suffix(name: str) -> str:
    """Return the name without its .tar.gz or .gz suffix."""
    return split_archive_suffix(name)[0]


def display_name(trash_name: str, is_directory: bool) -> str:
    """Format a trash name for listings.

    Args:
        trash_name: Name of the entry under the trash folder.
        is_directory: Whether the entry holds a directory.

    Returns:
        Name without archive suffix, with a trailing "/" for directories.
    """
    base = strip_archive_suffix(trash_name)
    return f"{base}/" if is_directory else base


def entry_kind(trash_name: str, on_disk_is_dir: bool) -> EntryKind:
    """Classify how an entry is stored, from its name and on-disk type."""
    if on_disk_is_dir:
        return EntryKind.RAW
    if trash_name.endswith(ARCHIVE_SUFFIX):
        return EntryKind.ARCHIVE
    if trash_name.endswith(LEGACY_SUFFIX):
        return EntryKind.LEGACY
    return EntryKind.RAW


def _split_extension(base: str) -> tuple[str, str]:
    """Split off a single dot-extension, keeping dotfiles intact.

    ".bashrc" has no extension; "archive.v2.txt" has extension ".txt".
    """
    idx = base.rfind(".")
    if idx <= 0 or idx == len(base) - 1:
        return base, ""
    return base[:idx], base[idx:]


def numbered_name(candidate_name: str, counter: int) -> str:
    """Build the Nth numbered variant of a candidate name.

    Args:
        candidate_name: Name as first proposed, e.g. "report.txt.tar.gz".
        counter: Variant number, starting at 1.

    Returns:
        Name of the form stem(N)[.ext][compound suffix],
        e.g. "report(1).txt.tar.gz".
    """
    base, suffix = split_archive_suffix(candidate_name)
    stem, ext = _split_extension(base)
    return f"{stem}({counter}){ext}{suffix}"


def unique_name(
    trash_root: Path,
    candidate_name: str,
    original_path: str,
    is_directory: bool,
    existing: Mapping[str, TrashRecord],
) -> str:
    """Pick a trash name that does not clash with current trash contents.

    A name clashes when an entry of that name exists under the trash
    folder, or when a metadata record of that name describes a different
    item. A record with the same original path and type is the same item
    being trashed again, and its name is reused.

    Args:
        trash_root: Trash folder.
        candidate_name: Preferred name, including any archive suffix.
        original_path: Absolute path of the item being trashed.
        is_directory: Whether the item is a directory.
        existing: Current metadata records keyed by trash name.

    Returns:
        The first free (or same-item) name among candidate_name and its
        numbered variants. Never the metadata file name.
    """

    def is_free(name: str) -> bool:
        if name == METADATA_FILENAME:
            return False
        record = existing.get(name)
        if record is not None:
            return record.is_directory == is_directory and record.path == original_path
        return not os.path.lexists(trash_root / name)

    name = candidate_name
    counter = 1
    while not is_free(name):
        name = numbered_name(candidate_name, counter)
        counter += 1

    if name != candidate_name:
        logger.debug("Trash name %s is taken, using %s", candidate_name, name)
    return name


def lookup_keys(trash_name: str) -> list[str]:
    """Metadata keys under which a trash entry's record may be stored.

    Older releases were inconsistent about whether keys carried the
    archive suffix, so the exact name is tried first, then the name
    without .tar.gz / .gz, then the stripped name with each suffix added.

    Args:
        trash_name: Name of the entry under the trash folder.

    Returns:
        Candidate keys, most specific first, without duplicates.
    """
    without_archive = trash_name.removesuffix(ARCHIVE_SUFFIX)
    without_legacy = trash_name.removesuffix(LEGACY_SUFFIX)
    candidates = [
        trash_name,
        without_archive,
        without_legacy,
        without_archive + ARCHIVE_SUFFIX,
        without_legacy + LEGACY_SUFFIX,
    ]
    return list(dict.fromkeys(candidates))


def find_record(
    records: Mapping[str, TrashRecord],
    trash_name: str,
    entries: Container[str] = (),
) -> tuple[str, TrashRecord] | None:
    """Find the metadata record for a trash entry.

    Args:
        records: Metadata records keyed by trash name.
        trash_name: Name of the entry under the trash folder.
        entries: Names currently in the trash folder. A variant key that
            names another entry is that entry's own record and is skipped.

    Returns:
        Tuple of (matching key, record), or None if no variant matches.
    """
    for key in lookup_keys(trash_name):
        if key != trash_name and key in entries:
            continue
        record = records.get(key)
        if record is not None:
            return key, record
    return None
