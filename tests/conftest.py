"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

import os
from collections.abc import Callable
from pathlib import Path

import pytest
from trashctl.trash.engine import TrashEngine

# Wide consoles keep Rich from wrapping long tmp paths in CLI output
os.environ["COLUMNS"] = "200"


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Point XDG directories at a temporary location for every test."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg-config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "xdg-data"))
    monkeypatch.setenv("COLUMNS", "200")
    monkeypatch.delenv("TRASHCTL_TRASH_DIR", raising=False)


@pytest.fixture
def trash_dir(tmp_path: Path) -> Path:
    """Trash folder location (not created)."""
    return tmp_path / "trash"


@pytest.fixture
def home(tmp_path: Path) -> Path:
    """Directory holding the items that tests move to the trash."""
    path = tmp_path / "home"
    path.mkdir()
    return path


@pytest.fixture
def fallback_cwd(tmp_path: Path) -> Path:
    """Directory used when restoring entries without metadata."""
    return tmp_path / "cwd"


@pytest.fixture
def engine(trash_dir: Path, fallback_cwd: Path) -> TrashEngine:
    """TrashEngine bound to a temporary trash folder."""
    return TrashEngine(trash_dir, cwd=fallback_cwd)


@pytest.fixture
def project_tree(home: Path) -> Path:
    """A directory with nested files and an empty sub-directory."""
    root = home / "project"
    (root / "src" / "pkg").mkdir(parents=True)
    (root / "empty").mkdir()
    (root / "README.md").write_text("# project\n")
    (root / "src" / "main.py").write_text("print('hi')\n")
    (root / "src" / "pkg" / "data.bin").write_bytes(bytes(range(256)) * 4)
    return root


def _snapshot_tree(root: Path) -> dict[str, bytes | None]:
    """Map each path below root to its bytes (None for directories)."""
    result: dict[str, bytes | None] = {}
    for path in sorted(root.rglob("*")):
        rel = path.relative_to(root).as_posix()
        result[rel] = None if path.is_dir() else path.read_bytes()
    return result


@pytest.fixture
def snapshot() -> Callable[[Path], dict[str, bytes | None]]:
    """Function capturing a directory tree's structure and file contents."""
    return _snapshot_tree
