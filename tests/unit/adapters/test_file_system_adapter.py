"""
Tests pour FileSystemAdapter.

Ces tests utilisent tmp_path pour manipuler de vrais fichiers.
"""

import os
import sys
from pathlib import Path

import pytest

from mediashelf.adapters.file_system import FileSystemAdapter
from mediashelf.core.errors import RenameFailedError

from conftest import touch


class TestRename:
    """Tests du renommage dans le meme repertoire."""

    def test_rename_returns_new_path(self, file_system: FileSystemAdapter, tmp_path: Path) -> None:
        source = touch(tmp_path / "a.mkv")

        new_path = file_system.rename(str(source), "b.mkv")

        assert new_path == str(tmp_path / "b.mkv")
        assert Path(new_path).exists()
        assert not source.exists()

    def test_missing_source(self, file_system: FileSystemAdapter, tmp_path: Path) -> None:
        with pytest.raises(RenameFailedError) as exc_info:
            file_system.rename(str(tmp_path / "missing.mkv"), "b.mkv")

        assert exc_info.value.reason == "fichier introuvable"

    def test_existing_destination_not_overwritten(
        self, file_system: FileSystemAdapter, tmp_path: Path
    ) -> None:
        source = touch(tmp_path / "a.mkv", size=1)
        destination = touch(tmp_path / "b.mkv", size=2)

        with pytest.raises(RenameFailedError):
            file_system.rename(str(source), "b.mkv")

        assert source.exists()
        assert destination.stat().st_size == 2

    @pytest.mark.skipif(
        sys.platform == "win32" or (hasattr(os, "geteuid") and os.geteuid() == 0),
        reason="permissions POSIX non appliquees",
    )
    def test_permission_denied_wrapped(self, file_system: FileSystemAdapter, tmp_path: Path) -> None:
        locked = tmp_path / "locked"
        source = touch(locked / "a.mkv")
        locked.chmod(0o500)
        try:
            with pytest.raises(RenameFailedError) as exc_info:
                file_system.rename(str(source), "b.mkv")
        finally:
            locked.chmod(0o700)

        assert isinstance(exc_info.value.__cause__, OSError)


class TestQueries:
    """Tests des operations de lecture."""

    def test_exists_and_is_dir(self, file_system: FileSystemAdapter, tmp_path: Path) -> None:
        file_path = touch(tmp_path / "a.mkv")

        assert file_system.exists(str(file_path))
        assert not file_system.is_dir(str(file_path))
        assert file_system.is_dir(str(tmp_path))
        assert not file_system.exists(str(tmp_path / "missing"))

    def test_stat_size(self, file_system: FileSystemAdapter, tmp_path: Path) -> None:
        file_path = touch(tmp_path / "a.mkv", size=123)

        assert file_system.stat(str(file_path)).st_size == 123

    def test_walk_reports_errors(self, file_system: FileSystemAdapter, tmp_path: Path) -> None:
        errors: list[OSError] = []

        assert list(file_system.walk(str(tmp_path / "missing"), onerror=errors.append)) == []
        assert len(errors) == 1
