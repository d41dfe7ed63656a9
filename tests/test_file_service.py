"""
Tests for file service: critical for safe file deletion.
Every failure must come back as a DeletionResult, never as an exception.
"""
import os
import sys
import pytest
from unittest import mock

from dupfinder.services.file_service import FileService


class TestDeleteFile:
    """Test permanent deletion with pre-flight checks."""

    def test_deletes_regular_file(self, tmp_path):
        target = tmp_path / "victim.txt"
        target.write_bytes(b"12345")

        result = FileService.delete_file(str(target))

        assert result.success
        assert result.size_freed == 5
        assert result.error is None
        assert not target.exists(), "File must be removed from disk"

    def test_missing_file_reports_access_error(self, tmp_path):
        missing = tmp_path / "does_not_exist.txt"

        result = FileService.delete_file(str(missing))

        assert not result.success
        assert result.size_freed == 0
        assert result.error.startswith("cannot access file")

    def test_directory_is_never_deleted(self, tmp_path):
        """A path that turned into a directory must be refused, not removed."""
        folder = tmp_path / "folder"
        folder.mkdir()

        result = FileService.delete_file(str(folder))

        assert not result.success
        assert result.error == "not a regular file"
        assert folder.exists()

    def test_removal_failure_is_reported(self, tmp_path):
        target = tmp_path / "locked.txt"
        target.write_bytes(b"data")

        with mock.patch("dupfinder.services.file_service.os.remove", side_effect=PermissionError("denied")):
            result = FileService.delete_file(str(target))

        assert not result.success
        assert result.error.startswith("deletion failed")
        assert target.exists()

    def test_preserves_other_files_in_directory(self, tmp_path):
        """Deleting one file must not affect siblings in same directory."""
        keep = tmp_path / "keep_me.txt"
        drop = tmp_path / "delete_me.txt"
        keep.write_text("keep")
        drop.write_text("delete")

        FileService.delete_file(str(drop))

        assert keep.exists()
        assert not drop.exists()

    def test_handles_files_with_unicode_in_name(self, tmp_path):
        if sys.platform == "win32":
            pytest.skip("Unicode filename handling may be flaky on Windows")

        unicode_file = tmp_path / "фото.jpg"
        unicode_file.write_text("content")

        assert FileService.delete_file(str(unicode_file)).success
        assert not unicode_file.exists()


class TestTrashFile:
    """Test moving files to the system trash via send2trash."""

    def test_uses_send2trash(self, tmp_path):
        target = tmp_path / "to_trash.txt"
        target.write_bytes(b"abc")

        with mock.patch("dupfinder.services.file_service.send2trash") as mock_trash:
            result = FileService.trash_file(str(target))

        mock_trash.assert_called_once_with(str(target))
        assert result.success
        assert result.size_freed == 3

    def test_trash_failure_is_reported(self, tmp_path):
        target = tmp_path / "stuck.txt"
        target.write_bytes(b"abc")

        with mock.patch("dupfinder.services.file_service.send2trash", side_effect=OSError("no trash")):
            result = FileService.trash_file(str(target))

        assert not result.success
        assert result.error == "failed to move to trash: no trash"

    def test_missing_file_skips_send2trash(self, tmp_path):
        with mock.patch("dupfinder.services.file_service.send2trash") as mock_trash:
            result = FileService.trash_file(str(tmp_path / "gone.txt"))

        mock_trash.assert_not_called()
        assert not result.success


class TestGetDeleter:

    def test_selects_permanent_or_trash(self):
        assert FileService.get_deleter(False) == FileService.delete_file
        assert FileService.get_deleter(True) == FileService.trash_file

    def test_symlink_to_file_is_refused_when_dangling(self, tmp_path):
        if not hasattr(os, "symlink") or sys.platform == "win32":
            pytest.skip("symlinks not available")
        link = tmp_path / "dangling"
        os.symlink(str(tmp_path / "nowhere"), str(link))

        result = FileService.get_deleter(False)(str(link))

        assert not result.success
        assert result.error.startswith("cannot access file")
