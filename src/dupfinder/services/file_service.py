"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/file_service.py
File removal for the interactive session.
Every routine failure (missing file, not a regular file, permission denied) is reported
as a failed DeletionResult instead of an exception.
"""
import logging
import os
import stat
from send2trash import send2trash

from dupfinder.core.interfaces import Deleter
from dupfinder.core.models import DeletionResult

logger = logging.getLogger(__name__)


class FileService:
    """
    Pre-flight checked file removal: permanent delete or move to the system trash.
    """

    @staticmethod
    def delete_file(file_path: str) -> DeletionResult:
        """Permanently removes a regular file."""
        return FileService._remove(file_path, os.remove, "deletion failed")

    @staticmethod
    def trash_file(file_path: str) -> DeletionResult:
        """Moves a regular file to the system trash."""
        return FileService._remove(file_path, send2trash, "failed to move to trash")

    @staticmethod
    def get_deleter(use_trash: bool = False) -> Deleter:
        return FileService.trash_file if use_trash else FileService.delete_file

    @staticmethod
    def _remove(file_path: str, remove, failure: str) -> DeletionResult:
        result = DeletionResult(path=file_path)

        try:
            info = os.stat(file_path)
        except OSError as e:
            result.error = f"cannot access file: {e}"
            return result

        if not stat.S_ISREG(info.st_mode):
            result.error = "not a regular file"
            return result

        try:
            remove(file_path)
        except Exception as e:
            # send2trash raises its own TrashPermissionError besides OSError
            result.error = f"{failure}: {e}"
            return result

        logger.info(f"Deleted {file_path} ({info.st_size} bytes)")
        result.success = True
        result.size_freed = info.st_size
        return result
