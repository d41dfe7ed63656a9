"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/scanner.py
Implements directory scanning for cross-directory comparison.
Features:
- Walks each root with os.walk, in sorted order for reproducible output
- Applies minimum size, extension and depth filters
- Scans several roots concurrently and returns records keyed by root
"""

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Dict, List, Optional

from dupfinder.core.interfaces import FileScanner
from dupfinder.core.models import FileRecord

logger = logging.getLogger(__name__)


class FileScannerImpl(FileScanner):
    """
    Scans root directories and filters files based on size, extension and depth.

    Attributes:
        directories: Root directories to scan
        min_size: Minimum file size in bytes
        extensions: List of allowed file extensions (e.g., [".zip", ".mp4"]); empty = all
        recursive: Descend into subdirectories
        max_depth: Maximum subdirectory depth below a root (-1 = unlimited, 0 = root only)
    """

    def __init__(
        self,
        directories: List[str],
        min_size: int = 0,
        extensions: Optional[List[str]] = None,
        recursive: bool = True,
        max_depth: int = -1
    ):
        self.directories = list(directories)
        self.min_size = min_size
        self.extensions = [ext.lower() for ext in extensions] if extensions else []
        self.recursive = recursive
        self.max_depth = max_depth if recursive else 0

    def scan_all(self) -> Dict[str, List[FileRecord]]:
        """
        Scans every root concurrently.
        Returns records keyed by root, in the order the roots were given.
        """
        if not self.directories:
            return {}

        with ThreadPoolExecutor(max_workers=len(self.directories)) as pool:
            results = list(pool.map(self.scan, self.directories))

        return dict(zip(self.directories, results))

    def scan(self, directory: str) -> List[FileRecord]:
        """
        Scans one root directory.
        Raises RuntimeError if the root is missing or not a directory.
        """
        root_path = Path(directory)
        if not root_path.exists():
            error_msg = f"Directory does not exist: {directory}"
            logger.error(error_msg)
            raise RuntimeError(error_msg)
        if not root_path.is_dir():
            error_msg = f"Not a directory: {directory}"
            logger.error(error_msg)
            raise RuntimeError(error_msg)

        logger.debug(f"Scanning directory: {directory}")
        root_abs = root_path.resolve()
        found_files = []

        def on_error(error: OSError) -> None:
            logger.warning(f"Error accessing path {error.filename}: {error}")

        for root, dirs, files in os.walk(str(root_abs), onerror=on_error):
            depth = self._depth(root_abs, Path(root))
            if self.max_depth >= 0 and depth >= self.max_depth:
                dirs[:] = []
            else:
                dirs.sort()

            for filename in sorted(files):
                record = self._process_file(Path(root) / filename, directory)
                if record:
                    found_files.append(record)

        logger.debug(f"Scan of {directory} completed. Found {len(found_files)} matching files.")
        return found_files

    @staticmethod
    def _depth(root: Path, current: Path) -> int:
        """Number of directory levels between the scan root and current."""
        relative = current.relative_to(root)
        return len(relative.parts)

    def _process_file(self, path: Path, directory: str) -> Optional[FileRecord]:
        """
        Process an individual file path and return a FileRecord if it passes all filters.
        """
        try:
            if path.is_symlink():
                logger.debug(f"Skipping symbolic link: {path}")
                return None
            stat_result = path.stat()
        except OSError as e:
            logger.debug(f"Could not stat {path}: {e}")
            return None

        if stat_result.st_size < self.min_size:
            logger.debug(f"Skipping {path} (size {stat_result.st_size} bytes below minimum)")
            return None

        if not self._extension_passes(path):
            logger.debug(f"Skipping {path} (extension not allowed)")
            return None

        return FileRecord(
            path=str(path),
            directory=directory,
            size=stat_result.st_size,
            mod_time=stat_result.st_mtime,
        )

    def _extension_passes(self, path: Path) -> bool:
        """
        Check if file matches any of the allowed extensions.
        """
        if not self.extensions:
            return True
        return path.suffix.lower() in self.extensions
