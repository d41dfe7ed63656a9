"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/models.py
Data models for cross-directory duplicate detection and interactive resolution.
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from dupfinder.utils.convert_utils import ConvertUtils


# =============================
# Enums
# =============================

class HashStatus(Enum):
    """
    Content verification state of a name match or duplicate set.
    """
    NOT_CHECKED = "not-checked"
    IDENTICAL = "identical"
    DIFFERENT = "different"

    @property
    def display_name(self) -> str:
        """Human-readable name for console output."""
        mapping = {
            HashStatus.NOT_CHECKED: "Not checked",
            HashStatus.IDENTICAL: "Identical",
            HashStatus.DIFFERENT: "Different",
        }
        return mapping.get(self, self.value)

    def __repr__(self) -> str:
        return self.value


class ActionType(Enum):
    """Decision a user can take for one duplicate set."""
    SKIP = "skip"
    DELETE = "delete"
    BATCH_BY_DIRECTORY = "batch-delete-by-directory"
    COMPUTE_HASH = "compute-hash"
    FINISH = "finish"
    QUIT = "quit"

    def __repr__(self) -> str:
        return self.value


# ======================
#  Core Data Models
# ======================

@dataclass
class FileRecord:
    """
    Represents a single scanned file under one of the compared root directories.
    The fingerprint stays None until the hasher fills it in, and is never recomputed afterwards.
    """
    path: str
    directory: str
    size: int  # in bytes
    mod_time: float = 0.0
    fingerprint: Optional[str] = None

    def __post_init__(self):
        if self.size < 0:
            raise ValueError(f"File size cannot be negative: {self.path}")

    @property
    def name(self) -> str:
        """Last path component, used as the matching key across directories."""
        return os.path.basename(self.path)

    @property
    def has_fingerprint(self) -> bool:
        return bool(self.fingerprint)

    def __repr__(self):
        return f"<FileRecord path={self.path}, size={self.size}>"


@dataclass
class FileMatch:
    """
    One filename present in both compared directories.
    """
    filename: str
    first: FileRecord
    second: FileRecord
    status: HashStatus = HashStatus.NOT_CHECKED

    @property
    def is_identical(self) -> bool:
        return self.status == HashStatus.IDENTICAL

    def mark_checked(self) -> HashStatus:
        """
        Derives the checked status from the two fingerprints.
        A side without a fingerprint (unreadable file) can never be identical.
        """
        if self.first.has_fingerprint and self.first.fingerprint == self.second.fingerprint:
            self.status = HashStatus.IDENTICAL
        else:
            self.status = HashStatus.DIFFERENT
        return self.status

    def __repr__(self):
        return f"<FileMatch name={self.filename}, status={self.status.value}>"


@dataclass
class PairComparison:
    """
    Result of matching two directories by filename.
    Matches are ordered by filename.
    """
    first_dir: str
    second_dir: str
    matches: List[FileMatch] = field(default_factory=list)

    @property
    def identical_count(self) -> int:
        return sum(1 for m in self.matches if m.is_identical)

    def __repr__(self):
        return f"<PairComparison {self.first_dir} <-> {self.second_dir}, matches={len(self.matches)}>"


@dataclass
class DuplicateSet:
    """
    The review unit presented to the user: files presumed or confirmed to share content.
    All current flows build pairwise sets (exactly two members).
    """
    files: List[FileRecord]
    status: HashStatus = HashStatus.NOT_CHECKED
    fingerprint: Optional[str] = None
    set_id: int = 0
    rejected: bool = False

    @property
    def is_verified(self) -> bool:
        return self.status == HashStatus.IDENTICAL

    @property
    def same_size(self) -> bool:
        return len({f.size for f in self.files}) <= 1

    @property
    def is_actionable(self) -> bool:
        """
        A set can be resolved by deletion only once its members are known equal:
        content-equal when hash-checked, size-equal otherwise.
        """
        if self.rejected or len(self.files) < 2:
            return False
        if self.status == HashStatus.NOT_CHECKED:
            return self.same_size
        return self.is_verified

    @property
    def directories(self) -> List[str]:
        return [f.directory for f in self.files]

    @property
    def unhashed_files(self) -> List[FileRecord]:
        return [f for f in self.files if not f.has_fingerprint]

    def member_in(self, directory: str) -> Optional[FileRecord]:
        """Returns the first member that belongs to the given root directory."""
        for file in self.files:
            if file.directory == directory:
                return file
        return None

    def refresh_verification(self) -> HashStatus:
        """
        Recomputes verification state from the members' fingerprints.
        Members without a fingerprint leave the set DIFFERENT (unverifiable).
        """
        fingerprints = {f.fingerprint for f in self.files}
        if len(fingerprints) == 1 and None not in fingerprints and "" not in fingerprints:
            self.status = HashStatus.IDENTICAL
            self.fingerprint = self.files[0].fingerprint
        else:
            self.status = HashStatus.DIFFERENT
            self.fingerprint = None
        return self.status

    def __repr__(self):
        return f"<DuplicateSet id={self.set_id}, count={len(self.files)}, status={self.status.value}>"


@dataclass
class UserAction:
    """
    One decision produced by the presentation layer for the current set.
    Only DELETE actions (including those derived from a batch rule) are kept as pending.
    """
    action: ActionType
    delete_path: Optional[str] = None
    keep_path: Optional[str] = None
    keep_directory: Optional[str] = None
    delete_directory: Optional[str] = None
    size: int = 0

    @classmethod
    def skip(cls) -> 'UserAction':
        return cls(ActionType.SKIP)

    @classmethod
    def delete(cls, duplicate_set: DuplicateSet, member_index: int) -> 'UserAction':
        """Delete the member at member_index (0-based) and keep the other one."""
        target = duplicate_set.files[member_index]
        others = [f for i, f in enumerate(duplicate_set.files) if i != member_index]
        return cls(
            ActionType.DELETE,
            delete_path=target.path,
            keep_path=others[0].path if others else None,
            size=target.size,
        )

    @classmethod
    def delete_record(cls, record: FileRecord) -> 'UserAction':
        return cls(ActionType.DELETE, delete_path=record.path, size=record.size)

    @classmethod
    def batch(cls, keep_directory: str, delete_directory: str) -> 'UserAction':
        return cls(
            ActionType.BATCH_BY_DIRECTORY,
            keep_directory=keep_directory,
            delete_directory=delete_directory,
        )

    @classmethod
    def compute_hash(cls) -> 'UserAction':
        return cls(ActionType.COMPUTE_HASH)

    @classmethod
    def finish(cls) -> 'UserAction':
        return cls(ActionType.FINISH)

    @classmethod
    def quit(cls) -> 'UserAction':
        return cls(ActionType.QUIT)


@dataclass
class DeletionResult:
    """Outcome of one deletion attempt. size_freed is meaningful only on success."""
    path: str
    success: bool = False
    size_freed: int = 0
    error: Optional[str] = None


@dataclass
class SessionSummary:
    """
    Aggregate outcome of an interactive session.
    """
    total_sets: int = 0
    sets_processed: int = 0
    files_deleted: int = 0
    files_failed: int = 0
    space_freed: int = 0
    results: List[DeletionResult] = field(default_factory=list)
    aborted: bool = False

    def record(self, result: DeletionResult) -> None:
        self.results.append(result)
        if result.success:
            self.files_deleted += 1
            self.space_freed += result.size_freed
        else:
            self.files_failed += 1

    def print_summary(self) -> str:
        lines = [
            "=== Interactive Session Summary ===",
            f"Duplicate Sets Found: {self.total_sets}",
            f"Files Deleted: {self.files_deleted}",
        ]
        if self.files_failed:
            lines.append(f"Failed Deletions: {self.files_failed}")
        lines.append(f"Space Freed: {ConvertUtils.bytes_to_human(self.space_freed)}")

        if self.files_deleted:
            lines.append("\nSuccessfully Deleted:")
            for result in self.results:
                if result.success:
                    lines.append(f"  ✓ {result.path} ({ConvertUtils.bytes_to_human(result.size_freed)} freed)")

        if self.files_failed:
            lines.append("\nFailed Deletions:")
            for result in self.results:
                if not result.success:
                    lines.append(f"  ✗ {result.path}\n     Error: {result.error}")

        return "\n".join(lines)


"""
DTO for scan and comparison parameters with built-in validation.
Interface-agnostic: used by the CLI and by tests.
"""

@dataclass
class ScanParams:
    """Parameters for a cross-directory comparison with validation."""
    directories: List[str]
    recursive: bool = True
    min_size_bytes: int = 0
    extensions: List[str] = field(default_factory=list)
    max_depth: int = -1
    compare_hash: bool = False
    workers: int = 0
    interactive: bool = False
    use_trash: bool = False

    def __post_init__(self):
        """Validate parameters immediately after creation."""
        if len(self.directories) < 2:
            raise ValueError("At least 2 directories are required for comparison")

        if self.min_size_bytes < 0:
            raise ValueError("Minimum size cannot be negative")

        if self.max_depth < -1:
            raise ValueError("Maximum depth must be -1 (unlimited) or a non-negative number")

        if self.workers <= 0:
            self.workers = os.cpu_count() or 1

        # Normalize extensions: ensure they start with dot and are lowercase
        normalized = []
        for ext in self.extensions:
            ext = ext.strip().lower()
            if ext and not ext.startswith('.'):
                ext = f".{ext}"
            if ext:
                normalized.append(ext)
        self.extensions = normalized

    @property
    def hash_workers(self) -> int:
        """Hashing is I/O bound, so it runs with twice the configured workers."""
        return self.workers * 2

    @staticmethod
    def from_human_readable(
            directories: List[str],
            min_size_str: str = "0",
            extensions_str: str = "",
            recursive: bool = True,
            max_depth: int = -1,
            compare_hash: bool = False,
            workers: int = 0,
            interactive: bool = False,
            use_trash: bool = False,
    ) -> 'ScanParams':
        """
        Factory method to create params from human-readable inputs.
        """
        min_size = ConvertUtils.human_to_bytes(min_size_str)

        ext_list = [
            ext.strip() for ext in extensions_str.split(",") if ext.strip()
        ] if extensions_str else []

        return ScanParams(
            directories=list(directories),
            recursive=recursive,
            min_size_bytes=min_size,
            extensions=ext_list,
            max_depth=max_depth,
            compare_hash=compare_hash,
            workers=workers,
            interactive=interactive,
            use_trash=use_trash,
        )
