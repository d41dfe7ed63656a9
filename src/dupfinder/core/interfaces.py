"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/interfaces.py

Defines core interfaces (Protocols) used throughout the duplicate finder.
These protocols enforce structural typing using Python's `typing.Protocol` so that
collaborators (hashing algorithm, scanner, deleter, console) can be swapped in tests.

Key Components:
---------------
- HashAlgorithm: Factory for streaming digest objects (e.g., xxHash64).
- Hasher: Computes content fingerprints for one file or a batch of records.
- FileScanner: Scans root directories and returns file records per root.
- Deleter: Removes one file and reports a DeletionResult.
- SessionUI: Presentation hooks the interactive session calls back into.
"""

from typing import Protocol, List, Dict, Callable

from dupfinder.core.models import (
    ActionType,
    DeletionResult,
    DuplicateSet,
    FileRecord,
    SessionSummary,
    UserAction,
)


# ===== Interfaces =====

class Digest(Protocol):
    """Incremental digest object (update-then-read)."""
    def update(self, data: bytes) -> None: ...
    def hexdigest(self) -> str: ...


class HashAlgorithm(Protocol):
    """
    Interface for streaming hash algorithms.

    Allows plugging in different hashing functions like xxHash or BLAKE2
    without affecting the rest of the comparison logic.
    """

    def new(self) -> Digest:
        """Returns a fresh incremental digest."""
        ...


class Hasher(Protocol):
    """Interface for fingerprinting file content."""
    def fingerprint(self, path: str) -> str: ...
    def fingerprint_all(self, records: List[FileRecord], workers: int) -> list: ...


class FileScanner(Protocol):
    """
    Interface for scanning root directories and collecting file metadata.
    """
    def scan(self, directory: str) -> List[FileRecord]:
        """Scan one root directory and return records matching the filters."""
        ...

    def scan_all(self) -> Dict[str, List[FileRecord]]:
        """Scan every configured root; returns records keyed by root."""
        ...


Deleter = Callable[[str], DeletionResult]


class SessionUI(Protocol):
    """
    Presentation hooks used by the interactive session.
    All calls are synchronous and may block on user input.
    """

    def display_set(self, duplicate_set: DuplicateSet) -> None:
        """Render one duplicate set."""
        ...

    def prompt_action(self, duplicate_set: DuplicateSet, options: List[ActionType]) -> UserAction:
        """Return one of the offered actions for the current set."""
        ...

    def confirm_deletion(self, actions: List[UserAction], total_bytes: int) -> bool:
        """Show pending deletions and return True to execute them."""
        ...

    def display_summary(self, summary: SessionSummary) -> None:
        """Render the final session summary."""
        ...

    def show_message(self, message: str) -> None:
        """Informational notice (batch mode enabled, content mismatch, ...)."""
        ...
