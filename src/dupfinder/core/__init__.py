"""
Core comparison engine: scanner, hasher, pair matcher, set builder and interactive session.

This package contains the algorithmic foundation of dupfinder:
- FileScannerImpl: per-root directory traversal with size/extension/depth filters
- HasherImpl + XXHashAlgorithmImpl: streaming xxHash64 fingerprints on a bounded worker pool
- PairMatcherImpl + generate_pairs: name matching across every pair of directories
- DuplicateSetBuilder: eager (hash-verified) or lazy (name-matched) duplicate sets
- InteractiveSession: review state machine producing a confirmed deletion plan
- Models: FileRecord, FileMatch, PairComparison, DuplicateSet and session results

All components are pure Python with no UI dependencies.
"""

from .scanner import FileScannerImpl
from .hasher import HasherImpl, XXHashAlgorithmImpl, HashError, default_workers
from .matcher import PairMatcherImpl, generate_pairs
from .builder import DuplicateSetBuilder
from .session import (
    InteractiveSession, run_interactive_session,
    Browsing, BatchApplying, Confirming, Executing, Done, Aborted)
from .models import (
    FileRecord, FileMatch, PairComparison, DuplicateSet, HashStatus, ActionType,
    UserAction, DeletionResult, SessionSummary, ScanParams)

__all__ = [
    "FileScannerImpl",
    "HasherImpl",
    "XXHashAlgorithmImpl",
    "HashError",
    "default_workers",
    "PairMatcherImpl",
    "generate_pairs",
    "DuplicateSetBuilder",
    "InteractiveSession",
    "run_interactive_session",
    "Browsing",
    "BatchApplying",
    "Confirming",
    "Executing",
    "Done",
    "Aborted",
    "FileRecord",
    "FileMatch",
    "PairComparison",
    "DuplicateSet",
    "HashStatus",
    "ActionType",
    "UserAction",
    "DeletionResult",
    "SessionSummary",
    "ScanParams",
]
