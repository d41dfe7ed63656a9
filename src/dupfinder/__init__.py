"""
dupfinder: find files that share a name across directory trees.

Core features:
- Pairwise comparison of any number of directories by filename
- Optional content verification with a streaming xxHash64 fingerprint on a bounded worker pool
- Interactive review: delete per set, batch by directory, on-demand hashing, final confirmation
- Permanent deletion or move to system trash (via send2trash)
"""

# Get version
try:
    from importlib.metadata import version as _version, PackageNotFoundError
    __version__ = _version("dupfinder")
except PackageNotFoundError:
    __version__ = "0.0.0"

# Public API
from dupfinder.commands import FindDuplicatesCommand
from dupfinder.core import (
    ScanParams, FileRecord, FileMatch, PairComparison, DuplicateSet, HashStatus,
    ActionType, UserAction, DeletionResult, SessionSummary,
    HasherImpl, PairMatcherImpl, DuplicateSetBuilder, InteractiveSession,
    generate_pairs, run_interactive_session)
from dupfinder.utils.convert_utils import ConvertUtils
from dupfinder.services.file_service import FileService

__all__ = [
    "FindDuplicatesCommand",
    "ScanParams",
    "FileRecord",
    "FileMatch",
    "PairComparison",
    "DuplicateSet",
    "HashStatus",
    "ActionType",
    "UserAction",
    "DeletionResult",
    "SessionSummary",
    "HasherImpl",
    "PairMatcherImpl",
    "DuplicateSetBuilder",
    "InteractiveSession",
    "generate_pairs",
    "run_interactive_session",
    "ConvertUtils",
    "FileService",
    "__version__",
]
