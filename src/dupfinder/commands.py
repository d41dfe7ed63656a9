"""
Unified command orchestrator for cross-directory comparison.
This is the single place where scanning, pair generation and matching are wired together.
"""
import logging
from typing import Dict, List, Optional

from dupfinder.core.builder import DuplicateSetBuilder
from dupfinder.core.hasher import HasherImpl
from dupfinder.core.matcher import PairMatcherImpl, generate_pairs
from dupfinder.core.models import DuplicateSet, FileRecord, PairComparison, ScanParams
from dupfinder.core.scanner import FileScannerImpl

logger = logging.getLogger(__name__)


class FindDuplicatesCommand:
    """
    Orchestrates the comparison workflow:
    1. Scan every root directory
    2. Generate all unordered directory pairs
    3. Match each pair by filename (optionally verifying content)

    Usage:
        params = ScanParams(directories=[...], compare_hash=True)
        command = FindDuplicatesCommand()
        comparisons = command.execute(params)
        sets = command.build_sets(comparisons, params)
    """

    def __init__(self, hasher: Optional[HasherImpl] = None):
        self.hasher = hasher or HasherImpl()
        self._matcher = PairMatcherImpl(self.hasher)
        self._files: Dict[str, List[FileRecord]] = {}

    def execute(self, params: ScanParams) -> List[PairComparison]:
        """
        Execute scan and pairwise comparison.

        Raises:
            RuntimeError: If a root directory cannot be scanned
        """
        scanner = FileScannerImpl(
            directories=params.directories,
            min_size=params.min_size_bytes,
            extensions=params.extensions,
            recursive=params.recursive,
            max_depth=params.max_depth,
        )
        self._files = scanner.scan_all()

        comparisons = []
        for first_dir, second_dir in generate_pairs(params.directories):
            comparison = self._matcher.compare_pair(
                self._files.get(first_dir, []),
                self._files.get(second_dir, []),
                verify_content=params.compare_hash,
                workers=params.hash_workers,
            )
            # Empty sides leave the directory ids blank; keep the pair identifiable
            comparison.first_dir = comparison.first_dir or first_dir
            comparison.second_dir = comparison.second_dir or second_dir
            comparisons.append(comparison)

        logger.info(f"Compared {len(comparisons)} directory pairs")
        return comparisons

    @staticmethod
    def build_sets(comparisons: List[PairComparison], params: ScanParams) -> List[DuplicateSet]:
        """Eager sets when content was verified up front, lazy sets otherwise."""
        return DuplicateSetBuilder.build(comparisons, eager=params.compare_hash)

    def get_files(self) -> Dict[str, List[FileRecord]]:
        """Get scanned records per root after execution."""
        return dict(self._files)
