"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/matcher.py
Finds files that share a name across two directories and optionally verifies their content.
"""

import logging
from typing import Dict, List, Tuple

from dupfinder.core.hasher import HasherImpl
from dupfinder.core.interfaces import Hasher
from dupfinder.core.models import FileMatch, FileRecord, PairComparison

logger = logging.getLogger(__name__)


def generate_pairs(dirs: List[str]) -> List[Tuple[str, str]]:
    """
    Generates all unique unordered pairs of directories (i < j over input order).
    K directories yield K*(K-1)/2 pairs, no self-pairs.
    """
    pairs = []
    for i in range(len(dirs)):
        for j in range(i + 1, len(dirs)):
            pairs.append((dirs[i], dirs[j]))
    return pairs


class PairMatcherImpl:
    """
    Matches two file lists by basename.
    Uses an injected Hasher for content verification.
    """

    def __init__(self, hasher: Hasher = None):
        self.hasher = hasher or HasherImpl()

    def compare_pair(
            self,
            first_files: List[FileRecord],
            second_files: List[FileRecord],
            verify_content: bool = False,
            workers: int = 0
    ) -> PairComparison:
        """
        Finds filenames present on both sides.

        Args:
            first_files: Records scanned under the first directory
            second_files: Records scanned under the second directory
            verify_content: Fingerprint matched records and mark each match identical/different
            workers: Hashing concurrency passed to the hasher
        Returns:
            PairComparison with matches sorted by filename
        """
        first_by_name = self._group_by_name(first_files)
        second_by_name = self._group_by_name(second_files)

        matches = [
            FileMatch(filename=name, first=record, second=second_by_name[name])
            for name, record in first_by_name.items()
            if name in second_by_name
        ]

        if verify_content and matches:
            self._verify_matches(matches, workers)

        matches.sort(key=lambda m: m.filename)

        first_dir = first_files[0].directory if first_files else ""
        second_dir = second_files[0].directory if second_files else ""
        logger.debug(f"Compared {first_dir} <-> {second_dir}: {len(matches)} matches")

        return PairComparison(first_dir=first_dir, second_dir=second_dir, matches=matches)

    def _verify_matches(self, matches: List[FileMatch], workers: int) -> None:
        """Fingerprints both sides of every match, then marks each one checked."""
        records = []
        for match in matches:
            records.append(match.first)
            records.append(match.second)

        errors = self.hasher.fingerprint_all(records, workers)
        if errors:
            logger.warning(f"{len(errors)} file(s) could not be hashed and will be reported as different")

        for match in matches:
            match.mark_checked()

    @staticmethod
    def _group_by_name(files: List[FileRecord]) -> Dict[str, FileRecord]:
        """
        Maps basename -> record. When a basename repeats within one side
        (e.g. the same name in two subdirectories), the later record wins.
        """
        by_name: Dict[str, FileRecord] = {}
        for file in files:
            if file.name in by_name:
                logger.debug(f"Duplicate basename {file.name}: {by_name[file.name].path} hidden by {file.path}")
            by_name[file.name] = file
        return by_name
