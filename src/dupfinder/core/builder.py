"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/builder.py
Converts name matches into duplicate sets, the unit of interactive review.
"""

from typing import List

from dupfinder.core.models import DuplicateSet, HashStatus, PairComparison


class DuplicateSetBuilder:
    """
    Builds pairwise DuplicateSets from PairComparisons.

    Eager mode (content already verified): only identical matches become sets.
    Lazy mode (no upfront hashing): every match becomes an unverified set,
    content is confirmed later on demand.
    """

    @staticmethod
    def build(comparisons: List[PairComparison], eager: bool) -> List[DuplicateSet]:
        sets = []
        for comparison in comparisons:
            for match in comparison.matches:
                if eager:
                    if match.status != HashStatus.IDENTICAL:
                        continue
                    sets.append(DuplicateSet(
                        files=[match.first, match.second],
                        status=HashStatus.IDENTICAL,
                        fingerprint=match.first.fingerprint,
                    ))
                else:
                    sets.append(DuplicateSet(files=[match.first, match.second]))

        for set_id, duplicate_set in enumerate(sets, 1):
            duplicate_set.set_id = set_id
        return sets
