"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

formatter.py
Plain-text rendering of pair comparisons.
"""
from typing import List

from dupfinder.core.models import HashStatus, PairComparison


class SimpleFormatter:
    """Simple text output: one block per directory pair, one line per matching filename."""

    def __init__(self, show_hash: bool = False):
        self.show_hash = show_hash

    def format_pair_comparison(self, comparison: PairComparison) -> str:
        lines = [f"=== {comparison.first_dir} ↔ {comparison.second_dir} ==="]

        if not comparison.matches:
            lines.append("(No duplicates)")
            return "\n".join(lines) + "\n"

        for match in comparison.matches:
            label = f"{match.filename + ':':<20}"
            if self.show_hash and match.status != HashStatus.NOT_CHECKED:
                hash_status = "✓ Identical" if match.is_identical else "✗ Different"
                lines.append(f"{label} ✓ [Hash: {hash_status}]")
            else:
                lines.append(f"{label} ✓")

        return "\n".join(lines) + "\n"


def format_all_comparisons(comparisons: List[PairComparison], show_hash: bool = False) -> str:
    """Formats every comparison, separated by blank lines."""
    formatter = SimpleFormatter(show_hash)
    return "\n".join(formatter.format_pair_comparison(c) for c in comparisons)
