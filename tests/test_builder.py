"""
Unit tests for DuplicateSetBuilder.
"""
from dupfinder.core.builder import DuplicateSetBuilder
from dupfinder.core.models import FileMatch, HashStatus, PairComparison
from conftest import make_record


def comparison_with(*statuses):
    matches = []
    for i, status in enumerate(statuses):
        first = make_record(f"/a/f{i}", "/a", fingerprint="same" if status == HashStatus.IDENTICAL else "x")
        second = make_record(f"/b/f{i}", "/b", fingerprint="same" if status == HashStatus.IDENTICAL else "y")
        matches.append(FileMatch(f"f{i}", first, second, status))
    return PairComparison("/a", "/b", matches)


class TestEagerBuild:
    """Content verified upfront: only identical matches become sets."""

    def test_drops_different_matches(self):
        comparison = comparison_with(HashStatus.IDENTICAL, HashStatus.DIFFERENT, HashStatus.IDENTICAL)

        sets = DuplicateSetBuilder.build([comparison], eager=True)

        assert len(sets) == 2
        assert all(s.status == HashStatus.IDENTICAL for s in sets)
        assert all(s.fingerprint == "same" for s in sets)
        assert [s.files[0].name for s in sets] == ["f0", "f2"]

    def test_unchecked_matches_are_not_promoted(self):
        sets = DuplicateSetBuilder.build([comparison_with(HashStatus.NOT_CHECKED)], eager=True)
        assert sets == []


class TestLazyBuild:
    """No upfront hashing: every match becomes an unverified set."""

    def test_keeps_every_match_unverified(self):
        comparison = comparison_with(HashStatus.NOT_CHECKED, HashStatus.NOT_CHECKED)

        sets = DuplicateSetBuilder.build([comparison], eager=False)

        assert len(sets) == 2
        assert all(s.status == HashStatus.NOT_CHECKED for s in sets)
        assert all(s.fingerprint is None for s in sets)

    def test_members_follow_pair_order(self):
        sets = DuplicateSetBuilder.build([comparison_with(HashStatus.NOT_CHECKED)], eager=False)
        assert sets[0].directories == ["/a", "/b"]


class TestSetIds:

    def test_ids_are_sequential_across_comparisons(self):
        sets = DuplicateSetBuilder.build(
            [comparison_with(HashStatus.NOT_CHECKED, HashStatus.NOT_CHECKED),
             comparison_with(HashStatus.NOT_CHECKED)],
            eager=False,
        )
        assert [s.set_id for s in sets] == [1, 2, 3]

    def test_empty_comparisons(self):
        assert DuplicateSetBuilder.build([], eager=True) == []
        assert DuplicateSetBuilder.build([PairComparison("/a", "/b")], eager=False) == []
