"""
Tests for FindDuplicatesCommand: scanning, pair generation and matching wired together.
"""
import pytest

from dupfinder.commands import FindDuplicatesCommand
from dupfinder.core.models import HashStatus, ScanParams


class TestExecute:

    def test_name_only_comparison(self, two_dirs):
        first, second = str(two_dirs["first"]), str(two_dirs["second"])
        params = ScanParams(directories=[first, second])

        comparisons = FindDuplicatesCommand().execute(params)

        assert len(comparisons) == 1
        comparison = comparisons[0]
        assert (comparison.first_dir, comparison.second_dir) == (first, second)
        assert [m.filename for m in comparison.matches] == ["a.txt", "deep.bin", "same.txt"]
        assert all(m.status == HashStatus.NOT_CHECKED for m in comparison.matches)
        assert all(m.first.fingerprint is None for m in comparison.matches)

    def test_hash_comparison(self, two_dirs):
        params = ScanParams(directories=[str(two_dirs["first"]), str(two_dirs["second"])], compare_hash=True)

        comparison = FindDuplicatesCommand().execute(params)[0]

        statuses = {m.filename: m.status for m in comparison.matches}
        assert statuses == {
            "a.txt": HashStatus.IDENTICAL,
            "deep.bin": HashStatus.IDENTICAL,
            "same.txt": HashStatus.DIFFERENT,
        }

    def test_every_pair_compared(self, two_dirs):
        third = two_dirs["root"] / "third"
        third.mkdir()
        (third / "a.txt").write_bytes(b"X")
        dirs = [str(two_dirs["first"]), str(two_dirs["second"]), str(third)]

        comparisons = FindDuplicatesCommand().execute(ScanParams(directories=dirs, compare_hash=True))

        assert [(c.first_dir, c.second_dir) for c in comparisons] == [
            (dirs[0], dirs[1]), (dirs[0], dirs[2]), (dirs[1], dirs[2])
        ]
        assert [c.identical_count for c in comparisons] == [2, 1, 1]

    def test_empty_directory_keeps_pair_identity(self, two_dirs):
        empty = two_dirs["root"] / "empty"
        empty.mkdir()
        dirs = [str(two_dirs["first"]), str(empty)]

        comparison = FindDuplicatesCommand().execute(ScanParams(directories=dirs))[0]

        assert comparison.matches == []
        assert (comparison.first_dir, comparison.second_dir) == (dirs[0], dirs[1])

    def test_filters_are_applied(self, two_dirs):
        params = ScanParams(directories=[str(two_dirs["first"]), str(two_dirs["second"])], min_size_bytes=2)

        comparison = FindDuplicatesCommand().execute(params)[0]

        assert [m.filename for m in comparison.matches] == ["deep.bin", "same.txt"]

    def test_missing_directory_raises(self, two_dirs):
        params = ScanParams(directories=[str(two_dirs["first"]), str(two_dirs["root"] / "gone")])
        with pytest.raises(RuntimeError):
            FindDuplicatesCommand().execute(params)

    def test_files_available_after_execute(self, two_dirs):
        command = FindDuplicatesCommand()
        first, second = str(two_dirs["first"]), str(two_dirs["second"])
        command.execute(ScanParams(directories=[first, second]))

        files = command.get_files()
        assert set(files) == {first, second}
        assert len(files[second]) == 4


class TestBuildSets:

    def test_eager_sets_after_hash_comparison(self, two_dirs):
        params = ScanParams(directories=[str(two_dirs["first"]), str(two_dirs["second"])], compare_hash=True)
        command = FindDuplicatesCommand()

        sets = command.build_sets(command.execute(params), params)

        assert len(sets) == 2
        assert all(s.is_verified for s in sets)

    def test_lazy_sets_without_hash_comparison(self, two_dirs):
        params = ScanParams(directories=[str(two_dirs["first"]), str(two_dirs["second"])])
        command = FindDuplicatesCommand()

        sets = command.build_sets(command.execute(params), params)

        assert len(sets) == 3
        assert not any(s.is_verified for s in sets)
        assert [s.set_id for s in sets] == [1, 2, 3]
