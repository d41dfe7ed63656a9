"""
Shared fixtures for duplicate finder tests.
Creates isolated directory trees with controlled file contents and a scripted session UI.
"""
import pytest
import tempfile
from pathlib import Path
from typing import Dict, List
import sys

# Add src/ to sys.path so 'dupfinder' is importable without installation
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from dupfinder.core.models import (  # noqa: E402
    ActionType, DeletionResult, DuplicateSet, FileRecord, HashStatus, SessionSummary, UserAction
)


@pytest.fixture
def temp_dir():
    """Creates isolated temporary directory, auto-cleanup after test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def two_dirs(temp_dir) -> Dict[str, Path]:
    """
    Creates two root directories for comparison scenarios:
    - a.txt in both, identical content ("X")
    - same.txt in both, different content of equal size
    - b.txt only in the second directory
    - nested/deep.bin in both (identical, one level down)
    """
    first = temp_dir / "first"
    second = temp_dir / "second"
    first.mkdir()
    second.mkdir()

    (first / "a.txt").write_bytes(b"X")
    (second / "a.txt").write_bytes(b"X")

    (first / "same.txt").write_bytes(b"left-content")
    (second / "same.txt").write_bytes(b"rightcontent")

    (second / "b.txt").write_bytes(b"only here")

    (first / "nested").mkdir()
    (second / "nested").mkdir()
    (first / "nested" / "deep.bin").write_bytes(b"D" * 4096)
    (second / "nested" / "deep.bin").write_bytes(b"D" * 4096)

    return {"root": temp_dir, "first": first, "second": second}


def make_record(path: str, directory: str, size: int = 10, fingerprint=None) -> FileRecord:
    """Builds an in-memory FileRecord (no file on disk)."""
    return FileRecord(path=path, directory=directory, size=size, mod_time=0.0, fingerprint=fingerprint)


def make_set(first: FileRecord, second: FileRecord, verified: bool = True) -> DuplicateSet:
    """Builds a pairwise DuplicateSet, verified with a shared fingerprint by default."""
    if verified:
        first.fingerprint = first.fingerprint or "abc123"
        second.fingerprint = second.fingerprint or first.fingerprint
        return DuplicateSet(files=[first, second], status=HashStatus.IDENTICAL, fingerprint=first.fingerprint)
    return DuplicateSet(files=[first, second])


class ScriptedUI:
    """
    SessionUI test double: answers prompts from a script and records every call.
    Script entries are UserActions or callables (duplicate_set -> UserAction).
    """

    def __init__(self, actions=None, confirm: bool = True):
        self.actions = list(actions or [])
        self.confirm = confirm
        self.displayed: List[DuplicateSet] = []
        self.prompts: List[List[ActionType]] = []
        self.confirmations: List[tuple] = []
        self.messages: List[str] = []
        self.summary: SessionSummary = None

    def display_set(self, duplicate_set):
        self.displayed.append(duplicate_set)

    def prompt_action(self, duplicate_set, options):
        self.prompts.append(list(options))
        if not self.actions:
            raise EOFError("script exhausted")
        action = self.actions.pop(0)
        if callable(action):
            action = action(duplicate_set)
        return action

    def confirm_deletion(self, actions, total_bytes):
        self.confirmations.append(([a.delete_path for a in actions], total_bytes))
        return self.confirm

    def display_summary(self, summary):
        self.summary = summary

    def show_message(self, message):
        self.messages.append(message)


class RecordingDeleter:
    """Deleter test double: records paths, never touches the filesystem."""

    def __init__(self, fail_paths=None, sizes=None):
        self.calls: List[str] = []
        self.fail_paths = set(fail_paths or [])
        self.sizes = sizes or {}

    def __call__(self, path: str) -> DeletionResult:
        self.calls.append(path)
        if path in self.fail_paths:
            return DeletionResult(path=path, success=False, error="permission denied")
        return DeletionResult(path=path, success=True, size_freed=self.sizes.get(path, 10))


@pytest.fixture
def scripted_ui():
    return ScriptedUI


@pytest.fixture
def recording_deleter():
    return RecordingDeleter()


def delete_member(index: int):
    """Script step: delete the member at index of whatever set is shown."""
    return lambda duplicate_set: UserAction.delete(duplicate_set, index)
