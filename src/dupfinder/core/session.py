"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/session.py
Interactive review of duplicate sets as an explicit state machine.

STATES
------
Browsing(index)        : Present set #index and ask the user for a decision
BatchApplying(index..) : A keep/delete directory rule is active; remaining sets resolve without prompts
Confirming             : Show all pending deletions and ask for a final yes/no
Executing              : Run the deleter once per pending action, in recorded order
Done / Aborted         : Terminal states

step() performs exactly one transition, so tests can drive the machine one state at a time
with a scripted SessionUI. Nothing is deleted before the Confirming -> Executing transition.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Set, Union

from dupfinder.core.hasher import HasherImpl
from dupfinder.core.interfaces import Deleter, Hasher, SessionUI
from dupfinder.core.models import (
    ActionType,
    DuplicateSet,
    FileRecord,
    SessionSummary,
    UserAction,
)

logger = logging.getLogger(__name__)


# =============================
# States
# =============================

@dataclass(frozen=True)
class Browsing:
    index: int


@dataclass(frozen=True)
class BatchApplying:
    index: int
    keep_directory: str
    delete_directory: str


@dataclass(frozen=True)
class Confirming:
    pass


@dataclass(frozen=True)
class Executing:
    pass


@dataclass(frozen=True)
class Done:
    pass


@dataclass(frozen=True)
class Aborted:
    pass


SessionState = Union[Browsing, BatchApplying, Confirming, Executing, Done, Aborted]


# =============================
# Session
# =============================

class InteractiveSession:
    """
    Drives the per-set review loop and turns user decisions into a deletion plan.

    Attributes:
        sets: Duplicate sets in presentation order
        ui: Presentation hooks (console, or a scripted responder in tests)
        deleter: Callable removing one file and returning a DeletionResult
        hasher: Used for on-demand verification of unverified sets
        directories: Root directories under comparison (batch mode needs exactly two)
        workers: Hashing concurrency for on-demand verification
    """

    def __init__(
            self,
            sets: List[DuplicateSet],
            ui: SessionUI,
            deleter: Deleter,
            hasher: Optional[Hasher] = None,
            directories: Optional[List[str]] = None,
            workers: int = 0
    ):
        self.sets = sets
        self.ui = ui
        self.deleter = deleter
        self.hasher = hasher or HasherImpl()
        self.directories = list(directories) if directories is not None else self._collect_directories(sets)
        self.workers = workers
        self.pending: List[UserAction] = []
        self.pending_paths: Set[str] = set()
        self.summary = SessionSummary(total_sets=len(sets))

    @property
    def allow_batch_by_directory(self) -> bool:
        return len(self.directories) == 2

    def initial_state(self) -> SessionState:
        if not self.sets:
            return Done()
        return Browsing(0)

    def run(self) -> SessionSummary:
        """Runs the session to a terminal state and returns its summary."""
        state = self.initial_state()
        while not isinstance(state, (Done, Aborted)):
            state = self.step(state)

        if isinstance(state, Aborted):
            self.summary.aborted = True
            self.summary.sets_processed = 0
        self.ui.display_summary(self.summary)
        return self.summary

    def step(self, state: SessionState) -> SessionState:
        """Performs one transition."""
        if isinstance(state, Browsing):
            return self._browse(state)
        if isinstance(state, BatchApplying):
            return self._apply_batch(state)
        if isinstance(state, Confirming):
            return self._confirm()
        if isinstance(state, Executing):
            return self._execute()
        return state

    def options_for(self, duplicate_set: DuplicateSet) -> List[ActionType]:
        """Actions offered for one set, in menu order."""
        options = [ActionType.SKIP]
        if duplicate_set.is_actionable:
            options.append(ActionType.DELETE)
        if not duplicate_set.is_verified:
            options.append(ActionType.COMPUTE_HASH)
        if self.allow_batch_by_directory and duplicate_set.is_actionable:
            options.append(ActionType.BATCH_BY_DIRECTORY)
        options.append(ActionType.QUIT)
        options.append(ActionType.FINISH)
        return options

    @property
    def pending_bytes(self) -> int:
        return sum(action.size for action in self.pending)

    # =============================
    # Transitions
    # =============================

    def _browse(self, state: Browsing) -> SessionState:
        if state.index >= len(self.sets):
            return Confirming()

        current = self.sets[state.index]
        if current.rejected:
            return Browsing(state.index + 1)
        current.set_id = state.index + 1

        selected = self._selected_member(current)
        if selected is not None:
            self.ui.show_message(
                f"Set #{current.set_id} skipped: {selected.path} is already selected for deletion."
            )
            return Browsing(state.index + 1)

        self.ui.display_set(current)
        options = self.options_for(current)
        action = self.ui.prompt_action(current, options)
        if action.action not in options:
            raise ValueError(f"Action '{action.action.value}' is not available for set #{current.set_id}")

        if action.action == ActionType.SKIP:
            return Browsing(state.index + 1)

        if action.action == ActionType.DELETE:
            self._record_delete(current, action)
            return Browsing(state.index + 1)

        if action.action == ActionType.COMPUTE_HASH:
            if self._verify_on_demand(current):
                return Browsing(state.index)
            return Browsing(state.index + 1)

        if action.action == ActionType.BATCH_BY_DIRECTORY:
            return self._enable_batch(current, action, state.index)

        if action.action == ActionType.FINISH:
            logger.info(f"Selection finished early at set #{current.set_id}")
            return Confirming()

        logger.info("Interactive session quit by user")
        return Aborted()

    def _apply_batch(self, state: BatchApplying) -> SessionState:
        if state.index >= len(self.sets):
            return Confirming()

        current = self.sets[state.index]
        current.set_id = state.index + 1
        target = current.member_in(state.delete_directory)
        keeper = current.member_in(state.keep_directory)

        if self._selected_member(current) is not None:
            logger.debug(f"Set #{current.set_id} already has a member selected for deletion")
        elif current.is_actionable and target is not None and keeper is not None:
            self._add_pending(UserAction.delete_record(target))
            logger.debug(f"Batch rule selected {target.path} for deletion")
        else:
            logger.debug(f"Batch rule does not apply to set #{current.set_id}")

        return BatchApplying(state.index + 1, state.keep_directory, state.delete_directory)

    def _confirm(self) -> SessionState:
        if not self.pending:
            self.ui.show_message("No files selected for deletion.")
            return Done()

        if self.ui.confirm_deletion(list(self.pending), self.pending_bytes):
            return Executing()

        self.ui.show_message("Deletion cancelled.")
        return Aborted()

    def _execute(self) -> SessionState:
        self.summary.sets_processed = len(self.pending)
        for action in self.pending:
            result = self.deleter(action.delete_path)
            if not result.success:
                logger.warning(f"Failed to delete {result.path}: {result.error}")
            self.summary.record(result)
        return Done()

    # =============================
    # Helpers
    # =============================

    def _record_delete(self, current: DuplicateSet, action: UserAction) -> None:
        target = next((f for f in current.files if f.path == action.delete_path), None)
        if target is None:
            raise ValueError(f"{action.delete_path} is not a member of set #{current.set_id}")
        self._add_pending(UserAction(
            ActionType.DELETE,
            delete_path=target.path,
            keep_path=action.keep_path,
            size=target.size,
        ))

    def _add_pending(self, action: UserAction) -> None:
        """Queues a deletion once per path."""
        if action.delete_path in self.pending_paths:
            logger.debug(f"{action.delete_path} is already selected for deletion")
            return
        self.pending_paths.add(action.delete_path)
        self.pending.append(action)

    def _selected_member(self, current: DuplicateSet) -> Optional[FileRecord]:
        """
        First member already queued for deletion by an earlier set.
        Sets with such a member are never acted on.
        """
        for file in current.files:
            if file.path in self.pending_paths:
                return file
        return None

    def _enable_batch(self, current: DuplicateSet, action: UserAction, index: int) -> SessionState:
        target = current.member_in(action.delete_directory)
        if target is None or current.member_in(action.keep_directory) is None:
            raise ValueError(f"Set #{current.set_id} has no member in {action.delete_directory} "
                             f"or {action.keep_directory}")

        self._add_pending(UserAction.delete_record(target))
        self.ui.show_message(
            f"Batch mode enabled: All remaining duplicates from {action.delete_directory} will be deleted."
        )
        return BatchApplying(index + 1, action.keep_directory, action.delete_directory)

    def _verify_on_demand(self, current: DuplicateSet) -> bool:
        """
        Fingerprints the set's unhashed members and updates it in place.
        Returns True when the members are identical; otherwise the set is rejected.
        """
        errors = self.hasher.fingerprint_all(current.unhashed_files, self.workers)
        current.refresh_verification()

        if current.is_verified:
            self.ui.show_message("Files are identical (hash verified).")
            return True

        current.rejected = True
        if errors:
            self.ui.show_message(f"Could not verify set #{current.set_id}: {errors[0].message}. Skipping.")
        else:
            self.ui.show_message("Files have different content. Skipping this set.")
        return False

    @staticmethod
    def _collect_directories(sets: List[DuplicateSet]) -> List[str]:
        directories = []
        for duplicate_set in sets:
            for directory in duplicate_set.directories:
                if directory not in directories:
                    directories.append(directory)
        return directories


def run_interactive_session(
        sets: List[DuplicateSet],
        ui: SessionUI,
        deleter: Deleter,
        hasher: Optional[Hasher] = None,
        directories: Optional[List[str]] = None,
        workers: int = 0
) -> SessionSummary:
    """Convenience entry point: build a session and run it to completion."""
    session = InteractiveSession(
        sets,
        ui=ui,
        deleter=deleter,
        hasher=hasher,
        directories=directories,
        workers=workers,
    )
    return session.run()
