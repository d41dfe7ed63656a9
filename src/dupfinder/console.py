"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

console.py
Console implementation of the interactive session's presentation hooks.
"""
import sys
from typing import Callable, List, Optional, TextIO

from dupfinder.core.models import ActionType, DuplicateSet, SessionSummary, UserAction
from dupfinder.utils.convert_utils import ConvertUtils


class ConsoleSessionUI:
    """
    Renders duplicate sets to a text stream and reads single-letter choices.
    input_func must raise EOFError when input is exhausted; that error ends the session.
    """

    def __init__(self, input_func: Optional[Callable[[str], str]] = None, output: Optional[TextIO] = None):
        self.input_func = input_func or input
        self.output = output or sys.stdout

    def _print(self, text: str = "") -> None:
        print(text, file=self.output)

    def display_set(self, duplicate_set: DuplicateSet) -> None:
        self._print(f"\n=== Duplicate Set #{duplicate_set.set_id} ===")
        self._print(f"Found {len(duplicate_set.files)} files with same name")
        if duplicate_set.is_verified:
            self._print(f"Hash: {ConvertUtils.short_hash(duplicate_set.fingerprint)}... (verified)")
        elif not duplicate_set.same_size:
            self._print("Sizes differ: compute the hash to compare content")
        self._print()

        for i, file in enumerate(duplicate_set.files, 1):
            self._print(f"[{i}] {file.path}")
            self._print(f"    Size: {ConvertUtils.bytes_to_human(file.size)}")
            self._print(f"    Modified: {ConvertUtils.timestamp_to_human(file.mod_time)}")
            self._print()

    def prompt_action(self, duplicate_set: DuplicateSet, options: List[ActionType]) -> UserAction:
        files = duplicate_set.files
        while True:
            self._print("Choose an action:")
            self._print("  [s] Skip (do nothing)")
            if ActionType.DELETE in options:
                self._print("  [1] Keep file 1, delete file 2")
                self._print("  [2] Keep file 2, delete file 1")
            if ActionType.COMPUTE_HASH in options:
                self._print("  [h] Compute hash to verify files are identical")
            if ActionType.BATCH_BY_DIRECTORY in options:
                dir1, dir2 = files[0].directory, files[1].directory
                self._print(f"  [a] Keep all from {dir1}, delete all from {dir2}")
                self._print(f"  [b] Keep all from {dir2}, delete all from {dir1}")
            self._print("  [q] Quit interactive mode")
            self._print("  [f] Finish selection and proceed to confirmation")

            choice = self.input_func("\nYour choice: ").strip().lower()

            if choice == "s":
                return UserAction.skip()
            if choice == "q":
                return UserAction.quit()
            if choice == "f":
                return UserAction.finish()
            if choice == "h":
                if ActionType.COMPUTE_HASH in options:
                    return UserAction.compute_hash()
                self._print("Hash already computed. Please choose a different option.\n")
                continue
            if choice in ("1", "2") and ActionType.DELETE in options:
                # Keep file N means delete the other member
                return UserAction.delete(duplicate_set, 1 if choice == "1" else 0)
            if choice in ("a", "b") and ActionType.BATCH_BY_DIRECTORY in options:
                keep, delete = (files[0], files[1]) if choice == "a" else (files[1], files[0])
                return UserAction.batch(keep.directory, delete.directory)

            self._print("Invalid choice. Please try again.\n")

    def confirm_deletion(self, actions: List[UserAction], total_bytes: int) -> bool:
        self._print("\n=== Final Confirmation ===")
        self._print(f"The following {len(actions)} file(s) will be deleted:\n")
        for i, action in enumerate(actions, 1):
            self._print(f"{i}. {action.delete_path} ({ConvertUtils.bytes_to_human(action.size)})")

        self._print(f"\nTotal space to be freed: {ConvertUtils.bytes_to_human(total_bytes)}")
        self._print("\nOptions:")
        self._print("  [y] Execute deletions (proceed)")
        self._print("  [n] Cancel all deletions (abort)")

        response = self.input_func("\nYour choice [y/N]: ")
        return response.strip().lower() in ("y", "yes")

    def display_summary(self, summary: SessionSummary) -> None:
        self._print()
        self._print(summary.print_summary())

    def show_message(self, message: str) -> None:
        self._print(f"\n{message}")
