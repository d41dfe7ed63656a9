#!/usr/bin/env python3
"""
dupfinder CLI: find files that share a name across directories and review them interactively.
Nothing is deleted outside interactive mode, and interactive mode always asks for a final confirmation.
"""
from __future__ import annotations  # Enable postponed evaluation of annotations (PEP 563)
import argparse
import logging
import os
import sys
import time
from pathlib import Path
from typing import List, NoReturn

logging.basicConfig(
    level=logging.ERROR,
    format="%(levelname)-8s | %(name)-25s | %(message)s"
)

# === EARLY DEPENDENCY VALIDATION ===
_MISSING_DEPS = []
try:
    import send2trash
except ImportError:
    _MISSING_DEPS.append("send2trash")

try:
    import xxhash
except ImportError:
    _MISSING_DEPS.append("xxhash")

if _MISSING_DEPS:
    print("❌ Missing required dependencies:", file=sys.stderr)
    print(f"   pip install {' '.join(_MISSING_DEPS)}", file=sys.stderr)
    print("\nOr install the package with its dependencies:", file=sys.stderr)
    print("   pip install -e .", file=sys.stderr)
    sys.exit(1)

# === NORMAL IMPORTS (after validation) ===
from dupfinder.commands import FindDuplicatesCommand
from dupfinder.console import ConsoleSessionUI
from dupfinder.core.models import PairComparison, ScanParams
from dupfinder.core.session import run_interactive_session
from dupfinder.formatter import format_all_comparisons
from dupfinder.services.file_service import FileService
from dupfinder.utils.convert_utils import ConvertUtils
from dupfinder.aliases import (
    COMPARE_HASH_HELP_TEXT, EXTENSIONS_HELP_TEXT, INTERACTIVE_HELP_TEXT, EPILOG_TEXT
)


class CLIApplication:
    """Main CLI application controller."""

    def __init__(self):
        self.start_time: float = time.time()
        self.verbose: bool = False
        self.quiet: bool = False
        self.command = FindDuplicatesCommand()

        # Fix encoding for Windows consoles to prevent UnicodeEncodeError
        if hasattr(sys.stdout, "reconfigure"):
            sys.stdout.reconfigure(encoding='utf-8')
            sys.stderr.reconfigure(encoding='utf-8')

    @staticmethod
    def parse_args(args=None) -> argparse.Namespace:
        """Parse command-line arguments."""
        parser = argparse.ArgumentParser(
            prog="dupfinder",
            description="dupfinder: find duplicate files across multiple directories",
            formatter_class=argparse.RawTextHelpFormatter,
            epilog=EPILOG_TEXT
        )

        parser.add_argument(
            "directories",
            nargs="+",
            metavar="DIRECTORY",
            help="Directories to compare (at least 2)"
        )

        # Scanning options
        parser.add_argument(
            "--recursive", "-r",
            dest="recursive",
            action="store_true",
            default=True,
            help="Search directories recursively (default)"
        )
        parser.add_argument(
            "--no-recursive",
            dest="recursive",
            action="store_false",
            help="Only consider files directly inside each directory"
        )
        parser.add_argument(
            "--min-size", "-m",
            default="0",
            type=str,
            metavar='',
            help="Minimum file size (e.g., 500KB, 1MB). Default: 0"
        )
        parser.add_argument(
            "--extensions", "-e",
            nargs="+",
            default=[],
            type=str,
            metavar='',
            help=EXTENSIONS_HELP_TEXT
        )
        parser.add_argument(
            "--max-depth", "-L",
            default=-1,
            type=int,
            metavar='',
            help="Maximum subdirectory depth below each directory (-1 for unlimited).\n"
                 "0 = only files directly inside each directory, 1 = one level down. Default: -1"
        )

        # Comparison options
        parser.add_argument(
            "--compare-hash", "-H",
            action="store_true",
            help=COMPARE_HASH_HELP_TEXT
        )
        parser.add_argument(
            "--workers", "-w",
            default=os.cpu_count() or 1,
            type=int,
            metavar='',
            help="Number of parallel workers (hashing uses twice as many). Default: CPU count"
        )

        # Actions
        parser.add_argument(
            "--interactive", "-i",
            action="store_true",
            help=INTERACTIVE_HELP_TEXT
        )
        parser.add_argument(
            "--trash",
            action="store_true",
            help="In interactive mode, move files to system trash instead of deleting them"
        )

        # Output options
        parser.add_argument(
            "--quiet", "-q",
            action="store_true",
            help="Suppress non-essential output"
        )
        parser.add_argument(
            "--verbose", "-v",
            action="store_true",
            help="Show progress details and timing"
        )

        return parser.parse_args(args)

    def validate_args(self, args: argparse.Namespace) -> List[str]:
        """
        Validate command-line arguments before execution.
        Returns the directories that exist, resolved to absolute paths.
        """
        if args.trash and not args.interactive:
            self.error_exit("--trash can only be used with --interactive")

        # Interactive review cannot run without a terminal
        if args.interactive:
            if not sys.stdin.isatty() or not sys.stdout.isatty():
                self.error_exit(
                    "Cannot start interactive mode in non-interactive session.\n"
                    "Run without --interactive when piping output or running in scripts."
                )

        if args.workers < 1:
            self.error_exit("Number of workers must be at least 1")

        if args.max_depth < -1:
            self.error_exit("Maximum depth must be -1 (unlimited) or a non-negative number")

        try:
            ConvertUtils.human_to_bytes(args.min_size)
        except ValueError as e:
            self.error_exit(f"Invalid size format: {e}")

        valid_dirs = []
        for directory in args.directories:
            path = Path(directory)
            if not path.exists():
                self.warning(f"Skipping {directory}: directory not found")
                continue
            if not path.is_dir():
                self.warning(f"Skipping {directory}: not a directory")
                continue
            resolved = str(path.resolve())
            if resolved not in valid_dirs:
                valid_dirs.append(resolved)

        if len(valid_dirs) < 2:
            self.error_exit(f"Need at least 2 valid directories to compare, found only {len(valid_dirs)}")

        if len(valid_dirs) < len(args.directories) and not self.quiet:
            print(f"Comparing {len(valid_dirs)} out of {len(args.directories)} directories:", file=sys.stderr)
            for directory in valid_dirs:
                print(f"  ✓ {directory}", file=sys.stderr)
            print(file=sys.stderr)

        return valid_dirs

    def create_params(self, args: argparse.Namespace, directories: List[str]) -> ScanParams:
        """Create ScanParams from CLI arguments."""
        # Extensions may be given space separated, comma separated, or both
        extensions = []
        for item in args.extensions:
            extensions.extend(ext for ext in item.split(",") if ext.strip())

        try:
            return ScanParams(
                directories=directories,
                recursive=args.recursive,
                min_size_bytes=ConvertUtils.human_to_bytes(args.min_size),
                extensions=extensions,
                max_depth=args.max_depth,
                compare_hash=args.compare_hash,
                workers=args.workers,
                interactive=args.interactive,
                use_trash=args.trash,
            )
        except ValueError as e:
            self.error_exit(f"Parameter error: {e}")

    def run_comparison(self, params: ScanParams) -> List[PairComparison]:
        """Execute scan and pairwise comparison."""
        if self.verbose:
            print(f"Scanning {len(params.directories)} directories...", file=sys.stderr)

        try:
            return self.command.execute(params)
        except RuntimeError as e:
            self.error_exit(f"Error scanning directories: {e}")

    def output_results(self, comparisons: List[PairComparison], params: ScanParams) -> None:
        """Print formatted comparison results to stdout."""
        if self.quiet:
            return
        print(format_all_comparisons(comparisons, params.compare_hash), end="")

    def run_interactive(self, comparisons: List[PairComparison], params: ScanParams) -> None:
        """Run the interactive deletion session over the comparison results."""
        print("\n--- Entering Interactive Deletion Mode ---", file=sys.stderr)

        sets = self.command.build_sets(comparisons, params)
        if not sets:
            basis = " (based on content hash)" if params.compare_hash else ""
            print(f"No duplicate files found{basis}", file=sys.stderr)

        try:
            run_interactive_session(
                sets,
                ui=ConsoleSessionUI(),
                deleter=FileService.get_deleter(params.use_trash),
                hasher=self.command.hasher,
                directories=params.directories,
                workers=params.hash_workers,
            )
        except EOFError:
            self.error_exit("Interactive session error: failed to read input. No files were deleted.")

    def warning(self, message: str) -> None:
        """Print a warning message to stderr."""
        if not self.quiet:
            print(f"⚠️  Warning: {message}", file=sys.stderr)

    @staticmethod
    def error_exit(message: str, code: int = 1) -> NoReturn:
        """Print error and exit."""
        print(f"❌ Error: {message}", file=sys.stderr)
        sys.exit(code)

    def run(self, argv=None) -> None:
        """Main entry point."""
        args = self.parse_args(argv)
        self.verbose = args.verbose
        self.quiet = args.quiet
        if self.verbose:
            logging.getLogger("dupfinder").setLevel(logging.INFO)

        directories = self.validate_args(args)
        params = self.create_params(args, directories)

        comparisons = self.run_comparison(params)
        self.output_results(comparisons, params)

        if params.interactive:
            self.run_interactive(comparisons, params)

        elapsed = time.time() - self.start_time
        if self.verbose:
            print(f"\n✅ Completed in {elapsed:.2f} seconds", file=sys.stderr)


def main() -> None:
    """Application entry point."""
    app = CLIApplication()
    try:
        app.run()
    except KeyboardInterrupt:
        print("\n⚠️  Operation cancelled by user (Ctrl+C)", file=sys.stderr)
        sys.exit(130)
    except Exception as e:
        if os.environ.get("DEBUG"):
            raise
        print(f"❌ Unexpected error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
