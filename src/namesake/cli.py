#!/usr/bin/env python3
"""
Namesake CLI — Command line interface for name-based duplicate file detection.
Runs the same scan engine as the GUI with console output.
Ctrl+C once stops the scan and prints partial results; twice cancels it.
"""
from __future__ import annotations  # Enable postponed evaluation of annotations (PEP 563)
import argparse
import sys
import os
import time
from pathlib import Path
from typing import List, NoReturn, Optional, Sequence
import logging

from namesake.core.engine import ScanEngine
from namesake.core.models import FolderNode, MatchBucket, MatchEntry, ScanParams, ScanResult, ScanState
from namesake.core.results import group_matches_by_name
from namesake.utils.convert_utils import ConvertUtils

LOG_FORMAT = "%(levelname)-8s | %(name)-25s | %(message)s"

BUCKET_CHOICES = ["exact", "close", "both"]

EPILOG_TEXT = """
Examples:
  Find files sharing a name in Downloads
  %(prog)s -i ~/Downloads

  Show only exact matches (same name, size and creation time) and the folder tree
  %(prog)s -i ~/Downloads --bucket exact --tree

  Show progress while scanning
  %(prog)s -i ~/Downloads -v

Press Ctrl+C once to stop and keep partial results, twice to cancel.
"""

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_CANCELED = 130


class CLIApplication:
    """Main CLI application controller."""

    def __init__(self):
        self.start_time: float = time.time()
        self.verbose: bool = False
        self.quiet: bool = False
        self.engine: Optional[ScanEngine] = None

        # Fix encoding for Windows consoles to prevent UnicodeEncodeError
        for stream in (sys.stdout, sys.stderr):
            reconfigure = getattr(stream, "reconfigure", None)
            if reconfigure is not None:
                reconfigure(encoding='utf-8')

    @staticmethod
    def parse_args(args=None) -> argparse.Namespace:
        """Parse command-line arguments."""
        parser = argparse.ArgumentParser(
            prog="namesake",
            description="Namesake — find files that share a name, classified as exact or close matches",
            formatter_class=argparse.RawTextHelpFormatter,
            epilog=EPILOG_TEXT
        )

        parser.add_argument(
            "--input", "-i",
            required=True,
            type=str,
            help="Input directory to scan for duplicates"
        )
        parser.add_argument(
            "--bucket", "-b",
            choices=BUCKET_CHOICES,
            default="both",
            type=str,
            help="Which matches to print:\n"
                 f"  exact : {MatchBucket.EXACT.description}\n"
                 f"  close : {MatchBucket.CLOSE.description}\n"
                 "  both  : exact and close (default)"
        )
        parser.add_argument(
            "--tree", "-t",
            action="store_true",
            help="Print the folder tree with per-folder exact/close counts"
        )
        parser.add_argument(
            "--follow-symlinks",
            action="store_true",
            help="Follow symbolic links to files and directories"
        )
        parser.add_argument(
            "--quiet", "-q",
            action="store_true",
            help="Suppress non-essential output"
        )
        parser.add_argument(
            "--verbose", "-v",
            action="store_true",
            help="Show progress while scanning"
        )
        parser.add_argument(
            "--debug",
            action="store_true",
            help="Enable debug logging"
        )

        return parser.parse_args(args)

    def validate_args(self, args: argparse.Namespace) -> None:
        """Validate command-line arguments before execution."""
        if args.quiet and args.verbose:
            self.error_exit("--quiet and --verbose cannot be used together")

        root_path = Path(args.input).expanduser()
        if not root_path.exists():
            self.error_exit(f"Directory not found: {args.input}")
        if not root_path.is_dir():
            self.error_exit(f"Path is not a directory: {args.input}")

    def create_params(self, args: argparse.Namespace) -> ScanParams:
        """Create ScanParams from CLI arguments."""
        try:
            return ScanParams(
                root_dir=args.input,
                follow_symlinks=args.follow_symlinks,
            )
        except ValueError as e:
            self.error_exit(f"Parameter error: {e}")

    def progress_callback(self, processed: int, total: int) -> None:
        """CLI progress callback - shows progress in console."""
        if not self.verbose:
            return

        if total > 0:
            percent = (processed / total) * 100
            sys.stderr.write(f"\r  [comparing] {processed}/{total} files ({percent:.1f}%)")
        else:
            sys.stderr.write(f"\r  [comparing] {processed} files processed...")
        sys.stderr.flush()

    def run_scan(self, params: ScanParams) -> ScanResult:
        """
        Run one scan and wait for it.
        First Ctrl+C requests stop (keep partial), second requests cancel, third exits.
        """
        self.engine = ScanEngine(on_progress=self.progress_callback)
        self.engine.start_scan(params)
        interrupts = 0

        while True:
            try:
                if self.engine.wait(timeout=0.1):
                    break
            except KeyboardInterrupt:
                interrupts += 1
                if interrupts == 1:
                    self.warning("Stopping scan, partial results will be shown (Ctrl+C again to cancel)")
                    self.engine.request_stop()
                elif interrupts == 2:
                    self.warning("Canceling scan")
                    self.engine.request_cancel()
                else:
                    raise

        if self.verbose:
            sys.stderr.write("\n")

        result = self.engine.last_result
        if result is None:
            self.error_exit("Scan finished without a result")
        return result

    @staticmethod
    def format_entry(entry: MatchEntry) -> str:
        if entry.bucket is MatchBucket.CLOSE:
            # Close matches differ in size or date, so show both
            return f"   {entry.path} | {ConvertUtils.size_and_date(entry.size, entry.created_at)}"
        return f"   {entry.path} [{ConvertUtils.bytes_to_human(entry.size)}]"

    def output_bucket(self, bucket: MatchBucket, entries: Sequence[MatchEntry]) -> None:
        groups = group_matches_by_name(entries)
        print(f"\n📁 {bucket.display_name}: {len(entries)} files")
        if not groups:
            print("   none")
            return
        for group in groups:
            print(f"  {group.name}")
            for entry in group.entries:
                print(self.format_entry(entry))

    @staticmethod
    def output_tree(tree: FolderNode) -> None:
        print("\n🗂  Folder tree (exact / close)")
        for depth, node in tree.iter_nodes():
            label = node.path if depth == 0 else node.name
            print(f"{'  ' * depth}{label}  {node.exact_count} / {node.close_count}")

    def output_results(self, result: ScanResult, bucket: str, show_tree: bool) -> None:
        """Print matches grouped by name, and optionally the folder tree."""
        if self.quiet:
            return

        print(result.outcome)
        if not result.state.keeps_results:
            return

        if bucket in ("exact", "both"):
            self.output_bucket(MatchBucket.EXACT, result.exact)
        if bucket in ("close", "both"):
            self.output_bucket(MatchBucket.CLOSE, result.close)
        if show_tree and result.folder_tree is not None:
            self.output_tree(result.folder_tree)

    def warning(self, message: str) -> None:
        """Print a warning message to stderr."""
        if not self.quiet:
            print(f"\n⚠️  {message}", file=sys.stderr)

    @staticmethod
    def error_exit(message: str, code: int = EXIT_ERROR) -> NoReturn:
        """Print error and exit."""
        print(f"❌ Error: {message}", file=sys.stderr)
        sys.exit(code)

    @staticmethod
    def exit_code(result: ScanResult) -> int:
        return {
            ScanState.COMPLETED: EXIT_OK,
            ScanState.STOPPED_PARTIAL: EXIT_OK,
            ScanState.CANCELED: EXIT_CANCELED,
            ScanState.FAILED: EXIT_ERROR,
        }[result.state]

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Main entry point. Returns the process exit code."""
        args = self.parse_args(argv)
        self.verbose = args.verbose
        self.quiet = args.quiet
        logging.getLogger().setLevel(logging.DEBUG if args.debug else logging.ERROR)

        self.validate_args(args)
        params = self.create_params(args)

        if not self.quiet:
            print(f"Scanning directory: {params.root_dir}")

        result = self.run_scan(params)
        self.output_results(result, bucket=args.bucket, show_tree=args.tree)

        if result.state is ScanState.FAILED:
            print(f"❌ Error: {result.outcome.message}", file=sys.stderr)

        elapsed = time.time() - self.start_time
        if self.verbose:
            print(f"\nFinished in {elapsed:.2f} seconds "
                  f"({result.processed}/{result.total} files compared)")
        return self.exit_code(result)


def main() -> None:
    """Application entry point."""
    logging.basicConfig(level=logging.ERROR, format=LOG_FORMAT)
    app = CLIApplication()
    try:
        code = app.run()
    except KeyboardInterrupt:
        print("\n⚠️  Operation cancelled by user (Ctrl+C)")
        sys.exit(EXIT_CANCELED)
    except Exception as e:
        if os.environ.get("DEBUG"):
            raise
        print(f"❌ Unexpected error: {e}", file=sys.stderr)
        sys.exit(EXIT_ERROR)
    sys.exit(code)


if __name__ == "__main__":
    main()
