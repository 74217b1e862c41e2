#!/usr/bin/env python3
"""
dfsearch CLI: command line interface for duplicate file search.
Scans a directory tree and prints every set of byte-identical regular files,
followed by the total size taken by redundant copies.
"""
from __future__ import annotations  # Enable postponed evaluation of annotations (PEP 563)
import argparse
import locale
import logging
import os
import sys
from typing import Optional, NoReturn

from dfsearch.core.models import SearchParams, SearchResult, RootPathError, ScanAbortedError
from dfsearch.commands import SearchCommand
from dfsearch.reporting import TextReporter, JsonReporter
from dfsearch.utils.convert_utils import ConvertUtils
from dfsearch.aliases import (
    DESCRIPTION_TEXT, WORKERS_HELP_TEXT, VERIFY_HELP_TEXT, TIMEOUT_HELP_TEXT, EPILOG_TEXT
)

LOG_FORMAT = "%(levelname)-8s | %(name)-25s | %(message)s"


class CLIApplication:
    """Main CLI application controller."""

    def __init__(self):
        self.verbose: bool = False
        self.quiet: bool = False

        # Paths are written back byte-for-byte, whatever their encoding
        sys.stdout.reconfigure(encoding='utf-8', errors='surrogateescape')
        sys.stderr.reconfigure(encoding='utf-8', errors='backslashreplace')

    @staticmethod
    def setup_locale() -> None:
        """Use the user's locale so sizes get the familiar digit grouping."""
        try:
            locale.setlocale(locale.LC_ALL, "")
        except locale.Error:
            logging.getLogger(__name__).debug("Locale not available, keeping C locale")

    @staticmethod
    def parse_args(args=None) -> argparse.Namespace:
        """Parse command-line arguments."""
        parser = argparse.ArgumentParser(
            prog="dfsearch",
            description=DESCRIPTION_TEXT,
            formatter_class=argparse.RawTextHelpFormatter,
            epilog=EPILOG_TEXT
        )

        parser.add_argument(
            "root",
            nargs="?",
            default=".",
            help="Directory to search. Default: current directory"
        )

        parser.add_argument(
            "--workers", "-w",
            default=1,
            type=int,
            metavar='N',
            help=WORKERS_HELP_TEXT
        )
        parser.add_argument(
            "--verify",
            action="store_true",
            help=VERIFY_HELP_TEXT
        )
        parser.add_argument(
            "--timeout", "-t",
            default=None,
            type=str,
            metavar='DURATION',
            help=TIMEOUT_HELP_TEXT
        )
        parser.add_argument(
            "--abort-on-error",
            action="store_true",
            dest="abort_on_error",
            help="Stop at the first unreadable file or directory instead of skipping it"
        )

        # Output options
        parser.add_argument(
            "--json",
            action="store_true",
            help="Print the report as a single JSON document"
        )
        parser.add_argument(
            "--quiet", "-q",
            action="store_true",
            help="Suppress per-entry error messages"
        )
        parser.add_argument(
            "--verbose", "-v",
            action="store_true",
            help="Show debug logging and stage statistics"
        )

        return parser.parse_args(args)

    def create_params(self, args: argparse.Namespace) -> SearchParams:
        """Create SearchParams from CLI arguments."""
        try:
            timeout = ConvertUtils.human_to_seconds(args.timeout) if args.timeout else None
            return SearchParams(
                root_dir=args.root,
                workers=args.workers,
                verify=args.verify,
                timeout=timeout,
                abort_on_error=args.abort_on_error,
            )
        except ValueError as e:
            self.error_exit(f"Parameter error: {e}")

    def progress_callback(self, stage: str, current: int, total: Optional[int]) -> None:
        """CLI progress callback - shows progress on stderr in verbose mode."""
        if not self.verbose:
            return

        if total and total > 0:
            percent = (current / total) * 100
            sys.stderr.write(f"\r  [{stage}] {current}/{total} buckets ({percent:.1f}%)")
        else:
            sys.stderr.write(f"\r  [{stage}] {current} buckets processed...")
        sys.stderr.flush()

    def run_search(self, params: SearchParams, json_output: bool = False) -> Optional[SearchResult]:
        """Execute the search. Returns None when the root directory is unusable."""
        if json_output:
            sink = JsonReporter(sys.stdout)
        else:
            sink = TextReporter(sys.stdout, sys.stderr, show_errors=not self.quiet)

        command = SearchCommand()
        try:
            result = command.execute(
                params,
                sink=sink,
                progress_callback=self.progress_callback if self.verbose else None
            )
        except RootPathError:
            # Not an error exit: nothing was scanned
            print("No such directory.")
            return None
        except ScanAbortedError as e:
            self.error_exit(str(e))

        if self.verbose and result.dedup_stats is not None:
            sys.stderr.write("\n")
            stats = result.stats
            print(f"Scanned {stats.total_files} files ({ConvertUtils.bytes_to_human(stats.total_bytes)}), "
                  f"{len(stats.errors)} skipped", file=sys.stderr)
            print(result.dedup_stats.print_summary(), file=sys.stderr)
        return result

    @staticmethod
    def configure_logging(verbose: bool) -> None:
        logging.basicConfig(
            level=logging.DEBUG if verbose else logging.ERROR,
            format=LOG_FORMAT
        )

    @staticmethod
    def error_exit(message: str, code: int = 1) -> NoReturn:
        """Print error and exit."""
        print(f"Error: {message}", file=sys.stderr)
        sys.exit(code)

    def run(self, args=None) -> None:
        """Main entry point."""
        args = self.parse_args(args)
        self.verbose = args.verbose
        self.quiet = args.quiet

        self.configure_logging(self.verbose)
        self.setup_locale()

        params = self.create_params(args)
        self.run_search(params, json_output=args.json)


def main() -> None:
    """Application entry point."""
    app = CLIApplication()
    try:
        app.run()
    except KeyboardInterrupt:
        print("\nOperation cancelled by user (Ctrl+C)", file=sys.stderr)
        sys.exit(130)
    except Exception as e:
        if os.environ.get("DEBUG"):
            raise
        print(f"Unexpected error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
