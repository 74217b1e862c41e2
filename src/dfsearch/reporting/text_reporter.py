"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

reporting/text_reporter.py
Plain-text report, written while the search runs:

    Empty file list:
    ./a/empty.txt

    Empty: 1
    Total: 6

     #1 (2) 50 B
    ./b
    ./c

    Redundant data size: 50 B

    Done in 0.004s.
"""
import sys
from typing import TextIO, Optional

from dfsearch.core.models import DuplicateSet, EntryError, ScanStats, SearchResult
from dfsearch.reporting.base import NullReporter
from dfsearch.utils.convert_utils import ConvertUtils


class TextReporter(NullReporter):
    """
    Writes the report to `stream` and per-entry diagnostics to `err_stream`.
    """

    def __init__(
            self,
            stream: Optional[TextIO] = None,
            err_stream: Optional[TextIO] = None,
            show_errors: bool = True):
        self.stream = stream or sys.stdout
        self.err_stream = err_stream or sys.stderr
        self.show_errors = show_errors

    def on_scan_start(self, root_dir: str) -> None:
        self.stream.write("Empty file list:\n")

    def on_empty_file(self, path: str) -> None:
        self.stream.write(f"{path}\n")

    def on_scan_complete(self, stats: ScanStats) -> None:
        self.stream.write(f"\nEmpty: {stats.empty_count}\nTotal: {stats.total_files}\n\n")
        self.stream.flush()

    def on_duplicate_set(self, dup_set: DuplicateSet) -> None:
        size = ConvertUtils.group_digits(dup_set.size)
        lines = [f" #{dup_set.index} ({dup_set.count}) {size} B"]
        lines.extend(dup_set.members)
        self.stream.write("\n".join(lines) + "\n\n")

    def on_error(self, error: EntryError) -> None:
        if self.show_errors:
            self.err_stream.write(f"Skipped {error.path} ({error.stage}): {error.message}\n")

    def on_finish(self, result: SearchResult) -> None:
        if result.partial:
            self.stream.write("(partial results: deadline exceeded)\n")
        redundant = ConvertUtils.group_digits(result.redundant_bytes)
        self.stream.write(f"Redundant data size: {redundant} B\n\nDone in {result.elapsed:.3f}s.\n")
        self.stream.flush()

        if result.stats.errors:
            self.err_stream.write(f"Errors: {len(result.stats.errors)}\n")
