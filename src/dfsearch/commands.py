"""
Unified command orchestrator for the duplicate search.
This is the single entry point for business logic, used by the CLI and by library callers.
"""
from typing import Optional, Callable
import logging

from dfsearch.core.models import (
    SearchParams, SearchResult, EntryError, ScanAbortedError, DeduplicationStats)
from dfsearch.core.scanner import FileScannerImpl
from dfsearch.core.hasher import HasherImpl
from dfsearch.core.deduplicator import DeduplicatorImpl
from dfsearch.core.builder import DuplicateSetBuilder
from dfsearch.core.interfaces import ReportSink
from dfsearch.reporting.base import NullReporter
from dfsearch.utils.timing import Stopwatch

logger = logging.getLogger(__name__)


class SearchCommand:
    """
    Orchestrates the entire search:
    1. Validate the root directory (RootPathError if missing / not a directory)
    2. Scan, reporting empty files as they are found
    3. Bucket by size, then fingerprint and full-hash each bucket
    4. Build numbered duplicate sets and hand them to the sink

    Usage:
        params = SearchParams(root_dir="~/Downloads", workers=4)
        result = SearchCommand().execute(params, sink=TextReporter())
    """

    def __init__(self):
        self.sink: ReportSink = NullReporter()
        self.params: Optional[SearchParams] = None

    def execute(
            self,
            params: SearchParams,
            sink: Optional[ReportSink] = None,
            stopped_flag: Optional[Callable[[], bool]] = None,
            progress_callback: Optional[Callable[[str, int, Optional[int]], None]] = None
    ) -> SearchResult:
        """
        Run a search with the given parameters.

        Raises:
            RootPathError: If the root is missing or not a directory
            ScanAbortedError: On the first per-entry error when params.abort_on_error is set
        """
        self.params = params
        self.sink = sink or NullReporter()
        stopwatch = Stopwatch().start()

        scanner = FileScannerImpl(params.root_dir, error_callback=self._on_error)
        scanner.validate_root()

        config = params.hashing_config
        deduplicator = DeduplicatorImpl(
            hasher=HasherImpl(config=config),
            config=config,
            workers=params.workers,
            verify=params.verify,
            timeout=params.timeout,
        )
        dedup_stats = DeduplicationStats()

        self.sink.on_scan_start(params.root_dir)
        records = scanner.scan(on_empty=self.sink.on_empty_file, stopped_flag=stopped_flag)
        buckets = deduplicator.bucket(records, dedup_stats)
        self.sink.on_scan_complete(scanner.stats)

        def on_hash_error(error: EntryError) -> None:
            scanner.stats.add_error(error)
            self._on_error(error)

        groups, dedup_stats = deduplicator.find_duplicates(
            buckets,
            stats=dedup_stats,
            error_callback=on_hash_error,
            stopped_flag=stopped_flag,
            progress_callback=progress_callback,
        )

        builder = DuplicateSetBuilder(self.sink)
        duplicate_sets = builder.build(groups)

        result = SearchResult(
            root_dir=params.root_dir,
            duplicate_sets=duplicate_sets,
            stats=scanner.stats,
            redundant_bytes=builder.redundant_bytes,
            elapsed=stopwatch.stop(),
            partial=dedup_stats.partial,
            dedup_stats=dedup_stats,
        )
        self.sink.on_finish(result)
        return result

    def _on_error(self, error: EntryError) -> None:
        self.sink.on_error(error)
        if self.params is not None and self.params.abort_on_error:
            raise ScanAbortedError(error)
