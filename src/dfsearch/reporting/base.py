from dfsearch.core.interfaces import ReportSink
from dfsearch.core.models import DuplicateSet, EntryError, ScanStats, SearchResult


class NullReporter(ReportSink):
    """Discards every event. Default sink for library callers."""

    def on_scan_start(self, root_dir: str) -> None:
        pass

    def on_empty_file(self, path: str) -> None:
        pass

    def on_scan_complete(self, stats: ScanStats) -> None:
        pass

    def on_duplicate_set(self, dup_set: DuplicateSet) -> None:
        pass

    def on_error(self, error: EntryError) -> None:
        pass

    def on_finish(self, result: SearchResult) -> None:
        pass
