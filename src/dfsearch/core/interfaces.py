"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

interfaces.py

Defines core interfaces (Protocols) used throughout the duplicate search.
These protocols enforce structural typing using Python's `typing.Protocol` so the
pipeline stages stay decoupled from the filesystem and from presentation.

Key Components:
---------------
- DirEntry: The directory-entry capability the scanner relies on.
- HashAlgorithm: Standardized interface for one-shot and incremental digests.
- Hasher: Interface for fingerprint, full-content and byte-compare operations.
- FileScanner: Interface for walking a tree and yielding FileRecords.
- FileGrouper: Interface for size and digest based grouping.
- ReportSink: Receives scan events and duplicate sets; renders nothing by itself.
"""

from typing import Protocol, List, Dict, Iterable, Iterator, Tuple, Optional, Callable, Any
from dfsearch.core.models import (
    FileRecord,
    DuplicateSet,
    EntryError,
    ScanStats,
    SearchResult,
)


# ===== Interfaces =====

class DirEntry(Protocol):
    """
    Minimal view of a directory entry. `os.DirEntry` satisfies it.
    """
    path: str

    def is_file(self, *, follow_symlinks: bool = True) -> bool: ...
    def is_dir(self, *, follow_symlinks: bool = True) -> bool: ...
    def stat(self, *, follow_symlinks: bool = True) -> Any: ...


class HashState(Protocol):
    """Incremental hash state (xxhash.xxh3_128 instances satisfy it)."""
    def update(self, data: Any) -> None: ...
    def digest(self) -> bytes: ...
    def reset(self) -> None: ...


class HashAlgorithm(Protocol):
    """
    Interface for generic hash algorithms.

    Allows plugging in a different non-cryptographic hash without affecting
    the rest of the pipeline.
    """

    @staticmethod
    def hash(data: bytes) -> bytes:
        """Computes the digest of the provided byte data."""
        ...

    @staticmethod
    def new_state() -> HashState:
        """Returns a fresh incremental state."""
        ...


class Hasher(Protocol):
    """Interface for hashing and comparing file content."""
    def compute_fingerprint(self, path: str, size: int) -> Tuple[bytes, bool]: ...
    def compute_full_hash(self, path: str) -> bytes: ...
    def files_identical(self, path_a: str, path_b: str) -> bool: ...
    def fork(self) -> "Hasher": ...


class FileScanner(Protocol):
    """
    Interface for scanning file systems and collecting file metadata.
    """
    stats: ScanStats

    def scan(
        self,
        on_empty: Optional[Callable[[str], None]] = None,
        stopped_flag: Optional[Callable[[], bool]] = None
    ) -> Iterator[FileRecord]:
        """
        Lazily yield a FileRecord for every non-empty regular file.

        Args:
            on_empty: Called with the path of every zero-length file as soon as it is seen.
            stopped_flag: Function that returns True if the walk should end early.
        """
        ...


class FileGrouper(Protocol):
    """
    Interface for grouping files by size or content digest.
    """
    def group_by_size(self, records: Iterable[FileRecord]) -> Dict[int, List[str]]:
        """Bucket paths by exact byte length, dropping singleton buckets."""
        ...

    def group_by_fingerprint(self, paths: List[str], size: int) -> Dict[bytes, List[str]]:
        """Group paths by their phase-1 fingerprint."""
        ...

    def group_by_full_hash(self, paths: List[str]) -> Dict[bytes, List[str]]:
        """Group paths by their full content digest."""
        ...


class ReportSink(Protocol):
    """
    Receives everything the core produces. Implementations decide how (and whether)
    to render it; the core never writes to stdout itself.
    """
    def on_scan_start(self, root_dir: str) -> None: ...
    def on_empty_file(self, path: str) -> None: ...
    def on_scan_complete(self, stats: ScanStats) -> None: ...
    def on_duplicate_set(self, dup_set: DuplicateSet) -> None: ...
    def on_error(self, error: EntryError) -> None: ...
    def on_finish(self, result: SearchResult) -> None: ...
