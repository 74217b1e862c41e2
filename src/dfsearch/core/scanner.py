"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/scanner.py
Implements the directory scanner.
Features:
- Uses os.scandir so type and size come from the directory entry itself
- Recursively scans directories without following symbolic links
- Yields FileRecords lazily, reports zero-length files as soon as they are seen
- Isolates per-entry errors (permission denied, vanished entries) instead of aborting
"""

import os
from typing import List, Iterator, Optional, Callable
import logging

logger = logging.getLogger(__name__)

# Local imports
from dfsearch.core.models import FileRecord, ScanStats, EntryError, RootPathError, Stage
from dfsearch.core.interfaces import FileScanner, DirEntry


class FileScannerImpl(FileScanner):
    """
    Walks a directory tree and yields every non-empty regular file.

    Attributes:
        root_dir: Root directory to scan
        stats: Counters for all regular files seen so far (empty ones included)
        error_callback: Receives an EntryError for every entry that could not be read
    """

    def __init__(
        self,
        root_dir: str,
        error_callback: Optional[Callable[[EntryError], None]] = None
    ):
        self.root_dir = root_dir
        self.stats = ScanStats()
        self.error_callback = error_callback

    def validate_root(self) -> None:
        """Raise RootPathError unless the root exists and is a directory."""
        if not os.path.exists(self.root_dir):
            logger.error(f"Directory does not exist: {self.root_dir}")
            raise RootPathError(self.root_dir, "Directory does not exist")
        if not os.path.isdir(self.root_dir):
            logger.error(f"Not a directory: {self.root_dir}")
            raise RootPathError(self.root_dir, "Not a directory")

    def scan(
            self,
            on_empty: Optional[Callable[[str], None]] = None,
            stopped_flag: Optional[Callable[[], bool]] = None) -> Iterator[FileRecord]:
        """
        Depth-first walk yielding a FileRecord per non-empty regular file.
        Entries of a directory are visited in name order so repeated runs agree.
        """
        self.validate_root()
        logger.debug(f"Scanning directory: {self.root_dir}")

        pending_dirs = [self.root_dir]
        while pending_dirs:
            if stopped_flag and stopped_flag():
                logger.debug("Scan interrupted")
                return

            directory = pending_dirs.pop()
            try:
                with os.scandir(directory) as it:
                    entries = sorted(it, key=lambda e: e.name)
            except OSError as e:
                self._report_error(directory, e)
                continue

            subdirs: List[str] = []
            for entry in entries:
                record = self._process_entry(entry, subdirs, on_empty)
                if record is not None:
                    yield record

            # Reversed so that pop() descends in name order
            pending_dirs.extend(reversed(subdirs))

        logger.debug(
            f"Scan completed: {self.stats.total_files} files, "
            f"{self.stats.empty_count} empty, {len(self.stats.errors)} errors"
        )

    def _process_entry(
            self,
            entry: DirEntry,
            subdirs: List[str],
            on_empty: Optional[Callable[[str], None]]) -> Optional[FileRecord]:
        """
        Classify one directory entry.
        Directories are queued, non-regular entries are skipped, regular files are counted.
        """
        try:
            if entry.is_dir(follow_symlinks=False):
                subdirs.append(entry.path)
                return None
            if not entry.is_file(follow_symlinks=False):
                logger.debug(f"Skipping non-regular entry: {entry.path}")
                return None
            size = entry.stat(follow_symlinks=False).st_size
        except OSError as e:
            self._report_error(entry.path, e)
            return None

        self.stats.total_files += 1
        self.stats.total_bytes += size

        if size == 0:
            self.stats.empty_count += 1
            self.stats.empty_files.append(entry.path)
            if on_empty:
                on_empty(entry.path)
            return None

        return FileRecord(path=entry.path, size=size)

    def _report_error(self, path: str, exc: OSError) -> None:
        error = EntryError.from_exception(path, Stage.SCAN, exc)
        logger.warning(f"Skipping {path}: {error.message}")
        self.stats.add_error(error)
        if self.error_callback:
            self.error_callback(error)
