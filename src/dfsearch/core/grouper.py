"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/grouper.py
Implements size bucketing and digest-based grouping of file paths.
"""

from typing import List, Dict, Iterable, Any, Callable, Optional
from collections import defaultdict
import logging

from dfsearch.core.interfaces import FileGrouper, Hasher
from dfsearch.core.models import FileRecord, EntryError, Stage
from dfsearch.core.hasher import HasherImpl

logger = logging.getLogger(__name__)


class FileGrouperImpl(FileGrouper):
    """
    Groups paths by size or by an xxHash-based digest.
    Uses an injected Hasher instance; each concurrent task gets its own grouper.
    """

    def __init__(
            self,
            hasher: Optional[Hasher] = None,
            error_callback: Optional[Callable[[EntryError], None]] = None):
        self.hasher = hasher or HasherImpl()
        self.error_callback = error_callback

    @staticmethod
    def group_by_size(records: Iterable[FileRecord]) -> Dict[int, List[str]]:
        """
        Buckets paths by exact byte length, keeping the order they arrived in.
        Buckets with a single path are dropped: a unique size cannot have a duplicate.
        """
        buckets = defaultdict(list)
        for record in records:
            buckets[record.size].append(record.path)
        return {size: paths for size, paths in buckets.items() if len(paths) >= 2}

    def group_by_fingerprint(self, paths: List[str], size: int) -> Dict[bytes, List[str]]:
        """Groups same-size paths by their phase-1 fingerprint."""
        return self._group_by(
            paths, lambda p: self.hasher.compute_fingerprint(p, size)[0], Stage.FINGERPRINT)

    def group_by_full_hash(self, paths: List[str]) -> Dict[bytes, List[str]]:
        """Groups paths by full content hash."""
        return self._group_by(paths, self.hasher.compute_full_hash, Stage.FULL)

    def _group_by(
            self,
            paths: List[str],
            key_func: Callable[[str], Any],
            stage: str) -> Dict[Any, List[str]]:
        """
        Helper method to group paths by any computed key.
        Args:
            paths: Paths to group
            key_func: Function that computes a hashable key from a path
            stage: Stage name recorded with any read error
        Returns:
            Dict[key, List[str]] holding only groups of two or more paths,
            in the order the keys were first seen
        """
        groups = defaultdict(list)
        for path in paths:
            try:
                key = key_func(path)
            except OSError as e:
                self.report_error(EntryError.from_exception(path, stage, e))
                continue
            groups[key].append(path)

        return {key: group for key, group in groups.items() if len(group) >= 2}

    def report_error(self, error: EntryError) -> None:
        logger.warning(f"Excluding {error.path} from {error.stage}: {error.message}")
        if self.error_callback:
            self.error_callback(error)
