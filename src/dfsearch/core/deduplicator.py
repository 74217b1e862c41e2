"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

deduplicator.py
Implements the pipeline-based duplicate search.

    size buckets → fingerprint → full hash (large files only) → [byte compare]

Buckets are independent once formed. With more than one worker they are hashed
on a thread pool; every task owns a forked hasher (and so its own read buffers)
and returns its local results, which the coordinator merges in bucket order.
"""
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import List, Tuple, Iterable, Optional, Callable
import logging

from dfsearch.core.models import (
    FileRecord, CandidateGroup, DeduplicationStats, EntryError, Stage)
from dfsearch.core.config import HashingConfig
from dfsearch.core.grouper import FileGrouperImpl
from dfsearch.core.hasher import HasherImpl
from dfsearch.core.interfaces import Hasher
from dfsearch.core.stages import SizeStageImpl, FingerprintStage, FullHashStage, ByteCompareStage

logger = logging.getLogger(__name__)


@dataclass
class BucketResult:
    """Local output of one bucket task, merged by the coordinator."""
    size: int
    groups: List[CandidateGroup] = field(default_factory=list)
    errors: List[EntryError] = field(default_factory=list)
    stats: DeduplicationStats = field(default_factory=DeduplicationStats)
    skipped: bool = False


# =============================
# Main Deduplicator Class
# =============================
class DeduplicatorImpl:
    """
    Runs the staged hashing pipeline over size buckets and collects statistics.

    Args:
        hasher: Prototype hasher; forked once per bucket task when workers > 1
        workers: Number of buckets hashed concurrently (1 = sequential)
        verify: Add a byte-for-byte comparison after the digest stages
        timeout: Seconds after which buckets not yet started are skipped
    """
    def __init__(
            self,
            hasher: Optional[Hasher] = None,
            config: Optional[HashingConfig] = None,
            workers: int = 1,
            verify: bool = False,
            timeout: Optional[float] = None,
            clock: Callable[[], float] = time.monotonic):
        self.config = config or HashingConfig()
        self.hasher = hasher or HasherImpl(config=self.config)
        self.workers = workers
        self.verify = verify
        self.timeout = timeout
        self.clock = clock
        self._deadline: Optional[float] = None

    def bucket(self, records: Iterable[FileRecord], stats: Optional[DeduplicationStats] = None) -> List[CandidateGroup]:
        """Consumes the record stream and returns the multi-member size buckets."""
        start_time = time.time()
        buckets = SizeStageImpl(FileGrouperImpl(self.hasher)).process(records)
        if stats is not None:
            stats.update_stage(
                Stage.SIZE,
                groups_found=len(buckets),
                files_processed=sum(b.count for b in buckets),
                duration=time.time() - start_time
            )
        logger.debug(f"{len(buckets)} size buckets with possible duplicates")
        return buckets

    def find_duplicates(
        self,
        buckets: List[CandidateGroup],
        stats: Optional[DeduplicationStats] = None,
        error_callback: Optional[Callable[[EntryError], None]] = None,
        stopped_flag: Optional[Callable[[], bool]] = None,
        progress_callback: Optional[Callable[[str, int, Optional[int]], None]] = None
    ) -> Tuple[List[CandidateGroup], DeduplicationStats]:
        """
        Hash every bucket and return the terminal groups.

        Groups come out bucket by bucket (ascending size), and inside a bucket in the
        order the hashing stages discovered them. Skipped buckets mark stats.partial.
        """
        stats = stats or DeduplicationStats()
        total_start_time = time.time()
        self._deadline = self.clock() + self.timeout if self.timeout is not None else None

        terminal_groups: List[CandidateGroup] = []
        total_buckets = len(buckets)

        def merge(result: BucketResult, done: int) -> None:
            if result.skipped:
                stats.partial = True
            stats.merge(result.stats)
            terminal_groups.extend(result.groups)
            for error in result.errors:
                stats.errors.append(error)
                if error_callback:
                    error_callback(error)
            if progress_callback:
                progress_callback("Hashing", done, total_buckets)

        if self.workers <= 1 or total_buckets <= 1:
            for done, bucket in enumerate(buckets, 1):
                merge(self._process_bucket(bucket, self.hasher, stopped_flag), done)
        else:
            executor = ThreadPoolExecutor(max_workers=self.workers)
            try:
                futures = [
                    executor.submit(self._process_bucket, bucket, self.hasher.fork(), stopped_flag)
                    for bucket in buckets
                ]
                # Single merge point, in submission order
                for done, future in enumerate(futures, 1):
                    merge(future.result(), done)
            finally:
                executor.shutdown(wait=True, cancel_futures=True)

        if stats.partial:
            logger.warning("Deadline exceeded or search stopped: results are partial")

        stats.total_time = time.time() - total_start_time
        return terminal_groups, stats

    def _deadline_passed(self) -> bool:
        return self._deadline is not None and self.clock() >= self._deadline

    def _process_bucket(
            self,
            bucket: CandidateGroup,
            hasher: Hasher,
            stopped_flag: Optional[Callable[[], bool]] = None) -> BucketResult:
        """Runs every hash stage over one size bucket with a task-owned hasher."""
        result = BucketResult(size=bucket.size)
        if self._deadline_passed() or (stopped_flag and stopped_flag()):
            result.skipped = True
            return result

        grouper = FileGrouperImpl(hasher, error_callback=result.errors.append)
        confirmed: List[CandidateGroup] = []
        groups = [bucket]

        for stage in self._build_pipeline(grouper):
            start_time = time.time()
            files_in = sum(g.count for g in groups)
            groups = stage.process(groups, confirmed, stopped_flag=stopped_flag)
            result.stats.update_stage(
                stage.get_stage_name(),
                groups_found=len(groups) + len(confirmed),
                files_processed=files_in,
                duration=time.time() - start_time
            )

        if self.verify:
            start_time = time.time()
            verified: List[CandidateGroup] = []
            ByteCompareStage(grouper).process(confirmed, verified, stopped_flag=stopped_flag)
            result.stats.update_stage(
                Stage.VERIFY,
                groups_found=len(verified),
                files_processed=sum(g.count for g in confirmed),
                duration=time.time() - start_time
            )
            confirmed = verified

        if stopped_flag and stopped_flag():
            result.skipped = True

        result.groups = confirmed
        return result

    def _build_pipeline(self, grouper: FileGrouperImpl):
        """Fingerprint always runs; the full-hash stage only sees non-authoritative groups."""
        return [FingerprintStage(grouper, self.config), FullHashStage(grouper)]
