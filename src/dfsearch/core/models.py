"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/models.py
Data models, configuration DTO and exceptions for duplicate file search.
"""

import math
from dataclasses import dataclass, field
from typing import List, Dict, Optional, Union


# =============================
# Exceptions
# =============================

class DfsearchError(Exception):
    """Base class for all dfsearch errors."""


class RootPathError(DfsearchError):
    """Root path is missing or is not a directory. No scan is performed."""

    def __init__(self, root_dir: str, reason: str):
        self.root_dir = root_dir
        self.reason = reason
        super().__init__(f"{reason}: {root_dir}")


class ScanAbortedError(DfsearchError):
    """Raised on the first per-entry filesystem error when abort_on_error is set."""

    def __init__(self, error: "EntryError"):
        self.error = error
        super().__init__(f"Aborted at {error.path} ({error.stage}): {error.message}")


# =============================
# Stage names
# =============================

class Stage:
    SCAN = "scan"
    SIZE = "size"
    FINGERPRINT = "fingerprint"
    FULL = "full-hash"
    VERIFY = "verify"

    @classmethod
    def get_all(cls):
        return [cls.SIZE, cls.FINGERPRINT, cls.FULL, cls.VERIFY]


# ======================
#  Core Data Models
# ======================

@dataclass(frozen=True)
class FileRecord:
    """
    A regular file found by the scanner.
    Immutable: produced once, then only its path travels through later stages.
    """
    path: str
    size: int  # in bytes

    def __repr__(self):
        return f"<FileRecord path={self.path}, size={self.size}>"


@dataclass(frozen=True)
class EntryError:
    """A per-entry filesystem failure that was isolated instead of aborting the run."""
    path: str
    stage: str
    message: str

    @classmethod
    def from_exception(cls, path: str, stage: str, exc: BaseException) -> "EntryError":
        message = exc.strerror if isinstance(exc, OSError) and exc.strerror else str(exc)
        return cls(path=path, stage=stage, message=message)


@dataclass
class ScanStats:
    """
    Counters accumulated while scanning.
    Read-only once the scan has finished.
    """
    empty_count: int = 0
    total_files: int = 0
    total_bytes: int = 0
    empty_files: List[str] = field(default_factory=list)
    errors: List[EntryError] = field(default_factory=list)

    @property
    def non_empty_count(self) -> int:
        return self.total_files - self.empty_count

    def add_error(self, error: EntryError) -> None:
        self.errors.append(error)


@dataclass
class CandidateGroup:
    """
    Transient group of same-size paths travelling between pipeline stages.
    `authoritative` is True once the grouping digest covered the whole file.
    """
    size: int
    paths: List[str]
    authoritative: bool = False

    @property
    def count(self) -> int:
        return len(self.paths)

    def is_duplicate(self) -> bool:
        return self.count >= 2

    def __repr__(self):
        return f"<CandidateGroup size={self.size}, count={self.count}>"


@dataclass(frozen=True)
class DuplicateSet:
    """
    A terminal group of byte-identical files.
    Members are sorted by path, there are always at least two of them.
    """
    index: int
    size: int
    members: tuple

    def __post_init__(self):
        if len(self.members) < 2:
            raise ValueError("A duplicate set needs at least two members")
        if len(set(self.members)) != len(self.members):
            raise ValueError("A duplicate set cannot contain the same path twice")

    @property
    def count(self) -> int:
        return len(self.members)

    @property
    def redundant_bytes(self) -> int:
        """Bytes taken by every copy beyond the first."""
        return self.size * (self.count - 1)

    def __repr__(self):
        return f"<DuplicateSet #{self.index} size={self.size}, count={self.count}>"


@dataclass
class DeduplicationStats:
    """
    Statistics collected during the deduplication process.
    """
    def __init__(self):
        self.total_time: float = 0.0
        self.stage_stats: Dict[str, Dict[str, Union[int, float]]] = {}
        self.errors: List[EntryError] = []
        self.partial: bool = False

    def update_stage(
            self,
            stage_name: str,
            groups_found: int,
            files_processed: int,
            duration: float
    ) -> None:
        if stage_name not in self.stage_stats:
            self.stage_stats[stage_name] = {
                "groups": 0,
                "files": 0,
                "time": 0.0
            }
        self.stage_stats[stage_name]["groups"] += groups_found
        self.stage_stats[stage_name]["files"] += files_processed
        self.stage_stats[stage_name]["time"] += duration

    def merge(self, other: "DeduplicationStats") -> None:
        """Folds the stage counters of another (per-worker) stats object into this one."""
        for stage_name, data in other.stage_stats.items():
            self.update_stage(stage_name, int(data["groups"]), int(data["files"]), float(data["time"]))

    def print_summary(self) -> str:
        labels = {
            Stage.SIZE: "Size Buckets",
            Stage.FINGERPRINT: "Fingerprint Groups",
            Stage.FULL: "Full Hash Groups",
            Stage.VERIFY: "Byte Compare Groups",
        }

        lines = [
            "Deduplication Statistics:",
            f"Total Execution Time: {self.total_time:.3f}s\n",
            "Stage: GROUPS / FILES / TIME"
        ]

        for stage in Stage.get_all():
            data = self.stage_stats.get(stage)
            if data is None:
                continue
            lines.append(f"{labels[stage]}: {data['groups']} / {data['files']} / {data['time']:.3f}s")

        return "\n".join(lines)


@dataclass
class SearchResult:
    """Everything the reporter needs once a search has finished."""
    root_dir: str
    duplicate_sets: List[DuplicateSet]
    stats: ScanStats
    redundant_bytes: int
    elapsed: float = 0.0
    partial: bool = False
    dedup_stats: Optional[DeduplicationStats] = None


"""
DTO for search parameters with built-in validation.
Used by the CLI and by library callers.
"""
from dfsearch.core.config import HashingConfig


@dataclass
class SearchParams:
    """Parameters for a duplicate search with validation."""
    root_dir: str = "."
    workers: int = 1
    verify: bool = False
    timeout: Optional[float] = None
    abort_on_error: bool = False
    small_threshold: int = HashingConfig.SMALL_THRESHOLD
    window_size: int = HashingConfig.WINDOW_SIZE
    chunk_size: int = HashingConfig.READ_CHUNK_SIZE

    def __post_init__(self):
        """Validate parameters immediately after creation."""
        if not self.root_dir:
            raise ValueError("Root directory cannot be empty")

        if self.workers < 1:
            raise ValueError("Worker count must be at least 1")

        if self.timeout is not None and not (math.isfinite(self.timeout) and self.timeout > 0):
            raise ValueError("Timeout must be a positive finite number")

        if self.window_size <= 0 or self.chunk_size <= 0 or self.small_threshold <= 0:
            raise ValueError("Window, chunk and threshold sizes must be positive")

        if self.window_size * 2 > self.small_threshold:
            raise ValueError("Small-file threshold must cover both fingerprint windows")

    @property
    def hashing_config(self) -> HashingConfig:
        return HashingConfig(
            small_threshold=self.small_threshold,
            window_size=self.window_size,
            chunk_size=self.chunk_size,
        )
