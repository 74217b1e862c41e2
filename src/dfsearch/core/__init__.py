"""
Core duplicate search engine.

This package contains the performance-critical foundation of dfsearch:
- FileScannerImpl: recursive directory traversal yielding (path, size) records
- FileGrouperImpl: size bucketing and digest-based grouping
- HasherImpl + XXHash128AlgorithmImpl: xxh3-128 fingerprints and streaming full hashes
- DeduplicatorImpl: per-bucket pipeline (fingerprint → full hash), optionally on a worker pool
- DuplicateSetBuilder: ordered, numbered duplicate sets with redundancy totals
- Models: FileRecord, DuplicateSet, ScanStats and the search parameters

All components are pure Python and never write to the console.
"""

from .config import HashingConfig
from .models import (
    FileRecord, CandidateGroup, DuplicateSet, ScanStats, EntryError, SearchParams,
    SearchResult, DeduplicationStats, Stage, DfsearchError, RootPathError, ScanAbortedError)
from .hasher import HasherImpl, XXHash128AlgorithmImpl
from .scanner import FileScannerImpl
from .grouper import FileGrouperImpl
from .stages import SizeStageImpl, FingerprintStage, FullHashStage, ByteCompareStage
from .deduplicator import DeduplicatorImpl
from .builder import DuplicateSetBuilder

__all__ = [
    "HashingConfig",
    "FileRecord",
    "CandidateGroup",
    "DuplicateSet",
    "ScanStats",
    "EntryError",
    "SearchParams",
    "SearchResult",
    "DeduplicationStats",
    "Stage",
    "DfsearchError",
    "RootPathError",
    "ScanAbortedError",
    "HasherImpl",
    "XXHash128AlgorithmImpl",
    "FileScannerImpl",
    "FileGrouperImpl",
    "SizeStageImpl",
    "FingerprintStage",
    "FullHashStage",
    "ByteCompareStage",
    "DeduplicatorImpl",
    "DuplicateSetBuilder",
]
