"""
dfsearch: fast duplicate file finder.

Core features:
- Size buckets → head/tail fingerprint → streaming full hash, so most non-duplicates
  are ruled out without reading whole files
- xxh3-128 digests, optional byte-for-byte verification
- Optional worker pool for hashing independent size buckets
- CLI with plain-text and JSON reports
"""

from importlib.metadata import version as _version, PackageNotFoundError

try:
    __version__ = _version("dfsearch")
except PackageNotFoundError:
    __version__ = "0.0.0"

# Public API
from dfsearch.commands import SearchCommand
from dfsearch.core import (
    SearchParams, SearchResult, DuplicateSet, FileRecord, ScanStats, EntryError,
    RootPathError, ScanAbortedError)
from dfsearch.reporting import NullReporter, TextReporter, JsonReporter
from dfsearch.utils.convert_utils import ConvertUtils

__all__ = [
    "SearchCommand",
    "SearchParams",
    "SearchResult",
    "DuplicateSet",
    "FileRecord",
    "ScanStats",
    "EntryError",
    "RootPathError",
    "ScanAbortedError",
    "NullReporter",
    "TextReporter",
    "JsonReporter",
    "ConvertUtils",
    "__version__",
]
