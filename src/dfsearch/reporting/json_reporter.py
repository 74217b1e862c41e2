"""
reporting/json_reporter.py
Machine-readable report: a single JSON document written when the search finishes.
"""
import json
import sys
from typing import TextIO, Optional, Dict, Any

from dfsearch.core.models import SearchResult
from dfsearch.reporting.base import NullReporter


class JsonReporter(NullReporter):
    def __init__(self, stream: Optional[TextIO] = None, indent: Optional[int] = 2):
        self.stream = stream or sys.stdout
        self.indent = indent

    @staticmethod
    def to_dict(result: SearchResult) -> Dict[str, Any]:
        stats = result.stats
        return {
            "root": result.root_dir,
            "total_files": stats.total_files,
            "total_bytes": stats.total_bytes,
            "empty_count": stats.empty_count,
            "empty_files": list(stats.empty_files),
            "duplicate_sets": [
                {
                    "index": s.index,
                    "size": s.size,
                    "count": s.count,
                    "members": list(s.members),
                }
                for s in result.duplicate_sets
            ],
            "redundant_bytes": result.redundant_bytes,
            "elapsed": round(result.elapsed, 3),
            "partial": result.partial,
            "errors": [
                {"path": e.path, "stage": e.stage, "message": e.message}
                for e in stats.errors
            ],
        }

    def on_finish(self, result: SearchResult) -> None:
        json.dump(self.to_dict(result), self.stream, indent=self.indent)
        self.stream.write("\n")
        self.stream.flush()
