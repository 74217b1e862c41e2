"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/builder.py
Turns terminal candidate groups into numbered DuplicateSets.
"""

from typing import List, Iterable, Optional
import logging

from dfsearch.core.models import CandidateGroup, DuplicateSet
from dfsearch.core.interfaces import ReportSink

logger = logging.getLogger(__name__)


class DuplicateSetBuilder:
    """
    Sorts members by path, numbers the sets in the order they arrive and keeps a
    running total of redundant bytes. Every set is handed to the sink as soon as
    it is built.
    """

    def __init__(self, sink: Optional[ReportSink] = None):
        self.sink = sink
        self.redundant_bytes = 0
        self._next_index = 1

    def build(self, groups: Iterable[CandidateGroup]) -> List[DuplicateSet]:
        duplicate_sets = []
        for group in groups:
            if not group.is_duplicate():
                continue

            dup_set = DuplicateSet(
                index=self._next_index,
                size=group.size,
                members=tuple(sorted(group.paths)),
            )
            self._next_index += 1
            self.redundant_bytes += dup_set.redundant_bytes
            duplicate_sets.append(dup_set)

            if self.sink:
                self.sink.on_duplicate_set(dup_set)

        logger.debug(f"Built {len(duplicate_sets)} duplicate sets, {self.redundant_bytes} redundant bytes")
        return duplicate_sets
