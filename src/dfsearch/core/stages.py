"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/stages.py
Pipeline stages of the duplicate search.

CLASS HIERARCHY
---------------
SizeStageImpl     : Buckets scanned records by exact size
FingerprintStage  : Groups a bucket by fingerprint; small files are confirmed here
FullHashStage     : Re-hashes the whole content of surviving large-file groups
ByteCompareStage  : Optional byte-for-byte confirmation of terminal groups

STAGE CONTRACTS
---------------
Hash stages share the same `process()` shape:
  • Take ownership of the candidate groups from the previous stage
  • Append groups that need no further work to `confirmed_duplicates`
  • Return the groups still pending for the next stage
  • Drop every group that shrinks below two members
"""

from typing import List, Iterable, Optional, Callable
import logging

from dfsearch.core.models import FileRecord, CandidateGroup, EntryError, Stage
from dfsearch.core.grouper import FileGrouperImpl
from dfsearch.core.config import HashingConfig

logger = logging.getLogger(__name__)


class SizeStageImpl:
    def __init__(self, grouper: FileGrouperImpl):
        self.grouper = grouper

    def process(self, records: Iterable[FileRecord]) -> List[CandidateGroup]:
        """
        Group by file size.
        Returns one CandidateGroup per size shared by 2+ files, smallest size first.
        """
        size_groups = self.grouper.group_by_size(records)
        return [
            CandidateGroup(size=size, paths=size_groups[size])
            for size in sorted(size_groups)
        ]


class FingerprintStage:
    def __init__(self, grouper: FileGrouperImpl, config: Optional[HashingConfig] = None):
        self.grouper = grouper
        self.config = config or HashingConfig()

    @staticmethod
    def get_stage_name() -> str:
        return Stage.FINGERPRINT

    def process(
            self,
            groups: List[CandidateGroup],
            confirmed_duplicates: List[CandidateGroup],
            stopped_flag: Optional[Callable[[], bool]] = None
    ) -> List[CandidateGroup]:
        """
        Small-file groups are final after this stage and go to confirmed_duplicates.
        Large-file groups only matched on head and tail windows and are returned.
        """
        pending = []
        for group in groups:
            if stopped_flag and stopped_flag():
                return []

            authoritative = self.config.is_small(group.size)
            for paths in self.grouper.group_by_fingerprint(group.paths, group.size).values():
                candidate = CandidateGroup(size=group.size, paths=paths, authoritative=authoritative)
                if authoritative:
                    confirmed_duplicates.append(candidate)
                else:
                    pending.append(candidate)

        return pending


class FullHashStage:
    def __init__(self, grouper: FileGrouperImpl):
        self.grouper = grouper

    @staticmethod
    def get_stage_name() -> str:
        return Stage.FULL

    def process(
            self,
            groups: List[CandidateGroup],
            confirmed_duplicates: List[CandidateGroup],
            stopped_flag: Optional[Callable[[], bool]] = None
    ) -> List[CandidateGroup]:
        for group in groups:
            if stopped_flag and stopped_flag():
                return []

            for paths in self.grouper.group_by_full_hash(group.paths).values():
                confirmed_duplicates.append(
                    CandidateGroup(size=group.size, paths=paths, authoritative=True))

        return []


class ByteCompareStage:
    """
    Splits each group into classes of byte-identical files.
    Every path is compared against the first member of each existing class,
    so a group that really is identical costs one comparison per extra member.
    """

    def __init__(self, grouper: FileGrouperImpl):
        self.grouper = grouper

    @staticmethod
    def get_stage_name() -> str:
        return Stage.VERIFY

    def process(
            self,
            groups: List[CandidateGroup],
            confirmed_duplicates: List[CandidateGroup],
            stopped_flag: Optional[Callable[[], bool]] = None
    ) -> List[CandidateGroup]:
        hasher = self.grouper.hasher
        for group in groups:
            if stopped_flag and stopped_flag():
                return []

            classes: List[List[str]] = []
            for path in group.paths:
                while True:
                    try:
                        for members in classes:
                            if hasher.files_identical(members[0], path):
                                members.append(path)
                                break
                        else:
                            classes.append([path])
                        break
                    except OSError as e:
                        failed = e.filename or path
                        self.grouper.report_error(
                            EntryError.from_exception(failed, Stage.VERIFY, e))
                        owner = next((m for m in classes if m[0] == failed), None)
                        if failed == path or owner is None:
                            break
                        # the representative is gone, the next member takes over
                        owner.pop(0)
                        if not owner:
                            classes.remove(owner)

            for members in classes:
                if len(members) >= 2:
                    confirmed_duplicates.append(
                        CandidateGroup(size=group.size, paths=members, authoritative=True))
                elif len(classes) > 1:
                    logger.warning(f"Digest collision: {members[0]} differs from its digest group")

        return []
