"""
Unit tests for FileGrouperImpl.
Verifies size bucketing and digest grouping, including isolation of unreadable files.
"""
from unittest import mock

import pytest

from dfsearch.core.grouper import FileGrouperImpl
from dfsearch.core.models import FileRecord, Stage


class TestGroupBySize:
    def test_groups_by_size_filters_single_files(self):
        """Only sizes shared by 2+ files survive."""
        records = [
            FileRecord(path="/a.txt", size=1024),
            FileRecord(path="/b.txt", size=1024),  # Same size → bucket
            FileRecord(path="/c.txt", size=2048),  # Single file → dropped
        ]

        buckets = FileGrouperImpl.group_by_size(records)

        assert buckets == {1024: ["/a.txt", "/b.txt"]}

    def test_keeps_arrival_order_inside_bucket(self):
        records = [FileRecord(path=p, size=10) for p in ["/z", "/a", "/m"]]
        assert FileGrouperImpl.group_by_size(records) == {10: ["/z", "/a", "/m"]}

    def test_accepts_a_generator(self):
        records = (FileRecord(path=f"/f{i}", size=i % 2 + 1) for i in range(5))
        buckets = FileGrouperImpl.group_by_size(records)
        assert buckets == {1: ["/f0", "/f2", "/f4"], 2: ["/f1", "/f3"]}

    def test_group_by_empty_input(self):
        assert FileGrouperImpl.group_by_size([]) == {}


class TestGroupByDigest:
    def test_group_by_fingerprint_drops_unique_files(self, make_file):
        dup1 = make_file("dup1.txt", b"X" * 300)
        dup2 = make_file("dup2.txt", b"X" * 300)
        unique = make_file("unique.txt", b"Y" * 300)

        groups = FileGrouperImpl().group_by_fingerprint([str(dup1), str(unique), str(dup2)], 300)

        assert list(groups.values()) == [[str(dup1), str(dup2)]]

    def test_group_by_full_hash(self, make_file):
        paths = [str(make_file(f"f{i}", b"same")) for i in range(3)]
        groups = FileGrouperImpl().group_by_full_hash(paths)
        assert list(groups.values()) == [paths]

    def test_groups_keep_discovery_order(self):
        hasher = mock.Mock()
        hasher.compute_full_hash.side_effect = lambda p: p[1].encode()  # "/2a" → b"2"
        grouper = FileGrouperImpl(hasher)

        groups = grouper.group_by_full_hash(["/2a", "/1a", "/2b", "/1b"])

        assert list(groups.keys()) == [b"2", b"1"]
        assert groups[b"2"] == ["/2a", "/2b"]

    def test_unreadable_file_is_excluded_and_reported(self):
        """OSError while hashing one file must not affect the others."""
        def fingerprint(path, size):
            if path == "/bad":
                raise PermissionError(13, "Permission denied", path)
            return b"same", True

        hasher = mock.Mock()
        hasher.compute_fingerprint.side_effect = fingerprint
        errors = []
        grouper = FileGrouperImpl(hasher, error_callback=errors.append)

        groups = grouper.group_by_fingerprint(["/good1", "/bad", "/good2"], 10)

        assert list(groups.values()) == [["/good1", "/good2"]]
        assert len(errors) == 1
        assert errors[0].path == "/bad"
        assert errors[0].stage == Stage.FINGERPRINT
        assert errors[0].message == "Permission denied"

    def test_unreadable_file_is_logged(self, caplog):
        hasher = mock.Mock()
        hasher.compute_full_hash.side_effect = FileNotFoundError(2, "No such file or directory")
        grouper = FileGrouperImpl(hasher)

        with caplog.at_level("WARNING", logger="dfsearch.core.grouper"):
            assert grouper.group_by_full_hash(["/gone"]) == {}

        assert "Excluding /gone from full-hash" in caplog.text

    def test_programming_errors_are_not_swallowed(self):
        hasher = mock.Mock()
        hasher.compute_full_hash.side_effect = ValueError("bug")
        with pytest.raises(ValueError):
            FileGrouperImpl(hasher).group_by_full_hash(["/a", "/b"])
