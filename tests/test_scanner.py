"""
Unit tests for FileScannerImpl.
Verifies file discovery, empty-file accounting, skipping of non-regular entries and
per-entry error isolation.
"""
import dataclasses
import inspect
import os
from unittest import mock

import pytest

from dfsearch.core.scanner import FileScannerImpl
from dfsearch.core.models import FileRecord, RootPathError, Stage


class TestFileScannerImpl:
    """Test directory traversal and statistics."""

    def test_yields_every_non_empty_regular_file(self, temp_dir, scenario_files):
        """Scanner should yield a, b, c, d, e with their exact sizes; f is empty."""
        scanner = FileScannerImpl(str(temp_dir))
        records = list(scanner.scan())

        by_name = {os.path.basename(r.path): r.size for r in records}
        assert by_name == {"a": 100, "b": 50, "c": 50, "d": 50, "e": 50}

    def test_stats_count_empty_files_separately(self, temp_dir, scenario_files):
        scanner = FileScannerImpl(str(temp_dir))
        list(scanner.scan())

        assert scanner.stats.total_files == 6
        assert scanner.stats.empty_count == 1
        assert scanner.stats.non_empty_count == 5
        assert scanner.stats.total_bytes == 300
        assert scanner.stats.empty_files == [str(scenario_files["f"])]

    def test_empty_files_reported_as_soon_as_seen(self, temp_dir, scenario_files):
        """on_empty must fire during the walk, before the generator is exhausted."""
        seen = []
        scanner = FileScannerImpl(str(temp_dir))
        records = scanner.scan(on_empty=seen.append)

        # a..e come before f in name order, so f is reported by the time the walk ends
        for _ in records:
            pass
        assert seen == [str(scenario_files["f"])]

    def test_scan_is_lazy(self, temp_dir, scenario_files):
        scanner = FileScannerImpl(str(temp_dir))
        records = scanner.scan()
        assert inspect.isgenerator(records)
        assert scanner.stats.total_files == 0  # nothing read yet

    def test_scans_subdirectories_recursively(self, make_file, temp_dir):
        make_file("top.txt", b"1")
        make_file("sub/inner.txt", b"22")
        make_file("sub/deeper/leaf.txt", b"333")

        records = list(FileScannerImpl(str(temp_dir)).scan())
        assert sorted(os.path.basename(r.path) for r in records) == ["inner.txt", "leaf.txt", "top.txt"]

    def test_walk_order_is_deterministic(self, make_file, temp_dir):
        for name in ["z", "m", "a", "sub/y", "sub/b"]:
            make_file(name, name.encode())

        first = [r.path for r in FileScannerImpl(str(temp_dir)).scan()]
        second = [r.path for r in FileScannerImpl(str(temp_dir)).scan()]
        assert first == second
        # files of a directory come before its subdirectories
        assert [os.path.basename(p) for p in first] == ["a", "m", "z", "b", "y"]

    def test_records_are_immutable(self, temp_dir, scenario_files):
        record = next(iter(FileScannerImpl(str(temp_dir)).scan()))
        assert isinstance(record, FileRecord)
        with pytest.raises(dataclasses.FrozenInstanceError):
            record.size = 1

    def test_scanner_skips_symlinks(self, temp_dir, make_file):
        """Symbolic links to files or directories are neither counted nor followed."""
        real_file = make_file("real.txt", b"content")
        real_dir = temp_dir / "real_dir"
        real_dir.mkdir()
        make_file("real_dir/inside.txt", b"inside")

        try:
            os.symlink(real_file, temp_dir / "link.txt")
            os.symlink(real_dir, temp_dir / "link_dir", target_is_directory=True)
        except (OSError, NotImplementedError):
            pytest.skip("Symlinks not supported on this system")

        scanner = FileScannerImpl(str(temp_dir))
        paths = [r.path for r in scanner.scan()]

        assert sorted(os.path.basename(p) for p in paths) == ["inside.txt", "real.txt"]
        assert scanner.stats.total_files == 2

    @pytest.mark.skipif(not hasattr(os, "mkfifo"), reason="Named pipes not supported")
    def test_scanner_skips_named_pipes(self, temp_dir, make_file):
        make_file("regular.bin", b"data")
        os.mkfifo(temp_dir / "pipe")

        scanner = FileScannerImpl(str(temp_dir))
        records = list(scanner.scan())

        assert [os.path.basename(r.path) for r in records] == ["regular.bin"]
        assert scanner.stats.total_files == 1
        assert scanner.stats.errors == []


class TestRootValidation:
    def test_missing_root_raises(self, temp_dir):
        scanner = FileScannerImpl(str(temp_dir / "does_not_exist"))
        with pytest.raises(RootPathError, match="does not exist"):
            scanner.validate_root()

    def test_file_root_raises(self, make_file):
        path = make_file("plain.txt", b"x")
        scanner = FileScannerImpl(str(path))
        with pytest.raises(RootPathError, match="Not a directory"):
            list(scanner.scan())


class TestPerEntryErrors:
    """A single unreadable entry must not abort the walk."""

    def test_unreadable_directory_is_skipped(self, temp_dir, make_file):
        make_file("ok/one.txt", b"1")
        make_file("locked/two.txt", b"2")
        locked = str(temp_dir / "locked")
        real_scandir = os.scandir

        def fake_scandir(path):
            if str(path) == locked:
                raise PermissionError(13, "Permission denied", locked)
            return real_scandir(path)

        errors = []
        scanner = FileScannerImpl(str(temp_dir), error_callback=errors.append)
        with mock.patch("os.scandir", side_effect=fake_scandir):
            records = list(scanner.scan())

        assert [os.path.basename(r.path) for r in records] == ["one.txt"]
        assert len(errors) == 1
        assert errors[0].path == locked
        assert errors[0].stage == Stage.SCAN
        assert errors[0].message == "Permission denied"
        assert scanner.stats.errors == errors

    def test_entry_vanishing_mid_scan_is_skipped(self, temp_dir):
        """An entry whose stat() fails (deleted after listing) is reported, not raised."""
        class VanishedEntry:
            path = str(temp_dir / "gone.bin")
            name = "gone.bin"

            def is_dir(self, follow_symlinks=True):
                return False

            def is_file(self, follow_symlinks=True):
                return True

            def stat(self, follow_symlinks=True):
                raise FileNotFoundError(2, "No such file or directory", self.path)

        scanner = FileScannerImpl(str(temp_dir))
        subdirs = []
        assert scanner._process_entry(VanishedEntry(), subdirs, None) is None
        assert subdirs == []
        assert scanner.stats.total_files == 0
        assert len(scanner.stats.errors) == 1
        assert scanner.stats.errors[0].message == "No such file or directory"
