"""
Shared fixtures for duplicate search tests.
Creates isolated temporary directories with controlled test files.
"""
import pytest
import tempfile
from pathlib import Path
from typing import Dict, Callable
import sys

# Add src/ to sys.path so 'dfsearch' is importable without installation
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from dfsearch.core.config import HashingConfig

LARGE_SIZE = HashingConfig.SMALL_THRESHOLD * 3 + 123  # well past the small-file path


@pytest.fixture
def temp_dir():
    """Creates isolated temporary directory, auto-cleanup after test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def make_file(temp_dir) -> Callable[[str, bytes], Path]:
    """Writes `content` to `relative` under temp_dir, creating parent dirs."""
    def _make(relative: str, content: bytes) -> Path:
        path = temp_dir / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
        return path
    return _make


@pytest.fixture
def scenario_files(make_file) -> Dict[str, Path]:
    """
    The reference tree:
    - a: 100B, unique size
    - b, c: 50B, identical content
    - d, e: 50B each, content differs from each other and from b/c
    - f: empty
    """
    return {
        "a": make_file("a", b"A" * 100),
        "b": make_file("b", b"same content " * 3 + b"xxxxxxxxxxx"),
        "c": make_file("c", b"same content " * 3 + b"xxxxxxxxxxx"),
        "d": make_file("d", b"D" * 50),
        "e": make_file("e", b"E" * 50),
        "f": make_file("f", b""),
    }


def large_content(seed: bytes = b"L", size: int = LARGE_SIZE) -> bytes:
    """Non-uniform content of `size` bytes so head, middle and tail all differ."""
    block = (seed * 7 + bytes(range(256))) * (size // 256 + 1)
    return block[:size]


def with_middle_changed(content: bytes) -> bytes:
    """Same length, same head and tail windows, one byte flipped in the middle."""
    middle = len(content) // 2
    flipped = bytes([content[middle] ^ 0xFF])
    return content[:middle] + flipped + content[middle + 1:]
