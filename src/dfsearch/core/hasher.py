"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

hasher.py
Implements file hashing using pluggable hash algorithms.

HasherImpl computes three things:
- a fingerprint: the whole file when it is small, otherwise head and tail windows only
- a full-content digest, streamed through a reusable fixed-size buffer
- a byte-for-byte comparison of two files, used only when verification is requested

Each HasherImpl owns its read buffers. Concurrent tasks must each use their own
instance (see fork()).
"""

import os
from typing import Optional, Tuple

import xxhash

from dfsearch.core.config import HashingConfig
from dfsearch.core.interfaces import Hasher, HashAlgorithm, HashState


# Use the same way to implement and use any other hashing algorithm
class XXHash128AlgorithmImpl(HashAlgorithm):
    @staticmethod
    def hash(data: bytes) -> bytes:
        return xxhash.xxh3_128(data).digest()

    @staticmethod
    def new_state() -> HashState:
        return xxhash.xxh3_128()


class HasherImpl(Hasher):
    """
    A hasher implementation that supports any algorithm via the HashAlgorithm interface.
    Read errors propagate as OSError; the grouper decides what to do with them.
    """

    def __init__(self, algorithm: Optional[HashAlgorithm] = None, config: Optional[HashingConfig] = None):
        self.algorithm = algorithm or XXHash128AlgorithmImpl()
        self.config = config or HashingConfig()
        self._buffer = bytearray(self.config.chunk_size)
        self._compare_buffer: Optional[bytearray] = None

    def fork(self) -> "HasherImpl":
        """Returns a hasher with the same algorithm and config but its own buffers."""
        return HasherImpl(self.algorithm, self.config)

    def compute_fingerprint(self, path: str, size: int) -> Tuple[bytes, bool]:
        """
        Computes the phase-1 fingerprint.

        Returns:
            (digest, authoritative) where authoritative is True when the digest
            covers the entire file and needs no further confirmation.
        """
        if self.config.is_small(size):
            with open(path, 'rb') as f:
                data = f.read(self.config.small_threshold)
            return self.algorithm.hash(data), True

        window = self.config.window_size
        with open(path, 'rb') as f:
            head = f.read(window)
            f.seek(-window, os.SEEK_END)
            tail = f.read(window)
        return self.algorithm.hash(head + tail), False

    def compute_full_hash(self, path: str) -> bytes:
        """Streams the whole file through the algorithm's incremental state."""
        state = self.algorithm.new_state()
        view = memoryview(self._buffer)
        with open(path, 'rb', buffering=0) as f:
            while True:
                n = f.readinto(self._buffer)
                if not n:
                    break
                state.update(view[:n])
        return state.digest()

    def files_identical(self, path_a: str, path_b: str) -> bool:
        """Compares two files chunk by chunk, stopping at the first difference."""
        if self._compare_buffer is None:
            self._compare_buffer = bytearray(self.config.chunk_size)
        view_a = memoryview(self._buffer)
        view_b = memoryview(self._compare_buffer)
        with open(path_a, 'rb') as fa, open(path_b, 'rb') as fb:
            while True:
                na = fa.readinto(self._buffer)
                nb = fb.readinto(self._compare_buffer)
                if na != nb or view_a[:na] != view_b[:nb]:
                    return False
                if not na:
                    return True
