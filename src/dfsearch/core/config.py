"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/config.py
Size thresholds and buffer sizes used by the hashing stages.

SMALL_THRESHOLD : files of at most this size are digested whole in the fingerprint
                  stage, so their fingerprint is already final
WINDOW_SIZE     : bytes taken from the head and from the tail of a larger file
                  to build its fingerprint
READ_CHUNK_SIZE : size of the reusable buffer for streaming full-content reads
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class HashingConfig:
    SMALL_THRESHOLD = 32 * 1024
    WINDOW_SIZE = 512
    READ_CHUNK_SIZE = 32 * 1024

    small_threshold: int = SMALL_THRESHOLD
    window_size: int = WINDOW_SIZE
    chunk_size: int = READ_CHUNK_SIZE

    def is_small(self, file_size: int) -> bool:
        """True if a single fingerprint already covers the whole file."""
        return file_size <= self.small_threshold
