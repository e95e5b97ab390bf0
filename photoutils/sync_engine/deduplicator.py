"""
Deduplicator

Decides whether two files hold the same content, using either a full-file
digest or a sampled digest for large files.

Author: photoutils Project
License: MIT
"""

import hashlib
import os
from typing import Optional

from ..utils.logger import get_logger
from ..config.schema import EngineConfig

logger = get_logger(__name__)


class ContentComparator:
    """
    Content equality test for deduplication.

    Full mode streams each file through the digest. Fast mode (the default)
    hashes only four fixed windows of files larger than the sample
    threshold: at offset 0, one third, two thirds and the tail.

    Fast mode is probabilistic for files over the threshold. Two files of
    equal size that differ only outside the sampled windows compare as
    identical, and in move mode the source of such a pair is deleted. Use
    full mode when that matters.

    Fingerprints are computed on demand and never stored. A file that cannot
    be read gets an empty fingerprint, which never equals anything.
    """

    HASH_ALGORITHM = 'md5'
    CHUNK_SIZE = 65536  # 64KB chunks for hashing
    SAMPLE_THRESHOLD = 500 * 1024
    SAMPLE_BLOCK_SIZE = 50 * 1024
    SAMPLE_COUNT = 4

    def __init__(
        self,
        hash_algorithm: str = HASH_ALGORITHM,
        chunk_size: int = CHUNK_SIZE,
        sample_threshold: int = SAMPLE_THRESHOLD,
        sample_block_size: int = SAMPLE_BLOCK_SIZE
    ):
        """
        Initialize comparator.

        Args:
            hash_algorithm: hashlib algorithm name
            chunk_size: Read size for full hashing
            sample_threshold: Size above which fast mode samples
            sample_block_size: Size of each sampled window
        """
        self.hash_algorithm = hash_algorithm
        self.chunk_size = chunk_size
        self.sample_threshold = sample_threshold
        self.sample_block_size = sample_block_size

    @classmethod
    def from_config(cls, config: EngineConfig) -> 'ContentComparator':
        """Build a comparator from engine settings."""
        return cls(
            hash_algorithm=config.hash_algorithm,
            chunk_size=config.chunk_size,
            sample_threshold=config.sample_threshold,
            sample_block_size=config.sample_block_size
        )

    def calculate_hash(self, file_path: str) -> str:
        """
        Calculate the digest of a whole file.

        Args:
            file_path: Path to file

        Returns:
            Hex string of file hash

        Raises:
            OSError: If the file cannot be read
        """
        hasher = hashlib.new(self.hash_algorithm)
        with open(file_path, 'rb') as f:
            while chunk := f.read(self.chunk_size):
                hasher.update(chunk)
        return hasher.hexdigest()

    def sample_offsets(self, file_size: int) -> list:
        """
        Offsets of the sampled windows for a file of the given size.

        The file must be at least one block long.
        """
        span = file_size - self.sample_block_size
        return [0, span // 3, 2 * span // 3, span]

    def calculate_sampled_hash(self, file_path: str, file_size: int) -> str:
        """
        Calculate the digest of four fixed windows of a file.

        Files smaller than one window are hashed in full.

        Args:
            file_path: Path to file
            file_size: Size of the file in bytes

        Returns:
            Hex string of the sampled hash

        Raises:
            OSError: If the file cannot be read
        """
        if file_size < self.sample_block_size:
            return self.calculate_hash(file_path)

        hasher = hashlib.new(self.hash_algorithm)
        with open(file_path, 'rb') as f:
            for offset in self.sample_offsets(file_size):
                f.seek(offset)
                hasher.update(f.read(self.sample_block_size))
        return hasher.hexdigest()

    def fingerprint(self, file_path: str, file_size: int, full_hash_mode: bool) -> str:
        """
        Compute the fingerprint used for comparison.

        Args:
            file_path: Path to file
            file_size: Size of the file in bytes
            full_hash_mode: Disable sampling

        Returns:
            Hex digest, or an empty string if the file could not be read
        """
        try:
            if not full_hash_mode and file_size > self.sample_threshold:
                return self.calculate_sampled_hash(file_path, file_size)
            return self.calculate_hash(file_path)
        except OSError as e:
            logger.warning(f"Error calculating hash for {file_path}: {e}")
            return ""

    def same_content(self, path_a: str, path_b: str, full_hash_mode: bool = False) -> bool:
        """
        Check if two files have identical content.

        Args:
            path_a: First file
            path_b: Second file
            full_hash_mode: Hash whole files regardless of size

        Returns:
            True only if sizes match and both fingerprints are equal and non-empty
        """
        size_a = self._file_size(path_a)
        size_b = self._file_size(path_b)

        if size_a is None or size_b is None:
            return False

        if size_a != size_b:
            logger.debug(f"Size differs: {path_a} ({size_a}) vs {path_b} ({size_b})")
            return False

        hash_a = self.fingerprint(path_a, size_a, full_hash_mode)
        hash_b = self.fingerprint(path_b, size_b, full_hash_mode)

        return bool(hash_a) and bool(hash_b) and hash_a == hash_b

    def _file_size(self, file_path: str) -> Optional[int]:
        try:
            return os.stat(file_path).st_size
        except OSError as e:
            logger.warning(f"Could not stat {file_path}: {e}")
            return None
