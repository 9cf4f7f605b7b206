# ==============================================================================
# FILE HASHER MODULE
# ==============================================================================
# MD5 fingerprints for source palettes and written archives, stored in the
# conversion history so identical conversions can be recognized later.
#
# Usage:
#   hasher = FileHasher()
#   md5_hash = hasher.hash_file_md5("forest.gpl")
#   md5_hash = hasher.hash_bytes(archive_bytes)
# ==============================================================================

import os
import hashlib
from typing import Optional


class FileHasher:
    """
    File hashing utility for conversion records.

    Attributes:
        chunk_size (int): Size of chunks to read when hashing files.
    """

    # Palettes are small; 64KB covers almost every file in one read
    DEFAULT_CHUNK_SIZE = 65536

    def __init__(self, chunk_size: int = DEFAULT_CHUNK_SIZE):
        self.chunk_size = chunk_size

    def hash_file_md5(self, file_path: str) -> Optional[str]:
        """
        Compute MD5 hash of a file.

        Args:
            file_path: Path to the file to hash

        Returns:
            32-character hexadecimal MD5 hash string, or None if the file
            is missing or unreadable

        Example:
            >>> FileHasher().hash_file_md5("forest.ase")
            'e99a18c428cb38d5f260853678922e03'
        """
        if not os.path.isfile(file_path):
            return None

        try:
            md5_hash = hashlib.md5()
            with open(file_path, 'rb') as f:
                for chunk in iter(lambda: f.read(self.chunk_size), b''):
                    md5_hash.update(chunk)
            return md5_hash.hexdigest()

        except OSError as e:
            print(f"[ERROR] Could not hash file {file_path}: {e}")
            return None

    @staticmethod
    def hash_bytes(data: bytes) -> str:
        """MD5 hash of in-memory data."""
        return hashlib.md5(data).hexdigest()
