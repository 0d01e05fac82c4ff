"""
Hash Functions

Transaction hashes are BLAKE2b with a 32-byte digest over the canonical
RawData encoding. Signatures are never part of the hashed bytes.
"""

import hashlib

from ..constants import HASH_LENGTH


def blake2b_digest(data: bytes, output_length: int = HASH_LENGTH) -> bytes:
    """
    Compute a BLAKE2b digest.

    Args:
        data: Input bytes to hash
        output_length: Digest size in bytes (1-64)

    Returns:
        BLAKE2b digest of ``output_length`` bytes
    """
    return hashlib.blake2b(bytes(data), digest_size=output_length).digest()


class Blake2bHasher:
    """Default hasher used for transaction hashes."""

    def digest(self, data: bytes, output_length: int = HASH_LENGTH) -> bytes:
        return blake2b_digest(data, output_length)

    def __repr__(self) -> str:
        return "Blake2bHasher()"


DEFAULT_HASHER = Blake2bHasher()


__all__ = ["blake2b_digest", "Blake2bHasher", "DEFAULT_HASHER"]
