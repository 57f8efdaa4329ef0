"""
Content-addressed hashing using SHA-1.

Provides deterministic hash computation over object wire content.
"""

import hashlib
import string

from ..errors import InvalidReferenceError

DIGEST_SIZE = 20
HEX_DIGEST_SIZE = DIGEST_SIZE * 2

_HEX_CHARS = frozenset(string.hexdigits.lower())


def compute_hash(data: bytes) -> bytes:
    """
    Compute the raw 20-byte SHA-1 digest of data.

    Callers hash the full wire content (header and payload), never the
    payload alone.
    """
    return hashlib.sha1(data).digest()


def to_hex(digest: bytes) -> str:
    """Render a raw digest as lowercase hex."""
    return digest.hex()


def validate_hash_hex(hash_hex: str) -> None:
    """
    Check that hash_hex is 40 lowercase hex characters.

    Raises InvalidReferenceError otherwise.
    """
    if not isinstance(hash_hex, str):
        raise InvalidReferenceError(f"hash must be a string, got {type(hash_hex).__name__}")
    if len(hash_hex) != HEX_DIGEST_SIZE:
        raise InvalidReferenceError(
            f"hash must be {HEX_DIGEST_SIZE} characters, got {len(hash_hex)}: {hash_hex!r}"
        )
    if not set(hash_hex) <= _HEX_CHARS:
        raise InvalidReferenceError(f"hash must be lowercase hex: {hash_hex!r}")


def get_hash_prefix(hash_hex: str, prefix_length: int = 2) -> str:
    """
    Get prefix of hash for directory sharding.

    Default is 2 characters, creating 256 subdirectories.
    """
    if len(hash_hex) < prefix_length:
        raise ValueError(f"Hash too short for prefix length {prefix_length}")
    return hash_hex[:prefix_length]
