"""
Zlib-wrapped deflate compression for objects at rest.

Matches the loose-object format used by git.
"""

import zlib

from ..errors import DecodeError


def compress(data: bytes, level: int = zlib.Z_DEFAULT_COMPRESSION) -> bytes:
    """Compress wire content for storage."""
    return zlib.compress(data, level)


def decompress(data: bytes, object_hash: str = None) -> bytes:
    """
    Decompress stored bytes back to wire content.

    Raises DecodeError on a malformed or truncated stream. A stream with
    trailing bytes after its end marker is also rejected.
    """
    decompressor = zlib.decompressobj()
    try:
        result = decompressor.decompress(data)
        result += decompressor.flush()
    except zlib.error as e:
        raise DecodeError(e, object_hash) from e

    if not decompressor.eof:
        raise DecodeError(ValueError("truncated stream"), object_hash)
    if decompressor.unused_data:
        raise DecodeError(ValueError("trailing data after stream end"), object_hash)

    return result
