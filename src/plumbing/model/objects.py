"""
Value records produced by encoding and decoding.
"""

from typing import NamedTuple, Optional

from ..errors import InvalidObjectError
from .object_type import ObjectType


class RawObject(NamedTuple):
    """Decoded payload and type of a stored object."""

    content: bytes
    object_type: ObjectType

    def text(self) -> str:
        """
        UTF-8 text view of a blob or commit payload.

        Tree payloads are binary and must be parsed with parse_tree.
        Raises InvalidObjectError for trees and for payloads that are not
        valid UTF-8; use content for the raw bytes.
        """
        if self.object_type is ObjectType.TREE:
            raise InvalidObjectError("tree payloads are binary, use parse_tree")
        try:
            return self.content.decode('utf-8')
        except UnicodeDecodeError as e:
            raise InvalidObjectError(f"{self.object_type} payload is not UTF-8 text: {e}") from e


class CompressedObject(NamedTuple):
    """Encoded object ready to be written to the store."""

    content: bytes
    object_type: ObjectType
    hash: bytes
    hash_hex: str
    source_path: Optional[str] = None

    def __repr__(self) -> str:
        return (
            f"CompressedObject(type={self.object_type}, hash={self.hash_hex[:8]}..., "
            f"path={self.source_path})"
        )
