"""
Object envelope encoding and decoding.

Every object is stored as the compressed wire content

    <type-name> SP <decimal payload length> NUL <payload>

and named by the SHA-1 of that uncompressed wire content.
"""

import logging
import zlib
from typing import Optional, Tuple

from .errors import CorruptObjectError
from .integrity.compression import compress, decompress
from .integrity.hashing import compute_hash, to_hex
from .integrity.verification import verify_object_integrity
from .model.object_type import ObjectType
from .model.objects import CompressedObject, RawObject
from .storage.object_store import ObjectStore

logger = logging.getLogger(__name__)


def object_header(length: int, object_type: ObjectType) -> bytes:
    """Header bytes for a payload of the given length and type."""
    return object_type.tag + b' ' + str(length).encode('ascii') + b'\x00'


def encode_object(
    payload: bytes,
    object_type: ObjectType,
    source_path: Optional[str] = None,
    level: int = zlib.Z_DEFAULT_COMPRESSION,
) -> CompressedObject:
    """
    Build the envelope for payload, hash it and compress it.

    The hash covers header and payload together.
    """
    wire = object_header(len(payload), object_type) + payload
    digest = compute_hash(wire)

    return CompressedObject(
        content=compress(wire, level),
        object_type=object_type,
        hash=digest,
        hash_hex=to_hex(digest),
        source_path=source_path,
    )


def parse_wire(wire: bytes, object_hash: str = None) -> Tuple[ObjectType, bytes]:
    """
    Split decompressed wire content into type and payload.

    Raises CorruptObjectError if the separator is missing, the header is
    malformed, the type token is unknown, or the declared length does not
    match the payload.
    """
    header, sep, payload = wire.partition(b'\x00')
    if not sep:
        raise CorruptObjectError("missing header separator", object_hash)

    type_token, space, length_token = header.partition(b' ')
    if not space:
        raise CorruptObjectError(f"malformed header {header[:32]!r}", object_hash)

    try:
        object_type = ObjectType.from_tag(type_token)
    except ValueError:
        raise CorruptObjectError(f"unknown object type {type_token[:32]!r}", object_hash) from None

    if not length_token.isdigit():
        raise CorruptObjectError(f"malformed length {length_token[:32]!r}", object_hash)

    declared = int(length_token)
    if declared != len(payload):
        raise CorruptObjectError(
            f"declared length {declared} does not match payload length {len(payload)}",
            object_hash,
        )

    return object_type, payload


class ObjectCodec:
    """
    Encodes payloads into stored objects and decodes them back by hash.
    """

    def __init__(self, store: ObjectStore, level: int = zlib.Z_DEFAULT_COMPRESSION):
        self.store = store
        self.level = level

    def encode(
        self,
        payload: bytes,
        object_type: ObjectType,
        source_path: Optional[str] = None,
    ) -> CompressedObject:
        """Encode payload without writing it."""
        return encode_object(payload, object_type, source_path, self.level)

    def encode_and_store(
        self,
        payload: bytes,
        object_type: ObjectType,
        source_path: Optional[str] = None,
    ) -> CompressedObject:
        """Encode payload and persist it under its hash."""
        obj = self.encode(payload, object_type, source_path)
        self.store.write(obj.hash_hex, obj.content)
        return obj

    def decode(self, hash_hex: str, verify: bool = True) -> RawObject:
        """
        Load and parse the object named hash_hex.

        If verify=True (default), the wire content is re-hashed and must
        match hash_hex.

        Raises ObjectNotFoundError if the object is absent.
        Raises DecodeError if the compressed stream is malformed.
        Raises CorruptObjectError if the envelope is malformed or the
        content does not match its name.
        """
        data = self.store.read(hash_hex)
        wire = decompress(data, hash_hex)
        object_type, payload = parse_wire(wire, hash_hex)

        if verify:
            verify_object_integrity(wire, hash_hex)

        logger.debug("Read %s object %s (%d bytes)", object_type, hash_hex, len(payload))
        return RawObject(payload, object_type)
