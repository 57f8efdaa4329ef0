"""
Tree object model.

A tree payload is a sequence of entries, each laid out as

    <mode-ascii> 0x20 <name> 0x00 <20 raw hash bytes>

with no separator between entries.
"""

from typing import Iterable, List, NamedTuple

from ..errors import CorruptObjectError, InvalidObjectError
from ..integrity.hashing import DIGEST_SIZE, to_hex
from .object_type import ObjectType


class TreeEntry(NamedTuple):
    """One (mode, name, child hash) row of a tree."""

    mode: str
    name: str
    hash: bytes

    @property
    def hash_hex(self) -> str:
        return to_hex(self.hash)

    @property
    def object_type(self) -> ObjectType:
        return ObjectType.from_mode(self.mode)

    @classmethod
    def for_object(cls, object_type: ObjectType, name: str, digest: bytes) -> 'TreeEntry':
        """
        Build an entry for a child object.

        Raises InvalidObjectError for commits, which have no mode.
        """
        if len(digest) != DIGEST_SIZE:
            raise InvalidObjectError(f"tree entry hash must be {DIGEST_SIZE} bytes, got {len(digest)}")
        return cls(object_type.mode, name, digest)

    def render(self) -> bytes:
        """
        Serialize this entry.

        Raises InvalidObjectError if the name is empty, contains a path
        separator or NUL, or cannot be encoded as UTF-8.
        """
        if not self.name or '/' in self.name or '\x00' in self.name:
            raise InvalidObjectError(f"invalid tree entry name: {self.name!r}")
        try:
            name = self.name.encode('utf-8')
        except UnicodeEncodeError as e:
            raise InvalidObjectError(f"tree entry name is not text-encodable: {self.name!r}") from e
        return self.mode.encode('ascii') + b' ' + name + b'\x00' + self.hash

    def __str__(self) -> str:
        return f"{self.mode.rjust(6, '0')} {self.object_type} {self.hash_hex}\t{self.name}"


def render_tree(entries: Iterable[TreeEntry]) -> bytes:
    """
    Concatenate rendered entries into a tree payload.

    Entries are written in the order given; callers sort them first.
    """
    return b''.join(entry.render() for entry in entries)


def parse_tree(payload: bytes, object_hash: str = None) -> List[TreeEntry]:
    """
    Parse a tree payload back into entries.

    Raises CorruptObjectError on truncated entries or unknown modes.
    """
    entries = []
    pos = 0
    end = len(payload)

    while pos < end:
        space = payload.find(b' ', pos)
        if space < 0:
            raise CorruptObjectError(f"tree entry at offset {pos} has no mode terminator", object_hash)

        nul = payload.find(b'\x00', space + 1)
        if nul < 0:
            raise CorruptObjectError(f"tree entry at offset {pos} has no name terminator", object_hash)

        digest_end = nul + 1 + DIGEST_SIZE
        if digest_end > end:
            raise CorruptObjectError(f"tree entry at offset {pos} is truncated", object_hash)

        try:
            mode = payload[pos:space].decode('ascii')
            ObjectType.from_mode(mode)
            name = payload[space + 1:nul].decode('utf-8')
        except ValueError as e:
            raise CorruptObjectError(f"tree entry at offset {pos}: {e}", object_hash) from e

        entries.append(TreeEntry(mode, name, payload[nul + 1:digest_end]))
        pos = digest_end

    return entries
