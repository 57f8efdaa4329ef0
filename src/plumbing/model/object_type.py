"""
Object type tags.

Each stored object carries one of three type names in its header.
"""

import enum

from ..errors import InvalidObjectError


class ObjectType(enum.Enum):
    BLOB = 'blob'
    TREE = 'tree'
    COMMIT = 'commit'

    @property
    def tag(self) -> bytes:
        """Type name as it appears in an object header."""
        return self.value.encode('ascii')

    @property
    def mode(self) -> str:
        """
        File mode used when this type is listed in a tree.

        Commits cannot appear in a tree and raise InvalidObjectError.
        """
        try:
            return _MODES[self]
        except KeyError:
            raise InvalidObjectError(f"{self.value} objects have no tree entry mode")

    @classmethod
    def from_tag(cls, tag: bytes) -> 'ObjectType':
        """
        Look up a type by its header token.

        Raises ValueError for anything other than blob, tree or commit.
        """
        return cls(tag.decode('ascii'))

    @classmethod
    def from_mode(cls, mode: str) -> 'ObjectType':
        """Look up a type by tree entry mode. Raises ValueError if unknown."""
        for object_type, object_mode in _MODES.items():
            if object_mode == mode:
                return object_type
        raise ValueError(f"Unknown tree entry mode: {mode!r}")

    def __str__(self) -> str:
        return self.value


_MODES = {
    ObjectType.BLOB: '100644',
    ObjectType.TREE: '40000',
}
