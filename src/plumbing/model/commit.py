"""
Commit object model.

Commits record a tree snapshot, an optional parent and authorship.
"""

from typing import Optional

from ..errors import CorruptObjectError

# Written in place of a parent hash for root commits.
PARENT_PLACEHOLDER = ' '


class Commit:
    """
    Immutable commit record.

    author and committer hold the full signature text that follows the
    keyword on their header lines: "<name> <<email>> <millis> <offset>".
    """

    def __init__(
        self,
        tree: str,
        parent: Optional[str],
        author: str,
        committer: str,
        message: str,
    ):
        self.tree = tree
        self.parent = parent
        self.author = author
        self.committer = committer
        self.message = message

    def to_payload(self) -> bytes:
        """
        Render the commit payload.

        A root commit keeps its parent line, holding a single-space
        placeholder instead of a hash.
        """
        parent = self.parent if self.parent else PARENT_PLACEHOLDER
        text = (
            f"tree {self.tree}\n"
            f"parent {parent}\n"
            f"author {self.author}\n"
            f"committer {self.committer}\n"
            f"\n"
            f"{self.message}\n"
        )
        return text.encode('utf-8')

    @classmethod
    def from_payload(cls, payload: bytes, object_hash: str = None) -> 'Commit':
        """
        Reconstruct a commit from its payload.

        Raises CorruptObjectError if a header line is missing.
        """
        try:
            text = payload.decode('utf-8')
        except UnicodeDecodeError as e:
            raise CorruptObjectError(f"commit is not valid UTF-8: {e}", object_hash) from e

        head, sep, message = text.partition('\n\n')
        if not sep:
            raise CorruptObjectError("commit has no message separator", object_hash)

        fields = {}
        for line in head.split('\n'):
            key, space, value = line.partition(' ')
            if not space:
                raise CorruptObjectError(f"malformed commit header line: {line!r}", object_hash)
            fields[key] = value

        for key in ('tree', 'parent', 'author', 'committer'):
            if key not in fields:
                raise CorruptObjectError(f"commit is missing its {key} line", object_hash)

        parent = fields['parent']
        if parent == PARENT_PLACEHOLDER:
            parent = None

        if message.endswith('\n'):
            message = message[:-1]

        return cls(
            tree=fields['tree'],
            parent=parent,
            author=fields['author'],
            committer=fields['committer'],
            message=message,
        )

    def has_parent(self) -> bool:
        """Check if this commit has a parent."""
        return self.parent is not None

    def __eq__(self, other) -> bool:
        if not isinstance(other, Commit):
            return NotImplemented
        return self.to_payload() == other.to_payload()

    def __repr__(self) -> str:
        parent_preview = self.parent[:8] + "..." if self.parent else "None"
        return f"Commit(tree={self.tree[:8]}..., parent={parent_preview})"
