"""
Commit object creation.
"""

import logging
import time
from typing import Callable, Optional

from ..codec import ObjectCodec
from ..config import AuthorIdentity
from ..integrity.hashing import validate_hash_hex
from ..model.commit import Commit
from ..model.object_type import ObjectType
from ..model.objects import CompressedObject

logger = logging.getLogger(__name__)


def current_millis() -> int:
    """Wall-clock time in milliseconds since the epoch."""
    return time.time_ns() // 1_000_000


class CommitBuilder:
    """
    Renders and stores commits for a configured identity.

    The same identity signs both the author and committer lines. The
    timestamp is part of the hashed content, so two otherwise identical
    commits made at different instants get different hashes.
    """

    def __init__(
        self,
        codec: ObjectCodec,
        identity: AuthorIdentity,
        clock: Callable[[], int] = current_millis,
    ):
        self.codec = codec
        self.identity = identity.validate()
        self.clock = clock

    def build(self, parent_hash_hex: Optional[str], message: str, tree_hash_hex: str) -> Commit:
        """Render a commit without storing it."""
        validate_hash_hex(tree_hash_hex)
        if parent_hash_hex is not None:
            validate_hash_hex(parent_hash_hex)

        signature = self.identity.signature(self.clock())
        return Commit(
            tree=tree_hash_hex,
            parent=parent_hash_hex,
            author=signature,
            committer=signature,
            message=message,
        )

    def commit(self, parent_hash_hex: Optional[str], message: str, tree_hash_hex: str) -> CompressedObject:
        """
        Create and store a commit pointing at tree_hash_hex.

        Returns the stored commit object.
        """
        commit = self.build(parent_hash_hex, message, tree_hash_hex)
        obj = self.codec.encode_and_store(commit.to_payload(), ObjectType.COMMIT)
        logger.info("Wrote commit %s for tree %s", obj.hash_hex, tree_hash_hex)
        return obj
