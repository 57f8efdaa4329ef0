"""
Repository engine.

Main entry point coordinating all components.
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional

from .builders.commit_builder import CommitBuilder
from .builders.tree_builder import TreeBuilder
from .codec import ObjectCodec
from .config import StoreConfig, load_config
from .errors import InvalidObjectError, PlumbingError, StorageError
from .integrity.verification import verify_reachable
from .model.commit import Commit
from .model.object_type import ObjectType
from .model.objects import CompressedObject, RawObject
from .model.tree import TreeEntry, parse_tree
from .storage.layout import StorageLayout
from .storage.object_store import ObjectStore

logger = logging.getLogger(__name__)


class Repository:
    """
    Plumbing operations over one repository metadata directory.

    This is the primary interface for:
    - Hashing files and bytes into blobs
    - Reading objects back by hash
    - Writing directory trees and commits
    - Verifying stored objects
    """

    def __init__(self, root: str | Path, config: Optional[StoreConfig] = None):
        """
        Open the repository whose metadata directory is root.

        Args:
            root: metadata directory, e.g. <worktree>/.git
            config: settings; loaded from <root>/config when omitted
        """
        self.layout = StorageLayout(root)
        self.root = self.layout.store_root
        self.config = config if config is not None else load_config(self.layout.config_path)

        self.object_store = ObjectStore(self.layout)
        self.codec = ObjectCodec(self.object_store, self.config.compression_level)
        self.tree_builder = TreeBuilder(
            self.codec,
            metadata_dir=self.config.metadata_dir,
            store_root=self.root,
        )
        self.commit_builder = CommitBuilder(self.codec, self.config.identity)

    def initialize(self) -> None:
        """
        Create the metadata directory structure.

        Safe to call multiple times (idempotent).
        """
        self.layout.initialize()

    # ========== Object Storage ==========

    def hash_bytes(
        self,
        data: bytes,
        object_type: ObjectType = ObjectType.BLOB,
        write: bool = True,
    ) -> CompressedObject:
        """Encode data as an object, storing it unless write is False."""
        if write:
            return self.codec.encode_and_store(data, object_type)
        return self.codec.encode(data, object_type)

    def hash_object(self, path: str | Path, write: bool = False) -> CompressedObject:
        """
        Hash a file's content as a blob.

        The blob is only stored when write is True.
        """
        path = Path(path)
        try:
            data = path.read_bytes()
        except OSError as e:
            raise StorageError("read_file", str(path), e) from e

        if write:
            return self.codec.encode_and_store(data, ObjectType.BLOB, str(path))
        return self.codec.encode(data, ObjectType.BLOB, str(path))

    def read_object(self, hash_hex: str, verify: bool = True) -> RawObject:
        """Load and parse an object by hash."""
        return self.codec.decode(hash_hex, verify=verify)

    def cat_file(self, hash_hex: str) -> bytes:
        """Return the payload of any object."""
        return self.read_object(hash_hex).content

    def has_object(self, hash_hex: str) -> bool:
        """Check if an object exists."""
        return self.object_store.has_object(hash_hex)

    def list_all_objects(self) -> List[str]:
        """List all object hashes in store."""
        return self.object_store.list_all_objects()

    # ========== Trees ==========

    def write_tree(self, directory: str | Path) -> CompressedObject:
        """Store directory as a tree and return the root tree object."""
        tree = self.tree_builder.build_tree(directory)
        logger.info("Wrote tree %s for %s", tree.hash_hex, directory)
        return tree

    def read_tree(self, hash_hex: str) -> List[TreeEntry]:
        """
        Retrieve the entries of a tree.

        Raises InvalidObjectError if the object is not a tree.
        """
        raw = self.read_object(hash_hex)
        if raw.object_type is not ObjectType.TREE:
            raise InvalidObjectError(f"expected a tree, got a {raw.object_type}", hash_hex)
        return parse_tree(raw.content, hash_hex)

    def ls_tree(self, hash_hex: str, name_only: bool = False) -> List[str]:
        """
        List a tree, one line per entry.

        Lines look like "<mode> <type> <hash>\\t<name>", or just the name
        when name_only is set.
        """
        entries = self.read_tree(hash_hex)
        if name_only:
            return [entry.name for entry in entries]
        return [str(entry) for entry in entries]

    # ========== Commits ==========

    def commit_tree(
        self,
        tree_hash_hex: str,
        message: str,
        parent: Optional[str] = None,
    ) -> CompressedObject:
        """Create a commit for a stored tree."""
        return self.commit_builder.commit(parent, message, tree_hash_hex)

    def read_commit(self, hash_hex: str) -> Commit:
        """
        Retrieve a commit by hash.

        Raises InvalidObjectError if the object is not a commit.
        """
        raw = self.read_object(hash_hex)
        if raw.object_type is not ObjectType.COMMIT:
            raise InvalidObjectError(f"expected a commit, got a {raw.object_type}", hash_hex)
        return Commit.from_payload(raw.content, hash_hex)

    # ========== Integrity Verification ==========

    def verify_object(self, hash_hex: str) -> bool:
        """
        Verify an object's integrity.

        Returns True if valid.
        Raises CorruptObjectError if corrupted.
        """
        self.codec.decode(hash_hex, verify=True)
        return True

    def verify_reachable(self, hash_hex: str) -> Dict[str, object]:
        """
        Verify an object and every object it references, recursively.

        Returns dict with:
            - valid: bool
            - errors: list of error messages
        """
        is_valid, errors = verify_reachable(
            hash_hex,
            load_func=self.read_object,
            exists_func=self.object_store.has_object,
        )

        return {
            'valid': is_valid,
            'errors': errors,
        }

    def detect_tampering(self) -> Dict[str, object]:
        """
        Detect tampering across all stored objects.

        Verifies that all objects' content matches their hashes.

        Returns dict with:
            - tampered: list of tampered object hashes
            - verified: count of verified objects
            - errors: list of errors encountered
        """
        result = {
            'tampered': [],
            'verified': 0,
            'errors': [],
        }

        for hash_hex in self.object_store.list_all_objects():
            try:
                self.verify_object(hash_hex)
                result['verified'] += 1
            except PlumbingError as e:
                result['tampered'].append(hash_hex)
                result['errors'].append(f"{hash_hex}: {e}")

        if result['tampered']:
            logger.warning("Found %d tampered objects", len(result['tampered']))

        return result

    def __repr__(self) -> str:
        return f"Repository(path={self.root})"
