"""
Directory to tree conversion.

Turns files into blobs and subdirectories into nested trees, writing
every object it creates.
"""

import logging
import os
from pathlib import Path
from typing import List, Optional, Tuple

from ..codec import ObjectCodec
from ..config import DEFAULT_METADATA_DIR
from ..errors import StorageError
from ..model.object_type import ObjectType
from ..model.objects import CompressedObject
from ..model.tree import TreeEntry, render_tree

logger = logging.getLogger(__name__)


class TreeBuilder:
    """
    Builds tree objects from a directory on disk.

    Entries are ordered by their full source path so the resulting hash
    does not depend on the order the filesystem lists them in. Entries
    named like the metadata directory, and the store root itself, are
    skipped. Anything that is neither a regular file nor a directory
    (symlinks, sockets, devices) is skipped with a warning.

    Any unreadable file or directory aborts the whole build.
    """

    def __init__(
        self,
        codec: ObjectCodec,
        metadata_dir: str = DEFAULT_METADATA_DIR,
        store_root: Optional[Path] = None,
    ):
        self.codec = codec
        self.metadata_dir = metadata_dir
        self.store_root = Path(store_root).resolve() if store_root else None

    def build_tree(self, directory) -> CompressedObject:
        """
        Write the tree for directory and everything below it.

        Returns the stored tree object.
        """
        directory = os.fspath(directory)
        children: List[Tuple[str, CompressedObject]] = []

        for entry in self._list_entries(directory):
            entry_path = os.path.join(directory, entry.name)

            if self._is_excluded(entry):
                logger.debug("Skipping metadata entry %s", entry_path)
                continue

            try:
                is_file = entry.is_file(follow_symlinks=False)
                is_dir = entry.is_dir(follow_symlinks=False)
            except OSError as e:
                raise StorageError("stat", entry_path, e) from e

            if is_file:
                children.append((entry_path, self._store_blob(entry_path)))
            elif is_dir:
                children.append((entry_path, self.build_tree(entry_path)))
            else:
                logger.warning("Skipping special file %s", entry_path)

        children.sort(key=lambda child: child[0])

        payload = render_tree(
            TreeEntry.for_object(obj.object_type, os.path.basename(path), obj.hash)
            for path, obj in children
        )
        tree = self.codec.encode_and_store(payload, ObjectType.TREE, directory)
        logger.debug("Wrote tree %s for %s (%d entries)", tree.hash_hex, directory, len(children))
        return tree

    def _list_entries(self, directory: str) -> List[os.DirEntry]:
        try:
            with os.scandir(directory) as it:
                return list(it)
        except OSError as e:
            raise StorageError("list_directory", directory, e) from e

    def _is_excluded(self, entry: os.DirEntry) -> bool:
        if entry.name == self.metadata_dir:
            return True
        if self.store_root is not None and entry.is_dir(follow_symlinks=False):
            return Path(entry.path).resolve() == self.store_root
        return False

    def _store_blob(self, path: str) -> CompressedObject:
        try:
            with open(path, 'rb') as f:
                data = f.read()
        except OSError as e:
            raise StorageError("read_file", path, e) from e

        return self.codec.encode_and_store(data, ObjectType.BLOB, path)
