"""
Filesystem layout for object storage.

Implements content-addressed storage with directory sharding.
"""

import logging
from pathlib import Path

from ..config import default_config
from ..errors import StorageError
from ..integrity.hashing import get_hash_prefix, validate_hash_hex

logger = logging.getLogger(__name__)

HEAD_CONTENT = 'ref: refs/heads/main\n'


class StorageLayout:
    """
    Manages filesystem layout for a repository metadata directory.

    Layout:
        store_root/
            objects/
                <hex[0:2]>/
                    <hex[2:]>    # compressed object file
            refs/
            HEAD
            config
    """

    def __init__(self, store_root: Path):
        """Initialize storage layout at given root."""
        self.store_root = Path(store_root).resolve()
        self.objects_dir = self.store_root / "objects"
        self.refs_dir = self.store_root / "refs"
        self.head_path = self.store_root / "HEAD"
        self.config_path = self.store_root / "config"

    def initialize(self) -> None:
        """
        Initialize the metadata directory structure.

        Creates directories, HEAD and config.
        Idempotent - never overwrites an existing HEAD or config.
        """
        try:
            self.store_root.mkdir(parents=True, exist_ok=True)
            self.objects_dir.mkdir(exist_ok=True)
            self.refs_dir.mkdir(exist_ok=True)

            if not self.head_path.exists():
                self.head_path.write_text(HEAD_CONTENT, encoding='utf-8')

            if not self.config_path.exists():
                with self.config_path.open('w', encoding='utf-8') as f:
                    default_config().write(f)
        except OSError as e:
            raise StorageError("initialize", str(self.store_root), e) from e

        logger.info("Initialized repository at %s", self.store_root)

    def get_object_path(self, hash_hex: str) -> Path:
        """
        Get filesystem path for an object by its hash.

        The first two hex characters name the directory, the remaining
        38 name the file.
        """
        validate_hash_hex(hash_hex)
        prefix = get_hash_prefix(hash_hex, 2)
        return self.objects_dir / prefix / hash_hex[2:]

    def ensure_object_directory(self, hash_hex: str) -> None:
        """
        Ensure the directory for an object exists.

        Concurrent creation by another writer is not an error.
        """
        prefix_dir = self.get_object_path(hash_hex).parent
        try:
            prefix_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError("mkdir", str(prefix_dir), e) from e

    def list_all_objects(self) -> list[str]:
        """
        List all object hashes in the store.

        Scans all prefix directories and returns hashes in sorted order.
        """
        objects = []

        if not self.objects_dir.exists():
            return objects

        try:
            for prefix_dir in self.objects_dir.iterdir():
                if not prefix_dir.is_dir() or len(prefix_dir.name) != 2:
                    continue

                for obj_file in prefix_dir.iterdir():
                    if obj_file.is_file() and not obj_file.name.startswith('.'):
                        objects.append(prefix_dir.name + obj_file.name)

        except OSError as e:
            raise StorageError("list_objects", str(self.objects_dir), e) from e

        return sorted(objects)

    def object_exists(self, hash_hex: str) -> bool:
        """Check if an object exists in storage."""
        return self.get_object_path(hash_hex).is_file()
