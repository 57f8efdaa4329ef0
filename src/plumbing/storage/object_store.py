"""
Content-addressed object storage.

Persists compressed object bytes under their hash.
"""

import logging
import os
import tempfile
from pathlib import Path

from ..errors import ObjectNotFoundError, StorageError
from .layout import StorageLayout

logger = logging.getLogger(__name__)


class ObjectStore:
    """
    Content-addressed object store with immutable objects.

    Objects are stored by their content hash.
    Once written, objects never change.
    """

    def __init__(self, layout: StorageLayout):
        """Initialize object store with given layout."""
        self.layout = layout

    def write(self, hash_hex: str, data: bytes) -> None:
        """
        Store compressed bytes under hash_hex.

        Idempotent: a hash names exactly one content, so an object that is
        already present is left as is without comparing bytes. New objects
        are written through a temp file and renamed into place.

        Raises StorageError on filesystem failure.
        """
        obj_path = self.layout.get_object_path(hash_hex)
        if obj_path.exists():
            logger.debug("Object %s already stored", hash_hex)
            return

        self.layout.ensure_object_directory(hash_hex)
        self._write_object_atomic(obj_path, data)
        logger.debug("Wrote object %s (%d bytes)", hash_hex, len(data))

    def read(self, hash_hex: str) -> bytes:
        """
        Read the compressed bytes stored under hash_hex.

        Raises ObjectNotFoundError if the object doesn't exist.
        Raises StorageError if it exists but cannot be read.
        """
        obj_path = self.layout.get_object_path(hash_hex)

        try:
            return obj_path.read_bytes()
        except FileNotFoundError:
            raise ObjectNotFoundError(hash_hex) from None
        except OSError as e:
            raise StorageError("read_object", str(obj_path), e) from e

    def has_object(self, hash_hex: str) -> bool:
        """Check if an object exists in the store."""
        return self.layout.object_exists(hash_hex)

    def list_all_objects(self) -> list[str]:
        """List all object hashes in the store."""
        return self.layout.list_all_objects()

    def _write_object_atomic(self, path: Path, data: bytes) -> None:
        """
        Write object file atomically.

        Uses temp file + rename for atomicity.
        """
        temp_path = None
        try:
            fd, temp_path = tempfile.mkstemp(dir=str(path.parent), prefix='.tmp_')
            with os.fdopen(fd, 'wb') as f:
                f.write(data)

            # A concurrent writer of the same hash wrote identical bytes.
            os.replace(temp_path, path)
            temp_path = None

        except OSError as e:
            raise StorageError("write_file", str(path), e) from e

        finally:
            if temp_path is not None and os.path.exists(temp_path):
                os.unlink(temp_path)
