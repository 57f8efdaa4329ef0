"""
Plumbing - content-addressed blob, tree and commit storage.

This package provides:
- Loose object storage compatible with git's on-disk format
- Deterministic directory-to-tree conversion
- Commit creation with configurable identity
- Integrity verification and tamper detection

Main entry point:
    Repository - primary interface for all operations

Example usage:
    from plumbing import Repository

    repo = Repository('/path/to/worktree/.git')
    repo.initialize()

    tree = repo.write_tree('/path/to/worktree')
    commit = repo.commit_tree(tree.hash_hex, 'Initial snapshot')
"""

from .engine import Repository
from .config import AuthorIdentity, StoreConfig, load_config
from .errors import (
    PlumbingError,
    ObjectNotFoundError,
    CorruptObjectError,
    DecodeError,
    InvalidObjectError,
    ReferenceMissingError,
    StorageError,
    InvalidReferenceError,
    ConfigError,
)
from .model.commit import Commit
from .model.object_type import ObjectType
from .model.objects import CompressedObject, RawObject
from .model.tree import TreeEntry

__version__ = '0.1.0'

__all__ = [
    # Main engine
    'Repository',

    # Configuration
    'AuthorIdentity',
    'StoreConfig',
    'load_config',

    # Errors
    'PlumbingError',
    'ObjectNotFoundError',
    'CorruptObjectError',
    'DecodeError',
    'InvalidObjectError',
    'ReferenceMissingError',
    'StorageError',
    'InvalidReferenceError',
    'ConfigError',

    # Models
    'Commit',
    'CompressedObject',
    'ObjectType',
    'RawObject',
    'TreeEntry',
]
