"""
Test package structure and exports.

Verifies that the package is correctly structured and exposes the right API.
"""

import plumbing
from plumbing import (
    Repository,
    ObjectType,
    TreeEntry,
    Commit,
    PlumbingError,
    CorruptObjectError,
    DecodeError,
    StorageError,
)


def test_package_exports():
    """Verify that the package exposes the expected classes."""
    assert Repository is not None
    assert ObjectType is not None
    assert TreeEntry is not None
    assert Commit is not None
    assert PlumbingError is not None


def test_error_hierarchy():
    """Decode failures are corruption, storage failures are OS errors."""
    assert issubclass(DecodeError, CorruptObjectError)
    assert issubclass(CorruptObjectError, PlumbingError)
    assert issubclass(StorageError, PlumbingError)
    assert issubclass(StorageError, OSError)


def test_repository_initialization(tmp_path):
    """Verify that the repository scaffolding is created."""
    root = tmp_path / ".git"
    repo = Repository(root)
    repo.initialize()

    assert (root / "objects").is_dir()
    assert (root / "refs").is_dir()
    assert (root / "HEAD").read_text() == "ref: refs/heads/main\n"
    assert "repositoryformatversion = 0" in (root / "config").read_text()


def test_initialize_is_idempotent(tmp_path):
    """A second initialize keeps an edited HEAD and config."""
    root = tmp_path / ".git"
    repo = Repository(root)
    repo.initialize()

    (root / "HEAD").write_text("ref: refs/heads/trunk\n")
    repo.initialize()

    assert (root / "HEAD").read_text() == "ref: refs/heads/trunk\n"


def test_subpackage_imports():
    """Verify that subpackages are importable (even if not exposed directly)."""
    import plumbing.storage.object_store
    import plumbing.integrity.hashing
    import plumbing.integrity.compression
    import plumbing.builders.tree_builder

    assert plumbing.storage.object_store.ObjectStore is not None
    assert plumbing.integrity.hashing.compute_hash is not None
    assert plumbing.__version__
