"""
Test directory to tree conversion.

Verifies tree layout, ordering and reproducibility.
"""

import hashlib
import os
import sys

import pytest

from plumbing import (
    Repository,
    ObjectType,
    TreeEntry,
    InvalidObjectError,
    CorruptObjectError,
    StorageError,
)
from plumbing.builders.tree_builder import TreeBuilder
from plumbing.model.tree import parse_tree, render_tree

EMPTY_TREE = '4b825dc642cb6eb9a060e54bf8d69288fbee4904'


def git_hash(object_type: bytes, payload: bytes) -> bytes:
    return hashlib.sha1(object_type + b' ' + str(len(payload)).encode() + b'\x00' + payload).digest()


@pytest.fixture
def worktree(tmp_path):
    """A worktree holding a.txt and b/c.txt."""
    (tmp_path / "a.txt").write_bytes(b"hello")
    (tmp_path / "b").mkdir()
    (tmp_path / "b" / "c.txt").write_bytes(b"world")
    return tmp_path


@pytest.fixture
def repo(worktree):
    repo = Repository(worktree / ".git")
    repo.initialize()
    return repo


class TestTreeBuilder:

    def test_end_to_end_layout(self, repo, worktree):
        """Two blobs, an inner tree for b/ and an outer tree, all stored."""
        a_blob = git_hash(b"blob", b"hello")
        c_blob = git_hash(b"blob", b"world")
        inner_payload = b"100644 c.txt\x00" + c_blob
        inner_tree = git_hash(b"tree", inner_payload)
        outer_payload = b"100644 a.txt\x00" + a_blob + b"40000 b\x00" + inner_tree

        tree = repo.write_tree(worktree)

        assert tree.object_type is ObjectType.TREE
        assert tree.hash == git_hash(b"tree", outer_payload)
        assert tree.source_path == str(worktree)

        assert repo.read_object(inner_tree.hex()).content == inner_payload
        assert repo.read_object(tree.hash_hex).content == outer_payload
        assert repo.cat_file(a_blob.hex()) == b"hello"
        assert repo.cat_file(c_blob.hex()) == b"world"
        assert len(repo.list_all_objects()) == 4

    def test_entries_ordered_a_before_b(self, repo, worktree):
        tree = repo.write_tree(worktree)

        assert repo.ls_tree(tree.hash_hex, name_only=True) == ["a.txt", "b"]

    def test_ls_tree_full_lines(self, repo, worktree):
        tree = repo.write_tree(worktree)
        a_blob = git_hash(b"blob", b"hello").hex()

        lines = repo.ls_tree(tree.hash_hex)

        assert lines[0] == f"100644 blob {a_blob}\ta.txt"
        assert lines[1].startswith("040000 tree ")
        assert lines[1].endswith("\tb")

    def test_metadata_directory_skipped(self, repo, worktree):
        """Nothing under .git ends up in the tree."""
        repo.hash_bytes(b"stored before the snapshot")
        tree = repo.write_tree(worktree)

        assert ".git" not in repo.ls_tree(tree.hash_hex, name_only=True)

    def test_custom_store_root_skipped(self, worktree):
        repo = Repository(worktree / "store")
        repo.initialize()

        tree = repo.write_tree(worktree)

        assert repo.ls_tree(tree.hash_hex, name_only=True) == ["a.txt", "b"]

    def test_empty_directory_matches_git(self, repo, tmp_path):
        empty = tmp_path / "b" / "empty"
        empty.mkdir()

        assert repo.write_tree(empty).hash_hex == EMPTY_TREE

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unavailable")
    def test_symlinks_skipped(self, repo, worktree):
        before = repo.write_tree(worktree).hash_hex
        os.symlink(worktree / "a.txt", worktree / "link.txt")

        assert repo.write_tree(worktree).hash_hex == before

    @pytest.mark.skipif(sys.platform != "linux", reason="needs byte filenames")
    def test_undecodable_name_is_fatal(self, repo, worktree):
        with open(os.path.join(os.fsencode(worktree), b"bad\xffname"), "wb") as f:
            f.write(b"x")

        with pytest.raises(InvalidObjectError, match="not text-encodable"):
            repo.write_tree(worktree)

    def test_unreadable_directory_is_fatal(self, repo, tmp_path):
        with pytest.raises(StorageError):
            repo.write_tree(tmp_path / "does-not-exist")


class TestTreeDeterminism:

    def test_same_hash_twice(self, repo, worktree):
        first = repo.write_tree(worktree)
        second = repo.write_tree(worktree)

        assert first.hash_hex == second.hash_hex
        assert first.content == second.content

    def test_independent_of_listing_order(self, repo, worktree, monkeypatch):
        """Reversing the directory listing does not change the hash."""
        for name in ("zeta", "mu", "alpha"):
            (worktree / name).write_bytes(name.encode())
        expected = repo.write_tree(worktree).hash_hex

        list_entries = TreeBuilder._list_entries
        monkeypatch.setattr(
            TreeBuilder,
            "_list_entries",
            lambda self, directory: list(reversed(list_entries(self, directory))),
        )

        assert repo.write_tree(worktree).hash_hex == expected
        assert repo.ls_tree(expected, name_only=True) == ["a.txt", "alpha", "b", "mu", "zeta"]

    def test_content_change_changes_hash(self, repo, worktree):
        before = repo.write_tree(worktree).hash_hex
        (worktree / "b" / "c.txt").write_bytes(b"world!")

        assert repo.write_tree(worktree).hash_hex != before


class TestTreePayload:

    def test_entry_layout(self):
        digest = bytes(range(20))
        entry = TreeEntry.for_object(ObjectType.BLOB, "a.txt", digest)

        assert entry.render() == b"100644 a.txt\x00" + digest

    def test_commit_has_no_mode(self):
        with pytest.raises(InvalidObjectError):
            TreeEntry.for_object(ObjectType.COMMIT, "x", bytes(20))

    def test_parse_inverts_render(self):
        entries = [
            TreeEntry.for_object(ObjectType.BLOB, "a.txt", b"\x01" * 20),
            TreeEntry.for_object(ObjectType.TREE, "b", b"\x00" * 20),
            TreeEntry.for_object(ObjectType.BLOB, "spaced name.md", b" " * 20),
        ]

        assert parse_tree(render_tree(entries)) == entries

    def test_hash_bytes_may_contain_separators(self):
        """Raw hashes containing NUL or space bytes parse correctly."""
        digest = b"\x00 " * 10
        entries = [TreeEntry("100644", "x", digest), TreeEntry("100644", "y", digest)]

        assert parse_tree(render_tree(entries)) == entries

    def test_truncated_payload(self):
        payload = render_tree([TreeEntry("100644", "a", b"\x01" * 20)])

        with pytest.raises(CorruptObjectError, match="truncated"):
            parse_tree(payload[:-1])

    def test_unknown_mode(self):
        with pytest.raises(CorruptObjectError):
            parse_tree(b"120000 link\x00" + b"\x01" * 20)

    @pytest.mark.parametrize("name", ["", "a/b", "nul\x00name"])
    def test_invalid_names(self, name):
        with pytest.raises(InvalidObjectError):
            TreeEntry("100644", name, b"\x01" * 20).render()

    def test_read_tree_rejects_blob(self, repo):
        blob = repo.hash_bytes(b"not a tree")

        with pytest.raises(InvalidObjectError):
            repo.read_tree(blob.hash_hex)
