"""
Integrity verification for stored objects.

Provides tamper detection and recursive reachability checks.
"""

from typing import Callable, List, Set, Tuple

from ..errors import CorruptObjectError, PlumbingError, ReferenceMissingError
from ..model.commit import Commit
from ..model.object_type import ObjectType
from ..model.objects import RawObject
from ..model.tree import parse_tree
from .hashing import compute_hash, to_hex


def verify_object_integrity(wire: bytes, expected_hash: str) -> None:
    """
    Verify that decompressed wire content matches its hash.

    Raises CorruptObjectError if mismatch detected.
    """
    actual_hash = to_hex(compute_hash(wire))
    if actual_hash != expected_hash:
        raise CorruptObjectError(f"content hashes to {actual_hash}", expected_hash)


def extract_references(raw: RawObject, object_hash: str = None) -> Set[str]:
    """
    Extract all object references from an object.

    References are found in:
    - tree: every entry's hash
    - commit: the tree line and the parent line, if any
    - blob: no references (leaf object)

    Returns set of referenced hashes.
    """
    if raw.object_type is ObjectType.TREE:
        return {entry.hash_hex for entry in parse_tree(raw.content, object_hash)}

    if raw.object_type is ObjectType.COMMIT:
        commit = Commit.from_payload(raw.content, object_hash)
        refs = {commit.tree}
        if commit.has_parent():
            refs.add(commit.parent)
        return refs

    return set()


def verify_references_exist(
    object_hash: str,
    references: Set[str],
    exists_func: Callable[[str], bool],
) -> None:
    """
    Verify that all referenced objects exist.

    Raises ReferenceMissingError if any reference is missing.
    """
    for ref_hash in sorted(references):
        if not exists_func(ref_hash):
            raise ReferenceMissingError(object_hash, ref_hash)


def verify_reachable(
    root_hash: str,
    load_func: Callable[[str], RawObject],
    exists_func: Callable[[str], bool],
) -> Tuple[bool, List[str]]:
    """
    Verify an object and everything reachable from it.

    load_func: loads and hash-checks an object by hash
    exists_func: checks if an object exists by hash

    Objects shared by several parents are checked once.
    Returns (is_valid, errors) where errors is list of error messages.
    """
    errors = []
    visited: Set[str] = set()
    pending = [root_hash]

    while pending:
        object_hash = pending.pop()
        if object_hash in visited:
            continue
        visited.add(object_hash)

        try:
            raw = load_func(object_hash)
            refs = extract_references(raw, object_hash)
            verify_references_exist(object_hash, refs, exists_func)
        except PlumbingError as e:
            errors.append(f"{object_hash}: {e}")
            continue

        pending.extend(sorted(refs - visited, reverse=True))

    return len(errors) == 0, errors
