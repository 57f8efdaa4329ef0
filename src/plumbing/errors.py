"""
Error types for object store operations.

All errors are explicit and never silent.
"""


class PlumbingError(Exception):
    """Base exception for all object store errors."""
    pass


class ObjectNotFoundError(PlumbingError):
    """Raised when a requested object does not exist."""

    def __init__(self, object_hash: str):
        self.object_hash = object_hash
        super().__init__(f"Object not found: {object_hash}")


class CorruptObjectError(PlumbingError):
    """Raised when a stored object cannot be parsed or fails its hash check."""

    def __init__(self, reason: str, object_hash: str = None):
        self.reason = reason
        self.object_hash = object_hash
        msg = f"Corrupt object: {reason}"
        if object_hash:
            msg += f" (hash: {object_hash})"
        super().__init__(msg)


class DecodeError(CorruptObjectError):
    """Raised when a compressed stream is malformed."""

    def __init__(self, cause: Exception = None, object_hash: str = None):
        self.cause = cause
        reason = "invalid compressed stream"
        if cause:
            reason += f": {cause}"
        super().__init__(reason, object_hash)


class InvalidObjectError(PlumbingError):
    """Raised when an object is malformed or used where it does not fit."""

    def __init__(self, reason: str, object_hash: str = None):
        self.reason = reason
        self.object_hash = object_hash
        msg = f"Invalid object: {reason}"
        if object_hash:
            msg += f" (hash: {object_hash})"
        super().__init__(msg)


class ReferenceMissingError(PlumbingError):
    """Raised when a tree or commit references an object that is not stored."""

    def __init__(self, referencing_hash: str, missing_hash: str):
        self.referencing_hash = referencing_hash
        self.missing_hash = missing_hash
        super().__init__(
            f"Object {referencing_hash} references missing object {missing_hash}"
        )


class StorageError(PlumbingError, OSError):
    """Raised when filesystem operations fail."""

    def __init__(self, operation: str, path: str, cause: Exception = None):
        self.operation = operation
        self.path = path
        self.cause = cause
        msg = f"Storage error during {operation}: {path}"
        if cause:
            msg += f"\nCause: {cause}"
        super().__init__(msg)


class InvalidReferenceError(PlumbingError):
    """Raised when an object hash string is malformed."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Invalid reference: {reason}")


class ConfigError(PlumbingError):
    """Raised when configuration values cannot be used."""

    def __init__(self, reason: str, path: str = None):
        self.reason = reason
        self.path = path
        msg = f"Configuration error: {reason}"
        if path:
            msg += f" ({path})"
        super().__init__(msg)
