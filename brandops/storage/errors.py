"""
Storage error taxonomy.

"Not found" is never an error: storage returns ``None`` and the API answers 404.
"""


class StorageError(Exception):
    """A backend failed (connectivity, remote service, unexpected engine error)."""


class ConstraintViolationError(StorageError):
    """A write was rejected by a data constraint."""


class DuplicateKeyError(ConstraintViolationError):
    """A unique value (username, brand name, brand code) already exists."""


class InvalidReferenceError(ConstraintViolationError):
    """A brand-scoped record points at a brand that does not exist."""
