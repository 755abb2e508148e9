class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class DuplicateRecordError(DomainError):
    """Raised when storage rejects a record because its unique key already exists."""


class NotFoundError(DomainError):
    """Raised when a record with the requested id does not exist."""


class StorageError(DomainError):
    """Raised when the database cannot complete an operation."""
