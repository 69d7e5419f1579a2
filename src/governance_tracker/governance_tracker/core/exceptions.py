class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class LoadError(DomainError):
    """Raised when a bundled reference file is missing or unparsable."""


class StorageCorruptError(DomainError):
    """Raised when a persisted profile blob is not valid JSON."""


class ImportFormatError(DomainError):
    """Raised when an import payload is not a list of submissions."""
