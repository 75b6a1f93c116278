class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class RecordSourceError(DomainError):
    """Raised by a record source when records cannot be fetched."""
