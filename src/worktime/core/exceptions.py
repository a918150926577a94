class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidInputError(ValidationError):
    """Raised before reconstruction when a subject id or timestamp is unusable."""
