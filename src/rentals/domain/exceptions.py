"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class SubmissionInProgressError(ValidationError):
    """A save for the same draft is still running."""


class BackendError(DomainException):
    """The backend could not be reached or rejected a query."""


class ConfigurationError(DomainException):
    """The backend cannot be built from the current settings."""
