class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class ConfigurationError(DomainError):
    """Raised when timezone or trigger time settings cannot be used.

    The process should refuse to start (or stop) instead of running with
    undefined timing.
    """
