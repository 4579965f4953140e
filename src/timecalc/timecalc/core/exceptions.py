class DomainError(Exception):
    """Base exception for engine misuse (never raised for booking anomalies)."""


class ValidationError(DomainError):
    """Raised when a configuration value is invalid or violates domain rules."""


class ConfigurationError(DomainError):
    """Raised when engine settings cannot be loaded."""
