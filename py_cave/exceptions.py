"""Exceptions raised by py-cave."""


class ConfigurationError(ValueError):
    """Raised when generation parameters are rejected before any work starts."""
