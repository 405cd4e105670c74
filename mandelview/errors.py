"""Exceptions raised by the viewport core."""


class ConfigurationError(ValueError):
    """Raised when the core is constructed with invalid parameters."""
