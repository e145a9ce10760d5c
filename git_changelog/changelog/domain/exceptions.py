"""Exceptions for Changelog domain."""


class BackendError(RuntimeError):
    """Raised when a generation backend fails to produce text."""


class BackendConfigurationError(BackendError, ValueError):
    """Raised when a generation backend is missing required configuration."""


class ConfigurationError(ValueError):
    """Raised when the changelog inputs are invalid or incomplete."""
