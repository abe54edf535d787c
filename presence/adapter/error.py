"""Adapter layer errors."""


class AdapterError(Exception):
    """Base adapter error."""

    pass


class ConfigurationError(AdapterError):
    """Adapter is missing required configuration."""

    pass
