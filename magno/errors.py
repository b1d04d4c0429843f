"""Exceptions raised by Magno."""


class MagnoError(Exception):
    """Base class for Magno errors."""


class InvalidQuery(MagnoError, ValueError):
    """The query is missing or blank."""

    def __init__(self, message: str = "Query must be a non-empty string"):
        super().__init__(message)


class AdapterFailure(MagnoError):
    """A single source failed to produce results.

    Built by the aggregator to describe the failure; it is logged and
    recorded on the source update, never raised to callers.
    """

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"{source}: {reason}")


class ConfigError(MagnoError):
    """The settings file could not be read."""
