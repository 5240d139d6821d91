"""Exceptions raised while discovering config providers."""

from typing import Optional


class DiscoveryError(Exception):
    """Base class for all discovery failures."""


class BadMethodCallError(DiscoveryError):
    """The provider was misconfigured (bad pattern type or unknown method)."""


class InvalidFileError(DiscoveryError):
    """A file did not yield a usable, invocable provider."""

    def __init__(self, message: str, file: Optional[str] = None):
        super().__init__(message)
        self.file = file


class ClassNameAmbiguousError(DiscoveryError):
    """The extracted identifier does not resolve to a loadable unit."""

    def __init__(self, message: str, identifier: str, file: Optional[str] = None):
        super().__init__(message)
        self.identifier = identifier
        self.file = file


class ConfigError(DiscoveryError):
    """A discovery config file could not be read or is malformed."""
