"""Exceptions raised by the resolution engine."""

from typing import Any


class ResolverError(Exception):
    """Base class for all resolver failures."""


class FileNotAddedError(ResolverError):
    """Raised when resolution is requested for a file the host does not know."""

    def __init__(self, file_name: str):
        self.file_name = file_name
        super().__init__(f"file [{file_name}] has not been added")


class ResolutionError(ResolverError):
    """Raised when an injected primitive fails for one specifier.

    The primitive's own exception is available as ``__cause__``.
    """

    def __init__(self, specifier: str, origin: str, reason: str | None = None):
        self.specifier = specifier
        self.origin = origin
        message = f"failed to resolve [{specifier}] from [{origin}]"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class TypingsConfigurationError(ResolverError):
    """Raised when a package's 'typings' value is neither a path nor ``true``."""

    def __init__(self, value: Any, address: str):
        self.value = value
        self.address = address
        super().__init__(f"invalid 'typings' value [{value}] [{address}]")
