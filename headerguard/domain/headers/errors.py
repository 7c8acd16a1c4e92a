"""
Domain-specific errors for the headers bounded context.

All errors raised from the domain layer must be defined here.
Every error is a startup-time configuration failure; none of them
may surface while a request is being handled.
No framework imports allowed.
"""

from typing import Iterable, Optional


class HeaderPolicyError(Exception):
    """Base error for all header policy errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class ConfigurationError(HeaderPolicyError):
    """Raised when header policy configuration is invalid.

    Fatal at startup: pipeline assembly is aborted.
    """


class UnknownCacheProfileError(ConfigurationError):
    """Raised when a cache profile name is absent from the store."""

    def __init__(self, name: str, available: Iterable[str] = ()) -> None:
        self.name = name
        self.available = tuple(available)
        known = ", ".join(self.available) or "<none>"
        super().__init__(f"Unknown cache profile: {name!r} (known: {known})")


class DuplicateCacheProfileError(ConfigurationError):
    """Raised when two cache profiles share the same name."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Duplicate cache profile: {name!r}")
        self.name = name


class MalformedCacheProfileError(ConfigurationError):
    """Raised when a cache profile record cannot be turned into a profile."""

    def __init__(self, reason: str, index: Optional[int] = None) -> None:
        where = f" at position {index}" if index is not None else ""
        super().__init__(f"Malformed cache profile record{where}: {reason}")
        self.reason = reason
        self.index = index
