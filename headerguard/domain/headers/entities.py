"""
Domain entities for the headers bounded context.

Entities describe the cache and security policies applied to outgoing
responses. They are immutable once loaded, except for ResponseContext,
which is owned by a single response.
They contain no framework imports and no IO operations.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import MutableMapping, Optional

from headerguard.domain.headers.errors import (
    ConfigurationError,
    MalformedCacheProfileError,
)

SECONDS_PER_DAY = 86_400

# Preloading requires includeSubDomains and at least 18 weeks.
HSTS_PRELOAD_MIN_MAX_AGE = 18 * 7 * SECONDS_PER_DAY
HSTS_MAX_AGE_SECONDS = HSTS_PRELOAD_MIN_MAX_AGE


class CacheProfileName:
    """Well-known cache profile names."""

    STATIC_FILES = "StaticFiles"


class CacheVisibility(Enum):
    """Who may store a cached response."""

    PUBLIC = "public"
    PRIVATE = "private"
    NO_STORE = "no-store"


class FrameOptions(Enum):
    """Values of the X-Frame-Options header."""

    DENY = "DENY"
    SAMEORIGIN = "SAMEORIGIN"


@dataclass(frozen=True)
class CacheProfile:
    """A named, reusable cache-control policy.

    Attributes:
        name: Unique profile key.
        max_age_seconds: Freshness lifetime, never negative.
        visibility: Public, private or no-store.
        must_revalidate: Append ``must-revalidate`` to Cache-Control.
        vary_by_header: Request header name sent back in ``Vary``, if any.
    """

    name: str
    max_age_seconds: int
    visibility: CacheVisibility = CacheVisibility.PUBLIC
    must_revalidate: bool = False
    vary_by_header: Optional[str] = None

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise MalformedCacheProfileError("profile name must be a non-empty string")
        if isinstance(self.max_age_seconds, bool) or not isinstance(
            self.max_age_seconds, int
        ):
            raise MalformedCacheProfileError(
                f"{self.name}: max age must be an integer"
            )
        if self.max_age_seconds < 0:
            raise MalformedCacheProfileError(
                f"{self.name}: max age must not be negative"
            )
        if not isinstance(self.visibility, CacheVisibility):
            raise MalformedCacheProfileError(
                f"{self.name}: unknown visibility {self.visibility!r}"
            )

    @property
    def cache_control(self) -> str:
        """Value of the Cache-Control header for this profile."""
        directives = [self.visibility.value, f"max-age={self.max_age_seconds}"]
        if self.must_revalidate:
            directives.append("must-revalidate")
        return ", ".join(directives)

    @property
    def sends_pragma(self) -> bool:
        """Whether legacy caches need ``Pragma: no-cache``."""
        return self.visibility is not CacheVisibility.PUBLIC


@dataclass(frozen=True)
class HstsSettings:
    """Strict-Transport-Security parameters."""

    max_age_seconds: int = HSTS_MAX_AGE_SECONDS
    include_subdomains: bool = True
    preload: bool = True

    def __post_init__(self) -> None:
        if self.max_age_seconds < 0:
            raise ConfigurationError("HSTS max age must not be negative")
        if self.preload and (
            not self.include_subdomains
            or self.max_age_seconds < HSTS_PRELOAD_MIN_MAX_AGE
        ):
            raise ConfigurationError(
                "HSTS preload requires includeSubDomains and a max age "
                f"of at least {HSTS_PRELOAD_MIN_MAX_AGE} seconds"
            )

    @property
    def header_value(self) -> str:
        parts = [f"max-age={self.max_age_seconds}"]
        if self.include_subdomains:
            parts.append("includeSubDomains")
        if self.preload:
            parts.append("preload")
        return "; ".join(parts)


@dataclass(frozen=True)
class SecurityHeaderConfig:
    """Compiled-in security header policy."""

    hsts: HstsSettings = field(default_factory=HstsSettings)
    frame_options: FrameOptions = FrameOptions.DENY


DEFAULT_SECURITY_HEADERS = SecurityHeaderConfig()


@dataclass
class ResponseContext:
    """The mutable header collection of one outgoing response.

    Attributes:
        headers: Response headers, mutated in place by policies.
        is_secure: True when the request arrived over HTTPS.
        is_static_file: True when the response serves a static file.
        path: Request path, informational only.
    """

    headers: MutableMapping[str, str]
    is_secure: bool = False
    is_static_file: bool = False
    path: str = "/"
