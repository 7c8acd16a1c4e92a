"""
Concrete header policies.

- CacheControlPolicy: Cache-Control / Pragma / Vary for static files
- StrictTransportSecurityPolicy: HSTS on secure connections
- ContentSnifferBlockPolicy: X-Content-Type-Options
- DownloadOptionsPolicy: X-Download-Options
- FrameOptionsPolicy: X-Frame-Options
"""

from typing import Mapping

from headerguard.domain.headers.entities import (
    CacheProfile,
    FrameOptions,
    HstsSettings,
    ResponseContext,
)
from headerguard.domain.headers.ports import HeaderPolicy

CACHE_CONTROL = "Cache-Control"
PRAGMA = "Pragma"
VARY = "Vary"
STRICT_TRANSPORT_SECURITY = "Strict-Transport-Security"
X_CONTENT_TYPE_OPTIONS = "X-Content-Type-Options"
X_DOWNLOAD_OPTIONS = "X-Download-Options"
X_FRAME_OPTIONS = "X-Frame-Options"


class CacheControlPolicy(HeaderPolicy):
    """Applies a cache profile to static-file responses.

    The profile is resolved once, when the pipeline is assembled, so the
    Cache-Control and Pragma values are computed up front. Vary is merged
    with whatever the response already varies on.
    """

    name = "cache-control"

    def __init__(self, profile: CacheProfile) -> None:
        self._profile = profile
        headers = {CACHE_CONTROL: profile.cache_control}
        if profile.sends_pragma:
            headers[PRAGMA] = "no-cache"
        self._headers: Mapping[str, str] = headers

    @property
    def profile(self) -> CacheProfile:
        return self._profile

    def applies_to(self, context: ResponseContext) -> bool:
        return context.is_static_file

    def headers_for(self, context: ResponseContext) -> Mapping[str, str]:
        headers = dict(self._headers)
        if self._profile.vary_by_header:
            headers[VARY] = merge_vary(
                context.headers.get(VARY), self._profile.vary_by_header
            )
        return headers


def merge_vary(existing: str | None, header_name: str) -> str:
    """Add ``header_name`` to a Vary value, keeping what is already there."""
    if not existing or not existing.strip():
        return header_name
    present = {item.strip().lower() for item in existing.split(",")}
    if "*" in present or header_name.lower() in present:
        return existing
    return f"{existing}, {header_name}"


class StrictTransportSecurityPolicy(HeaderPolicy):
    """Adds Strict-Transport-Security to responses served over TLS.

    Browsers cache this header beyond a single request; a bad value
    locks clients out of plain HTTP for the whole max-age.
    """

    name = "strict-transport-security"

    def __init__(self, settings: HstsSettings | None = None) -> None:
        self._settings = settings or HstsSettings()

    @property
    def settings(self) -> HstsSettings:
        return self._settings

    def applies_to(self, context: ResponseContext) -> bool:
        return context.is_secure

    def headers_for(self, context: ResponseContext) -> Mapping[str, str]:
        return {STRICT_TRANSPORT_SECURITY: self._settings.header_value}


class FixedHeaderPolicy(HeaderPolicy):
    """Sets one header to a constant value on every response."""

    header_name: str = ""
    header_value: str = ""

    def headers_for(self, context: ResponseContext) -> Mapping[str, str]:
        return {self.header_name: self.header_value}


class ContentSnifferBlockPolicy(FixedHeaderPolicy):
    """Stops browsers from overriding the declared Content-Type."""

    name = "content-type-options"
    header_name = X_CONTENT_TYPE_OPTIONS
    header_value = "nosniff"


class DownloadOptionsPolicy(FixedHeaderPolicy):
    """Forces saved downloads to be opened manually."""

    name = "download-options"
    header_name = X_DOWNLOAD_OPTIONS
    header_value = "noopen"


class FrameOptionsPolicy(FixedHeaderPolicy):
    """Blocks rendering inside frames (clickjacking).

    DENY by default; SAMEORIGIN allows frames from the same origin.
    """

    name = "frame-options"
    header_name = X_FRAME_OPTIONS

    def __init__(self, option: FrameOptions = FrameOptions.DENY) -> None:
        self.header_value = option.value
