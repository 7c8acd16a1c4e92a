"""
Application configuration.

Loads settings from environment variables and .env file.
All configuration is centralized here, no scattered magic strings.
Security header values are compiled in and deliberately not configurable.
"""

from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from headerguard.domain.headers.entities import CacheProfileName

DEFAULT_CACHE_PROFILES: list[dict[str, Any]] = [
    {
        "key": CacheProfileName.STATIC_FILES,
        "maxAgeSeconds": 2_592_000,  # 30 days
        "visibility": "public",
        "mustRevalidate": False,
    },
]


class Settings(BaseSettings):
    """Application settings loaded from environment.

    Attributes:
        project_name: Display name for the API.
        version: Current API version string.
        debug: Enable developer error pages and docs. Must be False in production.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
        static_directory: Directory served as static files.
        static_url_path: URL prefix the static directory is mounted at.
        static_cache_profile: Cache profile applied to static files.
        cache_profiles: Cache profile document. Read from the
            ``CACHE_PROFILES`` environment variable as JSON. Records are
            validated when the CacheProfileStore is built, not here.
        static_file_caching_enabled: Add Cache-Control to static files.
        https_everywhere: Add Strict-Transport-Security on HTTPS requests.
        security_headers_enabled: Add the anti-sniffing, download
            and anti-framing headers.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    project_name: str = "HeaderGuard"
    version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    static_directory: str = "static"
    static_url_path: str = "/static"
    static_cache_profile: str = CacheProfileName.STATIC_FILES
    cache_profiles: list[Any] = Field(
        default_factory=lambda: [dict(p) for p in DEFAULT_CACHE_PROFILES]
    )

    static_file_caching_enabled: bool = True
    https_everywhere: bool = True
    security_headers_enabled: bool = True


settings = Settings()
