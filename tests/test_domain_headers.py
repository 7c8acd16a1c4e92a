"""
Tests for the headers domain layer.

Tests entities, the cache profile store and header policies in isolation.
No external dependencies or IO required.
"""

import pytest

from headerguard.domain.headers.cache_profiles import (
    CacheProfileStore,
    parse_cache_profile,
)
from headerguard.domain.headers.entities import (
    CacheProfile,
    CacheVisibility,
    FrameOptions,
    HstsSettings,
    ResponseContext,
)
from headerguard.domain.headers.errors import (
    ConfigurationError,
    DuplicateCacheProfileError,
    MalformedCacheProfileError,
    UnknownCacheProfileError,
)
from headerguard.domain.headers.policies import (
    CacheControlPolicy,
    ContentSnifferBlockPolicy,
    DownloadOptionsPolicy,
    FrameOptionsPolicy,
    StrictTransportSecurityPolicy,
)

EIGHTEEN_WEEKS = 18 * 7 * 86400


def _record(**overrides) -> dict:
    record = {
        "key": "StaticFiles",
        "maxAgeSeconds": 2592000,
        "visibility": "public",
        "mustRevalidate": False,
    }
    record.update(overrides)
    return record


def _static_context(**kwargs) -> ResponseContext:
    return ResponseContext(headers={}, is_static_file=True, **kwargs)


class TestCacheProfileEntity:
    """Tests for the CacheProfile entity."""

    def test_public_cache_control(self) -> None:
        """Public profile renders visibility and max-age only."""
        profile = CacheProfile("StaticFiles", 2592000, CacheVisibility.PUBLIC)
        assert profile.cache_control == "public, max-age=2592000"
        assert profile.sends_pragma is False

    def test_must_revalidate_appended(self) -> None:
        """must-revalidate is the last directive when enabled."""
        profile = CacheProfile(
            "Pages", 60, CacheVisibility.PRIVATE, must_revalidate=True
        )
        assert profile.cache_control == "private, max-age=60, must-revalidate"

    def test_no_store_sends_pragma(self) -> None:
        """no-store profiles ask legacy caches not to cache either."""
        profile = CacheProfile("Never", 0, CacheVisibility.NO_STORE)
        assert profile.cache_control == "no-store, max-age=0"
        assert profile.sends_pragma is True

    def test_negative_max_age_rejected(self) -> None:
        """Negative max-age is a malformed profile."""
        with pytest.raises(MalformedCacheProfileError):
            CacheProfile("Bad", -1)

    def test_profile_is_immutable(self) -> None:
        """Profiles cannot be changed after creation."""
        profile = CacheProfile("StaticFiles", 10)
        with pytest.raises(AttributeError):
            profile.max_age_seconds = 20  # type: ignore[misc]


class TestParseCacheProfile:
    """Tests for turning configuration records into profiles."""

    def test_valid_record(self) -> None:
        """A complete record produces the matching profile."""
        profile = parse_cache_profile(_record(varyByHeader="Accept-Encoding"))
        assert profile == CacheProfile(
            "StaticFiles",
            2592000,
            CacheVisibility.PUBLIC,
            must_revalidate=False,
            vary_by_header="Accept-Encoding",
        )

    def test_must_revalidate_defaults_to_false(self) -> None:
        """mustRevalidate may be omitted."""
        record = _record()
        del record["mustRevalidate"]
        assert parse_cache_profile(record).must_revalidate is False

    @pytest.mark.parametrize(
        "overrides",
        [
            {"key": ""},
            {"key": 42},
            {"maxAgeSeconds": -5},
            {"maxAgeSeconds": "60"},
            {"maxAgeSeconds": True},
            {"maxAgeSeconds": 1.5},
            {"visibility": "shared"},
            {"mustRevalidate": "yes"},
            {"varyByHeader": ""},
            {"maxAge": 10},
        ],
    )
    def test_malformed_records_rejected(self, overrides: dict) -> None:
        """Every malformed field is a configuration error."""
        with pytest.raises(MalformedCacheProfileError):
            parse_cache_profile(_record(**overrides))

    def test_missing_field_rejected(self) -> None:
        """Records without a visibility are malformed."""
        record = _record()
        del record["visibility"]
        with pytest.raises(MalformedCacheProfileError, match="visibility"):
            parse_cache_profile(record)

    def test_error_reports_position(self) -> None:
        """The record position is part of the error."""
        with pytest.raises(MalformedCacheProfileError) as exc_info:
            parse_cache_profile(_record(maxAgeSeconds=-1), index=3)
        assert exc_info.value.index == 3
        assert "position 3" in exc_info.value.message


class TestCacheProfileStore:
    """Tests for the CacheProfileStore."""

    def test_lookup_known_profile(self) -> None:
        """Lookup returns the profile stored under the name."""
        store = CacheProfileStore.from_records([_record()])
        assert store.lookup("StaticFiles").max_age_seconds == 2592000

    def test_lookup_unknown_profile(self) -> None:
        """Lookup of an absent name is a configuration error."""
        store = CacheProfileStore.from_records([_record()])
        with pytest.raises(UnknownCacheProfileError) as exc_info:
            store.lookup("Missing")
        assert exc_info.value.name == "Missing"
        assert exc_info.value.available == ("StaticFiles",)
        assert isinstance(exc_info.value, ConfigurationError)

    def test_lookup_is_case_sensitive(self) -> None:
        """Profile names are compared ordinally."""
        store = CacheProfileStore.from_records([_record()])
        with pytest.raises(UnknownCacheProfileError):
            store.lookup("staticfiles")

    def test_order_is_preserved(self) -> None:
        """Names iterate in declaration order."""
        store = CacheProfileStore.from_records(
            [_record(key="b"), _record(key="a"), _record(key="c")]
        )
        assert store.names() == ("b", "a", "c")
        assert list(store) == ["b", "a", "c"]
        assert len(store) == 3
        assert "a" in store

    def test_duplicate_names_rejected(self) -> None:
        """Two profiles cannot share a name."""
        with pytest.raises(DuplicateCacheProfileError):
            CacheProfileStore.from_records([_record(), _record()])

    def test_empty_store(self) -> None:
        """An empty document yields an empty store."""
        store = CacheProfileStore.from_records([])
        assert len(store) == 0
        with pytest.raises(UnknownCacheProfileError):
            store.lookup("StaticFiles")


class TestCacheControlPolicy:
    """Tests for the static-file cache stage."""

    @pytest.mark.parametrize("max_age", [0, 1, 60, 2592000, 31536000])
    def test_public_profile_headers(self, max_age: int) -> None:
        """Public profiles set Cache-Control only, never Pragma."""
        policy = CacheControlPolicy(CacheProfile("StaticFiles", max_age))
        context = policy.apply(_static_context())
        assert context.headers == {"Cache-Control": f"public, max-age={max_age}"}

    @pytest.mark.parametrize(
        "visibility", [CacheVisibility.PRIVATE, CacheVisibility.NO_STORE]
    )
    def test_non_public_profile_sends_pragma(
        self, visibility: CacheVisibility
    ) -> None:
        """Private and no-store profiles always add Pragma: no-cache."""
        policy = CacheControlPolicy(CacheProfile("StaticFiles", 30, visibility))
        context = policy.apply(_static_context())
        assert context.headers["Cache-Control"] == f"{visibility.value}, max-age=30"
        assert context.headers["Pragma"] == "no-cache"

    def test_vary_header(self) -> None:
        """Profiles with a vary rule emit Vary."""
        profile = CacheProfile(
            "StaticFiles", 60, vary_by_header="Accept-Encoding"
        )
        context = CacheControlPolicy(profile).apply(_static_context())
        assert context.headers["Vary"] == "Accept-Encoding"

    def test_vary_merged_with_existing(self) -> None:
        """An existing Vary value is extended, not replaced."""
        profile = CacheProfile("StaticFiles", 60, vary_by_header="Accept-Language")
        context = CacheControlPolicy(profile).apply(
            ResponseContext(headers={"Vary": "Accept-Encoding"}, is_static_file=True)
        )
        assert context.headers["Vary"] == "Accept-Encoding, Accept-Language"

    @pytest.mark.parametrize("existing", ["accept-encoding", "Origin, Accept-Encoding", "*"])
    def test_vary_not_duplicated(self, existing: str) -> None:
        """Vary is left alone when it already covers the header."""
        profile = CacheProfile("StaticFiles", 60, vary_by_header="Accept-Encoding")
        policy = CacheControlPolicy(profile)
        context = ResponseContext(headers={"Vary": existing}, is_static_file=True)
        policy.apply(context)
        policy.apply(context)
        assert context.headers["Vary"] == existing

    def test_skips_non_static_responses(self) -> None:
        """Dynamic responses are left alone."""
        policy = CacheControlPolicy(CacheProfile("StaticFiles", 60))
        context = policy.apply(ResponseContext(headers={}))
        assert context.headers == {}


class TestStrictTransportSecurityPolicy:
    """Tests for the HSTS stage."""

    def test_secure_connection(self) -> None:
        """HSTS max-age is exactly 18 weeks with subdomains and preload."""
        context = StrictTransportSecurityPolicy().apply(
            ResponseContext(headers={}, is_secure=True)
        )
        assert context.headers["Strict-Transport-Security"] == (
            f"max-age={EIGHTEEN_WEEKS}; includeSubDomains; preload"
        )
        assert EIGHTEEN_WEEKS == 10886400

    def test_insecure_connection(self) -> None:
        """No HSTS header over plain HTTP."""
        context = StrictTransportSecurityPolicy().apply(
            ResponseContext(headers={}, is_secure=False)
        )
        assert "Strict-Transport-Security" not in context.headers

    def test_preload_requires_subdomains(self) -> None:
        """Preload without includeSubDomains is rejected."""
        with pytest.raises(ConfigurationError):
            HstsSettings(include_subdomains=False)

    def test_preload_requires_eighteen_weeks(self) -> None:
        """Preload with a short max-age is rejected."""
        with pytest.raises(ConfigurationError):
            HstsSettings(max_age_seconds=EIGHTEEN_WEEKS - 1)

    def test_without_preload(self) -> None:
        """Short max-age is fine when not preloading."""
        settings = HstsSettings(max_age_seconds=300, preload=False)
        assert settings.header_value == "max-age=300; includeSubDomains"


class TestFixedSecurityPolicies:
    """Tests for the unconditional security header stages."""

    @pytest.mark.parametrize(
        ("policy", "header_name", "header_value"),
        [
            (ContentSnifferBlockPolicy(), "X-Content-Type-Options", "nosniff"),
            (DownloadOptionsPolicy(), "X-Download-Options", "noopen"),
            (FrameOptionsPolicy(), "X-Frame-Options", "DENY"),
        ],
    )
    @pytest.mark.parametrize("secure", [True, False])
    @pytest.mark.parametrize("static", [True, False])
    def test_header_always_set(
        self, policy, header_name: str, header_value: str, secure: bool, static: bool
    ) -> None:
        """Each fixed stage sets exactly its one header on every response."""
        context = policy.apply(
            ResponseContext(headers={}, is_secure=secure, is_static_file=static)
        )
        assert context.headers == {header_name: header_value}

    def test_same_origin_alternative(self) -> None:
        """SAMEORIGIN is available as an explicit alternative."""
        context = FrameOptionsPolicy(FrameOptions.SAMEORIGIN).apply(
            ResponseContext(headers={})
        )
        assert context.headers["X-Frame-Options"] == "SAMEORIGIN"

    def test_overwrites_existing_value(self) -> None:
        """A stage replaces a header of the same name."""
        context = ResponseContext(headers={"X-Frame-Options": "ALLOWALL"})
        FrameOptionsPolicy().apply(context)
        assert context.headers["X-Frame-Options"] == "DENY"
