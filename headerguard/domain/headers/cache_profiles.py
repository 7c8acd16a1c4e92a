"""
Cache profile store.

An ordered, read-only mapping from profile name to CacheProfile.
Built once from a configuration document at startup; safe for
unsynchronized concurrent reads afterwards.
"""

from types import MappingProxyType
from typing import Any, Iterable, Iterator, Mapping

from headerguard.domain.headers.entities import CacheProfile, CacheVisibility
from headerguard.domain.headers.errors import (
    DuplicateCacheProfileError,
    MalformedCacheProfileError,
    UnknownCacheProfileError,
)

RECORD_FIELDS = frozenset(
    {"key", "maxAgeSeconds", "visibility", "mustRevalidate", "varyByHeader"}
)


def parse_cache_profile(record: Mapping[str, Any], index: int | None = None) -> CacheProfile:
    """Build a CacheProfile from one configuration record.

    Args:
        record: Mapping with ``key``, ``maxAgeSeconds``, ``visibility`` and
            the optional ``mustRevalidate`` and ``varyByHeader`` fields.
        index: Position of the record in its document, for error messages.

    Raises:
        MalformedCacheProfileError: If any field is missing or invalid.
    """
    if not isinstance(record, Mapping):
        raise MalformedCacheProfileError("record must be a mapping", index)

    unknown = set(record) - RECORD_FIELDS
    if unknown:
        raise MalformedCacheProfileError(
            f"unknown field(s): {', '.join(sorted(map(str, unknown)))}", index
        )
    for required in ("key", "maxAgeSeconds", "visibility"):
        if required not in record:
            raise MalformedCacheProfileError(f"missing field {required!r}", index)

    try:
        visibility = CacheVisibility(record["visibility"])
    except ValueError:
        raise MalformedCacheProfileError(
            f"visibility must be one of "
            f"{', '.join(v.value for v in CacheVisibility)}",
            index,
        ) from None

    must_revalidate = record.get("mustRevalidate", False)
    if not isinstance(must_revalidate, bool):
        raise MalformedCacheProfileError("mustRevalidate must be a boolean", index)

    vary_by_header = record.get("varyByHeader")
    if vary_by_header is not None and (
        not isinstance(vary_by_header, str) or not vary_by_header.strip()
    ):
        raise MalformedCacheProfileError(
            "varyByHeader must be a non-empty string", index
        )

    try:
        return CacheProfile(
            name=record["key"],
            max_age_seconds=record["maxAgeSeconds"],
            visibility=visibility,
            must_revalidate=must_revalidate,
            vary_by_header=vary_by_header,
        )
    except MalformedCacheProfileError as exc:
        raise MalformedCacheProfileError(exc.reason, index) from None


class CacheProfileStore:
    """Read-only lookup of cache profiles by name, in declaration order."""

    def __init__(self, profiles: Iterable[CacheProfile] = ()) -> None:
        entries: dict[str, CacheProfile] = {}
        for profile in profiles:
            if profile.name in entries:
                raise DuplicateCacheProfileError(profile.name)
            entries[profile.name] = profile
        self._profiles: Mapping[str, CacheProfile] = MappingProxyType(entries)

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, Any]]) -> "CacheProfileStore":
        """Build a store from an ordered collection of profile records."""
        return cls(
            parse_cache_profile(record, index)
            for index, record in enumerate(records)
        )

    def lookup(self, name: str) -> CacheProfile:
        """Return the profile registered under ``name``.

        Raises:
            UnknownCacheProfileError: If no such profile exists.
        """
        try:
            return self._profiles[name]
        except KeyError:
            raise UnknownCacheProfileError(name, self._profiles) from None

    def names(self) -> tuple[str, ...]:
        return tuple(self._profiles)

    def __contains__(self, name: object) -> bool:
        return name in self._profiles

    def __iter__(self) -> Iterator[str]:
        return iter(self._profiles)

    def __len__(self) -> int:
        return len(self._profiles)

    def __repr__(self) -> str:
        return f"CacheProfileStore({list(self._profiles)!r})"
