"""
Use case: Assemble the response header pipeline at startup.

Input: CacheProfileStore, FeatureFlags, SecurityHeaderConfig
Output: HeaderPipeline
Side effects: None.
Failure cases: ConfigurationError (unknown cache profile, duplicate stage).

Assembly happens once. Any failure here must abort startup; a pipeline
is never returned half-built.
"""

import logging
from dataclasses import dataclass
from typing import Callable

from headerguard.application.headers.dtos import FeatureFlags
from headerguard.application.headers.pipeline import HeaderPipeline
from headerguard.domain.headers.cache_profiles import CacheProfileStore
from headerguard.domain.headers.entities import (
    DEFAULT_SECURITY_HEADERS,
    CacheProfileName,
    SecurityHeaderConfig,
)
from headerguard.domain.headers.errors import ConfigurationError
from headerguard.domain.headers.policies import (
    CacheControlPolicy,
    ContentSnifferBlockPolicy,
    DownloadOptionsPolicy,
    FrameOptionsPolicy,
    StrictTransportSecurityPolicy,
)
from headerguard.domain.headers.ports import HeaderPolicy

logger = logging.getLogger(__name__)

StageFactory = Callable[[], HeaderPolicy]


@dataclass(frozen=True)
class DeclaredStage:
    """One declared pipeline stage.

    Attributes:
        name: Stage identifier.
        factory: Builds the policy; runs once, during assembly.
        enabled: Disabled stages are skipped without calling the factory.
    """

    name: str
    factory: StageFactory
    enabled: bool = True


class PipelineAssembler:
    """Builds the ordered header pipeline from resolved configuration.

    Declared order:
        1. cache-control
        2. strict-transport-security
        3. content-type-options
        4. download-options
        5. frame-options
        6+. stages added through ``register``
    """

    def __init__(
        self,
        profile_store: CacheProfileStore,
        flags: FeatureFlags | None = None,
        security: SecurityHeaderConfig = DEFAULT_SECURITY_HEADERS,
        static_profile_name: str = CacheProfileName.STATIC_FILES,
    ) -> None:
        self._profile_store = profile_store
        self._flags = flags or FeatureFlags()
        self._security = security
        self._static_profile_name = static_profile_name
        self._stages: list[DeclaredStage] = []

        self.register(
            CacheControlPolicy.name,
            self._build_cache_control,
            enabled=self._flags.static_file_caching,
        )
        self.register(
            StrictTransportSecurityPolicy.name,
            lambda: StrictTransportSecurityPolicy(self._security.hsts),
            enabled=self._flags.https_everywhere,
        )
        self.register(
            ContentSnifferBlockPolicy.name,
            ContentSnifferBlockPolicy,
            enabled=self._flags.security_headers,
        )
        self.register(
            DownloadOptionsPolicy.name,
            DownloadOptionsPolicy,
            enabled=self._flags.security_headers,
        )
        self.register(
            FrameOptionsPolicy.name,
            lambda: FrameOptionsPolicy(self._security.frame_options),
            enabled=self._flags.security_headers,
        )

    @property
    def flags(self) -> FeatureFlags:
        return self._flags

    @property
    def declared_stages(self) -> tuple[DeclaredStage, ...]:
        return tuple(self._stages)

    def register(
        self, name: str, factory: StageFactory, enabled: bool = True
    ) -> "PipelineAssembler":
        """Append a stage to the declared order.

        Raises:
            ConfigurationError: If a stage with the same name exists.
        """
        if any(stage.name == name for stage in self._stages):
            raise ConfigurationError(f"Duplicate pipeline stage: {name!r}")
        self._stages.append(DeclaredStage(name=name, factory=factory, enabled=enabled))
        return self

    def assemble(self) -> HeaderPipeline:
        """Resolve every enabled stage and return the composed pipeline.

        Raises:
            ConfigurationError: If any stage cannot be built, e.g. the
                static-file cache profile is not in the store.
        """
        built = []
        for stage in self._stages:
            if not stage.enabled:
                logger.debug("Header stage disabled: %s", stage.name)
                continue
            built.append((stage.name, stage.factory()))

        pipeline = HeaderPipeline(built)
        logger.info(
            "Assembled header pipeline: %s",
            ", ".join(pipeline.stage_names) or "<empty>",
        )
        return pipeline

    def _build_cache_control(self) -> CacheControlPolicy:
        profile = self._profile_store.lookup(self._static_profile_name)
        logger.info(
            "Static files use cache profile %s (%s)",
            profile.name,
            profile.cache_control,
        )
        return CacheControlPolicy(profile)
