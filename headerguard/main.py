"""
Application entry point.

Creates the FastAPI application and wires together:
- Header pipeline (assembled once, fails fast on bad configuration)
- Static files (served with the static-file cache profile)
- Error pages (centralized error-to-HTTP mapping)
- Routers
- Logging configuration

No policy logic belongs here.
"""

import logging
from pathlib import Path

from fastapi import FastAPI

from headerguard.application.headers.assemble_pipeline import PipelineAssembler
from headerguard.application.headers.dtos import FeatureFlags
from headerguard.application.headers.pipeline import HeaderPipeline
from headerguard.core.config import Settings, settings as default_settings
from headerguard.domain.headers.cache_profiles import CacheProfileStore
from headerguard.domain.headers.errors import ConfigurationError
from headerguard.infrastructure.static_files import CacheProfileStaticFiles
from headerguard.interfaces.health import router as health_router
from headerguard.shared.errors.handlers import register_error_handlers
from headerguard.shared.logging import configure_logging
from headerguard.shared.security.headers import HeaderPolicyMiddleware

logger = logging.getLogger(__name__)


def feature_flags(settings: Settings) -> FeatureFlags:
    """Translate settings into assembly-time feature flags."""
    return FeatureFlags(
        static_file_caching=settings.static_file_caching_enabled,
        https_everywhere=settings.https_everywhere,
        security_headers=settings.security_headers_enabled,
    )


def build_header_pipeline(settings: Settings) -> HeaderPipeline:
    """Build the header pipeline from settings.

    Raises:
        ConfigurationError: If the cache profiles are malformed or the
            static-file profile is missing.
    """
    try:
        store = CacheProfileStore.from_records(settings.cache_profiles)
        assembler = PipelineAssembler(
            store,
            flags=feature_flags(settings),
            static_profile_name=settings.static_cache_profile,
        )
        return assembler.assemble()
    except ConfigurationError as exc:
        logger.critical("Header pipeline configuration error: %s", exc.message)
        raise


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Assembles the header pipeline first so that a misconfigured
    application never gets as far as serving a request.
    This is the composition root of the application.

    Args:
        settings: Settings to use; defaults to the environment settings.

    Returns:
        A fully configured FastAPI application instance.

    Raises:
        ConfigurationError: If the header pipeline cannot be assembled.
    """
    settings = settings or default_settings
    configure_logging(level=settings.log_level)

    pipeline = build_header_pipeline(settings)

    # debug=True turns on Starlette's developer error pages.
    app = FastAPI(
        title=settings.project_name,
        version=settings.version,
        debug=settings.debug,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )
    app.state.settings = settings
    app.state.header_pipeline = pipeline

    # --- Header Policies ---
    app.add_middleware(HeaderPolicyMiddleware, pipeline=pipeline)

    # --- Error Pages ---
    register_error_handlers(app, pipeline)

    # --- Routers ---
    app.include_router(health_router, prefix="/api/v1")

    # --- Static Files ---
    static_directory = Path(settings.static_directory)
    if static_directory.is_dir():
        app.mount(
            settings.static_url_path,
            CacheProfileStaticFiles(directory=static_directory),
            name="static",
        )
    else:
        logger.warning(
            "Static directory %s does not exist; static files are not served.",
            static_directory,
        )

    return app


app = create_app()
