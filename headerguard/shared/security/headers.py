"""
Header policy middleware.

Runs the assembled HeaderPipeline on every response:
- Cache-Control / Pragma / Vary on static files
- Strict-Transport-Security on HTTPS requests
- X-Content-Type-Options, X-Download-Options, X-Frame-Options

No business logic. Pure cross-cutting concern.
"""

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from headerguard.application.headers.pipeline import HeaderPipeline
from headerguard.domain.headers.entities import ResponseContext
from headerguard.infrastructure.static_files import is_static_file

SECURE_SCHEMES = frozenset({"https", "wss"})


def build_response_context(request: Request, response: Response) -> ResponseContext:
    """Wrap a Starlette response in a ResponseContext.

    The context shares the response's header collection, so policy
    mutations land directly on the outgoing response.
    """
    return ResponseContext(
        headers=response.headers,
        is_secure=request.url.scheme in SECURE_SCHEMES,
        is_static_file=is_static_file(request.scope),
        path=request.url.path,
    )


def apply_header_pipeline(
    pipeline: HeaderPipeline, request: Request, response: Response
) -> Response:
    """Run ``pipeline`` against ``response`` and return it."""
    pipeline.apply(build_response_context(request, response))
    return response


class HeaderPolicyMiddleware(BaseHTTPMiddleware):
    """Middleware that applies the header pipeline to every response.

    The pipeline is built once at startup and shared read-only
    across requests.
    """

    def __init__(self, app: ASGIApp, pipeline: HeaderPipeline) -> None:
        super().__init__(app)
        self.pipeline = pipeline

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        """Process request and add policy headers to the response."""
        response = await call_next(request)
        return apply_header_pipeline(self.pipeline, request, response)
