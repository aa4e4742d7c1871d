"""FastAPI server for rag-support.

Endpoints:
    POST /api/search - Quota-gated web search
    GET /api/usage - Current quota usage for the caller
    POST /api/rag/headers - Header bundle for a RAG context
    GET /health - Health check

Identity comes from the ``X-User-Id`` and ``X-Anonymous`` headers set by the
authenticating proxy in front of this service.
"""

from fastapi import FastAPI, Header, HTTPException, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from rag_support.config import ConfigurationMissing, Settings, get_settings
from rag_support.consts import (
    RAG_IMAGES_HEADER,
    RAG_IMAGES_SKIPPED_HEADER,
    RAG_RELATED_IMAGES_HEADER,
)
from rag_support.quota.rate_limiter import QuotaLedger, build_rate_limit_config, window_for
from rag_support.rag.headers import build_rag_headers
from rag_support.rag.url import resolve_context_image_urls
from rag_support.tools._http_utils import ProviderRequestFailed
from rag_support.tools.search_provider_factory import ProviderRegistry
from rag_support.types.api import (
    HealthResponse,
    RagHeadersResponse,
    SearchRequest,
    SearchResponse,
)
from rag_support.types.quota import RateLimitStatus
from rag_support.types.rag import RAGContextResponse
from rag_support.utils.logging import setup_logger

logger = setup_logger(__name__)

VERSION = "0.1.0"


def create_app(
    settings: Settings | None = None,
    registry: ProviderRegistry | None = None,
    ledger: QuotaLedger | None = None,
) -> FastAPI:
    """Build the app with one registry and one ledger shared by all requests."""
    settings = settings or get_settings()

    app = FastAPI(
        title="rag-support API",
        description="Web search, quota and RAG context transport.",
        version=VERSION,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[RAG_IMAGES_HEADER, RAG_RELATED_IMAGES_HEADER, RAG_IMAGES_SKIPPED_HEADER],
    )
    app.state.settings = settings
    app.state.registry = registry or ProviderRegistry(settings)
    app.state.ledger = ledger or QuotaLedger(build_rate_limit_config(settings))

    @app.post("/api/search", response_model=SearchResponse)
    async def search(
        body: SearchRequest,
        request: Request,
        x_user_id: str = Header(..., min_length=1),
        x_anonymous: bool = Header(default=False),
    ) -> SearchResponse | JSONResponse:
        """Search the web on behalf of an identity, if its daily quota allows."""
        if not body.query.strip():
            raise HTTPException(status_code=400, detail="Query cannot be empty")

        quota = await request.app.state.ledger.consume(x_user_id, window_for(x_anonymous))
        if not quota.allowed:
            return JSONResponse(
                status_code=429,
                content={"detail": "Daily message limit reached", "remaining": quota.remaining},
            )

        try:
            results = await request.app.state.registry.search_with_fallback(
                body.query, body.options
            )
        except ConfigurationMissing as e:
            logger.error(f"Search is not configured: {e}")
            raise HTTPException(status_code=503, detail="Search is not configured") from e
        except ProviderRequestFailed as e:
            raise HTTPException(status_code=502, detail=e.message) from e

        return SearchResponse(results=results, remaining=quota.remaining)

    @app.get("/api/usage", response_model=RateLimitStatus)
    async def usage(
        request: Request,
        x_user_id: str = Header(..., min_length=1),
        x_anonymous: bool = Header(default=False),
    ) -> RateLimitStatus:
        return await request.app.state.ledger.status(x_user_id, window_for(x_anonymous))

    @app.post("/api/rag/headers", response_model=RagHeadersResponse)
    async def rag_headers(
        rag_context: RAGContextResponse, request: Request, response: Response
    ) -> RagHeadersResponse:
        """Encode a RAG context's images into response headers."""
        settings: Settings = request.app.state.settings
        if settings.rag_backend_url:
            rag_context = resolve_context_image_urls(rag_context, settings.rag_backend_url)

        headers = build_rag_headers(rag_context, settings.max_rag_header_chars)
        for name, value in headers.items():
            response.headers[name] = value
        return RagHeadersResponse(
            headers=headers,
            images_skipped=RAG_IMAGES_SKIPPED_HEADER in headers,
        )

    @app.get("/health", response_model=HealthResponse)
    async def health_check(request: Request) -> HealthResponse:
        """Health check endpoint."""
        return HealthResponse(
            status="ok",
            search_configured=bool(request.app.state.settings.tavily_api_key),
            version=VERSION,
        )

    return app


# Default app for `uvicorn rag_support.api.server:app`
app = create_app()
