"""API request/response schemas for FastAPI endpoints."""

from pydantic import BaseModel, Field

from rag_support.types.search import SearchOptions, SearchResult


class SearchRequest(BaseModel):
    """Request schema for POST /api/search."""

    query: str = Field(..., min_length=1, description="Search query string")
    options: SearchOptions = Field(default_factory=SearchOptions)


class SearchResponse(BaseModel):
    """Response schema for POST /api/search."""

    results: list[SearchResult] = Field(default_factory=list)
    remaining: int = Field(..., ge=0, description="Quota left in the current window")


class RagHeadersResponse(BaseModel):
    """Response schema for POST /api/rag/headers."""

    headers: dict[str, str] = Field(default_factory=dict)
    images_skipped: bool = False


class HealthResponse(BaseModel):
    """Response schema for GET /health endpoint."""

    status: str = Field(default="ok")
    search_configured: bool = Field(default=False, description="Whether a provider key is set")
    version: str = Field(default="0.1.0")
