"""RAG context schemas shared by the encoder and the HTTP boundary."""

from pydantic import AliasChoices, BaseModel, Field


class RAGImage(BaseModel):
    """Image returned from the RAG backend."""

    image_id: str = Field(..., description="Backend identifier of the image")
    url: str = Field(..., description="Absolute or backend-relative image URL")
    caption: str | None = Field(default=None, description="Optional caption")
    team: str | int | None = Field(
        default=None,
        validation_alias=AliasChoices("team", "team_number", "teamNumber"),
        description="Team number, when the backend provides it",
    )


class RAGCitation(BaseModel):
    """Citation metadata attached to a RAG context."""

    id: str
    team: str | None = None
    year: str | None = None
    page: int | None = None
    binder: str | None = None
    source: str | None = None


class RAGContextResponse(BaseModel):
    """Assembled retrieval context.

    Every ``[img:<id>]`` placeholder in ``context`` is expected to have an
    entry in ``image_map``. That is the producer's responsibility; use
    :func:`rag_support.rag.url.missing_placeholders` to check it.
    """

    context: str = Field(..., description="Context text with [n] citations and [img:ID] placeholders")
    citations: list[RAGCitation] = Field(default_factory=list)
    images: list[RAGImage] = Field(default_factory=list, description="Related images")
    image_map: dict[str, RAGImage] = Field(
        default_factory=dict, description="Placeholder token to image"
    )
    query_id: str = Field(..., description="Query identifier")
    total_chunks: int = Field(default=0, ge=0, description="Total chunks retrieved")
    images_skipped: bool | None = Field(
        default=None, description="Whether the producer intentionally skipped images"
    )
