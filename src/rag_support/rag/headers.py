"""Attach RAG image context to HTTP responses and read it back.

Image data can easily exceed common header limits, so each payload goes
through the size-checked encoder and is dropped (with the skipped flag set)
rather than truncated.
"""

from collections.abc import Mapping

from pydantic import BaseModel, Field

from rag_support.consts import (
    RAG_IMAGES_HEADER,
    RAG_IMAGES_SKIPPED_HEADER,
    RAG_RELATED_IMAGES_HEADER,
)
from rag_support.rag.encoding import (
    Encoded,
    decode_rag_images_from_header,
    decode_related_images_from_header,
    encode_rag_images_for_header,
    encode_related_images_for_header,
)
from rag_support.types.rag import RAGContextResponse, RAGImage
from rag_support.utils.logging import setup_logger

logger = setup_logger(__name__)


class RAGHeaders(BaseModel):
    """Image context recovered from response headers."""

    image_map: list[RAGImage] = Field(
        default_factory=list, description="Inline images with bare placeholder ids"
    )
    related_images: list[RAGImage] = Field(default_factory=list)
    images_skipped: bool = False


def build_rag_headers(rag_context: RAGContextResponse, max_chars: int) -> dict[str, str]:
    """Build the RAG image headers for a response.

    Empty payloads produce no header. A non-empty payload that does not fit
    ``max_chars`` is left out and ``X-RAG-Images-Skipped: 1`` is set instead.
    """
    headers: dict[str, str] = {}
    skipped = bool(rag_context.images_skipped)

    if rag_context.image_map:
        result = encode_rag_images_for_header(rag_context, max_chars)
        if isinstance(result, Encoded):
            headers[RAG_IMAGES_HEADER] = result.value
        else:
            skipped = True

    if rag_context.images:
        result = encode_related_images_for_header(rag_context, max_chars)
        if isinstance(result, Encoded):
            headers[RAG_RELATED_IMAGES_HEADER] = result.value
        else:
            skipped = True

    if skipped:
        # Clients expect a numeric flag
        headers[RAG_IMAGES_SKIPPED_HEADER] = "1"
        logger.info(
            "RAG images omitted from response headers",
            extra={"query_id": rag_context.query_id},
        )

    return headers


def _bare_image_id(key: str) -> str:
    if key.startswith("[img:") and key.endswith("]"):
        return key[5:-1]
    return key


def parse_rag_headers(headers: Mapping[str, str]) -> RAGHeaders | None:
    """Read RAG image headers from a response.

    Returns None when neither image header is present. The image map is
    flattened to a list whose ``image_id`` is the placeholder id without the
    ``[img:...]`` wrapper, since that is what the model emits inline.
    """
    lowered = {k.lower(): v for k, v in headers.items()}
    images_header = lowered.get(RAG_IMAGES_HEADER.lower())
    related_header = lowered.get(RAG_RELATED_IMAGES_HEADER.lower())
    skipped_header = lowered.get(RAG_IMAGES_SKIPPED_HEADER.lower())

    if not images_header and not related_header:
        return None

    raw_map = decode_rag_images_from_header(images_header) or {}
    related = decode_related_images_from_header(related_header) or []

    image_map = [
        image.model_copy(update={"image_id": _bare_image_id(key)})
        for key, image in raw_map.items()
    ]
    images_skipped = bool(skipped_header) and (
        skipped_header == "1" or skipped_header.lower() == "true"
    )

    return RAGHeaders(image_map=image_map, related_images=related, images_skipped=images_skipped)
