"""RAG context transport.

Size-bounded header encoding of image payloads, header bundling, image
URL resolution and placeholder handling in message text.
"""

from rag_support.rag.encoding import (
    Encoded,
    EncodeResult,
    PayloadEncoder,
    TooLarge,
    decode_rag_images_from_header,
    decode_related_images_from_header,
    encode_rag_images_for_header,
    encode_related_images_for_header,
)
from rag_support.rag.headers import RAGHeaders, build_rag_headers, parse_rag_headers
from rag_support.rag.message_parser import (
    ImageSegment,
    MessageSegment,
    TextSegment,
    extract_image_ids,
    get_inline_images,
    get_related_only_images,
    has_rag_images,
    parse_message_segments,
    strip_image_placeholders,
)
from rag_support.rag.url import (
    extract_team_from_image,
    extract_team_from_url,
    missing_placeholders,
    resolve_context_image_urls,
    resolve_image_url,
)

__all__ = [
    # Encoding
    "Encoded",
    "EncodeResult",
    "PayloadEncoder",
    "TooLarge",
    "encode_rag_images_for_header",
    "encode_related_images_for_header",
    "decode_rag_images_from_header",
    "decode_related_images_from_header",
    # Headers
    "RAGHeaders",
    "build_rag_headers",
    "parse_rag_headers",
    # URLs
    "resolve_image_url",
    "resolve_context_image_urls",
    "missing_placeholders",
    "extract_team_from_url",
    "extract_team_from_image",
    # Message text
    "TextSegment",
    "ImageSegment",
    "MessageSegment",
    "has_rag_images",
    "extract_image_ids",
    "parse_message_segments",
    "strip_image_placeholders",
    "get_inline_images",
    "get_related_only_images",
]
