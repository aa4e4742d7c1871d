"""Header-safe encoding of RAG image payloads.

Payloads are serialized to compact JSON, then base64. If the encoded value
would not fit the caller's character budget the result is ``TooLarge``;
the value is never truncated.
"""

from __future__ import annotations

import base64
from dataclasses import dataclass
from typing import Generic, TypeVar

from pydantic import TypeAdapter

from rag_support.types.rag import RAGContextResponse, RAGImage
from rag_support.utils.logging import setup_logger

logger = setup_logger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Encoded:
    """A payload that fit within the budget."""

    value: str

    def to_optional(self) -> str | None:
        return self.value


@dataclass(frozen=True)
class TooLarge:
    """The payload could not be represented within the budget."""

    encoded_length: int
    max_chars: int

    def to_optional(self) -> str | None:
        return None


EncodeResult = Encoded | TooLarge


class PayloadEncoder(Generic[T]):
    """Encodes and decodes one payload shape with a shared size check."""

    def __init__(self, name: str, adapter: TypeAdapter[T]):
        self.name = name
        self.adapter = adapter

    def canonical_json(self, payload: T) -> bytes:
        return self.adapter.dump_json(payload, exclude_none=True)

    def encode(self, payload: T, max_chars: int) -> EncodeResult:
        """Encode ``payload`` if its base64 form is at most ``max_chars`` long.

        Raises:
            ValueError: If max_chars is negative
        """
        if max_chars < 0:
            raise ValueError("max_chars must be non-negative")

        encoded = base64.b64encode(self.canonical_json(payload)).decode("ascii")
        if len(encoded) > max_chars:
            logger.info(
                f"Encoded {self.name} exceeds header budget",
                extra={"encoded_length": len(encoded), "max_chars": max_chars},
            )
            return TooLarge(encoded_length=len(encoded), max_chars=max_chars)
        return Encoded(encoded)

    def decode(self, encoded: str | None) -> T | None:
        """Decode a header value. Empty or malformed input gives None."""
        if not encoded:
            return None

        try:
            raw = base64.b64decode(encoded, validate=True)
            return self.adapter.validate_json(raw)
        except ValueError as e:
            # binascii.Error and pydantic.ValidationError are both ValueErrors
            logger.warning(
                f"Could not decode {self.name} header",
                extra={"error": str(e).splitlines()[0]},
            )
            return None


image_map_encoder: PayloadEncoder[dict[str, RAGImage]] = PayloadEncoder(
    "image_map", TypeAdapter(dict[str, RAGImage])
)
related_images_encoder: PayloadEncoder[list[RAGImage]] = PayloadEncoder(
    "related_images", TypeAdapter(list[RAGImage])
)


def encode_rag_images_for_header(rag_context: RAGContextResponse, max_chars: int) -> EncodeResult:
    """Encode the context's placeholder-to-image map for a response header."""
    return image_map_encoder.encode(rag_context.image_map, max_chars)


def encode_related_images_for_header(
    rag_context: RAGContextResponse, max_chars: int
) -> EncodeResult:
    """Encode the context's related-images list for a response header."""
    return related_images_encoder.encode(rag_context.images, max_chars)


def decode_rag_images_from_header(encoded: str | None) -> dict[str, RAGImage] | None:
    return image_map_encoder.decode(encoded)


def decode_related_images_from_header(encoded: str | None) -> list[RAGImage] | None:
    return related_images_encoder.decode(encoded)
