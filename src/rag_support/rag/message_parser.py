"""Consumer-side handling of ``[img:<id>]`` placeholders in message text.

These helpers work on the bare-id image lists produced by
:func:`rag_support.rag.headers.parse_rag_headers`.
"""

import re
from typing import Literal

from pydantic import BaseModel

from rag_support.types.rag import RAGImage

RAG_IMAGE_PATTERN = re.compile(r"\[img:([^\]]+)\]")


class TextSegment(BaseModel):
    type: Literal["text"] = "text"
    content: str


class ImageSegment(BaseModel):
    type: Literal["image"] = "image"
    image_id: str


MessageSegment = TextSegment | ImageSegment


def has_rag_images(text: str) -> bool:
    return RAG_IMAGE_PATTERN.search(text) is not None


def extract_image_ids(text: str) -> list[str]:
    """All placeholder ids in order of appearance, repeats included."""
    return RAG_IMAGE_PATTERN.findall(text)


def parse_message_segments(text: str) -> list[MessageSegment]:
    """Split text into alternating text and image segments for inline rendering.

    Empty text between adjacent placeholders produces no segment.
    """
    segments: list[MessageSegment] = []
    last_index = 0

    for match in RAG_IMAGE_PATTERN.finditer(text):
        if match.start() > last_index:
            segments.append(TextSegment(content=text[last_index : match.start()]))
        segments.append(ImageSegment(image_id=match.group(1)))
        last_index = match.end()

    if last_index < len(text):
        segments.append(TextSegment(content=text[last_index:]))

    return segments


def strip_image_placeholders(text: str) -> str:
    """Text with every placeholder removed, trimmed at both ends."""
    return RAG_IMAGE_PATTERN.sub("", text).strip()


def get_inline_images(text: str, image_map: list[RAGImage]) -> list[RAGImage]:
    """Images referenced by placeholders, in text order.

    Ids with no matching image are skipped.
    """
    by_id: dict[str, RAGImage] = {}
    for image in image_map:
        by_id.setdefault(image.image_id, image)
    return [by_id[i] for i in extract_image_ids(text) if i in by_id]


def get_related_only_images(text: str, all_images: list[RAGImage]) -> list[RAGImage]:
    """Images that are not referenced inline, in their original order."""
    inline_ids = set(extract_image_ids(text))
    return [image for image in all_images if image.image_id not in inline_ids]
