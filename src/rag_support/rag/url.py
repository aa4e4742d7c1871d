"""Image URL resolution and team attribution for RAG backend images."""

import re

from rag_support.types.rag import RAGContextResponse, RAGImage

IMG_PLACEHOLDER_REGEX = re.compile(r"\[img:[^\]]+\]", re.IGNORECASE)
IMG_PLACEHOLDER_ENCODED_REGEX = re.compile(r"%5Bimg(?::|%3A)", re.IGNORECASE)

FRC_PATH_REGEX = re.compile(r"/images/frc/(\d{1,5})/", re.IGNORECASE)
IMAGE_ID_REGEX = re.compile(r"^(\d{1,5})_\d{4}_")
TEAM_PATTERN_REGEX = re.compile(r"(?:teams?[/_-]|frc)(\d{1,5})", re.IGNORECASE)


def resolve_image_url(path: str | None, base_url: str = "") -> str | None:
    """Return a usable URL for an image path.

    Args:
        path: Absolute URL or backend-relative path
        base_url: Backend base URL. If empty, relative paths get a leading slash only

    Returns:
        The resolved URL, or None for empty paths and placeholder tokens
    """
    if not path:
        return None

    # A placeholder in a URL slot means upstream data got mixed up
    if IMG_PLACEHOLDER_REGEX.search(path) or IMG_PLACEHOLDER_ENCODED_REGEX.search(path):
        return None

    if path.startswith("http"):
        return path

    clean_path = path if path.startswith("/") else f"/{path}"
    if not base_url:
        return clean_path

    return f"{base_url.rstrip('/')}{clean_path}"


def _resolve_image(image: RAGImage, base_url: str) -> RAGImage:
    resolved = resolve_image_url(image.url, base_url)
    if resolved is None or resolved == image.url:
        return image
    return image.model_copy(update={"url": resolved})


def resolve_context_image_urls(
    rag_context: RAGContextResponse, base_url: str
) -> RAGContextResponse:
    """Return a copy of ``rag_context`` with relative image URLs made absolute."""
    return rag_context.model_copy(
        update={
            "images": [_resolve_image(img, base_url) for img in rag_context.images],
            "image_map": {
                key: _resolve_image(img, base_url) for key, img in rag_context.image_map.items()
            },
        }
    )


def missing_placeholders(rag_context: RAGContextResponse) -> list[str]:
    """Placeholder tokens used in the context text that have no image_map entry."""
    seen: list[str] = []
    for token in IMG_PLACEHOLDER_REGEX.findall(rag_context.context):
        if token not in rag_context.image_map and token not in seen:
            seen.append(token)
    return seen


def extract_team_from_url(url: str | None) -> str | None:
    """Team label ("Team 254") from an image URL or image id, if one is encoded.

    Recognized forms, in order: ``/images/frc/<team>/...`` paths, image ids
    like ``166_2024_p4_i0_5ae3bfae``, then ``teams/<n>``, ``team_<n>``,
    ``team-<n>`` and ``frc<n>``.
    """
    if not url:
        return None

    for pattern in (FRC_PATH_REGEX, IMAGE_ID_REGEX, TEAM_PATTERN_REGEX):
        match = pattern.search(url)
        if match:
            return f"Team {match.group(1)}"

    return None


def extract_team_from_image(image: RAGImage | None) -> str | None:
    """Team label for an image: explicit metadata first, then its URL, then its id."""
    if image is None:
        return None

    if image.team:
        return f"Team {image.team}"

    return extract_team_from_url(image.url) or extract_team_from_url(image.image_id)
