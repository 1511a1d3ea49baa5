"""
Media helpers for prompt assembly.

Classifies attachments and downloads images that can be shown to the model.
"""

import logging

import httpx

from services.models import url_suffix

logger = logging.getLogger(__name__)

SUPPORTED_IMAGE_TYPES = ("image/jpeg", "image/png", "image/webp")


def is_supported_image_type(media_type: str) -> bool:
    """True if the model accepts this kind inline."""
    return media_type in SUPPORTED_IMAGE_TYPES


def get_media_type_description(media_type: str) -> str:
    """Human word for a media kind, used in placeholder text."""
    if media_type.startswith("image/"):
        return "image"
    if media_type.startswith("video/"):
        return "video"
    if media_type.startswith("audio/"):
        return "audio file"
    return "file"


def image_format_from_url(url: str) -> str:
    """
    Guess the image format from the URL suffix.

    Only ".png" and ".webp" are recognized; anything else is assumed JPEG.
    """
    suffix = url_suffix(url)
    if suffix == ".png":
        return "png"
    if suffix == ".webp":
        return "webp"
    return "jpeg"


async def download_image(client: httpx.AsyncClient, url: str) -> tuple[bytes, str] | None:
    """
    Download an attachment image.

    Args:
        client: HTTP client to use.
        url: Attachment URL.

    Returns:
        (image bytes, format) or None when the server refused or sent nothing.

    Raises:
        httpx.TransportError: Network failure or timeout.
    """
    response = await client.get(url, follow_redirects=True)
    if response.status_code >= 400:
        logger.warning(f"[MEDIA] Image download failed ({response.status_code}): {url}")
        return None

    data = response.content
    if not data:
        logger.warning(f"[MEDIA] Image download returned no data: {url}")
        return None

    file_format = image_format_from_url(url)
    logger.info(f"[MEDIA] Downloaded {len(data)} bytes ({file_format}) from {url}")
    return data, file_format
