"""
Image Upload Utility - Turn uploaded images into embeddable data URIs.

Supported formats:
- JPEG, PNG, GIF, WebP, SVG

Max file size: 10MB (5MB for avatar fields)

The encoded image is self-contained (a base64 `data:` URI), so rendering it
never needs an external fetch.
"""

import base64
from typing import Optional, Tuple
from fastapi import UploadFile

from app.core.config import get_settings
from app.core.errors import TooLargeError, UnsupportedTypeError
from app.core.logging import get_logger
from app.services.block_registry import AVATAR_FIELDS, default_image_field
from app.services.portfolio_document import PortfolioDocument

logger = get_logger(__name__)


def size_limit_for_field(field: str) -> Tuple[int, int]:
    """Return (limit_bytes, limit_mb) for the target field."""
    settings = get_settings()
    if field in AVATAR_FIELDS:
        return settings.max_avatar_size_bytes, settings.max_avatar_size_mb
    return settings.max_image_size_bytes, settings.max_image_size_mb


def validate_image(content: bytes, content_type: Optional[str], field: str = "src") -> str:
    """
    Check size and MIME type of an uploaded image.

    Returns:
        The normalized MIME type

    Raises:
        TooLargeError: file exceeds the ceiling for the field
        UnsupportedTypeError: MIME type is not an allowed image type
    """
    limit_bytes, limit_mb = size_limit_for_field(field)
    if len(content) > limit_bytes:
        raise TooLargeError(len(content), limit_mb)

    mime = (content_type or "").split(";")[0].strip().lower()
    if mime not in get_settings().allowed_image_types:
        raise UnsupportedTypeError(mime)

    return mime


def encode_data_uri(content: bytes, mime: str) -> str:
    """Encode raw bytes as a base64 data URI."""
    return f"data:{mime};base64,{base64.b64encode(content).decode('ascii')}"


def ingest_image(
    document: PortfolioDocument,
    block_id: str,
    content: bytes,
    content_type: Optional[str],
    field: Optional[str] = None,
) -> Optional[str]:
    """
    Validate an image, encode it and write it into a block field.

    The field defaults to `src`, or `avatar` for testimonial blocks. Encoding
    happens before the document is touched; only the final write goes through
    update_block.

    Returns:
        The data URI written, or None if the block does not exist

    Raises:
        TooLargeError / UnsupportedTypeError on rejected uploads (document untouched)
    """
    block = document.get_block(block_id)
    if block is None:
        logger.debug(f"Image upload ignored for unknown block {block_id}")
        return None

    target_field = field or default_image_field(block.kind)
    mime = validate_image(content, content_type, target_field)
    data_uri = encode_data_uri(content, mime)

    if document.update_block(block_id, {target_field: data_uri}) is None:
        # Block removed while encoding
        return None

    logger.info(f"Embedded {mime} image ({len(content)} bytes) into {block_id}.{target_field}")
    return data_uri


async def read_upload(file: UploadFile) -> Tuple[bytes, Optional[str]]:
    """Read an UploadFile into (content, content_type)."""
    content = await file.read()
    return content, file.content_type


def get_supported_formats() -> dict:
    """Get info about supported image formats."""
    settings = get_settings()
    return {
        "supported_types": list(settings.allowed_image_types),
        "max_size_mb": settings.max_image_size_mb,
        "max_avatar_size_mb": settings.max_avatar_size_mb,
    }
