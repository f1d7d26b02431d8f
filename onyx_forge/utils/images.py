"""Image payload utilities: data URLs, base64 and MIME detection."""

import base64
import binascii
import re
from io import BytesIO
from typing import Optional, Tuple

from PIL import Image, UnidentifiedImageError

from .errors import ImageProcessingError
from .logger import get_logger

logger = get_logger(__name__)

DEFAULT_MIME_TYPE = "image/png"

_DATA_URL_RE = re.compile(r"^data:([a-zA-Z0-9]+/[a-zA-Z0-9.+-]+)?[^,]*,(.*)$", re.DOTALL)

# Pillow format name -> MIME type
_FORMAT_MIME_TYPES = {
    "PNG": "image/png",
    "JPEG": "image/jpeg",
    "WEBP": "image/webp",
    "GIF": "image/gif",
    "BMP": "image/bmp",
    "TIFF": "image/tiff",
}

_MIME_EXTENSIONS = {
    "image/png": "png",
    "image/jpeg": "jpg",
    "image/webp": "webp",
    "image/gif": "gif",
    "image/bmp": "bmp",
    "image/tiff": "tiff",
    "image/svg+xml": "svg",
}


def base64_to_bytes(base64_string: str) -> bytes:
    """
    Decode a base64 payload, with or without a data URL prefix.

    Raises:
        ImageProcessingError: If the payload is not valid base64
    """
    if "," in base64_string:
        base64_string = base64_string.split(",", 1)[1]

    try:
        return base64.b64decode(base64_string, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ImageProcessingError(f"Invalid base64 image data: {e}")


def bytes_to_base64(image_bytes: bytes) -> str:
    """Encode raw bytes as a base64 string."""
    return base64.b64encode(image_bytes).decode('utf-8')


def to_data_url(image_bytes: bytes, mime_type: str = DEFAULT_MIME_TYPE) -> str:
    """Build an embeddable ``data:`` reference for image bytes."""
    return f"data:{mime_type};base64,{bytes_to_base64(image_bytes)}"


def detect_mime_type(image_bytes: bytes) -> Optional[str]:
    """
    Detect an image MIME type from its content.

    Returns:
        MIME type, or None if Pillow cannot identify the image
    """
    try:
        with Image.open(BytesIO(image_bytes)) as image:
            image_format = image.format
    except (UnidentifiedImageError, OSError):
        return None

    return _FORMAT_MIME_TYPES.get((image_format or "").upper())


def parse_data_url(value: str) -> Tuple[str, bytes]:
    """
    Split an uploaded image into (mime_type, bytes).

    Accepts ``data:<mime>;base64,<payload>`` or bare base64. The MIME type
    comes from the data URL when declared, otherwise it is sniffed from the
    bytes, falling back to PNG.

    Raises:
        ImageProcessingError: If the payload cannot be decoded or is empty
    """
    declared = None
    payload = value.strip()

    match = _DATA_URL_RE.match(payload)
    if match:
        declared = match.group(1)
        payload = match.group(2)

    data = base64_to_bytes(payload)
    if not data:
        raise ImageProcessingError("Image data is empty")

    mime_type = declared or detect_mime_type(data) or DEFAULT_MIME_TYPE

    logger.debug(
        "Parsed uploaded image",
        extra={"mime_type": mime_type, "declared": declared is not None, "size": len(data)}
    )

    return mime_type, data


def extension_for(mime_type: str) -> str:
    """File extension to use when exporting an image of this MIME type."""
    return _MIME_EXTENSIONS.get(mime_type.lower(), "png")
