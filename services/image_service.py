"""Intake of uploaded vehicle images."""

from io import BytesIO
from typing import Optional

from PIL import Image, UnidentifiedImageError

from models.vehicle_damage import ImagePayload
from utils.errors import InvalidImageError


def load_image_payload(
    data: bytes,
    filename: str,
    content_type: Optional[str] = None,
    max_bytes: Optional[int] = None,
) -> ImagePayload:
    """
    Verify uploaded bytes are an image and wrap them for analysis.

    The MIME type is taken from the decoded image format, falling back to
    the declared content type.

    Args:
        data: Raw uploaded bytes
        filename: Name used to reference the image in the report
        content_type: MIME type declared by the client
        max_bytes: Optional size limit

    Returns:
        ImagePayload with the original bytes

    Raises:
        InvalidImageError: If the data is empty, too large or not an image
    """
    if not data:
        raise InvalidImageError.for_upload(filename, "file is empty")
    if max_bytes is not None and len(data) > max_bytes:
        raise InvalidImageError.for_upload(filename, f"file exceeds {max_bytes} bytes")

    try:
        with Image.open(BytesIO(data)) as image:
            image.verify()
            image_format = image.format
    except (UnidentifiedImageError, OSError, SyntaxError) as e:
        raise InvalidImageError.for_upload(filename, "cannot be decoded as an image") from e

    mime_type = Image.MIME.get(image_format) if image_format else None
    if not mime_type and content_type and content_type.startswith("image/"):
        mime_type = content_type
    if not mime_type:
        raise InvalidImageError.for_upload(filename, "unsupported image format")

    return ImagePayload(data=data, mime_type=mime_type, name=filename)
