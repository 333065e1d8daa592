"""Validation of recolor requests.

Runs before any vendor call.  Missing or blank fields are collected and
reported together; image fields must then parse as base64 image data URLs.
"""

import logging

from visionai.core.data_url import parse_data_url
from visionai.core.errors import InvalidImageError, MissingFieldError
from visionai.core.vendor_adapters import RecolorJob

from .models import RecolorRequest

logger = logging.getLogger(__name__)

# Wire names, in the order they are reported.
REQUIRED_FIELDS: tuple[tuple[str, str], ...] = (
    ("original_image", "originalImage"),
    ("mask_image", "maskImage"),
    ("target_color", "targetColor"),
)


def validate_recolor_request(request: RecolorRequest) -> RecolorJob:
    """Validate a recolor request and convert it to a :class:`RecolorJob`.

    Args:
        request: Parsed request body.

    Returns:
        The validated job with both images split into MIME type and payload.

    Raises:
        MissingFieldError: If any required field is absent, null, or blank.
        InvalidImageError: If an image field is not a base64 image data URL.
    """
    missing = [
        wire_name
        for attr, wire_name in REQUIRED_FIELDS
        if not (getattr(request, attr) or "").strip()
    ]
    if missing:
        logger.info(f"Rejected recolor request, missing: {missing}")
        raise MissingFieldError(missing)

    images = {}
    for attr, wire_name in REQUIRED_FIELDS[:2]:
        try:
            images[attr] = parse_data_url(getattr(request, attr))
        except ValueError as e:
            logger.info(f"Rejected recolor request, invalid {wire_name}: {e}")
            raise InvalidImageError(wire_name, str(e)) from e

    return RecolorJob(
        original=images["original_image"],
        mask=images["mask_image"],
        target_color=request.target_color.strip(),
    )
