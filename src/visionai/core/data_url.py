"""Data URL helpers.

Images travel through the service as base64 data URLs::

    data:<mime-type>;base64,<payload>

Vendors want them in one of two forms: the full data URL (chat-style APIs
that accept ``image_url`` parts) or a ``(mime_type, payload)`` pair
(Gemini's ``inlineData``).  :class:`DataURL` holds the pair and renders the
URL, so adapters can pick whichever form they need.
"""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass
from typing import Any

DEFAULT_IMAGE_MIME = "image/png"

@dataclass(frozen=True)
class DataURL:
    """A base64 data URL split into its MIME type and payload.

    Attributes:
        mime_type: Media type from the header, e.g. ``"image/jpeg"``.
        payload: Base64 text following the first comma.
    """

    mime_type: str
    payload: str

    def __str__(self) -> str:
        return f"data:{self.mime_type};base64,{self.payload}"

    def decode(self) -> bytes:
        """Return the raw bytes encoded in :attr:`payload`."""
        return base64.b64decode(self.payload, validate=True)

def parse_data_url(value: str, *, require_image: bool = True) -> DataURL:
    """Split a base64 data URL on its first comma.

    The header segment before the comma must read ``data:<mime>[;param]*;base64``.
    The payload must be standard-alphabet base64; line breaks and other
    whitespace inside it are removed first.  URL-safe base64 is rejected.

    Args:
        value: The data URL string.
        require_image: Reject MIME types outside ``image/*``.

    Returns:
        The parsed :class:`DataURL`.

    Raises:
        ValueError: With a short reason when *value* is not a usable data URL.
    """
    value = value.strip()
    if not value.startswith("data:"):
        raise ValueError("missing 'data:' prefix")

    header, sep, payload = value.partition(",")
    if not sep:
        raise ValueError("missing ',' separator")

    params = header[len("data:") :].split(";")
    mime_type = params[0].strip().lower()
    if params[-1].strip().lower() != "base64" or len(params) < 2:
        raise ValueError("not base64-encoded")
    if not mime_type:
        raise ValueError("missing MIME type")
    if require_image and not mime_type.startswith("image/"):
        raise ValueError(f"unsupported MIME type {mime_type!r}")

    payload = "".join(payload.split())
    if not payload:
        raise ValueError("empty payload")

    parsed = DataURL(mime_type=mime_type, payload=payload)
    try:
        parsed.decode()
    except (binascii.Error, ValueError) as e:
        raise ValueError("payload is not valid base64 (standard alphabet expected)") from e
    return parsed

def to_data_url(mime_type: str | None, payload: str) -> str:
    """Render ``data:<mime>;base64,<payload>``, defaulting the MIME type to PNG."""
    return str(DataURL(mime_type=mime_type or DEFAULT_IMAGE_MIME, payload=payload))

def image_data_url(mime_type: Any, payload: Any) -> DataURL:
    """Build a checked image :class:`DataURL` from a vendor's MIME type and payload.

    Raises:
        ValueError: If *payload* is not a base64 string or the MIME type is
            not ``image/*``.
    """
    if not isinstance(payload, str):
        raise ValueError("payload is not a string")
    if mime_type is not None and not isinstance(mime_type, str):
        raise ValueError("MIME type is not a string")
    return parse_data_url(to_data_url(mime_type, payload))
