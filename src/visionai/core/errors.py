"""Error taxonomy for the recolor service.

Every failure a request can end in is a :class:`RecolorError` subclass that
knows its HTTP status and the message a client is allowed to see.  The API
layer turns any ``RecolorError`` into ``{"error": public_message}`` with
``status_code``; the full detail stays in the server log.

========================  ======  =========================================
Error                     Status  Raised when
========================  ======  =========================================
MissingFieldError         400     a required request field is absent/blank
InvalidImageError         400     an image field is not a base64 data URL
PayloadTooLargeError      413     the request body exceeds the size limit
VendorRequestFailedError  500     the vendor answered non-2xx or was
                                  unreachable
NoImageInResponseError    500     the vendor answered but sent no image
========================  ======  =========================================

:class:`ConfigurationError` is separate: it is raised once at startup and
never reaches a client.
"""

from __future__ import annotations

# Longest vendor message forwarded to a client.
MAX_VENDOR_MESSAGE_LENGTH = 300


class ConfigurationError(Exception):
    """The process cannot start with the current configuration."""


class RecolorError(Exception):
    """Base class for per-request failures.

    Attributes:
        status_code: HTTP status returned to the client.
        public_message: Text placed in the ``error`` field of the response.
    """

    status_code: int = 500

    def __init__(self, public_message: str) -> None:
        super().__init__(public_message)
        self.public_message = public_message


class MissingFieldError(RecolorError):
    """One or more required fields were missing or blank."""

    status_code = 400

    def __init__(self, fields: list[str]) -> None:
        self.fields = list(fields)
        super().__init__(f"Missing required field(s): {', '.join(self.fields)}")


class InvalidImageError(RecolorError):
    """An image field could not be read as a base64 data URL."""

    status_code = 400

    def __init__(self, field: str, reason: str) -> None:
        self.field = field
        self.reason = reason
        super().__init__(f"{field} must be a base64 data URL ({reason})")


class PayloadTooLargeError(RecolorError):
    """The request body is larger than ``max_body_bytes``."""

    status_code = 413

    def __init__(self, limit: int) -> None:
        self.limit = limit
        super().__init__(f"Request body exceeds {limit} bytes")


class GenerationFailedError(RecolorError):
    """The external model did not produce a usable image."""

    status_code = 500


class VendorRequestFailedError(GenerationFailedError):
    """The vendor call failed (non-2xx status or transport error).

    Attributes:
        vendor: Adapter name, e.g. ``"grok"``.
        vendor_status: HTTP status from the vendor, ``None`` for transport errors.
        vendor_message: Vendor-supplied error text, if any.
    """

    def __init__(
        self,
        vendor: str,
        vendor_message: str | None = None,
        vendor_status: int | None = None,
    ) -> None:
        self.vendor = vendor
        self.vendor_status = vendor_status
        self.vendor_message = vendor_message
        if vendor_message:
            detail = _trim(vendor_message)
        else:
            detail = f"{vendor} request failed"
        super().__init__(f"Image generation failed: {detail}")


class NoImageInResponseError(GenerationFailedError):
    """The vendor responded successfully but no image payload was found."""

    def __init__(self, vendor: str) -> None:
        self.vendor = vendor
        super().__init__("Image generation failed: the model returned no image")


def _trim(message: str) -> str:
    message = " ".join(message.split())
    if len(message) > MAX_VENDOR_MESSAGE_LENGTH:
        return message[: MAX_VENDOR_MESSAGE_LENGTH - 3] + "..."
    return message
