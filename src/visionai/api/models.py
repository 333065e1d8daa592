"""Pydantic request and response models for the recolor API.

The JSON field names are camelCase (``originalImage``, ``imageDataURL``) to
match the browser client; the Python attributes are snake_case.

Models
------
RecolorRequest
    Payload for ``POST /api/recolor``.  Every field is optional at the
    schema level so that a missing field is reported by
    :func:`visionai.api.validation.validate_recolor_request` as a
    ``MissingFieldError`` (400) rather than a generic schema error.
RecolorResponse
    Success body: the generated image as a data URL.
ErrorResponse
    Failure body for every non-2xx status.
HealthResponse
    Body of ``GET /api/health``.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class RecolorRequest(BaseModel):
    """Request body for the ``POST /api/recolor`` endpoint.

    Attributes:
        original_image: Photo to recolor, as a base64 data URL.
        mask_image: Mask as a base64 data URL; white marks the region to recolor.
        target_color: Free-text color description, e.g. ``"RAL 7016"``.
    """

    model_config = ConfigDict(populate_by_name=True)

    original_image: str | None = Field(
        default=None,
        alias="originalImage",
        description="Original photo as data:<mime>;base64,<payload>.",
    )
    mask_image: str | None = Field(
        default=None,
        alias="maskImage",
        description="Mask image as a data URL (white = region to recolor).",
    )
    target_color: str | None = Field(
        default=None,
        alias="targetColor",
        description="Target color description.",
    )


class RecolorResponse(BaseModel):
    """Response body for a successful recolor."""

    model_config = ConfigDict(populate_by_name=True)

    image_data_url: str = Field(
        ...,
        alias="imageDataURL",
        description="Generated image as data:<mime>;base64,<payload>.",
    )


class ErrorResponse(BaseModel):
    error: str = Field(..., description="Client-safe error message.")


class HealthResponse(BaseModel):
    """Response body for ``GET /api/health``.

    Attributes:
        status: Always ``"ok"`` when the process is serving.
        version: Package version.
        vendor: Active vendor adapter name.
        model: Model identifier sent to the vendor.
    """

    status: str = "ok"
    version: str
    vendor: str
    model: str
