"""Google Gemini vendor adapter.

Gemini image models are called through the ``generateContent`` REST method.
Unlike Grok, images are sent as ``inlineData`` parts, so each data URL is
split into its ``(mimeType, data)`` pair.

Request Shape
-------------
::

    POST {gemini_api_url}/models/{gemini_model}:generateContent
    x-goog-api-key: <GEMINI_API_KEY>

    {
      "contents": [{"role": "user", "parts": [
          {"text": "<instruction>"},
          {"inlineData": {"mimeType": "image/jpeg", "data": "..."}},
          {"inlineData": {"mimeType": "image/png", "data": "..."}}
      ]}],
      "generationConfig": {"responseModalities": ["TEXT", "IMAGE"]}
    }

Response Shape
--------------
The first part across ``candidates[*].content.parts[*]`` whose
``inlineData`` holds base64 data with an ``image/*`` MIME type is the
result; unusable parts are skipped.  The REST API uses camelCase;
the snake_case spelling (``inline_data`` / ``mime_type``) returned by some
proxies is accepted as well.  A blocked prompt comes back as a 200 with
``promptFeedback.blockReason`` and no candidates; that is logged and
reported as "no image".
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Any

from visionai.core.data_url import DataURL, image_data_url
from visionai.core.errors import NoImageInResponseError
from visionai.core.vendor_adapters import RecolorJob, VendorAdapterBase, vendor_registry

logger = logging.getLogger(__name__)


class GeminiAdapter(VendorAdapterBase):
    """Vendor adapter for Google Gemini image generation models."""

    name = "gemini"
    description = "Google Gemini via the generateContent REST API"

    @property
    def model(self) -> str:
        return self.config.gemini_model

    def endpoint(self) -> str:
        base = self.config.gemini_api_url.rstrip("/")
        return f"{base}/models/{self.model}:generateContent"

    def headers(self) -> dict[str, str]:
        return {
            "x-goog-api-key": self.config.gemini_api_key or "",
            "Content-Type": "application/json",
        }

    def build_payload(self, job: RecolorJob, prompt: str) -> dict[str, Any]:
        return {
            "contents": [
                {
                    "role": "user",
                    "parts": [
                        {"text": prompt},
                        _inline_part(job.original),
                        _inline_part(job.mask),
                    ],
                }
            ],
            "generationConfig": {"responseModalities": ["TEXT", "IMAGE"]},
        }

    def extract_image(self, data: Any) -> DataURL:
        for blob in (_inline_data(part) for part in _parts(data)):
            if blob is None or not blob.get("data"):
                continue
            mime_type = blob.get("mimeType") or blob.get("mime_type")
            try:
                return image_data_url(mime_type, blob["data"])
            except ValueError as e:
                logger.warning(f"Skipping unusable Gemini inline part: {e}")

        block_reason = None
        if isinstance(data, dict) and isinstance(data.get("promptFeedback"), dict):
            block_reason = data["promptFeedback"].get("blockReason")
        if block_reason:
            logger.warning(f"Gemini blocked the prompt: {block_reason}")
        else:
            logger.warning("Gemini response contained no inline image data")
        raise NoImageInResponseError(self.name)


def _inline_part(image: DataURL) -> dict[str, Any]:
    return {"inlineData": {"mimeType": image.mime_type, "data": image.payload}}


def _parts(data: Any) -> Iterator[Any]:
    """Yield every content part of every candidate."""
    if not isinstance(data, dict):
        return
    candidates = data.get("candidates")
    if not isinstance(candidates, list):
        return
    for candidate in candidates:
        if not isinstance(candidate, dict):
            continue
        content = candidate.get("content")
        if not isinstance(content, dict):
            continue
        parts = content.get("parts")
        if isinstance(parts, list):
            yield from parts


def _inline_data(part: Any) -> dict[str, Any] | None:
    if not isinstance(part, dict):
        return None
    blob = part.get("inlineData") or part.get("inline_data")
    return blob if isinstance(blob, dict) else None


vendor_registry.register(GeminiAdapter)
