"""xAI Grok vendor adapter.

Grok is reached through its OpenAI-compatible chat-completions endpoint.
Both images go in as ``image_url`` content parts carrying the full data
URL, after a single text part holding the instruction.

Request Shape
-------------
::

    POST https://api.x.ai/v1/chat/completions
    Authorization: Bearer <GROK_API_KEY>

    {
      "model": "grok-2-vision-1212",
      "messages": [{"role": "user", "content": [
          {"type": "text", "text": "<instruction>"},
          {"type": "image_url", "image_url": {"url": "data:image/jpeg;base64,..."}},
          {"type": "image_url", "image_url": {"url": "data:image/png;base64,..."}}
      ]}],
      "max_tokens": 1000
    }

Response Shape
--------------
The image is expected in ``choices[0].message.content``, a list of parts.
Accepted, first match wins:

- ``{"image": {"base64": "...", "mime_type": "image/png"}}`` (MIME optional,
  PNG assumed)
- ``{"type": "image_url", "image_url": {"url": "data:...;base64,..."}}``

Parts whose payload is not base64 or whose MIME type is not ``image/*``
are skipped.  A plain string ``content`` that is itself a base64 image
data URL is also accepted.
"""

from __future__ import annotations

import logging
from typing import Any

from visionai.core.data_url import DataURL, image_data_url, parse_data_url
from visionai.core.errors import NoImageInResponseError
from visionai.core.vendor_adapters import RecolorJob, VendorAdapterBase, vendor_registry

logger = logging.getLogger(__name__)


class GrokAdapter(VendorAdapterBase):
    """Vendor adapter for xAI Grok vision models."""

    name = "grok"
    description = "xAI Grok via the OpenAI-compatible chat completions API"

    @property
    def model(self) -> str:
        return self.config.grok_model

    def endpoint(self) -> str:
        return self.config.grok_api_url

    def headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.config.grok_api_key or ''}",
            "Content-Type": "application/json",
        }

    def build_payload(self, job: RecolorJob, prompt: str) -> dict[str, Any]:
        return {
            "model": self.model,
            "messages": [
                {
                    "role": "user",
                    "content": [
                        {"type": "text", "text": prompt},
                        {"type": "image_url", "image_url": {"url": str(job.original)}},
                        {"type": "image_url", "image_url": {"url": str(job.mask)}},
                    ],
                }
            ],
            "max_tokens": self.config.max_tokens,
        }

    def extract_image(self, data: Any) -> DataURL:
        content = _message_content(data)

        if isinstance(content, str):
            image = _image_from_url(content)
            if image is not None:
                return image
        elif isinstance(content, list):
            for part in content:
                image = _image_from_part(part)
                if image is not None:
                    return image

        logger.warning("Grok response contained no image part")
        raise NoImageInResponseError(self.name)


def _message_content(data: Any) -> Any:
    """Return ``choices[0].message.content`` or None if the path is missing."""
    if not isinstance(data, dict):
        return None
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices:
        return None
    first = choices[0]
    if not isinstance(first, dict):
        return None
    message = first.get("message")
    if not isinstance(message, dict):
        return None
    return message.get("content")


def _image_from_part(part: Any) -> DataURL | None:
    if not isinstance(part, dict):
        return None

    image = part.get("image")
    if isinstance(image, dict) and image.get("base64"):
        mime_type = image.get("mime_type") or image.get("mimeType")
        try:
            return image_data_url(mime_type, image["base64"])
        except ValueError as e:
            logger.warning(f"Skipping unusable Grok image part: {e}")
            return None

    image_url = part.get("image_url")
    if isinstance(image_url, dict):
        return _image_from_url(image_url.get("url"))
    return None


def _image_from_url(url: Any) -> DataURL | None:
    if not isinstance(url, str):
        return None
    try:
        return parse_data_url(url)
    except ValueError:
        return None


vendor_registry.register(GrokAdapter)
