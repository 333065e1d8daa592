"""Base classes and registry for vendor adapters.

A vendor adapter is the only place that knows how one external
generative-image API wants its request shaped and where it hides the
generated image in its response.  The HTTP layer calls
:meth:`VendorAdapterBase.generate` and nothing else, so switching vendors is
a configuration change (``VISIONAI_VENDOR``).

Vendor Adapter Pattern
----------------------
:meth:`VendorAdapterBase.generate` drives a single request:

1. Build the instruction from the target color (:mod:`visionai.core.prompt`)
2. Ask the subclass for the endpoint, headers and JSON body
3. POST once through the shared ``httpx.AsyncClient`` (no retries)
4. Map non-2xx / transport failures to :class:`VendorRequestFailedError`
5. Ask the subclass to locate the image; none found is
   :class:`NoImageInResponseError`

Subclasses implement the vendor-specific hooks:

- :meth:`endpoint` / :meth:`headers`
- :meth:`build_payload`
- :meth:`extract_image`
- :meth:`extract_error_message`

Usage Example
-------------
    >>> from visionai.core.vendor_adapters import vendor_registry
    >>> adapter = vendor_registry.instantiate(config.vendor, config, client)
    >>> data_url = await adapter.generate(original, mask, "sage green")

See Also
--------
- GrokAdapter: xAI chat-completions vendor
- GeminiAdapter: Google Gemini ``generateContent`` vendor
- VisionAIConfig: vendor selection, keys, model names
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

import httpx

from .config import VisionAIConfig
from .data_url import DataURL
from .errors import NoImageInResponseError, VendorRequestFailedError
from .prompt import build_recolor_prompt

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RecolorJob:
    """A validated recolor request.

    Attributes:
        original: Photo to recolor.
        mask: Mask image; white pixels mark the region to recolor.
        target_color: Free-text color description.
    """

    original: DataURL
    mask: DataURL
    target_color: str


class VendorAdapterBase(ABC):
    """Abstract base class for all vendor adapters.

    Attributes
    ----------
    name : str
        Registry key, also the value of ``VisionAIConfig.vendor``
    description : str
        Short description of the vendor API
    config : VisionAIConfig
        Service configuration (keys, model names, endpoints)
    client : httpx.AsyncClient
        Shared client; owned by the caller, never closed here

    Notes
    -----
    - Adapters hold no per-request state and are safe to share across
      concurrent requests on the event loop.
    - ``generate`` never retries; one request in, at most one vendor call out.
    """

    name: str = "base"
    description: str = "Base class for vendor adapters"

    def __init__(self, config: VisionAIConfig, client: httpx.AsyncClient) -> None:
        """Initialize the adapter.

        Args:
            config: Service configuration.
            client: HTTP client used for the vendor call.
        """
        self.config = config
        self.client = client

    # -- Vendor-specific hooks ----------------------------------------------

    @property
    @abstractmethod
    def model(self) -> str:
        """Model identifier sent to the vendor."""

    @abstractmethod
    def endpoint(self) -> str:
        """Return the URL the request is POSTed to."""

    @abstractmethod
    def headers(self) -> dict[str, str]:
        """Return request headers, including authentication."""

    @abstractmethod
    def build_payload(self, job: RecolorJob, prompt: str) -> dict[str, Any]:
        """Return the vendor JSON body for *job*.

        Args:
            job: Validated recolor request.
            prompt: Instruction text for the model.
        """

    @abstractmethod
    def extract_image(self, data: Any) -> DataURL:
        """Locate the generated image in a successful vendor response.

        Args:
            data: Parsed JSON body.

        Raises
        ------
        NoImageInResponseError
            If no image payload can be found.
        """

    def extract_error_message(self, data: Any) -> str | None:
        """Return the human-readable error text from a vendor error body.

        Handles the common ``{"error": {"message": ...}}`` and
        ``{"error": "..."}`` shapes; subclasses override for anything else.
        """
        if not isinstance(data, dict):
            return None
        error = data.get("error")
        if isinstance(error, dict):
            message = error.get("message")
            return message if isinstance(message, str) and message.strip() else None
        if isinstance(error, str) and error.strip():
            return error
        return None

    # -- Public interface ---------------------------------------------------

    async def generate(self, original: DataURL, mask: DataURL, color: str) -> str:
        """Recolor the masked region of *original* and return a data URL.

        Args:
            original: Photo to recolor.
            mask: Mask image, white = region to recolor.
            color: Target color description.

        Returns:
            ``data:<mime>;base64,<payload>`` of the generated image.

        Raises
        ------
        VendorRequestFailedError
            Non-2xx status or transport failure.
        NoImageInResponseError
            Successful status but no image in the body.
        """
        job = RecolorJob(original=original, mask=mask, target_color=color)
        prompt = build_recolor_prompt(color, self.config.prompt_language)
        payload = self.build_payload(job, prompt)

        logger.info(f"Sending recolor request to {self.name} (model={self.model})")
        try:
            response = await self.client.post(
                self.endpoint(),
                headers=self.headers(),
                json=payload,
            )
        except httpx.HTTPError as e:
            logger.error(f"{self.name} request failed: {e!r}")
            raise VendorRequestFailedError(self.name) from e

        data = _json_or_none(response)

        if not response.is_success:
            message = self.extract_error_message(data)
            logger.error(
                f"{self.name} returned HTTP {response.status_code}: {message or '<no message>'}"
            )
            raise VendorRequestFailedError(
                self.name, vendor_message=message, vendor_status=response.status_code
            )

        if data is None:
            logger.error(f"{self.name} returned a non-JSON body with HTTP {response.status_code}")
            raise NoImageInResponseError(self.name)

        image = self.extract_image(data)
        logger.info(f"{self.name} returned {image.mime_type} ({len(image.payload)} base64 chars)")
        return str(image)

    def get_adapter_info(self) -> dict[str, Any]:
        """Return adapter metadata (never includes credentials)."""
        return {
            "name": self.name,
            "description": self.description,
            "model": self.model,
        }


def _json_or_none(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None


class VendorRegistry:
    """Registry of available vendor adapters.

    Adapters register themselves at import time (see
    :mod:`visionai.core.adapters`); the application instantiates the one
    named by ``config.vendor``.
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._adapters: dict[str, type[VendorAdapterBase]] = {}

    def register(self, adapter_class: type[VendorAdapterBase]) -> type[VendorAdapterBase]:
        """Register a vendor adapter class.

        Returns the class unchanged so this can be used as a decorator.
        """
        adapter_name = adapter_class.name

        if adapter_name in self._adapters:
            logger.warning(f"Vendor adapter '{adapter_name}' is already registered, overwriting")

        self._adapters[adapter_name] = adapter_class
        logger.debug(f"Registered vendor adapter: {adapter_name}")
        return adapter_class

    def instantiate(
        self,
        adapter_name: str,
        config: VisionAIConfig,
        client: httpx.AsyncClient,
    ) -> VendorAdapterBase:
        """Create an instance of a registered vendor adapter.

        Raises
        ------
        KeyError
            If adapter_name is not registered
        """
        if adapter_name not in self._adapters:
            available = ", ".join(self.list_available())
            raise KeyError(
                f"Vendor adapter '{adapter_name}' not found. Available adapters: {available}"
            )

        instance = self._adapters[adapter_name](config=config, client=client)
        logger.info(f"Instantiated vendor adapter: {adapter_name}")
        return instance

    def get_adapter_class(self, adapter_name: str) -> type[VendorAdapterBase] | None:
        return self._adapters.get(adapter_name)

    def list_available(self) -> list[str]:
        """List all registered adapter names."""
        return list(self._adapters.keys())

    def get_adapter_info(self, adapter_name: str) -> dict[str, Any] | None:
        """Get information about a registered adapter, or None if unknown."""
        if adapter_name not in self._adapters:
            return None

        adapter_class = self._adapters[adapter_name]
        return {
            "name": adapter_class.name,
            "description": adapter_class.description,
        }


# Global vendor registry instance
vendor_registry = VendorRegistry()
