"""Configuration management for the VisionAI recolor service.

This module provides centralized configuration management using Pydantic Settings.
Configuration is loaded from environment variables with the VISIONAI_ prefix,
allowing easy customization without code changes. The vendor API keys are also
accepted under their conventional unprefixed names (``GROK_API_KEY`` and
``GEMINI_API_KEY``), and the listen port under ``PORT``, so the service runs
unchanged on hosting platforms that inject those variables.

Environment Variable Loading
-----------------------------
Configuration values are loaded in the following priority order:
1. Explicit keyword arguments (tests, embedding applications)
2. Environment variables (VISIONAI_* prefix, plus the aliases above)
3. .env file in the working directory
4. Default values defined in VisionAIConfig

Example .env file:
    VISIONAI_VENDOR=gemini
    GEMINI_API_KEY=...
    VISIONAI_GEMINI_MODEL=gemini-2.5-flash-image-preview
    VISIONAI_MAX_BODY_BYTES=52428800

Single Configuration Instance
-----------------------------
There is no module-level configuration object. :func:`visionai.api.main.main`
builds exactly one :class:`VisionAIConfig` at process start, checks it with
:meth:`VisionAIConfig.require_api_key`, and hands it to
:func:`visionai.api.main.create_app`. Everything downstream (the vendor
adapter, the HTTP client, the routes) receives it explicitly.

Usage Example
-------------
    from visionai.core.config import VisionAIConfig

    config = VisionAIConfig()
    config.require_api_key()
    print(config.vendor, config.model_name)
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from visionai.core.errors import ConfigurationError

# Package-relative defaults for the landing page and its assets.
_PACKAGE_DIR = Path(__file__).resolve().parents[1]


class VisionAIConfig(BaseSettings):
    """Main configuration for the VisionAI recolor service.

    Attributes
    ----------
    Vendor Settings:
        vendor : Literal["grok", "gemini"]
            Which external generation API serves recolor requests
        grok_api_key / gemini_api_key : str | None
            Credentials; only the selected vendor's key is required
        grok_model / gemini_model : str
            Model identifiers sent to the vendor
        grok_api_url / gemini_api_url : str
            Endpoint (Grok) or API base URL (Gemini)
        max_tokens : int
            Completion budget for chat-style vendors
        request_timeout : float | None
            Seconds to wait for the vendor; ``None`` waits indefinitely

    Request Settings:
        max_body_bytes : int
            Largest accepted request body (base64 images are large)
        prompt_language : Literal["de", "en"]
            Language of the recolor instruction sent to the model

    Server Settings:
        server_host, server_port, log_level, static_dir, templates_dir

    Examples
    --------
        >>> cfg = VisionAIConfig(vendor="gemini", gemini_api_key="test", _env_file=None)
        >>> cfg.model_name
        'gemini-2.5-flash-image-preview'
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="VISIONAI_",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )

    # Vendor selection
    vendor: Literal["grok", "gemini"] = Field(
        default="grok",
        description="External generation API used for recoloring",
    )

    # Credentials
    grok_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("VISIONAI_GROK_API_KEY", "GROK_API_KEY", "grok_api_key"),
        description="xAI API key (required when vendor is 'grok')",
    )
    gemini_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "VISIONAI_GEMINI_API_KEY", "GEMINI_API_KEY", "gemini_api_key"
        ),
        description="Google AI Studio API key (required when vendor is 'gemini')",
    )

    # Vendor models and endpoints
    grok_model: str = Field(
        default="grok-2-vision-1212",
        description="xAI model identifier",
    )
    gemini_model: str = Field(
        default="gemini-2.5-flash-image-preview",
        description="Gemini model identifier",
    )
    grok_api_url: str = Field(
        default="https://api.x.ai/v1/chat/completions",
        description="xAI chat completions endpoint",
    )
    gemini_api_url: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta",
        description="Gemini REST API base URL",
    )
    max_tokens: int = Field(
        default=1000,
        description="max_tokens sent to chat-completion vendors",
        ge=1,
        le=32768,
    )
    request_timeout: float | None = Field(
        default=None,
        description="Vendor call timeout in seconds (None = no timeout)",
        gt=0,
    )

    # Request handling
    max_body_bytes: int = Field(
        default=20 * 1024 * 1024,
        description="Maximum request body size in bytes",
        ge=1024,
        le=100 * 1024 * 1024,
    )
    prompt_language: Literal["de", "en"] = Field(
        default="de",
        description="Language of the recolor instruction",
    )

    # Server settings
    server_host: str = Field(
        default="0.0.0.0",
        description="Server bind address",
    )
    server_port: int = Field(
        default=3000,
        validation_alias=AliasChoices("VISIONAI_SERVER_PORT", "PORT", "server_port"),
        description="Server port",
        ge=1024,
        le=65535,
    )
    log_level: Literal["critical", "error", "warning", "info", "debug"] = Field(
        default="info",
        description="Log level for the application and uvicorn",
    )

    # Paths
    static_dir: Path = Field(
        default=_PACKAGE_DIR / "static",
        description="Directory served under /static",
    )
    templates_dir: Path = Field(
        default=_PACKAGE_DIR / "templates",
        description="Directory holding index.html",
    )

    @property
    def api_key(self) -> str | None:
        """Return the API key of the selected vendor (blank keys count as unset)."""
        key = self.grok_api_key if self.vendor == "grok" else self.gemini_api_key
        if key is None or not key.strip():
            return None
        return key.strip()

    @property
    def model_name(self) -> str:
        """Return the model identifier of the selected vendor."""
        return self.grok_model if self.vendor == "grok" else self.gemini_model

    def require_api_key(self) -> str:
        """Return the selected vendor's API key or fail.

        Raises:
            ConfigurationError: If the key for ``vendor`` is unset or blank.
        """
        key = self.api_key
        if key is None:
            env_name = "GROK_API_KEY" if self.vendor == "grok" else "GEMINI_API_KEY"
            raise ConfigurationError(f"{env_name} is not set (vendor={self.vendor!r})")
        return key
