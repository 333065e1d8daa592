"""Shared pytest fixtures for VisionAI tests."""

from __future__ import annotations

import asyncio
import base64
import shutil
import tempfile
from collections.abc import Generator
from pathlib import Path
from typing import Any

import httpx
import pytest
from fastapi.testclient import TestClient

from visionai.api.main import create_app
from visionai.core.config import VisionAIConfig

# Environment variables that would leak host settings into tests.
_ENV_VARS = (
    "GROK_API_KEY",
    "GEMINI_API_KEY",
    "PORT",
    "VISIONAI_VENDOR",
    "VISIONAI_GROK_API_KEY",
    "VISIONAI_GEMINI_API_KEY",
    "VISIONAI_GROK_MODEL",
    "VISIONAI_GEMINI_MODEL",
    "VISIONAI_SERVER_PORT",
    "VISIONAI_MAX_BODY_BYTES",
    "VISIONAI_PROMPT_LANGUAGE",
    "VISIONAI_REQUEST_TIMEOUT",
    "VISIONAI_LOG_LEVEL",
)

# Bytes standing in for an image; only the base64 round trip matters.
ORIGINAL_BYTES = b"\x89PNG\r\n\x1a\noriginal-facade"
MASK_BYTES = b"\x89PNG\r\n\x1a\nmask-white-region"
RESULT_BYTES = b"\xff\xd8\xff\xe0recolored-facade"


def b64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


class MockVendor:
    """Programmable stand-in for a vendor HTTP API.

    Set ``status_code`` and ``json_body`` (or ``content`` for a non-JSON
    body, or ``exc`` to simulate a transport failure) before the request.
    Every request received is appended to ``requests``.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.json_body: Any = {}
        self.content: bytes | None = None
        self.exc: Exception | None = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.exc is not None:
            raise self.exc
        if self.content is not None:
            return httpx.Response(self.status_code, content=self.content)
        return httpx.Response(self.status_code, json=self.json_body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove host configuration so every test starts from defaults."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files.

    Yields:
        Path to temporary directory

    Cleanup:
        Directory is removed after test completes
    """
    temp_path = Path(tempfile.mkdtemp())
    try:
        yield temp_path
    finally:
        shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def test_config() -> VisionAIConfig:
    """Grok-backed configuration with both keys set and no .env file."""
    return VisionAIConfig(
        _env_file=None,
        vendor="grok",
        grok_api_key="test-grok-key",
        gemini_api_key="test-gemini-key",
    )


@pytest.fixture
def gemini_config(test_config: VisionAIConfig) -> VisionAIConfig:
    return test_config.model_copy(update={"vendor": "gemini"})


@pytest.fixture
def original_data_url() -> str:
    return f"data:image/png;base64,{b64(ORIGINAL_BYTES)}"


@pytest.fixture
def mask_data_url() -> str:
    return f"data:image/png;base64,{b64(MASK_BYTES)}"


@pytest.fixture
def recolor_payload(original_data_url: str, mask_data_url: str) -> dict:
    """A valid ``POST /api/recolor`` body."""
    return {
        "originalImage": original_data_url,
        "maskImage": mask_data_url,
        "targetColor": "Salbeigrün",
    }


@pytest.fixture
def mock_vendor() -> MockVendor:
    return MockVendor()


@pytest.fixture
def http_client(mock_vendor: MockVendor) -> Generator[httpx.AsyncClient, None, None]:
    """An ``httpx.AsyncClient`` routed to :class:`MockVendor`."""
    client = httpx.AsyncClient(transport=mock_vendor.transport)
    yield client
    asyncio.run(client.aclose())


def _serve(config: VisionAIConfig, client: httpx.AsyncClient) -> Generator[TestClient, None, None]:
    app = create_app(config, client=client)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def test_client(
    test_config: VisionAIConfig, http_client: httpx.AsyncClient
) -> Generator[TestClient, None, None]:
    """TestClient for an app using the Grok adapter against MockVendor."""
    yield from _serve(test_config, http_client)


@pytest.fixture
def gemini_client(
    gemini_config: VisionAIConfig, http_client: httpx.AsyncClient
) -> Generator[TestClient, None, None]:
    """TestClient for an app using the Gemini adapter against MockVendor."""
    yield from _serve(gemini_config, http_client)
