"""ASGI middleware for the recolor API.

:class:`BodySizeLimitMiddleware` enforces ``max_body_bytes`` on every HTTP
request.  A declared ``Content-Length`` over the limit is answered with 413
before the application runs.  Bodies without that header (chunked uploads)
are counted as they are received; once the count passes the limit the
read fails with a 413 ``HTTPException``, which the application's exception
handlers render as ``{"error": ...}``.
"""

from __future__ import annotations

import logging

from fastapi import HTTPException
from fastapi.responses import JSONResponse
from starlette.datastructures import Headers
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from visionai.core.errors import PayloadTooLargeError

logger = logging.getLogger(__name__)


class BodySizeLimitMiddleware:
    """Reject request bodies larger than *max_body_bytes* with 413."""

    def __init__(self, app: ASGIApp, max_body_bytes: int) -> None:
        self.app = app
        self.max_body_bytes = max_body_bytes

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        error = PayloadTooLargeError(self.max_body_bytes)
        content_length = Headers(scope=scope).get("content-length")
        if content_length is not None and content_length.isdigit():
            if int(content_length) > self.max_body_bytes:
                logger.warning(f"Rejected {content_length}-byte body on {scope['path']}")
                response = JSONResponse(
                    status_code=error.status_code, content={"error": error.public_message}
                )
                await response(scope, receive, send)
                return

        received = 0

        async def limited_receive() -> Message:
            nonlocal received
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > self.max_body_bytes:
                    logger.warning(f"Rejected streamed body over the limit on {scope['path']}")
                    raise HTTPException(status_code=error.status_code, detail=error.public_message)
            return message

        await self.app(scope, limited_receive, send)
