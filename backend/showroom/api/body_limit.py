"""Body Size Limit: reject request bodies above the configured size.

Invariants:
    - A declared Content-Length above the limit is answered with 413 before the app runs
    - Chunked bodies are counted while streaming; crossing the limit raises a 413
      HTTPException carrying the PayloadTooLargeError envelope, which
      api/error_handlers.py sends as the response body
"""

from fastapi import HTTPException
from starlette.datastructures import Headers
from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from showroom.core.errors import PayloadTooLargeError


class BodySizeLimitMiddleware:
    """Pure ASGI middleware enforcing max_bytes on HTTP request bodies."""

    def __init__(self, app: ASGIApp, max_bytes: int):
        self.app = app
        self.max_bytes = max_bytes

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        declared = Headers(scope=scope).get("content-length")
        if declared is not None and declared.isdigit() and int(declared) > self.max_bytes:
            error = PayloadTooLargeError(self.max_bytes)
            response = JSONResponse(
                status_code=error.http_status, content=error.to_response(),
            )
            await response(scope, receive, send)
            return

        received = 0

        async def limited_receive() -> Message:
            nonlocal received
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > self.max_bytes:
                    # FastAPI re-raises HTTPException from body parsing, anything else becomes 400
                    error = PayloadTooLargeError(self.max_bytes)
                    raise HTTPException(error.http_status, detail=error.to_response())
            return message

        await self.app(scope, limited_receive, send)
