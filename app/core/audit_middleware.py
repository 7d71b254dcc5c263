# /app/core/audit_middleware.py

"""
ASGI middleware that feeds finished requests to the audit recorder.

It wraps `receive` to keep a copy of the request body and `send` to learn the
final status code, lets the application run to completion (the response is
fully sent by then), and only afterwards calls `AuditRecorder.observe`, which
detaches the actual write. A request whose handler raised is not observed:
that is a server error and it is not audit material.

The recorder is looked up on `app.state.audit_recorder` for every request so
tests can swap it without rebuilding the middleware stack.
"""

import json
import logging
from typing import Any, Optional

from app.services.audit_service import is_auditable_request
from .deps import PRINCIPAL_STATE_KEY

logger = logging.getLogger(__name__)


def _decode_body(raw: bytes) -> Any:
    if not raw:
        return None
    try:
        return json.loads(raw)
    except (UnicodeDecodeError, ValueError):
        return None


def _header(scope, name: bytes) -> Optional[str]:
    for key, value in scope.get("headers", []):
        if key.lower() == name:
            return value.decode("latin-1")
    return None


class AuditTrailMiddleware:
    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http" or not is_auditable_request(scope["method"], scope["path"]):
            await self.app(scope, receive, send)
            return

        # Shared with the endpoint's Request so the resolved principal is visible here.
        state = scope.setdefault("state", {})
        body_chunks = []
        response_status = {}

        async def receive_wrapper():
            message = await receive()
            if message["type"] == "http.request":
                body_chunks.append(message.get("body", b""))
            return message

        async def send_wrapper(message):
            if message["type"] == "http.response.start":
                response_status["code"] = message["status"]
            await send(message)

        await self.app(scope, receive_wrapper, send_wrapper)

        principal = state.get(PRINCIPAL_STATE_KEY)
        status_code = response_status.get("code")
        if principal is None or status_code is None:
            return

        recorder = getattr(scope["app"].state, "audit_recorder", None) if "app" in scope else None
        if recorder is None:
            logger.debug("No audit recorder configured; skipping %s %s", scope["method"], scope["path"])
            return

        client = scope.get("client")
        recorder.observe(
            principal,
            scope["method"],
            scope["path"],
            status_code,
            client[0] if client else None,
            _header(scope, b"user-agent"),
            _decode_body(b"".join(body_chunks)),
        )
