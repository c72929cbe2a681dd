"""Middleware — request IDs, security headers."""

import re
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Current request ID, stamped onto log records by logging_setup.RequestIDFilter
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

# Caller-supplied IDs end up in log lines, so only plain tokens are accepted
_VALID_REQUEST_ID = re.compile(r"^[A-Za-z0-9._-]{1,64}$")


def _request_id_from(request: Request) -> str:
    incoming = request.headers.get("X-Request-ID", "")
    if _VALID_REQUEST_ID.match(incoming):
        return incoming
    return str(uuid.uuid4())


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Tag each relay request with an ID that shows up in every log line.

    The spreadsheet trigger does not send ``X-Request-ID``, so most requests
    get a fresh UUID4. A caller-supplied ID is reused only when it is a short
    plain token; anything else is replaced. The ID is echoed on the response
    so a failed relay can be matched to the server log.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = _request_id_from(request)
        token = request_id_var.set(rid)
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)
        response.headers["X-Request-ID"] = rid
        return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Mark relay responses as non-sniffable and non-frameable."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        return response
