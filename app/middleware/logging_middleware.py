"""
Per-request access logging.

Binds a request id into structlog contextvars. On the swap routes it also binds
the operation and the token or transaction asked about, so the LI.FI call logs
made while serving the request carry the same fields.
"""

import time
import uuid
from typing import Callable, Dict

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = structlog.stdlib.get_logger("http")

REQUEST_ID_HEADER = "x-request-id"

_OPERATIONS = {"/quote": "quote", "/simulate": "simulate", "/status": "status"}
_CONTEXT_PARAMS = (("fromToken", "from_token"), ("amount", "amount"), ("txHash", "tx_hash"))

# Liveness checks only show up at DEBUG
_QUIET_PATHS = frozenset({"/", "/healthz"})


def request_context(request: Request) -> Dict[str, str]:
    """Log fields describing which swap operation a request asks for."""
    operation = _OPERATIONS.get(request.url.path)
    if operation is None:
        return {}

    context = {"operation": operation}
    for param, key in _CONTEXT_PARAMS:
        value = request.query_params.get(param)
        if value:
            context[key] = value
    return context


def _log_method(path: str, status_code: int) -> Callable[..., None]:
    if status_code >= 500:
        return logger.error
    if status_code >= 400:
        return logger.warning
    if path in _QUIET_PATHS:
        return logger.debug
    return logger.info


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:8]
        path = request.url.path

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id, **request_context(request))

        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            logger.exception(
                "http_request_failed",
                method=request.method,
                path=path,
                duration_ms=round((time.perf_counter() - start) * 1000, 1),
            )
            raise

        response.headers[REQUEST_ID_HEADER] = request_id
        _log_method(path, response.status_code)(
            "http_request",
            method=request.method,
            path=path,
            status=response.status_code,
            duration_ms=round((time.perf_counter() - start) * 1000, 1),
            client=request.client.host if request.client else None,
        )
        return response
