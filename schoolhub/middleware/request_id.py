# middleware/request_id.py
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
import uuid

from schoolhub.core.logging import request_id_ctx


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Tags each request with an id that log records and the response carry"""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ):
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id
        token = request_id_ctx.set(request_id)
        try:
            response = await call_next(request)
        finally:
            request_id_ctx.reset(token)
        response.headers["X-Request-ID"] = request_id
        return response
