"""Request size limiting for the upload endpoint."""

import logging

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

logger = logging.getLogger(__name__)

# Room for multipart boundaries and part headers on top of the file itself
MULTIPART_OVERHEAD = 64 * 1024


class RequestSizeLimitMiddleware(BaseHTTPMiddleware):
    """Reject requests whose declared Content-Length is over the limit.

    The check runs before the body is read, so an oversized upload never
    reaches the route or S3. Requests without a Content-Length fall through
    to the route, which checks the buffered size itself.
    """

    def __init__(self, app, max_bytes: int):
        super().__init__(app)
        self.max_bytes = max_bytes

    async def dispatch(self, request, call_next):
        length = request.headers.get("content-length")
        try:
            size = int(length) if length is not None else None
        except ValueError:
            size = None
        if size is not None and size > self.max_bytes:
            logger.warning(
                f"Rejected {request.method} {request.url.path}: "
                f"body of {size} bytes exceeds {self.max_bytes}"
            )
            return JSONResponse(
                status_code=413,
                content={
                    "error": "Request body exceeds allowed size.",
                    "code": "payload_too_large",
                },
            )
        return await call_next(request)
