"""Request rate limits.

Authenticated requests are bucketed by the proven key, anonymous ones by
client address.
"""

from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from core.config import settings
from core.exceptions import ErrorCode

READ_LIMIT = settings.rate_limit_read
WRITE_LIMIT = settings.rate_limit_write

# Set by the auth dependency on authenticated requests.
CALLER_STATE_ATTR = "caller_key"


def caller_or_remote_address(request: Request) -> str:
    caller = getattr(request.state, CALLER_STATE_ATTR, None)
    if caller:
        return f"key:{caller}"
    return f"ip:{get_remote_address(request)}"


limiter = Limiter(
    key_func=caller_or_remote_address,
    enabled=settings.rate_limit_enabled,
)


async def rate_limit_exceeded_handler(request: Request, exc: Exception) -> JSONResponse:
    limit = exc.detail if isinstance(exc, RateLimitExceeded) else str(exc)
    return JSONResponse(
        status_code=429,
        content={
            "error_code": ErrorCode.RATE_LIMIT_EXCEEDED.value,
            "message": f"Rate limit exceeded: {limit}",
            "details": {
                "limit": limit,
                "bucket": caller_or_remote_address(request),
            },
        },
    )
