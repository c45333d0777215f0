"""
Per-caller request throttling with slowapi.

Requests are counted per gateway user (``X-User-Id``) and, for anonymous
shoppers browsing the catalog, per client address. SlowAPIMiddleware
applies DEFAULT_RATE_LIMIT to every route; image uploads and checkout
sessions are decorated with HEAVY_RATE_LIMIT. Health checks and the
Stripe webhook are exempt: Stripe retries from a handful of addresses.
"""

import logging

from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.requests import Request
from starlette.responses import JSONResponse

from app.core.config import settings

logger = logging.getLogger(__name__)

DEFAULT_RATE_LIMIT = settings.rate_limit_default
HEAVY_RATE_LIMIT = settings.rate_limit_heavy

USER_ID_HEADER = "X-User-Id"


def rate_limit_key(request: Request) -> str:
    """Bucket for ``request``: the forwarded user id, else the client IP."""
    user_id = (request.headers.get(USER_ID_HEADER) or "").strip()
    if user_id:
        return f"user:{user_id}"
    return f"ip:{get_remote_address(request)}"


limiter = Limiter(key_func=rate_limit_key, default_limits=[DEFAULT_RATE_LIMIT])


async def rate_limit_exceeded_handler(
    request: Request, exc: RateLimitExceeded
) -> JSONResponse:
    """429 in the API error format, logged with the throttled bucket."""
    logger.warning(
        "Rate limit %s exceeded by %s on %s",
        exc.detail,
        rate_limit_key(request),
        request.url.path,
    )
    return JSONResponse(
        status_code=429,
        content={
            "error": "Too many requests",
            "detail": f"Trop de requêtes (limite : {exc.detail}), réessayez plus tard",
        },
    )
