from __future__ import annotations

from fastapi import Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from internai.core.config import settings


def client_key(request: Request) -> str:
    # Identities behind one NAT share an address; key them apart when the header is trusted.
    if settings.trust_x_user_id:
        user_id = (request.headers.get("X-User-ID") or "").strip()
        if user_id:
            return f"user:{user_id}"
    return get_remote_address(request)


limiter = Limiter(key_func=client_key)


def rate_limit(limit: str | None = None):
    if settings.rate_limit_enabled:
        return limiter.limit(limit or settings.rate_limit)

    def decorator(func):
        return func

    return decorator
