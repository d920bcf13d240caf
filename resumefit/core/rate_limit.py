from __future__ import annotations

from fastapi import Request
from slowapi import Limiter

from resumefit.core.config import settings


def client_key(request: Request) -> str:
    """Rate-limit key: first X-Forwarded-For hop when behind a proxy, else the peer address."""
    forwarded_for = request.headers.get("x-forwarded-for", "").strip()
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()
    if request.client and request.client.host:
        return request.client.host
    return "unknown"


limiter = Limiter(key_func=client_key, enabled=settings.rate_limit_enabled)


def rate_limit():
    if settings.rate_limit_enabled:
        return limiter.limit(settings.rate_limit)

    def decorator(func):
        return func

    return decorator
