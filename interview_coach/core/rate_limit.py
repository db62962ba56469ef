from __future__ import annotations

from fastapi import Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from interview_coach.core.config import settings


def client_key(request: Request) -> str:
    if settings.trust_x_forwarded_for:
        forwarded_for = request.headers.get("x-forwarded-for", "").strip()
        if forwarded_for:
            return forwarded_for.split(",")[0].strip()
    return get_remote_address(request)


limiter = Limiter(key_func=client_key, enabled=settings.rate_limit_enabled)


def rate_limit(limit: str | None = None):
    """Per-client limit for AI-backed routes; ``limit`` overrides ``RATE_LIMIT``."""
    if not settings.rate_limit_enabled:

        def decorator(func):
            return func

        return decorator

    return limiter.limit(limit or settings.rate_limit)
