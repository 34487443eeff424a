"""Rate limiting using SlowAPI."""

from slowapi import Limiter
from slowapi.util import get_remote_address

from src.config import get_settings

settings = get_settings()


limiter = Limiter(
    key_func=get_remote_address,
    storage_uri=settings.rate_limit_storage_uri,
    strategy="fixed-window",
)


def rate_limit_writes():
    """Rate limit for endpoints that create or modify records."""
    return limiter.limit(f"{settings.rate_limit_per_minute}/minute")
