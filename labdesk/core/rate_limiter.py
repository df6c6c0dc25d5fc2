# labdesk/core/rate_limiter.py

from slowapi import Limiter
from slowapi.util import get_remote_address
from loguru import logger

from labdesk.core.config import settings

# Public auth endpoints (login / register)
AUTH_RATE_LIMIT = "10/minute"


# ----------------------------------------------------------------
# 1. CLIENT IP (behind the reverse proxy)
# ----------------------------------------------------------------
def get_real_ip(request) -> str:
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        # Leftmost entry is the client
        return forwarded.split(",")[0].strip()

    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip

    return get_remote_address(request)


# ----------------------------------------------------------------
# 2. STORAGE
# ----------------------------------------------------------------
def storage_uri(redis_url: str | None, env: str) -> str | None:
    """Managed Redis in prod only accepts TLS, so redis:// becomes rediss://."""
    if not redis_url:
        return None
    if env == "prod" and redis_url.startswith("redis://"):
        return redis_url.replace("redis://", "rediss://", 1)
    return redis_url


def build_limiter() -> Limiter:
    uri = storage_uri(settings.REDIS_URL, settings.ENV)
    if not uri:
        logger.warning("REDIS_URL not set. Using in-memory rate limiting.")
        return Limiter(key_func=get_real_ip, enabled=settings.RATE_LIMIT_ENABLED)

    try:
        logger.info("Initializing rate limiter with Redis storage")
        return Limiter(
            key_func=get_real_ip,
            storage_uri=uri,
            strategy="fixed-window",
            storage_options={"socket_connect_timeout": 5, "retry_on_timeout": True},
            enabled=settings.RATE_LIMIT_ENABLED,
        )
    except Exception as e:
        # The API stays up on in-memory limits
        logger.error(f"Failed to connect to Redis for rate limiting: {e}")
        return Limiter(key_func=get_real_ip, enabled=settings.RATE_LIMIT_ENABLED)


limiter = build_limiter()
