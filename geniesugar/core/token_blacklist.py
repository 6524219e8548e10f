"""Session token revocation backed by Redis.

Logout stores the token's ``jti`` under a key that expires when the token
itself would, so the set only ever holds still-valid revoked tokens.

Lookups fail open: if Redis is unreachable the token is allowed and the
outage is logged, so a cache failure does not log every user out.

With ``settings.testing`` the revocations are kept in process memory so
the logout path runs without a Redis server.
"""

import time
from datetime import UTC, datetime

import redis.asyncio as aioredis

from geniesugar.config import settings
from geniesugar.core.security import decode_access_token
from geniesugar.logging_config import get_logger

logger = get_logger(__name__)

_KEY_PREFIX = "geniesugar:revoked:"

_redis_client: aioredis.Redis | None = None

# jti -> monotonic expiry, used only when settings.testing is set
_revoked_in_process: dict[str, float] = {}


def _get_redis() -> aioredis.Redis:
    global _redis_client
    if _redis_client is None:
        _redis_client = aioredis.from_url(
            settings.redis_url,
            decode_responses=True,
            socket_connect_timeout=2,
            socket_timeout=2,
        )
    return _redis_client


async def revoke_token(jti: str, ttl_seconds: int) -> None:
    """Mark ``jti`` as revoked for ``ttl_seconds`` (at least one second)."""
    ttl_seconds = max(1, ttl_seconds)

    if settings.testing:
        _revoked_in_process[jti] = time.monotonic() + ttl_seconds
        return

    try:
        await _get_redis().setex(f"{_KEY_PREFIX}{jti}", ttl_seconds, "1")
    except aioredis.RedisError as e:
        logger.error("Failed to revoke session token", jti=jti, error=str(e))


async def is_token_revoked(jti: str) -> bool:
    """Return True if ``jti`` was revoked and has not yet expired."""
    if settings.testing:
        expires = _revoked_in_process.get(jti)
        if expires is None:
            return False
        if time.monotonic() > expires:
            del _revoked_in_process[jti]
            return False
        return True

    try:
        return bool(await _get_redis().exists(f"{_KEY_PREFIX}{jti}"))
    except aioredis.RedisError as e:
        logger.error(
            "Revocation lookup failed, allowing token",
            jti=jti,
            error=str(e),
        )
        return False


async def revoke_session_token(token: str) -> bool:
    """Revoke a raw session token for the rest of its lifetime.

    Returns:
        False if the token is invalid, expired or carries no ``jti``.
    """
    payload = decode_access_token(token)
    if not payload or not payload.get("jti"):
        return False

    remaining = int(payload["exp"] - datetime.now(UTC).timestamp())
    if remaining <= 0:
        return False

    await revoke_token(payload["jti"], remaining)
    return True
