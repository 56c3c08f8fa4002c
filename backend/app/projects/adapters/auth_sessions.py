from __future__ import annotations

import logging
from typing import Any

from redis.exceptions import RedisError

from app.config import settings
from app.projects.domain.models import Identity

logger = logging.getLogger(__name__)


def make_session_key(access_token: str, prefix: str | None = None) -> str:
    return f"{prefix if prefix is not None else settings.auth_session_prefix}{access_token}"


def parse_bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    scheme, _, token = authorization.strip().partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


class AuthSessionStore:
    """Maps access tokens to user ids stored in Redis by the auth service."""

    def __init__(self, redis_client: Any, prefix: str | None = None) -> None:
        self._redis = redis_client
        self._prefix = prefix

    def resolve(self, access_token: str | None) -> Identity | None:
        if not access_token or self._redis is None:
            return None
        try:
            raw = self._redis.get(make_session_key(access_token, self._prefix))
        except RedisError as exc:
            logger.warning("session lookup failed: %s", exc)
            return None
        if isinstance(raw, bytes):
            raw = raw.decode("utf-8")
        if not raw or not str(raw).strip():
            return None
        return Identity(user_id=str(raw).strip())
