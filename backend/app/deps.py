# backend/app/deps.py
from functools import lru_cache

import redis
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine

from app.config import settings


@lru_cache
def get_engine() -> Engine:
    if not settings.database_url:
        raise RuntimeError("DATABASE_URL is not set")
    return create_engine(settings.database_url, pool_pre_ping=True)


@lru_cache
def get_redis() -> redis.Redis:
    # session tokens are stored as plain strings, decode on read
    return redis.Redis.from_url(settings.redis_url, decode_responses=True)
