# backend/storefront/redis_client.py

from redis import Redis

REDIS_SOCKET_TIMEOUT = 2.0


def create_redis_client(url: str) -> Redis:
    return Redis.from_url(url, socket_timeout=REDIS_SOCKET_TIMEOUT)
