"""Shared Redis client.

Modules import ``redis_client`` once; tests swap the client behind it for a
fakeredis instance with :func:`set_redis_client`.
"""

from __future__ import annotations

import redis.asyncio as redis

from electivas.settings import settings


class RedisProxy:
	"""Forwards every attribute to the currently installed client."""

	def __init__(self, client: redis.Redis):
		self._client: redis.Redis = client

	def set_client(self, client: redis.Redis) -> None:
		self._client = client

	@property
	def client(self) -> redis.Redis:
		return self._client

	def __getattr__(self, item):
		return getattr(self._client, item)


# from_url does not connect; the first command does
redis_client: RedisProxy = RedisProxy(redis.from_url(settings.redis_url, decode_responses=True))


def set_redis_client(client: redis.Redis) -> None:
	redis_client.set_client(client)


async def close_redis() -> None:
	await redis_client.client.aclose()
