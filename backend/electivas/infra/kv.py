"""Key-value store seam used by every review component.

Values are JSON encoded so dumps written by the previous deployment (which
stored JSON strings through ioredis) stay readable. Counters are plain Redis
integers, which JSON decodes back to ``int``.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Protocol

from redis.exceptions import RedisError

from electivas.domain.exceptions import StoreError
from electivas.infra.redis import RedisProxy, redis_client

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
	"""Minimal async store interface: get/set/increment/decrement."""

	async def get(self, key: str) -> Any | None:
		...

	async def set(self, key: str, value: Any) -> None:
		...

	async def increment(self, key: str) -> int:
		...

	async def decrement(self, key: str) -> int:
		...


class RedisKeyValueStore:
	"""KeyValueStore backed by Redis.

	``set(key, None)`` deletes the key, so absent and explicitly cleared
	entries read back the same way.
	"""

	def __init__(self, redis: RedisProxy | None = None) -> None:
		self._redis = redis or redis_client

	async def get(self, key: str) -> Any | None:
		try:
			raw = await self._redis.get(key)
		except RedisError as exc:
			logger.warning("kv_get_failed", extra={"key": key})
			raise StoreError("get_failed") from exc
		if raw is None or raw == "":
			return None
		if isinstance(raw, bytes):
			raw = raw.decode("utf-8")
		try:
			return json.loads(raw)
		except json.JSONDecodeError:
			# Bare strings written by other clients
			return raw

	async def set(self, key: str, value: Any) -> None:
		try:
			if value is None:
				await self._redis.delete(key)
			else:
				await self._redis.set(key, json.dumps(value, separators=(",", ":")))
		except RedisError as exc:
			logger.warning("kv_set_failed", extra={"key": key})
			raise StoreError("set_failed") from exc

	async def increment(self, key: str) -> int:
		try:
			return int(await self._redis.incr(key))
		except RedisError as exc:
			logger.warning("kv_incr_failed", extra={"key": key})
			raise StoreError("increment_failed") from exc

	async def decrement(self, key: str) -> int:
		try:
			return int(await self._redis.decr(key))
		except RedisError as exc:
			logger.warning("kv_decr_failed", extra={"key": key})
			raise StoreError("decrement_failed") from exc


async def get_int(store: KeyValueStore, key: str) -> int:
	value = await store.get(key)
	if value is None:
		return 0
	try:
		return int(value)
	except (TypeError, ValueError):
		return 0


async def decrement_floor(store: KeyValueStore, key: str) -> int:
	"""Decrement a counter without letting it settle below zero."""
	value = await store.decrement(key)
	if value < 0:
		await store.set(key, 0)
		return 0
	return value
