import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from electivas.domain.exceptions import StoreError
from electivas.infra.kv import RedisKeyValueStore, decrement_floor, get_int
from electivas.infra.redis import redis_client


class _BrokenRedis:
	async def get(self, key):
		raise RedisConnectionError("down")

	async def set(self, key, value):
		raise RedisConnectionError("down")

	async def delete(self, key):
		raise RedisConnectionError("down")

	async def incr(self, key):
		raise RedisConnectionError("down")

	async def decr(self, key):
		raise RedisConnectionError("down")


@pytest.mark.asyncio
async def test_values_are_json_encoded(store):
	await store.set("ip-vote:1.2.3.4:81.57", "like")
	await store.set("blocked-ip:1.2.3.4", True)
	await store.set("subject:81.57:comments", [{"id": "c1", "likes": 2}])

	assert await redis_client.get("ip-vote:1.2.3.4:81.57") == '"like"'
	assert await store.get("ip-vote:1.2.3.4:81.57") == "like"
	assert await store.get("blocked-ip:1.2.3.4") is True
	assert await store.get("subject:81.57:comments") == [{"id": "c1", "likes": 2}]


@pytest.mark.asyncio
async def test_missing_key_reads_none(store):
	assert await store.get("subject:nope:likes") is None


@pytest.mark.asyncio
async def test_set_none_deletes(store):
	await store.set("fp-vote:abc:81.57", "dislike")
	await store.set("fp-vote:abc:81.57", None)
	assert await redis_client.exists("fp-vote:abc:81.57") == 0
	assert await store.get("fp-vote:abc:81.57") is None


@pytest.mark.asyncio
async def test_bare_strings_from_other_writers_are_returned_raw(store):
	await redis_client.set("fp-last-seen:abc", "not json")
	assert await store.get("fp-last-seen:abc") == "not json"


@pytest.mark.asyncio
async def test_counters_round_trip_as_ints(store):
	assert await store.increment("subject:81.57:likes") == 1
	assert await store.increment("subject:81.57:likes") == 2
	assert await store.decrement("subject:81.57:likes") == 1
	assert await store.get("subject:81.57:likes") == 1
	assert await get_int(store, "subject:81.57:likes") == 1
	assert await get_int(store, "subject:81.57:dislikes") == 0


@pytest.mark.asyncio
async def test_decrement_floor_clamps_at_zero(store):
	assert await decrement_floor(store, "subject:81.57:dislikes") == 0
	assert await store.get("subject:81.57:dislikes") == 0

	await store.increment("subject:81.57:dislikes")
	assert await decrement_floor(store, "subject:81.57:dislikes") == 0
	assert await decrement_floor(store, "subject:81.57:dislikes") == 0


@pytest.mark.asyncio
async def test_redis_failures_surface_as_store_errors():
	broken = RedisKeyValueStore(redis=_BrokenRedis())  # type: ignore[arg-type]
	with pytest.raises(StoreError):
		await broken.get("k")
	with pytest.raises(StoreError):
		await broken.set("k", 1)
	with pytest.raises(StoreError):
		await broken.set("k", None)
	with pytest.raises(StoreError):
		await broken.increment("k")
	with pytest.raises(StoreError):
		await broken.decrement("k")
