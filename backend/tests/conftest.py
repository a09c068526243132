import sys
from pathlib import Path

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from fakeredis.aioredis import FakeRedis

# Ensure backend package is importable when tests run from repo root
BACKEND_ROOT = Path(__file__).resolve().parents[1]
if str(BACKEND_ROOT) not in sys.path:
	sys.path.insert(0, str(BACKEND_ROOT))

from electivas.catalog.cache import TTLCache
from electivas.catalog.client import CatalogClient, set_catalog_client
from electivas.domain import container
from electivas.infra.kv import RedisKeyValueStore
from electivas.main import app
from electivas.settings import settings

ADMIN_SECRET = "test-admin-secret"

CATALOG_PAYLOAD = {
	"Electivas": {
		"0": {
			"0": [
				{
					"section": "Electivas",
					"subject_id": "81.57",
					"name": "Blockchain",
					"credits": 3,
					"commissions": [
						{
							"name": "A",
							"schedule": [
								{"day": "MONDAY", "classroom": "101", "building": "SDT", "time_from": "18:00", "time_to": "21:00"}
							],
						}
					],
				},
				{"section": "Electivas", "subject_id": "72.99", "name": "Robotica", "credits": 6},
			]
		}
	},
	"Obligatorias": {"1": {"1": [{"section": "Basicas", "subject_id": "93.58", "name": "Algebra", "credits": 9}]}},
}


@pytest_asyncio.fixture(autouse=True)
async def fake_redis():
	from electivas.infra.redis import redis_client, set_redis_client
	original = redis_client.client
	client = FakeRedis(decode_responses=True)
	set_redis_client(client)
	try:
		yield client
	finally:
		set_redis_client(original)
		await client.flushall()


@pytest.fixture(autouse=True)
def force_test_settings():
	"""Deterministic knobs and a fresh service container per test."""
	original = {
		"admin_secret_key": settings.admin_secret_key,
		"comment_tracking_enabled": settings.comment_tracking_enabled,
		"obs_metrics_public": settings.obs_metrics_public,
		"cookie_secure": settings.cookie_secure,
		"environment": settings.environment,
	}
	settings.admin_secret_key = ADMIN_SECRET
	settings.comment_tracking_enabled = True
	settings.obs_metrics_public = False
	settings.cookie_secure = False
	settings.environment = "dev"
	container.reset()
	try:
		yield
	finally:
		for key, value in original.items():
			setattr(settings, key, value)
		container.reset()


@pytest.fixture
def store():
	return RedisKeyValueStore()


def catalog_transport() -> httpx.MockTransport:
	def handler(request: httpx.Request) -> httpx.Response:
		return httpx.Response(200, json=CATALOG_PAYLOAD)

	return httpx.MockTransport(handler)


@pytest_asyncio.fixture(autouse=True)
async def stub_catalog():
	http = httpx.AsyncClient(transport=catalog_transport())
	client = CatalogClient(http=http, url="https://catalog.test/subjects", cache=TTLCache(3600))
	set_catalog_client(client)
	try:
		yield client
	finally:
		set_catalog_client(None)
		await http.aclose()


@pytest_asyncio.fixture
async def api_client():
	transport = ASGITransport(app=app)
	async with AsyncClient(transport=transport, base_url="http://testserver") as client:
		yield client
