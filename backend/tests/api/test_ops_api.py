import pytest

from electivas.obs import metrics
from electivas.settings import settings


@pytest.mark.asyncio
async def test_health_pings_store(api_client):
	response = await api_client.get("/health")
	assert response.status_code == 200
	body = response.json()
	assert body["status"] == "ok"
	assert body["checks"]["redis"]["ok"] is True


@pytest.mark.asyncio
async def test_liveness(api_client):
	response = await api_client.get("/health/live")
	assert response.json() == {"status": "ok"}


@pytest.mark.asyncio
async def test_request_id_is_echoed(api_client):
	response = await api_client.get("/health/live", headers={"X-Request-Id": "rid-123"})
	assert response.headers["X-Request-Id"] == "rid-123"


@pytest.mark.asyncio
async def test_metrics_require_admin_secret(api_client):
	denied = await api_client.get("/metrics")
	assert denied.status_code == 401

	allowed = await api_client.get("/metrics", headers={"X-Admin-Secret": "test-admin-secret"})
	assert allowed.status_code == 200
	assert "electivas_subject_votes_total" in allowed.text


@pytest.mark.asyncio
async def test_public_metrics(api_client):
	settings.obs_metrics_public = True
	response = await api_client.get("/metrics")
	assert response.status_code == 200


@pytest.mark.asyncio
async def test_vote_increments_counter(api_client):
	before = metrics.VOTES.labels(outcome="created", vote="like")._value.get()
	await api_client.post("/subjects/81.57/vote", json={"vote": "like"}, headers={"X-Fingerprint": "fp-m"})
	after = metrics.VOTES.labels(outcome="created", vote="like")._value.get()
	assert after == before + 1
