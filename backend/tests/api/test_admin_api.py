import pytest

ADMIN_HEADERS = {"X-Admin-Secret": "test-admin-secret"}
SUBJECT = "81.57"


async def _admin(api_client, **payload):
	return await api_client.post("/api/admin", json=payload, headers=ADMIN_HEADERS)


@pytest.mark.asyncio
async def test_admin_requires_secret(api_client):
	missing = await api_client.post("/api/admin", json={"action": "check_status", "ip": "1.1.1.1"})
	assert missing.status_code == 401
	assert missing.json()["detail"] == "unauthorized"

	wrong = await api_client.post(
		"/api/admin",
		json={"action": "check_status", "ip": "1.1.1.1"},
		headers={"X-Admin-Secret": "nope"},
	)
	assert wrong.status_code == 401


@pytest.mark.asyncio
async def test_admin_fails_closed_without_configured_secret(api_client):
	from electivas.settings import settings

	settings.admin_secret_key = None
	response = await _admin(api_client, action="check_status", ip="1.1.1.1")
	assert response.status_code == 401


@pytest.mark.asyncio
async def test_block_unblock_and_status(api_client):
	blocked = await _admin(api_client, action="block_ip", ip="1.1.1.1")
	assert blocked.status_code == 200
	assert blocked.json()["success"] is True

	await _admin(api_client, action="block_fingerprint", fingerprint="fp-1")
	status = (await _admin(api_client, action="check_status", ip="1.1.1.1", fingerprint="fp-1")).json()
	assert status == {"ip": "1.1.1.1", "fingerprint": "fp-1", "ipBlocked": True, "fingerprintBlocked": True}

	await _admin(api_client, action="unblock_ip", ip="1.1.1.1")
	await _admin(api_client, action="unblock_fingerprint", fingerprint="fp-1")
	status = (await _admin(api_client, action="check_status", ip="1.1.1.1", fingerprint="fp-1")).json()
	assert status["ipBlocked"] is False
	assert status["fingerprintBlocked"] is False


@pytest.mark.asyncio
async def test_missing_parameters_and_unknown_action(api_client):
	no_ip = await _admin(api_client, action="block_ip")
	assert no_ip.status_code == 400
	assert no_ip.json()["detail"] == "ip_required"

	no_fp = await _admin(api_client, action="unblock_fingerprint")
	assert no_fp.json()["detail"] == "fingerprint_required"

	no_subject = await _admin(api_client, action="get_analytics")
	assert no_subject.json()["detail"] == "subject_id_required"

	unknown = await _admin(api_client, action="drop_everything")
	assert unknown.status_code == 400
	assert unknown.json()["detail"] == "invalid_action"


@pytest.mark.asyncio
async def test_analytics_and_comment_listing(api_client):
	for n in range(4):
		response = await api_client.post(
			f"/subjects/{SUBJECT}/comments",
			json={"text": f"Comentario numero {n} " + "x" * 120},
			headers={"X-Fingerprint": f"fp-{n}", "X-Forwarded-For": "198.51.100.7"},
		)
		assert response.status_code == 201

	analytics = (await _admin(api_client, action="get_analytics", subjectId=SUBJECT)).json()
	assert analytics["totalComments"] == 4
	assert analytics["uniqueIps"] == 1
	assert analytics["uniqueFingerprints"] == 4
	assert analytics["suspiciousPatterns"]["sameIpMultipleFingerprints"] == ["198.51.100.7"]

	listing = (await _admin(api_client, action="get_comments", subjectId=SUBJECT)).json()
	assert listing["subjectId"] == SUBJECT
	assert len(listing["comments"]) == 4
	first = listing["comments"][0]
	assert first["text"].endswith("...")
	assert len(first["text"]) == 103
	assert first["ip"] == "198.51.100.7"
	assert first["fingerprint"] == "fp-0"


@pytest.mark.asyncio
async def test_reset_votes(api_client):
	await api_client.post(f"/subjects/{SUBJECT}/vote", json={"vote": "like"}, headers={"X-Fingerprint": "fp-1"})
	await api_client.post(f"/subjects/{SUBJECT}/vote", json={"vote": "dislike"}, headers={"X-Fingerprint": "fp-2"})

	response = await _admin(api_client, action="reset_votes", subjectId=SUBJECT)

	assert response.status_code == 200
	assert response.json()["likes"] == 0
	tally = (await api_client.get(f"/subjects/{SUBJECT}/votes")).json()
	assert tally == {"likes": 0, "dislikes": 0}
