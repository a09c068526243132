import pytest

from electivas.domain import keys
from electivas.domain.exceptions import RateLimitError
from electivas.domain.identity import IdentitySignals
from electivas.domain.rate_limit import CommentRateLimiter
from electivas.obs import metrics

SUBJECT = "81.57"


@pytest.mark.asyncio
async def test_fingerprint_gets_the_strict_cap(store):
	limiter = CommentRateLimiter(store=store, fingerprint_limit=2, ip_limit=20)
	identity = IdentitySignals(ip="10.0.0.1", fingerprint="fp-1")

	for _ in range(2):
		await limiter.ensure_can_comment(SUBJECT, identity)
		await limiter.record_comment(SUBJECT, identity)

	assert not await limiter.can_comment(SUBJECT, identity)
	before = metrics.COMMENTS_RATE_LIMITED.labels(signal="fingerprint")._value.get()
	with pytest.raises(RateLimitError) as excinfo:
		await limiter.ensure_can_comment(SUBJECT, identity)
	assert excinfo.value.reason == "comment_limit_reached"
	assert metrics.COMMENTS_RATE_LIMITED.labels(signal="fingerprint")._value.get() == before + 1


@pytest.mark.asyncio
async def test_new_fingerprint_on_same_ip_can_still_comment(store):
	limiter = CommentRateLimiter(store=store, fingerprint_limit=2, ip_limit=20)
	first = IdentitySignals(ip="10.0.0.1", fingerprint="fp-1")
	for _ in range(2):
		await limiter.record_comment(SUBJECT, first)

	assert await limiter.can_comment(SUBJECT, IdentitySignals(ip="10.0.0.1", fingerprint="fp-2"))


@pytest.mark.asyncio
async def test_ip_only_traffic_uses_the_looser_cap(store):
	limiter = CommentRateLimiter(store=store, fingerprint_limit=2, ip_limit=3)
	identity = IdentitySignals(ip="10.0.0.1")

	for _ in range(3):
		assert await limiter.can_comment(SUBJECT, identity)
		await limiter.record_comment(SUBJECT, identity)

	with pytest.raises(RateLimitError):
		await limiter.ensure_can_comment(SUBJECT, identity)


@pytest.mark.asyncio
async def test_caps_are_per_subject(store):
	limiter = CommentRateLimiter(store=store, fingerprint_limit=1)
	identity = IdentitySignals(fingerprint="fp-1")
	await limiter.record_comment(SUBJECT, identity)

	assert not await limiter.can_comment(SUBJECT, identity)
	assert await limiter.can_comment("72.99", identity)


@pytest.mark.asyncio
async def test_recording_bumps_subject_and_global_counters(store):
	limiter = CommentRateLimiter(store=store)
	identity = IdentitySignals(ip="10.0.0.1", fingerprint="fp-1")

	await limiter.record_comment(SUBJECT, identity)
	await limiter.record_comment("72.99", identity)

	assert await store.get(keys.fp_comment_count("fp-1", SUBJECT)) == 1
	assert await store.get(keys.ip_comment_count("10.0.0.1", SUBJECT)) == 1
	assert await store.get(keys.fp_comment_count("fp-1")) == 2
	assert await store.get(keys.ip_comment_count("10.0.0.1")) == 2


@pytest.mark.asyncio
async def test_no_signals_is_not_gated(store):
	limiter = CommentRateLimiter(store=store, fingerprint_limit=1, ip_limit=1)
	identity = IdentitySignals()
	assert identity.is_anonymous
	await limiter.record_comment(SUBJECT, identity)
	await limiter.ensure_can_comment(SUBJECT, identity)
	assert await limiter.count_for(SUBJECT, identity) is None
