"""Central registry for Prometheus metrics used across the backend."""

from __future__ import annotations

from prometheus_client import Counter, Gauge, Histogram, Summary


REQUEST_COUNTER = Counter(
	"electivas_http_requests_total",
	"Total HTTP requests processed",
	["route", "method", "status"],
)

REQUEST_LATENCY = Histogram(
	"electivas_http_request_duration_seconds",
	"HTTP request latency in seconds",
	["route", "method"],
	buckets=(0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.0, 5.0),
)

VOTES = Counter(
	"electivas_subject_votes_total",
	"Subject vote transitions",
	["outcome", "vote"],
)

COMMENTS_CREATED = Counter(
	"electivas_comments_created_total",
	"Comments stored",
)

COMMENTS_RATE_LIMITED = Counter(
	"electivas_comments_rate_limited_total",
	"Comment submissions rejected by the per-subject cap",
	["signal"],
)

REPORTS = Counter(
	"electivas_comment_reports_total",
	"Comment reports accepted",
)

COMMENTS_HIDDEN = Counter(
	"electivas_comments_hidden_total",
	"Comments hidden after reaching the report threshold",
)

BLOCK_CHANGES = Counter(
	"electivas_block_changes_total",
	"Admin block list changes",
	["kind", "action"],
)

BLOCKED_REQUESTS = Counter(
	"electivas_blocked_requests_total",
	"Mutating requests rejected for a blocked IP or fingerprint",
)

CATALOG_FETCHES = Counter(
	"electivas_catalog_fetches_total",
	"Upstream subject catalog fetches",
	["result"],
)

REDIS_UP = Gauge("electivas_redis_up", "Redis availability (1=up,0=down)")
REDIS_LATENCY = Summary("electivas_redis_latency_seconds", "Redis ping latency (seconds)")


def observe_request(route: str, method: str, status: int, elapsed_seconds: float) -> None:
	REQUEST_COUNTER.labels(route=route, method=method, status=str(status)).inc()
	REQUEST_LATENCY.labels(route=route, method=method).observe(elapsed_seconds)


def inc_vote(outcome: str, vote: str) -> None:
	VOTES.labels(outcome=outcome, vote=vote).inc()


def inc_comment_created() -> None:
	COMMENTS_CREATED.inc()


def inc_rate_limited(signal: str) -> None:
	COMMENTS_RATE_LIMITED.labels(signal=signal).inc()


def inc_report() -> None:
	REPORTS.inc()


def inc_comment_hidden() -> None:
	COMMENTS_HIDDEN.inc()


def inc_block_change(kind: str, action: str) -> None:
	BLOCK_CHANGES.labels(kind=kind, action=action).inc()


def inc_blocked_request() -> None:
	BLOCKED_REQUESTS.inc()


def inc_catalog_fetch(result: str) -> None:
	CATALOG_FETCHES.labels(result=result).inc()


def mark_redis(ok: bool, *, latency_seconds: float | None = None) -> None:
	REDIS_UP.set(1 if ok else 0)
	if latency_seconds is not None:
		REDIS_LATENCY.observe(latency_seconds)
