"""Lightweight service container shared by the API modules."""

from __future__ import annotations

from typing import Optional

from electivas.domain.blocklist import BlockList
from electivas.domain.comments import CommentStore
from electivas.domain.rate_limit import CommentRateLimiter
from electivas.domain.reports import ReportModerator
from electivas.domain.service import ReviewService
from electivas.domain.votes import VoteLedger
from electivas.infra.kv import KeyValueStore, RedisKeyValueStore
from electivas.settings import Settings, settings

_service: Optional[ReviewService] = None


def build_review_service(store: KeyValueStore, config: Settings | None = None) -> ReviewService:
	cfg = config or settings
	comments = CommentStore(
		store=store,
		min_length=cfg.comment_min_length,
		max_length=cfg.comment_max_length,
		tracking_enabled=cfg.comment_tracking_enabled,
	)
	return ReviewService(
		votes=VoteLedger(store=store),
		limiter=CommentRateLimiter(
			store=store,
			fingerprint_limit=cfg.comments_per_subject_limit,
			ip_limit=cfg.comments_per_subject_ip_limit,
		),
		comments=comments,
		reports=ReportModerator(store=store, comments=comments, threshold=cfg.report_threshold),
		blocklist=BlockList(store=store),
	)


def configure(store: KeyValueStore | None = None, config: Settings | None = None) -> ReviewService:
	global _service
	_service = build_review_service(store or RedisKeyValueStore(), config)
	return _service


def get_review_service() -> ReviewService:
	if _service is None:
		return configure()
	return _service


def reset() -> None:
	global _service
	_service = None
