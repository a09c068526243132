"""Entry points the web layer calls with already-resolved identity signals.

Every mutating call checks the block list first. The components themselves
never call each other; they only share the key-value store.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from electivas.domain.analytics import comment_analytics, comment_preview
from electivas.domain.blocklist import BlockList
from electivas.domain.comments import CommentStore
from electivas.domain.identity import IdentitySignals
from electivas.domain.models import (
	Comment,
	CommentAnalytics,
	CommentLikeResult,
	ReportResult,
	SubjectTally,
	VoteResult,
	VoteType,
)
from electivas.domain.rate_limit import CommentRateLimiter
from electivas.domain.reports import ReportModerator
from electivas.domain.votes import VoteLedger

logger = logging.getLogger(__name__)


@dataclass
class ReviewService:
	votes: VoteLedger
	limiter: CommentRateLimiter
	comments: CommentStore
	reports: ReportModerator
	blocklist: BlockList

	# --- Mutations -------------------------------------------------------

	async def vote(self, subject_id: str, vote_type: VoteType, identity: IdentitySignals) -> VoteResult:
		await self.blocklist.ensure_not_blocked(identity)
		return await self.votes.vote(subject_id, vote_type, identity)

	async def add_comment(self, subject_id: str, text: Optional[str], identity: IdentitySignals) -> Comment:
		await self.blocklist.ensure_not_blocked(identity)
		self.comments.validate(text)
		await self.limiter.ensure_can_comment(subject_id, identity)
		comment = await self.comments.add_comment(subject_id, text, identity)
		await self.limiter.record_comment(subject_id, identity)
		return comment

	async def toggle_comment_like(
		self,
		subject_id: str,
		comment_id: str,
		identity: IdentitySignals,
		*,
		already_liked: bool,
	) -> CommentLikeResult:
		await self.blocklist.ensure_not_blocked(identity)
		return await self.comments.toggle_like(subject_id, comment_id, already_liked)

	async def report_comment(self, subject_id: str, comment_id: str, identity: IdentitySignals) -> ReportResult:
		await self.blocklist.ensure_not_blocked(identity)
		return await self.reports.report(subject_id, comment_id, identity)

	# --- Reads -----------------------------------------------------------

	async def tally(self, subject_id: str) -> SubjectTally:
		return await self.votes.tally(subject_id)

	async def current_vote(self, subject_id: str, identity: IdentitySignals) -> Optional[VoteType]:
		return await self.votes.current_vote(subject_id, identity)

	async def list_comments(self, subject_id: str) -> list[Comment]:
		return await self.comments.list_comments(subject_id)

	async def visible_comment_count(self, subject_id: str) -> int:
		return await self.comments.visible_count(subject_id)

	# --- Admin -----------------------------------------------------------

	async def reset_votes(self, subject_id: str) -> SubjectTally:
		return await self.votes.reset(subject_id)

	async def analytics(self, subject_id: str) -> CommentAnalytics:
		return comment_analytics(await self.comments.list_comments(subject_id))

	async def comment_previews(self, subject_id: str) -> list[dict]:
		return [comment_preview(comment) for comment in await self.comments.list_comments(subject_id)]
