"""Community reports with threshold-triggered auto-hide."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from electivas.domain import keys
from electivas.domain.comments import CommentStore
from electivas.domain.exceptions import CommentNotFoundError, DuplicateReportError
from electivas.domain.identity import IdentitySignals
from electivas.domain.models import CommentVisibility, ReportResult
from electivas.infra.kv import KeyValueStore, get_int
from electivas.obs import metrics as obs_metrics

logger = logging.getLogger(__name__)


@dataclass
class ReportModerator:
	"""Counts reports per comment and hides the comment at the threshold.

	The report counter is global per comment and keeps growing past the
	threshold. Hiding is one-way; nothing here flips a comment back.
	"""

	store: KeyValueStore
	comments: CommentStore
	threshold: int = 5

	async def has_reported(self, comment_id: str, identity: IdentitySignals) -> bool:
		if identity.fingerprint:
			return bool(await self.store.get(keys.fp_report(identity.fingerprint, comment_id)))
		if identity.ip:
			return bool(await self.store.get(keys.ip_report(identity.ip, comment_id)))
		return False

	async def report_count(self, comment_id: str) -> int:
		return await get_int(self.store, keys.comment_reports(comment_id))

	async def report(self, subject_id: str, comment_id: str, identity: IdentitySignals) -> ReportResult:
		if await self.has_reported(comment_id, identity):
			raise DuplicateReportError()
		comment = await self.comments.get(subject_id, comment_id)
		if comment is None:
			raise CommentNotFoundError()

		reports = await self.store.increment(keys.comment_reports(comment_id))
		if identity.fingerprint:
			await self.store.set(keys.fp_report(identity.fingerprint, comment_id), True)
		if identity.ip:
			await self.store.set(keys.ip_report(identity.ip, comment_id), True)
		obs_metrics.inc_report()

		hidden = False
		if reports >= self.threshold and not comment.hidden:
			hidden = await self.comments.mark_hidden(subject_id, comment_id)
			if hidden:
				obs_metrics.inc_comment_hidden()
				logger.info(
					"comment_hidden",
					extra={"subject_id": subject_id, "comment_id": comment_id, "reports": reports},
				)

		visibility = CommentVisibility.HIDDEN if (hidden or comment.hidden) else CommentVisibility.VISIBLE
		return ReportResult(comment_id=comment_id, reports=reports, hidden=hidden, visibility=visibility)
