"""Per-subject comment caps keyed by fingerprint, falling back to IP."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from electivas.domain import keys
from electivas.domain.exceptions import RateLimitError
from electivas.domain.identity import IdentitySignals
from electivas.infra.kv import KeyValueStore, get_int
from electivas.obs import metrics as obs_metrics

logger = logging.getLogger(__name__)


@dataclass
class CommentRateLimiter:
	"""Counter gates for comment submission.

	A fingerprint is treated as one device and gets the strict cap. IP-only
	traffic gets the looser cap because an address is usually shared. The
	counters only ever grow.
	"""

	store: KeyValueStore
	fingerprint_limit: int = 2
	ip_limit: int = 20

	async def count_for(self, subject_id: str, identity: IdentitySignals) -> tuple[str, int, int] | None:
		"""Return (signal, count, limit) for the gate that applies, if any."""
		if identity.is_anonymous:
			return None
		if identity.fingerprint:
			count = await get_int(self.store, keys.fp_comment_count(identity.fingerprint, subject_id))
			return "fingerprint", count, self.fingerprint_limit
		count = await get_int(self.store, keys.ip_comment_count(identity.ip, subject_id))
		return "ip", count, self.ip_limit

	async def can_comment(self, subject_id: str, identity: IdentitySignals) -> bool:
		gate = await self.count_for(subject_id, identity)
		if gate is None:
			return True
		_, count, limit = gate
		return count < limit

	async def ensure_can_comment(self, subject_id: str, identity: IdentitySignals) -> None:
		gate = await self.count_for(subject_id, identity)
		if gate is None:
			return
		signal, count, limit = gate
		if count >= limit:
			obs_metrics.inc_rate_limited(signal)
			logger.info(
				"comment_rate_limited",
				extra={"subject_id": subject_id, "signal": signal, "count": count, "limit": limit},
			)
			raise RateLimitError()

	async def record_comment(self, subject_id: str, identity: IdentitySignals) -> None:
		"""Bump every present signal after a comment was stored."""
		if identity.fingerprint:
			await self.store.increment(keys.fp_comment_count(identity.fingerprint, subject_id))
			await self.store.increment(keys.fp_comment_count(identity.fingerprint))
		if identity.ip:
			await self.store.increment(keys.ip_comment_count(identity.ip, subject_id))
			await self.store.increment(keys.ip_comment_count(identity.ip))
