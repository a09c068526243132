"""Subject like/dislike ledger."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

from electivas.domain import keys
from electivas.domain.identity import IdentitySignals, current_vote
from electivas.domain.models import SubjectTally, VoteOutcome, VoteResult, VoteType
from electivas.infra.kv import KeyValueStore, decrement_floor, get_int
from electivas.obs import metrics as obs_metrics

logger = logging.getLogger(__name__)


def _now_ms() -> int:
	return int(time.time() * 1000)


def _counter_key(subject_id: str, vote: VoteType) -> str:
	if vote is VoteType.LIKE:
		return keys.subject_likes(subject_id)
	return keys.subject_dislikes(subject_id)


@dataclass
class VoteLedger:
	"""Aggregate counters plus per-signal vote records for each subject.

	Aggregates only move through INCR/DECR. The cookie record lives on the
	client, so :meth:`vote` returns the value the web layer has to write (or
	clear when ``result.vote`` is ``None``).
	"""

	store: KeyValueStore
	clock: Callable[[], int] = _now_ms

	async def tally(self, subject_id: str) -> SubjectTally:
		likes = await get_int(self.store, keys.subject_likes(subject_id))
		dislikes = await get_int(self.store, keys.subject_dislikes(subject_id))
		return SubjectTally(likes=max(0, likes), dislikes=max(0, dislikes))

	async def current_vote(self, subject_id: str, identity: IdentitySignals) -> Optional[VoteType]:
		return await current_vote(self.store, subject_id, identity)

	async def vote(self, subject_id: str, vote_type: VoteType, identity: IdentitySignals) -> VoteResult:
		vote_type = VoteType(vote_type)
		previous = await self.current_vote(subject_id, identity)

		if previous is vote_type:
			await decrement_floor(self.store, _counter_key(subject_id, vote_type))
			await self._clear_records(subject_id, identity)
			outcome = VoteOutcome.REMOVED
			new_vote: Optional[VoteType] = None
		elif previous is not None:
			await self.store.increment(_counter_key(subject_id, vote_type))
			await decrement_floor(self.store, _counter_key(subject_id, previous))
			await self._write_records(subject_id, vote_type, identity)
			outcome = VoteOutcome.CHANGED
			new_vote = vote_type
		else:
			await self.store.increment(_counter_key(subject_id, vote_type))
			await self._write_records(subject_id, vote_type, identity)
			outcome = VoteOutcome.CREATED
			new_vote = vote_type

		obs_metrics.inc_vote(outcome.value, vote_type.value)
		logger.info(
			"subject_vote",
			extra={"subject_id": subject_id, "outcome": outcome.value, "vote": vote_type.value},
		)
		return VoteResult(
			outcome=outcome,
			vote=new_vote,
			previous=previous,
			tally=await self.tally(subject_id),
		)

	async def reset(self, subject_id: str) -> SubjectTally:
		await self.store.set(keys.subject_likes(subject_id), 0)
		await self.store.set(keys.subject_dislikes(subject_id), 0)
		logger.info("subject_votes_reset", extra={"subject_id": subject_id})
		return SubjectTally()

	async def _write_records(self, subject_id: str, vote: VoteType, identity: IdentitySignals) -> None:
		now = self.clock()
		if identity.ip:
			await self.store.set(keys.ip_vote(identity.ip, subject_id), vote.value)
			await self.store.increment(keys.ip_stats(identity.ip))
			await self.store.set(keys.ip_last_seen(identity.ip), now)
		if identity.fingerprint:
			await self.store.set(keys.fp_vote(identity.fingerprint, subject_id), vote.value)
			await self.store.increment(keys.fp_stats(identity.fingerprint))
			await self.store.set(keys.fp_last_seen(identity.fingerprint), now)

	async def _clear_records(self, subject_id: str, identity: IdentitySignals) -> None:
		if identity.ip:
			await self.store.set(keys.ip_vote(identity.ip, subject_id), None)
		if identity.fingerprint:
			await self.store.set(keys.fp_vote(identity.fingerprint, subject_id), None)
