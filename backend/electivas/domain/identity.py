"""Voter identity signals and current-vote resolution.

Three weak signals identify a voter: the per-subject vote cookie, the client
IP and an opaque browser fingerprint. Fingerprint wins over the cookie when
deciding the current vote. The IP vote is recorded for analytics and as the
comment rate-limit fallback but never decides the current vote, since whole
campuses share a handful of addresses.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from electivas.domain import keys
from electivas.domain.models import VoteType
from electivas.infra.kv import KeyValueStore


@dataclass(frozen=True, slots=True)
class IdentitySignals:
	ip: Optional[str] = None
	fingerprint: Optional[str] = None
	cookie_vote: Optional[VoteType] = None

	def __post_init__(self) -> None:
		object.__setattr__(self, "ip", _clean(self.ip))
		object.__setattr__(self, "fingerprint", _clean(self.fingerprint))
		object.__setattr__(self, "cookie_vote", VoteType.parse(self.cookie_vote) if self.cookie_vote else None)

	@property
	def is_anonymous(self) -> bool:
		return self.ip is None and self.fingerprint is None


def _clean(value: Optional[str]) -> Optional[str]:
	if value is None:
		return None
	text = str(value).strip()
	return text or None


def resolve_current_vote(
	fingerprint_vote: Optional[VoteType],
	cookie_vote: Optional[VoteType],
) -> Optional[VoteType]:
	"""Fingerprint first, then cookie. IP votes are deliberately not an input."""
	if fingerprint_vote is not None:
		return fingerprint_vote
	return cookie_vote


async def current_vote(store: KeyValueStore, subject_id: str, identity: IdentitySignals) -> Optional[VoteType]:
	fingerprint_vote: Optional[VoteType] = None
	if identity.fingerprint:
		fingerprint_vote = VoteType.parse(await store.get(keys.fp_vote(identity.fingerprint, subject_id)))
	return resolve_current_vote(fingerprint_vote, identity.cookie_vote)
