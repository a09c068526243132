"""Per-subject comment lists.

Each subject keeps its comments as one JSON list under
``subject:{id}:comments``. Every write reads the whole list, mutates it and
writes it back, so two concurrent writers on the same subject can lose one
update. All list access goes through :class:`CommentStore` so the storage
layout can change without touching callers.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional
from uuid import uuid4

from electivas.domain import keys
from electivas.domain.exceptions import CommentEmpty, CommentNotFoundError, CommentTooLong, CommentTooShort
from electivas.domain.identity import IdentitySignals
from electivas.domain.models import Comment, CommentLikeResult
from electivas.infra.kv import KeyValueStore, decrement_floor, get_int
from electivas.obs import metrics as obs_metrics

logger = logging.getLogger(__name__)


def _now_ms() -> int:
	return int(time.time() * 1000)


def _new_id() -> str:
	return str(uuid4())


@dataclass
class CommentStore:
	store: KeyValueStore
	min_length: int = 10
	max_length: int = 3000
	tracking_enabled: bool = False
	clock: Callable[[], int] = _now_ms
	id_factory: Callable[[], str] = _new_id

	def validate(self, text: Optional[str]) -> str:
		"""Return the trimmed text or raise a ValidationError subclass."""
		trimmed = (text or "").strip()
		if not trimmed:
			raise CommentEmpty()
		if len(trimmed) < self.min_length:
			raise CommentTooShort()
		if len(trimmed) > self.max_length:
			raise CommentTooLong()
		return trimmed

	async def list_comments(self, subject_id: str) -> list[Comment]:
		records = await self.store.get(keys.subject_comments(subject_id))
		if not isinstance(records, list):
			return []
		return [Comment.from_record(record) for record in records if isinstance(record, dict) and "id" in record]

	async def get(self, subject_id: str, comment_id: str) -> Optional[Comment]:
		return _find(await self.list_comments(subject_id), comment_id)

	async def visible_count(self, subject_id: str) -> int:
		return max(0, await get_int(self.store, keys.subject_visible_comment_count(subject_id)))

	async def add_comment(self, subject_id: str, text: Optional[str], identity: IdentitySignals) -> Comment:
		trimmed = self.validate(text)
		comment = Comment(
			id=self.id_factory(),
			subject_id=subject_id,
			text=trimmed,
			timestamp=self.clock(),
			likes=0,
			hidden=False,
		)
		if self.tracking_enabled:
			comment.ip = identity.ip
			comment.fingerprint = identity.fingerprint
		comments = await self.list_comments(subject_id)
		comments.append(comment)
		await self._save(subject_id, comments)
		await self.store.increment(keys.subject_visible_comment_count(subject_id))
		obs_metrics.inc_comment_created()
		logger.info("comment_created", extra={"subject_id": subject_id, "comment_id": comment.id})
		return comment

	async def toggle_like(self, subject_id: str, comment_id: str, already_liked: bool) -> CommentLikeResult:
		"""Flip the caller's like. ``already_liked`` comes from the caller's marker."""
		comments = await self.list_comments(subject_id)
		target = _find(comments, comment_id)
		if target is None:
			raise CommentNotFoundError()
		if already_liked:
			target.likes = max(0, target.likes - 1)
		else:
			target.likes += 1
		await self._save(subject_id, comments)
		return CommentLikeResult(comment_id=comment_id, likes=target.likes, liked=not already_liked)

	async def mark_hidden(self, subject_id: str, comment_id: str) -> bool:
		"""Hide a comment once. Returns True only on the visible -> hidden transition."""
		comments = await self.list_comments(subject_id)
		target = _find(comments, comment_id)
		if target is None or target.hidden:
			return False
		target.hidden = True
		await self._save(subject_id, comments)
		await decrement_floor(self.store, keys.subject_visible_comment_count(subject_id))
		return True

	async def _save(self, subject_id: str, comments: list[Comment]) -> None:
		await self.store.set(keys.subject_comments(subject_id), [comment.to_record() for comment in comments])


def _find(comments: list[Comment], comment_id: str) -> Optional[Comment]:
	for comment in comments:
		if comment.id == comment_id:
			return comment
	return None
