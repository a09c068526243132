"""Domain models for votes, comments and reports."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Optional


class VoteType(str, Enum):
	"""Subject vote values as stored under the vote keys and cookie."""

	LIKE = "like"
	DISLIKE = "dislike"

	@classmethod
	def parse(cls, value: Any) -> Optional["VoteType"]:
		if isinstance(value, cls):
			return value
		try:
			return cls(str(value))
		except ValueError:
			return None


class VoteOutcome(str, Enum):
	CREATED = "created"
	CHANGED = "changed"
	REMOVED = "removed"


class CommentVisibility(str, Enum):
	VISIBLE = "visible"
	HIDDEN = "hidden"


@dataclass(slots=True)
class SubjectTally:
	likes: int = 0
	dislikes: int = 0


@dataclass(slots=True)
class VoteResult:
	"""Outcome of a vote transition plus the cookie value the caller must persist."""

	outcome: VoteOutcome
	vote: Optional[VoteType]
	previous: Optional[VoteType]
	tally: SubjectTally


@dataclass(slots=True)
class Comment:
	id: str
	subject_id: str
	text: str
	timestamp: int
	likes: int = 0
	hidden: bool = False
	ip: Optional[str] = None
	fingerprint: Optional[str] = None

	@property
	def visibility(self) -> CommentVisibility:
		return CommentVisibility.HIDDEN if self.hidden else CommentVisibility.VISIBLE

	@classmethod
	def from_record(cls, record: Mapping[str, Any]) -> "Comment":
		return cls(
			id=str(record["id"]),
			subject_id=str(record.get("subjectId", "")),
			text=str(record.get("text", "")),
			timestamp=int(record.get("timestamp") or 0),
			likes=max(0, int(record.get("likes") or 0)),
			hidden=bool(record.get("hidden", False)),
			ip=record.get("ip"),
			fingerprint=record.get("fingerprint"),
		)

	def to_record(self) -> dict[str, Any]:
		record: dict[str, Any] = {
			"id": self.id,
			"subjectId": self.subject_id,
			"text": self.text,
			"timestamp": self.timestamp,
			"likes": self.likes,
			"hidden": self.hidden,
		}
		if self.ip is not None:
			record["ip"] = self.ip
		if self.fingerprint is not None:
			record["fingerprint"] = self.fingerprint
		return record


@dataclass(slots=True)
class CommentLikeResult:
	comment_id: str
	likes: int
	liked: bool


@dataclass(slots=True)
class ReportResult:
	comment_id: str
	reports: int
	hidden: bool
	visibility: CommentVisibility


@dataclass(slots=True)
class BlockStatus:
	ip: Optional[str] = None
	fingerprint: Optional[str] = None
	ip_blocked: bool = False
	fingerprint_blocked: bool = False

	@property
	def blocked(self) -> bool:
		return self.ip_blocked or self.fingerprint_blocked


@dataclass(slots=True)
class SuspiciousPatterns:
	same_ip_multiple_fingerprints: list[str] = field(default_factory=list)
	same_fingerprint_multiple_ips: list[str] = field(default_factory=list)
	high_volume_ips: list[str] = field(default_factory=list)


@dataclass(slots=True)
class CommentAnalytics:
	total_comments: int
	unique_ips: int
	unique_fingerprints: int
	suspicious_patterns: SuspiciousPatterns
