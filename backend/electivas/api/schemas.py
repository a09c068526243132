"""Request and response bodies for the public and admin APIs."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from electivas.catalog.schemas import Subject
from electivas.domain.models import (
    Comment,
    CommentAnalytics,
    CommentLikeResult,
    CommentVisibility,
    ReportResult,
    SubjectTally,
    VoteOutcome,
    VoteResult,
    VoteType,
)


class VoteIn(BaseModel):
    vote: VoteType


class CommentIn(BaseModel):
    text: str


class TallyOut(BaseModel):
    likes: int
    dislikes: int

    @classmethod
    def from_tally(cls, tally: SubjectTally) -> "TallyOut":
        return cls(likes=tally.likes, dislikes=tally.dislikes)


class VoteOut(BaseModel):
    outcome: VoteOutcome
    vote: Optional[VoteType]
    likes: int
    dislikes: int

    @classmethod
    def from_result(cls, result: VoteResult) -> "VoteOut":
        return cls(
            outcome=result.outcome,
            vote=result.vote,
            likes=result.tally.likes,
            dislikes=result.tally.dislikes,
        )


class CommentOut(BaseModel):
    id: str
    subject_id: str
    text: str
    timestamp: int
    likes: int
    hidden: bool
    visibility: CommentVisibility
    user_liked: bool = False

    @classmethod
    def from_comment(cls, comment: Comment, *, user_liked: bool = False) -> "CommentOut":
        return cls(
            id=comment.id,
            subject_id=comment.subject_id,
            text=comment.text,
            timestamp=comment.timestamp,
            likes=comment.likes,
            hidden=comment.hidden,
            visibility=comment.visibility,
            user_liked=user_liked,
        )


class CommentLikeOut(BaseModel):
    comment_id: str
    likes: int
    liked: bool

    @classmethod
    def from_result(cls, result: CommentLikeResult) -> "CommentLikeOut":
        return cls(comment_id=result.comment_id, likes=result.likes, liked=result.liked)


class ReportOut(BaseModel):
    comment_id: str
    reports: int
    hidden: bool
    visibility: CommentVisibility

    @classmethod
    def from_result(cls, result: ReportResult) -> "ReportOut":
        return cls(
            comment_id=result.comment_id,
            reports=result.reports,
            hidden=result.hidden,
            visibility=result.visibility,
        )


class SubjectSummaryOut(BaseModel):
    subject: Subject
    likes: int
    dislikes: int
    visible_comment_count: int


class SubjectDetailOut(BaseModel):
    subject: Optional[Subject]
    subject_id: str
    likes: int
    dislikes: int
    user_vote: Optional[VoteType]
    comments: List[CommentOut]
    hidden_comments: List[CommentOut]
    visible_comment_count: int


class BlockCheckIn(BaseModel):
    ip: Optional[str] = None
    fingerprint: Optional[str] = None


class BlockCheckOut(BaseModel):
    blocked: bool
    ip_blocked: bool = Field(serialization_alias="ipBlocked")
    fingerprint_blocked: bool = Field(serialization_alias="fingerprintBlocked")


class ClientIpOut(BaseModel):
    ip: str


class AdminIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    action: str
    ip: Optional[str] = None
    fingerprint: Optional[str] = None
    subject_id: Optional[str] = Field(default=None, alias="subjectId")


class SuspiciousPatternsOut(BaseModel):
    sameIpMultipleFingerprints: List[str]
    sameFingerprintMultipleIps: List[str]
    highVolumeIps: List[str]


class AnalyticsOut(BaseModel):
    totalComments: int
    uniqueIps: int
    uniqueFingerprints: int
    suspiciousPatterns: SuspiciousPatternsOut

    @classmethod
    def from_analytics(cls, analytics: CommentAnalytics) -> "AnalyticsOut":
        patterns = analytics.suspicious_patterns
        return cls(
            totalComments=analytics.total_comments,
            uniqueIps=analytics.unique_ips,
            uniqueFingerprints=analytics.unique_fingerprints,
            suspiciousPatterns=SuspiciousPatternsOut(
                sameIpMultipleFingerprints=patterns.same_ip_multiple_fingerprints,
                sameFingerprintMultipleIps=patterns.same_fingerprint_multiple_ips,
                highVolumeIps=patterns.high_volume_ips,
            ),
        )
