"""Domain-level exceptions for voting, comments and moderation."""

from __future__ import annotations


class ReviewError(Exception):
    """Base class for review feature errors."""

    reason: str = "unknown"

    def __init__(self, reason: str | None = None) -> None:
        super().__init__(reason or self.reason)
        if reason:
            self.reason = reason


class ValidationError(ReviewError):
    """Comment text rejected before any mutation."""

    reason = "invalid_comment"


class CommentEmpty(ValidationError):
    reason = "comment_empty"


class CommentTooShort(ValidationError):
    reason = "comment_too_short"


class CommentTooLong(ValidationError):
    reason = "comment_too_long"


class RateLimitError(ReviewError):
    """Per-subject comment cap reached."""

    reason = "comment_limit_reached"


class DuplicateReportError(ReviewError):
    reason = "already_reported"


class CommentNotFoundError(ReviewError):
    reason = "comment_not_found"


class BlockedIdentityError(ReviewError):
    """Raised before any other check when the IP or fingerprint is blocked."""

    reason = "blocked"

    def __init__(self, *, ip_blocked: bool = False, fingerprint_blocked: bool = False) -> None:
        super().__init__()
        self.ip_blocked = ip_blocked
        self.fingerprint_blocked = fingerprint_blocked


class StoreError(ReviewError):
    """Underlying key-value store failure. Never retried here."""

    reason = "store_unavailable"
