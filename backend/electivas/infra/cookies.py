"""Cookie helpers for client-held vote markers.

- voted_subject_{id}: "like" | "dislike", one year, Path=/
- voted_comment_{id}: "true" while the browser has liked the comment
- fp: set by the frontend, read only here
"""

from __future__ import annotations

from typing import Optional

from fastapi import Request, Response

from electivas.domain.models import VoteType
from electivas.settings import settings

FINGERPRINT_COOKIE_NAME = "fp"
COOKIE_PATH = "/"


def subject_vote_cookie(subject_id: str) -> str:
    return f"voted_subject_{subject_id}"


def comment_like_cookie(comment_id: str) -> str:
    return f"voted_comment_{comment_id}"


def read_subject_vote(request: Request, subject_id: str) -> Optional[VoteType]:
    return VoteType.parse(request.cookies.get(subject_vote_cookie(subject_id)))


def read_comment_liked(request: Request, comment_id: str) -> bool:
    return bool(request.cookies.get(comment_like_cookie(comment_id)))


def _set(response: Response, key: str, value: str) -> None:
    max_age = int(settings.vote_cookie_max_age)
    response.set_cookie(
        key=key,
        value=value,
        max_age=max_age,
        expires=max_age,
        path=COOKIE_PATH,
        secure=bool(settings.cookie_secure) or settings.is_prod(),
        httponly=False,
        samesite="lax",
        domain=settings.cookie_domain or None,
    )


def _delete(response: Response, key: str) -> None:
    response.delete_cookie(key=key, path=COOKIE_PATH, domain=settings.cookie_domain or None)


def write_subject_vote(response: Response, subject_id: str, vote: Optional[VoteType]) -> None:
    """Persist the ledger's cookie value; ``None`` clears the cookie."""
    if vote is None:
        _delete(response, subject_vote_cookie(subject_id))
    else:
        _set(response, subject_vote_cookie(subject_id), vote.value)


def write_comment_liked(response: Response, comment_id: str, liked: bool) -> None:
    if liked:
        _set(response, comment_like_cookie(comment_id), "true")
    else:
        _delete(response, comment_like_cookie(comment_id))
