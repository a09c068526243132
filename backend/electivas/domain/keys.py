"""Key naming scheme shared with existing store dumps. Do not rename."""

from __future__ import annotations


def subject_likes(subject_id: str) -> str:
    return f"subject:{subject_id}:likes"


def subject_dislikes(subject_id: str) -> str:
    return f"subject:{subject_id}:dislikes"


def subject_comments(subject_id: str) -> str:
    return f"subject:{subject_id}:comments"


def subject_visible_comment_count(subject_id: str) -> str:
    return f"subject:{subject_id}:visibleCommentCount"


def ip_vote(ip: str, subject_id: str) -> str:
    return f"ip-vote:{ip}:{subject_id}"


def fp_vote(fingerprint: str, subject_id: str) -> str:
    return f"fp-vote:{fingerprint}:{subject_id}"


def ip_stats(ip: str) -> str:
    return f"ip-stats:{ip}:count"


def fp_stats(fingerprint: str) -> str:
    return f"fp-stats:{fingerprint}:count"


def ip_last_seen(ip: str) -> str:
    return f"ip-last-seen:{ip}"


def fp_last_seen(fingerprint: str) -> str:
    return f"fp-last-seen:{fingerprint}"


def ip_comment_count(ip: str, subject_id: str | None = None) -> str:
    if subject_id is None:
        return f"ip-comment-count:{ip}"
    return f"ip-comment-count:{ip}:{subject_id}"


def fp_comment_count(fingerprint: str, subject_id: str | None = None) -> str:
    if subject_id is None:
        return f"fp-comment-count:{fingerprint}"
    return f"fp-comment-count:{fingerprint}:{subject_id}"


def comment_reports(comment_id: str) -> str:
    return f"comment:{comment_id}:reports"


def ip_report(ip: str, comment_id: str) -> str:
    return f"ip-report:{ip}:{comment_id}"


def fp_report(fingerprint: str, comment_id: str) -> str:
    return f"fp-report:{fingerprint}:{comment_id}"


def blocked_ip(ip: str) -> str:
    return f"blocked-ip:{ip}"


def blocked_fp(fingerprint: str) -> str:
    return f"blocked-fp:{fingerprint}"
