"""Per-subject comment analytics for moderators."""

from __future__ import annotations

from collections import defaultdict
from datetime import datetime, timezone
from typing import Any, Iterable

from electivas.domain.models import Comment, CommentAnalytics, SuspiciousPatterns

# More than this many fingerprints behind one IP suggests spoofed devices
MAX_FINGERPRINTS_PER_IP = 3
# Same device seen from more than this many networks
MAX_IPS_PER_FINGERPRINT = 2
MAX_COMMENTS_PER_IP = 10

PREVIEW_LENGTH = 100


def comment_analytics(comments: Iterable[Comment]) -> CommentAnalytics:
	ips: set[str] = set()
	fingerprints: set[str] = set()
	ip_to_fps: dict[str, set[str]] = defaultdict(set)
	fp_to_ips: dict[str, set[str]] = defaultdict(set)
	ip_counts: dict[str, int] = defaultdict(int)
	total = 0

	for comment in comments:
		total += 1
		if comment.ip:
			ips.add(comment.ip)
			ip_counts[comment.ip] += 1
		if comment.fingerprint:
			fingerprints.add(comment.fingerprint)
		if comment.ip and comment.fingerprint:
			ip_to_fps[comment.ip].add(comment.fingerprint)
			fp_to_ips[comment.fingerprint].add(comment.ip)

	return CommentAnalytics(
		total_comments=total,
		unique_ips=len(ips),
		unique_fingerprints=len(fingerprints),
		suspicious_patterns=SuspiciousPatterns(
			same_ip_multiple_fingerprints=[ip for ip, fps in ip_to_fps.items() if len(fps) > MAX_FINGERPRINTS_PER_IP],
			same_fingerprint_multiple_ips=[fp for fp, addrs in fp_to_ips.items() if len(addrs) > MAX_IPS_PER_FINGERPRINT],
			high_volume_ips=[ip for ip, count in ip_counts.items() if count > MAX_COMMENTS_PER_IP],
		),
	)


def comment_preview(comment: Comment) -> dict[str, Any]:
	"""Admin listing row: truncated text plus whatever tracking data was stored."""
	text = comment.text
	if len(text) > PREVIEW_LENGTH:
		text = text[:PREVIEW_LENGTH] + "..."
	created = datetime.fromtimestamp(comment.timestamp / 1000, tz=timezone.utc)
	return {
		"id": comment.id,
		"text": text,
		"timestamp": comment.timestamp,
		"likes": comment.likes,
		"hidden": comment.hidden,
		"ip": comment.ip or "N/A",
		"fingerprint": comment.fingerprint or "N/A",
		"date": created.strftime("%Y-%m-%d %H:%M:%S UTC"),
	}
