"""Moderator actions behind the shared admin secret."""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, status

from electivas.api import schemas
from electivas.api.deps import get_service, require_admin_secret
from electivas.domain.service import ReviewService

router = APIRouter(prefix="/api", tags=["admin"])
logger = logging.getLogger(__name__)

AdminHandler = Callable[[ReviewService, schemas.AdminIn], Awaitable[Dict[str, Any]]]


def _require(value: Optional[str], detail: str) -> str:
	if not value:
		raise HTTPException(status.HTTP_400_BAD_REQUEST, detail=detail)
	return value


async def _block_ip(service: ReviewService, payload: schemas.AdminIn) -> Dict[str, Any]:
	ip = _require(payload.ip, "ip_required")
	await service.blocklist.block_ip(ip)
	return {"success": True, "message": f"IP {ip} blocked"}


async def _block_fingerprint(service: ReviewService, payload: schemas.AdminIn) -> Dict[str, Any]:
	fingerprint = _require(payload.fingerprint, "fingerprint_required")
	await service.blocklist.block_fingerprint(fingerprint)
	return {"success": True, "message": f"Fingerprint {fingerprint} blocked"}


async def _unblock_ip(service: ReviewService, payload: schemas.AdminIn) -> Dict[str, Any]:
	ip = _require(payload.ip, "ip_required")
	await service.blocklist.unblock_ip(ip)
	return {"success": True, "message": f"IP {ip} unblocked"}


async def _unblock_fingerprint(service: ReviewService, payload: schemas.AdminIn) -> Dict[str, Any]:
	fingerprint = _require(payload.fingerprint, "fingerprint_required")
	await service.blocklist.unblock_fingerprint(fingerprint)
	return {"success": True, "message": f"Fingerprint {fingerprint} unblocked"}


async def _check_status(service: ReviewService, payload: schemas.AdminIn) -> Dict[str, Any]:
	if not payload.ip and not payload.fingerprint:
		raise HTTPException(status.HTTP_400_BAD_REQUEST, detail="ip_or_fingerprint_required")
	block_status = await service.blocklist.status(payload.ip, payload.fingerprint)
	return {
		"ip": block_status.ip,
		"fingerprint": block_status.fingerprint,
		"ipBlocked": block_status.ip_blocked,
		"fingerprintBlocked": block_status.fingerprint_blocked,
	}


async def _get_analytics(service: ReviewService, payload: schemas.AdminIn) -> Dict[str, Any]:
	subject_id = _require(payload.subject_id, "subject_id_required")
	analytics = await service.analytics(subject_id)
	return schemas.AnalyticsOut.from_analytics(analytics).model_dump()


async def _get_comments(service: ReviewService, payload: schemas.AdminIn) -> Dict[str, Any]:
	subject_id = _require(payload.subject_id, "subject_id_required")
	return {"subjectId": subject_id, "comments": await service.comment_previews(subject_id)}


async def _reset_votes(service: ReviewService, payload: schemas.AdminIn) -> Dict[str, Any]:
	subject_id = _require(payload.subject_id, "subject_id_required")
	tally = await service.reset_votes(subject_id)
	return {
		"success": True,
		"message": f"Votes reset for subject {subject_id}",
		"likes": tally.likes,
		"dislikes": tally.dislikes,
	}


ACTIONS: Dict[str, AdminHandler] = {
	"block_ip": _block_ip,
	"block_fingerprint": _block_fingerprint,
	"unblock_ip": _unblock_ip,
	"unblock_fingerprint": _unblock_fingerprint,
	"check_status": _check_status,
	"get_analytics": _get_analytics,
	"get_comments": _get_comments,
	"reset_votes": _reset_votes,
}


@router.post("/admin")
async def admin_action(
	payload: schemas.AdminIn,
	_: None = Depends(require_admin_secret),
	service: ReviewService = Depends(get_service),
) -> Dict[str, Any]:
	handler = ACTIONS.get(payload.action)
	if handler is None:
		raise HTTPException(status.HTTP_400_BAD_REQUEST, detail="invalid_action")
	result = await handler(service, payload)
	logger.info("admin_action", extra={"action": payload.action, "subject_id": payload.subject_id})
	return result
