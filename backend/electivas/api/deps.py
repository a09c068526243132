"""Request-scoped dependencies: identity signals, services and the admin guard."""

from __future__ import annotations

import secrets
from typing import Optional

from fastapi import Header, HTTPException, Request, status

from electivas.catalog.client import CatalogClient, get_catalog_client
from electivas.domain.container import get_review_service
from electivas.domain.identity import IdentitySignals
from electivas.domain.service import ReviewService
from electivas.infra import cookies
from electivas.settings import settings

UNKNOWN_IP = "0.0.0.0"


def header_client_ip(request: Request) -> Optional[str]:
	"""First X-Forwarded-For hop, then X-Real-IP."""
	forwarded = request.headers.get("X-Forwarded-For")
	if forwarded:
		first = forwarded.split(",")[0].strip()
		if first:
			return first
	real_ip = request.headers.get("X-Real-IP")
	if real_ip and real_ip.strip():
		return real_ip.strip()
	return None


def resolve_client_ip(request: Request) -> Optional[str]:
	"""Proxy headers, then the socket peer. Never a client-writable cookie."""
	header_ip = header_client_ip(request)
	if header_ip:
		return header_ip
	client = request.client
	return client.host if client else None


def resolve_fingerprint(request: Request) -> Optional[str]:
	return request.cookies.get(cookies.FINGERPRINT_COOKIE_NAME) or request.headers.get("X-Fingerprint")


def identity_for(request: Request, subject_id: Optional[str] = None) -> IdentitySignals:
	cookie_vote = cookies.read_subject_vote(request, subject_id) if subject_id else None
	return IdentitySignals(
		ip=resolve_client_ip(request),
		fingerprint=resolve_fingerprint(request),
		cookie_vote=cookie_vote,
	)


def get_identity(request: Request) -> IdentitySignals:
	subject_id = request.path_params.get("subject_id")
	return identity_for(request, subject_id)


def get_service() -> ReviewService:
	return get_review_service()


def get_catalog() -> CatalogClient:
	return get_catalog_client()


async def require_admin_secret(
	x_admin_secret: Optional[str] = Header(default=None, alias="X-Admin-Secret"),
) -> None:
	expected = settings.admin_secret_key
	# Fail closed when no secret is configured
	if not expected or not x_admin_secret:
		raise HTTPException(status.HTTP_401_UNAUTHORIZED, detail="unauthorized")
	if not secrets.compare_digest(x_admin_secret, expected):
		raise HTTPException(status.HTTP_401_UNAUTHORIZED, detail="unauthorized")
