"""Endpoints the browser calls while bootstrapping its identity signals."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from electivas.api import schemas
from electivas.api.deps import UNKNOWN_IP, get_service, header_client_ip
from electivas.domain.service import ReviewService

router = APIRouter(prefix="/api", tags=["client"])


@router.get("/ip", response_model=schemas.ClientIpOut)
async def client_ip(request: Request) -> schemas.ClientIpOut:
	return schemas.ClientIpOut(ip=header_client_ip(request) or UNKNOWN_IP)


@router.post("/block-check", response_model=schemas.BlockCheckOut, response_model_by_alias=True)
async def block_check(
	payload: schemas.BlockCheckIn,
	service: ReviewService = Depends(get_service),
) -> schemas.BlockCheckOut:
	block_status = await service.blocklist.status_or_open(payload.ip, payload.fingerprint)
	return schemas.BlockCheckOut(
		blocked=block_status.blocked,
		ip_blocked=block_status.ip_blocked,
		fingerprint_blocked=block_status.fingerprint_blocked,
	)
