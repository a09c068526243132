"""Operations endpoints providing health checks and metrics."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Header, Response
from fastapi.responses import JSONResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from electivas.api.deps import require_admin_secret
from electivas.obs import health
from electivas.settings import settings

router = APIRouter(prefix="", tags=["ops"])


async def require_metrics_access(
	x_admin_secret: Optional[str] = Header(default=None, alias="X-Admin-Secret"),
) -> None:
	if settings.obs_metrics_public:
		return
	await require_admin_secret(x_admin_secret=x_admin_secret)


@router.get("/health")
async def health_check() -> Response:
	status_code, payload = await health.readiness()
	return JSONResponse(content=payload, status_code=status_code)


@router.get("/health/live")
async def health_live() -> dict[str, str]:
	return await health.liveness()


@router.get("/health/ready")
async def health_ready() -> Response:
	status_code, payload = await health.readiness()
	return JSONResponse(content=payload, status_code=status_code)


@router.get("/metrics")
async def prometheus_metrics(_: None = Depends(require_metrics_access)) -> Response:
	payload = generate_latest()
	return Response(content=payload, media_type=CONTENT_TYPE_LATEST)
