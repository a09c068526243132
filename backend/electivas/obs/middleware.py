"""ASGI middleware recording request metrics and access logs."""

from __future__ import annotations

import time

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from electivas.obs import logging as obs_logging
from electivas.obs import metrics
from electivas.settings import settings


def _route_template(request: Request) -> str:
	# Label by template so /subjects/{subject_id} stays one series
	route = request.scope.get("route")
	return getattr(route, "path", None) or request.url.path


class ObservabilityMiddleware(BaseHTTPMiddleware):
	def __init__(self, app) -> None:
		super().__init__(app)
		self._logger = obs_logging.get_logger("electivas.http")

	async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
		if not settings.obs_enabled:
			return await call_next(request)

		client_ip = request.client.host if request.client else None
		tokens = obs_logging.bind_context(request_id=getattr(request.state, "request_id", None), client_ip=client_ip)
		start = time.perf_counter()
		status_code = 500
		try:
			response = await call_next(request)
			status_code = response.status_code
			return response
		except Exception:
			self._logger.exception("http_request_error", extra={"method": request.method, "path": request.url.path})
			raise
		finally:
			elapsed = time.perf_counter() - start
			route = _route_template(request)
			metrics.observe_request(route, request.method, status_code, elapsed)
			self._logger.info(
				"http_request",
				extra={"status": status_code, "method": request.method, "path": route, "latency_ms": round(elapsed * 1000, 3)},
			)
			obs_logging.reset_context(tokens)


def install(app) -> None:
	app.add_middleware(ObservabilityMiddleware)
