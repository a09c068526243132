"""FastAPI application entrypoint."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from electivas.api import admin, client, ops, subjects
from electivas.api.errors import install_error_handlers
from electivas.api.middleware_request_id import RequestIdMiddleware
from electivas.catalog.client import close_catalog_client
from electivas.domain import container
from electivas.infra.redis import close_redis
from electivas.obs import init as obs_init
from electivas.settings import settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
	container.configure()
	logger.info("startup", extra={"service": settings.service_name, "commit": settings.git_commit})
	try:
		yield
	finally:
		await close_catalog_client()
		await close_redis()
		container.reset()


app = FastAPI(title="Electivas Reviews", lifespan=lifespan)
install_error_handlers(app)

allow_origins = list(settings.cors_allow_origins)
if not allow_origins and settings.is_dev():
	allow_origins = ["http://localhost:3000", "http://127.0.0.1:3000"]

# Starlette disallows wildcard '*' with allow_credentials=True
if "*" in allow_origins:
	allow_origins = ["http://localhost:3000"] if settings.is_dev() else []

app.add_middleware(
	CORSMiddleware,
	allow_origins=allow_origins,
	allow_credentials=True,
	allow_methods=["GET", "POST"],
	allow_headers=["*"],
)

obs_init(app)

# Ensure every request carries an X-Request-Id and make it available on request.state
app.add_middleware(RequestIdMiddleware)

app.include_router(subjects.router, tags=["subjects"])
app.include_router(admin.router)
app.include_router(client.router)
app.include_router(ops.router)
