"""Subject catalog fetched from the university scheduling API."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional

import httpx
from pydantic import TypeAdapter

from electivas.catalog.cache import TTLCache
from electivas.catalog.schemas import Catalog, Subject
from electivas.obs import metrics as obs_metrics
from electivas.settings import settings

logger = logging.getLogger(__name__)

ELECTIVES_CATEGORY = "Electivas"

_catalog_adapter: TypeAdapter[Catalog] = TypeAdapter(Catalog)


class CatalogUnavailable(Exception):
	"""Raised when the upstream API cannot be reached or returns garbage."""


@dataclass
class CatalogClient:
	http: httpx.AsyncClient
	url: str
	cache: TTLCache[Catalog] = field(default_factory=lambda: TTLCache(settings.catalog_ttl_seconds))

	async def fetch_all_subjects(self) -> Catalog:
		return await self.cache.get_or_build(self._fetch)

	async def _fetch(self) -> Catalog:
		try:
			response = await self.http.get(self.url)
			response.raise_for_status()
			payload: Any = response.json()
			catalog = _catalog_adapter.validate_python(payload)
		except (httpx.HTTPError, ValueError) as exc:
			obs_metrics.inc_catalog_fetch("error")
			logger.warning("catalog_fetch_failed", extra={"url": self.url}, exc_info=True)
			raise CatalogUnavailable(str(exc)) from exc
		obs_metrics.inc_catalog_fetch("ok")
		return catalog

	async def get_electivas(self) -> List[Subject]:
		try:
			catalog = await self.fetch_all_subjects()
		except CatalogUnavailable:
			return []
		return list(catalog.get(ELECTIVES_CATEGORY, {}).get("0", {}).get("0", []))

	async def get_subject_by_id(self, subject_id: str) -> Optional[Subject]:
		try:
			catalog = await self.fetch_all_subjects()
		except CatalogUnavailable:
			return None
		for years in catalog.values():
			for semesters in years.values():
				for subjects in semesters.values():
					for subject in subjects:
						if subject.subject_id == subject_id:
							return subject
		return None


_client: Optional[CatalogClient] = None


def get_catalog_client() -> CatalogClient:
	global _client
	if _client is None:
		http = httpx.AsyncClient(timeout=settings.catalog_timeout_seconds)
		_client = CatalogClient(http=http, url=settings.catalog_url)
	return _client


def set_catalog_client(client: Optional[CatalogClient]) -> None:
	global _client
	_client = client


async def close_catalog_client() -> None:
	global _client
	if _client is not None:
		await _client.http.aclose()
		_client = None
