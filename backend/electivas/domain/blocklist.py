"""Blocked IPs and fingerprints."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from electivas.domain import keys
from electivas.domain.exceptions import BlockedIdentityError, StoreError
from electivas.domain.identity import IdentitySignals
from electivas.domain.models import BlockStatus
from electivas.infra.kv import KeyValueStore
from electivas.obs import metrics as obs_metrics

logger = logging.getLogger(__name__)


@dataclass
class BlockList:
	store: KeyValueStore

	async def block_ip(self, ip: str) -> None:
		await self.store.set(keys.blocked_ip(ip), True)
		obs_metrics.inc_block_change("ip", "block")
		logger.info("ip_blocked", extra={"blocked_ip": ip})

	async def block_fingerprint(self, fingerprint: str) -> None:
		await self.store.set(keys.blocked_fp(fingerprint), True)
		obs_metrics.inc_block_change("fingerprint", "block")
		logger.info("fingerprint_blocked", extra={"blocked_fp": fingerprint})

	async def unblock_ip(self, ip: str) -> None:
		await self.store.set(keys.blocked_ip(ip), None)
		obs_metrics.inc_block_change("ip", "unblock")
		logger.info("ip_unblocked", extra={"blocked_ip": ip})

	async def unblock_fingerprint(self, fingerprint: str) -> None:
		await self.store.set(keys.blocked_fp(fingerprint), None)
		obs_metrics.inc_block_change("fingerprint", "unblock")
		logger.info("fingerprint_unblocked", extra={"blocked_fp": fingerprint})

	async def is_ip_blocked(self, ip: Optional[str]) -> bool:
		if not ip:
			return False
		return (await self.store.get(keys.blocked_ip(ip))) is True

	async def is_fingerprint_blocked(self, fingerprint: Optional[str]) -> bool:
		if not fingerprint:
			return False
		return (await self.store.get(keys.blocked_fp(fingerprint))) is True

	async def status(self, ip: Optional[str] = None, fingerprint: Optional[str] = None) -> BlockStatus:
		return BlockStatus(
			ip=ip or None,
			fingerprint=fingerprint or None,
			ip_blocked=await self.is_ip_blocked(ip),
			fingerprint_blocked=await self.is_fingerprint_blocked(fingerprint),
		)

	async def status_or_open(self, ip: Optional[str] = None, fingerprint: Optional[str] = None) -> BlockStatus:
		"""Status for the read-only block check; a store failure reads as not blocked."""
		try:
			return await self.status(ip, fingerprint)
		except StoreError:
			logger.warning("block_check_store_failed", exc_info=True)
			return BlockStatus(ip=ip or None, fingerprint=fingerprint or None)

	async def ensure_not_blocked(self, identity: IdentitySignals) -> None:
		"""Fail closed: either signal blocked rejects the request."""
		status = await self.status(identity.ip, identity.fingerprint)
		if status.blocked:
			obs_metrics.inc_blocked_request()
			logger.info(
				"blocked_identity_rejected",
				extra={"ip_blocked": status.ip_blocked, "fingerprint_blocked": status.fingerprint_blocked},
			)
			raise BlockedIdentityError(
				ip_blocked=status.ip_blocked,
				fingerprint_blocked=status.fingerprint_blocked,
			)
