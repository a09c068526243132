"""Single-value TTL cache with an injectable clock."""

from __future__ import annotations

import asyncio
import time
from typing import Awaitable, Callable, Generic, Optional, TypeVar

T = TypeVar("T")

Clock = Callable[[], float]


class TTLCache(Generic[T]):
	"""Holds one value for ``ttl_seconds``; concurrent misses share one build."""

	def __init__(self, ttl_seconds: float, *, clock: Clock = time.monotonic) -> None:
		self.ttl_seconds = ttl_seconds
		self._clock = clock
		self._value: Optional[T] = None
		self._stored_at: Optional[float] = None
		self._lock = asyncio.Lock()

	def peek(self) -> Optional[T]:
		if self._stored_at is None:
			return None
		if self._clock() - self._stored_at >= self.ttl_seconds:
			return None
		return self._value

	def put(self, value: T) -> None:
		self._value = value
		self._stored_at = self._clock()

	def invalidate(self) -> None:
		self._value = None
		self._stored_at = None

	async def get_or_build(self, builder: Callable[[], Awaitable[T]]) -> T:
		cached = self.peek()
		if cached is not None:
			return cached
		async with self._lock:
			cached = self.peek()
			if cached is not None:
				return cached
			value = await builder()
			self.put(value)
			return value
