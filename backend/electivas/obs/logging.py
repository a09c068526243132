"""JSON logging for the review API.

Log lines carry the request id and caller IP bound by the HTTP middleware.
Comment text and secrets are redacted; IPs and fingerprints are masked so
logs can still correlate abuse without storing the raw identity signal.
"""

from __future__ import annotations

import json
import logging
import random
from contextvars import ContextVar, Token
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from electivas.settings import settings

_CONTEXT: Dict[str, ContextVar[Optional[str]]] = {
	"request_id": ContextVar("obs_request_id", default=None),
	"client_ip": ContextVar("obs_client_ip", default=None),
}

_LOGGER_NAME = "electivas"

_REDACTED_KEYWORDS = ("secret", "authorization", "password", "cookie", "text", "body")
_MASKED_KEYWORDS = ("ip", "fingerprint", "blocked_fp")

_MAX_STRING_LENGTH = 256

_STANDARD_ATTRS = frozenset(logging.LogRecord("", 0, "", 0, "", (), None).__dict__) | {"message", "asctime"}


def bind_context(**values: Optional[str]) -> Dict[str, Token]:
	"""Bind request-scoped fields and return the tokens needed to unbind them."""
	tokens: Dict[str, Token] = {}
	for key, value in values.items():
		if value is not None and key in _CONTEXT:
			tokens[key] = _CONTEXT[key].set(value)
	return tokens


def reset_context(tokens: Dict[str, Token]) -> None:
	for key, token in tokens.items():
		_CONTEXT[key].reset(token)


def current_request_id() -> Optional[str]:
	return _CONTEXT["request_id"].get()


def mask_identity(value: Any) -> Any:
	"""Keep a short prefix of an IP or fingerprint, enough to spot repeats."""
	if not isinstance(value, str) or not value:
		return value
	if len(value) <= 4:
		return "***"
	return f"{value[:4]}***"


def _field(key: str, value: Any) -> Any:
	lowered = key.lower()
	if any(word in lowered for word in _REDACTED_KEYWORDS):
		return "[redacted]"
	if lowered.endswith(_MASKED_KEYWORDS):
		return mask_identity(value)
	if isinstance(value, str) and len(value) > _MAX_STRING_LENGTH:
		return f"{value[:_MAX_STRING_LENGTH]}…"
	return value


class JSONLogFormatter(logging.Formatter):
	"""One JSON object per record."""

	def format(self, record: logging.LogRecord) -> str:  # noqa: A003 (match logging api)
		payload: Dict[str, Any] = {
			"ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
			"level": record.levelname.lower(),
			"msg": record.getMessage(),
			"logger": record.name,
			"service": settings.service_name,
			"env": settings.environment,
			"commit": settings.git_commit,
		}
		for key, var in _CONTEXT.items():
			value = var.get()
			if value:
				payload[key] = _field(key, value)
		if record.exc_info:
			payload["exc_info"] = self.formatException(record.exc_info)
		for key, value in record.__dict__.items():
			if key in _STANDARD_ATTRS or key in payload:
				continue
			payload[key] = _field(key, value)
		return json.dumps(payload, separators=(",", ":"), default=str)


class InfoSamplingFilter(logging.Filter):
	"""Randomly sample info-level logs, keep warnings/errors."""

	def filter(self, record: logging.LogRecord) -> bool:  # noqa: A003
		if record.levelno != logging.INFO:
			return True
		rate = max(0.0, min(1.0, settings.obs_log_sampling_rate_info))
		return rate >= 1.0 or random.random() < rate


def configure_logging() -> logging.Logger:
	root = logging.getLogger()
	root.handlers.clear()
	handler = logging.StreamHandler()
	handler.setFormatter(JSONLogFormatter())
	handler.addFilter(InfoSamplingFilter())
	root.addHandler(handler)
	root.setLevel(settings.obs_log_level)
	return logging.getLogger(_LOGGER_NAME)


def get_logger(name: Optional[str] = None) -> logging.Logger:
	return logging.getLogger(name or _LOGGER_NAME)
