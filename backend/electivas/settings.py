"""Settings for the electivas review backend."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _env_field(default, *env_names: str):
	if env_names:
		alias = AliasChoices(*env_names) if len(env_names) > 1 else env_names[0]
		return Field(default=default, validation_alias=alias)
	return Field(default=default)


class Settings(BaseSettings):
	redis_url: str = _env_field("redis://localhost:6379/0", "REDIS_URL", "KV_URL")

	# Comment and moderation knobs
	comment_max_length: int = _env_field(3000, "COMMENT_MAX_LENGTH", "NEXT_PUBLIC_COMMENT_MAX_LENGTH")
	comment_min_length: int = _env_field(10, "COMMENT_MIN_LENGTH", "NEXT_PUBLIC_COMMENT_MIN_LENGTH")
	report_threshold: int = _env_field(5, "REPORT_THRESHOLD", "NEXT_PUBLIC_REPORT_THRESHOLD")
	comments_per_subject_limit: int = _env_field(2, "COMMENTS_PER_SUBJECT_LIMIT")
	# Shared university networks put many students behind one address
	comments_per_subject_ip_limit: int = _env_field(20, "COMMENTS_PER_SUBJECT_IP_LIMIT")
	comment_tracking_enabled: bool = _env_field(False, "COMMENT_TRACKING_ENABLED", "ENABLE_COMMENT_TRACKING")

	admin_secret_key: Optional[str] = _env_field(None, "ADMIN_SECRET_KEY")

	# Upstream scheduling API
	catalog_url: str = _env_field(
		"https://ceitba.org.ar/api/v1/scheduler/subjects?plan=S10-Rev23",
		"CATALOG_URL",
	)
	catalog_ttl_seconds: int = _env_field(3600, "CATALOG_TTL_SECONDS")
	catalog_timeout_seconds: float = _env_field(10.0, "CATALOG_TIMEOUT_SECONDS")

	vote_cookie_max_age: int = _env_field(365 * 24 * 60 * 60, "VOTE_COOKIE_MAX_AGE")
	cookie_secure: bool = _env_field(False, "COOKIE_SECURE")
	cookie_domain: Optional[str] = _env_field(None, "COOKIE_DOMAIN")
	cors_allow_origins: Any = _env_field((), "CORS_ALLOW_ORIGINS")

	environment: str = _env_field("production", "ENV", "APP_ENV", "ENVIRONMENT")
	obs_enabled: bool = _env_field(True, "OBS_ENABLED")
	obs_metrics_public: bool = _env_field(False, "OBS_METRICS_PUBLIC")
	obs_log_level: str = _env_field("INFO", "LOG_LEVEL")
	obs_log_sampling_rate_info: float = _env_field(0.1, "LOG_SAMPLING_RATE_INFO")
	service_name: str = _env_field("electivas-api", "SERVICE_NAME")
	git_commit: str = _env_field("unknown", "GIT_COMMIT", "COMMIT_SHA", "SOURCE_VERSION")

	def is_prod(self) -> bool:
		return self.environment.lower() in ("prod", "production", "live")

	def is_dev(self) -> bool:
		return self.environment.lower() in ("dev", "development")

	model_config = SettingsConfigDict(
		env_prefix="",
		env_file=".env",
		case_sensitive=False,
		extra="ignore",
	)

	@field_validator("cors_allow_origins", mode="before")
	def _split_cors(cls, value):  # type: ignore[override]
		if value in (None, ""):
			return ()
		if isinstance(value, str):
			return tuple(part.strip() for part in value.split(",") if part.strip())
		if isinstance(value, (list, tuple, set)):
			return tuple(str(item).strip() for item in value if str(item).strip())
		return ()

	@field_validator("comment_min_length", "comment_max_length", "report_threshold", mode="after")
	def _positive(cls, value: int) -> int:  # type: ignore[override]
		if value < 1:
			raise ValueError("must be >= 1")
		return value


settings = Settings()
settings.obs_log_level = settings.obs_log_level.upper()
