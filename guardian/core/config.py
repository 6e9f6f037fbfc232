"""
Configuration helpers for the Guardian backend.

Settings are read from the environment once (``get_settings`` is cached) and
handed to routers/services so nothing else reads os.environ directly.
"""

from dataclasses import dataclass
from functools import lru_cache
import os

DEFAULT_JWT_SECRET = "dev-secret"


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    log_level: str
    database_url: str
    jwt_secret: str
    jwt_ttl_seconds: int
    authorized_client_ips: frozenset[str]
    trust_forwarded_for: bool
    mobilerun_base_url: str
    mobilerun_api_key: str
    mobilerun_device_id: str
    mobilerun_llm_model: str
    mobilerun_http_timeout_seconds: float
    agent_task_timeout_seconds: int
    agent_vision: bool
    agent_skip_normal_dispatch: bool
    emergency_contact_name: str
    host: str
    port: int

    @property
    def ip_allowlist_enabled(self) -> bool:
        return bool(self.authorized_client_ips)


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str | None, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    def _float(value: str | None, default: float = 0.0) -> float:
        try:
            return float(value)
        except (TypeError, ValueError):
            return default

    def _bool(value: str | None, default: bool = False) -> bool:
        if value is None:
            return default
        return value.strip().lower() in {"1", "true", "yes", "on"}

    def _csv(value: str | None) -> frozenset[str]:
        return frozenset(part.strip() for part in (value or "").split(",") if part.strip())

    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        database_url=os.getenv("DATABASE_URL", "sqlite:///./guardian.db"),
        jwt_secret=os.getenv("JWT_SECRET") or DEFAULT_JWT_SECRET,
        jwt_ttl_seconds=_int(os.getenv("JWT_TTL_SECONDS", "604800"), 604800),
        authorized_client_ips=_csv(os.getenv("AUTHORIZED_CLIENT_IPS")),
        trust_forwarded_for=_bool(os.getenv("TRUST_FORWARDED_FOR"), False),
        mobilerun_base_url=os.getenv("MOBILERUN_BASE_URL", "https://api.mobilerun.ai/v1").rstrip("/"),
        mobilerun_api_key=os.getenv("MOBILERUN_API_KEY", ""),
        mobilerun_device_id=os.getenv("MOBILERUN_DEVICE_ID", ""),
        mobilerun_llm_model=os.getenv("MOBILERUN_LLM_MODEL", "google/gemini-2.5-flash"),
        mobilerun_http_timeout_seconds=_float(os.getenv("MOBILERUN_HTTP_TIMEOUT_SECONDS", "30"), 30.0),
        agent_task_timeout_seconds=_int(os.getenv("AGENT_TASK_TIMEOUT_SECONDS", "0"), 0),
        agent_vision=_bool(os.getenv("AGENT_VISION"), False),
        agent_skip_normal_dispatch=_bool(os.getenv("AGENT_SKIP_NORMAL_DISPATCH"), True),
        emergency_contact_name=os.getenv("EMERGENCY_CONTACT_NAME", "the emergency contact"),
        host=os.getenv("HOST", "0.0.0.0"),
        port=_int(os.getenv("PORT", "3000"), 3000),
    )
