from __future__ import annotations

import logging

from fastapi import Request

from .config import Settings
from .errors import UnauthorizedError

logger = logging.getLogger(__name__)


def client_ip(request: Request, *, trust_forwarded_for: bool = False) -> str:
    if trust_forwarded_for:
        forwarded = request.headers.get("x-forwarded-for")
        if forwarded:
            return forwarded.split(",")[0].strip()
    if request.client and request.client.host:
        return request.client.host
    return "unknown"


def ensure_client_allowed(request: Request, settings: Settings) -> None:
    """Reject callers outside AUTHORIZED_CLIENT_IPS; an empty list allows everyone."""
    if not settings.ip_allowlist_enabled:
        return
    ip = client_ip(request, trust_forwarded_for=settings.trust_forwarded_for)
    if ip not in settings.authorized_client_ips:
        logger.warning("Rejected request from non-allow-listed client %s", ip)
        raise UnauthorizedError("Unauthorized")
