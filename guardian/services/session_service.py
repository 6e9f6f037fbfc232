"""Bearer token helpers used as FastAPI dependencies."""
from __future__ import annotations

from fastapi import Request

from guardian.core.client_ip import ensure_client_allowed
from guardian.core.errors import UnauthorizedError
from guardian.core.security import TokenError, TokenPayload, verify_token

AUTH_SCHEME = "bearer"


def bearer_token(request: Request) -> str:
    header = request.headers.get("authorization")
    if not header:
        raise UnauthorizedError("No token provided")
    scheme, _, token = header.strip().partition(" ")
    token = token.strip()
    if scheme.lower() != AUTH_SCHEME or not token:
        raise UnauthorizedError("Invalid token format")
    return token


def current_user(request: Request) -> TokenPayload:
    """Dependency: the verified token payload of the caller."""
    token = bearer_token(request)
    try:
        payload = verify_token(token)
    except TokenError:
        raise UnauthorizedError("Invalid token") from None
    request.state.user = payload
    return payload


def current_allowed_user(request: Request) -> TokenPayload:
    """Dependency: like current_user, but the client IP must also be allow-listed."""
    ensure_client_allowed(request, request.app.state.settings)
    return current_user(request)
