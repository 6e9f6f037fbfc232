"""Security helpers (password hashing and bearer tokens)."""

from __future__ import annotations

import time
from dataclasses import dataclass

import jwt
from argon2 import PasswordHasher, exceptions as argon_exc

from .config import get_settings

_ph = PasswordHasher()
_PREFIX = "argon2$"
JWT_ALGORITHM = "HS256"


def hash_password(password: str) -> str:
    """Create an Argon2 hash with a prefix for detection."""
    hashed = _ph.hash(password)
    return f"{_PREFIX}{hashed}"


def verify_password(password: str, stored_hash: str | None) -> bool:
    stored = stored_hash or ""
    if not stored.startswith(_PREFIX):
        return False
    hashed = stored[len(_PREFIX) :]
    try:
        return _ph.verify(hashed, password)
    except (argon_exc.VerifyMismatchError, argon_exc.VerificationError, argon_exc.InvalidHashError):
        return False


@dataclass(frozen=True)
class TokenPayload:
    user_id: str
    email: str


class TokenError(Exception):
    """Raised when a bearer token cannot be trusted."""


def generate_token(user_id: str, email: str, *, now: int | None = None) -> str:
    settings = get_settings()
    issued = int(now if now is not None else time.time())
    claims = {
        "userId": user_id,
        "email": email,
        "iat": issued,
        "exp": issued + max(60, settings.jwt_ttl_seconds),
    }
    return jwt.encode(claims, settings.jwt_secret, algorithm=JWT_ALGORITHM)


def verify_token(token: str) -> TokenPayload:
    settings = get_settings()
    try:
        claims = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[JWT_ALGORITHM],
            options={"require": ["exp", "iat"]},
        )
    except jwt.PyJWTError as exc:
        raise TokenError(str(exc)) from exc
    user_id = claims.get("userId")
    email = claims.get("email")
    if not isinstance(user_id, str) or not user_id or not isinstance(email, str):
        raise TokenError("token is missing userId/email claims")
    return TokenPayload(user_id=user_id, email=email)
