"""
Authentication and identity related use cases.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError

from guardian.core.errors import ConflictError, UnauthorizedError, ValidationError
from guardian.core.security import generate_token, hash_password, verify_password
from guardian.db.models import User
from guardian.domain.users import LoginRequest, RegisterRequest, normalize_email
from guardian.repositories.sql_repository import SQLRepository

logger = logging.getLogger(__name__)

DUPLICATE_EMAIL_MESSAGE = "User with this email already exists"
INVALID_CREDENTIALS_MESSAGE = "Invalid credentials"


@dataclass
class AuthResult:
    user: User
    token: str


class AuthService:
    """Handles registration and login."""

    def __init__(self, repository: SQLRepository | None = None) -> None:
        self.repository = repository or SQLRepository()

    def register(self, payload: RegisterRequest) -> AuthResult:
        if self.repository.email_taken(payload.email):
            raise ConflictError(DUPLICATE_EMAIL_MESSAGE)
        try:
            user = self.repository.create_user(payload.email, payload.name, hash_password(payload.password))
        except IntegrityError as exc:
            # lost a race with a concurrent registration for the same email
            raise ConflictError(DUPLICATE_EMAIL_MESSAGE) from exc
        logger.info("Registered user %s", user.id)
        return AuthResult(user=user, token=generate_token(user.id, user.email))

    def login(self, payload: LoginRequest) -> AuthResult:
        email = normalize_email(payload.email)
        if not email or not payload.password:
            raise ValidationError(message="Email and password are required")
        user = self.repository.get_user_by_email(email)
        if not user or not verify_password(payload.password, user.password_hash):
            logger.info("Failed login for %s", email)
            raise UnauthorizedError(INVALID_CREDENTIALS_MESSAGE)
        return AuthResult(user=user, token=generate_token(user.id, user.email))
