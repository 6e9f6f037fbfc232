"""User record CRUD."""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from guardian.core.errors import ConflictError, NotFoundError
from guardian.core.security import hash_password
from guardian.db.models import User
from guardian.domain.users import UserUpdateRequest
from guardian.repositories.sql_repository import SQLRepository
from guardian.services.auth_service import DUPLICATE_EMAIL_MESSAGE

logger = logging.getLogger(__name__)

USER_NOT_FOUND_MESSAGE = "User not found"
_REQUIRED_FIELDS = {"email", "name", "password"}


class UserService:
    def __init__(self, repository: SQLRepository | None = None) -> None:
        self.repository = repository or SQLRepository()

    def list_users(self) -> list[User]:
        return self.repository.list_users()

    def get_user(self, user_id: str) -> User:
        user = self.repository.get_user(user_id)
        if not user:
            raise NotFoundError(USER_NOT_FOUND_MESSAGE)
        return user

    def update_user(self, user_id: str, payload: UserUpdateRequest) -> User:
        changes = payload.model_dump(exclude_unset=True)
        # email/name/password cannot be cleared, an explicit null leaves them alone
        for field in _REQUIRED_FIELDS:
            if field in changes and changes[field] is None:
                del changes[field]
        if "password" in changes:
            changes["password_hash"] = hash_password(changes.pop("password"))
        if changes.get("email") and self.repository.email_taken(changes["email"], exclude_id=user_id):
            raise ConflictError(DUPLICATE_EMAIL_MESSAGE)
        if not changes:
            return self.get_user(user_id)
        try:
            user = self.repository.update_user(user_id, changes)
        except IntegrityError as exc:
            raise ConflictError(DUPLICATE_EMAIL_MESSAGE) from exc
        if not user:
            raise NotFoundError(USER_NOT_FOUND_MESSAGE)
        logger.info("Updated user %s (%s)", user_id, ", ".join(sorted(changes)))
        return user

    def delete_user(self, user_id: str) -> User:
        user = self.repository.delete_user(user_id)
        if not user:
            raise NotFoundError(USER_NOT_FOUND_MESSAGE)
        logger.info("Deleted user %s", user_id)
        return user
