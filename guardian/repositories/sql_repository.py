"""High-level data access helpers backed by SQLAlchemy."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy import select

from guardian.db.models import User
from guardian.db.session import get_session

_UPDATABLE_USER_FIELDS = {"email", "name", "password_hash", "mobilerun_api_key", "device_id"}


class SQLRepository:
    """CRUD helpers wrapping the SQLAlchemy session."""

    # -------------------------- users --------------------------
    def get_user(self, user_id: str) -> Optional[User]:
        if not user_id:
            return None
        with get_session() as session:
            return session.get(User, user_id)

    def get_user_by_email(self, email: str) -> Optional[User]:
        with get_session() as session:
            stmt = select(User).where(User.email == email)
            return session.execute(stmt).scalar_one_or_none()

    def email_taken(self, email: str, *, exclude_id: str | None = None) -> bool:
        with get_session() as session:
            stmt = select(User.id).where(User.email == email)
            if exclude_id:
                stmt = stmt.where(User.id != exclude_id)
            return session.execute(stmt.limit(1)).first() is not None

    def list_users(self) -> list[User]:
        with get_session() as session:
            return list(session.execute(select(User).order_by(User.created_at)).scalars().all())

    def create_user(
        self,
        email: str,
        name: str,
        password_hash: str,
        *,
        mobilerun_api_key: str | None = None,
        device_id: str | None = None,
    ) -> User:
        now = datetime.now(timezone.utc)
        entity = User(
            email=email,
            name=name,
            password_hash=password_hash,
            mobilerun_api_key=mobilerun_api_key,
            device_id=device_id,
            created_at=now,
            updated_at=now,
        )
        with get_session() as session:
            session.add(entity)
            session.commit()
            session.refresh(entity)
            return entity

    def update_user(self, user_id: str, values: dict[str, Any]) -> Optional[User]:
        unknown = set(values) - _UPDATABLE_USER_FIELDS
        if unknown:
            raise ValueError(f"Cannot update user fields: {sorted(unknown)}")
        with get_session() as session:
            user = session.get(User, user_id)
            if not user:
                return None
            for field, value in values.items():
                setattr(user, field, value)
            user.updated_at = datetime.now(timezone.utc)
            session.commit()
            session.refresh(user)
            return user

    def delete_user(self, user_id: str) -> Optional[User]:
        with get_session() as session:
            user = session.get(User, user_id)
            if not user:
                return None
            session.delete(user)
            session.commit()
            return user
