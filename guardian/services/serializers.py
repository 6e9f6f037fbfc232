"""Public representations of persisted entities."""
from __future__ import annotations

from typing import Any, Optional

from guardian.db.models import User


def _iso(value) -> Optional[str]:
    return value.isoformat() if value is not None else None


def user_summary(user: User) -> dict[str, Any]:
    return {"id": user.id, "name": user.name, "email": user.email}


def user_to_dict(user: User) -> dict[str, Any]:
    """Full user view; never includes the password hash or the API key itself."""
    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "deviceId": user.device_id,
        "hasMobilerunApiKey": bool(user.mobilerun_api_key),
        "createdAt": _iso(user.created_at),
        "updatedAt": _iso(user.updated_at),
    }
