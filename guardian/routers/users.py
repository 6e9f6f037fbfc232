from __future__ import annotations

from fastapi import APIRouter, Depends

from guardian.domain.users import UserUpdateRequest
from guardian.routers.deps import get_user_service
from guardian.services.serializers import user_to_dict
from guardian.services.session_service import current_user
from guardian.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"], dependencies=[Depends(current_user)])


@router.get("")
def list_users(user_service: UserService = Depends(get_user_service)):
    users = user_service.list_users()
    return {
        "message": "Users retrieved successfully",
        "count": len(users),
        "users": [user_to_dict(user) for user in users],
    }


@router.get("/{user_id}")
def get_user(user_id: str, user_service: UserService = Depends(get_user_service)):
    user = user_service.get_user(user_id)
    return {"message": "User retrieved successfully", "user": user_to_dict(user)}


@router.put("/{user_id}")
def update_user(user_id: str, payload: UserUpdateRequest, user_service: UserService = Depends(get_user_service)):
    user = user_service.update_user(user_id, payload)
    return {"message": "User updated successfully", "user": user_to_dict(user)}


@router.delete("/{user_id}")
def delete_user(user_id: str, user_service: UserService = Depends(get_user_service)):
    user = user_service.delete_user(user_id)
    return {"message": "User deleted successfully", "user": user_to_dict(user)}
