from __future__ import annotations

from fastapi import APIRouter, Depends

from guardian.domain.users import LoginRequest, RegisterRequest
from guardian.routers.deps import get_auth_service
from guardian.services.auth_service import AuthService
from guardian.services.serializers import user_summary

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", status_code=201)
def register(payload: RegisterRequest, auth_service: AuthService = Depends(get_auth_service)):
    result = auth_service.register(payload)
    return {
        "message": "User registered successfully",
        "user": user_summary(result.user),
        "token": result.token,
    }


@router.post("/login")
def login(payload: LoginRequest, auth_service: AuthService = Depends(get_auth_service)):
    result = auth_service.login(payload)
    return {
        "message": "Login successful",
        "user": user_summary(result.user),
        "token": result.token,
    }
