from __future__ import annotations

from fastapi import Request

from guardian.services.agent_service import AgentService
from guardian.services.auth_service import AuthService
from guardian.services.user_service import UserService


def _state_service(request: Request, name: str):
    svc = getattr(getattr(request.app, "state", None), name, None)
    if svc is None:
        raise RuntimeError(f"{name} is not configured")
    return svc


def get_auth_service(request: Request) -> AuthService:
    return _state_service(request, "auth_service")


def get_user_service(request: Request) -> UserService:
    return _state_service(request, "user_service")


def get_agent_service(request: Request) -> AgentService:
    return _state_service(request, "agent_service")
