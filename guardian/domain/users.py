"""Request shapes for registration, login and user updates."""
from __future__ import annotations

import re
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

EMAIL_PATTERN = re.compile(r"[^@\s]+@[^@\s]+\.[^@\s]+")
MIN_PASSWORD_LENGTH = 6
MAX_NAME_LENGTH = 100


def normalize_email(value: str) -> str:
    return (value or "").strip().lower()


def _check_email(value: str) -> str:
    email = normalize_email(value)
    if not EMAIL_PATTERN.fullmatch(email):
        raise ValueError("Invalid email address")
    return email


def _check_name(value: str) -> str:
    name = (value or "").strip()
    if not name:
        raise ValueError("Name is required")
    if len(name) > MAX_NAME_LENGTH:
        raise ValueError("Name too long")
    return name


def _check_password(value: str) -> str:
    if len(value or "") < MIN_PASSWORD_LENGTH:
        raise ValueError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
    return value


class RegisterRequest(BaseModel):
    email: str
    name: str
    password: str

    @field_validator("email")
    @classmethod
    def check_email(cls, value: str) -> str:
        return _check_email(value)

    @field_validator("name")
    @classmethod
    def check_name(cls, value: str) -> str:
        return _check_name(value)

    @field_validator("password")
    @classmethod
    def check_password(cls, value: str) -> str:
        return _check_password(value)


class LoginRequest(BaseModel):
    email: str = ""
    password: str = ""


class UserUpdateRequest(BaseModel):
    """Partial update; only the fields present in the body are applied."""

    model_config = ConfigDict(populate_by_name=True)

    email: Optional[str] = None
    name: Optional[str] = None
    password: Optional[str] = None
    mobilerun_api_key: Optional[str] = Field(default=None, alias="mobilerunApiKey")
    device_id: Optional[str] = Field(default=None, alias="deviceId")

    @field_validator("email")
    @classmethod
    def check_email(cls, value: Optional[str]) -> Optional[str]:
        return None if value is None else _check_email(value)

    @field_validator("name")
    @classmethod
    def check_name(cls, value: Optional[str]) -> Optional[str]:
        return None if value is None else _check_name(value)

    @field_validator("password")
    @classmethod
    def check_password(cls, value: Optional[str]) -> Optional[str]:
        return None if value is None else _check_password(value)
