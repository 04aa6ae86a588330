# app/models/user.py — User identity and auth payloads

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict

Role = Literal["admin", "user"]


class User(BaseModel):
    id: str
    email: str
    name: str
    role: Role
    avatar: str | None = None


class LoginCredentials(BaseModel):
    email: str
    password: str


class LoginUser(BaseModel):
    """User block embedded in the login response, in login or profile shape."""

    model_config = ConfigDict(extra="ignore")

    id: int | str
    email: str
    name: str | None = None
    role: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    is_staff: bool = False
    is_superuser: bool = False
    avatar: str | None = None


class LoginResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    access_token: str
    refresh_token: str
    user: LoginUser


class UserProfile(BaseModel):
    """Backend /auth/profile payload."""

    model_config = ConfigDict(extra="ignore")

    id: int | str
    email: str
    first_name: str = ""
    last_name: str = ""
    is_staff: bool = False
    is_superuser: bool = False
    date_joined: str | None = None
    last_login: str | None = None
