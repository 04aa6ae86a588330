from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel

from app.client.http import ApiClient, ApiResponse
from app.config import Endpoints
from app.models.user import LoginCredentials, LoginUser, User, UserProfile


class AuthService:
    """Login / profile / logout calls against the backend auth endpoints."""

    def __init__(self, client: ApiClient) -> None:
        self._client = client

    async def login(self, credentials: LoginCredentials) -> ApiResponse[Any]:
        # A stale stored token must not ride along on the credentials exchange.
        return await self._client.post(
            Endpoints.LOGIN,
            credentials.model_dump(),
            authenticated=False,
        )

    async def get_profile(self) -> ApiResponse[Any]:
        return await self._client.get(Endpoints.PROFILE)

    async def logout(self) -> ApiResponse[Any]:
        return await self._client.post(Endpoints.LOGOUT)

    @staticmethod
    def transform_user(api_user: Mapping[str, Any] | LoginUser | UserProfile) -> User:
        """
        Build the frontend User from either the login `user` block or a profile.

        Raises ValueError (pydantic ValidationError included) when the payload
        cannot produce a consistent identity.
        """
        raw = api_user.model_dump() if isinstance(api_user, BaseModel) else dict(api_user)

        user_id = raw.get("id")
        email = raw.get("email")
        if user_id is None or not email:
            raise ValueError("user payload is missing id or email")

        full_name = f"{raw.get('first_name') or ''} {raw.get('last_name') or ''}".strip()
        name = raw.get("name") or full_name or email

        role = raw.get("role")
        if not role:
            role = "admin" if raw.get("is_superuser") or raw.get("is_staff") else "user"

        return User.model_validate(
            {
                "id": str(user_id),
                "email": email,
                "name": name,
                "role": role,
                "avatar": raw.get("avatar"),
            }
        )
