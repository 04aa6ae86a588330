from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Callable
from dataclasses import dataclass, replace

from app.auth.tokens import AuthTokenStore
from app.client.common import CONNECTION_ERROR
from app.config import LOGIN_PATH, StorageKeys
from app.models.user import LoginCredentials, LoginResponse, Role, User
from app.services.auth_service import AuthService
from app.session.observable import Observable
from app.storage import ClientStorage

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Credenciales inválidas"


@dataclass(frozen=True)
class SessionState:
    user: User | None = None
    is_authenticated: bool = False
    is_loading: bool = True

    def __post_init__(self) -> None:
        if self.is_authenticated and self.user is None:
            raise ValueError("authenticated session requires a user")


UNAUTHENTICATED = SessionState(user=None, is_authenticated=False, is_loading=False)


@dataclass(frozen=True)
class LoginResult:
    success: bool
    error: str | None = None


class SessionStore(Observable[SessionState]):
    """
    Current identity, re-derived from persisted tokens on init().

    Session-mutating calls (init, login, logout) are serialized per instance.
    Within one call: token write, then user cache write, then state change,
    then subscriber notification.
    """

    def __init__(
        self,
        *,
        auth_service: AuthService,
        token_store: AuthTokenStore,
        storage: ClientStorage | None,
        navigate: Callable[[str], None] | None = None,
    ) -> None:
        super().__init__(SessionState())
        self._auth = auth_service
        self._tokens = token_store
        self._storage = storage
        self._navigate = navigate
        self._lock = asyncio.Lock()

    def _cache_user(self, user: User) -> None:
        if self._storage is not None:
            self._storage.set_item(StorageKeys.USER_DATA, user.model_dump_json())

    def cached_user(self) -> User | None:
        if self._storage is None:
            return None
        raw = self._storage.get_item(StorageKeys.USER_DATA)
        if not raw:
            return None
        try:
            return User.model_validate(json.loads(raw))
        except ValueError:
            logger.warning("Discarding unreadable cached user")
            return None

    async def init(self) -> SessionState:
        async with self._lock:
            if not self._tokens.has_valid_token():
                self._set(UNAUTHENTICATED)
                return self.state

            try:
                response = await self._auth.get_profile()
                if response.success and response.data:
                    user = self._auth.transform_user(response.data)
                    self._cache_user(user)
                    self._set(SessionState(user=user, is_authenticated=True, is_loading=False))
                    return self.state
                logger.info("Stored token rejected by profile endpoint", extra={"error": response.error})
            except Exception:  # noqa: BLE001
                logger.exception("Error initializing session")

            self._tokens.clear()
            self._set(UNAUTHENTICATED)
            return self.state

    async def login(self, email: str, password: str) -> LoginResult:
        async with self._lock:
            self._set(replace(self.state, is_loading=True))
            try:
                response = await self._auth.login(LoginCredentials(email=email, password=password))
                if not (response.success and response.data):
                    self._set(UNAUTHENTICATED)
                    return LoginResult(success=False, error=response.error or INVALID_CREDENTIALS)

                payload = LoginResponse.model_validate(response.data)
                self._tokens.store(payload.access_token, payload.refresh_token)
                user = self._auth.transform_user(payload.user)
                self._cache_user(user)
                self._set(SessionState(user=user, is_authenticated=True, is_loading=False))
                logger.info("Login successful", extra={"user_id": user.id, "role": user.role})
                return LoginResult(success=True)
            except Exception:  # noqa: BLE001
                logger.exception("Login error")
                self._tokens.clear()
                self._set(UNAUTHENTICATED)
                return LoginResult(success=False, error=CONNECTION_ERROR)

    async def logout(self) -> None:
        async with self._lock:
            try:
                response = await self._auth.logout()
                if not response.success:
                    logger.warning("Remote logout failed", extra={"error": response.error})
            except Exception:  # noqa: BLE001
                logger.exception("Error during logout")

            self._tokens.clear()
            self._set(UNAUTHENTICATED)

        if self._navigate is not None:
            self._navigate(LOGIN_PATH)

    def has_role(self, required_role: Role) -> bool:
        user = self.state.user
        if user is None:
            return False
        return user.role == required_role or user.role == "admin"
