# app/auth/tokens.py — access/refresh token persistence in client storage

from __future__ import annotations

from collections.abc import Callable

from app.client.common import now_ms
from app.config import StorageKeys
from app.storage import ClientStorage

DEFAULT_TOKEN_TTL_SECONDS = 60 * 60


class AuthTokenStore:
    """
    Key-based token persistence plus a local validity check.

    Expiry is issue time + a fixed TTL, not the token's embedded expiry.
    Without storage (server-side process) every check reports no token.
    """

    def __init__(
        self,
        storage: ClientStorage | None,
        *,
        ttl_seconds: int = DEFAULT_TOKEN_TTL_SECONDS,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        self._storage = storage
        self._ttl_ms = ttl_seconds * 1000
        self._clock = clock

    @property
    def has_storage(self) -> bool:
        return self._storage is not None

    def store(self, access: str, refresh: str) -> None:
        if self._storage is None:
            return
        expiry = self._clock() + self._ttl_ms
        self._storage.set_item(StorageKeys.TOKEN, access)
        self._storage.set_item(StorageKeys.REFRESH_TOKEN, refresh)
        self._storage.set_item(StorageKeys.TOKEN_EXPIRY, str(expiry))

    def get_token(self) -> str | None:
        if self._storage is None:
            return None
        return self._storage.get_item(StorageKeys.TOKEN) or None

    def get_refresh_token(self) -> str | None:
        if self._storage is None:
            return None
        return self._storage.get_item(StorageKeys.REFRESH_TOKEN) or None

    def has_valid_token(self) -> bool:
        if self._storage is None:
            return False
        token = self._storage.get_item(StorageKeys.TOKEN)
        raw_expiry = self._storage.get_item(StorageKeys.TOKEN_EXPIRY)
        if not token or not raw_expiry:
            return False
        try:
            expiry = int(raw_expiry)
        except ValueError:
            return False
        return self._clock() < expiry

    def clear(self) -> None:
        if self._storage is None:
            return
        for key in (
            StorageKeys.TOKEN,
            StorageKeys.REFRESH_TOKEN,
            StorageKeys.TOKEN_EXPIRY,
            StorageKeys.USER_DATA,
        ):
            self._storage.remove_item(key)
