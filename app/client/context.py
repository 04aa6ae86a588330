from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

import httpx

from app.auth.tokens import AuthTokenStore
from app.client.http import ApiClient
from app.config import Settings
from app.services.auth_service import AuthService
from app.services.registros import RegistrosService
from app.session.store import SessionStore
from app.session.theme import ThemeStore
from app.storage import ClientStorage, FileStorage


@dataclass
class ClientContext:
    """Everything a client-side process (browser equivalent) shares for one profile."""

    storage: ClientStorage
    tokens: AuthTokenStore
    api: ApiClient
    auth: AuthService
    registros: RegistrosService
    session: SessionStore
    theme: ThemeStore


def build_client_context(
    settings: Settings,
    *,
    storage: ClientStorage | None = None,
    navigate: Callable[[str], None] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> ClientContext:
    if storage is None:
        if not settings.client_storage_path:
            raise ValueError("client_storage_path must be set to build a client context")
        storage = FileStorage(settings.client_storage_path)

    tokens = AuthTokenStore(storage, ttl_seconds=settings.token_ttl_seconds)
    api = ApiClient.from_settings(settings, token_provider=tokens.get_token, transport=transport)
    auth = AuthService(api)
    return ClientContext(
        storage=storage,
        tokens=tokens,
        api=api,
        auth=auth,
        registros=RegistrosService(api),
        session=SessionStore(auth_service=auth, token_store=tokens, storage=storage, navigate=navigate),
        theme=ThemeStore(storage),
    )
