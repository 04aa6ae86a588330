# app/middleware.py — bearer header injection for internal API / stats paths

from __future__ import annotations

import logging

from starlette.types import ASGIApp, Receive, Scope, Send

from app.client.http import TokenProvider

logger = logging.getLogger(__name__)


def targets_internal_api(path: str) -> bool:
    return path.startswith("/api/") or "/stats" in path


class BearerInjectionMiddleware:
    """
    Sets `Authorization: Bearer <token>` on inbound requests to internal API
    and stats paths, using the token provider given at construction.

    No provider (no client storage in this process) or no stored token means
    the request passes through untouched. Presence of the header is not
    verification; the backend remains the authority.
    """

    def __init__(self, app: ASGIApp, token_provider: TokenProvider | None = None) -> None:
        self.app = app
        self.token_provider = token_provider

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or self.token_provider is None or not targets_internal_api(scope["path"]):
            await self.app(scope, receive, send)
            return

        token = self.token_provider()
        if not token:
            await self.app(scope, receive, send)
            return

        headers = [(name, value) for name, value in scope["headers"] if name.lower() != b"authorization"]
        headers.append((b"authorization", f"Bearer {token}".encode("latin-1")))
        logger.debug("Injected stored bearer token", extra={"path": scope["path"]})
        await self.app({**scope, "headers": headers}, receive, send)
