# app/main.py — FastAPI app entry point (composition root)

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from app.auth import AuthTokenStore
from app.client.http import TokenProvider
from app.config import Settings, get_settings
from app.logging_config import configure_logging
from app.middleware import BearerInjectionMiddleware
from app.routers import auth, dashboard, health, registros
from app.storage import FileStorage


def _stored_token_provider(settings: Settings) -> TokenProvider | None:
    """Stored-token lookup when this process owns client storage; None otherwise."""
    if not settings.client_storage_path:
        return None
    token_store = AuthTokenStore(
        FileStorage(settings.client_storage_path),
        ttl_seconds=settings.token_ttl_seconds,
    )
    return token_store.get_token


def create_app(
    settings: Settings | None = None,
    *,
    token_provider: TokenProvider | None = None,
) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="registros-ajustes-web",
        description="Authenticated proxy and client for billing adjustment records",
        version="0.1.0",
    )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(_: Request, exc: HTTPException):
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})

    app.add_middleware(
        BearerInjectionMiddleware,
        token_provider=token_provider or _stored_token_provider(settings),
    )

    # Include routers
    app.include_router(health.router, tags=["health"])
    app.include_router(auth.router, prefix="/auth", tags=["auth"])
    app.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
    app.include_router(registros.router, prefix="/registro", tags=["registros"])

    return app


app = create_app()
