# app/dependencies.py — per-request service wiring for the proxy routes

from fastapi import Depends

from app.auth import get_bearer_token
from app.client.http import ApiClient
from app.config import get_settings
from app.services.registros import RegistrosService


def get_registros_service(token: str = Depends(get_bearer_token)) -> RegistrosService:
    """RegistrosService that forwards the caller's bearer token to the backend."""
    client = ApiClient.from_settings(get_settings(), token_provider=lambda: token)
    return RegistrosService(client)
