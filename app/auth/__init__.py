# app/auth/__init__.py — Authentication module

from app.auth.dependencies import get_bearer_token
from app.auth.tokens import AuthTokenStore

__all__ = [
    "get_bearer_token",
    "AuthTokenStore",
]
