# app/session/__init__.py — Client-side session and preference stores

from app.session.store import LoginResult, SessionState, SessionStore
from app.session.theme import ThemeStore

__all__ = [
    "LoginResult",
    "SessionState",
    "SessionStore",
    "ThemeStore",
]
