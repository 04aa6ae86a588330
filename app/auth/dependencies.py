# app/auth/dependencies.py — bearer gate for the proxy routes

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

MISSING_TOKEN_MESSAGE = "Token de autenticación requerido"

security = HTTPBearer(auto_error=False)


async def get_bearer_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> str:
    """
    Require an `Authorization: Bearer <token>` header and return the token.

    The scheme must be exactly "Bearer". Presence only: the token is
    forwarded as-is and the backend decides whether it is authentic.
    """
    if (
        credentials is None
        or credentials.scheme != "Bearer"
        or not credentials.credentials.strip()
    ):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=MISSING_TOKEN_MESSAGE,
        )
    return credentials.credentials
