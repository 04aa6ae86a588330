# app/routers/_responses.py — shared API response envelopes

from typing import Any

from fastapi import status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from app.client.http import ApiResponse

INTERNAL_ERROR_MESSAGE = "Error interno del servidor"


class ErrorEnvelope(BaseModel):
    error: str


def error_response(message: str, status_code: int, **extra: Any) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message, **extra})


def internal_error_response() -> JSONResponse:
    return error_response(INTERNAL_ERROR_MESSAGE, status.HTTP_500_INTERNAL_SERVER_ERROR)


def failure_response(response: ApiResponse[Any], fallback: str, default_status: int) -> JSONResponse:
    """Map a failed backend envelope to an HTTP error; a backend 401 stays a 401."""
    status_code = (
        status.HTTP_401_UNAUTHORIZED
        if response.status_code == status.HTTP_401_UNAUTHORIZED
        else default_status
    )
    return error_response(response.error or fallback, status_code)
