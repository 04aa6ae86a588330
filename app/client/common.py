from __future__ import annotations

import time
from typing import Any

CONNECTION_ERROR = "Error de conexión con el servidor"
GENERIC_ERROR = "Error desconocido"


def now_ms() -> int:
    return int(time.time() * 1000)


def drop_empty(params: dict[str, Any] | None) -> dict[str, str]:
    """Query params minus None/empty values, stringified like URLSearchParams."""
    if not params:
        return {}
    cleaned: dict[str, str] = {}
    for key, value in params.items():
        if value is None or value == "":
            continue
        cleaned[key] = str(value).lower() if isinstance(value, bool) else str(value)
    return cleaned


def resolve_error_message(data: Any) -> str:
    """
    Pick the user-facing message out of a backend error payload.

    Per-field validation arrays win and are rendered as
    "field: msg1, msg2" joined with "; ". Otherwise the first of
    error / message / detail, then the generic fallback.
    """
    if not isinstance(data, dict):
        return GENERIC_ERROR

    field_errors = [
        f"{field}: {', '.join(str(message) for message in messages)}"
        for field, messages in data.items()
        if isinstance(messages, list)
    ]
    if field_errors:
        return "; ".join(field_errors)

    for key in ("error", "message", "detail"):
        value = data.get(key)
        if value:
            return str(value)
    return GENERIC_ERROR
