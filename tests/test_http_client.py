from __future__ import annotations

import json
from typing import Any

import httpx
import pytest

from app.client.common import resolve_error_message
from app.client.http import ApiClient


def _client(handler, token: str | None = None) -> ApiClient:
    return ApiClient(
        base_url="http://backend.test/",
        token_provider=(lambda: token),
        transport=httpx.MockTransport(handler),
    )


@pytest.mark.asyncio
async def test_default_and_auth_headers_are_attached() -> None:
    seen: dict[str, Any] = {}

    def _handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["headers"] = request.headers
        return httpx.Response(200, json={"ok": True})

    result = await _client(_handler, token="tok-1").get("/api/registros")

    assert result.success is True
    assert result.data == {"ok": True}
    assert seen["url"] == "http://backend.test/api/registros"
    assert seen["headers"]["content-type"] == "application/json"
    assert seen["headers"]["accept"] == "application/json"
    assert seen["headers"]["authorization"] == "Bearer tok-1"


@pytest.mark.asyncio
async def test_no_authorization_header_without_token() -> None:
    seen: dict[str, Any] = {}

    def _handler(request: httpx.Request) -> httpx.Response:
        seen["headers"] = request.headers
        return httpx.Response(200, json={})

    await _client(_handler, token=None).get("/auth/profile")

    assert "authorization" not in seen["headers"]


@pytest.mark.asyncio
async def test_caller_headers_override_defaults() -> None:
    seen: dict[str, Any] = {}

    def _handler(request: httpx.Request) -> httpx.Response:
        seen["headers"] = request.headers
        return httpx.Response(200, json={})

    await _client(_handler, token="tok-1").get(
        "/api/registros",
        headers={"Accept": "text/csv", "Authorization": "Bearer other"},
    )

    assert seen["headers"]["accept"] == "text/csv"
    assert seen["headers"]["authorization"] == "Bearer other"


@pytest.mark.asyncio
async def test_post_serializes_body_and_get_sends_none() -> None:
    bodies: list[bytes] = []

    def _handler(request: httpx.Request) -> httpx.Response:
        bodies.append(request.content)
        return httpx.Response(201, json={"id": 1})

    client = _client(_handler)
    created = await client.post("/api/registros", {"id_cuenta": "ACC-001"})
    await client.get("/api/registros")

    assert created.success is True
    assert created.status_code == 201
    assert json.loads(bodies[0]) == {"id_cuenta": "ACC-001"}
    assert bodies[1] == b""


@pytest.mark.asyncio
async def test_empty_params_are_dropped() -> None:
    seen: dict[str, Any] = {}

    def _handler(request: httpx.Request) -> httpx.Response:
        seen["params"] = dict(request.url.params)
        return httpx.Response(200, json=[])

    await _client(_handler).get("/api/registros", params={"page": 2, "search": "", "asesor": None})

    assert seen["params"] == {"page": "2"}


@pytest.mark.asyncio
async def test_non_json_response_is_wrapped_as_message() -> None:
    def _handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="pong")

    result = await _client(_handler).get("/ping")

    assert result.success is True
    assert result.data == {"message": "pong"}


@pytest.mark.asyncio
async def test_error_response_keeps_raw_data() -> None:
    def _handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={"detail": "No encontrado"})

    result = await _client(_handler).get("/api/registros/99")

    assert result.success is False
    assert result.error == "No encontrado"
    assert result.data == {"detail": "No encontrado"}
    assert result.status_code == 400


@pytest.mark.asyncio
async def test_text_error_uses_message() -> None:
    def _handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(502, text="Bad Gateway")

    result = await _client(_handler).get("/api/registros")

    assert result.success is False
    assert result.error == "Bad Gateway"


@pytest.mark.asyncio
async def test_transport_failure_returns_connection_error() -> None:
    def _handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    result = await _client(_handler).get("/api/registros")

    assert result.success is False
    assert result.error == "Error de conexión con el servidor"
    assert result.data is None


@pytest.mark.asyncio
async def test_timeout_returns_connection_error() -> None:
    def _handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    result = await _client(_handler).post("/auth/login", {"email": "a@b.c"})

    assert result.success is False
    assert result.error == "Error de conexión con el servidor"


@pytest.mark.asyncio
async def test_malformed_json_reports_status() -> None:
    def _handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"{not json", headers={"content-type": "application/json"})

    result = await _client(_handler).get("/api/registros")

    assert result.success is False
    assert result.error == "Error de conexión con el servidor (Status: 200)"


@pytest.mark.asyncio
async def test_verb_helpers_fix_method() -> None:
    methods: list[str] = []

    def _handler(request: httpx.Request) -> httpx.Response:
        methods.append(request.method)
        return httpx.Response(200, json={})

    client = _client(_handler)
    await client.get("/x")
    await client.post("/x", {"a": 1})
    await client.put("/x", {"a": 1})
    await client.patch("/x", {"a": 1})
    await client.delete("/x")

    assert methods == ["GET", "POST", "PUT", "PATCH", "DELETE"]


def test_resolve_error_priority_error_over_message_and_detail() -> None:
    assert resolve_error_message({"error": "e", "message": "m", "detail": "d"}) == "e"
    assert resolve_error_message({"message": "m", "detail": "d"}) == "m"
    assert resolve_error_message({"detail": "d"}) == "d"


def test_resolve_error_joins_non_field_errors() -> None:
    message = resolve_error_message({"non_field_errors": ["Credenciales inválidas", "Cuenta bloqueada"]})
    assert message == "non_field_errors: Credenciales inválidas, Cuenta bloqueada"


def test_resolve_error_joins_per_field_arrays() -> None:
    payload = {
        "id_cuenta": ["Este campo es requerido."],
        "valor_ajustado": ["Debe ser un número.", "No puede ser cero."],
        "detail": "ignored when field errors exist",
    }

    message = resolve_error_message(payload)

    assert message == (
        "id_cuenta: Este campo es requerido.; "
        "valor_ajustado: Debe ser un número., No puede ser cero."
    )
    assert "id_cuenta" in message and "valor_ajustado" in message


@pytest.mark.parametrize("payload", [{}, None, ["x"], "text", {"error": ""}])
def test_resolve_error_falls_back_to_generic(payload: Any) -> None:
    assert resolve_error_message(payload) == "Error desconocido"
