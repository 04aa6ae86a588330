from __future__ import annotations

import json
from typing import Any

import httpx
import pytest

from app.client.http import ApiClient
from app.models.registro import AjusteFormData, AjusteRegistro, RegistrosListParams
from app.services.registros import RegistrosService

BACKEND_REGISTRO = {
    "id": 7,
    "id_cuenta": "ACC-001",
    "id_acuerdo_servicio": "AS-001",
    "id_cargo_facturable": "CF-001",
    "fecha_ajuste": "2025-01-01",
    "asesor_que_ajusto": "Juan Pérez",
    "valor_ajustado": -75000.5,
    "obs_adicional": "Revisado por supervisión",
    "justificacion": "Compensación por falla técnica",
    "created_at": "2025-01-01T10:00:00Z",
    "updated_at": "2025-01-02T10:00:00Z",
    "usuario": 3,
}


class _Recorder:
    def __init__(self, response: httpx.Response | None = None) -> None:
        self.requests: list[httpx.Request] = []
        self.response = response or httpx.Response(200, json={})

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.response


def _service(recorder: _Recorder) -> RegistrosService:
    client = ApiClient(
        base_url="http://backend.test",
        token_provider=lambda: "tok",
        transport=httpx.MockTransport(recorder),
    )
    return RegistrosService(client)


@pytest.mark.asyncio
async def test_get_registros_sends_filter_and_pagination_params() -> None:
    recorder = _Recorder(httpx.Response(200, json={"registros": [], "total": 0}))
    params = RegistrosListParams(page=2, page_size=25, search="ACC", fecha_inicio="2025-01-01", ordering="-fecha_ajuste")

    result = await _service(recorder).get_registros(params)

    request = recorder.requests[0]
    assert result.success is True
    assert request.method == "GET"
    assert request.url.path == "/api/registros"
    assert dict(request.url.params) == {
        "page": "2",
        "page_size": "25",
        "search": "ACC",
        "fecha_inicio": "2025-01-01",
        "ordering": "-fecha_ajuste",
    }


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("call", "method", "path"),
    [
        (lambda s: s.get_registro("7"), "GET", "/api/registros/7"),
        (lambda s: s.delete_registro("7"), "DELETE", "/api/registros/7"),
        (lambda s: s.get_stats(), "GET", "/api/registros/stats"),
        (lambda s: s.get_asesores(), "GET", "/api/registros/asesores"),
        (lambda s: s.get_cuentas(), "GET", "/api/registros/cuentas"),
    ],
)
async def test_endpoint_routing(call, method: str, path: str) -> None:
    recorder = _Recorder()

    await call(_service(recorder))

    assert recorder.requests[0].method == method
    assert recorder.requests[0].url.path == path
    assert recorder.requests[0].headers["authorization"] == "Bearer tok"


@pytest.mark.asyncio
async def test_create_posts_form_fields_only() -> None:
    recorder = _Recorder(httpx.Response(201, json=BACKEND_REGISTRO))
    form = AjusteRegistro(**{**{k: v for k, v in BACKEND_REGISTRO.items() if k != "usuario"}, "id": "7"})

    result = await _service(recorder).create_registro(form)

    body = json.loads(recorder.requests[0].content)
    assert result.success is True
    assert recorder.requests[0].url.path == "/api/registros"
    assert set(body) == {
        "id_cuenta",
        "id_acuerdo_servicio",
        "id_cargo_facturable",
        "fecha_ajuste",
        "asesor_que_ajusto",
        "valor_ajustado",
        "obs_adicional",
        "justificacion",
    }


@pytest.mark.asyncio
async def test_update_sends_partial_payload() -> None:
    recorder = _Recorder(httpx.Response(200, json=BACKEND_REGISTRO))

    await _service(recorder).update_registro("7", {"justificacion": "Nueva", "id": "ignored"})

    request = recorder.requests[0]
    assert request.method == "PUT"
    assert request.url.path == "/api/registros/7"
    assert json.loads(request.content) == {"justificacion": "Nueva"}


@pytest.mark.asyncio
async def test_bulk_delete_posts_ids() -> None:
    recorder = _Recorder(httpx.Response(200, json={"deleted": 2}))

    result = await _service(recorder).bulk_delete(["1", "2"])

    assert result.data == {"deleted": 2}
    assert recorder.requests[0].url.path == "/api/registros/bulk-delete"
    assert json.loads(recorder.requests[0].content) == {"ids": ["1", "2"]}


@pytest.mark.asyncio
async def test_envelope_is_returned_verbatim_on_failure() -> None:
    recorder = _Recorder(httpx.Response(400, json={"valor_ajustado": ["Debe ser un número."]}))

    result = await _service(recorder).get_stats()

    assert result.success is False
    assert result.error == "valor_ajustado: Debe ser un número."
    assert result.data == {"valor_ajustado": ["Debe ser un número."]}


@pytest.mark.asyncio
async def test_export_returns_bytes_with_format() -> None:
    recorder = _Recorder(httpx.Response(200, content=b"a,b\n1,2", headers={"content-type": "text/csv"}))

    result = await _service(recorder).export_registros("excel", RegistrosListParams(asesor="Juan"))

    request = recorder.requests[0]
    assert result.success is True
    assert result.data == b"a,b\n1,2"
    assert request.url.path == "/api/registros/export"
    assert dict(request.url.params) == {"format": "excel", "asesor": "Juan"}
    assert request.headers["authorization"] == "Bearer tok"


@pytest.mark.asyncio
async def test_export_failure_messages() -> None:
    failed = await _service(_Recorder(httpx.Response(500, text="boom"))).export_registros()
    assert failed.success is False
    assert failed.error == "Error al exportar los datos"

    def _down(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("down", request=request)

    client = ApiClient(base_url="http://backend.test", transport=httpx.MockTransport(_down))
    offline = await RegistrosService(client).export_registros()
    assert offline.success is False
    assert offline.error == "Error de conexión al exportar"


def test_transform_registro_maps_backend_record() -> None:
    registro = RegistrosService.transform_registro(BACKEND_REGISTRO)

    assert registro.id == "7"
    assert registro.valor_ajustado == -75000.5
    assert registro.created_at == "2025-01-01T10:00:00Z"
    assert "usuario" not in registro.model_dump()


@pytest.mark.parametrize(
    "form",
    [
        AjusteFormData(
            id_cuenta="ACC-001",
            id_acuerdo_servicio="AS-001",
            id_cargo_facturable="CF-001",
            fecha_ajuste="2025-01-01",
            asesor_que_ajusto="Juan Pérez",
            valor_ajustado=150000,
            justificacion="Se detectó un sobrecobro",
        ),
        AjusteFormData(
            id_cuenta="ACC-002",
            id_acuerdo_servicio="AS-002",
            id_cargo_facturable="CF-002",
            fecha_ajuste="2025-01-02",
            asesor_que_ajusto="María García",
            valor_ajustado=-0.01,
            obs_adicional="Nota",
            justificacion='Texto con "comillas"',
        ),
    ],
)
def test_transform_round_trip_preserves_shared_fields(form: AjusteFormData) -> None:
    registro = RegistrosService.transform_registro(RegistrosService.transform_form_data(form))

    shared: dict[str, Any] = form.model_dump()
    assert {field: getattr(registro, field) for field in shared} == shared
    assert registro.id is None
    assert registro.created_at is None
