# app/routers/registros.py — Registro CRUD / export proxy and form action

import logging
from typing import Any

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse, RedirectResponse, Response

from app.auth import get_bearer_token
from app.dependencies import get_registros_service
from app.models.registro import RegistrosListParams
from app.routers._responses import (
    ErrorEnvelope,
    error_response,
    failure_response,
    internal_error_response,
)
from app.services.csv_export import build_csv, export_filename
from app.services.registros import EXPORT_ERROR, RegistrosService
from app.validation import parse_form, validate_ajuste

logger = logging.getLogger(__name__)

router = APIRouter()

MISSING_ID_MESSAGE = "ID del registro requerido"
INVALID_BODY_MESSAGE = "Cuerpo de la petición inválido"

_AUTH_RESPONSES: dict[int | str, dict[str, Any]] = {
    401: {"model": ErrorEnvelope},
    500: {"model": ErrorEnvelope},
}


def _parse_int(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def list_params_from_query(request: Request) -> RegistrosListParams:
    """Frontend query names (pageSize, fechaInicio, ...) → backend filter names."""
    query = request.query_params
    return RegistrosListParams(
        page=_parse_int(query.get("page")),
        page_size=_parse_int(query.get("pageSize")),
        search=query.get("search") or None,
        fecha_inicio=query.get("fechaInicio") or None,
        fecha_fin=query.get("fechaFin") or None,
        asesor=query.get("asesor") or None,
        cuenta=query.get("cuenta") or None,
        ordering=query.get("ordering") or None,
    )


def extract_registros(data: Any) -> list[dict[str, Any]]:
    if isinstance(data, list):
        return data
    if isinstance(data, dict):
        rows = data.get("registros")
        if rows is None:
            rows = data.get("results")
        if isinstance(rows, list):
            return rows
    return []


async def _json_body(request: Request) -> dict[str, Any] | None:
    try:
        body = await request.json()
    except ValueError:
        return None
    return body if isinstance(body, dict) else None


@router.get("/list/data", responses=_AUTH_RESPONSES)
async def list_registros(
    request: Request,
    _: str = Depends(get_bearer_token),
    service: RegistrosService = Depends(get_registros_service),
):
    try:
        response = await service.get_registros(list_params_from_query(request))
    except Exception:  # noqa: BLE001
        logger.exception("Error listing registros")
        return internal_error_response()

    if response.success and response.data is not None:
        return JSONResponse(content=response.data)
    return failure_response(response, "Error al obtener los registros", status.HTTP_500_INTERNAL_SERVER_ERROR)


@router.post("/list/data", status_code=status.HTTP_201_CREATED, responses={400: {"model": ErrorEnvelope}, **_AUTH_RESPONSES})
async def create_registro(
    request: Request,
    _: str = Depends(get_bearer_token),
    service: RegistrosService = Depends(get_registros_service),
):
    body = await _json_body(request)
    if body is None:
        return error_response(INVALID_BODY_MESSAGE, status.HTTP_400_BAD_REQUEST)

    payload = parse_form(body)
    errors = validate_ajuste(payload)
    if errors:
        return error_response(next(iter(errors.values())), status.HTTP_400_BAD_REQUEST, errors=errors)

    try:
        response = await service.create_registro(payload)
        if response.success and response.data:
            registro = service.transform_registro(response.data)
            return JSONResponse(status_code=status.HTTP_201_CREATED, content=registro.model_dump())
    except Exception:  # noqa: BLE001
        logger.exception("Error creating registro")
        return internal_error_response()
    return failure_response(response, "Error al crear el registro", status.HTTP_400_BAD_REQUEST)


@router.put("/list/data", responses={400: {"model": ErrorEnvelope}, **_AUTH_RESPONSES})
async def update_registro(
    request: Request,
    _: str = Depends(get_bearer_token),
    service: RegistrosService = Depends(get_registros_service),
):
    registro_id = request.query_params.get("id")
    if not registro_id:
        return error_response(MISSING_ID_MESSAGE, status.HTTP_400_BAD_REQUEST)

    body = await _json_body(request)
    if body is None:
        return error_response(INVALID_BODY_MESSAGE, status.HTTP_400_BAD_REQUEST)

    try:
        response = await service.update_registro(registro_id, body)
        if response.success and response.data:
            return JSONResponse(content=service.transform_registro(response.data).model_dump())
    except Exception:  # noqa: BLE001
        logger.exception("Error updating registro", extra={"registro_id": registro_id})
        return internal_error_response()
    return failure_response(response, "Error al actualizar el registro", status.HTTP_400_BAD_REQUEST)


@router.delete("/list/data", responses={400: {"model": ErrorEnvelope}, **_AUTH_RESPONSES})
async def delete_registro(
    request: Request,
    _: str = Depends(get_bearer_token),
    service: RegistrosService = Depends(get_registros_service),
):
    registro_id = request.query_params.get("id")
    if not registro_id:
        return error_response(MISSING_ID_MESSAGE, status.HTTP_400_BAD_REQUEST)

    try:
        response = await service.delete_registro(registro_id)
    except Exception:  # noqa: BLE001
        logger.exception("Error deleting registro", extra={"registro_id": registro_id})
        return internal_error_response()

    if response.success:
        return {"success": True}
    return failure_response(response, "Error al eliminar el registro", status.HTTP_400_BAD_REQUEST)


@router.get("/list/export", responses=_AUTH_RESPONSES)
async def export_registros_csv(
    request: Request,
    _: str = Depends(get_bearer_token),
    service: RegistrosService = Depends(get_registros_service),
):
    try:
        response = await service.get_registros(list_params_from_query(request))
        if not response.success:
            return failure_response(response, EXPORT_ERROR, status.HTTP_500_INTERNAL_SERVER_ERROR)
        registros = [service.transform_registro(row) for row in extract_registros(response.data)]
    except Exception:  # noqa: BLE001
        logger.exception("Error exporting registros")
        return internal_error_response()

    return Response(
        content=build_csv(registros),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{export_filename()}"'},
    )


@router.post("", responses={400: {"model": ErrorEnvelope}, **_AUTH_RESPONSES})
async def submit_registro_form(
    request: Request,
    _: str = Depends(get_bearer_token),
    service: RegistrosService = Depends(get_registros_service),
):
    """Form action: validate fields, create through the backend, redirect on success."""
    form = await request.form()
    form_data = parse_form({key: value for key, value in form.items() if isinstance(value, str)})
    errors = validate_ajuste(form_data)
    if errors:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"errors": errors, "formData": form_data},
        )

    try:
        response = await service.create_registro(form_data)
    except Exception:  # noqa: BLE001
        logger.exception("Error submitting registro form")
        return internal_error_response()

    if not response.success:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": response.error or "Error al crear el registro", "errors": {}, "formData": form_data},
        )
    return RedirectResponse("/?success=true", status_code=status.HTTP_303_SEE_OTHER)
