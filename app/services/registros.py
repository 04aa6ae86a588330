from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import httpx

from app.client.http import ApiClient, ApiResponse
from app.config import Endpoints
from app.models.registro import (
    AjusteFormData,
    AjusteRegistro,
    ExportFormat,
    RegistroResponse,
    RegistrosListParams,
)

logger = logging.getLogger(__name__)

EXPORT_ERROR = "Error al exportar los datos"
EXPORT_CONNECTION_ERROR = "Error de conexión al exportar"

FORM_FIELDS = tuple(AjusteFormData.model_fields)


class RegistrosService:
    """CRUD and reporting operations over /api/registros."""

    def __init__(self, client: ApiClient) -> None:
        self._client = client

    async def get_registros(self, params: RegistrosListParams | None = None) -> ApiResponse[Any]:
        query = params.to_query() if params else {}
        return await self._client.get(Endpoints.REGISTROS, params=query)

    async def get_registro(self, registro_id: str) -> ApiResponse[Any]:
        return await self._client.get(Endpoints.registro_detail(registro_id))

    async def create_registro(self, data: AjusteFormData | Mapping[str, Any]) -> ApiResponse[Any]:
        form = data if isinstance(data, AjusteFormData) else AjusteFormData.model_validate(dict(data))
        payload = self.transform_form_data(form)
        logger.info("Creating registro", extra={"id_cuenta": form.id_cuenta})
        return await self._client.post(Endpoints.REGISTROS, payload)

    async def update_registro(self, registro_id: str, data: Mapping[str, Any]) -> ApiResponse[Any]:
        payload = {field: data[field] for field in FORM_FIELDS if field in data}
        return await self._client.put(Endpoints.registro_detail(registro_id), payload)

    async def delete_registro(self, registro_id: str) -> ApiResponse[Any]:
        return await self._client.delete(Endpoints.registro_detail(registro_id))

    async def get_stats(self) -> ApiResponse[Any]:
        return await self._client.get(Endpoints.REGISTROS_STATS)

    async def get_asesores(self) -> ApiResponse[Any]:
        return await self._client.get(Endpoints.REGISTROS_ASESORES)

    async def get_cuentas(self) -> ApiResponse[Any]:
        return await self._client.get(Endpoints.REGISTROS_CUENTAS)

    async def bulk_delete(self, ids: list[str]) -> ApiResponse[Any]:
        return await self._client.post(Endpoints.REGISTROS_BULK_DELETE, {"ids": list(ids)})

    async def export_registros(
        self,
        export_format: ExportFormat = "csv",
        params: RegistrosListParams | None = None,
    ) -> ApiResponse[bytes]:
        query: dict[str, Any] = {"format": export_format}
        if params:
            query.update(params.to_query())

        try:
            response = await self._client.fetch_raw(Endpoints.REGISTROS_EXPORT, params=query)
        except httpx.HTTPError as exc:
            logger.warning("Export request failed", extra={"error": str(exc)})
            return ApiResponse[bytes](success=False, error=EXPORT_CONNECTION_ERROR)

        if not response.is_success:
            return ApiResponse[bytes](success=False, error=EXPORT_ERROR, status_code=response.status_code)
        return ApiResponse[bytes](success=True, data=response.content, status_code=response.status_code)

    @staticmethod
    def transform_registro(api_registro: RegistroResponse | Mapping[str, Any]) -> AjusteRegistro:
        registro = (
            api_registro
            if isinstance(api_registro, RegistroResponse)
            else RegistroResponse.model_validate(dict(api_registro))
        )
        return AjusteRegistro(
            id=str(registro.id) if registro.id is not None else None,
            id_cuenta=registro.id_cuenta,
            id_acuerdo_servicio=registro.id_acuerdo_servicio,
            id_cargo_facturable=registro.id_cargo_facturable,
            fecha_ajuste=registro.fecha_ajuste,
            asesor_que_ajusto=registro.asesor_que_ajusto,
            valor_ajustado=registro.valor_ajustado,
            obs_adicional=registro.obs_adicional,
            justificacion=registro.justificacion,
            created_at=registro.created_at,
            updated_at=registro.updated_at,
        )

    @staticmethod
    def transform_form_data(form: AjusteFormData) -> dict[str, Any]:
        """Backend create/update payload; drops view-only fields such as id."""
        return {field: getattr(form, field) for field in FORM_FIELDS}
