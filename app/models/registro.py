# app/models/registro.py — Registro (billing adjustment) shapes

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

ExportFormat = Literal["csv", "excel"]


class AjusteFormData(BaseModel):
    """Frontend form / create payload."""

    id_cuenta: str
    id_acuerdo_servicio: str
    id_cargo_facturable: str
    fecha_ajuste: str
    asesor_que_ajusto: str
    valor_ajustado: float = Field(allow_inf_nan=False)
    obs_adicional: str | None = None
    justificacion: str


class AjusteRegistro(AjusteFormData):
    """View-model row shown in the list and detail screens."""

    id: str | None = None
    created_at: str | None = None
    updated_at: str | None = None


class RegistroResponse(BaseModel):
    """Backend record as returned by /api/registros."""

    model_config = ConfigDict(extra="ignore")

    id: int | str | None = None
    id_cuenta: str
    id_acuerdo_servicio: str
    id_cargo_facturable: str
    fecha_ajuste: str
    asesor_que_ajusto: str
    valor_ajustado: float
    obs_adicional: str | None = None
    justificacion: str
    created_at: str | None = None
    updated_at: str | None = None
    usuario: int | str | None = None


class RegistroStats(BaseModel):
    model_config = ConfigDict(extra="ignore")

    total_registros: int = 0
    total_valor_positivo: float = 0
    total_valor_negativo: float = 0
    valor_neto: float = 0
    registros_mes_actual: int = 0
    promedio_valor: float = 0
    asesores_activos: int = 0
    cuentas_afectadas: int = 0


class AsesorInfo(BaseModel):
    nombre: str
    total_ajustes: int
    valor_total: float


class CuentaInfo(BaseModel):
    id_cuenta: str
    total_ajustes: int
    valor_total: float
    ultimo_ajuste: str


class RegistrosListParams(BaseModel):
    page: int | None = None
    page_size: int | None = None
    search: str | None = None
    fecha_inicio: str | None = None
    fecha_fin: str | None = None
    asesor: str | None = None
    cuenta: str | None = None
    ordering: str | None = None

    def to_query(self) -> dict[str, str | int]:
        return {key: value for key, value in self.model_dump().items() if value not in (None, "")}


class PaginatedRegistros(BaseModel):
    registros: list[RegistroResponse]
    total: int
    page: int | None = None
    page_size: int | None = Field(default=None, alias="pageSize")
    total_pages: int | None = Field(default=None, alias="totalPages")

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class DashboardStats(BaseModel):
    totalRegistros: int = 0
    valorNeto: float = 0
    registrosMesActual: int = 0
    promedioValor: float = 0
    valorPositivo: float = 0
    valorNegativo: float = 0
    asesoresActivos: int = 0
    cuentasAfectadas: int = 0
    eficienciaPromedio: int = 0
