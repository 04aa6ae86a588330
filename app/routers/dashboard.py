# app/routers/dashboard.py — Dashboard statistics proxy

import logging
import math

from fastapi import APIRouter, Depends

from app.auth import get_bearer_token
from app.dependencies import get_registros_service
from app.models.registro import DashboardStats, RegistroStats
from app.routers._responses import ErrorEnvelope
from app.services.registros import RegistrosService

logger = logging.getLogger(__name__)

router = APIRouter()


def eficiencia_promedio(positivo: float, negativo: float) -> int:
    """Share of positive adjustment value, as a rounded percentage; 0 when both are 0."""
    total = positivo + abs(negativo)
    if total == 0:
        return 0
    return math.floor(positivo / total * 100 + 0.5)


def build_dashboard_stats(stats: RegistroStats) -> DashboardStats:
    return DashboardStats(
        totalRegistros=stats.total_registros,
        valorNeto=stats.valor_neto,
        registrosMesActual=stats.registros_mes_actual,
        promedioValor=stats.promedio_valor,
        valorPositivo=stats.total_valor_positivo,
        valorNegativo=abs(stats.total_valor_negativo),
        asesoresActivos=stats.asesores_activos,
        cuentasAfectadas=stats.cuentas_afectadas,
        eficienciaPromedio=eficiencia_promedio(stats.total_valor_positivo, stats.total_valor_negativo),
    )


@router.get("/stats", response_model=DashboardStats, responses={401: {"model": ErrorEnvelope}})
async def dashboard_stats(
    _: str = Depends(get_bearer_token),
    service: RegistrosService = Depends(get_registros_service),
) -> DashboardStats:
    """Reshaped backend stats; zeroed defaults when the backend is unavailable."""
    try:
        response = await service.get_stats()
        if response.success and response.data:
            return build_dashboard_stats(RegistroStats.model_validate(response.data))
        logger.warning("Stats unavailable, serving defaults", extra={"error": response.error})
    except Exception:  # noqa: BLE001
        logger.exception("Error building dashboard stats")
    return DashboardStats()
