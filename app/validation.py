# app/validation.py — Registro form parsing and required-field checks

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any

REQUIRED_TEXT_FIELDS: dict[str, str] = {
    "id_cuenta": "ID de Cuenta es requerido",
    "id_acuerdo_servicio": "ID de Acuerdo de Servicio es requerido",
    "id_cargo_facturable": "ID de Cargo Facturable es requerido",
    "fecha_ajuste": "Fecha de Ajuste es requerida",
    "asesor_que_ajusto": "Asesor que Ajustó es requerido",
    "justificacion": "Justificación es requerida",
}

INVALID_VALOR_MESSAGE = "Valor Ajustado debe ser un número válido"


def _to_float(value: Any) -> float:
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return 0.0
    return 0.0


def _to_text(value: Any) -> str:
    return "" if value is None else str(value)


def parse_form(fields: Mapping[str, Any]) -> dict[str, Any]:
    """Raw form input → adjustment payload; an unparseable value becomes 0."""
    return {
        "id_cuenta": _to_text(fields.get("id_cuenta")),
        "id_acuerdo_servicio": _to_text(fields.get("id_acuerdo_servicio")),
        "id_cargo_facturable": _to_text(fields.get("id_cargo_facturable")),
        "fecha_ajuste": _to_text(fields.get("fecha_ajuste")),
        "asesor_que_ajusto": _to_text(fields.get("asesor_que_ajusto")),
        "valor_ajustado": _to_float(fields.get("valor_ajustado")),
        "obs_adicional": _to_text(fields.get("obs_adicional")) or None,
        "justificacion": _to_text(fields.get("justificacion")),
    }


def validate_ajuste(payload: Mapping[str, Any]) -> dict[str, str]:
    """Field → message for every failing field; empty dict means valid."""
    errors: dict[str, str] = {}

    for field, message in REQUIRED_TEXT_FIELDS.items():
        value = payload.get(field)
        if not isinstance(value, str) or not value.strip():
            errors[field] = message

    valor = payload.get("valor_ajustado")
    if (
        isinstance(valor, bool)
        or not isinstance(valor, (int, float))
        or not math.isfinite(valor)
        or valor == 0
    ):
        errors["valor_ajustado"] = INVALID_VALOR_MESSAGE

    return errors
