# app/services/csv_export.py — CSV document for the registro export

from __future__ import annotations

from collections.abc import Iterable
from datetime import date

from app.models.registro import AjusteRegistro

CSV_HEADERS = [
    "ID Cuenta",
    "ID Acuerdo Servicio",
    "ID Cargo Facturable",
    "Fecha Ajuste",
    "Asesor",
    "Valor Ajustado",
    "Justificación",
    "Fecha Creación",
]


def _quote(text: str) -> str:
    return '"' + text.replace('"', '""') + '"'


def _format_number(value: float) -> str:
    if value.is_integer():
        return str(int(value))
    return repr(value)


def registro_row(registro: AjusteRegistro) -> str:
    return ",".join(
        [
            registro.id_cuenta,
            registro.id_acuerdo_servicio,
            registro.id_cargo_facturable,
            registro.fecha_ajuste,
            _quote(registro.asesor_que_ajusto),
            _format_number(registro.valor_ajustado),
            _quote(registro.justificacion),
            registro.created_at or "",
        ]
    )


def build_csv(registros: Iterable[AjusteRegistro]) -> str:
    """Header line plus one line per record, newline-joined with no trailing newline."""
    return "\n".join([",".join(CSV_HEADERS), *(registro_row(registro) for registro in registros)])


def export_filename(today: date | None = None) -> str:
    day = today or date.today()
    return f"registros_ajustes_{day.isoformat()}.csv"
