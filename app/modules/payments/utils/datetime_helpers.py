# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/utils/datetime_helpers.py

Utilidades de tiempo para webhooks y registros de pago.

Wompi mezcla epoch en segundos (`timestamp`) con ISO 8601
(`finalized_at`, `sent_at`); internamente todo es UTC timezone-aware.

Autor: Equipo Storefront
Fecha: 2026-10-04
"""

from datetime import datetime, timezone
from typing import Optional


def utcnow() -> datetime:
    """
    Retorna el timestamp UTC actual (timezone-aware).

    Examples:
        >>> utcnow().tzinfo == timezone.utc
        True
    """
    return datetime.now(timezone.utc)


def epoch_ms(dt: Optional[datetime] = None) -> int:
    """Milisegundos desde epoch de `dt` (o de ahora)."""
    return int(ensure_utc(dt or utcnow()).timestamp() * 1000)


def from_iso8601(iso_string: str) -> datetime:
    """
    Parsea una cadena ISO 8601 y retorna datetime UTC timezone-aware.

    Examples:
        >>> from_iso8601("2026-01-15T10:30:00.000Z").isoformat()
        '2026-01-15T10:30:00+00:00'
    """
    return ensure_utc(datetime.fromisoformat(iso_string.replace("Z", "+00:00")))


def parse_optional_iso8601(value: Optional[str]) -> Optional[datetime]:
    """Como from_iso8601 pero tolera None o texto inválido (devuelve None)."""
    if not value:
        return None
    try:
        return from_iso8601(value)
    except ValueError:
        return None


def ensure_utc(dt: datetime) -> datetime:
    """Naive se interpreta como UTC; otras zonas se convierten."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    if dt.tzinfo != timezone.utc:
        return dt.astimezone(timezone.utc)
    return dt


def to_iso8601(dt: Optional[datetime]) -> Optional[str]:
    """
    Convierte datetime a string ISO 8601 con 'Z' para UTC.

    Examples:
        >>> to_iso8601(datetime(2026, 1, 15, 10, 30, tzinfo=timezone.utc))
        '2026-01-15T10:30:00Z'
    """
    if dt is None:
        return None
    return ensure_utc(dt).isoformat().replace("+00:00", "Z")


__all__ = [
    "ensure_utc",
    "epoch_ms",
    "from_iso8601",
    "parse_optional_iso8601",
    "to_iso8601",
    "utcnow",
]
# Fin del archivo
