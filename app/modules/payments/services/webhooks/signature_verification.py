# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/services/webhooks/signature_verification.py

Checksum de eventos de Wompi y firma de integridad del widget.

Checksum de eventos:
    1. Para cada ruta de `signature.properties` (notación con puntos sobre
       `data`) se toma el valor; si no existe se usa "".
    2. Se concatenan en orden, se agrega el `timestamp` y el secreto de
       eventos.
    3. SHA-256 en hexadecimal, en mayúsculas.

Los valores se convierten a texto igual que lo hace Wompi: enteros en
decimal, flotantes enteros sin parte decimal, booleanos como true/false
y null explícito como "null".

Firma de integridad (widget de checkout):
    SHA256(reference + amount_in_cents + currency + integrity_secret)

Autor: Equipo Storefront
Fecha: 2026-10-04
"""

from __future__ import annotations

import hashlib
import hmac
import logging
from typing import Any, Iterable, Mapping

logger = logging.getLogger(__name__)

_MISSING = object()


def resolve_path(data: Mapping[str, Any], path: str) -> Any:
    """Busca `a.b.c` dentro de `data`; devuelve _MISSING si algún tramo no existe."""
    current: Any = data
    for part in path.split("."):
        if isinstance(current, Mapping) and part in current:
            current = current[part]
        else:
            return _MISSING
    return current


def stringify_value(value: Any) -> str:
    if value is _MISSING:
        return ""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def compute_checksum(
    data: Mapping[str, Any],
    properties: Iterable[str],
    timestamp: int,
    secret: str,
) -> str:
    """Checksum en mayúsculas para `data` según las propiedades firmadas."""
    concatenated = "".join(stringify_value(resolve_path(data, prop)) for prop in properties)
    concatenated += str(timestamp)
    concatenated += secret
    return hashlib.sha256(concatenated.encode("utf-8")).hexdigest().upper()


def checksums_match(expected: str, received: str) -> bool:
    """Comparación en tiempo constante, sin distinguir mayúsculas."""
    if not expected or not received:
        return False
    return hmac.compare_digest(
        expected.upper().encode("utf-8"),
        received.strip().upper().encode("utf-8"),
    )


def compute_integrity_signature(
    reference: str,
    amount_in_cents: int,
    currency: str,
    integrity_secret: str,
) -> str:
    """Firma que el widget de Wompi exige para aceptar monto y referencia."""
    payload = f"{reference}{amount_in_cents}{currency}{integrity_secret}"
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


__all__ = [
    "checksums_match",
    "compute_checksum",
    "compute_integrity_signature",
    "resolve_path",
    "stringify_value",
]

# Fin del archivo backend/app/modules/payments/services/webhooks/signature_verification.py
