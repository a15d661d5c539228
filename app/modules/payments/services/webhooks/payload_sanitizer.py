# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/services/webhooks/payload_sanitizer.py

Datos de eventos aptos para logs: hash del payload y enmascarado de PII.

Nunca se registra el payload completo; los logs llevan el hash para
poder correlacionar con lo que reporte el proveedor.

Autor: Equipo Storefront
Fecha: 2026-10-04
"""

from __future__ import annotations

import hashlib
import json
from typing import Any, Dict, Optional


def compute_payload_hash(raw_payload: bytes | str | dict) -> str:
    """SHA256 del payload original para trazabilidad."""
    if isinstance(raw_payload, dict):
        payload_bytes = json.dumps(raw_payload, sort_keys=True).encode("utf-8")
    elif isinstance(raw_payload, str):
        payload_bytes = raw_payload.encode("utf-8")
    else:
        payload_bytes = raw_payload
    return hashlib.sha256(payload_bytes).hexdigest()


def mask_email(email: Optional[str]) -> Optional[str]:
    """
    Enmascara un correo conservando el primer carácter y el dominio.

        >>> mask_email("cliente@tienda.co")
        'c***@tienda.co'
    """
    if not email:
        return None
    local, sep, domain = email.partition("@")
    if not sep:
        return "***"
    return f"{local[:1]}***@{domain}"


def drop_empty(values: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in values.items() if v is not None}


__all__ = ["compute_payload_hash", "drop_empty", "mask_email"]

# Fin del archivo backend/app/modules/payments/services/webhooks/payload_sanitizer.py
