# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/services/webhooks/__init__.py

Servicios de bajo nivel para webhooks de pagos.

Autor: Equipo Storefront
Fecha: 2026-10-04
"""

from .signature_verification import (
    checksums_match,
    compute_checksum,
    compute_integrity_signature,
)
from .payload_sanitizer import (
    compute_payload_hash,
    mask_email,
)

__all__ = [
    # Checksum / firmas
    "checksums_match",
    "compute_checksum",
    "compute_integrity_signature",

    # Logs
    "compute_payload_hash",
    "mask_email",
]

# Fin del archivo backend/app/modules/payments/services/webhooks/__init__.py
