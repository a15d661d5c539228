# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/facades/webhooks/__init__.py

Exporta las funciones clave de facades/webhooks (parseo, clasificación y
verificación de eventos de Wompi).

La tabla de estrategias por proveedor vive en `providers` y se importa
explícitamente para no acoplar este paquete con reconciliation.

Autor: Equipo Storefront
Fecha: 2026-10-05
"""

from .normalize import parse_wompi_event, extract_transaction_info
from .helpers import should_process_event
from .verify import (
    VerificationFailure,
    WompiEventValidator,
    validate_environment,
    validate_event_age,
    validate_header_checksum,
    verify,
)

__all__ = [
    "parse_wompi_event",
    "extract_transaction_info",
    "should_process_event",
    "VerificationFailure",
    "WompiEventValidator",
    "validate_environment",
    "validate_event_age",
    "validate_header_checksum",
    "verify",
]

# Fin del archivo backend/app/modules/payments/facades/webhooks/__init__.py
