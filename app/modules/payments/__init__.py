# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/__init__.py

Módulo de pagos del storefront.

Este módulo gestiona:
- Registros de pago y su bitácora append-only
- Webhooks de Wompi (verificación, reconciliación, efectos de seguimiento)
- Inicio de pago, estado por orden y reintentos

Estructura:
- enums: Tipos de datos (PaymentProvider, PaymentStatus, Currency, ...)
- models: Modelos ORM (Payment, PaymentAuditEntry)
- schemas: Validación y serialización Pydantic
- repositories / services: Persistencia y colaboradores externos
- facades: Funciones de alto nivel (API pública)
- routes: Endpoints FastAPI

Autor: Equipo Storefront
Fecha: 2026-10-05
"""

# ===== ENUMS =====
from .enums import (
    AuditAction,
    Currency,
    PaymentMethod,
    PaymentProvider,
    PaymentStatus,
    SideEffectKind,
)

# ===== EXCEPCIONES =====
from .exceptions import (
    DuplicatePaymentReferenceError,
    PaymentNotFoundError,
    PaymentStoreError,
    RetryNotAllowedError,
    StalePaymentError,
    UnsupportedProviderError,
    WebhookConfigurationError,
)

__all__ = [
    # Enums
    "AuditAction",
    "Currency",
    "PaymentMethod",
    "PaymentProvider",
    "PaymentStatus",
    "SideEffectKind",
    # Excepciones
    "DuplicatePaymentReferenceError",
    "PaymentNotFoundError",
    "PaymentStoreError",
    "RetryNotAllowedError",
    "StalePaymentError",
    "UnsupportedProviderError",
    "WebhookConfigurationError",
]

# Fin del archivo backend/app/modules/payments/__init__.py
