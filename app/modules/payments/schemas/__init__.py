# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/schemas/__init__.py

Punto de entrada para los esquemas Pydantic del módulo Payments.

Incluye los contratos vigentes para:
- Eventos webhook de Wompi (sobre validado)
- Vista de dominio del registro de pago y su bitácora
- Checkout (inicio de pago), estado por orden y reintentos

Autor: Equipo Storefront
Fecha: 2026-10-04
"""

from __future__ import annotations

from .wompi_event_schemas import WompiEvent, WompiSignature, WompiTransaction
from .payment_record_schemas import AuditEntryData, NewPaymentData, PaymentId, PaymentRecord
from .checkout_schemas import PaymentIntentRequest, PaymentIntentResponse
from .payment_status_schemas import OrderPaymentStatusResponse
from .retry_schemas import RetryAdviceResponse, RetryCreatedResponse, RetryRequest
from .side_effect_schemas import FailureNotice, SideEffect

__all__ = [
    "WompiEvent",
    "WompiSignature",
    "WompiTransaction",
    "AuditEntryData",
    "NewPaymentData",
    "PaymentId",
    "PaymentRecord",
    "PaymentIntentRequest",
    "PaymentIntentResponse",
    "OrderPaymentStatusResponse",
    "RetryAdviceResponse",
    "RetryCreatedResponse",
    "RetryRequest",
    "FailureNotice",
    "SideEffect",
]

# Fin del archivo backend/app/modules/payments/schemas/__init__.py
