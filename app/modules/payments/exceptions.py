# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/exceptions.py

Excepciones del módulo Payments.

Los servicios las lanzan; el adaptador de webhooks y las rutas las
traducen a respuestas HTTP.

Autor: Equipo Storefront
Fecha: 2026-10-04
"""

from __future__ import annotations

from typing import Optional


class PaymentNotFoundError(Exception):
    """No existe un pago para la referencia u orden indicada."""

    def __init__(self, reference: str):
        super().__init__(f"Payment not found for reference {reference!r}")
        self.reference = reference


class StalePaymentError(Exception):
    """La actualización condicional no encontró el estado esperado."""

    def __init__(self, payment_id: int, expected_status: Optional[str] = None):
        super().__init__(
            f"Payment {payment_id} changed concurrently (expected status {expected_status})"
        )
        self.payment_id = payment_id
        self.expected_status = expected_status


class PaymentStoreError(Exception):
    """Falla del backend de persistencia (SQL o GraphQL)."""
    pass


class DuplicatePaymentReferenceError(PaymentStoreError):
    """Ya existe un pago con la misma referencia externa."""

    def __init__(self, reference: str):
        super().__init__(f"Payment reference already exists: {reference!r}")
        self.reference = reference


class UnsupportedProviderError(Exception):
    """Proveedor sin estrategia de webhooks registrada."""

    def __init__(self, provider: str):
        super().__init__(f"Unsupported payment provider: {provider}")
        self.provider = provider


class RetryNotAllowedError(Exception):
    """La orden agotó sus intentos de pago o su último pago no es reintentable."""

    def __init__(self, order_reference: str, reason: str):
        super().__init__(f"Retry not allowed for order {order_reference}: {reason}")
        self.order_reference = order_reference
        self.reason = reason


class WebhookConfigurationError(Exception):
    """Falta configuración necesaria para verificar webhooks (p. ej. el secreto)."""
    pass


__all__ = [
    "DuplicatePaymentReferenceError",
    "PaymentNotFoundError",
    "PaymentStoreError",
    "RetryNotAllowedError",
    "StalePaymentError",
    "UnsupportedProviderError",
    "WebhookConfigurationError",
]

# Fin del archivo backend/app/modules/payments/exceptions.py
