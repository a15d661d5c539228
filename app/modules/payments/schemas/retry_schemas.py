# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/schemas/retry_schemas.py

Schemas de reintento de pago de una orden.

Autor: Equipo Storefront
Fecha: 2026-10-04
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from app.modules.payments.enums import PaymentMethod


class RetryAdviceResponse(BaseModel):
    can_retry: bool
    remaining_attempts: int = Field(..., ge=0)
    suggested_methods: List[PaymentMethod] = Field(default_factory=list)
    recommended_method: Optional[PaymentMethod] = None
    new_payment_url: Optional[str] = Field(
        default=None,
        description="Ruta del storefront para reintentar; solo si can_retry.",
    )


class RetryRequest(BaseModel):
    payment_method: PaymentMethod


class RetryCreatedResponse(RetryAdviceResponse):
    """Reintento creado: nuevo registro PENDING listo para el widget."""

    new_reference: str
    amount_in_cents: int
    currency: str
    payment_method: PaymentMethod
    integrity_signature: Optional[str] = None


__all__ = ["RetryAdviceResponse", "RetryCreatedResponse", "RetryRequest"]

# Fin del archivo backend/app/modules/payments/schemas/retry_schemas.py
